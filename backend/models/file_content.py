"""Normalized document payloads produced by the content extractor."""

import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class SourceFile:
    """An uploaded file: its name, declared MIME type and raw bytes.

    ``mime_type`` is whatever the uploader declared and may be empty.
    """

    name: str
    data: bytes
    mime_type: str = ""

    @property
    def extension(self) -> str:
        return Path(self.name).suffix.lower().lstrip(".")

    def read_text(self) -> str:
        return self.data.decode("utf-8", errors="replace")

    def read_data_url(self) -> str:
        """Encode the bytes as a ``data:<mime>;base64,<payload>`` URI.

        The prefix carries the declared type, or the type guessed from the
        file name when nothing was declared (possibly empty).
        """
        mime = self.mime_type or mimetypes.guess_type(self.name)[0] or ""
        payload = base64.b64encode(self.data).decode("ascii")
        return f"data:{mime};base64,{payload}"


class TextContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    content: str


class ImageContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["image"] = "image"
    mime_type: str
    data: str  # base64 payload without the data URI prefix


FileContent = Annotated[Union[TextContent, ImageContent], Field(discriminator="kind")]
