"""Turn an uploaded file into a normalized text or image payload.

Dispatch:
    image extension or image/* MIME  → ImageContent (base64 payload)
    .txt                             → TextContent (verbatim)
    .pdf                             → TextContent (pages joined in order)
    .docx                            → TextContent (raw text, no formatting)
    anything else                    → UnsupportedFormatError
"""

import logging
import re

from models.file_content import FileContent, ImageContent, SourceFile, TextContent
from services.errors import (
    BackendUnavailableError,
    UnreadableImageError,
    UnsupportedFormatError,
)
from services.format_backends import (
    DocxExtractor,
    PaginatedDocExtractor,
    PdfplumberExtractor,
    PlainTextExtractor,
    StructuredDocExtractor,
    TextExtractor,
)

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "webp", "heic", "heif"})
DEFAULT_IMAGE_MIME = "image/jpeg"

_DATA_URL_MIME_RE = re.compile(r":(.*?);")


def is_image(source: SourceFile) -> bool:
    return source.extension in IMAGE_EXTENSIONS or source.mime_type.startswith("image/")


def encode_image(data_url: str, declared_mime: str = "") -> ImageContent:
    """Split a ``data:<mime>;base64,<payload>`` URI into an image payload.

    The declared MIME type wins; otherwise the one in the prefix is used,
    and ``image/jpeg`` when neither is usable.
    """
    header, _, payload = data_url.partition(",")

    mime_type = declared_mime
    if not mime_type and header:
        match = _DATA_URL_MIME_RE.search(header)
        if match:
            mime_type = match.group(1)

    return ImageContent(mime_type=mime_type or DEFAULT_IMAGE_MIME, data=payload)


class ContentExtractor:
    def __init__(
        self,
        text: TextExtractor | None = None,
        paginated: PaginatedDocExtractor | None = None,
        structured: StructuredDocExtractor | None = None,
    ):
        self.text = text or PlainTextExtractor()
        self.paginated = paginated or PdfplumberExtractor()
        self.structured = structured or DocxExtractor()

    async def extract(self, source: SourceFile) -> FileContent:
        if is_image(source):
            if not source.data:
                raise UnreadableImageError()
            return encode_image(source.read_data_url(), source.mime_type)

        extension = source.extension
        if extension == "txt":
            text = self.text.extract_text(source)
        elif extension == "pdf":
            text = self._read_paginated(source.data)
        elif extension == "docx":
            text = self._read_structured(source.data)
        else:
            raise UnsupportedFormatError(extension)

        logger.info("Extracted %d characters from %s", len(text), source.name)
        return TextContent(content=text)

    def _read_paginated(self, data: bytes) -> str:
        if not self.paginated.is_available():
            raise BackendUnavailableError("PDF")

        doc = self.paginated.open(data)
        pages: list[str] = []
        try:
            for page_number in range(1, doc.page_count + 1):
                pages.append(" ".join(doc.page_tokens(page_number)) + "\n")
        finally:
            doc.close()
        return "".join(pages)

    def _read_structured(self, data: bytes) -> str:
        if not self.structured.is_available():
            raise BackendUnavailableError("DOCX")
        return self.structured.extract_raw_text(data)


_default_extractor: ContentExtractor | None = None


def get_extractor() -> ContentExtractor:
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = ContentExtractor()
    return _default_extractor