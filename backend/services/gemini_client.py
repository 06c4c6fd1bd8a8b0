"""Google Gemini API wrapper: exactly one generate_content call per attempt."""

import base64
import logging
from typing import Any, Protocol

from google import genai
from google.genai import types

from config import settings
from models.requests import AnalysisRequest

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client() -> genai.Client:
    global _client
    if not settings.gemini_api_key:
        raise RuntimeError("API Key is missing. Please set GEMINI_API_KEY.")
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def reset_client() -> None:
    """Drop the cached client, e.g. after the API key changed."""
    global _client
    _client = None


class AnalysisTransport(Protocol):
    async def generate(self, model_id: str, request: AnalysisRequest) -> str:
        """Submit the request to one model and return its raw text output."""
        ...


def to_genai_contents(contents: str | dict[str, Any]) -> str | types.Content:
    if isinstance(contents, str):
        return contents

    parts = []
    for part in contents["parts"]:
        if "text" in part:
            parts.append(types.Part.from_text(text=part["text"]))
        else:
            inline = part["inline_data"]
            parts.append(
                types.Part.from_bytes(
                    data=base64.b64decode(inline["data"]),
                    mime_type=inline["mime_type"],
                )
            )
    return types.Content(role="user", parts=parts)


def build_config(request: AnalysisRequest) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        temperature=request.temperature,
        system_instruction=request.system_instruction,
        response_mime_type=request.response_mime_type,
        response_schema=request.response_schema,
    )


class GeminiTransport:
    def __init__(self, client: genai.Client | None = None):
        self._client = client

    async def generate(self, model_id: str, request: AnalysisRequest) -> str:
        client = self._client or get_client()
        response = await client.aio.models.generate_content(
            model=model_id,
            contents=to_genai_contents(request.contents),
            config=build_config(request),
        )
        return response.text or ""


async def list_models() -> list[str]:
    """Names of the models visible to the configured API key."""
    client = get_client()
    pager = await client.aio.models.list()
    names = []
    async for model in pager:
        names.append(model.name)
    logger.info("Found %d Gemini models", len(names))
    return names
