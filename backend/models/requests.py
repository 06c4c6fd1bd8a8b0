from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TextAnalyzeRequest(BaseModel):
    resume_text: str = Field(..., max_length=50000, description="Plain text resume content")


class AnalysisRequest(BaseModel):
    """Payload submitted, unchanged, to every model in the fallback chain."""

    model_config = ConfigDict(frozen=True)

    # Either one text block, or {"parts": [{"text": ...}, {"inline_data": {...}}]}
    contents: str | dict[str, Any]
    system_instruction: str
    temperature: float = 0.0
    response_mime_type: str = "application/json"
    response_schema: dict[str, Any]
