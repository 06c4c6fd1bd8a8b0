"""Resume analysis pipeline.

Pipeline:
1. Content extraction (format dispatch: text, PDF, DOCX, image)
2. Length gate: short text never reaches the model
3. Gemini analysis with ordered model fallback and sentinel check
4. Failure classification, done once at the top
"""

import logging
from typing import Callable

from config import settings
from models.file_content import FileContent, SourceFile, TextContent
from models.responses import AnalysisOutcome, AnalysisResult
from services import analysis_orchestrator
from services.analysis_orchestrator import FallbackPolicy
from services.content_extractor import ContentExtractor, get_extractor
from services.error_classifier import classify
from services.errors import (
    BackendUnavailableError,
    InvalidDocumentError,
    TooShortError,
    UnreadableImageError,
    UnsupportedFormatError,
)
from services.gemini_client import AnalysisTransport

logger = logging.getLogger(__name__)

StageCallback = Callable[[str], None]

# Failures raised before or instead of a usable model answer
CLIENT_ERRORS = (
    UnsupportedFormatError,
    UnreadableImageError,
    BackendUnavailableError,
    TooShortError,
    InvalidDocumentError,
)


def check_length(content: FileContent, minimum: int | None = None) -> None:
    """Reject text too short to be a resume. Images always pass."""
    if minimum is None:
        minimum = settings.min_resume_chars
    if isinstance(content, TextContent) and len(content.content) < minimum:
        raise TooShortError(len(content.content), minimum)


async def analyze_content(
    content: FileContent,
    transport: AnalysisTransport | None = None,
    policy: FallbackPolicy | None = None,
    on_stage: StageCallback | None = None,
) -> AnalysisResult:
    check_length(content)
    if on_stage is not None:
        on_stage("analyzing")
    return await analysis_orchestrator.analyze(content, transport=transport, policy=policy)


async def analyze_file(
    source: SourceFile,
    extractor: ContentExtractor | None = None,
    transport: AnalysisTransport | None = None,
    policy: FallbackPolicy | None = None,
    on_stage: StageCallback | None = None,
) -> AnalysisResult:
    if on_stage is not None:
        on_stage("parsing")
    content = await (extractor or get_extractor()).extract(source)
    return await analyze_content(content, transport=transport, policy=policy, on_stage=on_stage)


def _failed(error: Exception) -> AnalysisOutcome:
    classified = classify(error)
    logger.error("Analysis failed [%s]: %s", classified.kind.value, error)
    return AnalysisOutcome(
        error=classified,
        error_type=type(error).__name__,
        client_error=isinstance(error, CLIENT_ERRORS),
    )


async def run_analysis(
    source: SourceFile,
    extractor: ContentExtractor | None = None,
    transport: AnalysisTransport | None = None,
    policy: FallbackPolicy | None = None,
    on_stage: StageCallback | None = None,
) -> AnalysisOutcome:
    """Analyze an uploaded file; every failure comes back classified."""
    try:
        result = await analyze_file(
            source, extractor=extractor, transport=transport, policy=policy, on_stage=on_stage
        )
    except Exception as e:
        return _failed(e)
    return AnalysisOutcome(result=result)


async def run_text_analysis(
    resume_text: str,
    transport: AnalysisTransport | None = None,
    policy: FallbackPolicy | None = None,
) -> AnalysisOutcome:
    """Analyze pasted resume text."""
    try:
        result = await analyze_content(
            TextContent(content=resume_text), transport=transport, policy=policy
        )
    except Exception as e:
        return _failed(e)
    return AnalysisOutcome(result=result)
