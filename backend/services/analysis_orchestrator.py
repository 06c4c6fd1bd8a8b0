"""Analysis orchestrator: ordered model fallback over a single request.

Flow:
    FileContent
      └─ build_analysis_request()            → AnalysisRequest (built once)
           ├─ model[0].generate → parse      → success? stop
           ├─ model[1].generate → parse      → success? stop
           │   ...                              (strictly one at a time)
           └─ all failed                     → ModelFallbackExhaustedError(last)
      parsed AnalysisResult
           └─ sentinel (score 0 + INVALID_RESUME) → InvalidDocumentError
"""

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from config import settings
from models.file_content import FileContent
from models.requests import AnalysisRequest
from models.responses import AnalysisResult
from services.errors import EmptyResponseError, InvalidDocumentError, ModelFallbackExhaustedError
from services.gemini_client import AnalysisTransport, GeminiTransport
from services.prompt_builder import INVALID_RESUME_MARKER, build_analysis_request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FallbackPolicy:
    """Ordered model identifiers, most preferred first."""

    model_ids: tuple[str, ...]

    def __post_init__(self):
        if not self.model_ids:
            raise ValueError("Fallback policy needs at least one model id")

    @classmethod
    def from_settings(cls) -> "FallbackPolicy":
        return cls(model_ids=tuple(settings.gemini_models))


def is_invalid_resume(result: AnalysisResult) -> bool:
    return result.overall_score == 0 and result.overall_justification.startswith(
        INVALID_RESUME_MARKER
    )


async def generate_with_fallback(
    transport: AnalysisTransport,
    request: AnalysisRequest,
    policy: FallbackPolicy,
) -> AnalysisResult:
    """Try each model in order until one returns a parseable result.

    A transport error, an empty body and a body that does not validate
    against AnalysisResult all count as a failed attempt.
    """
    last_error: Exception | None = None

    for model_id in policy.model_ids:
        try:
            logger.info("Attempting analysis with model: %s", model_id)
            text = await transport.generate(model_id, request)
            if not text:
                raise EmptyResponseError(model_id)
            result = AnalysisResult.model_validate_json(text)
        except ValidationError as e:
            logger.warning("Model %s returned an unparseable response: %s", model_id, e)
            last_error = e
        except Exception as e:
            logger.warning("Model %s failed: %s", model_id, e)
            last_error = e
        else:
            logger.info("Analysis succeeded with model: %s", model_id)
            return result

    raise ModelFallbackExhaustedError(last_error, attempted=policy.model_ids) from last_error


async def analyze(
    content: FileContent,
    transport: AnalysisTransport | None = None,
    policy: FallbackPolicy | None = None,
) -> AnalysisResult:
    request = build_analysis_request(content)
    result = await generate_with_fallback(
        transport or GeminiTransport(),
        request,
        policy or FallbackPolicy.from_settings(),
    )

    if is_invalid_resume(result):
        raise InvalidDocumentError(result.overall_justification)
    return result
