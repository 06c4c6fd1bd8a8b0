from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_content_extractor, get_transport
from config import settings
from models.file_content import SourceFile
from models.requests import TextAnalyzeRequest
from models.responses import AnalysisOutcome, AnalysisResult, ErrorKind
from services import gemini_client, resume_analyzer
from services.content_extractor import ContentExtractor
from services.error_classifier import classify
from services.gemini_client import AnalysisTransport

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)

_STATUS_BY_KIND = {
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.SERVICE_UNAVAILABLE: 503,
}


def _outcome_response(outcome: AnalysisOutcome) -> AnalysisResult | JSONResponse:
    if outcome.ok:
        return outcome.result

    error = outcome.error
    if outcome.client_error:
        status_code = 400
    else:
        status_code = _STATUS_BY_KIND.get(error.kind, 502)

    headers = {}
    if error.kind is ErrorKind.RATE_LIMITED and error.retry_after_seconds:
        headers["Retry-After"] = str(error.retry_after_seconds)

    return JSONResponse(
        status_code=status_code,
        content={
            "error": error.model_dump(mode="json", by_alias=True),
            "errorType": outcome.error_type,
        },
        headers=headers,
    )


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
        "models": settings.gemini_models,
    }


@router.get("/models")
async def models():
    configured = list(settings.gemini_models)
    try:
        available = await gemini_client.list_models()
    except Exception as e:
        return {
            "configured": configured,
            "available": [],
            "error": classify(e).model_dump(mode="json", by_alias=True),
        }
    return {"configured": configured, "available": available}


@router.post("/analyze", response_model=AnalysisResult)
@limiter.limit("10/minute")
async def analyze(
    request: Request,
    resume_file: UploadFile = File(...),
    transport: AnalysisTransport = Depends(get_transport),
    extractor: ContentExtractor = Depends(get_content_extractor),
):
    if not resume_file.filename:
        raise HTTPException(status_code=400, detail="A file name is required")

    # Read and validate size
    content = await resume_file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )

    declared = resume_file.content_type or ""
    if declared == "application/octet-stream":
        declared = ""
    source = SourceFile(name=resume_file.filename, data=content, mime_type=declared)

    outcome = await resume_analyzer.run_analysis(source, extractor=extractor, transport=transport)
    return _outcome_response(outcome)


@router.post("/analyze/text", response_model=AnalysisResult)
@limiter.limit("10/minute")
async def analyze_text(
    request: Request,
    body: TextAnalyzeRequest,
    transport: AnalysisTransport = Depends(get_transport),
):
    outcome = await resume_analyzer.run_text_analysis(body.resume_text, transport=transport)
    return _outcome_response(outcome)
