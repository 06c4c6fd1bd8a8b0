"""Shared dependencies for API routes."""

from services.content_extractor import ContentExtractor, get_extractor
from services.gemini_client import AnalysisTransport, GeminiTransport


def get_transport() -> AnalysisTransport:
    return GeminiTransport()


def get_content_extractor() -> ContentExtractor:
    return get_extractor()
