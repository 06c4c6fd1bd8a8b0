"""Map a raw failure to a stable, user-facing error category.

Rules are evaluated top to bottom and the first match wins. Rate-limit
markers come before the generic 503/unavailable markers because quota
errors often arrive wrapped in a 503 by the transport.
"""

import json
import math
import re
from dataclasses import dataclass

from config import settings
from models.responses import ClassifiedError, ErrorKind

RETRY_DELAY_RE = re.compile(r"retry in ([0-9.]+)s", re.IGNORECASE)

FALLBACK_MESSAGE = "An error occurred during analysis."


@dataclass(frozen=True)
class ClassificationRule:
    kind: ErrorKind
    user_message: str
    markers: tuple[str, ...]
    case_sensitive: bool = False

    def matches(self, message: str) -> bool:
        haystack = message if self.case_sensitive else message.lower()
        return any(marker in haystack for marker in self.markers)


RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        kind=ErrorKind.RATE_LIMITED,
        user_message="Too many requests. Please wait a moment and try again.",
        markers=("quota", "429", "rate limit", "exceeded"),
    ),
    ClassificationRule(
        kind=ErrorKind.SERVICE_UNAVAILABLE,
        user_message=(
            "The AI service is currently experiencing high demand. "
            "Please try again in a moment."
        ),
        markers=("503", "unavailable", "high demand"),
    ),
    ClassificationRule(
        kind=ErrorKind.AUTH_ERROR,
        user_message="Authentication error. Please check the API configuration.",
        markers=("API Key", "api_key", "401"),
        case_sensitive=True,
    ),
    ClassificationRule(
        kind=ErrorKind.NETWORK_ERROR,
        user_message="Network error. Please check your connection and try again.",
        markers=("network", "fetch", "failed to fetch"),
    ),
)


def unwrap_message(message: str) -> str:
    """Pull ``error.message`` or ``message`` out of a JSON-encoded error body."""
    if not message.startswith(("{", "[")):
        return message
    try:
        parsed = json.loads(message)
    except (ValueError, RecursionError):
        return message
    if not isinstance(parsed, dict):
        return message

    error = parsed.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if parsed.get("message"):
        return str(parsed["message"])
    return message


def extract_retry_after(message: str) -> int | None:
    """Seconds from a "retry in <n>s" hint, rounded up."""
    match = RETRY_DELAY_RE.search(message)
    if not match:
        return None
    try:
        return math.ceil(float(match.group(1)))
    except (ValueError, OverflowError):
        return None


def _raw_message(error: BaseException | str | None) -> str:
    if error is None:
        return ""
    if isinstance(error, str):
        return error
    return str(error)


def classify(
    error: BaseException | str | None,
    max_message_chars: int | None = None,
) -> ClassifiedError:
    """Classify a failure. Never raises."""
    if max_message_chars is None:
        max_message_chars = settings.max_error_message_chars

    message = unwrap_message(_raw_message(error))
    retry_after = extract_retry_after(message)

    for rule in RULES:
        if rule.matches(message):
            return ClassifiedError(
                kind=rule.kind,
                user_message=rule.user_message,
                retry_after_seconds=retry_after,
            )

    return ClassifiedError(
        kind=ErrorKind.UNKNOWN,
        user_message=message[:max_message_chars] or FALLBACK_MESSAGE,
        retry_after_seconds=retry_after,
    )


def should_arm_countdown(classified: ClassifiedError) -> bool:
    return (
        classified.kind is ErrorKind.RATE_LIMITED
        and classified.retry_after_seconds is not None
        and classified.retry_after_seconds > 0
    )
