"""Caller-side state for one user's analysis flow.

Holds what a front end renders: the selected file, the pipeline status, the
result or the classified error, and the retry countdown that hides the
error once a rate limit has passed.
"""

import asyncio
from enum import Enum
from typing import Awaitable, Callable

from models.file_content import SourceFile
from models.responses import AnalysisOutcome, AnalysisResult, ClassifiedError, ErrorKind
from services.analysis_orchestrator import FallbackPolicy
from services.content_extractor import ContentExtractor
from services.error_classifier import should_arm_countdown
from services.gemini_client import AnalysisTransport
from services.resume_analyzer import run_analysis
from services.retry_countdown import RetryCountdown


NO_FILE_MESSAGE = "Please select a file to analyze."


class AnalysisStatus(str, Enum):
    IDLE = "idle"
    PARSING = "parsing"
    ANALYZING = "analyzing"
    SUCCESS = "success"
    ERROR = "error"


class AnalysisSession:
    def __init__(
        self,
        extractor: ContentExtractor | None = None,
        transport: AnalysisTransport | None = None,
        policy: FallbackPolicy | None = None,
        countdown_sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._extractor = extractor
        self._transport = transport
        self._policy = policy

        self.status = AnalysisStatus.IDLE
        self.selected_file: SourceFile | None = None
        self.result: AnalysisResult | None = None
        self.error: ClassifiedError | None = None
        self.error_visible = False
        self.countdown = RetryCountdown(on_expire=self.dismiss_error, sleep=countdown_sleep)

    @property
    def retry_countdown(self) -> int | None:
        return self.countdown.seconds_remaining

    def select_file(self, source: SourceFile) -> None:
        self.selected_file = source
        if self.status in (AnalysisStatus.ERROR, AnalysisStatus.SUCCESS):
            self.status = AnalysisStatus.IDLE
            self.result = None
            self.error = None
            self.dismiss_error()

    def dismiss_error(self) -> None:
        self.error_visible = False
        self.countdown.cancel()

    def _set_stage(self, stage: str) -> None:
        self.status = AnalysisStatus(stage)

    def _show_error(self, error: ClassifiedError) -> None:
        self.error = error
        self.error_visible = True

    async def start(self) -> AnalysisOutcome:
        if self.selected_file is None:
            outcome = AnalysisOutcome(
                error=ClassifiedError(kind=ErrorKind.UNKNOWN, user_message=NO_FILE_MESSAGE)
            )
            self._show_error(outcome.error)
            return outcome

        self.result = None
        self.error = None
        self.dismiss_error()
        outcome = await run_analysis(
            self.selected_file,
            extractor=self._extractor,
            transport=self._transport,
            policy=self._policy,
            on_stage=self._set_stage,
        )

        if outcome.ok:
            self.result = outcome.result
            self.status = AnalysisStatus.SUCCESS
            return outcome

        self._show_error(outcome.error)
        self.status = AnalysisStatus.ERROR
        if should_arm_countdown(outcome.error):
            self.countdown.arm(outcome.error.retry_after_seconds)
        return outcome
