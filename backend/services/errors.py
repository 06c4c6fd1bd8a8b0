"""Failures raised by the extraction and analysis pipeline."""


class ResumeAnalysisError(Exception):
    """Base class for pipeline failures."""


class UnsupportedFormatError(ResumeAnalysisError):
    """File extension/MIME type matches no supported format family."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Unsupported file type: .{extension}")


class BackendUnavailableError(ResumeAnalysisError):
    """A format-specific text extractor has not been initialized."""

    def __init__(self, format_name: str):
        self.format_name = format_name
        super().__init__(f"{format_name} library not loaded")


class UnreadableImageError(ResumeAnalysisError, ValueError):
    def __init__(self):
        super().__init__("Failed to read image file")


class TooShortError(ResumeAnalysisError):
    def __init__(self, length: int, minimum: int):
        self.length = length
        self.minimum = minimum
        super().__init__(
            "Document is too short to be a valid resume. "
            "Please upload a complete resume or CV."
        )


class InvalidDocumentError(ResumeAnalysisError):
    """The model answered with the not-a-resume sentinel."""

    def __init__(self, justification: str = ""):
        self.justification = justification
        super().__init__(
            "The uploaded document does not appear to be a valid resume or CV. "
            "Please upload a professional resume containing sections like "
            "Education, Skills, Experience, or Projects."
        )


class EmptyResponseError(ResumeAnalysisError):
    def __init__(self, model_id: str):
        self.model_id = model_id
        super().__init__(f"Empty response from Gemini model {model_id}.")


class ModelFallbackExhaustedError(ResumeAnalysisError):
    """Every model in the fallback chain failed.

    The message is the last attempt's message; earlier errors are dropped.
    """

    def __init__(self, last_error: BaseException | None, attempted: tuple[str, ...] = ()):
        self.last_error = last_error
        self.attempted = attempted
        message = str(last_error) if last_error is not None else "All models failed to generate content."
        super().__init__(message)
