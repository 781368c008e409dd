class StudyGuardianError(Exception):
    """Base class for errors surfaced to API callers."""

    error_code = "internal_error"
    hint: str | None = None


class InvalidInputError(StudyGuardianError):
    """Raised when the upload or form fields cannot be analyzed."""

    error_code = "invalid_input"

    def __init__(self, message: str, hint: str | None = None):
        super().__init__(message)
        self.hint = hint


class AuthenticationError(StudyGuardianError):
    """Raised when no Gemini API key is configured."""

    error_code = "auth_error"


class UpstreamError(StudyGuardianError):
    """Raised when every candidate model failed."""

    error_code = "upstream_error"

    def __init__(self, message: str, status_code: int | None = None, hint: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        if hint is not None:
            self.hint = hint


class RateLimitError(UpstreamError):
    """Raised when the first failing candidate hit a Gemini rate limit."""

    error_code = "rate_limit"
    hint = "Usage limit exceeded. Please wait a moment and try again."


class MalformedResponseError(StudyGuardianError):
    """Raised when the model replied with something that is not a JSON object."""

    error_code = "invalid_response"


class UnexpectedError(StudyGuardianError):
    """Wraps anything else that escaped the analysis pipeline."""
