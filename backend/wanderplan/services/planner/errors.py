"""Planner error hierarchy — everything the API surfaces as a 500."""

RETRY_HINT = "Please try again. The AI service may be temporarily overloaded."


class PlannerError(Exception):
    """Base for unrecoverable planner failures."""

    kind = "planner"

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class PlannerConfigError(PlannerError):
    """Service credential or setting is missing."""

    kind = "config"


class GeminiAPIError(PlannerError):
    """Gemini answered with a non-retryable HTTP status."""

    kind = "upstream"

    def __init__(self, status_code: int, body: str = "", details: str | None = None):
        super().__init__(f"Gemini API error: {status_code} - {body[:500]}", details)
        self.status_code = status_code
        self.body = body


class GeminiOverloadedError(GeminiAPIError):
    """Gemini kept answering 503 until the retry budget ran out."""

    kind = "overloaded"

    def __init__(self, status_code: int = 503, body: str = ""):
        super().__init__(status_code, body, details=RETRY_HINT)


class GeminiTransportError(PlannerError):
    """Network failure talking to Gemini, after retries."""

    kind = "transport"

    def __init__(self, message: str):
        super().__init__(message, details=RETRY_HINT)


class GeminiResponseError(PlannerError):
    """Gemini returned 2xx without any candidate text."""

    kind = "invalid_response"
