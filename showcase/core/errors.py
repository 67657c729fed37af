"""
Application errors for clean API error handling.

Use ServiceUnavailableError when a dependency (horoscope API, LLM gateway)
is misconfigured or unreachable so the API can return 503 with a user-facing message.
"""


class ServiceUnavailableError(Exception):
    """Raised when a required service (e.g. horoscope API, LLM) is unavailable or misconfigured."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class LlmResponseError(Exception):
    """Raised when the LLM returns content that cannot be bound to the expected type."""

    def __init__(self, message: str, raw: str = "") -> None:
        self.message = message
        self.raw = raw
        super().__init__(message)
