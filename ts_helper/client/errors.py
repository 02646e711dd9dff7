"""Exceptions raised while talking to the assistant API.

Every failure in the request chain is an AssistantClientError, so callers at
the service boundary can catch one type and substitute a fallback message.
"""


class AssistantClientError(Exception):
    """Base class for assistant client failures."""


class NetworkError(AssistantClientError):
    """Raised when the request never produced a response."""


class APIError(AssistantClientError):
    """Raised when the service answers with an error envelope."""

    def __init__(
        self,
        message: str,
        error_type: str,
        param: str | None = None,
        code: str | int | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(f"{error_type}: {message}")
        self.message = message
        self.error_type = error_type
        self.param = param
        self.code = code
        self.status_code = status_code


class DecodeError(AssistantClientError):
    """Raised when a response body does not match the expected schema."""

    def __init__(self, message: str, body: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.body = body
        self.status_code = status_code


class PreconditionError(AssistantClientError):
    """Raised when an operation runs before the state it depends on exists."""


class RunStatusError(AssistantClientError):
    """Raised when a run ends unsuccessfully or never reaches a final status."""

    def __init__(self, message: str, run_id: str, status: str) -> None:
        super().__init__(message)
        self.run_id = run_id
        self.status = status
