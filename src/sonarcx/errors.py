from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    import httpx


class SonarCloudError(Exception):
    """Base error for sonarcx, carrying a numeric code and a message."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"Err: {code}, {message}")
        self.code = code
        self.message = message


class TokenRequiredError(SonarCloudError):
    def __init__(self, message: str = "Token is required") -> None:
        super().__init__(-1, message)


class ConfigurationError(SonarCloudError):
    def __init__(self, message: str) -> None:
        super().__init__(-2, message)


class TransportError(SonarCloudError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, message: str) -> None:
        super().__init__(0, message)


class HttpError(SonarCloudError):
    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        response: Optional["httpx.Response"] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(status_code, message)
        self.status_code = status_code
        self.response = response
        self.details = details


class BadRequestError(HttpError):
    """HTTP 400; ``message`` is the body text returned by SonarCloud."""

    def __init__(self, message: str, *, response: Optional["httpx.Response"] = None) -> None:
        super().__init__(400, message, response=response)
