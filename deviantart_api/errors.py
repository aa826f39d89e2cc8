"""Exception types raised by the DeviantArt browse client."""

from typing import Any, Dict, Optional

from .schemas.responses import APIError


class DeviantArtError(Exception):
    """Base exception for client errors."""
    pass


class CredentialConfigError(DeviantArtError):
    """Raised when the client id or secret is not configured."""
    pass


class AuthenticationError(DeviantArtError):
    """Raised when the token endpoint does not hand out an access token."""
    pass


class ResponseDecodeError(DeviantArtError):
    """Raised when a response body is not valid JSON or lacks required fields."""
    pass


class RetryExhaustedError(DeviantArtError):
    """
    Raised when authentication keeps failing after every token reset.

    Attributes:
        retries: Number of token resets performed before giving up
        path: Endpoint path of the failed fetch (optional)
    """

    def __init__(self, retries: int, path: Optional[str] = None):
        self.retries = retries
        self.path = path
        msg = f"Access token reset retries exceeded: retries={retries}"
        if path:
            msg = f"[{path}] {msg}"
        super().__init__(msg)

    @property
    def attempts(self) -> int:
        """Total requests issued, the initial one included."""
        return self.retries + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": "retry_exhausted",
            "retries": self.retries,
            "attempts": self.attempts,
            "path": self.path,
        }


class APIRequestError(DeviantArtError):
    """
    Raised for non-2xx responses other than a recovered 401.

    Attributes:
        status: HTTP status code
        api_error: Decoded error payload, if the body carried one
    """

    def __init__(self, status: int, api_error: Optional[APIError] = None, body: str = ""):
        self.status = status
        self.api_error = api_error
        self.body = body
        if api_error is not None:
            msg = f"API error {status}: {api_error.error} ({api_error.description})"
        else:
            msg = f"API error {status}: {body[:200]}"
        super().__init__(msg)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": "api_request_failed",
            "status": self.status,
            "api_error": self.api_error.to_dict() if self.api_error else None,
        }
