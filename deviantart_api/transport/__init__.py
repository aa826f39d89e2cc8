# HTTP transport - authenticated fetch and credential exchange
from .fetch import (
    AuthenticatedFetch,
    ApiSession,
    ApiResponse,
    BASE_API_URL,
    API_VERSION,
    API_VERSION_HEADER,
)
from .auth import ClientCredentialsAuth, TOKEN_URL

__all__ = [
    "AuthenticatedFetch",
    "ApiSession",
    "ApiResponse",
    "ClientCredentialsAuth",
    "BASE_API_URL",
    "API_VERSION",
    "API_VERSION_HEADER",
    "TOKEN_URL",
]
