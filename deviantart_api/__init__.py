"""
DeviantArt browse client.

Paginated, authenticated access to the DeviantArt OAuth2 browse API:
server-driven feeds (popular, newest, tags, topics), the calendar-wrapping
daily deviations feed, and one-shot lookups (more like this, tag search,
top topics).
"""
from .client import Client, ClientBuilder
from .config import ClientConfig, ClientConfigLoader
from .errors import (
    DeviantArtError,
    CredentialConfigError,
    AuthenticationError,
    RetryExhaustedError,
    APIRequestError,
    ResponseDecodeError,
)
from .browse import TimeRange
from .pagination import (
    BoundedValue,
    CorrectionPolicy,
    Limit,
    PaginatorState,
    ServerDrivenPaginator,
    DailyPaginator,
)
from .transport import AuthenticatedFetch, ApiSession, ApiResponse, ClientCredentialsAuth
from .logging_config import configure_logging

__version__ = "0.1.0"

__all__ = [
    "Client",
    "ClientBuilder",
    "ClientConfig",
    "ClientConfigLoader",
    "DeviantArtError",
    "CredentialConfigError",
    "AuthenticationError",
    "RetryExhaustedError",
    "APIRequestError",
    "ResponseDecodeError",
    "TimeRange",
    "BoundedValue",
    "CorrectionPolicy",
    "Limit",
    "PaginatorState",
    "ServerDrivenPaginator",
    "DailyPaginator",
    "AuthenticatedFetch",
    "ApiSession",
    "ApiResponse",
    "ClientCredentialsAuth",
    "configure_logging",
]
