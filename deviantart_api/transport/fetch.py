"""Authenticated GET against the DeviantArt OAuth2 API."""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional

import aiohttp

from ..errors import ResponseDecodeError, RetryExhaustedError
from ..logging_config import LogContext

logger = logging.getLogger(__name__)

BASE_API_URL = "https://www.deviantart.com/api/v1/oauth2"
API_VERSION = "20210526"
API_VERSION_HEADER = "dA-minor-version"


@dataclass
class ApiSession:
    """Credentials attached to every request."""
    access_token: str

    def __repr__(self) -> str:
        return f"ApiSession(access_token='{self.access_token[:4]}...')"


@dataclass
class ApiResponse:
    """
    A response read to completion; decoding is left to the caller.

    Holds the raw bytes; json() reports a body that is not valid UTF-8 as
    ResponseDecodeError.
    """
    status: int
    raw: bytes
    path: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def body(self) -> str:
        """Text of the body for error messages; undecodable bytes are replaced."""
        return self.raw.decode("utf-8", errors="replace")

    def json(self) -> Any:
        try:
            return json.loads(self.raw)
        except ValueError as e:  # includes UnicodeDecodeError
            raise ResponseDecodeError(
                f"Invalid JSON from {self.path or 'API'} (HTTP {self.status}): {e}"
            ) from e


Refresher = Callable[[ApiSession], Awaitable[ApiSession]]


class AuthenticatedFetch:
    """
    Issues authenticated GET requests.

    Key features:
    - access_token and mature_content query parameters on every call
    - API version header on every call
    - On HTTP 401 the access token is reset and the call retried with
      exponential backoff (1s, 2s, 4s); after MAX_TOKEN_RESETS resets the
      fetch fails with RetryExhaustedError
    - Every other status is returned as-is for the caller to decode
    """

    MAX_TOKEN_RESETS = 3
    INITIAL_RETRY_DELAY = 1.0  # seconds

    def __init__(
        self,
        api_session: ApiSession,
        refresher: Refresher,
        base_url: str = BASE_API_URL,
        api_version: str = API_VERSION,
        mature_content: bool = False,
        timeout: int = 30,
        max_token_resets: Optional[int] = None,
        initial_retry_delay: Optional[float] = None,
        http_session: Optional[aiohttp.ClientSession] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            api_session: Session holding the current access token
            refresher: Coroutine returning a session with a fresh access token
            base_url: API root every path is appended to
            api_version: Value of the dA-minor-version header
            mature_content: Value of the mature_content query parameter
            timeout: Total per-request timeout in seconds
            max_token_resets: Override for MAX_TOKEN_RESETS
            initial_retry_delay: Override for INITIAL_RETRY_DELAY
            http_session: Shared aiohttp session (not closed by close())
            sleep: Backoff coroutine, asyncio.sleep by default
        """
        self.api_session = api_session
        self.refresher = refresher
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.mature_content = mature_content
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        if max_token_resets is not None:
            self.MAX_TOKEN_RESETS = max_token_resets
        if initial_retry_delay is not None:
            self.INITIAL_RETRY_DELAY = initial_retry_delay
        self._session = http_session
        self._owns_session = http_session is None
        self._sleep = sleep or asyncio.sleep

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close HTTP session if this fetcher created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    def build_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _build_params(self, params: Optional[Dict[str, Any]]) -> Dict[str, str]:
        merged = {
            "access_token": self.api_session.access_token,
            "mature_content": "true" if self.mature_content else "false",
        }
        for key, value in (params or {}).items():
            merged[key] = str(value)
        return merged

    def _build_headers(self, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        merged = {API_VERSION_HEADER: self.api_version}
        merged.update(headers or {})
        return merged

    def backoff_delay(self, retry: int) -> float:
        return self.INITIAL_RETRY_DELAY * (2 ** retry)

    async def _request(
        self,
        path: str,
        params: Optional[Dict[str, Any]],
        headers: Optional[Dict[str, str]],
    ) -> ApiResponse:
        session = await self._get_session()
        async with session.get(
            self.build_url(path),
            params=self._build_params(params),
            headers=self._build_headers(headers),
        ) as response:
            raw = await response.read()
            return ApiResponse(
                status=response.status,
                raw=raw,
                path=path,
                headers=dict(response.headers or {}),
            )

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> ApiResponse:
        """
        Perform one authenticated GET, resetting the token on 401.

        Args:
            path: Endpoint path relative to base_url (e.g. "/browse/tags")
            params: Endpoint query parameters
            headers: Extra request headers

        Returns:
            ApiResponse with any non-401 status

        Raises:
            RetryExhaustedError: If every attempt answered 401
        """
        with LogContext(endpoint=path):
            for retry in range(self.MAX_TOKEN_RESETS + 1):
                logger.debug(f"GET {path} params={params} (retry {retry})")
                response = await self._request(path, params, headers)
                if response.status != 401:
                    return response

                if retry == self.MAX_TOKEN_RESETS:
                    break

                delay = self.backoff_delay(retry)
                logger.warning(
                    f"Unauthorized (401) from {path}, resetting access token in {delay}s "
                    f"(retry {retry + 1}/{self.MAX_TOKEN_RESETS})"
                )
                await self._sleep(delay)
                self.api_session = await self.refresher(self.api_session)

        logger.error(f"Access token rejected after {self.MAX_TOKEN_RESETS} resets: {path}")
        raise RetryExhaustedError(retries=self.MAX_TOKEN_RESETS, path=path)
