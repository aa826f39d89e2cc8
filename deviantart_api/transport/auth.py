"""Client-credentials token exchange against the DeviantArt OAuth2 endpoint."""

import logging
from typing import Optional

import aiohttp

from ..errors import AuthenticationError, CredentialConfigError
from .fetch import ApiSession

logger = logging.getLogger(__name__)

TOKEN_URL = "https://www.deviantart.com/oauth2/token"


class ClientCredentialsAuth:
    """
    Obtains application access tokens with the client_credentials grant.

    Used once by the client builder and then as the refresher handed to
    AuthenticatedFetch, which calls refresh() whenever the API answers 401.
    """

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        token_url: str = TOKEN_URL,
        timeout: int = 30,
        http_session: Optional[aiohttp.ClientSession] = None,
    ):
        if not client_id:
            raise CredentialConfigError("DA_CLIENT_ID environment variable not set")
        if not client_secret:
            raise CredentialConfigError("DA_CLIENT_SECRET environment variable not set")

        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = http_session
        self._owns_session = http_session is None
        self.token_count = 0

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def fetch_token(self) -> str:
        """
        Exchange the client credentials for an access token.

        Raises:
            AuthenticationError: If the endpoint refuses or returns no token
        """
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "client_credentials",
        }
        session = await self._get_session()
        async with session.post(self.token_url, data=data) as resp:
            if resp.status != 200:
                body = await resp.text()
                raise AuthenticationError(
                    f"Token request failed (HTTP {resp.status}): {body[:200]}"
                )
            token_data = await resp.json()

        access_token = token_data.get("access_token") if isinstance(token_data, dict) else None
        if not access_token:
            raise AuthenticationError("Token response did not contain an access_token")

        self.token_count += 1
        logger.info(f"Obtained access token #{self.token_count} from {self.token_url}")
        return access_token

    async def login(self) -> ApiSession:
        return ApiSession(access_token=await self.fetch_token())

    async def refresh(self, api_session: ApiSession) -> ApiSession:
        """Store a fresh access token on api_session and return it."""
        api_session.access_token = await self.fetch_token()
        return api_session
