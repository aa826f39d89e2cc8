"""
Browse Client - facade over the paginators and one-shot browse requests

ClientBuilder turns a ClientConfig into an authenticated Client:

    async with await ClientBuilder().build() as client:
        tags = client.tags("landscape", limit=20)
        page = await tags.next()
        preview = await client.more_like_this(page.items[0].id)

The client owns one aiohttp session shared by the fetcher and the credential
refresher; close() (or leaving the async with block) releases it.
"""
import logging
from datetime import date
from typing import Optional, Union

import aiohttp

from .browse.endpoints import (
    MORE_LIKE_THIS,
    TAG_SEARCH,
    TOP_TOPICS,
    TimeRange,
    more_like_this_params,
    send,
    tag_search_params,
)
from .config import ClientConfig, ClientConfigLoader
from .errors import CredentialConfigError
from .pagination import feeds
from .pagination.bounds import BoundedValue
from .pagination.feeds import LimitArg
from .pagination.paginator import DailyPaginator, ServerDrivenPaginator
from .schemas.responses import MoreLikeThisPreview, TagSearchResult, TopicList
from .transport.auth import ClientCredentialsAuth
from .transport.fetch import AuthenticatedFetch

logger = logging.getLogger(__name__)

OffsetArg = Union[int, BoundedValue, None]


class Client:
    """
    Authenticated entry point to the browse endpoints.

    Paginator factories return independent paginators; each must be driven by
    a single task. One-shot requests are coroutines returning decoded payloads.
    """

    def __init__(
        self,
        fetcher: AuthenticatedFetch,
        auth: Optional[ClientCredentialsAuth] = None,
        http_session: Optional[aiohttp.ClientSession] = None,
    ):
        self.fetcher = fetcher
        self.auth = auth
        self._http_session = http_session

    async def close(self) -> None:
        """Release the HTTP session."""
        if self._http_session is not None and not self._http_session.closed:
            await self._http_session.close()
        await self.fetcher.close()
        if self.auth is not None:
            await self.auth.close()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False

    # Paginated feeds

    def daily(
        self,
        offset: Optional[BoundedValue[date]] = None,
        limit: LimitArg = None,
    ) -> DailyPaginator:
        return feeds.daily_paginator(self.fetcher, offset=offset, limit=limit)

    def popular(
        self,
        search: Optional[str] = None,
        time_range: Optional[TimeRange] = None,
        offset: OffsetArg = None,
        limit: LimitArg = None,
    ) -> ServerDrivenPaginator:
        return feeds.popular_paginator(
            self.fetcher, search=search, time_range=time_range, offset=offset, limit=limit
        )

    def newest(
        self,
        search: Optional[str] = None,
        offset: OffsetArg = None,
        limit: LimitArg = None,
    ) -> ServerDrivenPaginator:
        return feeds.newest_paginator(self.fetcher, search=search, offset=offset, limit=limit)

    def tags(self, tag: str, offset: OffsetArg = None, limit: LimitArg = None) -> ServerDrivenPaginator:
        return feeds.tags_paginator(self.fetcher, tag, offset=offset, limit=limit)

    def topics(self, offset: OffsetArg = None, limit: LimitArg = None) -> ServerDrivenPaginator:
        return feeds.topics_paginator(self.fetcher, offset=offset, limit=limit)

    def topic(self, name: str, offset: OffsetArg = None, limit: LimitArg = None) -> ServerDrivenPaginator:
        return feeds.topic_paginator(self.fetcher, name, offset=offset, limit=limit)

    # One-shot requests

    async def more_like_this(self, seed: str) -> MoreLikeThisPreview:
        """Deviations related to the deviation with id seed."""
        payload, _ = await send(self.fetcher, MORE_LIKE_THIS, more_like_this_params(seed))
        return payload

    async def tag_search(self, tag: str) -> TagSearchResult:
        """Tag names starting with tag."""
        payload, _ = await send(self.fetcher, TAG_SEARCH, tag_search_params(tag))
        return payload

    async def top_topics(self) -> TopicList:
        payload, _ = await send(self.fetcher, TOP_TOPICS)
        return payload


class ClientBuilder:
    """
    Builds an authenticated Client from configuration.

    Args:
        loader: Source of the configuration when build() is given none
    """

    def __init__(self, loader: Optional[ClientConfigLoader] = None):
        self.loader = loader

    async def build(
        self,
        config: Optional[ClientConfig] = None,
        http_session: Optional[aiohttp.ClientSession] = None,
    ) -> Client:
        """
        Validate credentials, fetch the first access token and wire the client.

        Args:
            config: Settings to use (loaded from the environment if omitted)
            http_session: Existing aiohttp session; one is created otherwise

        Raises:
            CredentialConfigError: If the client id or secret is missing
            AuthenticationError: If the token endpoint refuses the credentials
        """
        if config is None:
            config = (self.loader or ClientConfigLoader()).load()

        if not config.has_credentials:
            missing = "DA_CLIENT_ID" if not config.client_id else "DA_CLIENT_SECRET"
            raise CredentialConfigError(f"{missing} environment variable not set")

        owns_session = http_session is None
        if owns_session:
            http_session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=config.timeout)
            )

        auth = ClientCredentialsAuth(
            config.client_id,
            config.client_secret,
            token_url=config.token_url,
            timeout=config.timeout,
            http_session=http_session,
        )
        try:
            api_session = await auth.login()
        except Exception:
            if owns_session:
                await http_session.close()
            raise

        fetcher = AuthenticatedFetch(
            api_session,
            auth.refresh,
            base_url=config.api_base_url,
            api_version=config.api_version,
            mature_content=config.mature_content,
            timeout=config.timeout,
            max_token_resets=config.max_token_resets,
            initial_retry_delay=config.retry_delay,
            http_session=http_session,
        )
        logger.info(f"Built DeviantArt client for {config.api_base_url}")
        return Client(fetcher, auth, http_session if owns_session else None)
