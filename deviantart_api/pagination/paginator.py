"""
Paginators - stateful next()/previous() traversal of browse feeds

Two families share one base:

- ServerDrivenPaginator: the next cursor is the next_offset reported by the
  server; when has_more is false the cursor resets to its default and
  wrapped_forward is set.
- DailyPaginator: the cursor is a calendar date moved by limit days; the
  wrapping offset turns past today into the earliest date and vice versa.

Every transition is staged on a copy of the state and committed only once
the page request succeeds, so a failed request leaves the paginator as it was.
A paginator must not be driven by more than one task at a time.
"""
import logging
from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import Any, Dict, Generic, Optional, TypeVar

from ..browse.endpoints import DAILY, Endpoint, daily_params, offset_limit_params, send
from ..schemas.responses import PageMetadata
from ..transport.fetch import AuthenticatedFetch
from .bounds import BoundedValue, CorrectionPolicy, Limit
from .state import PaginatorState

logger = logging.getLogger(__name__)

O = TypeVar("O")


class Paginator(ABC, Generic[O]):
    """
    Base state machine shared by all paginators.

    Subclasses implement the two transitions and _page_request(), which issues
    the request for a staged state and returns (payload, metadata).
    """

    def __init__(
        self,
        fetcher: AuthenticatedFetch,
        endpoint: Endpoint,
        offset: BoundedValue[O],
        limit: Limit[int],
    ):
        self.fetcher = fetcher
        self.endpoint = endpoint
        self.state: PaginatorState[O, int] = PaginatorState(offset=offset, limit=limit)

    # Read-only views of the state

    @property
    def offset(self) -> O:
        return self.state.offset.value

    @property
    def limit(self) -> int:
        return self.state.limit.value

    @property
    def wrapped_forward(self) -> bool:
        return self.state.wrapped_forward

    @property
    def wrapped_backward(self) -> bool:
        return self.state.wrapped_backward

    @property
    def metadata(self) -> PageMetadata:
        return self.state.metadata

    @property
    def active(self) -> bool:
        """False until the first page request has completed."""
        return self.state.active

    @abstractmethod
    async def next(self) -> Any:
        """Fetch the next page."""
        pass

    @abstractmethod
    async def previous(self) -> Any:
        """Fetch the previous page."""
        pass

    @abstractmethod
    async def _page_request(self, staged: PaginatorState):
        pass

    async def _commit(self, staged: PaginatorState) -> Any:
        payload, metadata = await self._page_request(staged)
        if metadata is not None:
            staged.metadata = metadata
        staged.pages_fetched += 1
        self.state.commit(staged)
        return payload

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} endpoint={self.endpoint.name} "
            f"offset={self.offset!r} limit={self.limit} "
            f"wrapped_forward={self.wrapped_forward} wrapped_backward={self.wrapped_backward}>"
        )


class ServerDrivenPaginator(Paginator[int]):
    """
    Paginator for feeds whose envelope reports has_more/next_offset.

    Args:
        fetcher: AuthenticatedFetch used for every page
        endpoint: Paginated endpoint record
        offset: Integer cursor (clamping in the standard configuration)
        limit: Page size
        params: Endpoint-specific parameters sent with every page (tag, q, ...)
    """

    def __init__(
        self,
        fetcher: AuthenticatedFetch,
        endpoint: Endpoint,
        offset: BoundedValue[int],
        limit: Limit[int],
        params: Optional[Dict[str, str]] = None,
    ):
        if not endpoint.paginated:
            raise ValueError(f"Endpoint {endpoint.name} does not report pagination metadata")
        super().__init__(fetcher, endpoint, offset, limit)
        self.params = dict(params or {})

    async def next(self) -> Any:
        staged = self.state.clone()
        metadata = staged.metadata
        if not metadata.has_more or metadata.next_offset is None:
            staged.wrapped_forward = True
            staged.offset.reset()
            logger.info(f"[{self.endpoint.name}] end of feed, wrapping to offset {staged.offset.value}")
        else:
            staged.offset.set(metadata.next_offset)
        return await self._commit(staged)

    async def previous(self) -> Any:
        staged = self.state.clone()
        candidate = staged.offset.value - staged.limit.value
        staged.wrapped_backward = (
            staged.wrapped_backward
            or staged.wrapped_forward
            or candidate < staged.offset.min
        )
        staged.offset.set(candidate)
        return await self._commit(staged)

    def build_params(self, staged: PaginatorState) -> Dict[str, str]:
        params = offset_limit_params(staged.offset.value, staged.limit.value)
        params.update(self.params)
        return params

    async def _page_request(self, staged: PaginatorState):
        return await send(self.fetcher, self.endpoint, self.build_params(staged))


class DailyPaginator(Paginator[date]):
    """
    Paginator over the daily deviations feed, one date per page.

    The limit is a step in days. The offset should wrap so that walking past
    either end of the supported date range continues from the other end.
    """

    def __init__(
        self,
        fetcher: AuthenticatedFetch,
        offset: BoundedValue[date],
        limit: Limit[int],
        endpoint: Endpoint = DAILY,
    ):
        if offset.policy is not CorrectionPolicy.WRAP:
            logger.warning("DailyPaginator offset does not wrap; traversal will stop at the bounds")
        super().__init__(fetcher, endpoint, offset, limit)

    async def next(self) -> Any:
        staged = self.state.clone()
        candidate = staged.offset.value + timedelta(days=staged.limit.value)
        staged.wrapped_forward = staged.wrapped_forward or candidate > staged.offset.max
        staged.offset.set(candidate)
        return await self._commit(staged)

    async def previous(self) -> Any:
        staged = self.state.clone()
        candidate = staged.offset.value - timedelta(days=staged.limit.value)
        staged.wrapped_backward = staged.wrapped_backward or candidate < staged.offset.min
        staged.offset.set(candidate)
        return await self._commit(staged)

    async def _page_request(self, staged: PaginatorState):
        return await send(self.fetcher, self.endpoint, daily_params(staged.offset.value))
