"""
Feed factories - paginators preconfigured with the standard bounds per feed

Usage:
    paginator = tags_paginator(fetcher, "landscape", limit=20)
    page = await paginator.next()
"""
from datetime import date
from typing import Optional, Union

from ..browse.endpoints import (
    NEWEST,
    POPULAR,
    TAGS,
    TOPIC,
    TOPICS,
    TimeRange,
    newest_params,
    popular_params,
    tags_params,
    topic_params,
)
from ..transport.fetch import AuthenticatedFetch
from .bounds import BoundedValue, CorrectionPolicy, Limit
from .paginator import DailyPaginator, ServerDrivenPaginator

EARLIEST_DAILY_DATE = date(2010, 1, 1)
MAX_OFFSET = 50000

# (min, max, default) page sizes per feed
STANDARD_LIMIT = (1, 120, 10)
DAILY_LIMIT = (1, 365, 1)
TAGS_LIMIT = (1, 50, 10)
TOPICS_LIMIT = (1, 10, 10)
TOPIC_LIMIT = (1, 24, 10)

LimitArg = Union[int, Limit, None]


def standard_offset() -> BoundedValue[int]:
    return BoundedValue(min=0, max=MAX_OFFSET, default=0, name="Offset")


def standard_limit() -> Limit[int]:
    return _make_limit(STANDARD_LIMIT)


def daily_offset(today: Optional[date] = None) -> BoundedValue[date]:
    """Wrapping date cursor from EARLIEST_DAILY_DATE to today, starting today."""
    today = today or date.today()
    return BoundedValue(
        min=EARLIEST_DAILY_DATE,
        max=today,
        default=today,
        policy=CorrectionPolicy.WRAP,
        name="DailyOffset",
    )


def _make_limit(bounds) -> Limit[int]:
    low, high, default = bounds
    return Limit(min=low, max=high, default=default)


def _resolve_limit(limit: LimitArg, bounds) -> Limit[int]:
    """A Limit is used as given; an int is clamped into the feed's standard limit."""
    if isinstance(limit, Limit):
        return limit
    resolved = _make_limit(bounds)
    if limit is not None:
        resolved.set(limit)
    return resolved


def _resolve_offset(offset: Union[int, BoundedValue, None]) -> BoundedValue[int]:
    if isinstance(offset, BoundedValue):
        return offset
    resolved = standard_offset()
    if offset is not None:
        resolved.set(offset)
    return resolved


def daily_paginator(
    fetcher: AuthenticatedFetch,
    offset: Optional[BoundedValue[date]] = None,
    limit: LimitArg = None,
    today: Optional[date] = None,
) -> DailyPaginator:
    return DailyPaginator(
        fetcher,
        offset=offset if offset is not None else daily_offset(today),
        limit=_resolve_limit(limit, DAILY_LIMIT),
    )


def popular_paginator(
    fetcher: AuthenticatedFetch,
    search: Optional[str] = None,
    time_range: Optional[TimeRange] = None,
    offset: Union[int, BoundedValue, None] = None,
    limit: LimitArg = None,
) -> ServerDrivenPaginator:
    return ServerDrivenPaginator(
        fetcher,
        POPULAR,
        offset=_resolve_offset(offset),
        limit=_resolve_limit(limit, STANDARD_LIMIT),
        params=popular_params(search, time_range),
    )


def newest_paginator(
    fetcher: AuthenticatedFetch,
    search: Optional[str] = None,
    offset: Union[int, BoundedValue, None] = None,
    limit: LimitArg = None,
) -> ServerDrivenPaginator:
    return ServerDrivenPaginator(
        fetcher,
        NEWEST,
        offset=_resolve_offset(offset),
        limit=_resolve_limit(limit, STANDARD_LIMIT),
        params=newest_params(search),
    )


def tags_paginator(
    fetcher: AuthenticatedFetch,
    tag: str,
    offset: Union[int, BoundedValue, None] = None,
    limit: LimitArg = None,
) -> ServerDrivenPaginator:
    return ServerDrivenPaginator(
        fetcher,
        TAGS,
        offset=_resolve_offset(offset),
        limit=_resolve_limit(limit, TAGS_LIMIT),
        params=tags_params(tag),
    )


def topics_paginator(
    fetcher: AuthenticatedFetch,
    offset: Union[int, BoundedValue, None] = None,
    limit: LimitArg = None,
) -> ServerDrivenPaginator:
    return ServerDrivenPaginator(
        fetcher,
        TOPICS,
        offset=_resolve_offset(offset),
        limit=_resolve_limit(limit, TOPICS_LIMIT),
    )


def topic_paginator(
    fetcher: AuthenticatedFetch,
    name: str,
    offset: Union[int, BoundedValue, None] = None,
    limit: LimitArg = None,
) -> ServerDrivenPaginator:
    return ServerDrivenPaginator(
        fetcher,
        TOPIC,
        offset=_resolve_offset(offset),
        limit=_resolve_limit(limit, TOPIC_LIMIT),
        params=topic_params(name),
    )
