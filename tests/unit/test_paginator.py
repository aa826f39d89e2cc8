"""
Unit tests for deviantart_api.pagination paginators.

Tests the server-driven and daily state machines, the sticky wrap flags and
that a failed request leaves the paginator untouched.
"""

from datetime import date, timedelta

import pytest

from conftest import browse_envelope, make_deviation, make_response, sent_params
from deviantart_api.browse.endpoints import DAILY, TAGS, TAG_SEARCH
from deviantart_api.errors import APIRequestError, ResponseDecodeError, RetryExhaustedError
from deviantart_api.pagination import (
    EARLIEST_DAILY_DATE,
    BoundedValue,
    CorrectionPolicy,
    DailyPaginator,
    Limit,
    ServerDrivenPaginator,
    daily_paginator,
    standard_limit,
    standard_offset,
    tags_paginator,
)


def page(user_data, has_more=True, next_offset=10):
    return make_response(200, browse_envelope([make_deviation("A", user_data)], has_more, next_offset))


def daily_page(user_data):
    return make_response(200, {"results": [make_deviation("D", user_data)]})


class TestServerDrivenNext:

    @pytest.mark.asyncio
    async def test_first_page_starts_at_zero(self, make_fetcher, user_data):
        fetcher = make_fetcher(page(user_data))
        paginator = tags_paginator(fetcher, "landscape")

        assert not paginator.active
        result = await paginator.next()

        assert len(result) == 1
        assert paginator.active
        assert sent_params(fetcher._session)["offset"] == "0"

    @pytest.mark.asyncio
    async def test_follows_next_offset(self, make_fetcher, user_data):
        fetcher = make_fetcher(page(user_data, next_offset=10), page(user_data, next_offset=20))
        paginator = tags_paginator(fetcher, "landscape")

        await paginator.next()
        await paginator.next()

        assert sent_params(fetcher._session)["offset"] == "10"
        assert paginator.offset == 10
        assert paginator.metadata.next_offset == 20

    @pytest.mark.asyncio
    async def test_end_of_feed_wraps_to_default(self, make_fetcher, user_data):
        fetcher = make_fetcher(
            page(user_data, has_more=False, next_offset=None),
            page(user_data),
        )
        paginator = tags_paginator(fetcher, "landscape")

        await paginator.next()
        assert not paginator.wrapped_forward

        await paginator.next()

        assert paginator.wrapped_forward
        assert paginator.offset == 0
        assert sent_params(fetcher._session)["offset"] == "0"

    @pytest.mark.asyncio
    async def test_missing_next_offset_is_end_of_feed(self, make_fetcher, user_data):
        fetcher = make_fetcher(page(user_data, has_more=True, next_offset=None), page(user_data))
        paginator = tags_paginator(fetcher, "landscape")

        await paginator.next()
        await paginator.next()

        assert paginator.wrapped_forward
        assert paginator.offset == 0

    @pytest.mark.asyncio
    async def test_wrapped_forward_stays_set(self, make_fetcher, user_data):
        fetcher = make_fetcher(
            page(user_data, has_more=False, next_offset=None),
            page(user_data, has_more=True, next_offset=10),
            page(user_data, has_more=True, next_offset=20),
            page(user_data, has_more=True, next_offset=30),
        )
        paginator = tags_paginator(fetcher, "landscape")

        await paginator.next()
        await paginator.next()
        assert paginator.wrapped_forward

        await paginator.next()
        await paginator.next()

        assert paginator.wrapped_forward
        assert paginator.offset == 20

    @pytest.mark.asyncio
    async def test_caller_offset_tracks_position(self, make_fetcher, user_data):
        fetcher = make_fetcher(page(user_data, next_offset=10), page(user_data, next_offset=20))
        offset = standard_offset()
        paginator = tags_paginator(fetcher, "landscape", offset=offset)

        await paginator.next()
        await paginator.next()

        assert paginator.state.offset is offset
        assert offset.value == 10


class TestServerDrivenPrevious:

    @pytest.mark.asyncio
    async def test_steps_back_by_limit(self, make_fetcher, user_data):
        fetcher = make_fetcher(page(user_data))
        offset = standard_offset()
        offset.set(30)
        paginator = tags_paginator(fetcher, "landscape", offset=offset, limit=10)

        await paginator.previous()

        assert paginator.offset == 20
        assert not paginator.wrapped_backward
        assert sent_params(fetcher._session)["offset"] == "20"

    @pytest.mark.asyncio
    async def test_below_min_clamps_and_flags(self, make_fetcher, user_data):
        fetcher = make_fetcher(page(user_data))
        paginator = tags_paginator(fetcher, "landscape", limit=10)

        await paginator.previous()

        assert paginator.offset == 0
        assert paginator.wrapped_backward

    @pytest.mark.asyncio
    async def test_wrapped_forward_implies_wrapped_backward(self, make_fetcher, user_data):
        fetcher = make_fetcher(
            page(user_data, has_more=False, next_offset=None),
            page(user_data, next_offset=40),
            page(user_data, next_offset=40),
        )
        offset = standard_offset()
        paginator = tags_paginator(fetcher, "landscape", offset=offset, limit=10)

        await paginator.next()
        await paginator.next()
        paginator.state.offset.set(30)
        await paginator.previous()

        assert paginator.wrapped_backward
        assert paginator.offset == 20

    @pytest.mark.asyncio
    async def test_wrapped_backward_is_sticky(self, make_fetcher, user_data):
        fetcher = make_fetcher(page(user_data), page(user_data, next_offset=50), page(user_data))
        paginator = tags_paginator(fetcher, "landscape", limit=10)

        await paginator.previous()
        assert paginator.wrapped_backward
        await paginator.next()
        await paginator.previous()

        assert paginator.wrapped_backward


class TestFailureLeavesStateUnchanged:

    @pytest.mark.asyncio
    async def test_api_error(self, make_fetcher, user_data, error_body):
        fetcher = make_fetcher(page(user_data, next_offset=10), make_response(400, error_body))
        paginator = tags_paginator(fetcher, "landscape")
        await paginator.next()
        before = (paginator.offset, paginator.limit, paginator.wrapped_forward,
                  paginator.wrapped_backward, paginator.metadata.to_dict())

        with pytest.raises(APIRequestError):
            await paginator.next()

        after = (paginator.offset, paginator.limit, paginator.wrapped_forward,
                 paginator.wrapped_backward, paginator.metadata.to_dict())
        assert after == before
        assert paginator.state.pages_fetched == 1

    @pytest.mark.asyncio
    async def test_retry_exhausted(self, make_fetcher):
        fetcher = make_fetcher(*[make_response(401) for _ in range(4)])
        paginator = tags_paginator(fetcher, "landscape")

        with pytest.raises(RetryExhaustedError):
            await paginator.previous()

        assert not paginator.wrapped_backward
        assert not paginator.active

    @pytest.mark.asyncio
    async def test_mistyped_next_offset(self, make_fetcher, user_data):
        fetcher = make_fetcher(page(user_data, next_offset=10), page(user_data, next_offset="20"))
        paginator = tags_paginator(fetcher, "landscape")
        await paginator.next()

        with pytest.raises(ResponseDecodeError):
            await paginator.next()

        assert paginator.offset == 0
        assert paginator.metadata.next_offset == 10
        assert paginator.state.pages_fetched == 1

    @pytest.mark.asyncio
    async def test_body_not_utf8(self, make_fetcher):
        fetcher = make_fetcher(make_response(200, raw=b"{\"results\": \xff}"))
        paginator = tags_paginator(fetcher, "landscape")

        with pytest.raises(ResponseDecodeError):
            await paginator.next()

        assert not paginator.active


class TestServerDrivenConstruction:

    def test_rejects_unpaginated_endpoint(self, make_fetcher):
        with pytest.raises(ValueError):
            ServerDrivenPaginator(make_fetcher(), TAG_SEARCH, standard_offset(), Limit(1, 50, 10))

    def test_integer_limit_is_clamped(self, make_fetcher):
        paginator = tags_paginator(make_fetcher(), "landscape", limit=500)
        assert paginator.limit == 50

    def test_custom_limit_is_used_as_given(self, make_fetcher):
        limit = Limit(min=1, max=5, default=5)
        paginator = ServerDrivenPaginator(make_fetcher(), TAGS, standard_offset(), limit)
        assert paginator.state.limit is limit


class TestDailyPaginator:

    def bounded(self, today):
        return BoundedValue(
            min=EARLIEST_DAILY_DATE,
            max=today + timedelta(days=30),
            default=today,
            policy=CorrectionPolicy.WRAP,
        )

    @pytest.mark.asyncio
    async def test_next_moves_forward_by_limit(self, make_fetcher, user_data):
        today = date(2024, 6, 1)
        fetcher = make_fetcher(daily_page(user_data))
        paginator = DailyPaginator(fetcher, self.bounded(today), Limit(1, 365, 3))

        result = await paginator.next()

        assert len(result) == 1
        assert paginator.offset == date(2024, 6, 4)
        assert sent_params(fetcher._session)["date"] == "2024-06-04"
        assert not paginator.wrapped_forward

    @pytest.mark.asyncio
    async def test_next_from_today_wraps_to_earliest(self, make_fetcher, user_data):
        today = date(2024, 6, 1)
        fetcher = make_fetcher(daily_page(user_data))
        paginator = daily_paginator(fetcher, today=today)

        await paginator.next()

        assert paginator.offset == EARLIEST_DAILY_DATE
        assert paginator.wrapped_forward
        assert sent_params(fetcher._session)["date"] == "2010-01-01"

    @pytest.mark.asyncio
    async def test_previous_moves_back_one_day(self, make_fetcher, user_data):
        fetcher = make_fetcher(daily_page(user_data))
        paginator = daily_paginator(fetcher, today=date(2024, 6, 1))

        await paginator.previous()

        assert paginator.offset == date(2024, 5, 31)
        assert not paginator.wrapped_backward
        assert paginator.metadata.to_dict() == {"has_more": True, "next_offset": 0, "error_code": None}

    @pytest.mark.asyncio
    async def test_previous_past_earliest_wraps_to_today(self, make_fetcher, user_data):
        today = date(2024, 6, 1)
        fetcher = make_fetcher(daily_page(user_data))
        offset = BoundedValue(
            min=EARLIEST_DAILY_DATE, max=today, default=EARLIEST_DAILY_DATE,
            policy=CorrectionPolicy.WRAP,
        )
        paginator = DailyPaginator(fetcher, offset, Limit(1, 365, 1))

        await paginator.previous()

        assert paginator.offset == today
        assert paginator.wrapped_backward

    def test_integer_limit_is_clamped(self, make_fetcher):
        paginator = daily_paginator(make_fetcher(), limit=1000, today=date(2024, 6, 1))
        assert paginator.limit == 365

    def test_uses_daily_endpoint(self, make_fetcher):
        paginator = daily_paginator(make_fetcher(), today=date(2024, 6, 1))
        assert paginator.endpoint is DAILY
        assert paginator.offset == date(2024, 6, 1)


class TestStandardBounds:

    def test_standard_offset(self):
        offset = standard_offset()
        assert (offset.min, offset.max, offset.value) == (0, 50000, 0)
        assert offset.policy is CorrectionPolicy.CLAMP

    def test_standard_limit(self):
        limit = standard_limit()
        assert (limit.min, limit.max, limit.value) == (1, 120, 10)

    def test_daily_offset_spans_earliest_to_today(self, make_fetcher):
        paginator = daily_paginator(make_fetcher(), today=date(2024, 6, 1))
        offset = paginator.state.offset
        assert (offset.min, offset.max) == (EARLIEST_DAILY_DATE, date(2024, 6, 1))
        assert offset.policy is CorrectionPolicy.WRAP
