"""
Browse Endpoints - paths, parameters and envelope decoding

Each endpoint is an immutable record: its path segments, how to decode the
result, and whether its envelope carries pagination metadata. send() runs one
request through an AuthenticatedFetch and returns (payload, metadata) so the
caller decides what to do with the metadata.
"""
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from ..errors import APIRequestError, ResponseDecodeError
from ..schemas.responses import (
    APIError,
    PageMetadata,
    BrowsePage,
    MoreLikeThisPreview,
    TagSearchResult,
    TopicList,
)
from ..transport.fetch import ApiResponse, AuthenticatedFetch

logger = logging.getLogger(__name__)

BROWSE_PART = "/browse"
DAILY_PART = "/dailydeviations"
POPULAR_PART = "/popular"
MORE_LIKE_THIS_PART = "/morelikethis"
PREVIEW_PART = "/preview"
NEWEST_PART = "/newest"
TAGS_PART = "/tags"
SEARCH_PART = "/search"
TOPICS_PART = "/topics"
TOPIC_PART = "/topic"
TOP_TOPICS_PART = "/toptopics"


class TimeRange(str, Enum):
    """Window for the popular feed, valued as the API spells it."""
    NOW = "now"
    ONE_WEEK = "1week"
    ONE_MONTH = "1month"
    ALL_TIME = "alltime"


@dataclass(frozen=True)
class Endpoint:
    """
    Static description of one API endpoint.

    Attributes:
        name: Short identifier used in logs
        parts: Path segments joined under the API base path
        decode: Builds the domain payload from the decoded body
        paginated: Whether the envelope carries has_more/next_offset
        results_key: Envelope field handed to decode (None for the whole body)
    """
    name: str
    parts: Tuple[str, ...]
    decode: Callable[[Any], Any]
    paginated: bool = True
    results_key: Optional[str] = "results"

    @property
    def path(self) -> str:
        return "".join(self.parts)


DAILY = Endpoint("daily", (BROWSE_PART, DAILY_PART), BrowsePage.from_results, paginated=False)
POPULAR = Endpoint("popular", (BROWSE_PART, POPULAR_PART), BrowsePage.from_results)
NEWEST = Endpoint("newest", (BROWSE_PART, NEWEST_PART), BrowsePage.from_results)
TAGS = Endpoint("tags", (BROWSE_PART, TAGS_PART), BrowsePage.from_results)
TAG_SEARCH = Endpoint(
    "tag_search", (BROWSE_PART, TAGS_PART, SEARCH_PART),
    TagSearchResult.from_results, paginated=False,
)
TOPICS = Endpoint("topics", (BROWSE_PART, TOPICS_PART), TopicList.from_results)
TOPIC = Endpoint("topic", (BROWSE_PART, TOPIC_PART), BrowsePage.from_results)
MORE_LIKE_THIS = Endpoint(
    "more_like_this", (BROWSE_PART, MORE_LIKE_THIS_PART, PREVIEW_PART),
    MoreLikeThisPreview.from_envelope, paginated=False, results_key=None,
)
TOP_TOPICS = Endpoint(
    "top_topics", (BROWSE_PART, TOP_TOPICS_PART), TopicList.from_results, paginated=False,
)


# ============================================================================
# PARAMETER BUILDERS
# ============================================================================

def offset_limit_params(offset: int, limit: int) -> Dict[str, str]:
    return {"offset": str(offset), "limit": str(limit)}


def daily_params(day: date) -> Dict[str, str]:
    return {"date": day.strftime("%Y-%m-%d")}


def popular_params(
    search: Optional[str] = None,
    time_range: Optional[TimeRange] = None,
) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if search is not None:
        params["q"] = search
    if time_range is not None:
        params["timerange"] = TimeRange(time_range).value
    return params


def newest_params(search: Optional[str] = None) -> Dict[str, str]:
    return {"q": search} if search is not None else {}


def tags_params(tag: str) -> Dict[str, str]:
    return {"tag": tag}


def tag_search_params(tag: str) -> Dict[str, str]:
    return {"tag_name": tag}


def topic_params(name: str) -> Dict[str, str]:
    return {"topic": name}


def more_like_this_params(seed: str) -> Dict[str, str]:
    return {"seed": seed}


# ============================================================================
# REQUEST EXECUTION
# ============================================================================

def decode_envelope(response: ApiResponse) -> Dict[str, Any]:
    """
    Return the decoded JSON object of a successful response.

    Raises:
        APIRequestError: For any non-2xx status
        ResponseDecodeError: If the body is not a JSON object
    """
    if not response.ok:
        try:
            api_error = APIError.from_dict(response.json())
        except ResponseDecodeError:
            api_error = None
        raise APIRequestError(response.status, api_error=api_error, body=response.body)

    envelope = response.json()
    if not isinstance(envelope, dict):
        raise ResponseDecodeError(
            f"Expected a JSON object from {response.path}, got {type(envelope).__name__}"
        )
    return envelope


def split_envelope(
    endpoint: Endpoint, envelope: Dict[str, Any]
) -> Tuple[Any, Optional[PageMetadata]]:
    """Separate the domain payload from the pagination metadata."""
    try:
        body = envelope if endpoint.results_key is None else envelope[endpoint.results_key]
        payload = endpoint.decode(body)
        metadata = PageMetadata.from_envelope(envelope) if endpoint.paginated else None
    except (KeyError, TypeError, AttributeError) as e:
        raise ResponseDecodeError(
            f"Malformed {endpoint.name} response: {type(e).__name__}: {e}"
        ) from e
    return payload, metadata


async def send(
    fetcher: AuthenticatedFetch,
    endpoint: Endpoint,
    params: Optional[Dict[str, str]] = None,
) -> Tuple[Any, Optional[PageMetadata]]:
    """
    Fetch one endpoint and decode it.

    Returns:
        (payload, metadata); metadata is None for endpoints without paging
    """
    response = await fetcher.get(endpoint.path, params=params or {})
    envelope = decode_envelope(response)
    payload, metadata = split_envelope(endpoint, envelope)
    if metadata is not None and metadata.error_code is not None:
        logger.warning(f"{endpoint.name} reported error_code={metadata.error_code}")
    return payload, metadata
