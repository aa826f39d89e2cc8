# Browse endpoints - path constants, parameter builders, request execution
from .endpoints import (
    Endpoint,
    TimeRange,
    DAILY,
    POPULAR,
    NEWEST,
    TAGS,
    TAG_SEARCH,
    TOPICS,
    TOPIC,
    MORE_LIKE_THIS,
    TOP_TOPICS,
    send,
)

__all__ = [
    "Endpoint",
    "TimeRange",
    "DAILY",
    "POPULAR",
    "NEWEST",
    "TAGS",
    "TAG_SEARCH",
    "TOPICS",
    "TOPIC",
    "MORE_LIKE_THIS",
    "TOP_TOPICS",
    "send",
]
