# Bounded cursors, paginator state machines and feed factories
from .bounds import BoundedValue, CorrectionPolicy, Limit
from .state import PaginatorState
from .paginator import Paginator, ServerDrivenPaginator, DailyPaginator
from .feeds import (
    EARLIEST_DAILY_DATE,
    standard_offset,
    standard_limit,
    daily_offset,
    daily_paginator,
    popular_paginator,
    newest_paginator,
    tags_paginator,
    topics_paginator,
    topic_paginator,
)

__all__ = [
    "BoundedValue",
    "CorrectionPolicy",
    "Limit",
    "PaginatorState",
    "Paginator",
    "ServerDrivenPaginator",
    "DailyPaginator",
    "EARLIEST_DAILY_DATE",
    "standard_offset",
    "standard_limit",
    "daily_offset",
    "daily_paginator",
    "popular_paginator",
    "newest_paginator",
    "tags_paginator",
    "topics_paginator",
    "topic_paginator",
]
