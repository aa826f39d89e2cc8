# Domain records and response envelopes
from .models import (
    User,
    Image,
    FullSizeImage,
    Deviation,
    Topic,
    Collection,
    SuggestedCollection,
)
from .responses import (
    BrowsePage,
    TopicList,
    TagSearchResult,
    MoreLikeThisPreview,
    APIError,
    PageMetadata,
)

__all__ = [
    "User",
    "Image",
    "FullSizeImage",
    "Deviation",
    "Topic",
    "Collection",
    "SuggestedCollection",
    "BrowsePage",
    "TopicList",
    "TagSearchResult",
    "MoreLikeThisPreview",
    "APIError",
    "PageMetadata",
]
