"""Response envelopes for the browse endpoints and the API error payload."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .models import Deviation, SuggestedCollection, Topic, User


def _optional_int(envelope: Mapping[str, Any], key: str) -> Optional[int]:
    value = envelope.get(key)
    # bool is an int subclass but never a valid offset or code
    if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
        raise TypeError(f"{key} must be an int or null, got {value!r}")
    return value

@dataclass
class PageMetadata:
    """Pagination fields found at the top level of a browse envelope."""
    has_more: bool = True
    next_offset: Optional[int] = 0
    error_code: Optional[int] = None

    @classmethod
    def standard(cls) -> "PageMetadata":
        """Metadata assumed before the first fetch: more pages, start at 0."""
        return cls(has_more=True, next_offset=0, error_code=None)

    @classmethod
    def from_envelope(cls, envelope: Mapping[str, Any]) -> "PageMetadata":
        """
        Read has_more (required), next_offset and error_code.

        Raises:
            KeyError: If has_more is missing
            TypeError: If has_more is not a bool, or next_offset/error_code
                is neither an int nor null
        """
        has_more = envelope["has_more"]
        if not isinstance(has_more, bool):
            raise TypeError(f"has_more must be a bool, got {has_more!r}")
        next_offset = _optional_int(envelope, "next_offset")
        error_code = _optional_int(envelope, "error_code")
        return cls(has_more=has_more, next_offset=next_offset, error_code=error_code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "has_more": self.has_more,
            "next_offset": self.next_offset,
            "error_code": self.error_code,
        }


@dataclass
class BrowsePage:
    """One page of deviations from a browse feed."""
    items: List[Deviation] = field(default_factory=list)

    @classmethod
    def from_results(cls, results: List[Dict[str, Any]]) -> "BrowsePage":
        return cls(items=[Deviation.from_dict(item) for item in results])

    def __len__(self) -> int:
        return len(self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {"items": [d.to_dict() for d in self.items]}


@dataclass
class TopicList:
    topics: List[Topic] = field(default_factory=list)

    @classmethod
    def from_results(cls, results: List[Dict[str, Any]]) -> "TopicList":
        return cls(topics=[Topic.from_dict(t) for t in results])

    def __len__(self) -> int:
        return len(self.topics)

    def to_dict(self) -> Dict[str, Any]:
        return {"topics": [t.to_dict() for t in self.topics]}


@dataclass
class TagSearchResult:
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_results(cls, results: List[Dict[str, Any]]) -> "TagSearchResult":
        return cls(tags=[tag["tag_name"] for tag in results])

    def to_dict(self) -> Dict[str, Any]:
        return {"tags": list(self.tags)}


@dataclass
class MoreLikeThisPreview:
    """
    Deviations related to a seed deviation.

    Unlike the browse feeds this is decoded from the whole envelope, not from
    its "results" field.
    """
    seed: str
    author: User
    more_from_artist: List[Deviation] = field(default_factory=list)
    more_from_da: List[Deviation] = field(default_factory=list)
    suggested_collections: List[SuggestedCollection] = field(default_factory=list)

    @classmethod
    def from_envelope(cls, decoded: Dict[str, Any]) -> "MoreLikeThisPreview":
        return cls(
            seed=decoded["seed"],
            author=User.from_dict(decoded["author"]),
            more_from_artist=[Deviation.from_dict(d) for d in decoded["more_from_artist"]],
            more_from_da=[Deviation.from_dict(d) for d in decoded["more_from_da"]],
            suggested_collections=[
                SuggestedCollection.from_dict(c)
                for c in decoded.get("suggested_collections") or []
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "author": self.author.to_dict(),
            "more_from_artist": [d.to_dict() for d in self.more_from_artist],
            "more_from_da": [d.to_dict() for d in self.more_from_da],
            "suggested_collections": [c.to_dict() for c in self.suggested_collections],
        }


@dataclass
class APIError:
    """Structured error object carried by non-2xx responses."""
    error: str
    description: str
    details: Dict[str, Any] = field(default_factory=dict)
    code: Optional[int] = None

    @classmethod
    def from_dict(cls, decoded: Dict[str, Any]) -> Optional["APIError"]:
        """Return None when the body is not an error envelope."""
        if not isinstance(decoded, dict) or "error" not in decoded:
            return None
        return cls(
            error=decoded["error"],
            description=decoded.get("error_description", ""),
            details=decoded.get("error_details") or {},
            code=decoded.get("error_code"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error,
            "error_description": self.description,
            "error_details": self.details,
            "error_code": self.code,
        }
