"""Per-paginator mutable state."""

import copy
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from ..schemas.responses import PageMetadata
from .bounds import BoundedValue, Limit

O = TypeVar("O")
L = TypeVar("L")


@dataclass
class PaginatorState(Generic[O, L]):
    """
    Everything a paginator remembers between calls.

    The wrap flags are sticky: navigation only ever sets them to True.
    metadata is only updated by server-driven paginators; the daily feed
    keeps the standard value.
    """
    offset: BoundedValue[O]
    limit: Limit[L]
    wrapped_forward: bool = False
    wrapped_backward: bool = False
    metadata: PageMetadata = field(default_factory=PageMetadata.standard)
    pages_fetched: int = 0

    @property
    def active(self) -> bool:
        return self.pages_fetched > 0

    def clone(self) -> "PaginatorState[O, L]":
        """Independent copy used to stage a transition before committing it."""
        return PaginatorState(
            offset=copy.copy(self.offset),
            limit=copy.copy(self.limit),
            wrapped_forward=self.wrapped_forward,
            wrapped_backward=self.wrapped_backward,
            metadata=copy.copy(self.metadata),
            pages_fetched=self.pages_fetched,
        )

    def commit(self, staged: "PaginatorState[O, L]") -> None:
        """
        Adopt a staged transition.

        Values are written into the existing offset and limit objects, so a
        BoundedValue handed to a paginator keeps tracking its position.
        """
        self.offset.set(staged.offset.value)
        self.limit.set(staged.limit.value)
        self.wrapped_forward = staged.wrapped_forward
        self.wrapped_backward = staged.wrapped_backward
        self.metadata = staged.metadata
        self.pages_fetched = staged.pages_fetched
