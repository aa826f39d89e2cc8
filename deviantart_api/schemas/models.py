"""
Domain Records - DeviantArt browse data structures

Plain dataclass projections of the JSON objects returned by the browse
endpoints. Each record has a from_dict() constructor that reads the API field
names and a to_dict() that writes them back out in snake_case.

Missing required fields surface as KeyError; the request layer turns those into
ResponseDecodeError.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# ============================================================================
# USERS & IMAGES
# ============================================================================

@dataclass
class User:
    """A DeviantArt account as embedded in deviations and collections."""
    user_id: str
    username: str
    user_icon: str

    @classmethod
    def from_dict(cls, decoded: Dict[str, Any]) -> "User":
        return cls(
            user_id=decoded["userid"],
            username=decoded["username"],
            user_icon=decoded["usericon"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "user_icon": self.user_icon,
        }


@dataclass
class Image:
    """A rendition of a deviation (preview or thumbnail)."""
    src: str
    width: int
    height: int
    transparency: bool

    @classmethod
    def from_dict(cls, decoded: Dict[str, Any]) -> "Image":
        return cls(
            src=decoded["src"],
            width=decoded["width"],
            height=decoded["height"],
            transparency=decoded["transparency"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "src": self.src,
            "width": self.width,
            "height": self.height,
            "transparency": self.transparency,
        }


@dataclass
class FullSizeImage(Image):
    """The original upload; carries the file size in bytes."""
    file_size: int = 0

    @classmethod
    def from_dict(cls, decoded: Dict[str, Any]) -> "FullSizeImage":
        return cls(
            src=decoded["src"],
            width=decoded["width"],
            height=decoded["height"],
            transparency=decoded["transparency"],
            file_size=decoded["filesize"],
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["file_size"] = self.file_size
        return data


# ============================================================================
# DEVIATIONS & TOPICS
# ============================================================================

@dataclass
class Deviation:
    """A single piece of artwork (a "deviation")."""
    id: str
    is_deleted: bool
    is_published: bool
    title: str
    category: str
    author: User
    preview: Optional[Image] = None
    content: Optional[FullSizeImage] = None
    thumbs: List[Image] = field(default_factory=list)

    @classmethod
    def from_dict(cls, decoded: Dict[str, Any]) -> "Deviation":
        preview = decoded.get("preview")
        content = decoded.get("content")
        return cls(
            id=decoded["deviationid"],
            is_deleted=decoded["is_deleted"],
            is_published=decoded["is_published"],
            title=decoded["title"],
            category=decoded["category"],
            author=User.from_dict(decoded["author"]),
            preview=Image.from_dict(preview) if preview else None,
            content=FullSizeImage.from_dict(content) if content else None,
            thumbs=[Image.from_dict(t) for t in decoded["thumbs"]],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "is_deleted": self.is_deleted,
            "is_published": self.is_published,
            "title": self.title,
            "category": self.category,
            "author": self.author.to_dict(),
            "preview": self.preview.to_dict() if self.preview else None,
            "content": self.content.to_dict() if self.content else None,
            "thumbs": [t.to_dict() for t in self.thumbs],
        }


@dataclass
class Topic:
    """A curated browse topic with a handful of example deviations."""
    name: str
    canonical_name: str
    examples: List[Deviation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, decoded: Dict[str, Any]) -> "Topic":
        return cls(
            name=decoded["name"],
            canonical_name=decoded["canonical_name"],
            examples=[
                Deviation.from_dict(item)
                for item in decoded.get("example_deviations", [])
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "canonical_name": self.canonical_name,
            "examples": [d.to_dict() for d in self.examples],
        }


# ============================================================================
# COLLECTIONS
# ============================================================================

@dataclass
class Collection:
    folder_id: int
    name: str
    owner: User

    @classmethod
    def from_dict(cls, decoded: Dict[str, Any]) -> "Collection":
        return cls(
            folder_id=decoded["folderid"],
            name=decoded["name"],
            owner=User.from_dict(decoded["owner"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "folder_id": self.folder_id,
            "name": self.name,
            "owner": self.owner.to_dict(),
        }


@dataclass
class SuggestedCollection:
    collection: Collection
    deviations: List[Deviation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, decoded: Dict[str, Any]) -> "SuggestedCollection":
        return cls(
            collection=Collection.from_dict(decoded["collection"]),
            deviations=[Deviation.from_dict(d) for d in decoded["deviations"]],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "collection": self.collection.to_dict(),
            "deviations": [d.to_dict() for d in self.deviations],
        }
