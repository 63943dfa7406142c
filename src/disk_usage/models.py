"""Data models for resources, notes, notebooks and derived aggregates."""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .constants import DEFAULT_NOTE_TITLE, DEFAULT_RESOURCE_TITLE

T = TypeVar("T")


@dataclass(frozen=True)
class Resource:
    """A binary attachment as listed by the store."""

    id: str
    size_bytes: int
    title: str = DEFAULT_RESOURCE_TITLE

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Resource":
        """Build from a raw API record, substituting defaults for empty fields."""
        return cls(
            id=data["id"],
            size_bytes=int(data.get("size") or 0),
            title=data.get("title") or DEFAULT_RESOURCE_TITLE,
        )


@dataclass(frozen=True)
class Note:
    """A note referencing a resource."""

    id: str
    notebook_id: str
    title: str = DEFAULT_NOTE_TITLE

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Note":
        return cls(
            id=data["id"],
            notebook_id=data.get("parent_id") or "",
            title=data.get("title") or DEFAULT_NOTE_TITLE,
        )


@dataclass(frozen=True)
class Notebook:
    """A folder-like container of notes."""

    id: str
    title: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Notebook":
        return cls(id=data["id"], title=data.get("title") or "")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a paginated listing."""

    items: list[T]
    has_more: bool


@dataclass(frozen=True)
class LinkEntry:
    """One (resource, referencing note) pair."""

    resource_id: str
    resource_title: str
    resource_size_bytes: int
    note_id: str
    note_title: str
    notebook_id: str

    @property
    def note_link(self) -> str:
        """Joplin internal link to the referencing note."""
        return f":/{self.note_id}"


@dataclass
class NotebookAggregate:
    """All link entries of one notebook and their summed size."""

    notebook_id: str
    notebook_title: str
    total_size_bytes: int = 0
    entries: list[LinkEntry] = field(default_factory=list)

    def add(self, entry: LinkEntry) -> None:
        """Append an entry; every note reference counts toward the total."""
        self.entries.append(entry)
        self.total_size_bytes += entry.resource_size_bytes
