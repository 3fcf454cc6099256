"""Domain entities and the interfaces the application layers depend on."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol, runtime_checkable

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _format_time(value: datetime) -> str:
    """Format a timestamp as RFC 3339 with trimmed fractional seconds."""
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += f".{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset()
    if offset is None:
        return text
    if offset == timedelta(0):
        return text + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


class NotFoundError(LookupError):
    """The requested entity does not exist."""


@dataclass
class Article:
    """An article written by an author."""

    id: int = 0
    title: str = ""
    content: str = ""
    author_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation."""
        return {
            "ID": self.id,
            "Title": self.title,
            "Content": self.content,
            "AuthorID": self.author_id,
        }


@dataclass
class Author:
    """A registered author."""

    id: str = ""
    email: str = ""
    name: str = ""
    created_at: datetime = field(default=_ZERO_TIME)
    updated_at: datetime = field(default=_ZERO_TIME)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation."""
        return {
            "ID": self.id,
            "Email": self.email,
            "Name": self.name,
            "CreatedAt": _format_time(self.created_at),
            "UpdatedAt": _format_time(self.updated_at),
        }


@runtime_checkable
class AuthorRepository(Protocol):
    """Storage of authors."""

    def get_by_id(self, author_id: str) -> Author:
        """Return the author; raise NotFoundError when there is none."""
        ...

    def store(self, author: Author) -> None:
        """Persist a new author."""
        ...

    def delete(self, author_id: str) -> None:
        """Remove the author with this id."""
        ...


@runtime_checkable
class ArticleRepository(Protocol):
    """Storage of articles."""

    def get_by_author_id(self, author_id: str) -> list[Article]:
        """Return every article by the author."""
        ...

    def store(self, article: Article) -> None:
        """Persist a new article."""
        ...


@runtime_checkable
class AuthorUsecase(Protocol):
    """Author-related application operations."""

    def get_author_with_articles(self, author_id: str) -> tuple[Author, list[Article]]:
        """Return the author together with their articles."""
        ...