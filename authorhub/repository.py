"""MySQL-backed repositories for authors and articles."""

from __future__ import annotations

from collections import defaultdict
from contextlib import closing
from dataclasses import replace
from typing import Any, Sequence

from .database import Database
from .domain import Article, Author, NotFoundError

_SELECT_AUTHOR = "SELECT id, email, name, created_at, updated_at FROM author WHERE id=%s"
_INSERT_AUTHOR = (
    "INSERT INTO author (id, email, name, created_at, updated_at) "
    "VALUES (%s, %s, %s, %s, %s)"
)
_DELETE_AUTHOR = "DELETE FROM author WHERE id = %s"


class MySQLAuthorRepository:
    """Authors stored in the ``author`` table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def _execute(self, query: str, params: Sequence[Any]) -> None:
        with self._db.connection() as conn:
            with closing(conn.cursor()) as cursor:
                cursor.execute(query, tuple(params))
            conn.commit()

    def get_by_id(self, author_id: str) -> Author:
        """Return the author with this id; raise NotFoundError if absent."""
        with self._db.connection() as conn:
            with closing(conn.cursor()) as cursor:
                cursor.execute(_SELECT_AUTHOR, (author_id,))
                row = cursor.fetchone()
        if row is None:
            raise NotFoundError(f"author {author_id!r} not found")
        author_key, email, name, created_at, updated_at = row
        return Author(
            id=author_key,
            email=email,
            name=name,
            created_at=created_at,
            updated_at=updated_at,
        )

    def store(self, author: Author) -> None:
        """Insert a new author row."""
        self._execute(
            _INSERT_AUTHOR,
            (author.id, author.email, author.name, author.created_at, author.updated_at),
        )

    def delete(self, author_id: str) -> None:
        """Delete the author row with this id."""
        self._execute(_DELETE_AUTHOR, (author_id,))


class MySQLArticleRepository:
    """Articles kept beside the MySQL store; no article table exists yet."""

    def __init__(self, db: Database) -> None:
        self._db = db
        self._by_author: defaultdict[str, list[Article]] = defaultdict(list)

    def get_by_author_id(self, author_id: str) -> list[Article]:
        """Return copies of the articles stored for this author, oldest first."""
        return [replace(article) for article in self._by_author.get(author_id, ())]

    def store(self, article: Article) -> None:
        """Keep a copy of the article under its author."""
        self._by_author[article.author_id].append(replace(article))