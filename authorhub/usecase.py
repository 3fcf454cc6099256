"""Application operations on authors."""

from __future__ import annotations

from .domain import Article, ArticleRepository, Author, AuthorRepository


class AuthorService:
    """Combines author and article storage into author-level operations."""

    def __init__(self, author_repo: AuthorRepository, article_repo: ArticleRepository) -> None:
        self._authors = author_repo
        self._articles = article_repo

    def get_author_with_articles(self, author_id: str) -> tuple[Author, list[Article]]:
        """Return the author and their articles; lookup errors propagate."""
        author = self._authors.get_by_id(author_id)
        articles = self._articles.get_by_author_id(author.id)
        return author, articles