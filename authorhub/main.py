"""Command that starts the author service."""

from __future__ import annotations

import argparse
import logging
from typing import Any, Optional, Sequence

from .config import Config, load
from .database import DatabaseError, Options, open_database
from .repository import MySQLArticleRepository, MySQLAuthorRepository
from .usecase import AuthorService
from .web import UsecaseContainer, create_app

logger = logging.getLogger(__name__)


def connection_settings(config: Config) -> dict[str, Any]:
    """Return the keyword arguments for connecting to the configured database."""
    db = config.database
    return {
        "host": db.host,
        "port": db.port,
        "user": db.user,
        "password": db.password,
        "database": db.name,
        "charset": "utf8mb4",
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load the configuration, open the database and serve HTTP."""
    parser = argparse.ArgumentParser(
        prog="authorhub", description="Serve authors and their articles over HTTP."
    )
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    cfg = load()
    try:
        db = open_database(
            cfg.database.type,
            connection_settings(cfg),
            Options(
                max_open_conns=cfg.database.max_open_conns,
                max_idle_conns=cfg.database.max_idle_conns,
            ),
        )
    except DatabaseError as exc:
        logger.error("%s", exc)
        return 1

    with db:
        author_repo = MySQLAuthorRepository(db)
        article_repo = MySQLArticleRepository(db)
        usecases = UsecaseContainer(
            author_usecase=AuthorService(author_repo, article_repo)
        )
        app = create_app(usecases)
        try:
            app.run(host="0.0.0.0", port=cfg.server.port)
        except OSError as exc:
            logger.error("%s", exc)
            return 1
    return 0