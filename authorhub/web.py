"""HTTP routes of the author service."""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Callable, Optional

from flask import Blueprint, Flask, Response, jsonify, request

from .domain import AuthorUsecase

TEMP_TOKEN = "secret"


@dataclass
class UsecaseContainer:
    """The application operations the routes are served from."""

    author_usecase: AuthorUsecase


def require_token(expected_token: str) -> Callable[[], Optional[tuple[Response, int]]]:
    """Return a before-request hook that rejects requests without the token.

    The hook compares the whole ``Authorization`` header with
    ``expected_token`` and answers 401 when they differ.
    """

    def check() -> Optional[tuple[Response, int]]:
        token = request.headers.get("Authorization", "")
        if not hmac.compare_digest(token.encode("utf-8"), expected_token.encode("utf-8")):
            return jsonify({"error": "Unauthorized"}), 401
        return None

    return check


def _author_blueprint(usecase: AuthorUsecase) -> Blueprint:
    blueprint = Blueprint("author", __name__, url_prefix="/author")
    blueprint.before_request(require_token(TEMP_TOKEN))

    @blueprint.get("/<author_id>")
    def get_author_with_articles(author_id: str):
        try:
            author, articles = usecase.get_author_with_articles(author_id)
        except Exception:
            return jsonify({"error": "Author not found"}), 404
        return jsonify(
            {
                "author": author.to_dict(),
                "articles": [article.to_dict() for article in articles],
            }
        )

    return blueprint


def create_app(usecases: UsecaseContainer) -> Flask:
    """Build the Flask application with every route under ``/v1``."""
    app = Flask(__name__)
    v1 = Blueprint("v1", __name__, url_prefix="/v1")

    @v1.get("/ping")
    def ping():
        return jsonify({"message": "pong", "status": "ok"})

    v1.register_blueprint(_author_blueprint(usecases.author_usecase))
    app.register_blueprint(v1)
    return app