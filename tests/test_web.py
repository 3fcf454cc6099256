from datetime import datetime, timezone

import pytest
from flask import Flask

from authorhub.domain import Article, Author, NotFoundError
from authorhub.web import TEMP_TOKEN, UsecaseContainer, create_app, require_token


class FakeUsecase:
    def __init__(self, author=None, articles=None, error=None):
        self.author = author
        self.articles = articles or []
        self.error = error
        self.calls = []

    def get_author_with_articles(self, author_id):
        self.calls.append(author_id)
        if self.error is not None:
            raise self.error
        return self.author, self.articles


@pytest.fixture
def author():
    return Author(
        id="a1",
        email="writer@example.com",
        name="Writer",
        created_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )


def make_client(usecase):
    return create_app(UsecaseContainer(author_usecase=usecase)).test_client()


def test_ping_answers_pong_without_token():
    response = make_client(FakeUsecase()).get("/v1/ping")
    assert response.status_code == 200
    assert response.get_json() == {"message": "pong", "status": "ok"}


def test_author_requires_token(author):
    usecase = FakeUsecase(author=author)
    response = make_client(usecase).get("/v1/author/a1")
    assert response.status_code == 401
    assert response.get_json() == {"error": "Unauthorized"}
    assert usecase.calls == []


def test_author_rejects_wrong_token(author):
    usecase = FakeUsecase(author=author)
    response = make_client(usecase).get(
        "/v1/author/a1", headers={"Authorization": "token"}
    )
    assert response.status_code == 401
    assert usecase.calls == []


def test_author_with_articles_returned(author):
    articles = [Article(id=7, title="Title", content="Body", author_id="a1")]
    usecase = FakeUsecase(author=author, articles=articles)
    response = make_client(usecase).get(
        "/v1/author/a1", headers={"Authorization": TEMP_TOKEN}
    )
    assert response.status_code == 200
    body = response.get_json()
    assert body["author"] == author.to_dict()
    assert body["articles"] == [a.to_dict() for a in articles]
    assert usecase.calls == ["a1"]


def test_author_without_articles_gives_empty_list(author):
    usecase = FakeUsecase(author=author)
    response = make_client(usecase).get(
        "/v1/author/a1", headers={"Authorization": TEMP_TOKEN}
    )
    assert response.get_json()["articles"] == []


def test_missing_author_is_404():
    usecase = FakeUsecase(error=NotFoundError("a9"))
    response = make_client(usecase).get(
        "/v1/author/a9", headers={"Authorization": TEMP_TOKEN}
    )
    assert response.status_code == 404
    assert response.get_json() == {"error": "Author not found"}
    assert usecase.calls == ["a9"]


def test_any_usecase_failure_is_404():
    usecase = FakeUsecase(error=RuntimeError("boom"))
    response = make_client(usecase).get(
        "/v1/author/a1", headers={"Authorization": TEMP_TOKEN}
    )
    assert response.status_code == 404


def test_require_token_hook_directly():
    app = Flask(__name__)
    hook = require_token("token")
    with app.test_request_context(headers={"Authorization": "token"}):
        assert hook() is None
    with app.test_request_context():
        response, status = hook()
        assert status == 401
        assert response.get_json() == {"error": "Unauthorized"}