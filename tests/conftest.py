from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from library_api.app.core.config import Settings
from library_api.app.core.db import init_db
from library_api.app.main import create_app
from library_api.app.repositories.book_repository import BookRepository
from library_api.app.schemas.book import BookRequest
from library_api.app.services.book_service import BookService


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def make_request(**overrides):
    data = {
        "title": "SQL in Action",
        "author": "Craig Walls",
        "isbn": "9781617298546",
        "publication_year": 2021,
    }
    data.update(overrides)
    return BookRequest(**data)


@pytest.fixture
def db_path(tmp_path, request):
    # Unique database file per test
    path = str(tmp_path / f"test_{request.node.name}.db")
    init_db(path)
    return path


@pytest.fixture
def repository(db_path):
    return BookRepository(db_path)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(repository, clock):
    return BookService(repository, clock=clock)


@pytest.fixture
def app(tmp_path):
    return create_app(Settings(database_url=str(tmp_path / "api_test.db"), api_prefix=""))


@pytest.fixture
def client(app):
    # Entering the context runs the startup hook, which creates the schema.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def book_payload():
    return {
        "title": "SQL in Action",
        "author": "Craig Walls",
        "isbn": "9781617298546",
        "publicationYear": 2021,
    }
