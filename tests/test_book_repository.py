from datetime import datetime, timezone

import pytest

from library_api.app.core.db import init_db
from library_api.app.core.exceptions import BookNotFoundError, DuplicateIsbnError
from library_api.app.models.book import Book


NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_book(**overrides):
    data = {
        "title": "SQL in Action",
        "author": "Craig Walls",
        "isbn": "9781617298546",
        "publication_year": 2021,
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return Book(**data)


def test_init_db_is_idempotent(db_path):
    assert init_db(db_path) == 3
    assert init_db(db_path) == 3


def test_save_inserts_and_assigns_id(repository):
    stored = repository.save(make_book())
    assert stored.id is not None
    assert stored.available is True
    assert stored.created_at == NOW
    assert stored.updated_at == NOW
    assert repository.find_by_id(stored.id) == stored


def test_find_by_id_returns_none_for_unknown_id(repository):
    assert repository.find_by_id(12345) is None


def test_exists_by_isbn(repository):
    repository.save(make_book())
    assert repository.exists_by_isbn("9781617298546") is True
    assert repository.exists_by_isbn("0000000000000") is False


def test_unique_constraint_rejects_duplicate_isbn(repository):
    repository.save(make_book())
    with pytest.raises(DuplicateIsbnError):
        repository.save(make_book(title="Another"))
    assert len(repository.find_all()) == 1


def test_find_by_author_ignores_case_but_not_substrings(repository):
    repository.save(make_book())
    repository.save(make_book(isbn="9781617294945", author="Someone Else"))

    found = repository.find_by_author_ignore_case("CRAIG WALLS")
    assert [book.author for book in found] == ["Craig Walls"]
    assert repository.find_by_author_ignore_case("Walls") == []


def test_find_by_available(repository):
    first = repository.save(make_book())
    repository.save(make_book(isbn="9781617294945", available=False))

    assert [book.id for book in repository.find_by_available(True)] == [first.id]
    assert len(repository.find_by_available(False)) == 1


def test_save_with_id_updates_row(repository):
    stored = repository.save(make_book())
    stored.title = "Spring in Action"
    stored.updated_at = datetime(2024, 6, 1, tzinfo=timezone.utc)

    updated = repository.save(stored)

    assert updated.id == stored.id
    assert updated.title == "Spring in Action"
    assert updated.created_at == NOW
    assert updated.updated_at == datetime(2024, 6, 1, tzinfo=timezone.utc)


def test_save_with_unknown_id_raises(repository):
    with pytest.raises(BookNotFoundError):
        repository.save(make_book(id=999))


def test_delete_by_id(repository):
    stored = repository.save(make_book())
    assert repository.delete_by_id(stored.id) is True
    assert repository.find_by_id(stored.id) is None
    assert repository.delete_by_id(stored.id) is False


@pytest.mark.parametrize(
    "stored, query",
    [
        ("Émile Zola", "ÉMILE ZOLA"),
        ("Фёдор Достоевский", "фёдор достоевский"),
        ("Ölz", "ölz"),
    ],
)
def test_find_by_author_folds_non_ascii_case(repository, stored, query):
    repository.save(make_book(author=stored))
    assert [book.author for book in repository.find_by_author_ignore_case(query)] == [stored]


def test_ids_beyond_sqlite_integer_range_are_absent(repository):
    huge = 2 ** 63
    assert repository.find_by_id(huge) is None
    assert repository.delete_by_id(huge) is False
    with pytest.raises(BookNotFoundError):
        repository.save(make_book(id=huge))
