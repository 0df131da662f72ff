import pytest

from library_api.app.core.exceptions import BookNotFoundError, DuplicateIsbnError

from .conftest import make_request


def test_create_sets_defaults(service, clock):
    book = service.create(make_request())

    assert book.id is not None
    assert book.available is True
    assert book.created_at == clock.now
    assert book.created_at == book.updated_at


def test_create_rejects_duplicate_isbn(service):
    service.create(make_request())
    with pytest.raises(DuplicateIsbnError):
        service.create(make_request(title="Something else"))


def test_create_race_surfaces_as_conflict(service, repository, monkeypatch):
    service.create(make_request())
    # Simulate a concurrent writer that passed the existence check.
    monkeypatch.setattr(repository, "exists_by_isbn", lambda isbn: False)

    with pytest.raises(DuplicateIsbnError):
        service.create(make_request(title="Loser of the race"))
    assert len(repository.find_all()) == 1


def test_get_by_id_missing(service):
    with pytest.raises(BookNotFoundError) as excinfo:
        service.get_by_id(42)
    assert excinfo.value.message == "Book not found with id: 42"


def test_update_replaces_fields_and_keeps_identity(service, clock):
    created = service.create(make_request())
    clock.advance(minutes=5)

    updated = service.update(
        created.id,
        make_request(
            title="Spring in Action",
            author="C. Walls",
            isbn="9781617294945",
            publication_year=2018,
        ),
    )

    assert updated.id == created.id
    assert updated.title == "Spring in Action"
    assert updated.author == "C. Walls"
    assert updated.isbn == "9781617294945"
    assert updated.publication_year == 2018
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at


def test_update_moves_updated_at_forward_even_if_clock_stands_still(service):
    created = service.create(make_request())
    first = service.update(created.id, make_request(title="Edition 2"))
    second = service.update(created.id, make_request(title="Edition 3"))

    assert created.updated_at < first.updated_at < second.updated_at


def test_update_keeps_availability(service, repository):
    created = service.create(make_request())
    created.available = False
    repository.save(created)

    updated = service.update(created.id, make_request(title="Edition 2"))

    assert updated.available is False
    assert service.list_available() == []


def test_update_with_own_isbn_succeeds(service):
    created = service.create(make_request())
    updated = service.update(created.id, make_request(title="Same ISBN"))
    assert updated.isbn == created.isbn
    assert updated.title == "Same ISBN"


def test_update_with_isbn_of_other_book_conflicts(service):
    first = service.create(make_request())
    second = service.create(make_request(isbn="9781617294945"))

    with pytest.raises(DuplicateIsbnError):
        service.update(second.id, make_request(isbn=first.isbn))
    assert service.get_by_id(second.id).isbn == "9781617294945"


def test_update_missing_book(service):
    with pytest.raises(BookNotFoundError):
        service.update(7, make_request())


def test_list_by_author_is_case_insensitive(service):
    service.create(make_request())
    service.create(make_request(isbn="9781617294945", author="Martin Fowler"))

    books = service.list_by_author("CRAIG WALLS")

    assert [book.author for book in books] == ["Craig Walls"]
    assert service.list_by_author("craig") == []


def test_list_all_and_available(service):
    service.create(make_request())
    service.create(make_request(isbn="9781617294945"))

    assert len(service.list_all()) == 2
    assert len(service.list_available()) == 2


def test_delete(service):
    created = service.create(make_request())

    assert service.delete(created.id) == "Book deleted successfully"
    with pytest.raises(BookNotFoundError):
        service.get_by_id(created.id)


def test_delete_missing_book(service):
    with pytest.raises(BookNotFoundError):
        service.delete(99)


def test_list_by_author_folds_non_ascii_case(service):
    service.create(make_request(author="Émile Zola"))

    assert len(service.list_by_author("émile zola")) == 1


def test_ids_beyond_sqlite_integer_range_are_not_found(service):
    huge = 99999999999999999999
    with pytest.raises(BookNotFoundError):
        service.get_by_id(huge)
    with pytest.raises(BookNotFoundError):
        service.update(huge, make_request())
    with pytest.raises(BookNotFoundError):
        service.delete(huge)
