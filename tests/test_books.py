from simple_books.schemas.book import BookType
from simple_books.scenarios import (
    validate_all_books_schema,
    validate_filtered_books,
    validate_missing_book,
    validate_specific_book_schema,
)
from simple_books.services.expect import ALL_BOOKS_SCHEMA, SPECIFIC_BOOK_SCHEMA, expect_schema


def test_all_books_match_schema(api, ctx):
    validate_all_books_schema(api, ctx)

    r = api.list_books()
    assert r.status_code == 200
    books = expect_schema(r, ALL_BOOKS_SCHEMA)
    assert [b["id"] for b in books] == [1, 2, 3, 4, 5, 6]


def test_specific_book_matches_schema(api, ctx):
    out = validate_specific_book_schema(api, ctx)
    assert out.book_id == 1
    assert ctx.book_id is None

    r = api.get_book(1)
    book = expect_schema(r, SPECIFIC_BOOK_SCHEMA)
    assert book["name"] == "The Russian"
    assert book["current-stock"] > 0
    assert book["available"] is True


def test_out_of_stock_book_is_unavailable(api):
    r = api.get_book(2)
    assert r.status_code == 200
    assert r.json()["available"] is False
    assert r.json()["current-stock"] == 0


def test_filter_by_type_and_limit(api, ctx):
    validate_filtered_books(api, ctx)

    r = api.list_books(BookType.NON_FICTION)
    assert r.status_code == 200
    assert {b["type"] for b in r.json()} == {"non-fiction"}

    r = api.list_books(limit=3)
    assert len(r.json()) == 3


def test_invalid_filters_rejected(api):
    r = api.list_books("poetry")
    assert r.status_code == 400
    assert "type" in r.json()["error"]

    for bad in (0, 21, "abc"):
        r = api.list_books(limit=bad)
        assert r.status_code == 400
        assert "limit" in r.json()["error"]


def test_missing_book_is_404(api, ctx):
    validate_missing_book(api, ctx)

    r = api.get_book(9999)
    assert r.status_code == 404
    assert r.json()["error"] == "No book with id 9999"


def test_status_ok(api):
    r = api.status()
    assert r.status_code == 200
    assert r.json() == {"status": "OK"}
