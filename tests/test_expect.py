import httpx
import pytest

from simple_books.core.errors import ApiAssertionError, SchemaMismatchError
from simple_books.schemas.order import OrderCreated
from simple_books.services.expect import (
    ALL_BOOKS_SCHEMA,
    SPECIFIC_BOOK_SCHEMA,
    expect_field,
    expect_model,
    expect_schema,
    expect_status,
    load_schema,
)


def make_response(status_code=200, **kwargs) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("GET", "http://books.test/books"), **kwargs)


def test_expect_status_passes_response_through():
    r = make_response(201, json={})
    assert expect_status(r, 201) is r


def test_expect_status_mismatch_describes_request():
    r = make_response(500, text="kaput")
    with pytest.raises(ApiAssertionError) as exc_info:
        expect_status(r, 200)
    msg = str(exc_info.value)
    assert "expected status 200, got 500" in msg
    assert "GET http://books.test/books" in msg
    assert "kaput" in msg
    # plain assertion failure for pytest
    assert isinstance(exc_info.value, AssertionError)


def test_schema_mismatch_reports_path():
    r = make_response(json=[{"id": 1, "name": "A", "type": "fiction", "available": True}, {"id": "2"}])
    with pytest.raises(SchemaMismatchError) as exc_info:
        expect_schema(r, ALL_BOOKS_SCHEMA)
    assert exc_info.value.path.startswith("$[1]")
    assert exc_info.value.schema_name == ALL_BOOKS_SCHEMA


def test_schema_rejects_wrong_shape():
    with pytest.raises(SchemaMismatchError):
        expect_schema(make_response(json=[]), SPECIFIC_BOOK_SCHEMA)


def test_non_json_body():
    with pytest.raises(ApiAssertionError):
        expect_schema(make_response(text="<html>"), ALL_BOOKS_SCHEMA)


def test_expect_field():
    r = make_response(json={"customerName": "Sanaa"})
    assert expect_field(r, "customerName", "Sanaa") == "Sanaa"
    with pytest.raises(ApiAssertionError):
        expect_field(r, "customerName", "Other")
    with pytest.raises(ApiAssertionError):
        expect_field(r, "orderId", "x")


def test_expect_model():
    created = expect_model(make_response(json={"created": True, "orderId": "abc"}), OrderCreated)
    assert created.order_id == "abc"
    with pytest.raises(ApiAssertionError):
        expect_model(make_response(json={"created": True, "orderId": ""}), OrderCreated)


def test_bundled_schemas_load():
    assert load_schema(ALL_BOOKS_SCHEMA)["type"] == "array"
    assert "current-stock" in load_schema(SPECIFIC_BOOK_SCHEMA)["required"]
