import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Type, TypeVar

import httpx
from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match
from pydantic import BaseModel, TypeAdapter, ValidationError

from simple_books.core.errors import ApiAssertionError, SchemaMismatchError

SCHEMA_DIR = Path(__file__).resolve().parent.parent / "schemas" / "json"

ALL_BOOKS_SCHEMA = "all_books.json"
SPECIFIC_BOOK_SCHEMA = "specific_book.json"

M = TypeVar("M", bound=BaseModel)


@lru_cache
def load_schema(name: str) -> Dict[str, Any]:
    path = SCHEMA_DIR / name
    with path.open(encoding="utf-8") as fh:
        schema = json.load(fh)
    Draft7Validator.check_schema(schema)
    return schema


def expect_status(response: httpx.Response, expected: int) -> httpx.Response:
    if response.status_code != expected:
        raise ApiAssertionError(f"expected status {expected}, got {response.status_code}", response)
    return response


def json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        raise ApiAssertionError("response body is not JSON", response)


def expect_schema(response: httpx.Response, schema_name: str) -> Any:
    """Validate the JSON body against a bundled schema and return the decoded body."""
    data = json_body(response)
    validator = Draft7Validator(load_schema(schema_name))
    error = best_match(validator.iter_errors(data))
    if error is not None:
        path = "$" + "".join(f"[{p!r}]" for p in error.absolute_path)
        raise SchemaMismatchError(schema_name, path, error.message, response)
    return data


def expect_field(response: httpx.Response, field: str, expected: Any) -> Any:
    data = json_body(response)
    if not isinstance(data, dict) or field not in data:
        raise ApiAssertionError(f"field {field!r} missing from response", response)
    if data[field] != expected:
        raise ApiAssertionError(f"expected {field}={expected!r}, got {data[field]!r}", response)
    return data[field]


def expect_model(response: httpx.Response, model: Type[M]) -> M:
    try:
        return model.model_validate(json_body(response))
    except ValidationError as exc:
        raise ApiAssertionError(f"response is not a valid {model.__name__}: {exc.errors()[0]['msg']}", response)


def expect_model_list(response: httpx.Response, model: Type[M]) -> List[M]:
    try:
        return TypeAdapter(List[model]).validate_python(json_body(response))
    except ValidationError as exc:
        raise ApiAssertionError(f"response is not a list of {model.__name__}: {exc.errors()[0]['msg']}", response)
