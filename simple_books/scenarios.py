"""End-to-end scenarios against the Simple Books API.

Each scenario takes a client and a freshly bootstrapped context, walks a
linear request -> assert -> extract sequence and returns the final context.
The first unmet expectation raises ``ApiAssertionError`` and ends it.
"""
import logging
import uuid
from typing import Callable, Dict, Iterable, List, Optional

from pydantic import BaseModel

from simple_books.core.errors import ApiAssertionError, SessionBootstrapError
from simple_books.schemas.book import BookType
from simple_books.schemas.order import OrderCreated, OrderCreateRequest, OrderResponse, OrderUpdateRequest
from simple_books.services.books_api import BooksApiClient
from simple_books.services.expect import (
    ALL_BOOKS_SCHEMA,
    SPECIFIC_BOOK_SCHEMA,
    expect_field,
    expect_model,
    expect_model_list,
    expect_schema,
    expect_status,
)
from simple_books.services.session import TestContext, bootstrap, new_client_identity

logger = logging.getLogger(__name__)

UPDATED_CUSTOMER_NAME = "Sanaa"
SPECIFIC_BOOK_ID = 1
MISSING_BOOK_ID = 9999

Scenario = Callable[[BooksApiClient, TestContext], TestContext]


def random_customer_name() -> str:
    return "cust" + str(uuid.uuid4())[:6]


def first_book_id(api: BooksApiClient) -> int:
    books = expect_schema(expect_status(api.list_books(), 200), ALL_BOOKS_SCHEMA)
    if not books:
        raise ApiAssertionError("book listing is empty")
    return books[0]["id"]


def place_order(api: BooksApiClient, ctx: TestContext) -> TestContext:
    """Create an order for the first listed book; the new id lands on the context."""
    ctx = ctx.with_book(first_book_id(api))
    order = OrderCreateRequest(book_id=ctx.book_id, customer_name=random_customer_name())
    ctx = ctx.with_body(order)
    r = expect_status(api.create_order(order, ctx.token), 201)
    created = expect_model(r, OrderCreated)
    return ctx.with_order(created.order_id)


def check_status(api: BooksApiClient, ctx: TestContext) -> TestContext:
    expect_field(expect_status(api.status(), 200), "status", "OK")
    return ctx


def validate_all_books_schema(api: BooksApiClient, ctx: TestContext) -> TestContext:
    expect_schema(expect_status(api.list_books(), 200), ALL_BOOKS_SCHEMA)
    return ctx


def validate_specific_book_schema(api: BooksApiClient, ctx: TestContext) -> TestContext:
    ctx = ctx.with_book(SPECIFIC_BOOK_ID)
    expect_schema(expect_status(api.get_book(ctx.book_id), 200), SPECIFIC_BOOK_SCHEMA)
    return ctx


def validate_filtered_books(api: BooksApiClient, ctx: TestContext) -> TestContext:
    limit = 2
    books = expect_schema(expect_status(api.list_books(BookType.FICTION, limit), 200), ALL_BOOKS_SCHEMA)
    if len(books) > limit:
        raise ApiAssertionError(f"expected at most {limit} books, got {len(books)}")
    wrong = [b["id"] for b in books if b["type"] != BookType.FICTION.value]
    if wrong:
        raise ApiAssertionError(f"non-fiction books in fiction listing: {wrong}")
    expect_status(api.list_books("poetry"), 400)
    expect_status(api.list_books(limit=0), 400)
    expect_status(api.list_books(limit=21), 400)
    return ctx


def validate_missing_book(api: BooksApiClient, ctx: TestContext) -> TestContext:
    ctx = ctx.with_book(MISSING_BOOK_ID)
    expect_status(api.get_book(ctx.book_id), 404)
    return ctx


def validate_placing_new_order(api: BooksApiClient, ctx: TestContext) -> TestContext:
    ctx = place_order(api, ctx)
    expect_status(api.get_order(ctx.order_id, ctx.token), 200)
    return ctx


def validate_listing_orders(api: BooksApiClient, ctx: TestContext) -> TestContext:
    ctx = place_order(api, ctx)
    orders = expect_model_list(expect_status(api.list_orders(ctx.token), 200), OrderResponse)
    if ctx.order_id not in [o.id for o in orders]:
        raise ApiAssertionError(f"order {ctx.order_id} missing from order listing")
    return ctx


def validate_deleting_order(api: BooksApiClient, ctx: TestContext) -> TestContext:
    ctx = place_order(api, ctx)
    expect_status(api.get_order(ctx.order_id, ctx.token), 200)
    expect_status(api.delete_order(ctx.order_id, ctx.token), 204)
    expect_status(api.get_order(ctx.order_id, ctx.token), 404)
    return ctx


def validate_order_without_body(api: BooksApiClient, ctx: TestContext) -> TestContext:
    expect_status(api.create_order(None, ctx.token), 400)
    return ctx


def validate_order_without_token(api: BooksApiClient, ctx: TestContext) -> TestContext:
    ctx = ctx.with_book(first_book_id(api))
    order = OrderCreateRequest(book_id=ctx.book_id, customer_name=random_customer_name())
    ctx = ctx.with_body(order).without_token()
    expect_status(api.create_order(order, ctx.token), 401)
    return ctx


def validate_updating_order(api: BooksApiClient, ctx: TestContext) -> TestContext:
    ctx = place_order(api, ctx)
    update = OrderUpdateRequest(customer_name=UPDATED_CUSTOMER_NAME)
    ctx = ctx.with_body(update)
    expect_status(api.update_order(ctx.order_id, update, ctx.token), 204)
    r = expect_status(api.get_order(ctx.order_id, ctx.token), 200)
    expect_field(r, "customerName", UPDATED_CUSTOMER_NAME)
    return ctx


def validate_duplicate_client(api: BooksApiClient, ctx: TestContext) -> TestContext:
    identity = new_client_identity()
    expect_status(api.register_client(identity), 201)
    expect_status(api.register_client(identity), 409)
    return ctx.with_body(identity)


SCENARIOS: Dict[str, Scenario] = {
    "status": check_status,
    "all_books_schema": validate_all_books_schema,
    "specific_book_schema": validate_specific_book_schema,
    "filtered_books": validate_filtered_books,
    "missing_book": validate_missing_book,
    "place_order": validate_placing_new_order,
    "list_orders": validate_listing_orders,
    "delete_order": validate_deleting_order,
    "order_without_body": validate_order_without_body,
    "order_without_token": validate_order_without_token,
    "update_order": validate_updating_order,
    "duplicate_client": validate_duplicate_client,
}


class ScenarioResult(BaseModel):
    name: str
    passed: bool
    message: str = ""


def run_scenario(api: BooksApiClient, name: str) -> ScenarioResult:
    scenario = SCENARIOS[name]
    try:
        scenario(api, bootstrap(api))
    except SessionBootstrapError as exc:
        logger.error("scenario %s: setup failed: %s", name, exc)
        return ScenarioResult(name=name, passed=False, message=f"setup failed: {exc}")
    except AssertionError as exc:
        logger.error("scenario %s failed: %s", name, exc)
        return ScenarioResult(name=name, passed=False, message=str(exc))
    logger.info("scenario %s passed", name)
    return ScenarioResult(name=name, passed=True)


def run_scenarios(api: BooksApiClient, names: Optional[Iterable[str]] = None) -> List[ScenarioResult]:
    selected = list(SCENARIOS) if names is None else list(names)
    unknown = [n for n in selected if n not in SCENARIOS]
    if unknown:
        raise ValueError(f"unknown scenario(s): {', '.join(unknown)}")
    # catalogue order regardless of how names were given
    selected = [n for n in SCENARIOS if n in selected]
    return [run_scenario(api, name) for name in selected]
