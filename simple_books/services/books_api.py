import logging
from typing import Any, Dict, Optional, Union

import httpx
from pydantic import BaseModel

from simple_books.core.config import get_settings
from simple_books.schemas.auth import ClientRegistration
from simple_books.schemas.book import BookType
from simple_books.schemas.order import OrderCreateRequest, OrderUpdateRequest

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


def dump_body(payload: Union[BaseModel, Dict[str, Any], None]) -> Optional[Dict[str, Any]]:
    """Wire representation of a request payload (camelCase aliases, unset fields dropped)."""
    if payload is None:
        return None
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True, exclude_none=True)
    return payload


class BooksApiClient:
    """Thin wrapper around one httpx.Client bound to the service base URL.

    Every call returns the raw ``httpx.Response``; deciding whether a status
    is acceptable belongs to the caller.  Passing ``http`` lets an in-process
    ``TestClient`` stand in for the network.
    """

    def __init__(self, base_url: Optional[str] = None, http: Optional[httpx.Client] = None, log_bodies: Optional[bool] = None):
        settings = get_settings()
        if http is None:
            http = httpx.Client(base_url=base_url or settings.base_url, timeout=settings.timeout)
        self.http = http
        self.http.headers.update(JSON_HEADERS)
        self.log_bodies = settings.log_bodies if log_bodies is None else log_bodies

    @property
    def base_url(self) -> str:
        return str(self.http.base_url)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "BooksApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        body: Union[BaseModel, Dict[str, Any], None] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        headers = {}
        if token:
            headers["Authorization"] = token
        json_body = dump_body(body)
        if self.log_bodies and json_body is not None:
            logger.info("-> %s %s auth=%s body=%s", method, path, bool(token), json_body)
        else:
            logger.info("-> %s %s auth=%s", method, path, bool(token))
        response = self.http.request(method, path, headers=headers, json=json_body, params=params)
        logger.debug("<- %s %s %s", method, path, response.status_code)
        return response

    # meta
    def status(self) -> httpx.Response:
        return self.request("GET", "/status")

    # api clients
    def register_client(self, registration: ClientRegistration) -> httpx.Response:
        return self.request("POST", "/api-clients/", body=registration)

    # books
    def list_books(self, book_type: Union[BookType, str, None] = None, limit: Optional[int] = None) -> httpx.Response:
        params: Dict[str, Any] = {}
        if book_type is not None:
            params["type"] = book_type.value if isinstance(book_type, BookType) else book_type
        if limit is not None:
            params["limit"] = limit
        return self.request("GET", "/books", params=params or None)

    def get_book(self, book_id: int) -> httpx.Response:
        return self.request("GET", f"/books/{book_id}")

    # orders
    def create_order(self, order: Optional[OrderCreateRequest], token: Optional[str]) -> httpx.Response:
        return self.request("POST", "/orders", token=token, body=order)

    def list_orders(self, token: Optional[str]) -> httpx.Response:
        return self.request("GET", "/orders", token=token)

    def get_order(self, order_id: str, token: Optional[str]) -> httpx.Response:
        return self.request("GET", f"/orders/{order_id}", token=token)

    def update_order(self, order_id: str, update: OrderUpdateRequest, token: Optional[str]) -> httpx.Response:
        return self.request("PATCH", f"/orders/{order_id}", token=token, body=update)

    def delete_order(self, order_id: str, token: Optional[str]) -> httpx.Response:
        return self.request("DELETE", f"/orders/{order_id}", token=token)


def get_client(base_url: Optional[str] = None, http: Optional[httpx.Client] = None) -> BooksApiClient:
    return BooksApiClient(base_url, http=http)
