import logging
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict

from simple_books.core.errors import ApiAssertionError, SessionBootstrapError
from simple_books.schemas.auth import AccessToken, ClientRegistration
from simple_books.services.books_api import BooksApiClient
from simple_books.services.expect import expect_model

logger = logging.getLogger(__name__)


def new_client_identity() -> ClientRegistration:
    # 이름과 이메일 모두 하나의 UUID 에서 파생 (8자리 / 4자리)
    raw = str(uuid.uuid4())
    return ClientRegistration(
        client_name=f"client_{raw[:8]}",
        client_email=f"email_{raw[9:13]}@example.com",
    )


class TestContext(BaseModel):
    """Per-test state threaded between steps.

    Frozen: a step that learns something new returns a fresh context via
    one of the ``with_*`` helpers and leaves the previous value untouched.
    """

    __test__ = False  # not a pytest class

    token: Optional[str] = None
    body: Optional[str] = None
    book_id: Optional[int] = None
    order_id: Optional[str] = None
    model_config = ConfigDict(frozen=True)

    def with_body(self, payload: BaseModel) -> "TestContext":
        return self.model_copy(update={"body": payload.model_dump_json(by_alias=True, exclude_none=True)})

    def with_book(self, book_id: int) -> "TestContext":
        return self.model_copy(update={"book_id": book_id})

    def with_order(self, order_id: str) -> "TestContext":
        return self.model_copy(update={"order_id": order_id})

    def without_token(self) -> "TestContext":
        return self.model_copy(update={"token": None})


def issue_token(api: BooksApiClient, identity: Optional[ClientRegistration] = None) -> str:
    identity = identity or new_client_identity()
    r = api.register_client(identity)
    if r.status_code != 201:
        raise SessionBootstrapError(r)
    try:
        token = expect_model(r, AccessToken).access_token
    except ApiAssertionError:
        raise SessionBootstrapError(r)
    logger.info("issued token for %s", identity.client_name)
    return token


def bootstrap(api: BooksApiClient, identity: Optional[ClientRegistration] = None) -> TestContext:
    identity = identity or new_client_identity()
    token = issue_token(api, identity)
    return TestContext(token=f"Bearer {token}").with_body(identity)
