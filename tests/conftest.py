import pytest

from simple_books.services.books_api import BooksApiClient
from simple_books.services.session import bootstrap
from simple_books.stub.local import local_client


@pytest.fixture
def api():
    # fresh stub app and in-memory DB per test
    with BooksApiClient(http=local_client(), log_bodies=True) as client:
        yield client


@pytest.fixture
def ctx(api):
    return bootstrap(api)
