import httpx
import pytest

from simple_books import scenarios
from simple_books.core.errors import ApiAssertionError
from simple_books.scenarios import SCENARIOS, run_scenarios
from simple_books.services.books_api import BooksApiClient


def test_all_scenarios_pass_against_stub(api):
    results = run_scenarios(api)
    assert [r.name for r in results] == list(SCENARIOS)
    failed = [(r.name, r.message) for r in results if not r.passed]
    assert failed == []


def test_selection_runs_in_catalogue_order(api):
    results = run_scenarios(api, ["update_order", "status"])
    assert [r.name for r in results] == ["status", "update_order"]


def test_unknown_scenario_rejected(api):
    with pytest.raises(ValueError):
        run_scenarios(api, ["status", "nope"])


def test_failure_is_recorded_and_run_continues(api, monkeypatch):
    def broken(api, ctx):
        raise ApiAssertionError("expected status 200, got 500")

    monkeypatch.setitem(scenarios.SCENARIOS, "status", broken)
    results = run_scenarios(api, ["status", "all_books_schema"])
    assert [(r.name, r.passed) for r in results] == [("status", False), ("all_books_schema", True)]
    assert "got 500" in results[0].message


def test_setup_failure_is_recorded(api, monkeypatch):
    def refuse(registration):
        return api.request("GET", "/books/9999")

    monkeypatch.setattr(api, "register_client", refuse)
    [result] = run_scenarios(api, ["status"])
    assert not result.passed
    assert result.message.startswith("setup failed")


def _malformed_api() -> BooksApiClient:
    # registration works; every other 200 carries a body of the wrong shape
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/api-clients/":
            return httpx.Response(201, json={"accessToken": "t"})
        if path == "/orders" and request.method == "POST":
            return httpx.Response(201, json={"created": True, "orderId": "o1"})
        if path == "/books":
            return httpx.Response(200, json=[{"title": "no id"}])
        if path == "/orders":
            return httpx.Response(200, json=[{"unexpected": True}])
        return httpx.Response(200, json={"status": "OK"})

    http = httpx.Client(base_url="http://books.test", transport=httpx.MockTransport(handler))
    return BooksApiClient(http=http)


def test_malformed_bodies_fail_scenarios_without_stopping_run():
    with _malformed_api() as api:
        results = run_scenarios(api, ["status", "place_order", "list_orders", "order_without_token"])

    outcome = {r.name: r.passed for r in results}
    assert outcome == {"status": True, "place_order": False, "list_orders": False, "order_without_token": False}
    # the book listing is schema-checked before its first id is read
    assert all("all_books.json" in r.message for r in results if not r.passed)


def test_malformed_order_listing_is_an_assertion_failure(monkeypatch):
    with _malformed_api() as api:
        monkeypatch.setattr(scenarios, "first_book_id", lambda api: 1)
        [result] = run_scenarios(api, ["list_orders"])
    assert not result.passed
    assert "list of OrderResponse" in result.message


def test_results_are_models(api):
    [result] = run_scenarios(api, ["status"])
    assert result.model_dump() == {"name": "status", "passed": True, "message": ""}
