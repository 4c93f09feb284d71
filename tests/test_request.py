from __future__ import annotations

import json
import logging

import pytest
import requests

from etsy_listings.services import EtsyConfig, EtsyError, EtsyRequest, InvalidJSONError, RequestError, Response


class FakeHTTPResponse:
    def __init__(self, status_code=200, body="", headers=None, url=""):
        self.status_code = status_code
        self.text = body
        self.headers = headers or {}
        self.url = url


class FakeSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


def _ok(results):
    return FakeHTTPResponse(200, json.dumps({"count": len(results), "results": results}))


def test_get_builds_url_and_params():
    session = FakeSession(_ok([{"listing_id": 1}]))
    client = EtsyRequest(EtsyConfig(api_key="KEY", base_url="https://api.test/v2/"), session=session)

    response = client.get("/listings/1", {"fields": ["title", "price"], "limit": None, "token": "t", "secret": "s"})

    assert response.result == {"listing_id": 1}
    url, kwargs = session.calls[0]
    assert url == "https://api.test/v2/listings/1"
    assert kwargs["params"] == {"fields": "title,price", "api_key": "KEY"}
    assert kwargs["auth"] is None
    assert kwargs["timeout"] == client.config.timeout_secs
    assert session.headers["User-Agent"] == client.config.user_agent


def test_token_and_secret_go_to_auth_factory():
    seen = []

    def factory(token, secret):
        seen.append((token, secret))
        return requests.auth.HTTPBasicAuth(token, secret)

    session = FakeSession(_ok([]))
    client = EtsyRequest(EtsyConfig(api_key=None, auth_factory=factory), session=session)
    client.get("/listings/1", {"token": "t", "secret": "s"})

    assert seen == [("t", "s")]
    assert isinstance(session.calls[0][1]["auth"], requests.auth.HTTPBasicAuth)
    assert "token" not in session.calls[0][1]["params"]


def test_error_status_raises_with_api_message(caplog):
    response = FakeHTTPResponse(404, "Listing not found", headers={"X-Error-Detail": "No listing with id 5"})
    client = EtsyRequest(EtsyConfig(api_key=None), session=FakeSession(response))

    with caplog.at_level(logging.WARNING):
        with pytest.raises(RequestError) as exc:
            client.get("/listings/5")

    assert exc.value.status_code == 404
    assert str(exc.value) == "No listing with id 5"
    assert "404" in caplog.text


def test_error_body_used_without_detail_header():
    client = EtsyRequest(EtsyConfig(api_key=None), session=FakeSession(FakeHTTPResponse(500, "Server exploded")))
    with pytest.raises(RequestError, match="Server exploded"):
        client.get("/listings/5")


def test_invalid_json_raises():
    client = EtsyRequest(EtsyConfig(api_key=None), session=FakeSession(FakeHTTPResponse(200, "<html>")))
    with pytest.raises(InvalidJSONError):
        client.get("/listings/5")


def test_transport_error_is_wrapped():
    error = requests.ConnectionError("boom")
    client = EtsyRequest(EtsyConfig(api_key=None), session=FakeSession(error=error))
    with pytest.raises(EtsyError) as exc:
        client.get("/listings/5")
    assert exc.value.__cause__ is error


def test_context_manager_closes_session():
    session = FakeSession()
    with EtsyRequest(EtsyConfig(api_key=None), session=session):
        pass
    assert session.closed


def test_response_result_collapses_single_record():
    single = Response(200, json.dumps({"count": 1, "results": [{"a": 1}]}))
    many = Response(200, json.dumps({"count": 2, "results": [{"a": 1}, {"a": 2}]}))
    empty = Response(200, json.dumps({"count": 0, "results": []}))
    assert single.result == {"a": 1}
    assert many.result == [{"a": 1}, {"a": 2}]
    assert empty.result == []
    assert many.count == 2


def test_response_count_falls_back_to_results():
    response = Response(200, json.dumps({"results": [{"a": 1}]}))
    assert response.count == 1
    assert response.result == {"a": 1}


def test_validate_rejects_non_object_body():
    with pytest.raises(InvalidJSONError):
        Response(200, "[1, 2]").validate()
