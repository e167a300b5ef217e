import json

import pytest
import requests

from services.backend_client import BackendClient, parse_content_range, unwrap_envelope
from utils.exceptions import GatewayError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, headers=None):
        self.status_code = status_code
        self._payload = payload
        self.content = b"" if payload is None else json.dumps(payload).encode()
        self.headers = headers or {}

    def json(self):
        return json.loads(self.content)


@pytest.fixture
def sent(monkeypatch):
    """Capture outgoing requests; tests push responses onto ``sent.replies``."""

    class Recorder(list):
        replies = []

    recorder = Recorder()

    def fake_request(method, url, **kwargs):
        recorder.append((method, url, kwargs))
        reply = recorder.replies.pop(0) if recorder.replies else FakeResponse()
        if isinstance(reply, Exception):
            raise reply
        return reply

    monkeypatch.setattr(requests, "request", fake_request)
    return recorder


def _client():
    return BackendClient("https://example.test/", "anon-key", timeout=5)


def test_rpc_posts_params_with_auth_headers(sent):
    sent.replies = [FakeResponse(payload=12)]

    assert _client().rpc("get_active_customer_count", {"a": 1}) == 12

    method, url, kwargs = sent[0]
    assert method == "POST"
    assert url == "https://example.test/rest/v1/rpc/get_active_customer_count"
    assert kwargs["json"] == {"a": 1}
    assert kwargs["headers"]["apikey"] == "anon-key"
    assert kwargs["headers"]["Authorization"] == "Bearer anon-key"
    assert kwargs["timeout"] == 5


def test_network_failure_becomes_gateway_error(sent):
    sent.replies = [requests.ConnectionError("down")]

    with pytest.raises(GatewayError) as excinfo:
        _client().rpc("anything")
    assert excinfo.value.code == "NETWORK_ERROR"


def test_http_error_carries_backend_code(sent):
    sent.replies = [FakeResponse(400, {"code": "22P02", "message": "invalid input"})]

    with pytest.raises(GatewayError) as excinfo:
        _client().select("customers")
    assert excinfo.value.code == "22P02"
    assert excinfo.value.message == "invalid input"
    assert excinfo.value.status == 400


def test_http_error_without_body_uses_status_code(sent):
    sent.replies = [FakeResponse(503)]

    with pytest.raises(GatewayError) as excinfo:
        _client().rpc("anything")
    assert excinfo.value.code == "HTTP_503"


def test_select_page_builds_filters_and_reads_total(sent):
    sent.replies = [FakeResponse(payload=[{"id": 1}], headers={"Content-Range": "10-10/11"})]

    rows, total = _client().select_page(
        "customers", match={"id": 1}, order=[("nama", "asc")], limit=10, offset=10
    )

    assert rows == [{"id": 1}]
    assert total == 11
    _method, _url, kwargs = sent[0]
    assert kwargs["params"] == {"select": "*", "id": "eq.1", "order": "nama.asc", "limit": 10, "offset": 10}
    assert kwargs["headers"]["Prefer"] == "count=exact"


def test_select_one_returns_none_when_empty(sent):
    sent.replies = [FakeResponse(payload=[])]

    assert _client().select_one("settings", match={"key": "timezone"}) is None


def test_insert_returns_stored_row(sent):
    sent.replies = [FakeResponse(201, [{"id": 5, "nama": "Budi"}])]

    assert _client().insert("customers", {"nama": "Budi"}) == {"id": 5, "nama": "Budi"}
    _method, _url, kwargs = sent[0]
    assert kwargs["json"] == [{"nama": "Budi"}]
    assert kwargs["headers"]["Prefer"] == "return=representation"


def test_insert_without_row_is_an_error(sent):
    sent.replies = [FakeResponse(201, [])]

    with pytest.raises(GatewayError) as excinfo:
        _client().insert("customers", {"nama": "Budi"})
    assert excinfo.value.code == "EMPTY_RESPONSE"


def test_update_and_delete_require_match(sent):
    client = _client()
    with pytest.raises(ValueError):
        client.update("customers", {"nama": "x"}, match={})
    with pytest.raises(ValueError):
        client.delete("customers", match={})
    assert list(sent) == []


def test_delete_sends_eq_filter(sent):
    sent.replies = [FakeResponse(204)]

    _client().delete("customers", match={"id": 9})

    method, url, kwargs = sent[0]
    assert method == "DELETE"
    assert url.endswith("/rest/v1/customers")
    assert kwargs["params"] == {"id": "eq.9"}


def test_unwrap_envelope():
    assert unwrap_envelope({"success": True, "data": [1]}) == [1]
    assert unwrap_envelope([1, 2]) == [1, 2]
    with pytest.raises(GatewayError) as excinfo:
        unwrap_envelope({"success": False, "error": {"code": "X", "message": "nope"}})
    assert excinfo.value.code == "X"


def test_parse_content_range():
    assert parse_content_range("0-9/42") == 42
    assert parse_content_range("*/0") == 0
    assert parse_content_range("0-9/*") is None
    assert parse_content_range(None) is None
