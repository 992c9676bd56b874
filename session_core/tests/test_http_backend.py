import httpx
import pytest

from session_core.domain.exceptions import ApiError, NetworkError, RateLimitError
from session_core.domain.models import QuickActionRequest
from session_core.providers.http_backend import HttpQuickActionBackend


class SettingsStub:
    api_base_url = "https://cases.example.com/"
    api_token = "t-123"
    http_timeout = 1.0
    default_client_id = None


def _client_returning(resp, captured=None):
    class Client:
        def __init__(self, *a, **kw):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, *a):
            return False

        async def post(self, url, json=None, headers=None, **_):
            if captured is not None:
                captured["url"] = url
                captured["payload"] = json
                captured["headers"] = headers
            return resp

    return Client


class Resp:
    def __init__(self, status_code=200, data=None, text=""):
        self.status_code = status_code
        self._data = data
        self.text = text

    def json(self):
        if self._data is None:
            raise ValueError("Expecting value")
        return self._data


@pytest.mark.asyncio
async def test_http_backend_posts_process_request(monkeypatch):
    captured = {}
    monkeypatch.setattr("httpx.AsyncClient", _client_returning(Resp(data={"success": True, "analysis": "ok"}), captured))
    backend = HttpQuickActionBackend(SettingsStub())
    req = QuickActionRequest(action="analyze", document_id="doc1", model="gpt-4o", client_id="c1")
    raw = await backend.run_action(req)
    assert raw == {"success": True, "analysis": "ok"}
    assert captured["url"] == "https://cases.example.com/api/v2/ai/process"
    assert captured["payload"] == {"action": "analyze", "documents": ["doc1"], "model": "gpt-4o", "client_id": "c1"}
    assert captured["headers"]["Authorization"] == "Bearer t-123"


@pytest.mark.asyncio
async def test_http_backend_omits_auth_without_token(monkeypatch):
    class NoToken(SettingsStub):
        api_token = None
        default_client_id = "default-client"

    captured = {}
    monkeypatch.setattr("httpx.AsyncClient", _client_returning(Resp(data={}), captured))
    await HttpQuickActionBackend(NoToken()).run_action(QuickActionRequest(action="summarize", document_id="doc1"))
    assert "Authorization" not in captured["headers"]
    assert captured["payload"] == {"action": "summarize", "documents": ["doc1"], "client_id": "default-client"}


@pytest.mark.asyncio
async def test_http_backend_returns_error_payload_unchanged(monkeypatch):
    payload = {"success": False, "error": "Document not found"}
    monkeypatch.setattr("httpx.AsyncClient", _client_returning(Resp(data=payload)))
    raw = await HttpQuickActionBackend(SettingsStub()).run_action(QuickActionRequest(action="analyze", document_id="d"))
    assert raw is payload


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "resp, error_type, code",
    [
        (Resp(status_code=429), RateLimitError, "RATE_LIMIT"),
        (Resp(status_code=500, text="internal"), ApiError, "API_ERROR"),
        (Resp(status_code=200, data=None, text="<html>"), ApiError, "INVALID_JSON"),
    ],
)
async def test_http_backend_maps_http_errors(monkeypatch, resp, error_type, code):
    monkeypatch.setattr("httpx.AsyncClient", _client_returning(resp))
    with pytest.raises(error_type) as exc:
        await HttpQuickActionBackend(SettingsStub()).run_action(QuickActionRequest(action="analyze", document_id="d"))
    assert exc.value.code == code


@pytest.mark.asyncio
async def test_http_backend_maps_transport_errors(monkeypatch):
    class Client:
        def __init__(self, *a, **kw):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, *a):
            return False

        async def post(self, *a, **kw):
            raise httpx.ConnectError("connection refused")

    monkeypatch.setattr("httpx.AsyncClient", Client)
    with pytest.raises(NetworkError) as exc:
        await HttpQuickActionBackend(SettingsStub()).run_action(QuickActionRequest(action="analyze", document_id="d"))
    assert "connection refused" in exc.value.message
