from unittest import mock

import pytest

from workdesk import settings as settings_module
from workdesk.data import api_client
from workdesk.data.api_client import ApiError


def _response(status_code=200, payload=None, reason="OK", content=b"{}"):
    response = mock.Mock()
    response.ok = 200 <= status_code < 400
    response.status_code = status_code
    response.reason = reason
    response.content = content
    response.text = str(payload)
    response.json.return_value = payload
    return response


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "https://api.example.com/v1/")
    monkeypatch.setenv("API_KEY", "secret-key")
    settings_module.reset_settings()


def test_request_requires_configuration():
    assert not api_client.is_enabled()
    with pytest.raises(RuntimeError, match="API_BASE_URL"):
        api_client.request("GET", "/entities/KanbanBoard")


def test_request_sends_key_and_returns_json(configured):
    with mock.patch.object(api_client._SESSION, "request", return_value=_response(payload=[{"id": "b1"}])) as call:
        result = api_client.request("GET", "/entities/KanbanBoard", params={"sort": "name"})

    assert result == [{"id": "b1"}]
    args, kwargs = call.call_args
    assert args == ("GET", "https://api.example.com/v1/entities/KanbanBoard")
    assert kwargs["headers"]["api_key"] == "secret-key"
    assert kwargs["params"] == {"sort": "name"}
    assert kwargs["timeout"] == 10


def test_request_raises_api_error(configured):
    failure = _response(status_code=404, payload={"message": "missing"}, reason="Not Found")
    with mock.patch.object(api_client._SESSION, "request", return_value=failure):
        with pytest.raises(ApiError) as excinfo:
            api_client.request("DELETE", "/entities/KanbanTask/t1")

    assert excinfo.value.status_code == 404
    assert excinfo.value.detail == {"message": "missing"}
    assert isinstance(excinfo.value, RuntimeError)


def test_empty_response_returns_none(configured):
    with mock.patch.object(api_client._SESSION, "request", return_value=_response(status_code=204, content=b"")):
        assert api_client.request("DELETE", "/entities/KanbanTask/t1") is None


def test_secret_getter_takes_precedence(configured):
    secrets = {("app", "API_BASE_URL"): "https://secrets.example.com"}
    api_client.configure(lambda path, default=None: secrets.get(tuple(path), default))
    assert api_client.api_base_url() == "https://secrets.example.com"
    assert api_client.api_key() == "secret-key"
