"""
Unit tests for the relay HTTP client used by the UI.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from symptom_checker.client.relay_client import RelayClient, RelayClientError


def _response(status: int, body: object | None = None, text: str | None = None) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    r._content = (json.dumps(body) if text is None else text).encode("utf-8")
    return r


@pytest.fixture
def http() -> MagicMock:
    return MagicMock(spec=requests.Session)


def test_ask_posts_message_and_returns_reply(http: MagicMock) -> None:
    http.post.return_value = _response(200, {"reply": "### Analysis"})
    client = RelayClient("http://relay.test", timeout=5, session=http)
    assert client.ask("cough") == "### Analysis"
    http.post.assert_called_once_with("http://relay.test", json={"message": "cough"}, timeout=5)


def test_ask_non_success_status_hides_body(http: MagicMock) -> None:
    http.post.return_value = _response(502, {"error": "hf returned HTTP 503 with secret details"})
    with pytest.raises(RelayClientError) as exc:
        RelayClient("http://relay.test", session=http).ask("cough")
    assert str(exc.value) == "HTTP 502"


@pytest.mark.parametrize("body", [{"reply": ""}, {"answer": "x"}, ["reply"], {"reply": 3}])
def test_ask_invalid_reply_format(http: MagicMock, body: object) -> None:
    http.post.return_value = _response(200, body)
    with pytest.raises(RelayClientError, match="Invalid response format"):
        RelayClient("http://relay.test", session=http).ask("cough")


def test_ask_non_json(http: MagicMock) -> None:
    http.post.return_value = _response(200, text="<html>")
    with pytest.raises(RelayClientError, match="Invalid response format"):
        RelayClient("http://relay.test", session=http).ask("cough")


def test_ask_timeout(http: MagicMock) -> None:
    http.post.side_effect = requests.Timeout("read timed out")
    with pytest.raises(RelayClientError, match="timed out"):
        RelayClient("http://relay.test", timeout=60, session=http).ask("cough")


def test_ask_connection_error(http: MagicMock) -> None:
    http.post.side_effect = requests.ConnectionError("refused")
    with pytest.raises(RelayClientError, match="ConnectionError"):
        RelayClient("http://relay.test", session=http).ask("cough")


def test_probe_statuses(http: MagicMock) -> None:
    client = RelayClient("http://relay.test", probe_timeout=3, session=http)
    http.get.return_value = _response(200, text="OK")
    assert client.probe() == "online"
    http.get.assert_called_with("http://relay.test", timeout=3)
    http.get.return_value = _response(500, text="down")
    assert client.probe() == "error"
    http.get.side_effect = requests.ConnectionError("refused")
    assert client.probe() == "offline"
