from unittest.mock import MagicMock, patch

import requests

from leitner.application.config import AppConfig
from leitner.consts import VERSION
from scripts import wait_for_server


def _response(status="ok", version=VERSION, ok=True):
    response = MagicMock(ok=ok)
    response.json.return_value = {"status": status, "version": version}
    return response


def test_health_url_uses_config():
    assert wait_for_server.health_url(AppConfig(host="10.0.0.5", port=8123)) == (
        "http://10.0.0.5:8123/health"
    )


def test_health_url_wildcard_bind_uses_loopback():
    assert wait_for_server.health_url(AppConfig(host="0.0.0.0", port=3000)) == (
        "http://127.0.0.1:3000/health"
    )


@patch("scripts.wait_for_server.time.sleep")
def test_wait_retries_until_ready(mock_sleep):
    session = MagicMock()
    session.get.side_effect = [
        requests.exceptions.ConnectionError(),
        _response(ok=False),
        _response(version="9.9.9"),
    ]

    version = wait_for_server.wait_for_server("http://x/health", retries=5, session=session)

    assert version == "9.9.9"
    assert session.get.call_count == 3
    assert mock_sleep.call_count == 2


@patch("scripts.wait_for_server.time.sleep")
def test_wait_gives_up(mock_sleep):
    session = MagicMock()
    session.get.side_effect = requests.exceptions.ConnectionError()

    assert wait_for_server.wait_for_server("http://x/health", retries=3, session=session) is None
    assert session.get.call_count == 3
    assert mock_sleep.call_count == 2


@patch("scripts.wait_for_server.wait_for_server", return_value=None)
def test_main_exit_code_on_timeout(mock_wait, mock_home):
    assert wait_for_server.main() == 1
    mock_wait.assert_called_once_with("http://127.0.0.1:3000/health")


@patch("scripts.wait_for_server.wait_for_server", return_value=VERSION)
def test_main_ready(mock_wait, mock_home):
    assert wait_for_server.main() == 0


@patch("scripts.wait_for_server.wait_for_server", return_value=VERSION)
def test_main_polls_configured_port(mock_wait, mock_home, monkeypatch):
    monkeypatch.setenv("LEITNER_HOST", "localhost")
    monkeypatch.setenv("LEITNER_PORT", "8765")

    assert wait_for_server.main() == 0
    mock_wait.assert_called_once_with("http://localhost:8765/health")
