"""Shared test fixtures.

Provides:
- ``clean_env`` — autouse fixture that strips ``TRELLO_*`` variables and
  moves into a temp dir so no ``.env`` file is picked up
- ``mock_http`` — the patched ``httpx.Client`` instance used by clients
- ``make_client`` — factory building a ``TrelloClient`` with test settings
- ``mock_response`` — helper to build a fake httpx response
- ``transport_client`` — factory building a ``TrelloClient`` on top of
  ``httpx.MockTransport`` so real ``httpx.Response`` objects flow through
"""

import json
import os
from unittest.mock import MagicMock, patch

import httpx
import pytest

from trello_api import TrelloClient

TEST_KEY = "test-key-123"
TEST_TOKEN = "test-token-456"


def pytest_configure(config):
    """Register custom markers.

    Tests that talk to the real Trello API are decorated with
    ``@pytest.mark.integration``.  Run with ``-m 'not integration'`` to
    skip them explicitly; they also skip themselves when credentials
    are absent.
    """
    config.addinivalue_line(
        "markers",
        "integration: tests requiring a live Trello board and credentials",
    )


@pytest.fixture(autouse=True)
def clean_env(request, monkeypatch, tmp_path):
    """Isolate unit tests from the caller's TRELLO_* environment."""
    if request.node.get_closest_marker("integration"):
        return
    for name in list(os.environ):
        if name.upper().startswith("TRELLO_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def mock_response(data=None, status_code=200, *, text=None, reason="OK"):
    """Create a mock httpx response.

    *text* set without *data* makes ``json()`` raise like httpx does on a
    non-JSON body.
    """
    resp = MagicMock()
    resp.status_code = status_code
    resp.is_success = 200 <= status_code < 300
    resp.reason_phrase = reason
    if text is not None and data is None:
        resp.text = text
        resp.json.side_effect = json.JSONDecodeError("Expecting value", text, 0)
    else:
        resp.text = json.dumps(data)
        resp.json.return_value = data
    return resp


@pytest.fixture
def mock_http():
    """Patch ``httpx.Client`` inside the client module; yield the instance."""
    with patch("trello_api.client.httpx.Client") as mock_client_cls:
        instance = MagicMock()
        mock_client_cls.return_value = instance
        yield instance


@pytest.fixture
def mock_sleep():
    with patch("trello_api.client.time.sleep") as sleep:
        yield sleep


@pytest.fixture
def make_client(mock_http, mock_sleep):
    """Build clients against the mocked HTTP layer."""

    def _make(**overrides):
        kwargs = {"key": TEST_KEY, "token": TEST_TOKEN, "env_file": None}
        kwargs.update(overrides)
        return TrelloClient(**kwargs)

    return _make


@pytest.fixture
def transport_client(mock_sleep):
    """Build clients whose network layer is an ``httpx.MockTransport``.

    ``_make(handler, **overrides)`` returns ``(client, sent)`` where *sent*
    collects every ``httpx.Request`` the handler saw.
    """
    clients = []

    def _make(handler, **overrides):
        sent = []

        def _record(request):
            sent.append(request)
            return handler(request)

        kwargs = {
            "key": TEST_KEY,
            "token": TEST_TOKEN,
            "env_file": None,
            "transport": httpx.MockTransport(_record),
        }
        kwargs.update(overrides)
        client = TrelloClient(**kwargs)
        clients.append(client)
        return client, sent

    yield _make

    for client in clients:
        client.close()
