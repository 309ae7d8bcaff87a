"""Shared test fixtures for gwirian-cli tests.

This module provides:
- An isolated config home (XDG_CONFIG_HOME) for every test
- MockAPI: an httpx.MockTransport-backed fake of the Gwirian REST API
- Fixtures that route the CLI's clients through MockAPI
"""

import functools
import json
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from gwirian_cli.client import GwirianClient
from gwirian_cli.shared.logging import configure_logging

TEST_BASE_URL = "https://api.test"
TEST_TOKEN = "gw_test_token"


# =============================================================================
# Mock API - Simulates the Gwirian REST service at the transport layer
# =============================================================================


@dataclass
class MockRoute:
    status_code: int = 200
    json_body: Any = None
    text: str | None = None

    def respond(self) -> httpx.Response:
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        if self.json_body is not None:
            return httpx.Response(self.status_code, json=self.json_body)
        return httpx.Response(self.status_code)


@dataclass
class MockAPI:
    """Fake API keyed by (method, path).

    Unknown routes answer 404 with {"error": "Not found"}. Every request is
    recorded so tests can assert on method, URL, headers and body.
    """

    routes: dict[tuple[str, str], MockRoute] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)
    raise_error: Exception | None = None

    def add(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json_body: Any = None,
        text: str | None = None,
    ) -> None:
        self.routes[(method, path)] = MockRoute(status_code, json_body, text)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "Not found"})
        return route.respond()

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, base_url: str = TEST_BASE_URL, token: str = TEST_TOKEN) -> GwirianClient:
        return GwirianClient(base_url, token, transport=self.transport)

    def factory(self):
        return functools.partial(GwirianClient, transport=self.transport)

    def last_body(self) -> Any:
        return json.loads(self.requests[-1].content)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def config_home(tmp_path, monkeypatch):
    """Point the credential store at a per-test directory."""
    home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    monkeypatch.delenv("GWIRIAN_BASE_URL", raising=False)
    return home


@pytest.fixture(autouse=True)
def quiet_logging():
    configure_logging("warning")


@pytest.fixture
def config_file(config_home):
    return config_home / "gwirian-cli" / "config.json"


@pytest.fixture
def stored_credential(config_file):
    """Persist a token and base URL."""
    config_file.parent.mkdir(parents=True)
    config_file.write_text(json.dumps({"token": TEST_TOKEN, "baseUrl": TEST_BASE_URL}))
    return config_file


@pytest.fixture
def mock_api():
    return MockAPI()


@pytest.fixture
def patched_client(mock_api, monkeypatch):
    """Route every client the CLI builds through mock_api."""
    monkeypatch.setattr("gwirian_cli.session.GwirianClient", mock_api.factory())
    monkeypatch.setattr("gwirian_cli.commands.account.GwirianClient", mock_api.factory())
    return mock_api
