"""Pytest shared fixtures for the registration flow."""
import json
import pathlib
import sys
from typing import Optional

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from cpf_register.config.settings import RegistrationConfig

TOKEN_URL = "https://login.example.test/tenant-123/oauth2/v2.0/token"
ADD_USER_URL = "https://graph.example.test/v1.0/users"
UPN_DOMAIN = "contoso.onmicrosoft.com"


class StubResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, payload=None, text: Optional[str] = None):
        self.status_code = status_code
        self._payload = payload
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text

    def json(self):
        return json.loads(self.text)


class HttpStub:
    """Routes requests.post calls by URL and records every call."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, url: str, response: StubResponse):
        self.routes[url] = response
        return response

    def post(self, url, *args, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if url not in self.routes:
            raise RuntimeError(f"Unexpected HTTP POST in unit test: {url}")
        response = self.routes[url]
        if isinstance(response, Exception):
            raise response
        return response

    def urls(self):
        return [call["url"] for call in self.calls]


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch):
    """Fail any test that reaches the network without registering a stub."""

    def _unexpected(url, *args, **kwargs):
        raise RuntimeError(f"Unexpected network access in tests: {url}")

    monkeypatch.setattr(requests, "post", _unexpected)
    monkeypatch.setattr(requests, "get", _unexpected)


@pytest.fixture()
def http_stub(monkeypatch):
    """Stubbed requests.post with per-URL responses."""
    stub = HttpStub()
    monkeypatch.setattr(requests, "post", stub.post)
    return stub


# ─────────────────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────────────────
def make_config(**overrides) -> RegistrationConfig:
    base = dict(
        tenant_id="tenant-123",
        client_id="client-abc",
        client_secret="s3cr3t",
        scope="https://graph.microsoft.com/.default",
        grant_type="client_credentials",
        authority_url="https://login.example.test",
        add_user_url=ADD_USER_URL,
        upn_domain=UPN_DOMAIN,
    )
    base.update(overrides)
    return RegistrationConfig(**base)


@pytest.fixture()
def config():
    return make_config()


# ─────────────────────────────────────────────────────────────────────────────
# Flask Test Client
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture()
def app_factory():
    from cpf_register.flask_app import create_app

    def _factory(**overrides):
        flask_app = create_app(make_config(**overrides))
        flask_app.config.update(TESTING=True)
        return flask_app

    return _factory


@pytest.fixture()
def client(app_factory):
    """Flask test client with a complete configuration."""
    with app_factory().test_client() as client:
        yield client
