import pytest
import requests

from cpf_register.core.errors import ConfigurationError, MalformedTokenResponse, UpstreamAuthError
from cpf_register.core.token_client import acquire_token
from tests.conftest import TOKEN_URL, StubResponse, make_config


def test_acquire_token_posts_form_credentials(http_stub, config):
    http_stub.add(TOKEN_URL, StubResponse(200, {"access_token": "tok-1", "expires_in": 3599}))

    assert acquire_token(config) == "tok-1"

    call = http_stub.calls[0]
    assert call["url"] == TOKEN_URL
    assert call["data"] == {
        "client_id": "client-abc",
        "client_secret": "s3cr3t",
        "scope": "https://graph.microsoft.com/.default",
        "grant_type": "client_credentials",
    }
    assert call["timeout"] is None


def test_acquire_token_uses_configured_timeout(http_stub):
    http_stub.add(TOKEN_URL, StubResponse(200, {"access_token": "tok"}))
    acquire_token(make_config(request_timeout=3.5))
    assert http_stub.calls[0]["timeout"] == 3.5


def test_default_authority_is_microsoft_login():
    cfg = make_config(authority_url="https://login.microsoftonline.com/")
    assert cfg.token_url == "https://login.microsoftonline.com/tenant-123/oauth2/v2.0/token"


@pytest.mark.parametrize("field", ["tenant_id", "client_id", "client_secret", "scope", "grant_type"])
def test_missing_credential_fails_before_request(http_stub, field):
    with pytest.raises(ConfigurationError, match="required values are missing"):
        acquire_token(make_config(**{field: ""}))
    assert http_stub.calls == []


def test_non_success_status_raises_upstream_auth_error(http_stub, config):
    http_stub.add(TOKEN_URL, StubResponse(401, text='{"error":"invalid_client"}'))

    with pytest.raises(UpstreamAuthError) as exc_info:
        acquire_token(config)

    error = exc_info.value
    assert error.status_code == 401
    assert error.body == '{"error":"invalid_client"}'
    assert error.endpoint == TOKEN_URL
    assert "Status: 401" in str(error)


@pytest.mark.parametrize(
    "response",
    [
        StubResponse(200, {"token_type": "Bearer"}),
        StubResponse(200, {"access_token": ""}),
        StubResponse(200, {"access_token": None}),
        StubResponse(200, ["access_token"]),
    ],
)
def test_success_without_access_token(http_stub, config, response):
    http_stub.add(TOKEN_URL, response)
    with pytest.raises(MalformedTokenResponse, match="Access token not found"):
        acquire_token(config)


def test_success_with_non_json_body(http_stub, config):
    http_stub.add(TOKEN_URL, StubResponse(200, text="<html>ok</html>"))
    with pytest.raises(MalformedTokenResponse, match="not valid JSON"):
        acquire_token(config)


def test_transport_errors_propagate(http_stub, config):
    http_stub.add(TOKEN_URL, requests.ConnectionError("connection refused"))
    with pytest.raises(requests.ConnectionError):
        acquire_token(config)
