"""Client-credentials token acquisition against the identity provider.

A token is requested on every call; nothing is cached between requests.
"""
from __future__ import annotations
import logging

import requests

from cpf_register.config.settings import TOKEN_SETTINGS, RegistrationConfig
from .errors import MalformedTokenResponse, UpstreamAuthError

logger = logging.getLogger(__name__)


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def acquire_token(cfg: RegistrationConfig) -> str:
    """Fetch a bearer token using the client credentials flow.

    Args:
        cfg: Settings snapshot carrying tenant, client and scope values

    Returns:
        Access token string

    Raises:
        ConfigurationError: If any credential setting is missing (no request is sent)
        UpstreamAuthError: If the provider answers with a non-2xx status
        MalformedTokenResponse: If a 2xx body carries no access_token
    """
    cfg.ensure_complete(TOKEN_SETTINGS)

    url = cfg.token_url
    data = {
        "client_id": cfg.client_id,
        "client_secret": cfg.client_secret,
        "scope": cfg.scope,
        "grant_type": cfg.grant_type,
    }
    logger.info("Requesting access token from %s", url)
    resp = requests.post(url, data=data, timeout=cfg.request_timeout)
    body = resp.text

    if not _is_success(resp.status_code):
        logger.warning("Token request rejected with status %s", resp.status_code)
        raise UpstreamAuthError(resp.status_code, body, url)

    try:
        payload = resp.json()
    except ValueError:
        raise MalformedTokenResponse("Access token response is not valid JSON.") from None

    token = payload.get("access_token") if isinstance(payload, dict) else None
    if not isinstance(token, str) or not token:
        raise MalformedTokenResponse("Access token not found in response.")
    return token
