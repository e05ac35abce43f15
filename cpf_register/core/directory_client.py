"""Directory API client for account creation.

Sends a single POST per account and turns whatever comes back into a
RegistrationOutcome. Non-2xx answers are ordinary outcomes, not exceptions.
"""
from __future__ import annotations
import json
import logging
from typing import Optional

import requests

from .errors import ConfigurationError
from .models import EMPTY_USER_ID, DirectoryAccount, RegistrationOutcome

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "CPF registered successfully."
SUCCESS_DETAILS = "User Account Created"
FAILURE_MESSAGE = "Failed to register CPF."


def extract_user_id(content: str) -> str:
    """Return the ``id`` of a created user from a response body.

    A body that is not JSON yields a diagnostic string instead of an error.
    """
    if not content or not content.strip():
        return EMPTY_USER_ID
    try:
        document = json.loads(content)
    except ValueError as exc:
        return f"Error parsing ID: {exc}"

    if not isinstance(document, dict):
        return EMPTY_USER_ID
    user_id = document.get("id")
    if user_id is None:
        return EMPTY_USER_ID
    return user_id if isinstance(user_id, str) else str(user_id)


def build_outcome(status_code: int, content: str) -> RegistrationOutcome:
    """Classify a directory API response.

    Args:
        status_code: HTTP status returned by the directory API
        content: Raw response body

    Returns:
        Success outcome (with user id) for 2xx, failure outcome carrying the
        raw body otherwise
    """
    if 200 <= status_code < 300:
        return RegistrationOutcome(
            status_code=status_code,
            message=SUCCESS_MESSAGE,
            details=SUCCESS_DETAILS,
            user_id=extract_user_id(content),
        )
    return RegistrationOutcome(
        status_code=status_code,
        message=FAILURE_MESSAGE,
        details=content,
        user_id=EMPTY_USER_ID,
    )


class DirectoryClient:
    """HTTP client for the directory user-creation endpoint.

    Usage:
        client = DirectoryClient(cfg.add_user_url, timeout=cfg.request_timeout)
        outcome = client.create_account(account, token)
    """

    def __init__(self, add_user_url: str, timeout: Optional[float] = None):
        self.add_user_url = (add_user_url or "").strip()
        self.timeout = timeout

    def create_account(self, account: DirectoryAccount, token: str) -> RegistrationOutcome:
        """POST the account with bearer authorization and classify the reply.

        Raises:
            ConfigurationError: If the endpoint URL is not configured
            requests.RequestException: On transport failure
        """
        if account is None:
            raise ValueError("Customer account cannot be null.")
        if not self.add_user_url:
            raise ConfigurationError("Invalid configuration: ADD_USER_URL is not set.")

        logger.info("New customer: %s", json.dumps(account.to_log_dict()))
        logger.info("Sending request to %s", self.add_user_url)

        resp = requests.post(
            self.add_user_url,
            json=account.to_dict(),
            headers={"Authorization": f"Bearer {token}"},
            timeout=self.timeout,
        )
        content = resp.text
        logger.info("Directory API responded with status %s", resp.status_code)
        if resp.status_code >= 400:
            logger.warning("Directory API response: %s", content)

        return build_outcome(resp.status_code, content)
