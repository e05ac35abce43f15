"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cpf_register.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_AUTHORITY_URL = "https://login.microsoftonline.com"

# Setting name -> RegistrationConfig attribute, in the order they are reported
REQUIRED_SETTINGS = {
    "TENANT_ID": "tenant_id",
    "CLIENT_ID": "client_id",
    "CLIENT_SECRET": "client_secret",
    "SCOPE": "scope",
    "GRANT_TYPE": "grant_type",
    "ADD_USER_URL": "add_user_url",
    "UPN_DOMAIN": "upn_domain",
}

TOKEN_SETTINGS = ("TENANT_ID", "CLIENT_ID", "CLIENT_SECRET", "SCOPE", "GRANT_TYPE")


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.info("Loaded %s from /run/secrets", secret_name)
                return secret_value
        except OSError as exc:
            logger.warning("Failed to read /run/secrets/%s: %s", secret_name, exc)

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            return secret_value

    return None


@dataclass(frozen=True)
class RegistrationConfig:
    """Read-only settings snapshot shared by every request."""
    # Identity provider (client-credentials grant)
    tenant_id: str = ""
    client_id: str = ""
    client_secret: str = ""
    scope: str = ""
    grant_type: str = ""
    authority_url: str = DEFAULT_AUTHORITY_URL

    # Directory API
    add_user_url: str = ""
    upn_domain: str = ""

    # HTTP
    request_timeout: Optional[float] = None
    function_key: str = ""

    def missing_settings(self, names: tuple[str, ...] | None = None) -> list[str]:
        """Return the environment names of required settings that are blank.

        Args:
            names: Restrict the check to these setting names (default: all)
        """
        if names is None:
            names = tuple(REQUIRED_SETTINGS)
        return [
            name for name in names
            if not (getattr(self, REQUIRED_SETTINGS[name]) or "").strip()
        ]

    def ensure_complete(self, names: tuple[str, ...] | None = None) -> None:
        """Raise ConfigurationError when any required setting is blank."""
        missing = self.missing_settings(names)
        if missing:
            raise ConfigurationError(
                "Invalid configuration: One or more required values are missing "
                f"({', '.join(missing)})."
            )

    @property
    def token_url(self) -> str:
        """OAuth2 v2.0 token endpoint for the configured tenant."""
        return f"{self.authority_url.rstrip('/')}/{self.tenant_id}/oauth2/v2.0/token"

    @property
    def user_principal_suffix(self) -> str:
        """Domain suffix appended to normalized names, always starting with '@'."""
        domain = self.upn_domain.strip()
        return domain if domain.startswith("@") else f"@{domain}"


def _parse_timeout(raw: str | None) -> Optional[float]:
    """Parse HTTP_TIMEOUT_SECONDS; blank means no explicit timeout."""
    if raw is None or not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise RuntimeError(f"HTTP_TIMEOUT_SECONDS must be a number, got {raw!r}.") from None
    if timeout <= 0:
        raise RuntimeError("HTTP_TIMEOUT_SECONDS must be greater than zero.")
    return timeout


def load_settings() -> RegistrationConfig:
    """Load registration settings from environment and /run/secrets.

    Missing registration settings are not fatal here; each request checks
    them and reports a ConfigurationError in its outcome.
    """
    client_secret = _load_secret_from_file("client_secret", "CLIENT_SECRET") or ""

    cfg = RegistrationConfig(
        tenant_id=os.environ.get("TENANT_ID", "").strip(),
        client_id=os.environ.get("CLIENT_ID", "").strip(),
        client_secret=client_secret,
        scope=os.environ.get("SCOPE", "").strip(),
        grant_type=os.environ.get("GRANT_TYPE", "").strip(),
        authority_url=os.environ.get("IDENTITY_AUTHORITY_URL", "").strip() or DEFAULT_AUTHORITY_URL,
        add_user_url=os.environ.get("ADD_USER_URL", "").strip(),
        upn_domain=os.environ.get("UPN_DOMAIN", "").strip(),
        request_timeout=_parse_timeout(os.environ.get("HTTP_TIMEOUT_SECONDS")),
        function_key=_load_secret_from_file("function_key", "FUNCTION_KEY") or "",
    )

    missing = cfg.missing_settings()
    if missing:
        logger.warning("Registration settings missing: %s", ", ".join(missing))
    logger.info(
        "Settings loaded; tenant=%s; client_id=%s; secret=%s; function_key=%s",
        cfg.tenant_id or "EMPTY",
        cfg.client_id or "EMPTY",
        "***" if cfg.client_secret else "EMPTY",
        "enabled" if cfg.function_key else "disabled",
    )
    return cfg
