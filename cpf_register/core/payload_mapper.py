"""Inbound registration payload -> directory account transformation."""
from __future__ import annotations
import json
import secrets
import string
from typing import Any, Callable, Dict, Optional, Union

from .errors import InvalidPayload
from .models import DirectoryAccount, PasswordProfile, RegistrationRequest, mask_national_id

PASSWORD_LENGTH = 16
PASSWORD_SPECIALS = "!@#$%^&*"


def normalize_name(name: str) -> str:
    """Build the local part of a user principal name from a display name.

    Trims, drops every whitespace character and lowercases with
    ``str.lower`` (locale independent), so the result is idempotent.

    Raises:
        InvalidPayload: If the name is blank
    """
    if not name or not name.strip():
        raise InvalidPayload("Name cannot be null or empty for UserPrincipalName.")
    return "".join(name.split()).lower()


def build_user_principal_name(name: str, domain_suffix: str) -> str:
    """Return ``normalize_name(name)`` joined to the configured domain."""
    suffix = domain_suffix.strip()
    if not suffix.lstrip("@"):
        raise InvalidPayload("Domain suffix cannot be empty for UserPrincipalName.")
    if not suffix.startswith("@"):
        suffix = f"@{suffix}"
    return normalize_name(name) + suffix


def generate_temp_password(length: int = PASSWORD_LENGTH) -> str:
    """
    Generate a secure temporary password.

    Args:
        length: Password length (default: 16)

    Returns:
        Random password containing uppercase, lowercase, digits, and special chars
    """
    pools = [string.ascii_uppercase, string.ascii_lowercase, string.digits, PASSWORD_SPECIALS]
    alphabet = "".join(pools)
    # One character from each class, rest from the full alphabet
    chars = [secrets.choice(pool) for pool in pools]
    chars += [secrets.choice(alphabet) for _ in range(max(length, len(pools)) - len(pools))]
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)


def _field(document: Dict[str, Any], name: str) -> Any:
    """Case-insensitive key lookup (``Name``, ``NAME`` and ``name`` all match).

    When several keys match, the last one in the document wins.
    """
    found = None
    for key, value in document.items():
        if isinstance(key, str) and key.lower() == name:
            found = value
    return found


def parse_registration_request(raw_body: Union[bytes, str, None]) -> RegistrationRequest:
    """Decode and validate the inbound ``{name, cpf}`` payload.

    Raises:
        InvalidPayload: Empty body, undecodable JSON, or blank name/cpf
    """
    if isinstance(raw_body, bytes):
        try:
            raw_body = raw_body.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidPayload("Invalid payload: Could not deserialize registration request.") from None

    if not raw_body or not raw_body.strip():
        raise InvalidPayload("Request body cannot be empty.")

    try:
        document = json.loads(raw_body)
    except ValueError:
        raise InvalidPayload("Invalid payload: Could not deserialize registration request.") from None

    if not isinstance(document, dict):
        raise InvalidPayload("Invalid payload: Could not deserialize registration request.")

    name = _field(document, "name")
    if not isinstance(name, str) or not name.strip():
        raise InvalidPayload("Invalid value for Customer Name.")

    cpf = _field(document, "cpf")
    if not isinstance(cpf, str) or not cpf.strip():
        raise InvalidPayload("Invalid value for Customer CPF.")

    return RegistrationRequest(name=name, national_id=cpf)


def to_directory_account(
    request: RegistrationRequest,
    domain_suffix: str,
    password_factory: Callable[[], str] = generate_temp_password,
) -> DirectoryAccount:
    """Map a validated request onto the directory user representation."""
    return DirectoryAccount(
        display_name=request.name,
        mail_nickname=request.national_id,
        user_principal_name=build_user_principal_name(request.name, domain_suffix),
        password_profile=PasswordProfile(password=password_factory()),
    )


def map_payload(
    raw_body: Union[bytes, str, None],
    domain_suffix: str,
    password_factory: Optional[Callable[[], str]] = None,
) -> DirectoryAccount:
    """Parse the raw request body and build the directory account.

    Args:
        raw_body: Request body as received
        domain_suffix: Domain appended to the normalized name
        password_factory: Temporary password generator (default: random)

    Raises:
        InvalidPayload: If the body is unusable
    """
    request = parse_registration_request(raw_body)
    return to_directory_account(request, domain_suffix, password_factory or generate_temp_password)

