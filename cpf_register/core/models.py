"""Records exchanged by the registration pipeline.

Python attributes are snake_case; ``to_dict()`` renders the camelCase wire
shape expected by the directory API and by callers of the endpoint.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

# Marker placed in userId when the directory API refuses the account
EMPTY_USER_ID = ""


def mask_national_id(national_id: str) -> str:
    """Mask a CPF for logs, keeping only the last two characters."""
    value = national_id.strip()
    if len(value) <= 2:
        return "*" * len(value)
    return "*" * (len(value) - 2) + value[-2:]


@dataclass(frozen=True)
class RegistrationRequest:
    """Validated inbound payload. ``national_id`` carries the CPF."""
    name: str
    national_id: str


@dataclass(frozen=True)
class PasswordProfile:
    """Initial password of a new directory account."""
    password: str
    force_change_password_next_sign_in: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "forceChangePasswordNextSignIn": self.force_change_password_next_sign_in,
            "password": self.password,
        }


@dataclass(frozen=True)
class DirectoryAccount:
    """User-creation request sent to the directory API."""
    display_name: str
    mail_nickname: str
    user_principal_name: str
    password_profile: PasswordProfile
    account_enabled: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accountEnabled": self.account_enabled,
            "displayName": self.display_name,
            "mailNickname": self.mail_nickname,
            "userPrincipalName": self.user_principal_name,
            "passwordProfile": self.password_profile.to_dict(),
        }

    def to_log_dict(self) -> Dict[str, Any]:
        """Same as to_dict() with the password redacted and the CPF masked."""
        payload = self.to_dict()
        payload["mailNickname"] = mask_national_id(self.mail_nickname)
        payload["passwordProfile"]["password"] = "***"
        return payload


@dataclass(frozen=True)
class RegistrationOutcome:
    """Uniform response returned to the caller on every path."""
    status_code: int
    message: str
    details: str
    user_id: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "statusCode": self.status_code,
            "message": self.message,
            "details": self.details,
        }
