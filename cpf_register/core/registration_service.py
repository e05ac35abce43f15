"""
Registration Service Layer

Runs the CPF registration pipeline for one request:

    verify settings -> acquire token -> map payload -> create account

Every failure raised along the way is collapsed into one 500 outcome whose
details carry the failure message. A refusal from the directory API is not
a failure here; it comes back as a normal outcome from the directory client.
"""
from __future__ import annotations
import logging
from typing import Callable, Optional, Union

from cpf_register.config.settings import RegistrationConfig
from .directory_client import DirectoryClient
from .errors import RegistrationError, UnexpectedError
from .models import RegistrationOutcome
from .payload_mapper import map_payload, mask_national_id
from .token_client import acquire_token

logger = logging.getLogger(__name__)

ERROR_STATUS_CODE = 500
ERROR_MESSAGE = "An error occurred while processing your request."


def error_outcome(error: BaseException) -> RegistrationOutcome:
    """Generic outcome for any failure before the directory call completes."""
    return RegistrationOutcome(
        status_code=ERROR_STATUS_CODE,
        message=ERROR_MESSAGE,
        details=str(error),
        user_id=None,
    )


def wrap_unexpected(exc: BaseException) -> UnexpectedError:
    """Wrap a non-registration failure, chaining the original as __cause__."""
    error = UnexpectedError(str(exc) or exc.__class__.__name__)
    error.__cause__ = exc
    return error


def register_customer(
    raw_body: Union[bytes, str, None],
    cfg: RegistrationConfig,
    password_factory: Optional[Callable[[], str]] = None,
) -> RegistrationOutcome:
    """Register one customer in the directory.

    Args:
        raw_body: Inbound request body (JSON ``{name, cpf}``)
        cfg: Settings snapshot
        password_factory: Optional temporary password generator

    Returns:
        RegistrationOutcome; never raises for pipeline failures
    """
    logger.info("Starting CPF registration process...")
    try:
        cfg.ensure_complete()
        token = acquire_token(cfg)
        account = map_payload(raw_body, cfg.user_principal_suffix, password_factory)
        logger.info(
            "Received payload for %s (cpf=%s)",
            account.display_name,
            mask_national_id(account.mail_nickname),
        )
        client = DirectoryClient(cfg.add_user_url, timeout=cfg.request_timeout)
        outcome = client.create_account(account, token)
    except RegistrationError as exc:
        logger.error("Error during CPF registration process: %s", exc)
        return error_outcome(exc)
    except Exception as exc:
        logger.error("Error during CPF registration process", exc_info=True)
        return error_outcome(wrap_unexpected(exc))

    if outcome.is_success:
        logger.info("CPF registration completed (userId=%s)", outcome.user_id)
    else:
        logger.warning("CPF registration refused by directory (status=%s)", outcome.status_code)
    return outcome
