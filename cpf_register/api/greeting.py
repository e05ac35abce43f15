"""Greeting endpoint; answers every call with the same text."""
import logging

from flask import Blueprint

from cpf_register.api.decorators import require_function_key

bp = Blueprint("greeting", __name__)

logger = logging.getLogger(__name__)

GREETING = "Welcome to Azure Functions!"


@bp.route("/api/AuthByCpf", methods=["GET", "POST"])
@require_function_key
def auth_by_cpf():
    """Return the fixed greeting; request contents are ignored."""
    logger.info("Greeting endpoint processed a request.")
    return (GREETING, 200, {"Content-Type": "text/plain; charset=utf-8"})
