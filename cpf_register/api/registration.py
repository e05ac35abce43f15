"""CPF registration endpoint.

The transport status is always 200; the business result travels in the
``statusCode`` field of the JSON body.
"""
from __future__ import annotations
import json

from flask import Blueprint, Response, current_app, request

from cpf_register.api.decorators import require_function_key
from cpf_register.core.registration_service import register_customer

bp = Blueprint("registration", __name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


def outcome_response(payload: dict) -> Response:
    """Serialize an outcome dict with the fixed 200 transport status."""
    body = json.dumps(payload, ensure_ascii=False)
    return Response(body, status=200, content_type=JSON_CONTENT_TYPE)


@bp.route("/api/CpfRegister", methods=["POST"])
@require_function_key
def cpf_register():
    """Register a customer from a ``{name, cpf}`` JSON body."""
    cfg = current_app.config["APP_CONFIG"]
    outcome = register_customer(request.get_data(cache=False), cfg)
    return outcome_response(outcome.to_dict())
