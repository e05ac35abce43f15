"""
Flask decorators for endpoint authorization.

Endpoints are protected by a shared function key, accepted either in the
``x-functions-key`` header or in the ``code`` query parameter. When no key
is configured the endpoints are open.

Security:
- Constant-time comparison (hmac.compare_digest)
- Only a truncated SHA256 hash of a rejected key is ever logged
"""

import hashlib
import hmac
import logging
from functools import wraps

from flask import current_app, jsonify, request

logger = logging.getLogger(__name__)

FUNCTION_KEY_HEADER = "x-functions-key"
FUNCTION_KEY_PARAM = "code"


def _provided_key() -> str:
    return request.headers.get(FUNCTION_KEY_HEADER) or request.args.get(FUNCTION_KEY_PARAM, "")


def _key_hash(key: str) -> str:
    return hashlib.sha256(key.encode()).hexdigest()[:12]


def require_function_key(fn):
    """
    Decorator requiring the configured function key.

    Returns:
        401 JSON error when a key is configured and the request lacks it or
        presents a different one

    Example:
        @bp.route("/api/CpfRegister", methods=["POST"])
        @require_function_key
        def cpf_register():
            ...
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        cfg = current_app.config.get("APP_CONFIG")
        expected = cfg.function_key if cfg else ""
        if not expected:
            return fn(*args, **kwargs)

        provided = _provided_key()
        if not provided:
            logger.warning("Request to %s missing function key", request.path)
            return jsonify({"error": "Unauthorized", "message": "Function key required"}), 401

        if not hmac.compare_digest(provided.encode(), expected.encode()):
            logger.warning(
                "Request to %s with invalid function key (hash=%s)",
                request.path,
                _key_hash(provided),
            )
            return jsonify({"error": "Unauthorized", "message": "Invalid function key"}), 401

        return fn(*args, **kwargs)

    return wrapper
