"""Health check endpoints."""
from flask import Blueprint, current_app

bp = Blueprint("health", __name__)


@bp.route("/health")
def health_check():
    """Liveness: the process is serving requests."""
    return ("ok", 200, {"Content-Type": "text/plain"})


@bp.route("/ready")
def readiness_check():
    """Readiness: every registration setting is present."""
    cfg = current_app.config.get("APP_CONFIG")
    missing = cfg.missing_settings() if cfg else ["APP_CONFIG"]
    if missing:
        return (f"not ready: missing {', '.join(missing)}", 503, {"Content-Type": "text/plain"})
    return ("ready", 200, {"Content-Type": "text/plain"})
