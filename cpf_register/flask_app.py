"""Flask application factory and bootstrap.

This module provides the create_app() factory function for initializing
the Flask application with all blueprints and configuration.
"""
from __future__ import annotations
import logging
import os
from typing import Optional

from flask import Flask

from cpf_register.config import RegistrationConfig, load_settings

JSON_MAX_SIZE_BYTES = 65536  # 64 KB
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


# ─────────────────────────────────────────────────────────────────────────────
# Application Factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(cfg: Optional[RegistrationConfig] = None) -> Flask:
    """Create and configure Flask application.

    Args:
        cfg: Settings snapshot (default: loaded from the environment)
    """
    configure_logging()

    # Load configuration once; requests only read it
    cfg = cfg or load_settings()

    app = Flask(__name__)
    app.config["APP_CONFIG"] = cfg
    app.config["MAX_CONTENT_LENGTH"] = JSON_MAX_SIZE_BYTES

    # Register blueprints
    from cpf_register.api import errors, greeting, health, registration

    app.register_blueprint(registration.bp)
    app.register_blueprint(greeting.bp)
    app.register_blueprint(health.bp)

    # Register error handlers
    errors.register_error_handlers(app)

    missing = cfg.missing_settings()
    app.logger.info(
        "CPF registration app ready; routes=/api/CpfRegister,/api/AuthByCpf; missing_settings=%s",
        ",".join(missing) or "none",
    )
    return app


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from LOG_LEVEL (default INFO)."""
    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=int(os.environ.get("PORT", "7071")))
