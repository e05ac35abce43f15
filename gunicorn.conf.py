"""Gunicorn configuration for the CPF registration service.

Usage:
    gunicorn -c gunicorn.conf.py

Every worker builds its own app through the factory, so the settings
snapshot is loaded once per worker at boot.
"""
import os

wsgi_app = "cpf_register.flask_app:create_app()"
bind = f"0.0.0.0:{os.environ.get('PORT', '7071')}"
workers = int(os.environ.get("GUNICORN_WORKERS", "2"))
threads = int(os.environ.get("GUNICORN_THREADS", "4"))
# Outbound calls carry no timeout unless HTTP_TIMEOUT_SECONDS is set
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "60"))
accesslog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()


def post_fork(server, worker):
    """Log which worker is about to load settings."""
    worker.log.info("Worker %s starting CPF registration app", worker.pid)
