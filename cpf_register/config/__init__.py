"""Configuration module for the CPF registration service."""
from .settings import RegistrationConfig, load_settings

__all__ = ["RegistrationConfig", "load_settings"]
