"""Registration-specific exceptions for error handling."""


class RegistrationError(Exception):
    """Base exception for all registration pipeline failures."""
    pass


class InvalidPayload(RegistrationError, ValueError):
    """Inbound body is empty, not JSON, or lacks a required field."""
    pass


class ConfigurationError(RegistrationError):
    """A required setting is missing."""
    pass


class UpstreamAuthError(RegistrationError):
    """Identity provider rejected the token request.

    Attributes:
        status_code: HTTP status code returned by the provider
        body: Raw response body, kept for diagnostics
        endpoint: Token endpoint that failed
    """

    def __init__(self, status_code: int, body: str, endpoint: str):
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint
        super().__init__(f"Failed to get access token. Status: {status_code}, Response: {body}")


class MalformedTokenResponse(RegistrationError):
    """Identity provider answered 2xx without a usable access_token."""
    pass


class UnexpectedError(RegistrationError):
    """Any other failure, wrapping the original exception as __cause__."""
    pass
