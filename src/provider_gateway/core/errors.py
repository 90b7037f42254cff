"""
Gateway error types.
"""

from typing import Optional


class GatewayError(Exception):
    """Base exception for gateway errors."""

    def __init__(self, message: str, provider: Optional[str] = None):
        self.message = message
        self.provider = provider
        super().__init__(message)


class GatewayValidationError(GatewayError):
    """Raised when an incoming request is malformed or incomplete."""
    pass


class ProviderError(GatewayError):
    """Raised when a vendor answers with a non-2xx status or an unusable body."""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
        body: str = "",
    ):
        super().__init__(message, provider)
        self.status_code = status_code
        self.body = body


class UnknownProviderError(GatewayError):
    """Raised when an unrecognized provider also failed on the OpenRouter fallback."""
    pass


class NetworkError(GatewayError):
    """Raised when the vendor could not be reached at all."""
    pass
