"""
Core gateway components.
"""

from .config import GatewayConfig, ProviderEndpoint, load_config
from .errors import (
    GatewayError,
    GatewayValidationError,
    ProviderError,
    UnknownProviderError,
    NetworkError,
)
from .interface import AbstractProvider, ProviderKind
from .router import GatewayRouter, build_adapters

__all__ = [
    "GatewayConfig",
    "ProviderEndpoint",
    "load_config",
    "GatewayError",
    "GatewayValidationError",
    "ProviderError",
    "UnknownProviderError",
    "NetworkError",
    "AbstractProvider",
    "ProviderKind",
    "GatewayRouter",
    "build_adapters",
]
