"""
Provider Gateway

A stateless gateway that fans a uniform chat completion request out to
one of several external LLM providers:
- Per-provider adapters with vendor auth, endpoints and wire formats
- Model-name resolution with per-vendor defaults and aliases
- Unknown providers fall back to OpenRouter
- API key connection testing
"""

from .core.config import GatewayConfig, ProviderEndpoint, load_config
from .core.errors import (
    GatewayError,
    GatewayValidationError,
    ProviderError,
    UnknownProviderError,
    NetworkError,
)
from .core.interface import AbstractProvider, ProviderKind
from .core.router import GatewayRouter
from .models.request import ChatMessage, ChatCompletionRequest, ConnectionTestRequest
from .models.response import ChatCompletionResponse, ConnectionTestResult, Usage
from .tester import ConnectionTester

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
    "ChatMessage",
    "ChatCompletionRequest",
    "ConnectionTestRequest",
    "ChatCompletionResponse",
    "ConnectionTestResult",
    "Usage",
    "ConnectionTester",
]
