"""
Gateway router: dispatches a uniform request to the matching adapter.
"""

import logging
from typing import Dict, Optional

import httpx

from .config import GatewayConfig
from .errors import GatewayError, UnknownProviderError
from .interface import AbstractProvider, ProviderKind
from .secrets import redact
from ..adapters import (
    AnthropicAdapter,
    GeminiAdapter,
    OpenAIAdapter,
    OpenAICompatibleAdapter,
    OpenRouterAdapter,
)
from ..models.request import ChatCompletionRequest
from ..models.response import ChatCompletionResponse

logger = logging.getLogger(__name__)


def build_adapters(
    client: httpx.AsyncClient,
    config: GatewayConfig,
) -> Dict[ProviderKind, AbstractProvider]:
    """Create one adapter per known provider, sharing ``client``."""
    endpoints = config.endpoints
    return {
        ProviderKind.OPENROUTER: OpenRouterAdapter(
            client,
            endpoints[ProviderKind.OPENROUTER.value],
            referer=config.openrouter_referer,
            title=config.openrouter_title,
        ),
        ProviderKind.ANTHROPIC: AnthropicAdapter(
            client,
            endpoints[ProviderKind.ANTHROPIC.value],
            api_version=config.anthropic_version,
        ),
        ProviderKind.OPENAI: OpenAIAdapter(client, endpoints[ProviderKind.OPENAI.value]),
        ProviderKind.GEMINI: GeminiAdapter(client, endpoints[ProviderKind.GEMINI.value]),
        ProviderKind.GROQ: OpenAICompatibleAdapter(
            client, endpoints[ProviderKind.GROQ.value], ProviderKind.GROQ
        ),
        ProviderKind.DEEPSEEK: OpenAICompatibleAdapter(
            client, endpoints[ProviderKind.DEEPSEEK.value], ProviderKind.DEEPSEEK
        ),
    }


class GatewayRouter:
    """
    Routes chat completions by provider name.

    Unknown provider names are tried once against OpenRouter; if that
    fails too, the error says so instead of hiding the misconfiguration.
    """

    def __init__(self, adapters: Dict[ProviderKind, AbstractProvider]):
        """
        Initialize the router.

        Args:
            adapters: Adapter per provider; must include OpenRouter
        """
        if ProviderKind.OPENROUTER not in adapters:
            raise ValueError("An OpenRouter adapter is required for fallback routing")
        self._adapters = dict(adapters)

    @classmethod
    def from_config(
        cls,
        client: httpx.AsyncClient,
        config: Optional[GatewayConfig] = None,
    ) -> "GatewayRouter":
        return cls(build_adapters(client, config or GatewayConfig()))

    def get_adapter(self, provider: str) -> Optional[AbstractProvider]:
        """Adapter for ``provider`` (case-insensitive), or None if unknown."""
        kind = ProviderKind.from_name(provider)
        if kind is None:
            return None
        return self._adapters.get(kind)

    async def route(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """
        Dispatch a chat completion.

        Args:
            request: Uniform chat completion request

        Returns:
            Uniform chat completion response

        Raises:
            GatewayError: ProviderError / NetworkError from the adapter, or
                UnknownProviderError when the OpenRouter fallback failed
        """
        adapter = self.get_adapter(request.provider)
        if adapter is not None:
            return await adapter.chat_completion(request)

        logger.warning(f"Unknown provider {request.provider!r}, falling back to OpenRouter")
        try:
            return await self._adapters[ProviderKind.OPENROUTER].chat_completion(request)
        except Exception as e:
            reason = e.message if isinstance(e, GatewayError) else redact(str(e), request.api_key)
            raise UnknownProviderError(
                f'Unknown provider "{request.provider}" fell back to OpenRouter '
                f"and failed: {reason or e.__class__.__name__}",
                provider=request.provider,
            ) from e
