"""
Generic adapter for vendors exposing an OpenAI-compatible API.

Used for Groq and DeepSeek; each instance is bound to one provider
name and endpoint.
"""

import logging

import httpx

from ..core.config import ProviderEndpoint
from ..core.interface import AbstractProvider, ProviderKind
from ..core.resolver import resolve_compatible_model
from ..models.request import ChatCompletionRequest
from ..models.response import ChatCompletionResponse

logger = logging.getLogger(__name__)


class OpenAICompatibleAdapter(AbstractProvider):
    """OpenAI wire format at a vendor-specific host."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        endpoint: ProviderEndpoint,
        provider: ProviderKind,
    ):
        """
        Initialize the adapter.

        Args:
            client: Shared async HTTP client
            endpoint: Vendor endpoint
            provider: Provider this instance serves (used for model prefixes)
        """
        super().__init__(client, endpoint)
        self._provider = provider

    @property
    def kind(self) -> ProviderKind:
        return self._provider

    def resolve_model(self, model: str) -> str:
        return resolve_compatible_model(model, self._provider.value)

    async def chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Create a chat completion against the compatible endpoint."""
        model = self.resolve_model(request.model)
        if model != request.model:
            logger.debug(f"{self._provider.value} model {request.model} resolved to {model}")

        data = await self._post(
            self._endpoint.chat_url,
            payload={
                "model": model,
                "messages": [m.model_dump() for m in request.messages],
            },
            headers={"Authorization": f"Bearer {request.api_key}"},
            api_key=request.api_key,
        )
        return self._normalize(ChatCompletionResponse.from_openai, data, model)
