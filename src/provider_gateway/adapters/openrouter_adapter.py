"""
OpenRouter adapter.

OpenRouter routes cross-vendor model ids itself, so the model is passed
through unchanged.
"""

import logging

import httpx

from ..core.config import ProviderEndpoint
from ..core.interface import AbstractProvider, ProviderKind
from ..models.request import ChatCompletionRequest
from ..models.response import ChatCompletionResponse

logger = logging.getLogger(__name__)


class OpenRouterAdapter(AbstractProvider):
    """OpenRouter chat completions (OpenAI wire format)."""

    error_label = "OpenRouter API error"

    def __init__(
        self,
        client: httpx.AsyncClient,
        endpoint: ProviderEndpoint,
        referer: str = "https://teleaon.ai",
        title: str = "Teleaon Bot",
    ):
        """
        Initialize OpenRouter adapter.

        Args:
            client: Shared async HTTP client
            endpoint: OpenRouter endpoint
            referer: Value of the ``HTTP-Referer`` branding header
            title: Value of the ``X-Title`` branding header
        """
        super().__init__(client, endpoint)
        self._referer = referer
        self._title = title

    @property
    def kind(self) -> ProviderKind:
        return ProviderKind.OPENROUTER

    def resolve_model(self, model: str) -> str:
        return model

    async def chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Create a chat completion via OpenRouter."""
        model = self.resolve_model(request.model)
        logger.debug(f"OpenRouter request: model={model}")

        data = await self._post(
            self._endpoint.chat_url,
            payload={
                "model": model,
                "messages": [m.model_dump() for m in request.messages],
                "stream": False,
            },
            headers={
                "Authorization": f"Bearer {request.api_key}",
                "HTTP-Referer": self._referer,
                "X-Title": self._title,
            },
            api_key=request.api_key,
        )
        return self._normalize(ChatCompletionResponse.from_openai, data, model)
