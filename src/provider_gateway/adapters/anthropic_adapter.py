"""
Direct Anthropic API adapter.

Provides access to Anthropic's Messages API, which takes the system
prompt as a top-level field rather than as a message.
"""

import logging
from typing import Dict, Any

import httpx

from ..core.config import ProviderEndpoint
from ..core.interface import AbstractProvider, ProviderKind
from ..core.resolver import resolve_anthropic_model
from ..models.request import ChatCompletionRequest
from ..models.response import ChatCompletionResponse

logger = logging.getLogger(__name__)


class AnthropicAdapter(AbstractProvider):
    """
    Direct Anthropic API adapter.

    Cross-vendor model ids are replaced by a default Claude model.
    """

    error_label = "Anthropic API error"
    MAX_TOKENS = 4096

    def __init__(
        self,
        client: httpx.AsyncClient,
        endpoint: ProviderEndpoint,
        api_version: str = "2023-06-01",
    ):
        """
        Initialize Anthropic adapter.

        Args:
            client: Shared async HTTP client
            endpoint: Anthropic endpoint
            api_version: Value of the ``anthropic-version`` header
        """
        super().__init__(client, endpoint)
        self._api_version = api_version

    @property
    def kind(self) -> ProviderKind:
        return ProviderKind.ANTHROPIC

    def resolve_model(self, model: str) -> str:
        return resolve_anthropic_model(model)

    def build_payload(self, request: ChatCompletionRequest, model: str) -> Dict[str, Any]:
        """Convert to Anthropic Messages format."""
        system = next((m.content for m in request.messages if m.role == "system"), None)

        data: Dict[str, Any] = {
            "model": model,
            "max_tokens": self.MAX_TOKENS,
            "messages": [
                {"role": m.role, "content": m.content}
                for m in request.messages
                if m.role != "system"
            ],
        }

        if system is not None:
            data["system"] = system

        return data

    async def chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Create a chat completion via Anthropic API."""
        model = self.resolve_model(request.model)
        if model != request.model:
            logger.debug(f"Anthropic model {request.model} resolved to {model}")

        data = await self._post(
            self._endpoint.chat_url,
            payload=self.build_payload(request, model),
            headers={
                "x-api-key": request.api_key,
                "anthropic-version": self._api_version,
            },
            api_key=request.api_key,
        )
        return self._normalize(ChatCompletionResponse.from_anthropic, data, model)
