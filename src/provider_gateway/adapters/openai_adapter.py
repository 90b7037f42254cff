"""
Direct OpenAI API adapter.
"""

import logging

from ..core.interface import AbstractProvider, ProviderKind
from ..core.resolver import resolve_openai_model
from ..models.request import ChatCompletionRequest
from ..models.response import ChatCompletionResponse

logger = logging.getLogger(__name__)


class OpenAIAdapter(AbstractProvider):
    """
    Direct OpenAI API adapter.

    All roles travel together in one ``messages`` array.
    """

    error_label = "OpenAI API error"

    @property
    def kind(self) -> ProviderKind:
        return ProviderKind.OPENAI

    def resolve_model(self, model: str) -> str:
        return resolve_openai_model(model)

    async def chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Create a chat completion via OpenAI API."""
        model = self.resolve_model(request.model)
        if model != request.model:
            logger.debug(f"OpenAI model {request.model} resolved to {model}")

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
