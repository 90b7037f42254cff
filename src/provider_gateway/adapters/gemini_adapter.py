"""
Google Gemini (Generative Language API) adapter.

Model availability differs between API keys and API versions, so a
call walks an ordered list of ``(model_id, api_version)`` candidates:
the requested model on ``v1beta`` first, then a stable fallback on
``v1``. Only a 404 moves on to the next candidate; any other failure
is final.
"""

import logging
from typing import Dict, Any, List, Tuple, Union

import httpx

from ..core.errors import NetworkError, ProviderError
from ..core.interface import AbstractProvider, ProviderKind
from ..core.resolver import gemini_attempt_plan, resolve_gemini_model
from ..core.secrets import redact
from ..models.request import ChatCompletionRequest
from ..models.response import ChatCompletionResponse

logger = logging.getLogger(__name__)


def _is_not_found(error: Union[ProviderError, NetworkError]) -> bool:
    return isinstance(error, ProviderError) and error.status_code == 404


class GeminiAdapter(AbstractProvider):
    """
    Gemini adapter with 404-driven model/version fallback.

    Supports text-only conversations; the system prompt is sent as
    ``system_instruction``.
    """

    error_label = "Gemini API error"
    MAX_OUTPUT_TOKENS = 2048

    @property
    def kind(self) -> ProviderKind:
        return ProviderKind.GEMINI

    def resolve_model(self, model: str) -> str:
        return resolve_gemini_model(model)

    def attempt_plan(self, model: str) -> List[Tuple[str, str]]:
        return gemini_attempt_plan(model)

    def build_payload(self, request: ChatCompletionRequest) -> Dict[str, Any]:
        """Build a generateContent body."""
        system = next((m for m in request.messages if m.role == "system"), None)

        payload: Dict[str, Any] = {
            "contents": [
                {
                    "role": "model" if m.role == "assistant" else "user",
                    "parts": [{"text": m.content}],
                }
                for m in request.messages
                if m.role != "system"
            ],
            "generationConfig": {
                "maxOutputTokens": self.MAX_OUTPUT_TOKENS,
            },
        }

        if system is not None:
            payload["system_instruction"] = {"parts": [{"text": system.content}]}

        return payload

    def _generate_url(self, model_id: str, version: str) -> str:
        path = self._endpoint.chat_path.format(version=version, model=model_id)
        return f"{self._endpoint.base_url.rstrip('/')}{path}"

    async def _attempt(
        self,
        request: ChatCompletionRequest,
        model_id: str,
        version: str,
    ) -> ChatCompletionResponse:
        logger.info(f"Gemini attempting {model_id} on {version}")
        data = await self._post(
            self._generate_url(model_id, version),
            payload=self.build_payload(request),
            headers={},
            api_key=request.api_key,
            params={"key": request.api_key},
        )
        return self._normalize(ChatCompletionResponse.from_gemini, data, model_id)

    async def chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """
        Create a chat completion, falling back on 404.

        Raises:
            ProviderError: The first attempt failed with a non-404 status,
                or the last candidate failed (its status is embedded)
            NetworkError: Gemini could not be reached
        """
        plan = self.attempt_plan(request.model)

        for index, (model_id, version) in enumerate(plan):
            is_last = index == len(plan) - 1
            try:
                return await self._attempt(request, model_id, version)
            except (ProviderError, NetworkError) as e:
                if _is_not_found(e) and not is_last:
                    logger.info(f"Gemini model {model_id} ({version}) not found, trying fallback")
                    continue
                if index > 0:
                    logger.error(f"Gemini fallback {model_id} ({version}) failed: {e.message}")
                    await self._log_available_models(request.api_key)
                raise

        # plan is never empty
        raise ProviderError(f"{self.error_label}: no model candidates", provider=self.kind.value)

    async def _log_available_models(self, api_key: str) -> None:
        """Log the model ids visible to this key. Failures are discarded."""
        try:
            response = await self._client.get(
                self._endpoint.models_url,
                params={"key": api_key},
            )
            if not response.is_success:
                logger.warning(f"Gemini diagnostic list models returned {response.status_code}")
                return
            names = [m.get("name") for m in response.json().get("models", [])]
            logger.info(f"Gemini diagnostic: models available for this key: {names}")
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.warning(f"Gemini diagnostic list models failed: {redact(str(e), api_key)}")
