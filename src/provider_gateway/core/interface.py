"""
Abstract provider interface.

Defines the contract that every vendor adapter implements, plus the
closed set of providers the gateway knows how to reach.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Dict, Any, Callable

import httpx

from .config import ProviderEndpoint
from .errors import NetworkError, ProviderError
from .secrets import redact
from ..models.request import ChatCompletionRequest
from ..models.response import ChatCompletionResponse

logger = logging.getLogger(__name__)


class ProviderKind(str, Enum):
    """Providers with a dedicated adapter."""
    OPENROUTER = "openrouter"
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GEMINI = "gemini"
    GROQ = "groq"
    DEEPSEEK = "deepseek"

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional["ProviderKind"]:
        """Case-insensitive lookup; ``None`` for unknown names."""
        try:
            return cls((name or "").strip().lower())
        except ValueError:
            return None


class AbstractProvider(ABC):
    """
    Base class for vendor adapters.

    Adapters are stateless: they translate a uniform request into the
    vendor's wire format, issue one or more calls through the shared
    HTTP client and normalize the answer.
    """

    #: Prefix used in error messages, e.g. "OpenAI API error".
    error_label = "API error"

    def __init__(self, client: httpx.AsyncClient, endpoint: ProviderEndpoint):
        """
        Initialize the adapter.

        Args:
            client: Shared async HTTP client (the transport boundary)
            endpoint: Base URL and paths for this vendor
        """
        self._client = client
        self._endpoint = endpoint

    @property
    @abstractmethod
    def kind(self) -> ProviderKind:
        """Provider served by this adapter."""
        pass

    @property
    def endpoint(self) -> ProviderEndpoint:
        return self._endpoint

    @abstractmethod
    def resolve_model(self, model: str) -> str:
        """
        Map a caller-supplied model id to one this vendor accepts.

        Args:
            model: Model identifier from the request

        Returns:
            Vendor model identifier
        """
        pass

    @abstractmethod
    async def chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """
        Create a chat completion.

        Args:
            request: Uniform chat completion request

        Returns:
            Uniform chat completion response

        Raises:
            ProviderError: Vendor returned a non-2xx status or a malformed body
            NetworkError: Vendor could not be reached
        """
        pass

    async def _post(
        self,
        url: str,
        payload: Dict[str, Any],
        headers: Dict[str, str],
        api_key: str,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """POST JSON to the vendor and return the decoded 2xx body."""
        try:
            response = await self._client.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json", **headers},
                params=params,
            )
        except httpx.RequestError as e:
            message = redact(str(e), api_key) or "Network error"
            logger.error(f"{self.kind.value} request failed: {message}")
            raise NetworkError(message, provider=self.kind.value)

        self._check_response_errors(response, api_key)
        try:
            return response.json()
        except ValueError:
            raise ProviderError(
                f"{self.error_label}: {response.status_code} - invalid JSON in response",
                provider=self.kind.value,
                status_code=response.status_code,
                body=redact(response.text, api_key),
            )

    def _normalize(
        self,
        parse: Callable[..., ChatCompletionResponse],
        data: Any,
        model: str,
    ) -> ChatCompletionResponse:
        """Convert a decoded 2xx body, rejecting bodies of the wrong shape."""
        try:
            return parse(data, model=model)
        except ValueError as e:
            logger.error(f"{self.kind.value} returned an unexpected body: {e}")
            raise ProviderError(
                f"{self.error_label}: unexpected response body",
                provider=self.kind.value,
            ) from e

    def _check_response_errors(self, response: httpx.Response, api_key: str) -> None:
        """Raise ProviderError carrying the raw status and body on non-2xx."""
        if response.is_success:
            return

        body = redact(response.text, api_key)
        raise ProviderError(
            f"{self.error_label}: {response.status_code} - {body}",
            provider=self.kind.value,
            status_code=response.status_code,
            body=body,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value!r}, base_url={self._endpoint.base_url!r})"
