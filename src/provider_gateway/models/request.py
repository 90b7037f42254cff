"""
Uniform request models accepted by the gateway.
"""

from typing import Optional, List, Dict, Any, Literal
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.errors import GatewayValidationError
from ..core.secrets import mask_key

DEFAULT_MODEL = "anthropic/claude-sonnet-4"
DEFAULT_PROVIDER = "openrouter"


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts)


class ChatMessage(BaseModel):
    """A single conversation turn. Plain text only."""
    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "assistant"]
    content: str


class ChatCompletionRequest(BaseModel):
    """
    Vendor-agnostic chat completion request.

    Field names follow the browser client's camelCase JSON
    (``apiKey``); attributes are snake_case.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    messages: List[ChatMessage] = Field(..., min_length=1)
    model: str = Field(default=DEFAULT_MODEL)
    api_key: str = Field(..., alias="apiKey", min_length=1, repr=False)
    provider: str = Field(default=DEFAULT_PROVIDER)
    stream: bool = Field(default=False)

    @classmethod
    def from_payload(cls, payload: Any) -> "ChatCompletionRequest":
        """
        Validate a raw JSON body.

        Missing values for ``model`` and ``provider`` (absent, null or
        empty) fall back to the gateway defaults.

        Raises:
            GatewayValidationError: If messages or apiKey are missing,
                or the body is otherwise malformed.
        """
        if not isinstance(payload, dict):
            raise GatewayValidationError("Messages array is required")

        messages = payload.get("messages")
        if not isinstance(messages, list) or not messages:
            raise GatewayValidationError("Messages array is required")

        if not payload.get("apiKey"):
            raise GatewayValidationError("API key is required")

        data: Dict[str, Any] = {
            "messages": messages,
            "apiKey": payload["apiKey"],
            "model": payload.get("model") or DEFAULT_MODEL,
            "provider": payload.get("provider") or DEFAULT_PROVIDER,
        }
        if payload.get("stream") is not None:
            data["stream"] = payload["stream"]

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise GatewayValidationError(f"Invalid request: {_describe(e)}")

    def describe(self) -> str:
        """One-line summary safe for logs."""
        return (
            f"provider={self.provider}, model={self.model}, "
            f"messages={len(self.messages)}, api_key={mask_key(self.api_key)}"
        )


class ConnectionTestRequest(BaseModel):
    """Body of a provider connection test."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    provider: str = Field(..., min_length=1)
    api_key: str = Field(..., alias="apiKey", min_length=1, repr=False)
    api_base: Optional[str] = Field(default=None, alias="apiBase")

    @classmethod
    def from_payload(cls, payload: Any) -> "ConnectionTestRequest":
        """Validate a raw JSON body, requiring provider and apiKey."""
        if not isinstance(payload, dict) or not payload.get("provider") or not payload.get("apiKey"):
            raise GatewayValidationError("Provider and API key are required")

        try:
            return cls.model_validate({
                "provider": payload["provider"],
                "apiKey": payload["apiKey"],
                "apiBase": payload.get("apiBase") or None,
            })
        except ValidationError as e:
            raise GatewayValidationError(f"Invalid request: {_describe(e)}")
