"""
Uniform response models returned by the gateway.
"""

from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class UnexpectedBodyError(ValueError):
    """A 2xx vendor body does not have the structure its API documents."""
    pass


def _object(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise UnexpectedBodyError(f"expected an object at {where}")
    return value


def _first(value: Any, where: str) -> Dict[str, Any]:
    """First element of an optional array of objects; ``{}`` when absent or empty."""
    if not value:
        return {}
    if not isinstance(value, list):
        raise UnexpectedBodyError(f"expected an array at {where}")
    return _object(value[0], f"{where}[0]")


def _text(value: Any, where: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise UnexpectedBodyError(f"expected a string at {where}")
    return value


class Usage(BaseModel):
    """Token usage information."""
    model_config = ConfigDict(populate_by_name=True)

    prompt_tokens: int = Field(default=0, alias="promptTokens")
    completion_tokens: int = Field(default=0, alias="completionTokens")
    total_tokens: int = Field(default=0, alias="totalTokens")

    @classmethod
    def from_openai(cls, data: Optional[Dict[str, Any]]) -> Optional["Usage"]:
        """Map OpenAI-style ``usage``; ``None`` when the vendor sent none."""
        if not data:
            return None
        data = _object(data, "usage")
        return cls(
            prompt_tokens=data.get("prompt_tokens") or 0,
            completion_tokens=data.get("completion_tokens") or 0,
            total_tokens=data.get("total_tokens") or 0,
        )

    @classmethod
    def from_anthropic(cls, data: Optional[Dict[str, Any]]) -> Optional["Usage"]:
        """Map Anthropic ``usage`` (input/output tokens)."""
        if not data:
            return None
        data = _object(data, "usage")
        usage = cls(
            prompt_tokens=data.get("input_tokens") or 0,
            completion_tokens=data.get("output_tokens") or 0,
        )
        usage.total_tokens = usage.prompt_tokens + usage.completion_tokens
        return usage

    @classmethod
    def from_gemini(cls, data: Optional[Dict[str, Any]]) -> Optional["Usage"]:
        """Map Gemini ``usageMetadata``."""
        if not data:
            return None
        data = _object(data, "usageMetadata")
        return cls(
            prompt_tokens=data.get("promptTokenCount") or 0,
            completion_tokens=data.get("candidatesTokenCount") or 0,
            total_tokens=data.get("totalTokenCount") or 0,
        )


class ChatCompletionResponse(BaseModel):
    """
    Vendor-agnostic chat completion response.

    ``model`` is the model the vendor actually used; ``usage`` is only
    present when the vendor reported token accounting.

    The ``from_*`` constructors tolerate missing fields but raise
    UnexpectedBodyError (a ValueError) when a field has the wrong type.
    """
    model_config = ConfigDict(populate_by_name=True)

    content: str = ""
    model: str = ""
    usage: Optional[Usage] = None

    @classmethod
    def from_openai(cls, data: Dict[str, Any], model: str) -> "ChatCompletionResponse":
        """Create from an OpenAI-shaped body (OpenAI, OpenRouter, Groq, DeepSeek)."""
        data = _object(data, "body")
        choice = _first(data.get("choices"), "choices")
        message = _object(choice.get("message") or {}, "choices[0].message")
        return cls(
            content=_text(message.get("content"), "choices[0].message.content"),
            model=_text(data.get("model"), "model") or model,
            usage=Usage.from_openai(data.get("usage")),
        )

    @classmethod
    def from_anthropic(cls, data: Dict[str, Any], model: str) -> "ChatCompletionResponse":
        """Create from an Anthropic Messages API body."""
        data = _object(data, "body")
        blocks = data.get("content") or []
        if not isinstance(blocks, list):
            raise UnexpectedBodyError("expected an array at content")

        content = ""
        for index, block in enumerate(blocks):
            block = _object(block, f"content[{index}]")
            if block.get("type") == "text":
                content += _text(block.get("text"), f"content[{index}].text")

        return cls(
            content=content,
            model=_text(data.get("model"), "model") or model,
            usage=Usage.from_anthropic(data.get("usage")),
        )

    @classmethod
    def from_gemini(cls, data: Dict[str, Any], model: str) -> "ChatCompletionResponse":
        """Create from a Gemini generateContent body."""
        data = _object(data, "body")
        candidate = _first(data.get("candidates"), "candidates")
        candidate_content = _object(candidate.get("content") or {}, "candidates[0].content")
        part = _first(candidate_content.get("parts"), "candidates[0].content.parts")
        return cls(
            content=_text(part.get("text"), "candidates[0].content.parts[0].text"),
            model=_text(data.get("modelVersion"), "modelVersion") or model,
            usage=Usage.from_gemini(data.get("usageMetadata")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape sent to the browser client."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ConnectionTestResult(BaseModel):
    """Outcome of a provider connection test."""
    success: bool
    message: str
