"""
Model-name resolution.

Callers may send any model id (often an OpenRouter-style
``vendor/model``). Each adapter maps it to an id its vendor accepts,
substituting a default when the id clearly belongs to another vendor.
"""

from types import MappingProxyType
from typing import List, Mapping, Tuple

ANTHROPIC_DEFAULT_MODEL = "claude-3-5-sonnet-20240620"
OPENAI_DEFAULT_MODEL = "gpt-4o"

ANTHROPIC_ALIASES: Mapping[str, str] = MappingProxyType({
    "claude-opus-4-5": "claude-3-opus-20240229",
    "claude-sonnet-4": "claude-3-5-sonnet-20240620",
})

COMPATIBLE_DEFAULT_MODELS: Mapping[str, str] = MappingProxyType({
    "groq": "llama-3.1-70b-versatile",
    "deepseek": "deepseek-chat",
})

GEMINI_PREFIX = "google/"
GEMINI_ALIASES: Mapping[str, str] = MappingProxyType({
    "gemini-2.0-flash": "gemini-2.0-flash-exp",
})

GEMINI_PRIMARY_VERSION = "v1beta"
GEMINI_FALLBACK: Tuple[str, str] = ("gemini-1.5-flash", "v1")


def resolve_prefixed_model(model: str, prefix: str, default: str) -> str:
    """
    Strip ``<prefix>/`` from ``model``, or return ``default`` when the id
    names another vendor.

    >>> resolve_prefixed_model("openai/gpt-4o-mini", "openai", "gpt-4o")
    'gpt-4o-mini'
    >>> resolve_prefixed_model("anthropic/claude-3-haiku", "openai", "gpt-4o")
    'gpt-4o'
    """
    vendor_prefix = f"{prefix}/"
    if "/" in model and not model.startswith(vendor_prefix):
        return default
    if model.startswith(vendor_prefix):
        return model[len(vendor_prefix):]
    return model


def resolve_anthropic_model(model: str) -> str:
    resolved = resolve_prefixed_model(model, "anthropic", ANTHROPIC_DEFAULT_MODEL)
    return ANTHROPIC_ALIASES.get(resolved, resolved)


def resolve_openai_model(model: str) -> str:
    return resolve_prefixed_model(model, "openai", OPENAI_DEFAULT_MODEL)


def resolve_compatible_model(model: str, provider: str) -> str:
    """Resolve for an OpenAI-compatible vendor such as Groq or DeepSeek."""
    provider = provider.lower()
    default = COMPATIBLE_DEFAULT_MODELS.get(provider) or model.rsplit("/", 1)[-1]
    return resolve_prefixed_model(model, provider, default)


def resolve_gemini_model(model: str) -> str:
    if model.startswith(GEMINI_PREFIX):
        model = model[len(GEMINI_PREFIX):]
    return GEMINI_ALIASES.get(model, model)


def gemini_attempt_plan(model: str) -> List[Tuple[str, str]]:
    """Ordered ``(model_id, api_version)`` candidates for a Gemini call."""
    return [
        (resolve_gemini_model(model), GEMINI_PRIMARY_VERSION),
        GEMINI_FALLBACK,
    ]
