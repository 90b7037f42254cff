"""
Provider adapters for the supported LLM vendors.
"""

from .openrouter_adapter import OpenRouterAdapter
from .anthropic_adapter import AnthropicAdapter
from .openai_adapter import OpenAIAdapter
from .openai_compatible_adapter import OpenAICompatibleAdapter
from .gemini_adapter import GeminiAdapter

__all__ = [
    "OpenRouterAdapter",
    "AnthropicAdapter",
    "OpenAIAdapter",
    "OpenAICompatibleAdapter",
    "GeminiAdapter",
]
