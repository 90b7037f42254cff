"""
Gateway data models.
"""

from .request import ChatMessage, ChatCompletionRequest, ConnectionTestRequest
from .response import ChatCompletionResponse, ConnectionTestResult, Usage

__all__ = [
    "ChatMessage",
    "ChatCompletionRequest",
    "ConnectionTestRequest",
    "ChatCompletionResponse",
    "ConnectionTestResult",
    "Usage",
]
