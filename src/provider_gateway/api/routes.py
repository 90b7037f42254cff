"""
REST API routes for the provider gateway.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, AsyncIterator

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, StreamingResponse

from ..core.errors import GatewayError
from ..core.router import GatewayRouter
from ..core.secrets import redact
from ..models.request import ChatCompletionRequest, ConnectionTestRequest
from ..tester import ConnectionTester

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _gateway_router(request: Request) -> GatewayRouter:
    return request.app.state.gateway_router


def _connection_tester(request: Request) -> ConnectionTester:
    return request.app.state.connection_tester


async def _json_body(request: Request) -> Any:
    """Decoded JSON body; None when it is empty or not valid JSON."""
    try:
        return await request.json()
    except ValueError:
        return None


def _sse(data: Any) -> str:
    return f"data: {json.dumps(data)}\n\n"


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


# Chat

@router.post("/chat/completion")
async def chat_completion(request: Request):
    """Run a chat completion against the requested provider."""
    chat_request = ChatCompletionRequest.from_payload(await _json_body(request))
    logger.info(f"Chat request received: {chat_request.describe()}")

    response = await _gateway_router(request).route(chat_request)
    return response.to_dict()


@router.post("/chat/stream")
async def chat_stream(request: Request):
    """
    Chat completion framed as Server-Sent Events.

    The vendor response is awaited in full and sent as a single
    ``data:`` frame followed by ``data: [DONE]``.
    """
    chat_request = ChatCompletionRequest.from_payload(await _json_body(request))
    logger.info(f"Stream request received: {chat_request.describe()}")
    gateway_router = _gateway_router(request)

    async def events() -> AsyncIterator[str]:
        try:
            response = await gateway_router.route(chat_request)
            yield _sse(response.to_dict())
        except GatewayError as e:
            logger.error(f"Stream error: {e.message}")
            yield _sse({"error": e.message})
        except Exception as e:
            message = redact(str(e), chat_request.api_key) or "Internal server error"
            logger.error(f"Unexpected stream error ({e.__class__.__name__}): {message}")
            yield _sse({"error": message})
        yield "data: [DONE]\n\n"

    return StreamingResponse(
        events(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )


# Providers

@router.post("/providers/test")
async def check_provider_connection(request: Request):
    """Validate a provider API key. Failures are reported in the 200 body."""
    try:
        test_request = ConnectionTestRequest.from_payload(await _json_body(request))
    except GatewayError as e:
        return JSONResponse(status_code=400, content={"success": False, "message": e.message})

    result = await _connection_tester(request).test(
        test_request.provider,
        test_request.api_key,
        test_request.api_base,
    )
    return result.model_dump()
