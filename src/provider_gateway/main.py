"""
Provider Gateway Service

A FastAPI service that proxies chat completions from the browser chat
client to external LLM vendors behind one uniform contract.

Features:
- Uniform chat completion endpoint (plain JSON and SSE framing)
- Adapters for OpenRouter, Anthropic, OpenAI, Gemini, Groq and DeepSeek
- Per-vendor model-name resolution and Gemini model/version fallback
- Provider API key connection testing
"""

import logging
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource
import httpx

from .api import router as api_router
from .core.config import GatewayConfig, load_config
from .core.errors import GatewayError, GatewayValidationError
from .core.router import GatewayRouter
from .tester import ConnectionTester

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _setup_tracing(config: GatewayConfig) -> None:
    if not config.otel_endpoint:
        logger.info("OTEL_EXPORTER_OTLP_ENDPOINT not set, tracing export disabled")
        return

    resource = Resource.create({"service.name": "provider-gateway"})
    provider = TracerProvider(resource=resource)
    processor = BatchSpanProcessor(OTLPSpanExporter(endpoint=config.otel_endpoint))
    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def create_app(
    config: Optional[GatewayConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the gateway application.

    Args:
        config: Gateway configuration (loaded from the environment if None)
        transport: Optional httpx transport for outbound vendor calls

    Returns:
        Configured FastAPI app
    """
    config = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        _setup_tracing(config)

        # One client shared by every adapter and the tester
        http_client = httpx.AsyncClient(timeout=config.request_timeout, transport=transport)
        app.state.gateway_router = GatewayRouter.from_config(http_client, config)
        app.state.connection_tester = ConnectionTester(http_client, config)

        logger.info(f"Provider gateway started on port {config.port}")
        yield

        # Cleanup
        await http_client.aclose()
        logger.info("Provider gateway stopped")

    app = FastAPI(
        title="Provider Gateway",
        description="Uniform chat completion gateway for external LLM providers",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(GatewayValidationError)
    async def validation_error_handler(request: Request, exc: GatewayValidationError):
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        logger.error(f"Chat completion error ({exc.__class__.__name__}): {exc.message}")
        return JSONResponse(status_code=500, content={"error": exc.message})

    # The exception text may carry request data, so only its type is logged
    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled {exc.__class__.__name__} on {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/", response_class=HTMLResponse)
    async def index():
        return (
            "<h1>Provider Gateway API Server</h1>"
            "<p>The server is running! Use <code>/api/health</code> to check status.</p>"
        )

    app.include_router(api_router)

    # Instrument with OpenTelemetry
    FastAPIInstrumentor.instrument_app(app)

    return app


app = create_app()


def run() -> None:
    """Console entry point."""
    import uvicorn

    config = app.state.config
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    run()
