"""
Configuration loading for the provider gateway.

Server settings come from environment variables; vendor endpoints have
built-in defaults that an optional YAML file may override.
"""

import os
import logging
from types import MappingProxyType
from typing import Dict, Any, Mapping, Optional
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderEndpoint:
    """Where and how to reach one vendor."""
    base_url: str
    chat_path: str = "/chat/completions"
    models_path: str = "/models"

    @property
    def chat_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.chat_path}"

    @property
    def models_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.models_path}"


# Gemini paths carry the API version, so its base URL is the bare host.
DEFAULT_ENDPOINTS: Mapping[str, ProviderEndpoint] = MappingProxyType({
    "openrouter": ProviderEndpoint("https://openrouter.ai/api/v1"),
    "anthropic": ProviderEndpoint("https://api.anthropic.com/v1", chat_path="/messages"),
    "openai": ProviderEndpoint("https://api.openai.com/v1"),
    "groq": ProviderEndpoint("https://api.groq.com/openai/v1"),
    "deepseek": ProviderEndpoint("https://api.deepseek.com/v1"),
    "gemini": ProviderEndpoint(
        "https://generativelanguage.googleapis.com",
        chat_path="/{version}/models/{model}:generateContent",
        models_path="/v1beta/models",
    ),
})


@dataclass
class GatewayConfig:
    """Complete gateway configuration."""
    host: str = "0.0.0.0"
    port: int = 3001
    request_timeout: float = 60.0
    otel_endpoint: Optional[str] = None
    anthropic_version: str = "2023-06-01"
    openrouter_referer: str = "https://teleaon.ai"
    openrouter_title: str = "Teleaon Bot"
    endpoints: Dict[str, ProviderEndpoint] = field(
        default_factory=lambda: dict(DEFAULT_ENDPOINTS)
    )

    def endpoint_for(self, provider: str) -> Optional[ProviderEndpoint]:
        return self.endpoints.get(provider)


def load_config(config_path: Optional[str] = None) -> GatewayConfig:
    """
    Load gateway configuration from the environment and an optional YAML file.

    Args:
        config_path: Path to config file. If None, ``GATEWAY_CONFIG`` or
            the default locations are tried.

    Returns:
        Loaded configuration
    """
    config = GatewayConfig(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3001")),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "60")),
        otel_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or None,
        anthropic_version=os.getenv("ANTHROPIC_VERSION", "2023-06-01"),
        openrouter_referer=os.getenv("OPENROUTER_REFERER", "https://teleaon.ai"),
        openrouter_title=os.getenv("OPENROUTER_TITLE", "Teleaon Bot"),
    )

    config_path = config_path or os.getenv("GATEWAY_CONFIG")
    if config_path is None:
        for p in (
            Path("config/provider-gateway/gateway.yaml"),
            Path("/etc/provider-gateway/gateway.yaml"),
        ):
            if p.exists():
                config_path = str(p)
                break

    if config_path is None:
        return config

    if not Path(config_path).exists():
        logger.warning(f"Gateway config file {config_path} not found, using defaults")
        return config

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load config from {config_path}: {e}")
        return config

    if not isinstance(data, dict):
        logger.error(f"Ignoring {config_path}: expected a mapping at the top level")
        return config

    return _apply_overrides(config, data)


def _apply_overrides(config: GatewayConfig, data: Dict[str, Any]) -> GatewayConfig:
    """Merge a parsed YAML document into ``config``."""
    for key in ("host", "anthropic_version", "openrouter_referer", "openrouter_title"):
        if data.get(key):
            setattr(config, key, str(data[key]))
    if data.get("port"):
        config.port = int(data["port"])
    if data.get("request_timeout"):
        config.request_timeout = float(data["request_timeout"])

    for name, overrides in (data.get("providers") or {}).items():
        name = str(name).lower()
        current = config.endpoints.get(name)
        if current is None:
            logger.warning(f"Ignoring endpoint override for unknown provider: {name}")
            continue
        overrides = {
            k: v for k, v in (overrides or {}).items()
            if k in ("base_url", "chat_path", "models_path") and v
        }
        config.endpoints[name] = replace(current, **overrides)
        logger.info(f"Endpoint override for {name}: {config.endpoints[name].base_url}")

    return config
