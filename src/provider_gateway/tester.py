"""
Provider connection tester.

Validates an API key against a vendor's lightweight "list models"
endpoint before the admin console saves it. Every outcome, including
transport failures, is reported as a ConnectionTestResult; the key is
redacted from all messages and logs.
"""

import json
import logging
from typing import Dict, Optional, Tuple

import httpx

from .core.config import GatewayConfig
from .core.interface import ProviderKind
from .core.secrets import redact
from .models.response import ConnectionTestResult

logger = logging.getLogger(__name__)

ERROR_SNIPPET_LENGTH = 100


def _error_detail(body: str) -> str:
    """Vendor error text: ``error.message``, ``message`` or a body snippet."""
    try:
        data = json.loads(body)
    except ValueError:
        return body[:ERROR_SNIPPET_LENGTH]

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if data.get("message"):
            return str(data["message"])
    return body[:ERROR_SNIPPET_LENGTH]


class ConnectionTester:
    """Checks provider credentials without running a completion."""

    def __init__(self, client: httpx.AsyncClient, config: Optional[GatewayConfig] = None):
        self._client = client
        self._config = config or GatewayConfig()

    def build_request(
        self,
        provider: str,
        api_key: str,
        api_base: Optional[str] = None,
    ) -> Optional[Tuple[str, Dict[str, str], Dict[str, str]]]:
        """
        Resolve ``(url, headers, params)`` for a test call.

        Returns None when the provider is unknown and no ``api_base``
        was given.
        """
        kind = ProviderKind.from_name(provider)

        base_url = api_base
        if not base_url and kind is not None:
            endpoint = self._config.endpoint_for(kind.value)
            base_url = endpoint.models_url if endpoint else None
        if not base_url:
            return None

        headers = {"Content-Type": "application/json"}
        params: Dict[str, str] = {}

        if kind is ProviderKind.ANTHROPIC:
            headers["x-api-key"] = api_key
            headers["anthropic-version"] = self._config.anthropic_version
        elif kind is ProviderKind.GEMINI:
            params["key"] = api_key
        else:
            headers["Authorization"] = f"Bearer {api_key}"

        url = base_url
        if "/models" not in url:
            url = f"{url.rstrip('/')}/models"

        return url, headers, params

    async def test(
        self,
        provider: str,
        api_key: str,
        api_base: Optional[str] = None,
    ) -> ConnectionTestResult:
        """
        Test a provider connection. Never raises.

        Args:
            provider: Provider name (case-insensitive)
            api_key: Key to validate
            api_base: Optional base URL overriding the provider default

        Returns:
            ConnectionTestResult with success flag and a human-readable message
        """
        try:
            success, message = await self._run(provider, api_key, api_base)
        except Exception as e:
            detail = redact(str(e), api_key) or e.__class__.__name__
            logger.error(f"Provider test error for {provider}: {detail}")
            success, message = False, f"Test failed: {detail}"

        return ConnectionTestResult(success=success, message=redact(message, api_key))

    async def _run(
        self,
        provider: str,
        api_key: str,
        api_base: Optional[str],
    ) -> Tuple[bool, str]:
        resolved = self.build_request(provider, api_key, api_base)
        if resolved is None:
            return False, "Unknown provider"

        url, headers, params = resolved
        logger.info(f"Testing {provider} at {redact(url, api_key)}")

        response = await self._client.get(url, headers=headers, params=params or None)

        if response.is_success:
            return True, "Connection successful!"

        return False, f"Connection failed: {response.status_code} - {_error_detail(response.text)}"
