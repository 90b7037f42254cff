"""
Tests for the Gemini adapter and its 404-driven fallback.
"""

import logging

import httpx
import pytest

from provider_gateway.adapters import GeminiAdapter
from provider_gateway.core.config import DEFAULT_ENDPOINTS
from provider_gateway.core.errors import NetworkError, ProviderError

from conftest import API_KEY, StubVendor, make_request

PRIMARY_PATH = "/v1beta/models/gemini-1.5-pro:generateContent"
FALLBACK_PATH = "/v1/models/gemini-1.5-flash:generateContent"
LIST_PATH = "/v1beta/models"


def gemini_reply(text="Hi", model_version=None):
    data = {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}
    if model_version:
        data["modelVersion"] = model_version
    return httpx.Response(200, json=data)


def routed(responses):
    """Handler answering by URL path; unknown paths get a 500."""
    def handler(request):
        answer = responses.get(request.url.path)
        if answer is None:
            return httpx.Response(500, text="unexpected path")
        if callable(answer):
            return answer(request)
        return answer
    return handler


def paths(vendor):
    return [r.url.path for r in vendor.requests]


class TestGeminiPayload:
    """Test generateContent request construction."""

    @pytest.mark.asyncio
    async def test_wire_request(self):
        """Key travels as a query parameter; system prompt becomes system_instruction."""
        vendor = StubVendor(routed({PRIMARY_PATH: gemini_reply()}))
        async with vendor.client() as client:
            adapter = GeminiAdapter(client, DEFAULT_ENDPOINTS["gemini"])
            await adapter.chat_completion(make_request(
                provider="gemini",
                model="google/gemini-1.5-pro",
                messages=[
                    {"role": "system", "content": "Be brief"},
                    {"role": "user", "content": "Hello"},
                    {"role": "assistant", "content": "Hi"},
                    {"role": "user", "content": "Bye"},
                ],
            ))

        request = vendor.requests[0]
        assert request.url.host == "generativelanguage.googleapis.com"
        assert request.url.path == PRIMARY_PATH
        assert request.url.params["key"] == API_KEY
        assert "authorization" not in request.headers

        body = vendor.body()
        assert body["system_instruction"] == {"parts": [{"text": "Be brief"}]}
        assert body["contents"] == [
            {"role": "user", "parts": [{"text": "Hello"}]},
            {"role": "model", "parts": [{"text": "Hi"}]},
            {"role": "user", "parts": [{"text": "Bye"}]},
        ]
        assert body["generationConfig"] == {"maxOutputTokens": 2048}

    @pytest.mark.asyncio
    async def test_flash_alias_rewritten(self):
        """gemini-2.0-flash is rewritten to its -exp variant."""
        vendor = StubVendor(routed({
            "/v1beta/models/gemini-2.0-flash-exp:generateContent": gemini_reply(),
        }))
        async with vendor.client() as client:
            adapter = GeminiAdapter(client, DEFAULT_ENDPOINTS["gemini"])
            await adapter.chat_completion(make_request(provider="gemini", model="google/gemini-2.0-flash"))

        assert paths(vendor) == ["/v1beta/models/gemini-2.0-flash-exp:generateContent"]
        assert "system_instruction" not in vendor.body()

    @pytest.mark.asyncio
    async def test_model_version_reported(self):
        """The vendor-reported modelVersion wins over the requested id."""
        vendor = StubVendor(routed({PRIMARY_PATH: gemini_reply("Hi", "gemini-1.5-pro-002")}))
        async with vendor.client() as client:
            adapter = GeminiAdapter(client, DEFAULT_ENDPOINTS["gemini"])
            response = await adapter.chat_completion(make_request(provider="gemini", model="gemini-1.5-pro"))

        assert response.content == "Hi"
        assert response.model == "gemini-1.5-pro-002"


class TestGeminiFallback:
    """Test the model/version fallback sequence."""

    @pytest.mark.asyncio
    async def test_404_falls_back_once_and_succeeds(self):
        """A 404 on the primary model moves to gemini-1.5-flash on v1."""
        vendor = StubVendor(routed({
            PRIMARY_PATH: httpx.Response(404, text="model not found"),
            FALLBACK_PATH: gemini_reply("from flash"),
        }))
        async with vendor.client() as client:
            adapter = GeminiAdapter(client, DEFAULT_ENDPOINTS["gemini"])
            response = await adapter.chat_completion(make_request(provider="gemini", model="gemini-1.5-pro"))

        assert paths(vendor) == [PRIMARY_PATH, FALLBACK_PATH]
        assert response.content == "from flash"
        assert response.model == "gemini-1.5-flash"

    @pytest.mark.asyncio
    async def test_non_404_is_terminal(self):
        """Non-404 failures on the primary attempt are not retried."""
        vendor = StubVendor(routed({
            PRIMARY_PATH: httpx.Response(403, text="API key not valid"),
        }))
        async with vendor.client() as client:
            adapter = GeminiAdapter(client, DEFAULT_ENDPOINTS["gemini"])
            with pytest.raises(ProviderError) as exc:
                await adapter.chat_completion(make_request(provider="gemini", model="gemini-1.5-pro"))

        assert paths(vendor) == [PRIMARY_PATH]
        assert exc.value.status_code == 403
        assert exc.value.message == "Gemini API error: 403 - API key not valid"

    @pytest.mark.asyncio
    async def test_network_error_on_primary_is_terminal(self):
        """Test network error on the primary attempt is not retried."""
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        vendor = StubVendor(routed({PRIMARY_PATH: refuse}))
        async with vendor.client() as client:
            adapter = GeminiAdapter(client, DEFAULT_ENDPOINTS["gemini"])
            with pytest.raises(NetworkError):
                await adapter.chat_completion(make_request(provider="gemini", model="gemini-1.5-pro"))

        assert paths(vendor) == [PRIMARY_PATH]

    @pytest.mark.asyncio
    async def test_second_failure_runs_diagnostic_and_reports_fallback_status(self, caplog):
        """A failed fallback lists models, then raises the fallback's error."""
        vendor = StubVendor(routed({
            PRIMARY_PATH: httpx.Response(404, text="model not found"),
            FALLBACK_PATH: httpx.Response(429, text="quota exceeded"),
            LIST_PATH: httpx.Response(200, json={"models": [{"name": "models/gemini-pro"}]}),
        }))
        caplog.set_level(logging.INFO)
        async with vendor.client() as client:
            adapter = GeminiAdapter(client, DEFAULT_ENDPOINTS["gemini"])
            with pytest.raises(ProviderError) as exc:
                await adapter.chat_completion(make_request(provider="gemini", model="gemini-1.5-pro"))

        assert paths(vendor) == [PRIMARY_PATH, FALLBACK_PATH, LIST_PATH]
        assert vendor.requests[2].method == "GET"
        assert exc.value.status_code == 429
        assert exc.value.message == "Gemini API error: 429 - quota exceeded"
        assert "models/gemini-pro" in caplog.text
        assert API_KEY not in caplog.text

    @pytest.mark.asyncio
    async def test_diagnostic_failure_is_swallowed(self):
        """Errors from the diagnostic call do not replace the fallback error."""
        def refuse(request):
            raise httpx.ConnectError(f"cannot reach {request.url}", request=request)

        vendor = StubVendor(routed({
            PRIMARY_PATH: httpx.Response(404, text="missing"),
            FALLBACK_PATH: httpx.Response(404, text="also missing"),
            LIST_PATH: refuse,
        }))
        async with vendor.client() as client:
            adapter = GeminiAdapter(client, DEFAULT_ENDPOINTS["gemini"])
            with pytest.raises(ProviderError) as exc:
                await adapter.chat_completion(make_request(provider="gemini", model="gemini-1.5-pro"))

        assert len(vendor.requests) == 3
        assert exc.value.message == "Gemini API error: 404 - also missing"

    @pytest.mark.asyncio
    async def test_key_redacted_from_network_errors(self):
        """Gemini request URLs carry the key, so network errors are redacted."""
        def refuse(request):
            raise httpx.ConnectError(f"cannot reach {request.url}", request=request)

        vendor = StubVendor(refuse)
        async with vendor.client() as client:
            adapter = GeminiAdapter(client, DEFAULT_ENDPOINTS["gemini"])
            with pytest.raises(NetworkError) as exc:
                await adapter.chat_completion(make_request(provider="gemini"))

        assert API_KEY not in exc.value.message
        assert "***" in exc.value.message

    @pytest.mark.asyncio
    async def test_malformed_body_is_terminal(self):
        """A 2xx body with a null candidate fails without trying the fallback."""
        vendor = StubVendor(routed({
            PRIMARY_PATH: httpx.Response(200, json={"candidates": [None]}),
            FALLBACK_PATH: gemini_reply("from flash"),
        }))
        async with vendor.client() as client:
            adapter = GeminiAdapter(client, DEFAULT_ENDPOINTS["gemini"])
            with pytest.raises(ProviderError) as exc:
                await adapter.chat_completion(make_request(provider="gemini", model="gemini-1.5-pro"))

        assert paths(vendor) == [PRIMARY_PATH]
        assert exc.value.message == "Gemini API error: unexpected response body"
