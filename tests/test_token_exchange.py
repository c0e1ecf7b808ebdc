# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
"""
Test the client-credentials token exchange in isolation.
"""
import json
import logging

import httpx
import pytest

from zenobia_edge import AuthenticationError, EdgeRuntimeConfig, SENTINEL_TOKEN, fetch_access_token

from mock_payment_api import TOKEN_URL


def _cfg(**overrides) -> EdgeRuntimeConfig:
    values = {
        "client_id": "client-123",
        "client_secret": "secret-456",
        "token_url": TOKEN_URL,
        "audience": "https://dashboard.example.com",
    }
    values.update(overrides)
    return EdgeRuntimeConfig(**values)


@pytest.mark.asyncio
class TestFetchAccessToken:
    async def test_returns_issued_token(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"access_token": "abc", "expires_in": 86400})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            token = await fetch_access_token(client, _cfg())

        assert token == "abc"
        [request] = seen
        assert request.method == "POST"
        assert str(request.url) == TOKEN_URL
        assert json.loads(request.content)["grant_type"] == "client_credentials"

    @pytest.mark.parametrize("missing", ["client_id", "client_secret"])
    async def test_missing_credentials_skip_network(self, missing, caplog):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("token endpoint must not be called")

        caplog.set_level(logging.WARNING, logger="zenobia_edge.auth")
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            token = await fetch_access_token(client, _cfg(**{missing: None}))

        assert token == SENTINEL_TOKEN
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    async def test_error_status_collapses_to_authentication_error(self, caplog):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, text="Unauthorized client")

        caplog.set_level(logging.ERROR, logger="zenobia_edge.auth")
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(AuthenticationError) as exc_info:
                await fetch_access_token(client, _cfg())

        assert str(exc_info.value) == "Failed to authenticate with token issuer"
        assert exc_info.value.__cause__ is None
        # Detail stays in the log, secrets do not
        assert "403" in caplog.text
        assert "Unauthorized client" in caplog.text
        assert "secret-456" not in caplog.text

    @pytest.mark.parametrize(
        "reply",
        [
            httpx.Response(200, text="not json"),
            httpx.Response(200, json={"token_type": "Bearer"}),
            httpx.Response(200, json=["abc"]),
        ],
    )
    async def test_unusable_reply_collapses_to_authentication_error(self, reply):
        async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: reply)) as client:
            with pytest.raises(AuthenticationError):
                await fetch_access_token(client, _cfg())

    async def test_network_error_collapses_to_authentication_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(AuthenticationError):
                await fetch_access_token(client, _cfg())
