# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import logging

import httpx
from opentelemetry import trace

from .config import SENTINEL_TOKEN, EdgeRuntimeConfig
from .errors import AuthenticationError

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class TokenExchangeError(Exception):
    pass


async def fetch_access_token(client: httpx.AsyncClient, cfg: EdgeRuntimeConfig) -> str:
    """Exchange client credentials for a bearer token.

    Without configured credentials no request is made and the sentinel token
    is returned (development mode). Every failure of the exchange surfaces as
    AuthenticationError; the cause is only logged.
    """
    if not cfg.has_credentials:
        logger.warning("[EDGE] No token issuer credentials configured, using test mode")
        return SENTINEL_TOKEN

    with tracer.start_as_current_span("edge.token_exchange") as span:
        span.set_attribute("http.url", cfg.token_url)
        try:
            resp = await client.post(
                cfg.token_url,
                json={
                    "client_id": cfg.client_id,
                    "client_secret": cfg.client_secret,
                    "audience": cfg.audience,
                    "grant_type": "client_credentials",
                },
            )
            span.set_attribute("http.status_code", resp.status_code)
            if not resp.is_success:
                raise TokenExchangeError(
                    f"Failed to get access token: {resp.status_code} {resp.text}"
                )
            data = resp.json()
            token = data.get("access_token") if isinstance(data, dict) else None
            if not isinstance(token, str) or not token:
                raise TokenExchangeError("Token response missing access_token")
            return token
        except Exception as e:
            logger.error(f"[EDGE] Error getting access token: {e}")
            raise AuthenticationError("Failed to authenticate with token issuer") from None
