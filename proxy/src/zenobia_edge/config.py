# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import os
from typing import Optional

import httpx
from pydantic import BaseModel, Field

# Used as the bearer token when no client credentials are configured
SENTINEL_TOKEN = "test_token"

DEFAULT_TOKEN_URL = "https://dev-iols5y7cp32hlyr1.us.auth0.com/oauth/token"
DEFAULT_AUDIENCE = "https://dashboard.zenobiapay.com"
DEFAULT_PAYMENT_API_URL = "https://api.zenobiapay.com/create-transfer-request"

HTTP_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _env_str(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_timeout() -> Optional[float]:
    raw = _env_str("EDGE_UPSTREAM_TIMEOUT_S")
    return float(raw) if raw else None


class EdgeRuntimeConfig(BaseModel):
    client_id: Optional[str] = Field(default_factory=lambda: _env_str("ZENOBIA_CLIENT_ID"))
    client_secret: Optional[str] = Field(
        default_factory=lambda: _env_str("ZENOBIA_CLIENT_SECRET"), repr=False
    )
    token_url: str = Field(default_factory=lambda: os.getenv("EDGE_TOKEN_URL", DEFAULT_TOKEN_URL))
    audience: str = Field(default_factory=lambda: os.getenv("EDGE_TOKEN_AUDIENCE", DEFAULT_AUDIENCE))
    payment_api_url: str = Field(
        default_factory=lambda: os.getenv("EDGE_PAYMENT_API_URL", DEFAULT_PAYMENT_API_URL)
    )
    asset_root: str = Field(default_factory=lambda: os.getenv("EDGE_ASSET_ROOT", "dist"))
    index_path: str = Field(default_factory=lambda: os.getenv("EDGE_INDEX_PATH", "/index.html"))
    # None disables httpx timeouts; the hosting platform bounds request lifetime
    timeout_s: Optional[float] = Field(default_factory=_env_timeout)

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)


def get_edge_cfg() -> EdgeRuntimeConfig:
    return EdgeRuntimeConfig()


def get_upstream_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for outbound calls. Overridden in tests; None means the network."""
    return None
