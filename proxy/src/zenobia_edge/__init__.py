# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
"""Zenobia edge router

Serves the storefront SPA's static assets and proxies transfer creation to the
Zenobia Pay API with a server-side client-credentials token.

Usage:
    from zenobia_edge import build_app

    app = build_app()
"""

from .app import build_app
from .assets import (
    Asset,
    AssetStore,
    DirectoryAssetStore,
    MemoryAssetStore,
    resolve_asset_key,
    serve_asset,
)
from .auth import fetch_access_token
from .config import SENTINEL_TOKEN, EdgeRuntimeConfig, get_edge_cfg, get_upstream_transport
from .cors import CORS_HEADERS, CORSRoute, add_cors_headers, preflight_response
from .errors import AssetNotFound, AuthenticationError, EdgeError, UpstreamResponseError
from .otel import setup_otel_from_env
from .routing import AnyMethodRoute
from .transfer import TransferRequest, forward_transfer, parse_transfer_request

__version__ = "0.1.0"

__all__ = [
    "build_app",
    "EdgeRuntimeConfig",
    "get_edge_cfg",
    "get_upstream_transport",
    "SENTINEL_TOKEN",
    "Asset",
    "AssetStore",
    "DirectoryAssetStore",
    "MemoryAssetStore",
    "resolve_asset_key",
    "serve_asset",
    "fetch_access_token",
    "TransferRequest",
    "parse_transfer_request",
    "forward_transfer",
    "CORS_HEADERS",
    "CORSRoute",
    "AnyMethodRoute",
    "add_cors_headers",
    "preflight_response",
    "EdgeError",
    "AuthenticationError",
    "UpstreamResponseError",
    "AssetNotFound",
    "setup_otel_from_env",
]
