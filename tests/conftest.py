# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
import os
import sys
from typing import Dict, List

import pytest


def _add_source_to_syspath() -> None:
    root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    for path in (root, os.path.join(root, "proxy", "src")):
        if path not in sys.path:
            sys.path.insert(0, path)


_add_source_to_syspath()


# Import after adding to syspath
from fastapi import FastAPI
from fastapi.testclient import TestClient

from zenobia_edge import Asset, MemoryAssetStore, build_app
from zenobia_edge.assets import get_asset_store

from mock_payment_api import PAYMENT_API_URL, TOKEN_URL
from sample_assets import APP_JS, INDEX_HTML, MAIN_CSS


class RecordingAssetStore(MemoryAssetStore):
    """MemoryAssetStore that remembers which keys were requested."""

    def __init__(self, assets: Dict[str, str]):
        super().__init__(assets)
        self.requested: List[str] = []

    async def get(self, key: str) -> Asset:
        self.requested.append(key)
        return await super().get(key)


@pytest.fixture
def test_env(monkeypatch) -> None:
    """Endpoints pointed at example hosts, no credentials (test-token mode)."""
    monkeypatch.setenv("EDGE_TOKEN_URL", TOKEN_URL)
    monkeypatch.setenv("EDGE_TOKEN_AUDIENCE", "https://dashboard.example.com")
    monkeypatch.setenv("EDGE_PAYMENT_API_URL", PAYMENT_API_URL)
    monkeypatch.setenv("EDGE_INDEX_PATH", "/index.html")
    monkeypatch.delenv("ZENOBIA_CLIENT_ID", raising=False)
    monkeypatch.delenv("ZENOBIA_CLIENT_SECRET", raising=False)
    monkeypatch.delenv("EDGE_UPSTREAM_TIMEOUT_S", raising=False)


@pytest.fixture
def credentials_env(monkeypatch, test_env) -> None:
    monkeypatch.setenv("ZENOBIA_CLIENT_ID", "client-123")
    monkeypatch.setenv("ZENOBIA_CLIENT_SECRET", "secret-456")


@pytest.fixture
def asset_store() -> RecordingAssetStore:
    return RecordingAssetStore(
        {
            "/index.html": INDEX_HTML,
            "/app.js": APP_JS,
            "/styles/main.css": MAIN_CSS,
        }
    )


@pytest.fixture
def app(asset_store: RecordingAssetStore, test_env) -> FastAPI:
    app = build_app()
    app.dependency_overrides[get_asset_store] = lambda: asset_store
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def sample_transfer() -> dict:
    return {
        "amount": 100,
        "statementItems": [
            {"name": "Classic Tee", "amount": 60},
            {"name": "Canvas Tote", "amount": 40},
        ],
    }
