# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse

from .assets import router as asset_router
from .config import EdgeRuntimeConfig, get_edge_cfg
from .transfer import router as transfer_router

logger = logging.getLogger(__name__)


def build_app() -> FastAPI:
    app = FastAPI(
        title="Zenobia Edge Router",
        description="SPA asset router and transfer proxy for the Zenobia Pay API",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Outermost boundary: anything that escapes the routes becomes a bare 404
    @app.middleware("http")
    async def not_found_boundary(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(f"[EDGE] Unhandled error for {request.method} {request.url.path}: {e!r}")
            return PlainTextResponse("Not Found", status_code=404)

    @app.get("/health")
    async def health(cfg: EdgeRuntimeConfig = Depends(get_edge_cfg)) -> dict:
        return {
            "status": "ok",
            "time": datetime.now(timezone.utc).isoformat(),
            "token_url": cfg.token_url,
            "payment_api_url": cfg.payment_api_url,
            "credentials_configured": cfg.has_credentials,
        }

    app.include_router(transfer_router)
    # Catch-all, must stay last
    app.include_router(asset_router)

    logger.info("Edge router app initialized")
    return app
