#!/usr/bin/env python3
# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
"""
Standalone runner for the Zenobia edge router.

Env:
  - EDGE_PORT (default: 8787)
  - EDGE_HOST (default: 0.0.0.0)
  - ZENOBIA_CLIENT_ID / ZENOBIA_CLIENT_SECRET (unset: test-token mode)
  - EDGE_ASSET_ROOT (default: dist)
  - EDGE_UPSTREAM_TIMEOUT_S (default: no timeout)
"""

import logging
import os
import sys

# Add source tree to Python path
repo_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(repo_root, 'proxy', 'src'))

# Load .env BEFORE building the app so credentials are visible to the config
from dotenv import load_dotenv  # type: ignore
load_dotenv()

from zenobia_edge import build_app
from zenobia_edge.otel import otel_requested, setup_otel_from_env


logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("edge_router")

if otel_requested():
    setup_otel_from_env()
    logger.info("OpenTelemetry tracing enabled")

app = build_app()


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("EDGE_HOST", "0.0.0.0")
    port = int(os.getenv("EDGE_PORT", "8787"))
    uvicorn.run("run_edge_router:app", host=host, port=port, reload=True, log_level="info")
