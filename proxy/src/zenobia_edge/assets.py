# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Dict, NamedTuple, Union

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from .config import HTTP_METHODS, EdgeRuntimeConfig, get_edge_cfg
from .errors import AssetNotFound
from .routing import AnyMethodRoute

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

router = APIRouter(tags=["static-assets"], route_class=AnyMethodRoute)


class Asset(NamedTuple):
    body: bytes
    content_type: str


def guess_content_type(key: str) -> str:
    content_type, _ = mimetypes.guess_type(key)
    return content_type or DEFAULT_CONTENT_TYPE


class AssetStore:
    """Key-value blob store keyed by request path."""

    async def get(self, key: str) -> Asset:
        raise NotImplementedError


class MemoryAssetStore(AssetStore):
    def __init__(self, assets: Dict[str, Union[bytes, str]]):
        self._assets: Dict[str, bytes] = {
            k: v.encode("utf-8") if isinstance(v, str) else v for k, v in assets.items()
        }

    async def get(self, key: str) -> Asset:
        try:
            body = self._assets[key]
        except KeyError:
            raise AssetNotFound(key)
        return Asset(body=body, content_type=guess_content_type(key))


class DirectoryAssetStore(AssetStore):
    """Serves files from a build output directory, e.g. the SPA's dist/."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()

    def _read(self, key: str) -> Asset:
        path = self._resolve(key)
        try:
            body = path.read_bytes()
        except OSError as e:
            raise AssetNotFound(key) from e
        return Asset(body=body, content_type=guess_content_type(path.name))

    def _resolve(self, key: str) -> Path:
        candidate = (self.root / key.lstrip("/")).resolve()
        if candidate != self.root and self.root not in candidate.parents:
            raise AssetNotFound(key)
        if not candidate.is_file():
            raise AssetNotFound(key)
        return candidate

    async def get(self, key: str) -> Asset:
        # Path resolution touches the filesystem too
        return await run_in_threadpool(self._read, key)


def resolve_asset_key(path: str, index_path: str = "/index.html") -> str:
    # Extensionless paths are client-side routes and all render the app shell
    if "." in path:
        return path
    return index_path


async def serve_asset(store: AssetStore, path: str, index_path: str = "/index.html") -> Response:
    key = resolve_asset_key(path, index_path)
    try:
        asset = await store.get(key)
    except Exception as e:
        logger.debug(f"[EDGE] Asset lookup failed for {path!r} (key {key!r}): {e!r}")
        return PlainTextResponse("Not Found", status_code=404)
    return Response(content=asset.body, status_code=200, media_type=asset.content_type)


def get_asset_store(cfg: EdgeRuntimeConfig = Depends(get_edge_cfg)) -> AssetStore:
    return DirectoryAssetStore(cfg.asset_root)


@router.api_route("/{asset_path:path}", methods=HTTP_METHODS)
async def static_asset(
    request: Request,
    store: AssetStore = Depends(get_asset_store),
    cfg: EdgeRuntimeConfig = Depends(get_edge_cfg),
) -> Response:
    return await serve_asset(store, request.url.path, cfg.index_path)
