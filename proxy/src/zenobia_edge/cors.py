# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from typing import Any, Callable, Coroutine, Dict

from fastapi import HTTPException, Request, Response
from fastapi.responses import JSONResponse

from .routing import AnyMethodRoute

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Max-Age": "86400",  # 24 hours
}

PREFLIGHT_ALLOW_METHODS = "POST, OPTIONS"


def add_cors_headers(response: Response) -> Response:
    """Attach the cross-origin policy to a response.

    Headers the response already carries win, so a route can narrow the
    policy (the preflight only advertises POST).
    """
    for key, value in CORS_HEADERS.items():
        if key not in response.headers:
            response.headers[key] = value
    return response


def preflight_response() -> Response:
    return Response(
        status_code=204,
        headers={
            **CORS_HEADERS,
            "Access-Control-Allow-Methods": PREFLIGHT_ALLOW_METHODS,
        },
    )


class CORSRoute(AnyMethodRoute):
    """APIRoute that runs every response through add_cors_headers.

    Escaped HTTPExceptions are rendered here as well so that no exit path
    leaves without the headers.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()

        async def cors_route_handler(request: Request) -> Response:
            try:
                response = await original_route_handler(request)
            except HTTPException as e:
                response = JSONResponse(
                    status_code=e.status_code,
                    content={"error": e.detail},
                    headers=e.headers,
                )
            return add_cors_headers(response)

        return cors_route_handler
