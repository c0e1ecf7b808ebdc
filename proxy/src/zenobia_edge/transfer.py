# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import logging
import uuid
from typing import Any, List, Optional

import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from opentelemetry import trace
from pydantic import BaseModel, Field, ValidationError, field_validator

from .auth import fetch_access_token
from .config import HTTP_METHODS, EdgeRuntimeConfig, get_edge_cfg, get_upstream_transport
from .cors import CORSRoute, preflight_response
from .errors import UpstreamResponseError

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request: missing required fields"
PROCESSING_FAILED_MESSAGE = "Failed to process payment"

router = APIRouter(tags=["transfer-proxy"], route_class=CORSRoute)


# -------------------------------
# Models
# -------------------------------


class TransferRequest(BaseModel):
    amount: Any = Field(..., description="Transfer amount, must be truthy")
    statementItems: List[Any] = Field(..., description="Opaque statement line items")

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Any) -> Any:
        if not v:
            raise ValueError("amount is required")
        return v


def parse_transfer_request(body: Any) -> Optional[TransferRequest]:
    """Validate a decoded JSON body; None when it is not an acceptable transfer."""
    try:
        return TransferRequest.model_validate(body)
    except ValidationError:
        return None


# -------------------------------
# Upstream
# -------------------------------


def _is_json(resp: httpx.Response) -> bool:
    return "application/json" in (resp.headers.get("content-type") or "")


def _upstream_error_message(resp: httpx.Response) -> str:
    message = f"API returned status {resp.status_code}"
    if _is_json(resp):
        try:
            data = resp.json()
        except ValueError:
            return message
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
    return message


async def forward_transfer(
    client: httpx.AsyncClient,
    cfg: EdgeRuntimeConfig,
    transfer: TransferRequest,
    token: str,
    req_id: str,
) -> Response:
    """POST the transfer to the payment API and translate its reply."""
    payload = transfer.model_dump()
    logger.info(
        f"[{req_id}] [EDGE] Forwarding transfer to {cfg.payment_api_url} "
        f"(statement items: {len(transfer.statementItems)})"
    )
    with tracer.start_as_current_span("edge.create_transfer") as span:
        span.set_attribute("http.url", cfg.payment_api_url)
        resp = await client.post(
            cfg.payment_api_url,
            json=payload,
            headers={"Authorization": f"Bearer {token}"},
        )
        span.set_attribute("http.status_code", resp.status_code)

    if not resp.is_success:
        message = _upstream_error_message(resp)
        logger.error(f"[{req_id}] [EDGE] API request failed: {resp.status_code} {message}")
        return JSONResponse(status_code=502, content={"error": message})

    # Surfaces as 500 through the caller's boundary, not as 502
    if not _is_json(resp):
        raise UpstreamResponseError("API did not return a JSON response")

    data = resp.json()
    logger.info(f"[{req_id}] [EDGE] Payment API responded with status {resp.status_code}")
    return JSONResponse(status_code=resp.status_code, content=data)


# -------------------------------
# Route
# -------------------------------


@router.api_route("/create-transfer", methods=HTTP_METHODS)
async def create_transfer(
    request: Request,
    cfg: EdgeRuntimeConfig = Depends(get_edge_cfg),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> Response:
    req_id = uuid.uuid4().hex
    response = await _handle_create_transfer(request, cfg, transport, req_id)
    response.headers["X-Request-ID"] = req_id
    return response


async def _handle_create_transfer(
    request: Request,
    cfg: EdgeRuntimeConfig,
    transport: Optional[httpx.AsyncBaseTransport],
    req_id: str,
) -> Response:
    if request.method == "OPTIONS":
        return preflight_response()

    if request.method != "POST":
        return PlainTextResponse("Method not allowed", status_code=405)

    try:
        body = await request.json()
        transfer = parse_transfer_request(body)
        if transfer is None:
            logger.info(f"[{req_id}] [EDGE] Rejected transfer request with missing fields")
            return PlainTextResponse(INVALID_REQUEST_MESSAGE, status_code=400)

        async with httpx.AsyncClient(timeout=cfg.timeout_s, transport=transport) as client:
            token = await fetch_access_token(client, cfg)
            return await forward_transfer(client, cfg, transfer, token, req_id)
    except Exception as e:
        logger.exception(f"[{req_id}] [EDGE] Error processing transfer request: {e}")
        return JSONResponse(status_code=500, content={"error": PROCESSING_FAILED_MESSAGE})
