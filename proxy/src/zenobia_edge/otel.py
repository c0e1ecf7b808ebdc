# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import os

from opentelemetry import trace
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)


def otel_requested() -> bool:
    return bool(os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")) or _console_requested()


def _console_requested() -> bool:
    return os.getenv("OTEL_CONSOLE_EXPORTER", "0").lower() in {"1", "true", "yes"}


def setup_otel_from_env(use_console: bool = False) -> TracerProvider:
    """Configure OpenTelemetry tracing from environment variables.

    Env vars:
    - OTEL_EXPORTER_OTLP_ENDPOINT (OTLP/HTTP export, only when set)
    - OTEL_SERVICE_NAME (default zenobia-edge)
    - OTEL_CONSOLE_EXPORTER=1 to add console export
    """
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    service_name = os.getenv("OTEL_SERVICE_NAME", "zenobia-edge")
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: service_name}))

    if endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
                OTLPSpanExporter,
            )
        except Exception as e:  # pragma: no cover - import error path
            raise RuntimeError(
                "OTLP exporter not installed. Install extras: pip install zenobia-edge[otel]"
            ) from e
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))

    if use_console or _console_requested():
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    return provider
