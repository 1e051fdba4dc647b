"""Tracing for rootguard.

Modules grab a tracer at import time::

    _tracer = get_tracer(__name__)

and wrap access checks and authorization waits in spans tagged with the
``ATTR_*`` keys below.  Until :func:`configure_telemetry` installs an SDK
provider the OpenTelemetry API hands out no-op tracers.
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

ATTR_OPERATION = "rootguard.operation"
ATTR_REQUEST_ID = "rootguard.request.id"
ATTR_TIMEOUT = "rootguard.timeout"
ATTR_OUTCOME = "rootguard.outcome"
ATTR_ROLE = "rootguard.role"
ATTR_TOOL_NAME = "rootguard.tool.name"

_INSTRUMENTATION_NAME = "rootguard"

_INSTALL_HINT = "Install it with: pip install rootguard[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(otlp_endpoint: str | None = None, *, service_name: str = "rootguard") -> None:
    """Install a global tracer provider exporting rootguard spans.

    Spans go to *otlp_endpoint* over OTLP/gRPC when it is set, otherwise
    they are printed to stdout.

    Raises:
        ImportError: The ``otel`` extra (opentelemetry-sdk, and
            opentelemetry-exporter-otlp for an endpoint) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        raise ImportError(f"opentelemetry-sdk is required for tracing. {_INSTALL_HINT}") from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if otlp_endpoint:
        processor: Any = BatchSpanProcessor(_otlp_exporter(otlp_endpoint))
    else:
        processor = SimpleSpanProcessor(ConsoleSpanExporter())
    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = f"opentelemetry-exporter-otlp is required for OTLP export. {_INSTALL_HINT}"
        raise ImportError(msg) from exc
    return OTLPSpanExporter(endpoint=endpoint)
