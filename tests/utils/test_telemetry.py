"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from opentelemetry import trace

from rootguard.utils.telemetry import (
    _INSTRUMENTATION_NAME,
    ATTR_OPERATION,
    ATTR_OUTCOME,
    ATTR_REQUEST_ID,
    configure_telemetry,
    get_tracer,
)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        tracer = get_tracer("test.module")
        assert isinstance(tracer, trace.Tracer)

    def test_default_name(self) -> None:
        tracer = get_tracer()
        assert isinstance(tracer, trace.Tracer)

    def test_noop_span(self) -> None:
        """Without SDK configured, spans should be no-ops."""
        tracer = get_tracer("test.noop")
        with tracer.start_as_current_span("test") as span:
            span.set_attribute(ATTR_OPERATION, "file_delete")


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="opentelemetry-sdk"):
                configure_telemetry()

    def test_otlp_raises_without_exporter(self) -> None:
        try:
            import opentelemetry.sdk.trace  # noqa: F401
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        with patch.dict(
            "sys.modules",
            {"opentelemetry.exporter.otlp.proto.grpc.trace_exporter": None},
        ):
            with pytest.raises(ImportError, match="opentelemetry-exporter-otlp"):
                configure_telemetry(otlp_endpoint="http://localhost:4317")


class TestAttributeConstants:
    @pytest.mark.parametrize("attr", [ATTR_OPERATION, ATTR_OUTCOME, ATTR_REQUEST_ID])
    def test_namespaced(self, attr: str) -> None:
        assert attr.startswith("rootguard.")

    def test_instrumentation_name(self) -> None:
        assert _INSTRUMENTATION_NAME == "rootguard"


class TestExporterSelection:
    @pytest.fixture(autouse=True)
    def _sdk(self) -> None:
        pytest.importorskip("opentelemetry.sdk.trace")

    def test_console_without_endpoint(self) -> None:
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

        with patch.object(TracerProvider, "add_span_processor") as add_processor:
            with patch("opentelemetry.trace.set_tracer_provider") as set_provider:
                configure_telemetry(service_name="rootguard-test")

        provider = set_provider.call_args.args[0]
        assert provider.resource.attributes["service.name"] == "rootguard-test"
        processor = add_processor.call_args.args[0]
        assert isinstance(processor, SimpleSpanProcessor)
        assert isinstance(processor.span_exporter, ConsoleSpanExporter)

    def test_otlp_with_endpoint(self) -> None:
        with patch("rootguard.utils.telemetry._otlp_exporter") as otlp_exporter:
            with patch("opentelemetry.trace.set_tracer_provider") as set_provider:
                configure_telemetry("http://localhost:4317")

        otlp_exporter.assert_called_once_with("http://localhost:4317")
        set_provider.assert_called_once()
