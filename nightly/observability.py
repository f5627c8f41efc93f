"""Tracing helpers for nightly build runs."""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import TYPE_CHECKING, Final, Iterator

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Span, Status, StatusCode

if TYPE_CHECKING:  # pragma: no cover - used for static analysis only
    from .core.project import Project

_TRACER_NAME: Final[str] = "nightly.build"


def _as_bool(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def initialize_tracing(
    service_name: str, *, default_endpoint: str | None = None
) -> bool:
    """Export spans over OTLP when an endpoint is configured.

    Needs the ``otlp`` extra; without it, or without an endpoint, spans go to
    the no-op provider and this returns False.
    """
    if _as_bool(os.environ.get("NIGHTLY_DISABLE_TRACING")):
        return False
    endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT", default_endpoint)
    if not endpoint:
        return False
    configured_service = os.environ.get("OTEL_SERVICE_NAME", service_name)

    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
            OTLPSpanExporter,
        )
    except ImportError:  # pragma: no cover - optional extra
        return False

    try:
        provider = TracerProvider(
            resource=Resource.create({"service.name": configured_service})
        )
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint))
        )
        trace.set_tracer_provider(provider)
    except Exception:  # pragma: no cover - tracing is best effort
        return False
    return True


def shutdown_tracing() -> None:
    """Flush spans still buffered by the SDK provider, if one was installed."""
    provider = trace.get_tracer_provider()
    shutdown = getattr(provider, "shutdown", None)
    if callable(shutdown):
        shutdown()


# -----------------------------------------------------------------------------
# Domain helpers
# -----------------------------------------------------------------------------


@contextmanager
def trace_phase(project: "Project", phase: str) -> Iterator[Span]:
    """Wrap one update or build phase of a project in a span."""
    tracer = trace.get_tracer(_TRACER_NAME)
    with tracer.start_as_current_span(f"nightly.{phase}") as span:
        span.set_attribute("project.name", project.name)
        span.set_attribute("project.directory", str(project.directory))
        span.set_attribute("project.vcs", project.vcs.name.lower())
        yield span


def record_exit_status(span: Span, status: int) -> None:
    span.set_attribute("exit_status", status)
    if status != 0:
        span.set_status(Status(StatusCode.ERROR, f"exit status {status}"))
