"""
OTel span event emission helpers for the generators.

Each helper adds one event to the current span when it is recording and is
a no-op otherwise, so the generators can be called from traced and untraced
code alike.

Usage::

    from monitorcore.generators.otel import emit_config_generated

    config = generate_config(prometheus, monitors)
    emit_config_generated(config)
"""

from __future__ import annotations

from opentelemetry import trace as otel_trace

from monitorcore.models.scrape import PrometheusConfig
from monitorcore.models.workload import StatefulSet


def add_span_event(name: str, attributes: dict[str, str | int | float | bool]) -> None:
    """Add an event to the current OTel span if it is recording."""
    span = otel_trace.get_current_span()
    if span and span.is_recording():
        span.add_event(name=name, attributes=attributes)


def emit_config_generated(config: PrometheusConfig) -> None:
    """Emit a span event summarising a generated Prometheus configuration.

    Event name: ``monitorcore.prometheus_config.generated``
    """
    attrs: dict[str, str | int | float | bool] = {
        "prometheus_config.scrape_configs": len(config.scrape_configs),
        "prometheus_config.alertmanagers": len(config.alerting.alertmanagers),
        "prometheus_config.relabel_rules": config.relabel_rule_count,
    }
    add_span_event("monitorcore.prometheus_config.generated", attrs)


def emit_statefulset_generated(statefulset: StatefulSet) -> None:
    """Emit a span event summarising a generated Alertmanager StatefulSet.

    Event name: ``monitorcore.statefulset.generated``
    """
    spec = statefulset.spec
    containers = spec.template.spec.containers if spec else []
    attrs: dict[str, str | int | float | bool] = {
        "statefulset.name": statefulset.metadata.name,
        "statefulset.replicas": spec.replicas if spec else 0,
        "statefulset.image": containers[0].image if containers else "",
        "statefulset.persistent": bool(statefulset.claim_templates),
        "statefulset.annotations_carried": len(statefulset.metadata.annotations or {}),
    }
    add_span_event("monitorcore.statefulset.generated", attrs)
