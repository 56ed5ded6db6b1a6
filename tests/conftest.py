"""
Pytest configuration and fixtures for monitorcore tests.
"""

from __future__ import annotations

import logging
from typing import Dict, Generator
from unittest.mock import MagicMock, patch

import pytest
import yaml

from monitorcore.config import reset_config
from monitorcore.models.core import Alertmanager, Prometheus, ServiceMonitor


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop the config singleton and any MONITORCORE_* variables around each test."""
    import os

    for key in list(os.environ):
        if key.startswith("MONITORCORE_"):
            monkeypatch.delenv(key)
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """Undo handlers and levels installed by configure_logging()."""
    root = logging.getLogger("monitorcore")
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ============================================================================
# Model Fixtures
# ============================================================================


@pytest.fixture
def sample_service_monitor_spec() -> dict:
    """ServiceMonitor as it appears in a manifest."""
    return {
        "apiVersion": "monitoring.coreos.com/v1alpha1",
        "kind": "ServiceMonitor",
        "metadata": {
            "name": "api",
            "namespace": "shop",
            "labels": {"team": "checkout"},
        },
        "spec": {
            "jobLabel": "app.kubernetes.io/name",
            "selector": {
                "matchLabels": {"team": "checkout"},
                "matchExpressions": [
                    {"key": "tier", "operator": "In", "values": ["frontend", "api"]},
                ],
            },
            "endpoints": [
                {"port": "web", "interval": "15s", "path": "/metrics"},
                {"targetPort": 8080, "scheme": "https"},
            ],
        },
    }


@pytest.fixture
def sample_service_monitor(sample_service_monitor_spec: dict) -> ServiceMonitor:
    return ServiceMonitor.model_validate(sample_service_monitor_spec)


@pytest.fixture
def minimal_service_monitor() -> ServiceMonitor:
    """Selector {team: x}, default namespace scope, one endpoint on port "web"."""
    return ServiceMonitor.model_validate(
        {
            "metadata": {"name": "team-x", "namespace": "monitoring"},
            "spec": {
                "selector": {"matchLabels": {"team": "x"}},
                "endpoints": [{"port": "web"}],
            },
        }
    )


@pytest.fixture
def sample_prometheus_spec() -> dict:
    return {
        "apiVersion": "monitoring.coreos.com/v1alpha1",
        "kind": "Prometheus",
        "metadata": {"name": "main", "namespace": "monitoring"},
        "spec": {
            "alerting": {
                "alertmanagers": [
                    {"namespace": "monitoring", "name": "alertmanager-main", "port": "web"},
                ],
            },
        },
    }


@pytest.fixture
def sample_prometheus(sample_prometheus_spec: dict) -> Prometheus:
    return Prometheus.model_validate(sample_prometheus_spec)


@pytest.fixture
def sample_alertmanager_spec() -> dict:
    return {
        "apiVersion": "monitoring.coreos.com/v1alpha1",
        "kind": "Alertmanager",
        "metadata": {"name": "main", "namespace": "monitoring"},
        "spec": {"replicas": 3},
    }


@pytest.fixture
def sample_alertmanager(sample_alertmanager_spec: dict) -> Alertmanager:
    return Alertmanager.model_validate(sample_alertmanager_spec)


@pytest.fixture
def persistent_alertmanager() -> Alertmanager:
    return Alertmanager.model_validate(
        {
            "metadata": {"name": "main", "namespace": "monitoring"},
            "spec": {
                "replicas": 2,
                "storage": {
                    "class": "ssd",
                    "selector": {"matchLabels": {"disk": "fast"}},
                    "resources": {"requests": {"storage": "10Gi"}},
                },
            },
        }
    )


# ============================================================================
# File Fixtures
# ============================================================================


@pytest.fixture
def write_manifest(tmp_path):
    """Write one or more documents to a YAML file and return its path."""

    def _write(filename: str, *documents: Dict) -> str:
        path = tmp_path / filename
        path.write_text(yaml.safe_dump_all(documents), encoding="utf-8")
        return str(path)

    return _write


# ============================================================================
# OTel Fixtures
# ============================================================================


@pytest.fixture
def mock_span():
    """Create a mock OTel span that is recording."""
    span = MagicMock()
    span.is_recording.return_value = True
    return span


@pytest.fixture
def mock_otel(mock_span):
    """Patch OTel to return our mock span."""
    with patch("monitorcore.generators.otel.otel_trace") as mock_trace:
        mock_trace.get_current_span.return_value = mock_span
        yield mock_span
