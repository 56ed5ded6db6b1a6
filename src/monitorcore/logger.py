"""
Structured logging for artifact generation.

Outputs JSON-formatted logs for Loki ingestion. One entry is logged per
generated or written artifact; the generators themselves only log at DEBUG
through their module loggers.

Logged events:
- prometheus_config.generated
- statefulset.generated
- service.generated
- artifact.written
- artifact.invalid

Usage:
    from monitorcore.logger import GenerationLogger

    logger = GenerationLogger(namespace="monitoring", name="main")
    logger.log_config_generated(config)
    logger.log_artifact_written(path="generated/prometheus.yaml", size=2048)
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from monitorcore.models.scrape import PrometheusConfig
from monitorcore.models.workload import Service, StatefulSet

# Configure structured logger for Loki
_artifact_logger = logging.getLogger("monitorcore.artifacts")
_artifact_logger.setLevel(logging.INFO)

# Default handler outputs JSON to stdout (for container/Loki pickup)
if not _artifact_logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    _artifact_logger.addHandler(handler)
_artifact_logger.propagate = False

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log lines from the module loggers."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: str = "info", fmt: str = "json") -> None:
    """Configure the ``monitorcore`` logger hierarchy for CLI use."""
    root = logging.getLogger("monitorcore")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))
    root.handlers = [handler]


class GenerationLogger:
    """
    Structured logger for generation events.

    Each log entry includes standard fields for filtering:
    - service, namespace and name of the source resource
    - event type and event-specific attributes
    """

    def __init__(
        self,
        namespace: str,
        name: str,
        service_name: str = "monitorcore",
        extra_labels: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize generation logger.

        Args:
            namespace: Namespace of the resource being compiled
            name: Name of the resource being compiled
            service_name: Service name for log attribution
            extra_labels: Additional labels for Loki filtering
        """
        self.namespace = namespace
        self.name = name
        self.service_name = service_name
        self.extra_labels = extra_labels or {}
        self._logger = _artifact_logger

    def _emit(self, event: str, level: str = "info", **extra_fields: Any) -> None:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "event": event,
            "service": self.service_name,
            "namespace": self.namespace,
            "name": self.name,
        }
        entry.update(extra_fields)

        if self.extra_labels:
            entry["labels"] = self.extra_labels

        log_line = json.dumps(entry, default=str)

        if level == "error":
            self._logger.error(log_line)
        elif level == "warn":
            self._logger.warning(log_line)
        else:
            self._logger.info(log_line)

    def log_config_generated(self, config: PrometheusConfig) -> None:
        """Log Prometheus configuration generation."""
        self._emit(
            event="prometheus_config.generated",
            scrape_configs=len(config.scrape_configs),
            alertmanagers=len(config.alerting.alertmanagers),
            relabel_rules=config.relabel_rule_count,
        )

    def log_statefulset_generated(self, statefulset: StatefulSet) -> None:
        """Log Alertmanager StatefulSet generation."""
        spec = statefulset.spec
        containers = spec.template.spec.containers if spec else []
        self._emit(
            event="statefulset.generated",
            replicas=spec.replicas if spec else None,
            image=containers[0].image if containers else None,
            storage="persistent" if statefulset.claim_templates else "ephemeral",
        )

    def log_service_generated(self, service: Service) -> None:
        """Log governing Service generation."""
        self._emit(
            event="service.generated",
            service_name=service.metadata.name,
            ports=[port.name for port in service.spec.ports],
        )

    def log_artifact_written(self, path: str, size: int) -> None:
        """Log an artifact written to disk."""
        self._emit(event="artifact.written", path=path, bytes=size)

    def log_artifact_invalid(self, artifact_type: str, errors: List[str]) -> None:
        """Log an artifact that failed post-generation validation."""
        self._emit(
            event="artifact.invalid",
            level="error",
            artifact_type=artifact_type,
            errors=errors,
        )
