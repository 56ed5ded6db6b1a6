"""
Tests for GenerationLogger - structured logging for Loki.
"""

import json
import logging
from io import StringIO

import pytest

from monitorcore.generators.alertmanager import make_stateful_set, make_stateful_set_service
from monitorcore.generators.prometheus_config import generate_config
from monitorcore.logger import GenerationLogger, JsonFormatter, configure_logging


@pytest.fixture
def captured_logs():
    """Capture log output for testing."""
    return StringIO()


@pytest.fixture
def logger(captured_logs):
    """Create a GenerationLogger that writes to captured output."""
    gen_logger = GenerationLogger(
        namespace="monitoring",
        name="main",
        service_name="test-service",
    )
    artifact_logger = logging.getLogger("monitorcore.artifacts")
    original = list(artifact_logger.handlers)

    artifact_logger.handlers.clear()
    handler = logging.StreamHandler(captured_logs)
    handler.setFormatter(logging.Formatter("%(message)s"))
    artifact_logger.addHandler(handler)

    yield gen_logger

    artifact_logger.handlers[:] = original


def parse_log_line(captured_logs) -> dict:
    """Parse the last JSON log line."""
    captured_logs.seek(0)
    lines = captured_logs.read().strip().split("\n")
    if lines and lines[-1]:
        return json.loads(lines[-1])
    return {}


class TestGenerationLogger:
    def test_standard_fields(self, logger, captured_logs):
        logger.log_artifact_written(path="out/prometheus.yaml", size=12)

        log = parse_log_line(captured_logs)
        assert log["event"] == "artifact.written"
        assert log["level"] == "info"
        assert log["service"] == "test-service"
        assert log["namespace"] == "monitoring"
        assert log["name"] == "main"
        assert log["path"] == "out/prometheus.yaml"
        assert log["bytes"] == 12
        assert "timestamp" in log

    def test_config_generated(self, logger, captured_logs, sample_prometheus, minimal_service_monitor):
        logger.log_config_generated(generate_config(sample_prometheus, [minimal_service_monitor]))

        log = parse_log_line(captured_logs)
        assert log["event"] == "prometheus_config.generated"
        assert log["scrape_configs"] == 1
        assert log["alertmanagers"] == 1
        assert log["relabel_rules"] == 11

    def test_statefulset_generated(self, logger, captured_logs, persistent_alertmanager):
        logger.log_statefulset_generated(make_stateful_set(persistent_alertmanager))

        log = parse_log_line(captured_logs)
        assert log["event"] == "statefulset.generated"
        assert log["replicas"] == 2
        assert log["image"] == "quay.io/prometheus/alertmanager:v0.5.1"
        assert log["storage"] == "persistent"

    def test_service_generated(self, logger, captured_logs, sample_alertmanager):
        logger.log_service_generated(make_stateful_set_service(sample_alertmanager))

        log = parse_log_line(captured_logs)
        assert log["service_name"] == "alertmanager"
        assert log["ports"] == ["web", "mesh"]

    def test_artifact_invalid_is_error(self, logger, captured_logs):
        logger.log_artifact_invalid("service", ["spec.ports is empty"])

        log = parse_log_line(captured_logs)
        assert log["level"] == "error"
        assert log["errors"] == ["spec.ports is empty"]

    def test_extra_labels(self, captured_logs, logger):
        labelled = GenerationLogger(namespace="n", name="m", extra_labels={"env": "prod"})
        labelled.log_artifact_written(path="x", size=1)
        assert parse_log_line(captured_logs)["labels"] == {"env": "prod"}


class TestConfigureLogging:
    def test_sets_level_and_single_handler(self):
        configure_logging("debug", "text")
        configure_logging("warning", "json")
        root = logging.getLogger("monitorcore")
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_json_formatter(self):
        record = logging.LogRecord(
            "monitorcore.generators.relabel", logging.INFO, __file__, 1,
            "Skipping %r", ("tier",), None,
        )
        entry = json.loads(JsonFormatter().format(record))
        assert entry["level"] == "info"
        assert entry["logger"] == "monitorcore.generators.relabel"
        assert entry["message"] == "Skipping 'tier'"
