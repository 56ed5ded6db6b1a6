"""
Tests for Prometheus configuration generation.
"""

from __future__ import annotations

import yaml

from monitorcore.generators.prometheus_config import (
    generate_alertmanager_config,
    generate_config,
    generate_service_monitor_config,
    job_name,
)
from monitorcore.models.core import AlertmanagerEndpoints, Prometheus, ServiceMonitor


def monitor(name: str, namespace: str, endpoints: list) -> ServiceMonitor:
    return ServiceMonitor.model_validate(
        {"metadata": {"name": name, "namespace": namespace}, "spec": {"endpoints": endpoints}}
    )


class TestGenerateServiceMonitorConfig:
    def test_job_name(self, sample_service_monitor):
        assert job_name(sample_service_monitor, 1) == "shop/api/1"

    def test_copies_endpoint_overrides(self, sample_service_monitor):
        job = generate_service_monitor_config(
            sample_service_monitor, sample_service_monitor.spec.endpoints[0], 0
        )
        data = job.to_dict()
        assert data["job_name"] == "shop/api/0"
        assert data["kubernetes_sd_configs"] == [{"role": "endpoints"}]
        assert data["scrape_interval"] == "15s"
        assert data["metrics_path"] == "/metrics"
        assert "scheme" not in data

    def test_omits_unset_overrides(self):
        mon = monitor("m", "ns", [{"port": "web"}])
        data = generate_service_monitor_config(mon, mon.spec.endpoints[0], 0).to_dict()
        assert "scrape_interval" not in data
        assert "metrics_path" not in data
        assert "scheme" not in data

    def test_empty_strings_are_omitted(self):
        mon = monitor("m", "ns", [{"port": "web", "interval": "", "path": "", "scheme": ""}])
        data = generate_service_monitor_config(mon, mon.spec.endpoints[0], 0).to_dict()
        assert not {"scrape_interval", "metrics_path", "scheme"} & set(data)

    def test_relabel_configs_attached(self, minimal_service_monitor):
        job = generate_service_monitor_config(
            minimal_service_monitor, minimal_service_monitor.spec.endpoints[0], 0
        )
        assert len(job.relabel_configs) == 8


class TestGenerateAlertmanagerConfig:
    def test_named_port(self):
        am = generate_alertmanager_config(
            AlertmanagerEndpoints(namespace="monitoring", name="alertmanager-main", port="web")
        )
        assert am.to_dict() == {
            "kubernetes_sd_configs": [{"role": "endpoints"}],
            "scheme": "http",
            "relabel_configs": [
                {
                    "action": "keep",
                    "source_labels": ["__meta_kubernetes_service_name"],
                    "regex": "alertmanager-main",
                },
                {
                    "action": "keep",
                    "source_labels": ["__meta_kubernetes_namespace"],
                    "regex": "monitoring",
                },
                {
                    "action": "keep",
                    "source_labels": ["__meta_kubernetes_endpoint_port_name"],
                    "regex": "web",
                },
            ],
        }

    def test_numeric_port(self):
        am = generate_alertmanager_config(
            AlertmanagerEndpoints(namespace="m", name="am", port=9093, scheme="https")
        )
        assert am.scheme == "https"
        assert am.relabel_configs[2].source_labels == ["__meta_kubernetes_container_port_number"]
        assert am.relabel_configs[2].regex == "9093"

    def test_no_port(self):
        for port in (None, "", 0):
            am = generate_alertmanager_config(
                AlertmanagerEndpoints(namespace="m", name="am", port=port)
            )
            assert len(am.relabel_configs) == 2

    def test_input_not_modified(self):
        endpoints = AlertmanagerEndpoints(namespace="m", name="am")
        generate_alertmanager_config(endpoints)
        assert endpoints.scheme is None


class TestGenerateConfig:
    def test_document_shape(self, sample_prometheus, sample_service_monitor):
        config = generate_config(
            sample_prometheus, {sample_service_monitor.key: sample_service_monitor}
        )
        data = config.to_dict()

        assert list(data) == ["global", "rule_files", "scrape_configs", "alerting"]
        assert data["global"] == {"evaluation_interval": "30s", "scrape_interval": "30s"}
        assert data["rule_files"] == ["/etc/prometheus/rules/*.rules"]
        assert [job["job_name"] for job in data["scrape_configs"]] == [
            "shop/api/0",
            "shop/api/1",
        ]
        assert len(data["alerting"]["alertmanagers"]) == 1

    def test_jobs_follow_iteration_order(self, sample_prometheus):
        monitors = {
            "b/second": monitor("second", "b", [{"port": "web"}]),
            "a/first": monitor("first", "a", [{"port": "web"}, {"port": "admin"}]),
        }
        config = generate_config(sample_prometheus, monitors)
        assert [job.job_name for job in config.scrape_configs] == [
            "b/second/0",
            "a/first/0",
            "a/first/1",
        ]

    def test_accepts_sequence(self, sample_prometheus, minimal_service_monitor):
        config = generate_config(sample_prometheus, [minimal_service_monitor])
        assert [job.job_name for job in config.scrape_configs] == ["monitoring/team-x/0"]

    def test_empty_inputs(self):
        config = generate_config(Prometheus(), {})
        data = config.to_dict()
        assert data["scrape_configs"] == []
        assert data["alerting"] == {"alertmanagers": []}

    def test_monitor_without_endpoints_adds_no_jobs(self, sample_prometheus):
        config = generate_config(sample_prometheus, [monitor("idle", "ns", [])])
        assert config.scrape_configs == []

    def test_yaml_round_trip(self, sample_prometheus, sample_service_monitor):
        config = generate_config(sample_prometheus, [sample_service_monitor])
        parsed = yaml.safe_load(config.to_yaml())
        assert parsed == config.to_dict()
        blank = parsed["scrape_configs"][0]["relabel_configs"][6]
        assert blank["replacement"] == ""

    def test_byte_identical_output(self, sample_prometheus, sample_service_monitor):
        first = generate_config(sample_prometheus, [sample_service_monitor]).to_yaml()
        second = generate_config(sample_prometheus, [sample_service_monitor]).to_yaml()
        assert first == second

    def test_relabel_rule_count(self, sample_prometheus, minimal_service_monitor):
        config = generate_config(sample_prometheus, [minimal_service_monitor])
        assert config.relabel_rule_count == 8 + 3
