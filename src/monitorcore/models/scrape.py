"""
Models for the generated Prometheus configuration document.

The document has four top-level keys::

    global:          fixed evaluation / scrape cadence
    rule_files:      glob of mounted rule files
    scrape_configs:  one job per (ServiceMonitor, endpoint)
    alerting:
      alertmanagers: one discovery block per Alertmanager target

Optional fields left as ``None`` are omitted from the rendered YAML so
Prometheus applies its own defaults. Empty strings are kept: the relabel
rule that blanks the pod-template-hash label relies on ``replacement: ""``.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import Field

from monitorcore.models.meta import K8sModel

DEFAULT_EVALUATION_INTERVAL = "30s"
DEFAULT_SCRAPE_INTERVAL = "30s"
DEFAULT_RULE_FILES_GLOB = "/etc/prometheus/rules/*.rules"


class RelabelAction(str, Enum):
    KEEP = "keep"
    DROP = "drop"
    REPLACE = "replace"
    LABELMAP = "labelmap"


class RelabelConfig(K8sModel):
    """One relabeling step. Prometheus applies them in list order."""
    action: Optional[RelabelAction] = None
    source_labels: Optional[List[str]] = None
    regex: Optional[str] = None
    target_label: Optional[str] = None
    replacement: Optional[str] = None


class KubernetesSDConfig(K8sModel):
    role: str = "endpoints"


class ScrapeConfig(K8sModel):
    job_name: str
    kubernetes_sd_configs: List[KubernetesSDConfig] = Field(
        default_factory=lambda: [KubernetesSDConfig()]
    )
    scrape_interval: Optional[str] = None
    metrics_path: Optional[str] = None
    scheme: Optional[str] = None
    relabel_configs: List[RelabelConfig] = Field(default_factory=list)


class AlertmanagerConfig(K8sModel):
    kubernetes_sd_configs: List[KubernetesSDConfig] = Field(
        default_factory=lambda: [KubernetesSDConfig()]
    )
    scheme: str = "http"
    relabel_configs: List[RelabelConfig] = Field(default_factory=list)


class AlertingConfig(K8sModel):
    alertmanagers: List[AlertmanagerConfig] = Field(default_factory=list)


class GlobalConfig(K8sModel):
    evaluation_interval: str = DEFAULT_EVALUATION_INTERVAL
    scrape_interval: str = DEFAULT_SCRAPE_INTERVAL


class PrometheusConfig(K8sModel):
    """The complete configuration document handed to Prometheus."""
    global_: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    rule_files: List[str] = Field(default_factory=lambda: [DEFAULT_RULE_FILES_GLOB])
    scrape_configs: List[ScrapeConfig] = Field(default_factory=list)
    alerting: AlertingConfig = Field(default_factory=AlertingConfig)

    @property
    def relabel_rule_count(self) -> int:
        """Total relabel rules across scrape jobs and Alertmanager blocks."""
        return sum(len(job.relabel_configs) for job in self.scrape_configs) + sum(
            len(am.relabel_configs) for am in self.alerting.alertmanagers
        )
