"""
Models for monitorcore.

Input resources (ServiceMonitor, Prometheus, Alertmanager) live in
``monitorcore.models.core``; the generated Prometheus configuration in
``monitorcore.models.scrape``; the generated StatefulSet and Service in
``monitorcore.models.workload``.
"""

from __future__ import annotations

from monitorcore.models.core import (
    Alertmanager,
    AlertmanagerEndpoints,
    AlertmanagerSpec,
    AlertingSpec,
    Endpoint,
    NamedPort,
    NamespaceSelector,
    NumericTargetPort,
    PortReference,
    Prometheus,
    PrometheusSpec,
    ServiceMonitor,
    ServiceMonitorSpec,
    StorageSpec,
    StringTargetPort,
)
from monitorcore.models.meta import (
    K8sModel,
    LabelSelector,
    LabelSelectorOperator,
    LabelSelectorRequirement,
    ObjectMeta,
    ResourceRequirements,
)
from monitorcore.models.scrape import (
    AlertingConfig,
    AlertmanagerConfig,
    GlobalConfig,
    KubernetesSDConfig,
    PrometheusConfig,
    RelabelAction,
    RelabelConfig,
    ScrapeConfig,
)
from monitorcore.models.workload import (
    Container,
    ContainerPort,
    PersistentVolumeClaim,
    PodSpec,
    PodTemplateSpec,
    Service,
    ServicePort,
    ServiceSpec,
    StatefulSet,
    StatefulSetSpec,
    Volume,
    VolumeMount,
)

__all__ = [
    # Shared
    "K8sModel",
    "ObjectMeta",
    "LabelSelector",
    "LabelSelectorOperator",
    "LabelSelectorRequirement",
    "ResourceRequirements",
    # Inputs
    "ServiceMonitor",
    "ServiceMonitorSpec",
    "Endpoint",
    "NamespaceSelector",
    "NamedPort",
    "StringTargetPort",
    "NumericTargetPort",
    "PortReference",
    "Prometheus",
    "PrometheusSpec",
    "AlertingSpec",
    "AlertmanagerEndpoints",
    "Alertmanager",
    "AlertmanagerSpec",
    "StorageSpec",
    # Prometheus configuration
    "PrometheusConfig",
    "GlobalConfig",
    "ScrapeConfig",
    "AlertingConfig",
    "AlertmanagerConfig",
    "KubernetesSDConfig",
    "RelabelConfig",
    "RelabelAction",
    # Workload
    "StatefulSet",
    "StatefulSetSpec",
    "PodTemplateSpec",
    "PodSpec",
    "Container",
    "ContainerPort",
    "VolumeMount",
    "Volume",
    "PersistentVolumeClaim",
    "Service",
    "ServiceSpec",
    "ServicePort",
]
