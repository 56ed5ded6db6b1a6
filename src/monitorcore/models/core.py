"""
Pydantic models for the monitoring custom resources.

These are the inputs of the generators: ``ServiceMonitor`` (what to scrape),
``Prometheus`` (which Alertmanagers to notify) and ``Alertmanager`` (the
replicated alerting engine to run). They mirror the shape of the
``monitoring.coreos.com`` resources closely enough that manifests can be
loaded directly with ``Model.model_validate(yaml.safe_load(...))``.

Schema validation is shallow: unknown keys are ignored and
most fields default to empty values, which the generators then fill in.

Port references
---------------
An endpoint selects its port in one of three ways: a named service port
(``port: web``), a named container port (``targetPort: web``) or a numeric
container port (``targetPort: 9090``). ``Endpoint.port_reference`` collapses
those fields into exactly one of :class:`NamedPort`,
:class:`StringTargetPort` or :class:`NumericTargetPort`, or ``None`` when no
port is set. An empty string and ``0`` both count as unset.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from pydantic import ConfigDict, Field

from monitorcore.models.meta import (
    K8sModel,
    LabelSelector,
    ObjectMeta,
    ResourceRequirements,
)


# ---------------------------------------------------------------------------
# Port references
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NamedPort:
    """A port selected by its name on the Service."""
    name: str

    @property
    def value(self) -> str:
        return self.name


@dataclass(frozen=True)
class StringTargetPort:
    """A container port selected by name."""
    name: str

    @property
    def value(self) -> str:
        return self.name


@dataclass(frozen=True)
class NumericTargetPort:
    """A container port selected by number."""
    number: int

    @property
    def value(self) -> str:
        return str(self.number)


PortReference = Union[NamedPort, StringTargetPort, NumericTargetPort]


def _target_port_reference(
    target_port: Optional[Union[int, str]],
) -> Optional[PortReference]:
    if isinstance(target_port, str):
        return StringTargetPort(target_port) if target_port else None
    if isinstance(target_port, int) and target_port != 0:
        return NumericTargetPort(target_port)
    return None


# ---------------------------------------------------------------------------
# ServiceMonitor
# ---------------------------------------------------------------------------


class _InputModel(K8sModel):
    model_config = ConfigDict(frozen=True)


class NamespaceSelector(_InputModel):
    """Which namespaces a ServiceMonitor discovers services in.

    With neither field set, only the monitor's own namespace is used.
    ``match_names`` takes precedence over ``any`` when both are set.
    """
    any: bool = False
    match_names: List[str] = Field(default_factory=list, alias="matchNames")


class Endpoint(_InputModel):
    """A scrapeable endpoint of the selected services."""
    port: Optional[str] = Field(None, description="Name of the service port")
    target_port: Optional[Union[int, str]] = Field(
        None, alias="targetPort", description="Container port name or number"
    )
    path: Optional[str] = Field(None, description="HTTP path to scrape")
    scheme: Optional[str] = Field(None, description="HTTP scheme to scrape with")
    interval: Optional[str] = Field(None, description="Scrape interval (e.g. '15s')")

    @property
    def port_reference(self) -> Optional[PortReference]:
        """The effective port selection, named service port first."""
        if self.port:
            return NamedPort(self.port)
        return _target_port_reference(self.target_port)


class ServiceMonitorSpec(_InputModel):
    job_label: Optional[str] = Field(None, alias="jobLabel")
    selector: LabelSelector = Field(default_factory=LabelSelector)
    namespace_selector: NamespaceSelector = Field(
        default_factory=NamespaceSelector, alias="namespaceSelector"
    )
    endpoints: List[Endpoint] = Field(default_factory=list)


class ServiceMonitor(_InputModel):
    api_version: str = Field("monitoring.coreos.com/v1alpha1", alias="apiVersion")
    kind: str = "ServiceMonitor"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: ServiceMonitorSpec = Field(default_factory=ServiceMonitorSpec)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace or ""

    @property
    def key(self) -> str:
        """``<namespace>/<name>``, unique per monitor."""
        return f"{self.namespace}/{self.name}"


# ---------------------------------------------------------------------------
# Prometheus
# ---------------------------------------------------------------------------


class AlertmanagerEndpoints(_InputModel):
    """Where a Prometheus server finds the Alertmanagers to notify."""
    namespace: str = ""
    name: str = ""
    port: Optional[Union[int, str]] = None
    scheme: Optional[str] = None

    @property
    def port_reference(self) -> Optional[PortReference]:
        """The port as a container port reference; named ports do not apply."""
        return _target_port_reference(self.port)


class AlertingSpec(_InputModel):
    alertmanagers: List[AlertmanagerEndpoints] = Field(default_factory=list)


class PrometheusSpec(_InputModel):
    alerting: AlertingSpec = Field(default_factory=AlertingSpec)


class Prometheus(_InputModel):
    api_version: str = Field("monitoring.coreos.com/v1alpha1", alias="apiVersion")
    kind: str = "Prometheus"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PrometheusSpec = Field(default_factory=PrometheusSpec)


# ---------------------------------------------------------------------------
# Alertmanager
# ---------------------------------------------------------------------------


class StorageSpec(_InputModel):
    """Persistent storage request for each Alertmanager replica."""
    class_name: str = Field("", alias="class", description="Storage class name")
    selector: Optional[LabelSelector] = None
    resources: ResourceRequirements = Field(default_factory=ResourceRequirements)


class AlertmanagerSpec(_InputModel):
    version: Optional[str] = None
    base_image: Optional[str] = Field(None, alias="baseImage")
    replicas: Optional[int] = None
    storage: Optional[StorageSpec] = None


class Alertmanager(_InputModel):
    api_version: str = Field("monitoring.coreos.com/v1alpha1", alias="apiVersion")
    kind: str = "Alertmanager"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: AlertmanagerSpec = Field(default_factory=AlertmanagerSpec)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace or ""
