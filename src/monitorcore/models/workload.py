"""
Models for the generated Alertmanager workload.

Only the parts of the Kubernetes ``StatefulSet`` and ``Service`` schemas that
the generator populates are modelled. Unknown keys are ignored on input, so
a StatefulSet fetched from a cluster can be parsed back in to carry its
annotations forward.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import Field

from monitorcore.models.meta import (
    K8sModel,
    LabelSelector,
    ObjectMeta,
    ResourceRequirements,
)


class ContainerPort(K8sModel):
    name: str
    container_port: int = Field(..., alias="containerPort")
    protocol: str = "TCP"


class VolumeMount(K8sModel):
    name: str
    mount_path: str = Field(..., alias="mountPath")
    sub_path: Optional[str] = Field(None, alias="subPath")
    read_only: Optional[bool] = Field(None, alias="readOnly")


class Container(K8sModel):
    name: str
    image: str
    command: Optional[List[str]] = None
    args: Optional[List[str]] = None
    ports: Optional[List[ContainerPort]] = None
    volume_mounts: Optional[List[VolumeMount]] = Field(None, alias="volumeMounts")
    resources: Optional[ResourceRequirements] = None


class EmptyDirVolumeSource(K8sModel):
    medium: Optional[str] = None
    size_limit: Optional[str] = Field(None, alias="sizeLimit")


class ConfigMapVolumeSource(K8sModel):
    name: str


class Volume(K8sModel):
    name: str
    empty_dir: Optional[EmptyDirVolumeSource] = Field(None, alias="emptyDir")
    config_map: Optional[ConfigMapVolumeSource] = Field(None, alias="configMap")


class PersistentVolumeClaimSpec(K8sModel):
    access_modes: List[str] = Field(default_factory=list, alias="accessModes")
    resources: ResourceRequirements = Field(default_factory=ResourceRequirements)
    selector: Optional[LabelSelector] = None


class PersistentVolumeClaim(K8sModel):
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PersistentVolumeClaimSpec = Field(default_factory=PersistentVolumeClaimSpec)


class PodSpec(K8sModel):
    termination_grace_period_seconds: Optional[int] = Field(
        None, alias="terminationGracePeriodSeconds"
    )
    containers: List[Container] = Field(default_factory=list)
    volumes: List[Volume] = Field(default_factory=list)


class PodTemplateSpec(K8sModel):
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PodSpec = Field(default_factory=PodSpec)


class StatefulSetSpec(K8sModel):
    service_name: str = Field(..., alias="serviceName")
    replicas: int = 1
    selector: Optional[LabelSelector] = None
    template: PodTemplateSpec = Field(default_factory=PodTemplateSpec)
    volume_claim_templates: Optional[List[PersistentVolumeClaim]] = Field(
        None, alias="volumeClaimTemplates"
    )


class StatefulSet(K8sModel):
    api_version: str = Field("apps/v1", alias="apiVersion")
    kind: str = "StatefulSet"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: Optional[StatefulSetSpec] = None

    @property
    def empty_dir_volumes(self) -> List[Volume]:
        if self.spec is None:
            return []
        return [v for v in self.spec.template.spec.volumes if v.empty_dir is not None]

    @property
    def claim_templates(self) -> List[PersistentVolumeClaim]:
        if self.spec is None:
            return []
        return list(self.spec.volume_claim_templates or [])


class ServicePort(K8sModel):
    name: str
    port: int
    target_port: Union[int, str] = Field(..., alias="targetPort")
    protocol: str = "TCP"


class ServiceSpec(K8sModel):
    cluster_ip: Optional[str] = Field(None, alias="clusterIP")
    ports: List[ServicePort] = Field(default_factory=list)
    selector: Dict[str, str] = Field(default_factory=dict)


class Service(K8sModel):
    api_version: str = Field("v1", alias="apiVersion")
    kind: str = "Service"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: ServiceSpec = Field(default_factory=ServiceSpec)
