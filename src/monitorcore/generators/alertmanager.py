"""
Alertmanager workload generation.

Turns an Alertmanager resource into the StatefulSet that runs it and the
headless Service its replicas use to find each other. Each replica gets a
``-mesh.peer`` flag for every ordinal, so the cluster forms its gossip mesh
from stable pod DNS names without any external discovery.

Usage:
    from monitorcore.generators.alertmanager import (
        make_stateful_set,
        make_stateful_set_service,
    )

    statefulset = make_stateful_set(alertmanager, old=current_statefulset)
    service = make_stateful_set_service(alertmanager)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from monitorcore.models.core import Alertmanager
from monitorcore.models.meta import LabelSelector, ObjectMeta, ResourceRequirements
from monitorcore.models.workload import (
    ConfigMapVolumeSource,
    Container,
    ContainerPort,
    EmptyDirVolumeSource,
    PersistentVolumeClaim,
    PersistentVolumeClaimSpec,
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

logger = logging.getLogger(__name__)

DEFAULT_BASE_IMAGE = "quay.io/prometheus/alertmanager"
DEFAULT_VERSION = "v0.5.1"
DEFAULT_CONFIG_RELOADER_IMAGE = "jimmidyson/configmap-reload"

GOVERNING_SERVICE_NAME = "alertmanager"
APP_LABEL = "alertmanager"
WEB_PORT = 9093
MESH_PORT = 6783

CONFIG_VOLUME_NAME = "config-volume"
CONFIG_PATH = "/etc/alertmanager/config"
CONFIG_FILE = CONFIG_PATH + "/alertmanager.yaml"
DATA_PATH = "/var/alertmanager/data"
DATA_SUB_PATH = "alertmanager-db"

STORAGE_CLASS_ANNOTATION = "volume.beta.kubernetes.io/storage-class"
READ_WRITE_ONCE = "ReadWriteOnce"

RELOADER_LIMITS = {"cpu": "5m", "memory": "10Mi"}


@dataclass(frozen=True)
class AlertmanagerDefaults:
    """Image defaults applied when the resource leaves them unset."""
    base_image: str = DEFAULT_BASE_IMAGE
    version: str = DEFAULT_VERSION
    config_reloader_image: str = DEFAULT_CONFIG_RELOADER_IMAGE


def volume_name(name: str) -> str:
    return f"{name}-db"


def peer_address(name: str, ordinal: int, namespace: str) -> str:
    """Stable DNS name of replica ``ordinal`` behind the governing service."""
    return f"{name}-{ordinal}.{GOVERNING_SERVICE_NAME}.{namespace}.svc"


def pod_labels(name: str) -> dict:
    return {"app": APP_LABEL, "alertmanager": name}


def alertmanager_command(name: str, namespace: str, replicas: int) -> List[str]:
    command = [
        "/bin/alertmanager",
        f"-config.file={CONFIG_FILE}",
        f"-web.listen-address=:{WEB_PORT}",
        f"-mesh.listen-address=:{MESH_PORT}",
        f"-storage.path={DATA_PATH}",
    ]
    command.extend(
        f"-mesh.peer={peer_address(name, ordinal, namespace)}"
        for ordinal in range(replicas)
    )
    return command


def make_stateful_set_spec(
    namespace: str,
    name: str,
    image: str,
    replicas: int,
    config_reloader_image: str = DEFAULT_CONFIG_RELOADER_IMAGE,
) -> StatefulSetSpec:
    """Build the StatefulSet spec without any data volume attached."""
    alertmanager = Container(
        name=name,
        image=image,
        command=alertmanager_command(name, namespace, replicas),
        ports=[
            ContainerPort(name="web", container_port=WEB_PORT),
            ContainerPort(name="mesh", container_port=MESH_PORT),
        ],
        volume_mounts=[
            VolumeMount(name=CONFIG_VOLUME_NAME, mount_path=CONFIG_PATH),
            VolumeMount(
                name=volume_name(name),
                mount_path=DATA_PATH,
                sub_path=DATA_SUB_PATH,
            ),
        ],
    )
    reloader = Container(
        name="config-reloader",
        image=config_reloader_image,
        args=[
            f"-webhook-url=http://localhost:{WEB_PORT}/-/reload",
            f"-volume-dir={CONFIG_PATH}",
        ],
        volume_mounts=[
            VolumeMount(name=CONFIG_VOLUME_NAME, mount_path=CONFIG_PATH, read_only=True),
        ],
        resources=ResourceRequirements(limits=dict(RELOADER_LIMITS)),
    )

    return StatefulSetSpec(
        service_name=GOVERNING_SERVICE_NAME,
        replicas=replicas,
        selector=LabelSelector(match_labels=pod_labels(name)),
        template=PodTemplateSpec(
            metadata=ObjectMeta(labels=pod_labels(name)),
            spec=PodSpec(
                termination_grace_period_seconds=0,
                containers=[alertmanager, reloader],
                volumes=[
                    Volume(
                        name=CONFIG_VOLUME_NAME,
                        config_map=ConfigMapVolumeSource(name=name),
                    ),
                ],
            ),
        ),
    )


def make_stateful_set(
    alertmanager: Alertmanager,
    old: Optional[StatefulSet] = None,
    defaults: Optional[AlertmanagerDefaults] = None,
) -> StatefulSet:
    """
    Build the StatefulSet that runs an Alertmanager cluster.

    Args:
        alertmanager: The Alertmanager resource
        old: The currently deployed StatefulSet, if any. Only its annotations
            are carried over; everything else is regenerated.
        defaults: Image defaults for fields the resource leaves unset

    Returns:
        A new StatefulSet; neither ``alertmanager`` nor ``old`` is modified
    """
    defaults = defaults or AlertmanagerDefaults()
    spec = alertmanager.spec
    name = alertmanager.name

    base_image = spec.base_image or defaults.base_image
    version = spec.version or defaults.version
    replicas = max(spec.replicas or 0, 1)
    image = f"{base_image}:{version}"

    statefulset = StatefulSet(
        metadata=ObjectMeta(name=name, namespace=alertmanager.metadata.namespace),
        spec=make_stateful_set_spec(
            alertmanager.namespace,
            name,
            image,
            replicas,
            defaults.config_reloader_image,
        ),
    )

    storage = spec.storage
    if storage is None:
        statefulset.spec.template.spec.volumes.append(
            Volume(name=volume_name(name), empty_dir=EmptyDirVolumeSource())
        )
    else:
        claim = PersistentVolumeClaim(
            metadata=ObjectMeta(name=volume_name(name)),
            spec=PersistentVolumeClaimSpec(
                access_modes=[READ_WRITE_ONCE],
                resources=storage.resources.model_copy(deep=True),
                selector=storage.selector.model_copy(deep=True) if storage.selector else None,
            ),
        )
        if storage.class_name:
            claim.metadata.annotations = {STORAGE_CLASS_ANNOTATION: storage.class_name}
        statefulset.spec.volume_claim_templates = [claim]

    if old is not None and old.metadata.annotations is not None:
        statefulset.metadata.annotations = dict(old.metadata.annotations)

    logger.debug(
        "Generated StatefulSet %s with %d replica(s), image %s",
        name,
        replicas,
        image,
    )
    return statefulset


def make_stateful_set_service(alertmanager: Alertmanager) -> Service:
    """Build the headless governing Service shared by all Alertmanagers."""
    return Service(
        metadata=ObjectMeta(
            name=GOVERNING_SERVICE_NAME,
            namespace=alertmanager.metadata.namespace,
        ),
        spec=ServiceSpec(
            cluster_ip="None",
            ports=[
                ServicePort(name="web", port=WEB_PORT, target_port=WEB_PORT),
                ServicePort(name="mesh", port=MESH_PORT, target_port=MESH_PORT),
            ],
            selector={"app": APP_LABEL},
        ),
    )
