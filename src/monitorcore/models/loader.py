"""
YAML loader for monitoring resources.

Reads Kubernetes manifests (single or multi-document) and returns the
matching model based on each document's ``kind``.

Usage:
    from monitorcore.models.loader import load_prometheus, load_service_monitors

    prometheus = load_prometheus("prometheus.yaml")
    monitors = load_service_monitors(["monitors/api.yaml", "monitors/db.yaml"])
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Type, Union

import yaml

from monitorcore.errors import ObjectNotFoundError, UnsupportedKindError
from monitorcore.models.core import Alertmanager, Prometheus, ServiceMonitor
from monitorcore.models.meta import K8sModel
from monitorcore.models.workload import StatefulSet

if TYPE_CHECKING:
    from os import PathLike

logger = logging.getLogger(__name__)

PathType = Union[str, "PathLike[str]"]

KIND_MODELS: Dict[str, Type[K8sModel]] = {
    "ServiceMonitor": ServiceMonitor,
    "Prometheus": Prometheus,
    "Alertmanager": Alertmanager,
    "StatefulSet": StatefulSet,
}


def load_objects(path: PathType) -> List[Dict[str, Any]]:
    """
    Read every non-empty YAML document from a file.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Manifest file not found: {path}")

    documents = [
        doc
        for doc in yaml.safe_load_all(path.read_text(encoding="utf-8"))
        if doc
    ]
    logger.debug("Loaded %d document(s) from %s", len(documents), path)
    return documents


def parse_object(data: Dict[str, Any], source: str = "") -> K8sModel:
    """Build the model registered for ``data['kind']``."""
    kind = data.get("kind", "")
    model = KIND_MODELS.get(kind)
    if model is None:
        raise UnsupportedKindError(kind, source)
    return model.model_validate(data)


def _load_kind(path: PathType, kind: str) -> List[K8sModel]:
    return [
        parse_object(doc, str(path))
        for doc in load_objects(path)
        if doc.get("kind") == kind
    ]


def _load_one(path: PathType, kind: str) -> K8sModel:
    objects = _load_kind(path, kind)
    if not objects:
        raise ObjectNotFoundError(kind, str(path))
    if len(objects) > 1:
        logger.warning(
            "%s holds %d %s objects; using the first", path, len(objects), kind
        )
    return objects[0]


def load_service_monitors(paths: Iterable[PathType]) -> Dict[str, ServiceMonitor]:
    """
    Load ServiceMonitors from several files.

    Returns:
        Monitors keyed by ``<namespace>/<name>``, in file and document order.
        A later monitor with the same key replaces the earlier one in place.
    """
    monitors: Dict[str, ServiceMonitor] = {}
    for path in paths:
        for monitor in _load_kind(path, "ServiceMonitor"):
            monitors[monitor.key] = monitor
    return monitors


def load_prometheus(path: PathType) -> Prometheus:
    return _load_one(path, "Prometheus")


def load_alertmanager(path: PathType) -> Alertmanager:
    return _load_one(path, "Alertmanager")


def load_stateful_set(path: PathType) -> StatefulSet:
    return _load_one(path, "StatefulSet")
