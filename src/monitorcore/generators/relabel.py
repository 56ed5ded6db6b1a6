"""
Relabel rule construction for ServiceMonitor endpoints.

Prometheus discovers every Kubernetes endpoint in the cluster; the rules
built here narrow that down to the services a ServiceMonitor selects and
reshape the discovery metadata into the final target labels.

Rule order matters. Prometheus applies relabel rules top to bottom, a
``keep``/``drop`` rule discards targets before later rules see them, and the
last rule that writes a label wins. The builder therefore always emits:

1. selector ``matchLabels`` filters
2. selector ``matchExpressions`` filters
3. namespace filter
4. port filter
5. structural rules (namespace, ``svc_*`` and ``pod_*`` label maps)
6. default ``job`` label from the service name and port
7. ``job`` label from ``jobLabel``, overriding step 6 when present

Usage:
    from monitorcore.generators.relabel import build_relabel_configs

    rules = build_relabel_configs(monitor, monitor.spec.endpoints[0], 0)
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Type

from monitorcore.models.core import (
    Endpoint,
    NamedPort,
    NumericTargetPort,
    PortReference,
    ServiceMonitor,
    StringTargetPort,
)
from monitorcore.models.meta import LabelSelectorOperator
from monitorcore.models.scrape import RelabelAction, RelabelConfig

logger = logging.getLogger(__name__)

# Discovery metadata labels set by the Kubernetes "endpoints" role
SERVICE_LABEL_PREFIX = "__meta_kubernetes_service_label_"
POD_LABEL_PREFIX = "__meta_kubernetes_pod_label_"
NAMESPACE_LABEL = "__meta_kubernetes_namespace"
SERVICE_NAME_LABEL = "__meta_kubernetes_service_name"
ENDPOINT_PORT_NAME_LABEL = "__meta_kubernetes_endpoint_port_name"
CONTAINER_PORT_NAME_LABEL = "__meta_kubernetes_container_port_name"
CONTAINER_PORT_NUMBER_LABEL = "__meta_kubernetes_container_port_number"
POD_TEMPLATE_HASH_LABEL = POD_LABEL_PREFIX + "pod_template_hash"

MATCH_ANY_VALUE = ".+"

_INVALID_LABEL_CHAR_RE = re.compile(r"[^a-zA-Z0-9_]")

# Which discovery label each kind of port reference is matched against.
PORT_FILTER_LABELS: Dict[Type[PortReference], str] = {
    NamedPort: ENDPOINT_PORT_NAME_LABEL,
    StringTargetPort: CONTAINER_PORT_NAME_LABEL,
    NumericTargetPort: CONTAINER_PORT_NUMBER_LABEL,
}

# operator -> (action, match-any?)
_EXPRESSION_RULES = {
    LabelSelectorOperator.IN.value: (RelabelAction.KEEP, False),
    LabelSelectorOperator.NOT_IN.value: (RelabelAction.DROP, False),
    LabelSelectorOperator.EXISTS.value: (RelabelAction.KEEP, True),
    LabelSelectorOperator.DOES_NOT_EXIST.value: (RelabelAction.DROP, True),
}


def sanitize_label_name(name: str) -> str:
    """Replace every character outside ``[a-zA-Z0-9_]`` with ``_``."""
    return _INVALID_LABEL_CHAR_RE.sub("_", name)


def service_label(name: str) -> str:
    """Discovery label carrying the value of service label ``name``."""
    return SERVICE_LABEL_PREFIX + sanitize_label_name(name)


def _filter(action: RelabelAction, source: str, regex: str) -> RelabelConfig:
    return RelabelConfig(action=action, source_labels=[source], regex=regex)


def selector_rules(monitor: ServiceMonitor) -> List[RelabelConfig]:
    """Keep/drop rules equivalent to the monitor's label selector."""
    selector = monitor.spec.selector
    rules = [
        _filter(RelabelAction.KEEP, service_label(key), value)
        for key, value in selector.match_labels.items()
    ]

    for expression in selector.match_expressions:
        mapped = _EXPRESSION_RULES.get(expression.operator)
        if mapped is None:
            logger.debug(
                "Skipping selector expression on %r with unknown operator %r",
                expression.key,
                expression.operator,
            )
            continue
        action, match_any = mapped
        regex = MATCH_ANY_VALUE if match_any else "|".join(expression.values)
        rules.append(_filter(action, service_label(expression.key), regex))

    return rules


def namespace_rule(monitor: ServiceMonitor) -> Optional[RelabelConfig]:
    """
    Restrict discovery to the selected namespaces.

    Explicit names win over ``any``; with neither set, only the monitor's own
    namespace is kept. ``any`` alone yields no rule.
    """
    selection = monitor.spec.namespace_selector
    if selection.match_names:
        return _filter(RelabelAction.KEEP, NAMESPACE_LABEL, "|".join(selection.match_names))
    if not selection.any:
        return _filter(RelabelAction.KEEP, NAMESPACE_LABEL, monitor.namespace)
    return None


def port_rule(port: Optional[PortReference]) -> Optional[RelabelConfig]:
    """Keep only targets on the endpoint's port, if one is set."""
    if port is None:
        return None
    return _filter(RelabelAction.KEEP, PORT_FILTER_LABELS[type(port)], port.value)


def structural_rules() -> List[RelabelConfig]:
    """Rules that copy discovery metadata into the final label set."""
    return [
        RelabelConfig(source_labels=[NAMESPACE_LABEL], target_label="namespace"),
        RelabelConfig(
            action=RelabelAction.LABELMAP,
            regex=SERVICE_LABEL_PREFIX + "(.+)",
            replacement="svc_$1",
        ),
        RelabelConfig(
            action=RelabelAction.REPLACE,
            target_label=POD_TEMPLATE_HASH_LABEL,
            replacement="",
        ),
        RelabelConfig(
            action=RelabelAction.LABELMAP,
            regex=POD_LABEL_PREFIX + "(.+)",
            replacement="pod_$1",
        ),
    ]


def job_suffix(port: Optional[PortReference]) -> Optional[str]:
    """Port name appended to derived job names; numeric ports give none."""
    if isinstance(port, (NamedPort, StringTargetPort)):
        return port.value
    return None


def job_rules(monitor: ServiceMonitor, port: Optional[PortReference]) -> List[RelabelConfig]:
    """
    Derive the ``job`` label as ``<base>-<port>``.

    The base is the service name, then (if ``jobLabel`` is set) the value of
    that service label. The second rule only matches when the label has a
    value, so the service-name job stays as a fallback.
    """
    suffix = job_suffix(port)
    if suffix is None:
        return []

    replacement = "${1}-" + suffix
    rules = [
        RelabelConfig(
            source_labels=[SERVICE_NAME_LABEL],
            target_label="job",
            replacement=replacement,
        )
    ]
    if monitor.spec.job_label:
        rules.append(
            RelabelConfig(
                source_labels=[service_label(monitor.spec.job_label)],
                target_label="job",
                regex="(.+)",
                replacement=replacement,
            )
        )
    return rules


def build_relabel_configs(
    monitor: ServiceMonitor,
    endpoint: Endpoint,
    index: int,
) -> List[RelabelConfig]:
    """
    Build the ordered relabel rules for one endpoint of a ServiceMonitor.

    Args:
        monitor: The ServiceMonitor the endpoint belongs to
        endpoint: The endpoint being scraped
        index: Position of the endpoint in ``monitor.spec.endpoints``

    Returns:
        A new list of rules; inputs are not modified
    """
    port = endpoint.port_reference

    rules = selector_rules(monitor)
    for rule in (namespace_rule(monitor), port_rule(port)):
        if rule is not None:
            rules.append(rule)
    rules.extend(structural_rules())
    rules.extend(job_rules(monitor, port))

    logger.debug(
        "Built %d relabel rules for %s endpoint %d",
        len(rules),
        monitor.key,
        index,
    )
    return rules
