"""
Prometheus configuration generation.

Compiles a Prometheus resource and its ServiceMonitors into the
configuration document Prometheus loads: one scrape job per
(ServiceMonitor, endpoint) pair and one Alertmanager discovery block per
configured Alertmanager.

Usage:
    from monitorcore.generators.prometheus_config import generate_config

    config = generate_config(prometheus, monitors)
    print(config.to_yaml())
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Union

from monitorcore.generators.relabel import (
    CONTAINER_PORT_NUMBER_LABEL,
    ENDPOINT_PORT_NAME_LABEL,
    NAMESPACE_LABEL,
    SERVICE_NAME_LABEL,
    build_relabel_configs,
)
from monitorcore.models.core import (
    AlertmanagerEndpoints,
    Endpoint,
    NumericTargetPort,
    Prometheus,
    ServiceMonitor,
    StringTargetPort,
)
from monitorcore.models.scrape import (
    AlertingConfig,
    AlertmanagerConfig,
    PrometheusConfig,
    RelabelAction,
    RelabelConfig,
    ScrapeConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_ALERTMANAGER_SCHEME = "http"

MonitorCollection = Union[Mapping[str, ServiceMonitor], Iterable[ServiceMonitor]]


def job_name(monitor: ServiceMonitor, index: int) -> str:
    return f"{monitor.namespace}/{monitor.name}/{index}"


def generate_service_monitor_config(
    monitor: ServiceMonitor,
    endpoint: Endpoint,
    index: int,
) -> ScrapeConfig:
    """Build the scrape job for one endpoint of a ServiceMonitor.

    Interval, path and scheme are only set when the endpoint sets them.
    """
    return ScrapeConfig(
        job_name=job_name(monitor, index),
        scrape_interval=endpoint.interval or None,
        metrics_path=endpoint.path or None,
        scheme=endpoint.scheme or None,
        relabel_configs=build_relabel_configs(monitor, endpoint, index),
    )


def generate_alertmanager_config(endpoints: AlertmanagerEndpoints) -> AlertmanagerConfig:
    """Build the discovery block that finds one Alertmanager service."""
    relabelings = [
        RelabelConfig(
            action=RelabelAction.KEEP,
            source_labels=[SERVICE_NAME_LABEL],
            regex=endpoints.name,
        ),
        RelabelConfig(
            action=RelabelAction.KEEP,
            source_labels=[NAMESPACE_LABEL],
            regex=endpoints.namespace,
        ),
    ]

    port = endpoints.port_reference
    if isinstance(port, StringTargetPort):
        relabelings.append(
            RelabelConfig(
                action=RelabelAction.KEEP,
                source_labels=[ENDPOINT_PORT_NAME_LABEL],
                regex=port.value,
            )
        )
    elif isinstance(port, NumericTargetPort):
        relabelings.append(
            RelabelConfig(
                action=RelabelAction.KEEP,
                source_labels=[CONTAINER_PORT_NUMBER_LABEL],
                regex=port.value,
            )
        )

    return AlertmanagerConfig(
        scheme=endpoints.scheme or DEFAULT_ALERTMANAGER_SCHEME,
        relabel_configs=relabelings,
    )


def _monitor_list(monitors: MonitorCollection) -> List[ServiceMonitor]:
    if isinstance(monitors, Mapping):
        return list(monitors.values())
    return list(monitors)


def generate_config(prometheus: Prometheus, monitors: MonitorCollection) -> PrometheusConfig:
    """
    Compile the full Prometheus configuration.

    Args:
        prometheus: Prometheus resource; only its Alertmanager targets are used
        monitors: ServiceMonitors, either keyed (``<namespace>/<name>``) or as
            a plain sequence. Jobs follow the iteration order.

    Returns:
        A freshly built PrometheusConfig
    """
    scrape_configs = [
        generate_service_monitor_config(monitor, endpoint, index)
        for monitor in _monitor_list(monitors)
        for index, endpoint in enumerate(monitor.spec.endpoints)
    ]
    alertmanagers = [
        generate_alertmanager_config(am)
        for am in prometheus.spec.alerting.alertmanagers
    ]

    config = PrometheusConfig(
        scrape_configs=scrape_configs,
        alerting=AlertingConfig(alertmanagers=alertmanagers),
    )
    logger.debug(
        "Generated Prometheus config with %d scrape jobs and %d alertmanagers",
        len(scrape_configs),
        len(alertmanagers),
    )
    return config
