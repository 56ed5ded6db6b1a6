"""monitorcore generators for Prometheus configuration and Alertmanager workloads."""

from monitorcore.generators.alertmanager import (
    AlertmanagerDefaults,
    make_stateful_set,
    make_stateful_set_service,
    make_stateful_set_spec,
)
from monitorcore.generators.artifact_validator import (
    ValidationResult,
    validate_artifact,
    validate_artifacts,
)
from monitorcore.generators.prometheus_config import (
    generate_alertmanager_config,
    generate_config,
    generate_service_monitor_config,
)
from monitorcore.generators.relabel import (
    build_relabel_configs,
    sanitize_label_name,
)

__all__ = [
    # Prometheus configuration
    "generate_config",
    "generate_service_monitor_config",
    "generate_alertmanager_config",
    "build_relabel_configs",
    "sanitize_label_name",
    # Alertmanager workload
    "AlertmanagerDefaults",
    "make_stateful_set",
    "make_stateful_set_service",
    "make_stateful_set_spec",
    # Post-generation validation
    "ValidationResult",
    "validate_artifact",
    "validate_artifacts",
]
