"""
monitorcore - Compile monitoring resources into Prometheus and Alertmanager artifacts.

This package turns declarative monitoring resources into the concrete
documents the monitoring stack runs on:

Key Features:
- ServiceMonitor + Prometheus -> Prometheus configuration with ordered
  Kubernetes relabel rules per scraped endpoint
- Alertmanager -> StatefulSet with mesh peers wired by ordinal, plus the
  headless governing Service
- Pure, deterministic generators; the same input renders byte-identical YAML

Example usage:
    from monitorcore import generate_config, make_stateful_set

    config = generate_config(prometheus, monitors)
    print(config.to_yaml())

    statefulset = make_stateful_set(alertmanager)
    print(statefulset.to_yaml())
"""

__version__ = "0.1.0"
__all__ = [
    "generate_config",
    "build_relabel_configs",
    "make_stateful_set",
    "make_stateful_set_service",
    "__version__",
]


# Lazy imports to avoid loading pydantic models at import time
def __getattr__(name: str):
    if name == "generate_config":
        from monitorcore.generators.prometheus_config import generate_config
        return generate_config
    if name == "build_relabel_configs":
        from monitorcore.generators.relabel import build_relabel_configs
        return build_relabel_configs
    if name == "make_stateful_set":
        from monitorcore.generators.alertmanager import make_stateful_set
        return make_stateful_set
    if name == "make_stateful_set_service":
        from monitorcore.generators.alertmanager import make_stateful_set_service
        return make_stateful_set_service
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
