"""
monitorcore CLI - Compile monitoring resources into deployable artifacts.

Commands:
    monitorcore generate-config        Prometheus configuration from a Prometheus
                                       resource and its ServiceMonitors
    monitorcore generate-alertmanager  StatefulSet and governing Service for an
                                       Alertmanager resource
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import click
import yaml
from opentelemetry import trace

from monitorcore.config import get_config
from monitorcore.generators.alertmanager import make_stateful_set, make_stateful_set_service
from monitorcore.generators.artifact_validator import validate_artifact
from monitorcore.generators.otel import emit_config_generated, emit_statefulset_generated
from monitorcore.generators.prometheus_config import generate_config
from monitorcore.io_ops import atomic_write_with_backup
from monitorcore.logger import GenerationLogger, configure_logging
from monitorcore.models.loader import (
    load_alertmanager,
    load_prometheus,
    load_service_monitors,
    load_stateful_set,
)

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

LOAD_ERRORS = (ValueError, FileNotFoundError, yaml.YAMLError)


def _write_artifacts(
    output_dir: Path,
    artifacts: List[Tuple[str, str, str]],
    gen_logger: GenerationLogger,
    backup: bool,
) -> List[Path]:
    """Validate every (artifact_type, filename, content), then write them all."""
    for artifact_type, filename, content in artifacts:
        result = validate_artifact(artifact_type, content, filename)
        for warning in result.warnings:
            logger.warning("%s: %s", filename, warning)
        if not result.valid:
            gen_logger.log_artifact_invalid(artifact_type, result.errors)
            raise click.ClickException(
                f"Generated {filename} failed validation: " + "; ".join(result.errors)
            )

    written = []
    for _, filename, content in artifacts:
        path = output_dir / filename
        size = atomic_write_with_backup(path, content, backup=backup)
        gen_logger.log_artifact_written(path=str(path), size=size)
        written.append(path)
    return written


def _report(written: List[Path], output_dir: Path) -> None:
    click.echo(f"Generated {len(written)} artifacts in {output_dir}/")
    for path in written:
        click.echo(f"  - {path}")


@click.group()
@click.version_option(package_name="monitorcore")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Override MONITORCORE_LOG_LEVEL",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "text"]),
    help="Override MONITORCORE_LOG_FORMAT",
)
def main(log_level: Optional[str], log_format: Optional[str]):
    """monitorcore - Prometheus and Alertmanager artifacts from monitoring resources."""
    config = get_config()
    configure_logging(log_level or config.log_level, log_format or config.log_format)


@main.command("generate-config")
@click.option(
    "--prometheus",
    "prometheus_path",
    required=True,
    type=click.Path(dir_okay=False),
    help="File holding the Prometheus resource",
)
@click.option(
    "--monitors",
    "monitor_paths",
    multiple=True,
    type=click.Path(dir_okay=False),
    help="File(s) holding ServiceMonitor resources (can specify multiple)",
)
@click.option("--output", "-o", help="Output directory (default: MONITORCORE_OUTPUT_DIR)")
@click.option("--backup", is_flag=True, help="Keep a .bak copy of replaced files")
def generate_config_command(
    prometheus_path: str,
    monitor_paths: Tuple[str, ...],
    output: Optional[str],
    backup: bool,
):
    """Generate prometheus.yaml from a Prometheus resource and ServiceMonitors."""
    config = get_config()
    output_dir = Path(output) if output else config.get_output_path()

    with tracer.start_as_current_span("monitorcore.generate_config") as span:
        try:
            prometheus = load_prometheus(prometheus_path)
            monitors = load_service_monitors(monitor_paths)
        except LOAD_ERRORS as e:
            raise click.ClickException(str(e)) from e

        span.set_attribute("monitorcore.service_monitors", len(monitors))

        prometheus_config = generate_config(prometheus, monitors)
        emit_config_generated(prometheus_config)

        gen_logger = GenerationLogger(
            namespace=prometheus.metadata.namespace or "",
            name=prometheus.metadata.name,
            service_name=config.service_name,
        )
        gen_logger.log_config_generated(prometheus_config)

        written = _write_artifacts(
            output_dir,
            [("prometheus_config", "prometheus.yaml", prometheus_config.to_yaml())],
            gen_logger,
            backup,
        )

    _report(written, output_dir)


@main.command("generate-alertmanager")
@click.option(
    "--alertmanager",
    "alertmanager_path",
    required=True,
    type=click.Path(dir_okay=False),
    help="File holding the Alertmanager resource",
)
@click.option(
    "--previous",
    "previous_path",
    type=click.Path(dir_okay=False),
    help="Currently deployed StatefulSet whose annotations are carried over",
)
@click.option("--output", "-o", help="Output directory (default: MONITORCORE_OUTPUT_DIR)")
@click.option("--backup", is_flag=True, help="Keep a .bak copy of replaced files")
def generate_alertmanager_command(
    alertmanager_path: str,
    previous_path: Optional[str],
    output: Optional[str],
    backup: bool,
):
    """Generate the Alertmanager StatefulSet and its headless Service."""
    config = get_config()
    output_dir = Path(output) if output else config.get_output_path()

    with tracer.start_as_current_span("monitorcore.generate_alertmanager") as span:
        try:
            alertmanager = load_alertmanager(alertmanager_path)
            previous = load_stateful_set(previous_path) if previous_path else None
        except LOAD_ERRORS as e:
            raise click.ClickException(str(e)) from e

        span.set_attribute("monitorcore.alertmanager", alertmanager.name)

        statefulset = make_stateful_set(
            alertmanager,
            old=previous,
            defaults=config.alertmanager_defaults(),
        )
        service = make_stateful_set_service(alertmanager)
        emit_statefulset_generated(statefulset)

        gen_logger = GenerationLogger(
            namespace=alertmanager.namespace,
            name=alertmanager.name,
            service_name=config.service_name,
        )
        gen_logger.log_statefulset_generated(statefulset)
        gen_logger.log_service_generated(service)

        written = _write_artifacts(
            output_dir,
            [
                ("statefulset", f"{alertmanager.name}-statefulset.yaml", statefulset.to_yaml()),
                ("service", f"{alertmanager.name}-service.yaml", service.to_yaml()),
            ],
            gen_logger,
            backup,
        )

    _report(written, output_dir)


if __name__ == "__main__":
    main()
