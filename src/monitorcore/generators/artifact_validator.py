"""
Post-generation validation for rendered artifacts.

Checks the YAML produced by the generators before it is written out, so a
broken document never reaches Prometheus or the cluster.

Usage:
    from monitorcore.generators.artifact_validator import validate_artifact

    result = validate_artifact(
        artifact_type="prometheus_config",
        content=config.to_yaml(),
        artifact_id="prometheus.yaml",
    )
    if not result.valid:
        for err in result.errors:
            print(err)
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import yaml


@dataclass
class ValidationResult:
    """Result of artifact validation."""

    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    artifact_type: Optional[str] = None
    artifact_id: Optional[str] = None

    def error(self, message: str) -> None:
        self.valid = False
        self.errors.append(message)


PROMETHEUS_CONFIG_KEYS = ("global", "rule_files", "scrape_configs", "alerting")


def _check_prometheus_config(doc: Dict[str, Any], result: ValidationResult) -> None:
    missing = [key for key in PROMETHEUS_CONFIG_KEYS if key not in doc]
    if missing:
        result.error(f"Missing top-level keys: {', '.join(missing)}")
        return

    jobs = doc.get("scrape_configs") or []
    if not jobs:
        result.warnings.append("No scrape_configs; Prometheus will scrape nothing")

    names = [job.get("job_name") for job in jobs]
    if any(not n for n in names):
        result.error("Every scrape config needs a job_name")
    duplicates = sorted(n for n, count in Counter(names).items() if n and count > 1)
    for name in duplicates:
        result.error(f"Duplicate job_name: {name}")


def _check_statefulset(doc: Dict[str, Any], result: ValidationResult) -> None:
    if doc.get("kind") != "StatefulSet":
        result.error(f"Expected kind StatefulSet, got {doc.get('kind')!r}")
        return
    spec = doc.get("spec") or {}
    replicas = spec.get("replicas")
    if not isinstance(replicas, int) or replicas < 1:
        result.error(f"spec.replicas must be at least 1, got {replicas!r}")
    containers = ((spec.get("template") or {}).get("spec") or {}).get("containers")
    if not containers:
        result.error("spec.template.spec.containers is empty")


def _check_service(doc: Dict[str, Any], result: ValidationResult) -> None:
    if doc.get("kind") != "Service":
        result.error(f"Expected kind Service, got {doc.get('kind')!r}")
        return
    if not (doc.get("spec") or {}).get("ports"):
        result.error("spec.ports is empty")


STRUCTURE_CHECKS: Dict[str, Callable[[Dict[str, Any], ValidationResult], None]] = {
    "prometheus_config": _check_prometheus_config,
    "statefulset": _check_statefulset,
    "service": _check_service,
}


def validate_artifact(
    artifact_type: str,
    content: str,
    artifact_id: Optional[str] = None,
) -> ValidationResult:
    """
    Validate a rendered artifact.

    Every artifact must be non-empty YAML that parses to a mapping. Known
    artifact types (``prometheus_config``, ``statefulset``, ``service``) also
    get structural checks; anything else only gets a warning.
    """
    result = ValidationResult(
        artifact_type=artifact_type,
        artifact_id=artifact_id,
    )

    if not content or not content.strip():
        result.error("Artifact content is empty")
        return result

    try:
        doc = yaml.safe_load(content)
    except yaml.YAMLError as e:
        result.error(f"YAML parse error: {e}")
        return result

    if not isinstance(doc, dict):
        result.error(f"Expected a YAML mapping, got {type(doc).__name__}")
        return result

    check = STRUCTURE_CHECKS.get(artifact_type)
    if check is None:
        result.warnings.append(
            f"No structural checks for artifact type {artifact_type!r}; parsed only"
        )
    else:
        check(doc, result)

    return result


def validate_artifacts(
    artifacts: List[tuple[str, str, Optional[str]]],
) -> List[ValidationResult]:
    """
    Validate multiple artifacts.

    Args:
        artifacts: List of (artifact_type, content, artifact_id) tuples

    Returns:
        List of ValidationResult, one per artifact
    """
    return [
        validate_artifact(artifact_type=at, content=c, artifact_id=aid)
        for at, c, aid in artifacts
    ]
