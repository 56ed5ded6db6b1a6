"""
Shared Kubernetes object primitives.

These types appear on both sides of the compilers: label selectors and
object metadata are read from ServiceMonitor / Alertmanager resources and
written back out into the generated StatefulSet and Service manifests.

All models accept the camelCase keys used in Kubernetes manifests as well as
their snake_case field names, and ignore keys they do not know about.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field


class K8sModel(BaseModel):
    """Base for every model that is read from or rendered to a manifest."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Dump using wire names, omitting unset (None) fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_yaml(self) -> str:
        """Render as a YAML document with a stable key order."""
        return yaml.safe_dump(
            self.to_dict(),
            sort_keys=False,
            default_flow_style=False,
        )


class LabelSelectorOperator(str, Enum):
    """Set-based selector operators understood by the relabel builder."""
    IN = "In"
    NOT_IN = "NotIn"
    EXISTS = "Exists"
    DOES_NOT_EXIST = "DoesNotExist"


class LabelSelectorRequirement(K8sModel):
    """A single set-based selector expression.

    ``operator`` is kept as a plain string so that operators outside
    :class:`LabelSelectorOperator` survive parsing and can be skipped later.
    """
    key: str
    operator: str
    values: List[str] = Field(default_factory=list)


class LabelSelector(K8sModel):
    """Exact-match labels plus set-based expressions."""
    match_labels: Dict[str, str] = Field(default_factory=dict, alias="matchLabels")
    match_expressions: List[LabelSelectorRequirement] = Field(
        default_factory=list, alias="matchExpressions"
    )


class ObjectMeta(K8sModel):
    """Subset of Kubernetes object metadata used by the generators."""
    name: str = ""
    namespace: Optional[str] = None
    labels: Optional[Dict[str, str]] = None
    annotations: Optional[Dict[str, str]] = None


class ResourceRequirements(K8sModel):
    """Compute or storage resource limits and requests (quantity strings)."""
    limits: Optional[Dict[str, str]] = None
    requests: Optional[Dict[str, str]] = None
