# ==============================================
# Observation
# ==============================================
#
# PURPOSE:
#   One labeled numeric sample, the unit of classification output.
#   Immutable: labels are frozen behind a read-only mapping, and equal
#   observations hash alike, so they can sit in sets and dict keys.
#
# ==============================================

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple


@dataclass(frozen=True)
class Observation:
    """
    One labeled numeric sample produced by classification.

    `metric_name` is the rule's suffix ("info" for the composite info
    observation); the exposition layer adds the namespace prefix.
    """

    metric_name: str
    labels: Mapping[str, str] = field(default_factory=dict)
    value: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))

    def __hash__(self) -> int:
        return hash((self.sort_key, self.value))

    @property
    def sort_key(self) -> Tuple[str, Tuple[Tuple[str, str], ...]]:
        return self.metric_name, tuple(sorted(self.labels.items()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metric_name": self.metric_name,
            "labels": dict(self.labels),
            "value": self.value,
        }
