# ==============================================
# MaintenanceInfoReader: Model Dispatch
# ==============================================
#
# PURPOSE:
#   The entry point that ties the three topics together. Callers hand
#   it the raw CSV; it hands back Observations or raises the first
#   error encountered.
#
#   ┌────────────────────────────────────────────────────────┐
#   │                 MaintenanceInfoReader                  │
#   │                                                        │
#   │  raw CSV ──► frame_from_csv()          (Topic 1)       │
#   │                 │ Frame                                │
#   │                 ▼                                      │
#   │  "Model Name" ──► SchemaRegistry.lookup() (Topic 2)    │
#   │                 │ Schema                               │
#   │                 ▼                                      │
#   │  Classifier.classify()                  (Topic 3)      │
#   │                 │ observations + consumed indices      │
#   │                 ▼                                      │
#   │  CompletenessValidator.validate()       (Topic 3)      │
#   │                 │                                      │
#   │                 ▼                                      │
#   │          list[Observation]                             │
#   └────────────────────────────────────────────────────────┘
#
# The registry is passed in by the caller; this module keeps no
# process-wide state, so one reader may serve concurrent requests.
#
# ==============================================

import logging
from typing import List, Optional, Union

from brother_exporter.classification.classifier import Classifier
from brother_exporter.classification.observation import Observation
from brother_exporter.classification.validator import CompletenessValidator
from brother_exporter.errors import MissingColumnError
from brother_exporter.frame.frame_builder import Frame, frame_from_csv
from brother_exporter.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)


MODEL_NAME_COLUMN = "Model Name"


class MaintenanceInfoReader:
    """
    Converts maintenance CSV snapshots into Observations using the
    schema registered for the printer's reported model.
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        classifier: Optional[Classifier] = None,
        validator: Optional[CompletenessValidator] = None
    ):
        self._registry = registry
        self._classifier = classifier or Classifier()
        self._validator = validator or CompletenessValidator()

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    def read(self, source: Union[str, bytes]) -> List[Observation]:
        """
        Classify a raw maintenance CSV.

        Args:
            source: CSV text or bytes (header row + value row)

        Returns:
            Observations in pass order

        Raises:
            ClassificationError: any subclass; nothing is returned on error
        """
        frame = frame_from_csv(source)
        return self.read_frame(frame)

    def read_frame(self, frame: Frame) -> List[Observation]:
        model_entry = frame.find_unique(MODEL_NAME_COLUMN)
        if model_entry is None:
            raise MissingColumnError(MODEL_NAME_COLUMN, "not reported by printer")

        schema = self._registry.lookup(model_entry.raw_value)

        result = self._classifier.classify(frame, schema)
        self._validator.validate(frame, schema, result.consumed)

        logger.debug("Classified %s snapshot into %d observations",
                     schema.model_name, len(result.observations))
        return list(result.observations)


def read_maintenance_info(
    source: Union[str, bytes],
    registry: SchemaRegistry
) -> List[Observation]:
    """Shorthand for MaintenanceInfoReader(registry).read(source)."""
    return MaintenanceInfoReader(registry).read(source)
