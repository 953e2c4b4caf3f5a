# ==============================================
# Classifier
# ==============================================
#
# PURPOSE:
#   Apply a Schema's three rule passes to a Frame and produce the
#   Observations, along with the set of column indices consumed.
#
# CLASS: Classifier
# -----------------
#   Stateless: frame + schema in, ClassificationResult out.
#
#   - classify(frame: Frame, schema: Schema) -> ClassificationResult
#
#   Passes are run in a fixed order. The first failure aborts the
#   whole classification; no partial result is ever returned.
#
#   PASS 1: INFO
#     Every info column must exist exactly once (MissingColumnError /
#     AmbiguousColumnNameError). Non-empty values become labels of ONE
#     observation "info" with value 1. Empty values are left out.
#
#   PASS 2: GROUPED
#     For each group rule, in order, scan the frame in column order.
#     A column matches when its name matches the pattern and its index
#     is inside the rule's window. Each match yields one observation
#     {label_name: captured text}.
#
#   PASS 3: PLAIN
#     For each plain rule, exactly one column with that name inside the
#     window must exist. It yields one observation with the rule's
#     static labels.
#
#   All passes share one ConsumptionTracker: a column index claimed a
#   second time raises DuplicateConsumptionError, whichever pass gets
#   there second.
#
# ==============================================

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Tuple

from brother_exporter.errors import (
    DuplicateConsumptionError,
    MissingColumnError,
    PatternMismatchError,
    ValueFormatError,
)
from brother_exporter.frame.frame_builder import ColumnEntry, Frame
from brother_exporter.frame.transforms import Transform
from brother_exporter.schema.rules import GroupRule, PlainRule, Schema
from .observation import Observation

logger = logging.getLogger(__name__)


INFO_METRIC_NAME = "info"


class ConsumptionTracker:
    """
    Records which column index was consumed by which rule.

    One tracker lives for one classification.
    """

    def __init__(self):
        self._claims: Dict[int, str] = {}

    def claim(self, entry: ColumnEntry, claimant: str) -> None:
        """
        Mark a column as consumed.

        Raises:
            DuplicateConsumptionError: the index was already claimed
        """
        if entry.index in self._claims:
            raise DuplicateConsumptionError(
                index=entry.index,
                column_name=entry.name,
                first_claim=self._claims[entry.index],
                second_claim=claimant,
            )
        self._claims[entry.index] = claimant

    def __contains__(self, index: object) -> bool:
        return index in self._claims

    def __len__(self) -> int:
        return len(self._claims)

    @property
    def consumed(self) -> FrozenSet[int]:
        return frozenset(self._claims)


@dataclass(frozen=True)
class ClassificationResult:
    observations: Tuple[Observation, ...]
    consumed: FrozenSet[int]


class Classifier:
    """
    Runs the Info, Grouped and Plain passes of a Schema over a Frame.
    """

    def classify(self, frame: Frame, schema: Schema) -> ClassificationResult:
        """
        Classify every column the schema knows about.

        Args:
            frame: The snapshot to classify
            schema: Rules for the snapshot's model

        Returns:
            ClassificationResult with observations in pass order
            (info first, then group rules, then plain rules)
        """
        tracker = ConsumptionTracker()

        observations: List[Observation] = [self._info_pass(frame, schema, tracker)]
        observations.extend(self._grouped_pass(frame, schema, tracker))
        observations.extend(self._plain_pass(frame, schema, tracker))

        logger.debug(
            "%s: %d observations from %d of %d columns",
            schema.model_name, len(observations), len(tracker), len(frame),
        )
        return ClassificationResult(
            observations=tuple(observations),
            consumed=tracker.consumed,
        )

    def _info_pass(
        self,
        frame: Frame,
        schema: Schema,
        tracker: ConsumptionTracker
    ) -> Observation:
        labels = {}
        for column_name in schema.info_columns:
            entry = frame.find_unique(column_name)
            if entry is None:
                raise MissingColumnError(column_name, "info column")

            tracker.claim(entry, f"info column '{column_name}'")

            if entry.raw_value == "":
                continue
            labels[schema.info_labels[column_name]] = entry.raw_value

        return Observation(metric_name=INFO_METRIC_NAME, labels=labels, value=1.0)

    def _grouped_pass(
        self,
        frame: Frame,
        schema: Schema,
        tracker: ConsumptionTracker
    ) -> List[Observation]:
        observations = []
        for rule in schema.group_rules:
            for entry in frame:
                if rule.window is not None and not rule.window.contains(entry.index):
                    continue

                label_value = self._capture(rule, entry)
                if label_value is None:
                    continue

                tracker.claim(entry, rule.describe())
                observations.append(Observation(
                    metric_name=rule.metric_suffix,
                    labels={rule.label_name: label_value},
                    value=self._convert(rule.transform, entry),
                ))
        return observations

    def _plain_pass(
        self,
        frame: Frame,
        schema: Schema,
        tracker: ConsumptionTracker
    ) -> List[Observation]:
        observations = []
        for rule in schema.plain_rules:
            entry = frame.find_unique(rule.column_name, rule.window)
            if entry is None:
                detail = f"plain rule window {rule.window}" if rule.window else "plain rule"
                raise MissingColumnError(rule.column_name, detail)

            tracker.claim(entry, rule.describe())
            observations.append(Observation(
                metric_name=rule.metric_suffix,
                labels=rule.static_labels,
                value=self._convert(rule.transform, entry),
            ))
        return observations

    def _capture(self, rule: GroupRule, entry: ColumnEntry):
        """
        Return the captured label value, or None when the name does not
        match the rule at all.

        Raises:
            PatternMismatchError: the name matched, but not with exactly
                                  one participating capture group
        """
        matches = list(rule.regex.finditer(entry.name))
        if not matches:
            return None

        if len(matches) > 1:
            raise PatternMismatchError(
                rule.pattern,
                f"pattern {rule.pattern!r} matched column '{entry.name}' "
                f"{len(matches)} times, expected once",
                column_name=entry.name,
            )

        captured = matches[0].group(1)
        if captured is None:
            raise PatternMismatchError(
                rule.pattern,
                f"pattern {rule.pattern!r} matched column '{entry.name}' "
                f"without capturing a label value",
                column_name=entry.name,
            )
        return captured

    def _convert(self, transform: Transform, entry: ColumnEntry) -> float:
        try:
            return transform.apply(entry.raw_value)
        except ValueFormatError as e:
            raise e.for_column(entry.name) from e
