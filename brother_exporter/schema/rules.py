# ==============================================
# Rules (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that describe HOW a model's CSV maps to metrics.
#   The classifier only reads these; it never mutates them.
#
# CLASSES:
# --------
# - IndexWindow (frozen dataclass)
#     Inclusive [min_index, max_index] column range. None = unbounded.
#     Used to tell apart repeated column names such as "Total".
#
# - GroupRule (frozen dataclass)
#     One regex with exactly one capture group. Every matching column
#     becomes one observation: metric `metric_suffix`, one label
#     `label_name` = captured text.
#
#     Attributes:
#     -----------
#     - metric_suffix: str           → e.g. "part_remaining_life_ratio"
#     - pattern: str                 → e.g. r"^% of Life Remaining\((.+)\)$"
#     - label_name: str              → e.g. "part"
#     - transform: Transform         → default Transform.DECIMAL
#     - window: IndexWindow | None
#
# - PlainRule (frozen dataclass)
#     One exact column name → one observation with static labels.
#     The column MUST be present.
#
# - Schema (frozen dataclass)
#     model_name, info_columns, group_rules, plain_rules, ignore_names.
#     Validated on construction; see Schema.__post_init__.
#
#   All rule classes provide:
#     - to_dict() -> dict                 → Serialize (schema files)
#     - from_dict(data: dict)  (classmethod) → Deserialize
#
# ==============================================

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from brother_exporter.errors import SchemaDefinitionError
from brother_exporter.frame.label_normalizer import LabelNormalizer
from brother_exporter.frame.transforms import Transform


METRIC_SUFFIX_PATTERN = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")


def _check_metric_suffix(suffix: str) -> None:
    if not METRIC_SUFFIX_PATTERN.match(suffix or ""):
        raise SchemaDefinitionError(f"invalid metric suffix: {suffix!r}")


def _check_label_name(name: str, context: str) -> None:
    if not LabelNormalizer.is_valid_label_name(name or ""):
        raise SchemaDefinitionError(f"invalid label name {name!r} for {context}")


def _require_mapping(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise SchemaDefinitionError(
            f"{what} must be an object, got {type(data).__name__}: {data!r}"
        )
    return data


def _transform_from(value: Any) -> Transform:
    if isinstance(value, Transform):
        return value
    try:
        return Transform.from_name(value)
    except ValueError as e:
        raise SchemaDefinitionError(str(e)) from None


@dataclass(frozen=True)
class IndexWindow:
    """Inclusive column-index range. An unset bound is unbounded."""

    min_index: Optional[int] = None
    max_index: Optional[int] = None

    def __post_init__(self):
        for bound in (self.min_index, self.max_index):
            if bound is None:
                continue
            if isinstance(bound, bool) or not isinstance(bound, int):
                raise SchemaDefinitionError(f"window bound must be an integer, got {bound!r}")
            if bound < 0:
                raise SchemaDefinitionError(f"window bound must be >= 0, got {bound}")
        if (
            self.min_index is not None
            and self.max_index is not None
            and self.min_index > self.max_index
        ):
            raise SchemaDefinitionError(
                f"window min_index {self.min_index} > max_index {self.max_index}"
            )

    def contains(self, index: int) -> bool:
        if self.min_index is not None and index < self.min_index:
            return False
        if self.max_index is not None and index > self.max_index:
            return False
        return True

    def __str__(self) -> str:
        low = "" if self.min_index is None else str(self.min_index)
        high = "" if self.max_index is None else str(self.max_index)
        return f"[{low}..{high}]"

    def to_dict(self) -> Dict[str, Any]:
        return {"min_index": self.min_index, "max_index": self.max_index}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["IndexWindow"]:
        if data is None:
            return None
        data = _require_mapping(data, "window")
        return cls(min_index=data.get("min_index"), max_index=data.get("max_index"))


@dataclass(frozen=True)
class GroupRule:
    """
    Turns every column whose name matches `pattern` into one observation.

    The pattern is searched (not fully matched) against the column name,
    so anchor it with ^...$ when the whole name must match.
    """

    metric_suffix: str
    pattern: str
    label_name: str
    transform: Transform = Transform.DECIMAL
    window: Optional[IndexWindow] = None

    # Compiled once on construction
    regex: "re.Pattern" = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        _check_metric_suffix(self.metric_suffix)
        _check_label_name(self.label_name, f"group rule '{self.metric_suffix}'")
        object.__setattr__(self, "transform", _transform_from(self.transform))

        try:
            regex = re.compile(self.pattern)
        except re.error as e:
            raise SchemaDefinitionError(f"bad pattern {self.pattern!r}: {e}") from None

        if regex.groups != 1:
            raise SchemaDefinitionError(
                f"pattern {self.pattern!r} has {regex.groups} capture groups, expected exactly 1"
            )
        object.__setattr__(self, "regex", regex)

    def describe(self) -> str:
        return f"group rule '{self.metric_suffix}' ({self.pattern})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metric_suffix": self.metric_suffix,
            "pattern": self.pattern,
            "label_name": self.label_name,
            "transform": self.transform.value,
            "window": self.window.to_dict() if self.window else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GroupRule":
        data = _require_mapping(data, "group rule")
        return cls(
            metric_suffix=data["metric_suffix"],
            pattern=data["pattern"],
            label_name=data["label_name"],
            transform=data.get("transform", Transform.DECIMAL.value),
            window=IndexWindow.from_dict(data.get("window")),
        )


@dataclass(frozen=True)
class PlainRule:
    """Turns one required, exactly-named column into one observation."""

    column_name: str
    metric_suffix: str
    static_labels: Mapping[str, str] = field(default_factory=dict)
    transform: Transform = Transform.DECIMAL
    window: Optional[IndexWindow] = None

    def __post_init__(self):
        if not self.column_name:
            raise SchemaDefinitionError("plain rule needs a column name")
        _check_metric_suffix(self.metric_suffix)
        for label_name in self.static_labels:
            _check_label_name(label_name, f"plain rule '{self.column_name}'")
        object.__setattr__(self, "static_labels", MappingProxyType(dict(self.static_labels)))
        object.__setattr__(self, "transform", _transform_from(self.transform))

    def __hash__(self) -> int:
        return hash((
            self.column_name,
            self.metric_suffix,
            tuple(sorted(self.static_labels.items())),
            self.transform,
            self.window,
        ))

    def describe(self) -> str:
        where = f" {self.window}" if self.window else ""
        return f"plain rule '{self.column_name}'{where}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "column_name": self.column_name,
            "metric_suffix": self.metric_suffix,
            "static_labels": dict(self.static_labels),
            "transform": self.transform.value,
            "window": self.window.to_dict() if self.window else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlainRule":
        data = _require_mapping(data, "plain rule")
        return cls(
            column_name=data["column_name"],
            metric_suffix=data["metric_suffix"],
            static_labels=data.get("static_labels") or {},
            transform=data.get("transform", Transform.DECIMAL.value),
            window=IndexWindow.from_dict(data.get("window")),
        )


@dataclass(frozen=True)
class Schema:
    """
    The complete rule set for one printer model.

    Immutable after construction, so one instance can be shared by any
    number of concurrent classifications.
    """

    model_name: str
    info_columns: Tuple[str, ...] = ()
    group_rules: Tuple[GroupRule, ...] = ()
    plain_rules: Tuple[PlainRule, ...] = ()
    ignore_names: FrozenSet[str] = frozenset()

    # info column name → label name, computed once
    info_labels: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.model_name:
            raise SchemaDefinitionError("schema needs a model name")

        object.__setattr__(self, "info_columns", tuple(self.info_columns))
        object.__setattr__(self, "group_rules", tuple(self.group_rules))
        object.__setattr__(self, "plain_rules", tuple(self.plain_rules))
        object.__setattr__(self, "ignore_names", frozenset(self.ignore_names))

        if len(set(self.info_columns)) != len(self.info_columns):
            raise SchemaDefinitionError(f"{self.model_name}: info columns listed twice")

        # Two columns normalizing to the same label would overwrite each other
        normalizer = LabelNormalizer()
        info_labels: Dict[str, str] = {}
        seen: Dict[str, str] = {}
        for column_name in self.info_columns:
            label_name = normalizer.normalize(column_name)
            _check_label_name(label_name, f"info column '{column_name}'")
            if label_name in seen:
                raise SchemaDefinitionError(
                    f"{self.model_name}: info columns '{seen[label_name]}' and "
                    f"'{column_name}' both map to label '{label_name}'"
                )
            seen[label_name] = column_name
            info_labels[column_name] = label_name
        object.__setattr__(self, "info_labels", MappingProxyType(info_labels))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model_name": self.model_name,
            "info_columns": list(self.info_columns),
            "group_rules": [rule.to_dict() for rule in self.group_rules],
            "plain_rules": [rule.to_dict() for rule in self.plain_rules],
            "ignore_names": sorted(self.ignore_names),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Schema":
        data = _require_mapping(data, "schema definition")
        try:
            return cls(
                model_name=data["model_name"],
                info_columns=tuple(data.get("info_columns", ())),
                group_rules=tuple(GroupRule.from_dict(r) for r in data.get("group_rules", ())),
                plain_rules=tuple(PlainRule.from_dict(r) for r in data.get("plain_rules", ())),
                ignore_names=frozenset(data.get("ignore_names", ())),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise SchemaDefinitionError(f"malformed schema definition: {e!r}") from None
