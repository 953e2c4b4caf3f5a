# ==============================================
# Transforms
# ==============================================
#
# PURPOSE:
#   Turn a column's raw text into the number an observation carries.
#
#   Rules select a member of the Transform enum instead of holding
#   a callable, so a schema stays inspectable and serializable
#   ("decimal", "percent_to_ratio" in schema files).
#
# FUNCTIONS:
# ----------
# - parse_decimal(raw_value) -> float
#     Strict decimal literal; anything else is a ValueFormatError.
#
# ==============================================

import math
import re
from enum import Enum

from brother_exporter.errors import ValueFormatError


# Plain decimal literal: optional sign, digits with optional fraction
# (or a leading-dot fraction), optional exponent. No whitespace, no
# underscores, no inf/nan spellings.
DECIMAL_PATTERN = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$')


class Transform(Enum):
    """
    Closed set of raw-value conversions a rule may select.

    - DECIMAL: "1412" -> 1412.0
    - PERCENT_TO_RATIO: "96" -> 0.96
    """
    DECIMAL = "decimal"
    PERCENT_TO_RATIO = "percent_to_ratio"

    def apply(self, raw_value: str) -> float:
        value = parse_decimal(raw_value)
        if self is Transform.PERCENT_TO_RATIO:
            return value / 100
        return value

    @classmethod
    def from_name(cls, name: str) -> "Transform":
        try:
            return cls(name)
        except ValueError:
            known = ", ".join(member.value for member in cls)
            raise ValueError(f"unknown transform '{name}' (known: {known})") from None


def parse_decimal(raw_value: str) -> float:
    if raw_value == "":
        raise ValueFormatError(raw_value, "empty value")

    if not DECIMAL_PATTERN.match(raw_value):
        raise ValueFormatError(raw_value, "not a decimal number")

    value = float(raw_value)
    if math.isinf(value):
        raise ValueFormatError(raw_value, "out of range")
    return value
