# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   One exception class per failure kind so callers (the HTTP layer,
#   the CLI, tests) can tell a drifted firmware apart from a broken
#   schema or a truncated upload.
#
# HIERARCHY:
# ----------
# ExporterError
# ├── SchemaDefinitionError        → schema/registry construction problems
# ├── ClassificationError          → terminal for a single classification
# │   ├── FrameShapeError
# │   ├── AmbiguousColumnNameError
# │   ├── ModelUnknownError
# │   ├── MissingColumnError
# │   ├── PatternMismatchError
# │   ├── ValueFormatError
# │   ├── DuplicateConsumptionError
# │   └── UnaccountedColumnError
# └── UpstreamError                → fetching the CSV failed
#     └── InvalidAddressError
#
# ClassificationError is also a ValueError: all of these describe input
# that the engine refuses to turn into observations.
#
# ==============================================

from typing import Optional, Sequence


class ExporterError(Exception):
    """Base class for every error raised by this package."""


class SchemaDefinitionError(ExporterError):
    """A schema, rule or registry definition is invalid."""


class ClassificationError(ExporterError, ValueError):
    """A frame could not be classified. No observations are produced."""


class FrameShapeError(ClassificationError):
    """The CSV does not have exactly two rows of equal width."""


class AmbiguousColumnNameError(ClassificationError):
    def __init__(self, column_name: str, indices: Sequence[int]):
        self.column_name = column_name
        self.indices = list(indices)
        super().__init__(
            f"column '{column_name}' is ambiguous: found at indices "
            f"{', '.join(str(i) for i in self.indices)}"
        )


class ModelUnknownError(ClassificationError):
    def __init__(self, model_name: str):
        self.model_name = model_name
        super().__init__(f"unknown model name: {model_name}")


class MissingColumnError(ClassificationError):
    def __init__(self, column_name: str, detail: str = ""):
        self.column_name = column_name
        message = f"missing '{column_name}'"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class PatternMismatchError(ClassificationError):
    """
    A grouped rule matched a column name without yielding exactly one
    captured label value: the group did not participate, or the pattern
    matched more than once within the name.

    A pattern defined with zero or several groups is a SchemaDefinitionError.
    """

    def __init__(self, pattern: str, message: str, column_name: Optional[str] = None):
        self.pattern = pattern
        self.column_name = column_name
        super().__init__(message)


class ValueFormatError(ClassificationError):
    def __init__(self, raw_value: str, reason: str, column_name: Optional[str] = None):
        self.raw_value = raw_value
        self.reason = reason
        self.column_name = column_name
        where = f" in column '{column_name}'" if column_name is not None else ""
        super().__init__(f"cannot parse {raw_value!r}{where}: {reason}")

    def for_column(self, column_name: str) -> "ValueFormatError":
        """Return a copy of this error that names the column it came from."""
        return ValueFormatError(self.raw_value, self.reason, column_name)


class DuplicateConsumptionError(ClassificationError):
    def __init__(self, index: int, column_name: str, first_claim: str, second_claim: str):
        self.index = index
        self.column_name = column_name
        self.first_claim = first_claim
        self.second_claim = second_claim
        super().__init__(
            f"column '{column_name}' (index {index}) consumed by {second_claim}, "
            f"already consumed by {first_claim}"
        )


class UnaccountedColumnError(ClassificationError):
    """
    One or more columns were neither consumed nor ignored.

    This is how firmware drift shows up: a new counter appears in the CSV
    and no rule knows about it. `column_name`/`raw_value` describe the first
    offender, `entries` lists all of them in frame order.
    """

    def __init__(self, entries):
        self.entries = list(entries)
        first = self.entries[0]
        self.column_name = first.name
        self.index = first.index
        self.raw_value = first.raw_value
        described = ", ".join(
            f"'{entry.name}'={entry.raw_value!r} (index {entry.index})"
            for entry in self.entries
        )
        super().__init__(f"unaccounted columns: {described}")


class UpstreamError(ExporterError):
    """Fetching the maintenance CSV from the printer failed."""


class InvalidAddressError(UpstreamError):
    """The printer address cannot be requested at all (bad URL)."""
