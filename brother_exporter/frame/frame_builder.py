# ==============================================
# Frame Builder
# ==============================================
#
# PURPOSE:
#   Convert the printer's maintenance CSV (one header row, one value
#   row) into a Frame: an ordered sequence of ColumnEntry objects.
#
# WHY INDICES AND NOT A DICT:
#   Brother maintenance pages repeat column names ("Total" appears
#   once per counter block). Keying by name would silently drop all
#   but the last one. Every entry keeps its original row position so
#   rules can be restricted to an index window.
#
# CLASSES:
# --------
# - ColumnEntry (frozen dataclass): index, name, raw_value
# - Frame (frozen dataclass): entries tuple + lookup helpers
#
# FUNCTIONS:
# ----------
# - parse_csv(source: str | bytes) -> list[list[str]]
#     Tokenize with the csv module. Blank lines are skipped.
#
# - build_frame(header, values) -> Frame
#     Shape check + drop empty-named columns. Indices are the original
#     positions, so gaps are expected.
#
# ==============================================

import csv
import io
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from brother_exporter.errors import AmbiguousColumnNameError, FrameShapeError


@dataclass(frozen=True)
class ColumnEntry:
    """A single column of the snapshot."""
    index: int  # Position in the original CSV row (0-based)
    name: str  # Header text, not necessarily unique
    raw_value: str  # Value text, unparsed


@dataclass(frozen=True)
class Frame:
    """
    Ordered, indexed view of one header row + value row pair.

    Built once per classification and thrown away afterwards.
    """

    entries: Tuple[ColumnEntry, ...]

    def __iter__(self) -> Iterator[ColumnEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def indices(self) -> List[int]:
        return [entry.index for entry in self.entries]

    def find_all(self, name: str, window=None) -> List[ColumnEntry]:
        """
        Return every entry with exactly this name, optionally restricted
        to an IndexWindow.
        """
        return [
            entry for entry in self.entries
            if entry.name == name and (window is None or window.contains(entry.index))
        ]

    def find_unique(self, name: str, window=None) -> Optional[ColumnEntry]:
        """
        Return the single entry with this name (inside the window), None
        if there is none.

        Raises:
            AmbiguousColumnNameError: more than one entry qualifies
        """
        found = self.find_all(name, window)
        if not found:
            return None
        if len(found) > 1:
            raise AmbiguousColumnNameError(name, [entry.index for entry in found])
        return found[0]


def parse_csv(source: Union[str, bytes]) -> List[List[str]]:
    if isinstance(source, bytes):
        # Some firmwares prepend a BOM
        source = source.decode("utf-8-sig")
    elif source.startswith("\ufeff"):
        source = source[1:]

    reader = csv.reader(io.StringIO(source, newline=""))
    return [row for row in reader if row]


def build_frame(header: Sequence[str], values: Sequence[str]) -> Frame:
    """
    Build a Frame from a header row and a value row.

    Args:
        header: Column names, in CSV order
        values: Column values, same length as header

    Returns:
        Frame with one entry per non-empty header name; a whitespace-only
        name is kept so the completeness check can report it

    Raises:
        FrameShapeError: header and values differ in length
    """
    if len(header) != len(values):
        raise FrameShapeError(
            f"names row has {len(header)} columns and values row has {len(values)}"
        )

    entries = tuple(
        ColumnEntry(index=index, name=name, raw_value=value)
        for index, (name, value) in enumerate(zip(header, values))
        if name != ""
    )
    return Frame(entries=entries)


def frame_from_csv(source: Union[str, bytes]) -> Frame:
    """
    Parse a maintenance CSV and build its Frame.

    Raises:
        FrameShapeError: not exactly two rows, or rows of different width
    """
    try:
        rows = parse_csv(source)
    except (csv.Error, UnicodeDecodeError) as e:
        raise FrameShapeError(f"unreadable CSV: {e}") from e

    if len(rows) != 2:
        raise FrameShapeError(f"Expected 2 rows, got {len(rows)}")

    return build_frame(rows[0], rows[1])
