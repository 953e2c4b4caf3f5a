# ==============================================
# TOPIC 1: FRAME
# ==============================================
#
# This package turns the raw maintenance CSV into something the
# classification engine can reason about: an ordered list of
# (index, name, raw value) entries, plus the small helpers used
# on names and values.
#
# Modules:
# --------
# - frame_builder.py    → Parse the two-row CSV, build the Frame
# - label_normalizer.py → Column name → snake_case label name
# - transforms.py       → Named raw-string → number conversions
#
# ==============================================

from .frame_builder import ColumnEntry, Frame, build_frame, frame_from_csv, parse_csv
from .label_normalizer import LabelNormalizer
from .transforms import Transform

__all__ = [
    "ColumnEntry",
    "Frame",
    "build_frame",
    "frame_from_csv",
    "parse_csv",
    "LabelNormalizer",
    "Transform",
]
