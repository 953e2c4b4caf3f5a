# ==============================================
# LabelNormalizer
# ==============================================
#
# PURPOSE:
#   Convert maintenance-page column names into Prometheus label names
#   for the composite info observation.
#
# WHY THIS CLASS EXISTS:
#   Info columns are human text ("Serial No.", "IP Address",
#   "Main Firmware Version"). Label names must be
#   [a-zA-Z_][a-zA-Z0-9_]*, and the mapping must be deterministic so
#   the same column always yields the same label.
#
# CLASS: LabelNormalizer
# ----------------------
#   Methods:
#   --------
#   - normalize(name: str) -> str
#       Convert a single column name to snake_case.
#
#   - collides(name_a: str, name_b: str) -> bool
#       True if two column names resolve to the same label name.
#       Used by Schema validation to reject colliding info columns.
#
#   - is_valid_label_name(name: str) -> bool  (staticmethod)
#
# RULES:
# ------
#   1. Spaces / punctuation → underscore   (Serial No.  → serial_no)
#   2. camelCase            → snake_case   (NodeName    → node_name)
#   3. ALLCAPS              → lowercase    (IP Address  → ip_address)
#   4. Collapse repeated underscores, strip leading/trailing ones
#   5. Leading digit        → prefixed "_" (2nd Tray    → _2nd_tray)
#
# ==============================================

import re
from typing import Dict


LABEL_NAME_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class LabelNormalizer:
    """
    Converts column names to canonical snake_case label names.
    Caches every conversion it has done.
    """

    def __init__(self):
        self._mappings: Dict[str, str] = {}

    def normalize(self, name: str) -> str:
        """
        Convert a column name to a snake_case label name.

        Args:
            name: Raw column name (e.g., "Serial No.", "IP Address")

        Returns:
            Label name (e.g., "serial_no", "ip_address")
        """
        if not name:
            return name

        if name in self._mappings:
            return self._mappings[name]

        normalized = self._to_snake(name)
        self._mappings[name] = normalized
        return normalized

    def collides(self, name_a: str, name_b: str) -> bool:
        return name_a != name_b and self.normalize(name_a) == self.normalize(name_b)

    def get_mappings(self) -> Dict[str, str]:
        return self._mappings.copy()

    @staticmethod
    def is_valid_label_name(name: str) -> bool:
        # Names starting with "__" are reserved by Prometheus
        return bool(LABEL_NAME_PATTERN.match(name)) and not name.startswith("__")

    def _to_snake(self, name: str) -> str:
        # Anything that is not a letter or digit separates words
        name = re.sub(r'[^a-zA-Z0-9]', '_', name)

        # "XMLParser" -> "XML_Parser"
        name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)

        # "nodeName" -> "node_Name"
        name = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', name)

        name = name.lower()
        name = re.sub(r'_+', '_', name)
        name = name.strip('_')

        if name and name[0].isdigit():
            name = f"_{name}"

        return name
