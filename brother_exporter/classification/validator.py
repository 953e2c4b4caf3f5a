# ==============================================
# CompletenessValidator
# ==============================================
#
# PURPOSE:
#   After all passes succeed, make sure no column slipped through:
#   every entry must have been consumed by a rule, or be listed in
#   the schema's ignore_names.
#
# WHY THIS CLASS EXISTS:
#   A firmware update that adds a counter must fail loudly instead of
#   the new column being dropped without anyone noticing.
#
# ==============================================

from typing import AbstractSet, List

from brother_exporter.errors import UnaccountedColumnError
from brother_exporter.frame.frame_builder import ColumnEntry, Frame
from brother_exporter.schema.rules import Schema


class CompletenessValidator:

    def find_unaccounted(
        self,
        frame: Frame,
        schema: Schema,
        consumed: AbstractSet[int]
    ) -> List[ColumnEntry]:
        return [
            entry for entry in frame
            if entry.index not in consumed and entry.name not in schema.ignore_names
        ]

    def validate(self, frame: Frame, schema: Schema, consumed: AbstractSet[int]) -> None:
        """
        Raises:
            UnaccountedColumnError: at least one column is neither consumed
                                    nor ignored; all of them are reported
        """
        unaccounted = self.find_unaccounted(frame, schema, consumed)
        if unaccounted:
            raise UnaccountedColumnError(unaccounted)
