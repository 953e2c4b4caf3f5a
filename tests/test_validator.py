# ==============================================
# Tests for the Completeness Validator
# ==============================================

import pytest

from brother_exporter.classification import Classifier, CompletenessValidator
from brother_exporter.errors import UnaccountedColumnError
from brother_exporter.frame import build_frame
from brother_exporter.schema.rules import Schema


@pytest.fixture
def validator():
    return CompletenessValidator()


class TestCompletenessValidator:

    def test_all_consumed(self, validator):
        frame = build_frame(["Model Name", "Page Counter"], ["X", "1"])
        validator.validate(frame, Schema("X"), consumed={0, 1})

    def test_unmatched_column_rejected(self, validator):
        frame = build_frame(["Model Name", "Foo"], ["X", "1"])

        with pytest.raises(UnaccountedColumnError) as exc_info:
            validator.validate(frame, Schema("X"), consumed={0})

        assert exc_info.value.column_name == "Foo"
        assert exc_info.value.raw_value == "1"
        assert exc_info.value.index == 1
        assert "'Foo'='1'" in str(exc_info.value)

    def test_ignored_names_accepted(self, validator):
        frame = build_frame(["Model Name", "Error 1", "Page 1"], ["X", "Replace Toner", "1398"])
        schema = Schema("X", ignore_names=frozenset({"Error 1", "Page 1"}))
        validator.validate(frame, schema, consumed={0})

    def test_reports_every_unaccounted_column(self, validator):
        frame = build_frame(["Model Name", "Foo", "Bar"], ["X", "1", "2"])

        with pytest.raises(UnaccountedColumnError) as exc_info:
            validator.validate(frame, Schema("X"), consumed={0})

        assert [e.name for e in exc_info.value.entries] == ["Foo", "Bar"]

    def test_blank_named_columns_never_checked(self, validator):
        frame = build_frame(["Model Name", ""], ["X", "stray"])
        validator.validate(frame, Schema("X"), consumed={0})

    def test_whitespace_named_column_reported(self, validator):
        frame = build_frame(["Model Name", " "], ["X", "7"])

        with pytest.raises(UnaccountedColumnError) as exc_info:
            validator.validate(frame, Schema("X"), consumed={0})

        assert exc_info.value.column_name == " "
        assert exc_info.value.raw_value == "7"

    def test_after_classification(self, validator):
        schema = Schema("X", info_columns=("Model Name",))
        frame = build_frame(["Model Name", "Foo"], ["X", "1"])

        result = Classifier().classify(frame, schema)

        assert validator.find_unaccounted(frame, schema, result.consumed)[0].name == "Foo"
