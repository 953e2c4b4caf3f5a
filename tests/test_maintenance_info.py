# ==============================================
# Tests for MaintenanceInfoReader (model dispatch)
# ==============================================
#
# Covers the full path CSV → Frame → Schema lookup → passes →
# completeness, using the HL-L2350DW fixture and small hand-made CSVs.
# ==============================================

import pytest

from brother_exporter.errors import (
    AmbiguousColumnNameError,
    FrameShapeError,
    MissingColumnError,
    ModelUnknownError,
    UnaccountedColumnError,
)
from brother_exporter.maintenance_info import MaintenanceInfoReader, read_maintenance_info
from brother_exporter.schema.registry import SchemaRegistry


def by_series(observations):
    return {
        (o.metric_name, tuple(sorted(o.labels.items()))): o.value
        for o in observations
    }


class TestHLL2350DW:
    """The built-in schema against a real maintenance page."""

    def test_reads_fixture(self, reader, hl_l2350dw_csv):
        observations = reader.read(hl_l2350dw_csv)
        assert len(observations) == 29

    def test_info_observation(self, reader, hl_l2350dw_csv):
        info = reader.read(hl_l2350dw_csv)[0]
        assert info.metric_name == "info"
        assert dict(info.labels) == {
            "node_name": "BRN3C2AF4D1E5F6",
            "model_name": "Brother HL-L2350DW series",
            "ip_address": "192.168.1.50",
            "serial_no": "E78234K9N123456",
            "main_firmware_version": "ZC",
            "sub1_firmware_version": "1.09",
        }

    def test_counters(self, reader, hl_l2350dw_csv):
        series = by_series(reader.read(hl_l2350dw_csv))

        assert series[("part_remaining_life_ratio", (("part", "Toner"),))] == pytest.approx(0.2)
        assert series[("part_remaining_life_ratio", (("part", "Drum Unit"),))] == pytest.approx(0.88)
        assert series[("pages_printed_by_paper_size_total", (("paper_size", "A4/Letter"),))] == 1398
        assert series[("pages_printed_by_paper_size_total", (("paper_size", "all"),))] == 1412
        assert series[("pages_printed_by_paper_type_total", (("paper_type", "Thick/Thicker/Bond"),))] == 9
        assert series[("pages_printed_by_paper_source_total", (("paper_source", "Manual"),))] == 11
        assert series[("paper_jams_total", (("location", "Inside"),))] == 1
        assert series[("paper_jams_total", (("location", "all"),))] == 2
        assert series[("part_replace_total", (("part", "Toner"),))] == 3
        assert series[("pages_printed_total", ())] == 1412
        assert series[("memory_size_megabytes", ())] == 64
        assert series[("errors_total", ())] == 2

    def test_repeated_totals_each_used_once(self, reader, hl_l2350dw_csv):
        series = by_series(reader.read(hl_l2350dw_csv))
        totals = [key for key in series if ("paper_size", "all") in key[1]
                  or ("paper_type", "all") in key[1]
                  or ("paper_source", "all") in key[1]]
        assert len(totals) == 3

    def test_new_firmware_counter_rejected(self, reader, hl_l2350dw_csv):
        drifted = hl_l2350dw_csv.replace(b',""\n', b',"Sleep Count"\n', 1)
        drifted = drifted.replace(b',""\n', b',"17"\n', 1)

        with pytest.raises(UnaccountedColumnError) as exc_info:
            reader.read(drifted)
        assert exc_info.value.column_name == "Sleep Count"
        assert exc_info.value.raw_value == "17"

    def test_same_result_twice(self, reader, hl_l2350dw_csv):
        assert reader.read(hl_l2350dw_csv) == reader.read(hl_l2350dw_csv)


class TestDispatch:

    @pytest.fixture
    def scenario_reader(self, scenario_schema):
        return MaintenanceInfoReader(SchemaRegistry([scenario_schema]))

    def test_scenario_model(self, scenario_reader, make_csv):
        observations = scenario_reader.read(make_csv([
            ("Model Name", "X"),
            ("% of Life Remaining(Toner)", "20"),
        ]))
        assert [(o.metric_name, dict(o.labels), o.value) for o in observations] == [
            ("info", {"model_name": "X"}, 1.0),
            ("part_remaining_life_ratio", {"part": "Toner"}, 0.2),
        ]

    def test_unaccounted_column(self, scenario_reader, make_csv):
        with pytest.raises(UnaccountedColumnError) as exc_info:
            scenario_reader.read(make_csv([("Model Name", "X"), ("Foo", "1")]))
        assert exc_info.value.column_name == "Foo"

    def test_model_name_column_required(self, scenario_reader, make_csv):
        with pytest.raises(MissingColumnError, match="Model Name"):
            scenario_reader.read(make_csv([("Node Name", "BRN001")]))

    def test_model_name_column_repeated(self, scenario_reader, make_csv):
        with pytest.raises(AmbiguousColumnNameError):
            scenario_reader.read(make_csv([("Model Name", "X"), ("Model Name", "X")]))

    def test_unknown_model(self, scenario_reader, make_csv):
        with pytest.raises(ModelUnknownError, match="unknown model name: Y"):
            scenario_reader.read(make_csv([("Model Name", "Y")]))

    def test_shape_checked_first(self, scenario_reader):
        with pytest.raises(FrameShapeError):
            scenario_reader.read("Model Name\n")

    def test_read_maintenance_info(self, registry, hl_l2350dw_csv):
        observations = read_maintenance_info(hl_l2350dw_csv.decode("utf-8"), registry)
        assert observations[0].labels["model_name"] == "Brother HL-L2350DW series"
