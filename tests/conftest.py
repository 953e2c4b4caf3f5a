# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# - fixtures_dir          → tests/fixtures
# - hl_l2350dw_csv        → real-world HL-L2350DW maintenance CSV (bytes)
# - registry              → default SchemaRegistry (built-in models)
# - reader                → MaintenanceInfoReader over `registry`
# - make_csv              → build a two-row CSV from (name, value) pairs
# - scenario_schema       → small schema for model "X"
# ==============================================

import csv
import io
from pathlib import Path

import pytest

from brother_exporter.frame.transforms import Transform
from brother_exporter.maintenance_info import MaintenanceInfoReader
from brother_exporter.schema.registry import default_registry
from brother_exporter.schema.rules import GroupRule, Schema


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def hl_l2350dw_csv() -> bytes:
    return (FIXTURES_DIR / "HL-L2350DW" / "mnt_info.csv").read_bytes()


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def reader(registry):
    return MaintenanceInfoReader(registry)


@pytest.fixture
def make_csv():
    """Return a function turning [(name, value), ...] into CSV text."""
    def _make_csv(columns):
        out = io.StringIO()
        writer = csv.writer(out)
        writer.writerow([name for name, _ in columns])
        writer.writerow([value for _, value in columns])
        return out.getvalue()
    return _make_csv


@pytest.fixture
def scenario_schema():
    """Model "X": Model Name as info, toner life as a grouped rule."""
    return Schema(
        model_name="X",
        info_columns=("Model Name",),
        group_rules=(
            GroupRule(
                metric_suffix="part_remaining_life_ratio",
                pattern=r"^% of Life Remaining\((.+)\)$",
                label_name="part",
                transform=Transform.PERCENT_TO_RATIO,
            ),
        ),
    )
