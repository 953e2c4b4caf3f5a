# ==============================================
# Tests for the Command Line Entry Point
# ==============================================

import json

import pytest

from brother_exporter import config as config_module
from brother_exporter.cli import build_parser, main
from brother_exporter.config import AppConfig


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    monkeypatch.setattr(config_module, "_config_instance", AppConfig())


class TestRead:

    def test_prints_exposition(self, fixtures_dir, capsys):
        status = main(["read", str(fixtures_dir / "HL-L2350DW" / "mnt_info.csv")])

        out = capsys.readouterr().out
        assert status == 0
        assert "# TYPE brother_printer_info gauge" in out
        assert 'brother_printer_part_remaining_life_ratio{part="Drum Unit"} 0.88' in out

    def test_rejected_csv(self, tmp_path, make_csv, capsys):
        path = tmp_path / "mnt_info.csv"
        path.write_text(make_csv([("Model Name", "Brother HL-L2350DW series"), ("Sleep Count", "3")]))

        status = main(["read", str(path)])

        assert status == 1
        assert capsys.readouterr().err.startswith(f"Failed to parse {path}")

    def test_invalid_schema_file(self, tmp_path, fixtures_dir, capsys):
        schema_file = tmp_path / "models.json"
        schema_file.write_text("{}")
        config_module._config_instance.exporter.schema_file = str(schema_file)

        status = main(["read", str(fixtures_dir / "HL-L2350DW" / "mnt_info.csv")])

        assert status == 1
        assert capsys.readouterr().err.startswith("Invalid schema")


class TestInvalidSchemaFile:

    @pytest.fixture
    def schema_file(self, tmp_path):
        path = tmp_path / "models.json"
        config_module._config_instance.exporter.schema_file = str(path)
        return path

    def write_models(self, path, models):
        path.write_text(json.dumps({"models": models}))

    @pytest.mark.parametrize("command", [["models"], ["read", "mnt_info.csv"]])
    def test_pattern_without_capture_group(self, schema_file, command, capsys):
        self.write_models(schema_file, [{
            "model_name": "M",
            "group_rules": [{"metric_suffix": "foo_total", "pattern": "^Foo$", "label_name": "part"}],
        }])

        assert main(command) == 1
        err = capsys.readouterr().err
        assert err.startswith("Invalid schema")
        assert "0 capture groups" in err

    def test_window_given_as_list(self, schema_file, capsys):
        self.write_models(schema_file, [{
            "model_name": "M",
            "plain_rules": [{"column_name": "Total", "metric_suffix": "t", "window": [1, 2]}],
        }])

        assert main(["models"]) == 1
        assert "window must be an object" in capsys.readouterr().err


class TestModels:

    def test_lists_builtin_models(self, capsys):
        assert main(["models"]) == 0
        assert capsys.readouterr().out.splitlines() == ["Brother HL-L2350DW series"]


class TestParser:

    def test_serve_options(self):
        args = build_parser().parse_args(["serve", "--port", "9000"])
        assert args.command == "serve"
        assert args.port == 9000
        assert args.host is None

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
