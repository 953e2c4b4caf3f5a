# ==============================================
# Tests for the Prometheus Metric Sink
# ==============================================

from brother_exporter.classification import Observation
from brother_exporter.exposition import render_observations
from brother_exporter.exposition.sink import metric_name


class TestRenderObservations:

    def test_namespace_prefix(self):
        text = render_observations([
            Observation("part_remaining_life_ratio", {"part": "Toner"}, 0.2),
        ]).decode("utf-8")

        assert "# TYPE brother_printer_part_remaining_life_ratio gauge" in text
        assert 'brother_printer_part_remaining_life_ratio{part="Toner"} 0.2' in text

    def test_custom_namespace(self):
        text = render_observations([Observation("errors_total", {}, 2.0)], namespace="office").decode()
        assert "office_errors_total 2.0" in text

    def test_families_and_samples_sorted(self):
        text = render_observations([
            Observation("part_replace_total", {"part": "Toner"}, 3.0),
            Observation("info", {"model_name": "X"}, 1.0),
            Observation("part_replace_total", {"part": "Drum Unit"}, 0.0),
        ]).decode("utf-8")

        assert text.index("brother_printer_info") < text.index("brother_printer_part_replace_total")
        assert text.index('part="Drum Unit"') < text.index('part="Toner"')

    def test_output_independent_of_input_order(self):
        observations = [
            Observation("b_total", {"x": "2"}, 2.0),
            Observation("a_total", {}, 1.0),
            Observation("b_total", {"x": "1"}, 1.0),
        ]
        assert render_observations(observations) == render_observations(list(reversed(observations)))

    def test_label_values_escaped(self):
        text = render_observations([Observation("info", {"location": 'Room "5"'}, 1.0)]).decode()
        assert r'location="Room \"5\""' in text

    def test_nothing_to_render(self):
        assert render_observations([]) == b""

    def test_renders_fixture(self, reader, hl_l2350dw_csv):
        text = render_observations(reader.read(hl_l2350dw_csv)).decode("utf-8")

        assert 'brother_printer_part_remaining_life_ratio{part="Toner"} 0.2' in text
        assert 'model_name="Brother HL-L2350DW series"' in text
        assert 'brother_printer_pages_printed_by_paper_size_total{paper_size="all"} 1412.0' in text


def test_metric_name():
    assert metric_name("brother_printer", "info") == "brother_printer_info"
    assert metric_name("", "info") == "info"
