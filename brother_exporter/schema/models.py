# ==============================================
# Built-in Model Schemas
# ==============================================
#
# One Schema per supported printer model, keyed by the exact string the
# printer reports in its "Model Name" column.
#
# Column layout of the HL-L2350DW maintenance page (index: name):
#
#    0-7   info block (Node Name ... Sub1 Firmware Version)
#    8     Memory Size
#    9-10  Page Counter, Drum Count
#   11-12  % of Life Remaining(...)
#   13-18  pages by paper size        19  Total
#   20-23  pages by paper type        24  Total
#   25-26  pages by paper source      27  Total
#   28-32  Total Paper Jams, Jam ...
#   33-34  Replace Count(...)
#   35     Error Count
#   36+    error history (Error N / Page N pairs)
#
# The three "Total" columns are only told apart by their window.
#
# ==============================================

from brother_exporter.frame.transforms import Transform
from brother_exporter.schema.rules import GroupRule, IndexWindow, PlainRule, Schema


HL_L2350DW = Schema(
    model_name="Brother HL-L2350DW series",
    info_columns=(
        "Node Name",
        "Model Name",
        "Location",
        "Contact",
        "IP Address",
        "Serial No.",
        "Main Firmware Version",
        "Sub1 Firmware Version",
    ),
    group_rules=(
        GroupRule(
            metric_suffix="part_remaining_life_ratio",
            pattern=r"^% of Life Remaining\((.+)\)$",
            label_name="part",
            transform=Transform.PERCENT_TO_RATIO,
        ),
        GroupRule(
            metric_suffix="pages_printed_by_paper_size_total",
            pattern=r"^(A4/Letter|Legal/Folio|B5/Executive|Envelopes|A5|Others)$",
            label_name="paper_size",
            window=IndexWindow(13, 18),
        ),
        GroupRule(
            metric_suffix="pages_printed_by_paper_type_total",
            pattern=r"^(Plain/Thin/Recycled|Thick/Thicker/Bond|Envelopes/Env\. Thick/Env\. Thin|Label)$",
            label_name="paper_type",
            window=IndexWindow(20, 23),
        ),
        GroupRule(
            metric_suffix="pages_printed_by_paper_source_total",
            pattern=r"^(Tray 1|Manual)$",
            label_name="paper_source",
            window=IndexWindow(25, 26),
        ),
        GroupRule(
            metric_suffix="paper_jams_total",
            pattern=r"^Jam (.+)$",
            label_name="location",
        ),
        GroupRule(
            metric_suffix="part_replace_total",
            pattern=r"^Replace Count\((.+)\)$",
            label_name="part",
        ),
    ),
    plain_rules=(
        PlainRule("Memory Size", "memory_size_megabytes"),
        PlainRule("Page Counter", "pages_printed_total"),
        PlainRule("Drum Count", "drum_pages_printed_total"),
        PlainRule(
            "Total",
            "pages_printed_by_paper_size_total",
            static_labels={"paper_size": "all"},
            window=IndexWindow(13, 19),
        ),
        PlainRule(
            "Total",
            "pages_printed_by_paper_type_total",
            static_labels={"paper_type": "all"},
            window=IndexWindow(20, 24),
        ),
        PlainRule(
            "Total",
            "pages_printed_by_paper_source_total",
            static_labels={"paper_source": "all"},
            window=IndexWindow(25, 27),
        ),
        PlainRule("Total Paper Jams", "paper_jams_total", static_labels={"location": "all"}),
        PlainRule("Error Count", "errors_total"),
    ),
    # TODO: expose the error history as its own metric once the error code
    # list for this firmware is known; until then it is only tolerated.
    ignore_names=frozenset(
        [f"Error {n}" for n in range(1, 11)] + [f"Page {n}" for n in range(1, 11)]
    ),
)


BUILTIN_SCHEMAS = (
    HL_L2350DW,
)
