# ==============================================
# Brother Printer Maintenance Exporter
# ==============================================
#
# Package Structure (3 Topics + Dispatch):
#
# brother_exporter/
# ├── frame/              # Topic 1: Build an indexed frame from the CSV snapshot
# ├── schema/             # Topic 2: Per-model rule sets and the schema registry
# ├── classification/     # Topic 3: Rule passes, consumption tracking, completeness
# ├── exposition/         # Render observations as Prometheus text
# ├── config.py           # Configuration management
# ├── errors.py           # Error taxonomy
# ├── maintenance_info.py # Model dispatch (CSV -> observations)
# ├── fetch.py            # Fetch the CSV from a printer
# ├── server.py           # /probe HTTP endpoint
# └── cli.py              # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
