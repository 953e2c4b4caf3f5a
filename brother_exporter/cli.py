# ==============================================
# CLI: Command Line Entry Point
# ==============================================
#
# COMMANDS:
# ---------
# 1. Run the probe server:
#    python -m brother_exporter.cli serve
#    python -m brother_exporter.cli serve --host 127.0.0.1 --port 9000
#
# 2. Classify a saved maintenance CSV and print the exposition:
#    python -m brother_exporter.cli read mnt_info.csv
#
# 3. List the supported printer models:
#    python -m brother_exporter.cli models
#
# Exit status: 0 on success, 1 when the CSV or a schema is rejected.
#
# ==============================================

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import uvicorn

from brother_exporter.config import AppConfig, get_config
from brother_exporter.errors import ClassificationError, SchemaDefinitionError
from brother_exporter.exposition.sink import render_observations
from brother_exporter.maintenance_info import MaintenanceInfoReader
from brother_exporter.schema.registry import default_registry
from brother_exporter.server import create_app

logger = logging.getLogger("brother_exporter")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="brother-exporter",
        description="Prometheus exporter for Brother printer maintenance counters",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="run the /probe HTTP server")
    serve.add_argument("--host", help="listen address (default: LISTEN_HOST)")
    serve.add_argument("--port", type=int, help="listen port (default: LISTEN_PORT)")

    read = subparsers.add_parser("read", help="print metrics for a saved maintenance CSV")
    read.add_argument("path", type=Path, help="CSV file (header row + values row)")

    subparsers.add_parser("models", help="list supported printer models")

    return parser


def _serve(args: argparse.Namespace, config: AppConfig) -> int:
    host = args.host or config.server.host
    port = args.port or config.server.port

    app = create_app(config, default_registry(config.exporter.schema_file))
    logger.info("Listening at %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level=config.exporter.log_level.lower())
    return 0


def _read(args: argparse.Namespace, config: AppConfig) -> int:
    reader = MaintenanceInfoReader(default_registry(config.exporter.schema_file))
    try:
        observations = reader.read(args.path.read_bytes())
    except ClassificationError as e:
        print(f"Failed to parse {args.path}: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(render_observations(observations, config.exporter.namespace).decode("utf-8"))
    return 0


def _models(args: argparse.Namespace, config: AppConfig) -> int:
    for model_name in default_registry(config.exporter.schema_file).model_names:
        print(model_name)
    return 0


COMMANDS = {
    "serve": _serve,
    "read": _read,
    "models": _models,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()

    logging.basicConfig(
        level=config.exporter.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return COMMANDS[args.command](args, config)
    except SchemaDefinitionError as e:
        print(f"Invalid schema: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
