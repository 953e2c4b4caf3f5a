# ==============================================
# Probe Server
# ==============================================
#
# PURPOSE:
#   Thin HTTP glue around MaintenanceInfoReader, in the style of the
#   Prometheus blackbox/snmp exporters:
#
#     GET /probe?address=http://printer/etc/mnt_info.csv
#
# RESPONSES:
# ----------
#   200  Prometheus text for the printer
#   400  'address' missing, repeated, or not a URL
#   500  printer unreachable, non-200, wrong content type,
#        or the CSV failed classification
#
# The app is built by create_app(config, registry); the registry is
# created once by the caller and shared read-only by every request.
#
# ==============================================

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response

from brother_exporter import __version__
from brother_exporter.config import AppConfig
from brother_exporter.errors import ClassificationError, InvalidAddressError, UpstreamError
from brother_exporter.exposition.sink import CONTENT_TYPE_LATEST, render_observations
from brother_exporter.fetch import fetch_maintenance_csv
from brother_exporter.maintenance_info import MaintenanceInfoReader
from brother_exporter.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)


def create_app(config: AppConfig, registry: SchemaRegistry) -> FastAPI:
    """
    Build the probe application.

    Args:
        config: Application configuration
        registry: Schema registry shared by all requests
    """
    app = FastAPI(title="Brother Printer Exporter", version=__version__)
    reader = MaintenanceInfoReader(registry)

    app.state.config = config
    app.state.reader = reader

    def probe_address(addresses) -> Response:
        if not addresses:
            return PlainTextResponse("Missing 'address' query parameter", status_code=400)
        if len(addresses) != 1:
            return PlainTextResponse("Multiple 'address' query parameter", status_code=400)
        address = addresses[0]

        try:
            body = fetch_maintenance_csv(address, config.upstream)
        except InvalidAddressError as e:
            return PlainTextResponse(str(e), status_code=400)
        except UpstreamError as e:
            logger.warning("Probe of %s failed: %s", address, e)
            return PlainTextResponse(str(e), status_code=500)

        try:
            observations = reader.read(body)
        except ClassificationError as e:
            logger.warning("Failed to parse %s: %s", address, e)
            return PlainTextResponse(f"Failed to parse: {e}", status_code=500)

        return Response(
            content=render_observations(observations, config.exporter.namespace),
            media_type=CONTENT_TYPE_LATEST,
        )

    @app.get("/probe")
    def probe(request: Request) -> Response:
        client = request.client.host if request.client else "-"
        logger.info("< %s GET /probe", client)

        response = probe_address(request.query_params.getlist("address"))

        logger.info("> %s GET /probe %d", client, response.status_code)
        return response

    @app.get("/models")
    def models() -> dict:
        return {"models": registry.model_names}

    return app
