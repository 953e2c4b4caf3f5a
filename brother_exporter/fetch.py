# ==============================================
# Upstream Fetch
# ==============================================
#
# PURPOSE:
#   GET a printer's maintenance CSV for the probe endpoint and the
#   one-shot scrape script.
#
# FAILURES:
# ---------
#   InvalidAddressError  → address is not a usable http(s) URL (400)
#   UpstreamError        → request failed, status != 200, or the body
#                          is not the expected CSV media type (500)
#
# ==============================================

import logging

import requests

from brother_exporter.config import UpstreamConfig
from brother_exporter.errors import InvalidAddressError, UpstreamError

logger = logging.getLogger(__name__)


def media_type(content_type: str) -> str:
    """'text/comma-separated-values; charset=UTF-8' -> 'text/comma-separated-values'"""
    return content_type.split(";", 1)[0].strip().lower()


def fetch_maintenance_csv(address: str, config: UpstreamConfig) -> bytes:
    """
    GET the printer's maintenance CSV.

    Args:
        address: Full URL of the CSV (e.g. http://printer/etc/mnt_info.csv)
        config: Timeout and expected content type

    Returns:
        The raw response body

    Raises:
        InvalidAddressError: the address is not a usable URL
        UpstreamError: request failed, non-200 status, wrong content type
    """
    try:
        response = requests.get(address, timeout=config.timeout_seconds)
    except (
        requests.exceptions.MissingSchema,
        requests.exceptions.InvalidSchema,
        requests.exceptions.InvalidURL,
    ) as e:
        raise InvalidAddressError(f"Bad 'address': {e}") from e
    except requests.RequestException as e:
        raise UpstreamError(f"GET {address} failed: {e}") from e

    if response.status_code != 200:
        raise UpstreamError(f"GET {address} returned {response.status_code}")

    content_type = response.headers.get("Content-Type", "")
    expected = config.expected_content_type
    if media_type(content_type) != media_type(expected):
        raise UpstreamError(
            f"Expected GET {address} to return Content-Type {expected}, returned {content_type}"
        )

    logger.debug("GET %s: %d bytes", address, len(response.content))
    return response.content
