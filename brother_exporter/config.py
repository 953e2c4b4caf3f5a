# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load all configuration from environment variables / .env file.
#   Provides typed config objects to the server, the CLI and the
#   one-shot scrape script.
#
# CLASSES:
# --------
# - ServerConfig (dataclass)
#     host: str              (default "0.0.0.0")
#     port: int              (default 8035)
#
# - UpstreamConfig (dataclass)
#     timeout_seconds: float         (default 10.0)
#     expected_content_type: str     (default "text/comma-separated-values")
#
# - ExporterConfig (dataclass)
#     namespace: str         (default "brother_printer")
#     schema_file: str | None (default None)
#     log_level: str         (default "INFO")
#
# - AppConfig (dataclass)
#     server: ServerConfig
#     upstream: UpstreamConfig
#     exporter: ExporterConfig
#
# FUNCTIONS:
# ----------
# - load_config() -> AppConfig
#     Read .env (python-dotenv) + environment, build a fresh AppConfig.
#
# - get_config() -> AppConfig
#     Same, but returns the same singleton on repeated calls.
#
# ENVIRONMENT:
# ------------
#   LISTEN_HOST, LISTEN_PORT,
#   UPSTREAM_TIMEOUT_SECONDS, UPSTREAM_CONTENT_TYPE,
#   METRIC_NAMESPACE, SCHEMA_FILE, LOG_LEVEL
#
# ==============================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


@dataclass
class ServerConfig:
    """Probe server listen address."""
    host: str = "0.0.0.0"
    port: int = 8035


@dataclass
class UpstreamConfig:
    """How the printer's maintenance CSV is fetched."""
    timeout_seconds: float = 10.0
    expected_content_type: str = "text/comma-separated-values"


@dataclass
class ExporterConfig:
    """What the exporter exposes."""
    namespace: str = "brother_printer"
    schema_file: Optional[str] = None
    log_level: str = "INFO"


@dataclass
class AppConfig:
    """Main application configuration."""
    server: ServerConfig = field(default_factory=ServerConfig)
    upstream: UpstreamConfig = field(default_factory=UpstreamConfig)
    exporter: ExporterConfig = field(default_factory=ExporterConfig)


# Singleton instance
_config_instance: Optional[AppConfig] = None


def load_config() -> AppConfig:
    """
    Build configuration from environment variables / .env file.

    Returns:
        AppConfig: a new configuration object
    """
    # .env in the working directory; real environment variables win
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    server_config = ServerConfig(
        host=os.getenv("LISTEN_HOST", "0.0.0.0"),
        port=int(os.getenv("LISTEN_PORT", "8035")),
    )

    upstream_config = UpstreamConfig(
        timeout_seconds=float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "10.0")),
        expected_content_type=os.getenv(
            "UPSTREAM_CONTENT_TYPE", "text/comma-separated-values"
        ),
    )

    exporter_config = ExporterConfig(
        namespace=os.getenv("METRIC_NAMESPACE", "brother_printer"),
        schema_file=os.getenv("SCHEMA_FILE") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

    return AppConfig(
        server=server_config,
        upstream=upstream_config,
        exporter=exporter_config,
    )


def get_config() -> AppConfig:
    """
    Load configuration once and return the same instance afterwards.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    _config_instance = load_config()
    return _config_instance
