"""
Logging configuration.

We use a YAML logging config (`src/oae_rest/config/logging.yaml`) and then apply
runtime overrides from settings (e.g., `OAE_REST_LOG_LEVEL`).

Library code only creates module loggers; configuring handlers is left to the
CLI or to the application embedding the client.
"""

from __future__ import annotations

import logging.config

from oae_rest.config.settings import get_logging_config, get_settings


def configure_logging(level: str | None = None) -> None:
    """Configure the Python logging system based on packaged YAML config + settings."""
    settings = get_settings()
    config = get_logging_config()

    level = (level or settings.app.log_level).upper()
    config.setdefault("root", {})["level"] = level
    for handler in config.get("handlers", {}).values():
        if isinstance(handler, dict) and "level" in handler:
            handler["level"] = level

    logging.config.dictConfig(config)
