"""Command-line entry point: ``python -m commonstatus_exporter``."""

import logging
import os
import sys

import uvicorn

from commonstatus_exporter.adapters.frameworks.fastapi import create_app
from commonstatus_exporter.adapters.logging import configure_logging, parse_level
from commonstatus_exporter.config import ExporterSettings, load_settings
from commonstatus_exporter.core.errors import ConfigError

logger = logging.getLogger("commonstatus_exporter")


def _warn_defaults(settings: ExporterSettings) -> None:
    for name, field in ExporterSettings.model_fields.items():
        variable = field.validation_alias
        if isinstance(variable, str) and variable not in os.environ:
            logger.warning(
                "env variable isn't set, using default value",
                extra={"variable": variable, "default_value": getattr(settings, name)},
            )


def main() -> int:
    """Load settings, configure logging and serve until interrupted."""
    try:
        settings = load_settings()
    except ConfigError as exc:
        configure_logging(logging.ERROR)
        logger.error("failed to start the exporter", extra={"err": str(exc)})
        return 1

    level = parse_level(settings.log_level)
    configure_logging(level if level is not None else logging.INFO)
    if level is None:
        logger.warning(
            "unknown log level, using INFO", extra={"log_level": settings.log_level}
        )
    _warn_defaults(settings)

    app = create_app(connection_timeout=settings.connection_timeout)
    logger.info(
        "starting exporter", extra={"host": settings.host, "port": settings.port}
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
