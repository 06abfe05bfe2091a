"""Main module entrypoint for local runtime execution.

This module validates startup configuration, configures logging and launches
the FastAPI service.
"""

import argparse
import logging

import uvicorn

from app.bootstrap import bootstrap_create_application
from app.config import config_configure_logging, config_load_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
    """

    argument_parser = argparse.ArgumentParser(description="NaijaConnect Capital analytics runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api",),
        help="Runtime command: `api` starts the HTTP server",
        type=str,
    )
    argument_parser.add_argument(
        "--port",
        dest="port",
        type=int,
        help="Optional port override for `api`",
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()
    config_configure_logging(level=settings.log_level, fmt=settings.log_format)
    application = bootstrap_create_application(settings=settings)
    port = parsed_arguments.port or settings.application_port
    logger.info("starting %s on %s:%d", parsed_arguments.command, settings.application_host, port)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
