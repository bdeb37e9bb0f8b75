"""
Logging setup shared by the API and the maintenance scripts.
"""

import sys

from loguru import logger


def setup_logging(
    service_name: str,
    log_level: str = "INFO",
    enable_json: bool = False,
):
    """
    Configure the loguru console sink.

    Args:
        service_name: Name shown in every log line
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_json: Emit one JSON object per line instead of the text format
    """
    logger.remove()

    if enable_json:
        logger.add(sys.stdout, level=log_level.upper(), serialize=True)
    else:
        log_format = (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
            f"{service_name}:{{function}}:{{line}} - {{message}}"
        )
        logger.add(
            sys.stdout,
            format=log_format,
            level=log_level.upper(),
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

    logger.info(f"Logging configured for {service_name} at level: {log_level}")
