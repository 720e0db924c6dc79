"""Logging configuration for the CLI and HTTP app."""

import sys
from pathlib import Path

from loguru import logger

from famlyeml.config import Config, get_config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(config: Config | None = None) -> None:
    """Replace loguru's default sink with the configured ones.

    Logs go to stderr so JSON printed on stdout stays clean. A rotating
    file sink is added when ``log_file`` is set.
    """
    config = config or get_config()

    logger.remove()
    logger.add(sys.stderr, level=config.log_level, format=LOG_FORMAT)

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Rotation at 10 MB, keep 5 old files
        logger.add(
            log_path,
            rotation="10 MB",
            retention=5,
            level=config.log_level,
            format=LOG_FORMAT,
            backtrace=True,
            diagnose=True,
        )
        logger.info(f"Logging to file: {log_path}")
