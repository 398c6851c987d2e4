"""
Logging Setup
Console and rotating file sinks shared by all deployment scripts
"""

import os
import sys
from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def setup_logging(level: str = None, log_file: str = "data/logs/deploy.log"):
    """
    Configure loguru sinks

    Args:
        level: Console level (defaults to LOG_LEVEL env or INFO)
        log_file: Rotating debug log, None to disable
    """
    level = level or os.getenv('LOG_LEVEL', 'INFO')

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format=FILE_FORMAT,
            level="DEBUG"
        )
