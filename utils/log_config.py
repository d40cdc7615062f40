"""
Logging Configuration
loguru sinks for deploy scripts
"""

import os
import sys
from typing import Optional
from loguru import logger


def configure_logging(log_file: Optional[str] = "data/logs/deploy.log"):
    """
    Replace the default sink with a stderr sink and a rotating file sink.
    stdout is left to the script's own output.

    Args:
        log_file: Debug log path (None = no file sink)
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=os.getenv('LOG_LEVEL', 'INFO')
    )

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )
