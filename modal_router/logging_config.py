"""
Logging configuration for modal_router.

Call configure_logging() once at startup; library code only ever uses
``from loguru import logger``.
"""

import sys
from typing import Optional

from loguru import logger

from .config import RouterSettings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "{extra[module]} | {message}"
)


def configure_logging(settings: Optional[RouterSettings] = None) -> None:
    """
    Configure loguru sinks from the router settings.

    Removes the default handler, then adds a stderr sink (when enabled) and a
    rotating file sink (when a log file is configured).
    """
    if settings is None:
        settings = RouterSettings.from_config()

    logger.remove()  # Remove default handler
    logger.configure(extra={"module": "modal_router"})

    if settings.log_console:
        logger.add(
            sink=sys.stderr,
            level=settings.log_level,
            format=LOG_FORMAT,
            colorize=True,
        )

    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            sink=str(settings.log_file),
            level=settings.log_level,
            format=LOG_FORMAT,
            rotation="10 MB",
            retention="7 days",
        )

    logger.info(f"Logging configured: level={settings.log_level}, file={settings.log_file}")
