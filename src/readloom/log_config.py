# readloom/log_config.py
"""Logging configuration for the readloom library using Loguru.

Every module logs through the shared ``logger``. Records from the ``readloom``
package are disabled on import so that a library never writes to an
application's handlers uninvited; ``configure_logging`` re-enables them and
installs a single handler.
"""

import sys

from loguru import logger

LIBRARY_NAME = "readloom"

logger.disable(LIBRARY_NAME)

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO", sink=sys.stderr, *, diagnose: bool = False):
    """
    Enables readloom's log records and sends them to a single sink.

    Removes existing handlers and adds a new one with the specified level and sink.

    Args:
        level: The minimum logging level (e.g., "DEBUG", "INFO", "TRACE").
            TRACE also logs request headers and XML request bodies.
        sink: The output sink (e.g., sys.stderr, "file.log").
        diagnose: Show variable values in logged tracebacks. Off by default
            because frame locals hold the consumer and token secrets.
    """
    logger.remove()
    logger.enable(LIBRARY_NAME)
    logger.add(
        sink,
        level=level.upper(),
        format=_FORMAT,
        colorize=sink is sys.stderr,
        backtrace=True,
        diagnose=diagnose,
    )
    logger.debug(f"readloom logging enabled at {level.upper()} writing to {sink}")
