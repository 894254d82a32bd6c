"""
Python logging configuration for the procstat command line.

Library modules only create named loggers; handlers are installed here by
the entry point.
"""

import logging
import sys

from procstat.config import LOG_LEVEL


def setup_logging(level: str | None = None) -> None:
    """
    Configure Python logging for the command line.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR). Defaults to the
            PROCSTAT_LOG_LEVEL environment setting; unknown names fall back
            to WARNING.

    Log Format:
        YYYY-MM-DD HH:MM:SS [LEVEL] logger: Message
    """
    name = (level or LOG_LEVEL).upper()
    log_level = getattr(logging, name, None)
    if not isinstance(log_level, int):
        log_level = logging.WARNING

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
