"""
Logging configuration
"""

import logging
import sys
from typing import Optional
from core.config import settings

# Loggers of the packages that build and run comment statements
COMMENT_LOGGERS = ("comments", "core")


def setup_logging(level: Optional[str] = None):
    """
    Configure logging for comment statements.

    ``level`` overrides LOG_LEVEL. At DEBUG the comments package logs every
    statement and catalog query it builds; comment writes are logged at INFO.
    SQLAlchemy's own engine logging stays at WARNING unless SQL_ECHO is set.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    for name in COMMENT_LOGGERS:
        logging.getLogger(name).setLevel(log_level)

    if not settings.SQL_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(
        f"pg-comment logging at {logging.getLevelName(log_level)}: "
        f"statements {'shown' if log_level <= logging.DEBUG else 'hidden'}, "
        f"SQLAlchemy echo {'on' if settings.SQL_ECHO else 'off'}"
    )
