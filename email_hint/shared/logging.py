"""
Logging setup for the email hint service.

One stdout stream shared by the lookup code, the access log and the
third-party libraries underneath it. The access log replaces uvicorn's
own request lines. SQL statements are only echoed at DEBUG.
Connection strings and passwords are never passed to a logger.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library loggers kept at WARNING unless the service runs at DEBUG.
LIBRARY_LOGGERS = ("uvicorn.error", "sqlalchemy.engine", "sqlalchemy.pool")


def configure_logging(level: str = "INFO") -> int:
    """Route service and library logs to stdout.

    Args:
        level: Level name for the service loggers. Unknown names fall
            back to INFO.

    Returns:
        The numeric level applied to the root logger.
    """
    root_level = getattr(logging, level.upper(), None)
    if not isinstance(root_level, int):
        root_level = logging.INFO

    logging.basicConfig(
        level=root_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    library_level = logging.INFO if root_level <= logging.DEBUG else logging.WARNING
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
    return root_level
