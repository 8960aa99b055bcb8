"""Package logger for amgraph.

Every module logs through `get_logger(__name__)`, which hangs off the single
"amgraph" logger configured here. Shortest-path table computation, cache
drops, Karger results and clustering splits are logged at DEBUG; cancelled
min-cut searches and success-rate progress at INFO.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "amgraph"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Configure the "amgraph" logger once and return it.

    The logger gets one handler, stdout unless `handler` is given. If it
    already has a handler, nothing changes, so applications that attach
    their own handler before importing amgraph keep it.

    Args:
        level: Level of the "amgraph" logger.
        format_string: Record format; defaults to `DEFAULT_FORMAT`.
        handler: Handler to attach instead of a stdout stream handler.

    Returns:
        The "amgraph" logger.
    """
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if package_logger.handlers:
        return package_logger

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    # Records still reach the root logger (pytest's caplog listens there)
    package_logger.propagate = True
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for module `name`, inheriting the package level."""
    setup_root_logger()
    return logging.getLogger(name)


setup_root_logger()
