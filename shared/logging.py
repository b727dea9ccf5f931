"""
Logging setup.

Modules log through ``logging.getLogger(__name__)``; this installs the one
root handler the process writes to.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Route all log records to stderr at ``level``. Safe to call twice."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in root.handlers:
        if getattr(handler, "_splitwise", False):
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._splitwise = True
    root.addHandler(handler)
