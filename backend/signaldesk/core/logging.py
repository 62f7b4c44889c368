"""
Logging setup.

Modules log through ``logging.getLogger(__name__)``; this only wires the
root handler once at startup.
"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from settings (idempotent)."""
    if level is None:
        from signaldesk.core.config import settings

        level = settings.log_level

    root = logging.getLogger()
    root.setLevel(level.upper())
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
