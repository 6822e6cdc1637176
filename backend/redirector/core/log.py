from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install the process-wide log format. Safe to call more than once."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("redirector").setLevel(level.upper())
