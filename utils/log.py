"""Logging setup for the Streamlit app and scripts.

Call ``setup_logging()`` once at startup. Streamlit reruns the script on every
interaction, so the function is idempotent.
"""
import logging
import os
import sys

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"


def setup_logging(level: str = None) -> None:
    raw = level or os.environ.get('SENIORID_LOG_LEVEL', 'INFO')
    root = logging.getLogger()
    root.setLevel(_parse_level(raw))
    if getattr(setup_logging, "_handler", None) is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        setup_logging._handler = handler
        logging.getLogger(__name__).debug("Logging configured at %s", raw)


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, str(raw).upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
