# utils/logging_config.py
import logging
import os
import sys


def _resolve_level(level):
    """Map a level name (or None) to a logging level, defaulting to INFO."""
    name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        logging.getLogger(__name__).warning(f"Invalid LOG_LEVEL {name}, using INFO")
        return logging.INFO
    return resolved


def setup_logging(level=None):
    """Configure structured logging for Lambda."""
    root = logging.getLogger()

    # Remove existing handlers
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))

    return root
