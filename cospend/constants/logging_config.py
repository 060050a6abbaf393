"""Logging configuration for the application."""
import logging
import os

DEFAULT_LOG_LEVEL = "INFO"

# Configure the application logger
LOG = logging.getLogger("cospend")

# Console handler writes to stderr so command output on stdout stays clean
console_handler = logging.StreamHandler()
console_handler.setLevel(logging.DEBUG)

# Create formatter and add it to the handlers
formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
console_handler.setFormatter(formatter)

# Add the handlers to the logger
LOG.addHandler(console_handler)


def level_from_env(value):
    """Map a LOG_LEVEL value to a logging level; unknown names give INFO."""
    name = (value or DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.getLevelName(DEFAULT_LOG_LEVEL)


LOG.setLevel(level_from_env(os.getenv("LOG_LEVEL")))


def enable_debug_logging():
    """Switch the application logger to DEBUG (used by the --debug flag)."""
    LOG.setLevel(logging.DEBUG)
