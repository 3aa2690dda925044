"""
Logging setup for CLI commands.
"""
import logging
import sys

from app.core.logging_config import LOGGER_NAME, ContextFormatter


def setup_cli_logging(command: str, verbose: bool = False) -> logging.Logger:
    """Route application logs to stderr; quiet unless ``verbose``."""
    level = logging.INFO if verbose else logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ContextFormatter("%(levelname)s %(name)s: %(message)s"))

    root = logging.getLogger(LOGGER_NAME)
    root.handlers = [handler]
    root.setLevel(level)
    root.propagate = False

    return logging.getLogger(f"{LOGGER_NAME}.cli.{command}")
