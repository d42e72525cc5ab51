"""
Logging configuration for schema_codegen.

All modules obtain their logger through get_logger() so that output is
namespaced under the package logger and can be configured in one place.
"""

import logging
from typing import Optional

from rich.logging import RichHandler

ROOT_LOGGER_NAME = "schema_codegen"

_configured = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger namespaced under the package root logger."""
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: int = logging.INFO, use_rich: bool = True) -> logging.Logger:
    """
    Configure the package logger.

    Safe to call more than once; the handler is installed only on the first
    call and later calls just adjust the level.

    Args:
        level: Logging level for the package logger
        use_rich: Render records with rich instead of a plain stream handler

    Returns:
        The configured package logger
    """
    global _configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not _configured:
        if use_rich:
            handler: logging.Handler = RichHandler(
                rich_tracebacks=True, show_path=False, markup=False
            )
            handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        else:
            handler = logging.StreamHandler()
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True

    return logger
