"""Logging utilities tailored for puzzle generation.

Library modules only ask for loggers under the ``minicrossword`` namespace;
handlers are installed by the application through :func:`configure_logging`.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

PACKAGE_LOGGER = "minicrossword"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def resolve_level(level: Union[int, str]) -> int:
    """Accept ``logging`` constants or names such as ``"debug"``."""

    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level '{level}'")
    return value


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure root logging with a compact formatter.

    Generation runs many throwaway topology attempts, so most of the
    per-attempt detail is emitted at DEBUG and only outcomes at INFO.
    Calling this again replaces the handler it installed before.
    """

    handler = logging.StreamHandler()
    handler.set_name(PACKAGE_LOGGER)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == PACKAGE_LOGGER]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(resolve_level(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger in the package namespace."""

    return logging.getLogger(name or PACKAGE_LOGGER)
