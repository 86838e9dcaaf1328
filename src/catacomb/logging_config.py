from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

PACKAGE_LOGGER = "catacomb"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
_HANDLER_NAME = "catacomb-console"


def resolve_level(debug: bool = False, env: Optional[Mapping[str, str]] = None) -> int:
    """``--debug`` wins, then CATACOMB_LOG_LEVEL, then WARNING.

    Unknown level names in the environment are ignored.
    """
    if debug:
        return logging.DEBUG
    env = os.environ if env is None else env
    name = env.get("CATACOMB_LOG_LEVEL")
    if name:
        level = logging.getLevelName(name.strip().upper())
        if isinstance(level, int):
            return level
    return logging.WARNING


def configure_logging(debug: bool = False, env: Optional[Mapping[str, str]] = None) -> logging.Logger:
    """Attach a console handler to the ``catacomb`` logger and set its level.

    Only the package logger is touched, so an embedding application keeps
    control of the root logger. Calling this again updates the level
    without stacking handlers.
    """
    level = resolve_level(debug, env)
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.setLevel(level)
    handler = next((h for h in pkg_logger.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        pkg_logger.addHandler(handler)
    handler.setLevel(level)
    return pkg_logger


__all__ = ["PACKAGE_LOGGER", "LOG_FORMAT", "resolve_level", "configure_logging"]
