"""Logging setup shared by the CLI and scripts.

Modules log through ``logging.getLogger(__name__)``; only entry points call
:func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys

_HANDLER_NAME = "user_clustering.stderr"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Repeated calls replace the handler so it always writes to the current
    ``sys.stderr``.
    """

    logger = logging.getLogger("user_clustering")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    return logger
