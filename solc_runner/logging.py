"""Logging helpers. All solc_runner loggers are children of the ``solc_runner`` logger."""

from __future__ import annotations

import logging
from typing import Optional, Union

from solc_runner.env import get_solc_runner_logging_level

_ROOT_LOGGER_NAME = "solc_runner"
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    """Attach a stream handler to the ``solc_runner`` logger and set its level.

    Calling this more than once only updates the level; the handler is installed once.

    Parameters
    ----------
    level : Optional[Union[str, int]]
        A logging level name or number. Defaults to ``SOLC_RUNNER_LOGGING_LEVEL``.
    """
    global _handler

    if level is None:
        level = get_solc_runner_logging_level()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(level)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``solc_runner`` namespace.

    Parameters
    ----------
    name : str
        Component name, e.g. ``"SolcRegistry"``.

    Returns
    -------
    logging.Logger
        The logger named ``solc_runner.<name>``.
    """
    if name == _ROOT_LOGGER_NAME or name.startswith(_ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")
