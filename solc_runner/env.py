"""Environment-variable configuration for solc_runner."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional


def get_solc_runner_home() -> Path:
    """Get the root directory of the installed solc release lines.

    Each release line lives in its own subdirectory, e.g. ``<home>/0.8/solc``.

    Environment Variables
    ---------------------
    SOLC_RUNNER_HOME : str, optional
        Install root. Defaults to ``~/.cache/solc_runner/solc``.

    Returns
    -------
    Path
        The install root. It is not required to exist.
    """
    value = os.environ.get("SOLC_RUNNER_HOME")
    if value:
        return Path(value).expanduser()
    return Path.home() / ".cache" / "solc_runner" / "solc"


def get_solc_executable_name() -> str:
    """Get the platform-specific file name of the solc executable."""
    return "solc.exe" if sys.platform == "win32" else "solc"


def get_solc_path_override(version: str) -> Optional[Path]:
    """Get the explicitly configured executable for one release line.

    The variable name is derived from the version key, ``0.8`` maps to ``SOLC_RUNNER_SOLC_0_8``.

    Parameters
    ----------
    version : str
        The version key, e.g. ``"0.8"``.

    Returns
    -------
    Optional[Path]
        The configured executable path, or None when the variable is unset or empty.
    """
    value = os.environ.get(f"SOLC_RUNNER_SOLC_{version.replace('.', '_')}")
    if not value:
        return None
    return Path(value).expanduser()


def get_solc_runner_logging_level() -> str:
    """Get the logging level name from ``SOLC_RUNNER_LOGGING_LEVEL`` (default ``WARNING``)."""
    return os.environ.get("SOLC_RUNNER_LOGGING_LEVEL", "WARNING").upper()


def get_solc_runner_timeout() -> Optional[float]:
    """Get the default per-invocation timeout in seconds.

    Environment Variables
    ---------------------
    SOLC_RUNNER_TIMEOUT : str, optional
        Timeout in seconds. Unset, empty or non-positive means no timeout.

    Returns
    -------
    Optional[float]
        The timeout, or None to wait for the compiler indefinitely.

    Raises
    ------
    ValueError
        If the variable is set but is not a number.
    """
    value = os.environ.get("SOLC_RUNNER_TIMEOUT")
    if not value:
        return None
    try:
        timeout = float(value)
    except ValueError as e:
        raise ValueError(f"SOLC_RUNNER_TIMEOUT must be a number, got '{value}'") from e
    return timeout if timeout > 0 else None
