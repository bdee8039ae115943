"""Descriptor of one installed solc release line."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from solc_runner.env import (
    get_solc_executable_name,
    get_solc_path_override,
    get_solc_runner_home,
)


class SolcTool:
    """A resolvable solc installation for one version key.

    The executable is looked up, in order, from the explicit ``path`` argument, the
    ``SOLC_RUNNER_SOLC_<MAJOR>_<MINOR>`` environment variable, and finally
    ``SOLC_RUNNER_HOME/<version>/solc``. Nothing is checked at construction time; a missing
    binary surfaces when the process is started.

    The tool is a stateless descriptor, so a single instance can be shared by any number of
    concurrent invocations.
    """

    def __init__(self, version: str, path: Optional[Union[str, os.PathLike]] = None) -> None:
        """Constructor for the SolcTool class.

        Parameters
        ----------
        version : str
            The version key this installation serves, e.g. ``"0.8"``.
        path : Optional[Union[str, os.PathLike]]
            Explicit path of the executable. Default is resolved from the environment.
        """
        self.version = version
        if path is None:
            path = get_solc_path_override(version)
        if path is None:
            path = get_solc_runner_home() / version / get_solc_executable_name()
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """The configured executable path, as given."""
        return self._path

    @property
    def executable(self) -> str:
        """The canonical (absolute, symlink-free) executable path."""
        return str(self._path.resolve())

    @property
    def directory(self) -> Path:
        """The directory containing the executable. Used as working directory and
        library search path, so co-located shared libraries are found."""
        return Path(self.executable).parent

    def is_available(self) -> bool:
        """Check that the executable exists and may be executed.

        Returns
        -------
        bool
            True if the file exists and the current user can execute it.
        """
        path = Path(self.executable)
        return path.is_file() and os.access(path, os.X_OK)

    def __repr__(self) -> str:
        return f"SolcTool(version={self.version!r}, path={str(self._path)!r})"
