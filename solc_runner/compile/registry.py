"""Tool registry for resolving and caching solc installations per version."""

from __future__ import annotations

import threading
from typing import Callable, ClassVar, Dict, Iterable, Optional, Tuple

from solc_runner.logging import get_logger

from .errors import UnsupportedVersionError
from .tool import SolcTool

logger = get_logger("SolcRegistry")

SUPPORTED_VERSIONS: Tuple[str, ...] = ("0.6", "0.7", "0.8")
"""Release lines of solc that can be resolved, oldest first."""


class SolcRegistry:
    """Thread-safe cache mapping version keys to lazily created SolcTool instances.

    At most one SolcTool is ever created per version key, even when several threads resolve
    the same key for the first time concurrently. Unknown keys are rejected before anything
    is created.

    A process-wide default registry is available through get_instance(); tests and embedding
    applications can construct their own and hand it to the SolidityCompiler facade.
    """

    _instance: ClassVar[Optional["SolcRegistry"]] = None
    """Shared default instance of the SolcRegistry."""

    _instance_lock: ClassVar[threading.Lock] = threading.Lock()
    """Guards creation of the shared default instance."""

    _tools: Dict[str, SolcTool]
    """Cache mapping version keys to their tools."""

    def __init__(
        self,
        tool_factory: Callable[[str], SolcTool] = SolcTool,
        versions: Iterable[str] = SUPPORTED_VERSIONS,
    ) -> None:
        """Initialize the registry.

        Parameters
        ----------
        tool_factory : Callable[[str], SolcTool]
            Creates the tool for a version key. Called at most once per key.
        versions : Iterable[str]
            The version keys that may be resolved. Must not be empty.

        Raises
        ------
        ValueError
            If ``versions`` is empty.
        """
        self._versions = tuple(versions)
        if len(self._versions) == 0:
            raise ValueError("SolcRegistry requires at least one supported version")
        self._tool_factory = tool_factory
        self._tools: Dict[str, SolcTool] = {}
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> "SolcRegistry":
        """Get the shared registry instance, creating it on first use.

        Returns
        -------
        SolcRegistry
            The shared registry, serving SUPPORTED_VERSIONS with default SolcTool resolution.
        """
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = SolcRegistry()
        return cls._instance

    @property
    def supported_versions(self) -> Tuple[str, ...]:
        return self._versions

    def is_supported(self, version: str) -> bool:
        return version in self._versions

    def resolve(self, version: str) -> SolcTool:
        """Get the tool for a version key, creating and caching it on first request.

        Parameters
        ----------
        version : str
            The version key, e.g. ``"0.8"``.

        Returns
        -------
        SolcTool
            The cached tool. Repeated calls return the same instance.

        Raises
        ------
        UnsupportedVersionError
            If ``version`` is not a supported version key.
        """
        if version not in self._versions:
            logger.error(f"Rejected unsupported solc version '{version}'")
            raise UnsupportedVersionError(version, self._versions)

        tool = self._tools.get(version)
        if tool is not None:
            return tool
        with self._lock:
            tool = self._tools.get(version)
            if tool is None:
                tool = self._tool_factory(version)
                self._tools[version] = tool
                logger.debug(f"Registered {tool}")
        return tool

    def cleanup(self) -> None:
        """Forget all cached tools. They are recreated on the next resolve()."""
        with self._lock:
            self._tools.clear()
