"""Public entry points: compile Solidity source and query the compiler version."""

from __future__ import annotations

import threading
from typing import List, Optional, Union

from solc_runner.data import Result
from solc_runner.logging import get_logger

from .command import build_command, build_version_command
from .errors import VersionQueryError
from .options import Option
from .process import ProcessRunner
from .registry import SolcRegistry

logger = get_logger("SolidityCompiler")


class SolidityCompiler:
    """Compiles Solidity source with one of several installed solc release lines.

    Examples
    --------
    >>> compiler = SolidityCompiler()
    >>> result = compiler.compile(source, "0.8", True, Options.ABI, Options.BIN)
    >>> if result.is_failed():
    ...     print(result.errors)
    """

    def __init__(
        self, registry: Optional[SolcRegistry] = None, runner: Optional[ProcessRunner] = None
    ) -> None:
        """Constructor for the SolidityCompiler class.

        Parameters
        ----------
        registry : Optional[SolcRegistry]
            Resolves version keys to installations. Default is the shared registry.
        runner : Optional[ProcessRunner]
            Runs the compiler. Default is a new ProcessRunner.
        """
        self._registry = registry if registry is not None else SolcRegistry.get_instance()
        self._runner = runner if runner is not None else ProcessRunner()

    @property
    def registry(self) -> SolcRegistry:
        return self._registry

    def compile(
        self,
        source: Union[bytes, str],
        version: str,
        combined_json: bool = False,
        *options: Option,
        optimize: bool = False,
        cancel_event: Optional[threading.Event] = None,
    ) -> Result:
        """Compile source read from standard input.

        Parameters
        ----------
        source : Union[bytes, str]
            The Solidity source. Text is encoded as UTF-8.
        version : str
            The version key of the solc release line to use, e.g. ``"0.8"``.
        combined_json : bool
            Request all output selectors through a single ``--combined-json`` argument.
        *options : Option
            Output selectors, list options and custom options.
        optimize : bool
            Pass ``--optimize``. Default is False.
        cancel_event : Optional[threading.Event]
            Set it from another thread to kill the compiler and abort the call.

        Returns
        -------
        Result
            The compiler output. Compile errors give ``result.is_failed()`` and are described
            in ``result.errors``.

        Raises
        ------
        UnsupportedVersionError
            If ``version`` is not supported.
        ProcessStartError
            If solc cannot be started.
        ExecutionInterruptedError
            If the call is cancelled or times out.
        """
        tool = self._registry.resolve(version)
        spec = build_command(tool, optimize, combined_json, options)
        if isinstance(source, str):
            source = source.encode("utf-8")
        result = self._runner.execute(spec, source, cancel_event=cancel_event)
        if result.is_failed():
            logger.info(f"solc {version} reported a failed compilation")
        return result

    def get_version(self, version: str) -> str:
        """Run ``solc --version`` for a release line.

        Parameters
        ----------
        version : str
            The version key, e.g. ``"0.8"``.

        Returns
        -------
        str
            The compiler's standard output.

        Raises
        ------
        UnsupportedVersionError
            If ``version`` is not supported. No process is started in that case.
        ProcessStartError
            If solc cannot be started.
        VersionQueryError
            If solc exits non-zero. Its standard error is kept on the exception.
        """
        tool = self._registry.resolve(version)
        result = self._runner.execute(build_version_command(tool))
        if result.is_failed():
            logger.error(f"solc {version} --version failed: {result.errors}")
            raise VersionQueryError(version, result.errors)
        return result.output

    def available_versions(self) -> List[str]:
        """List the supported version keys whose executable is installed."""
        return [
            v
            for v in self._registry.supported_versions
            if self._registry.resolve(v).is_available()
        ]


_default_compiler: Optional[SolidityCompiler] = None
_default_compiler_lock = threading.Lock()


def get_default_compiler() -> SolidityCompiler:
    """Get the shared SolidityCompiler backed by the shared registry."""
    global _default_compiler
    if _default_compiler is None:
        with _default_compiler_lock:
            if _default_compiler is None:
                _default_compiler = SolidityCompiler()
    return _default_compiler


def compile_source(
    source: Union[bytes, str],
    version: str,
    combined_json: bool = False,
    *options: Option,
    optimize: bool = False,
    cancel_event: Optional[threading.Event] = None,
) -> Result:
    """Compile with the shared compiler. See SolidityCompiler.compile."""
    return get_default_compiler().compile(
        source, version, combined_json, *options, optimize=optimize, cancel_event=cancel_event
    )


def get_version(version: str) -> str:
    """Query the compiler version with the shared compiler. See SolidityCompiler.get_version."""
    return get_default_compiler().get_version(version)
