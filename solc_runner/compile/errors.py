"""Exceptions raised by the compiler invocation subsystem.

A compiler that runs and exits non-zero is not an error here; it yields a failed
:class:`~solc_runner.data.Result`. These exceptions cover everything else.
"""


class SolcRunnerError(Exception):
    """Base class of all solc_runner exceptions."""


class UnsupportedVersionError(SolcRunnerError, ValueError):
    """Raised when a version key is not one of the supported release lines."""

    def __init__(self, version: str, supported: tuple) -> None:
        super().__init__(
            f"solc version '{version}' is not supported. Supported versions: {list(supported)}"
        )
        self.version = version
        self.supported = supported


class UnsupportedValueTypeError(SolcRunnerError, TypeError):
    """Raised when a list option receives a value that is neither a string nor a path."""


class ProcessStartError(SolcRunnerError):
    """Raised when the compiler process cannot be spawned."""


class ExecutionInterruptedError(SolcRunnerError):
    """Raised when waiting for the compiler is cancelled. The child process is killed."""


class ExecutionTimeoutError(ExecutionInterruptedError):
    """Raised when the compiler does not finish within the configured timeout."""


class VersionQueryError(SolcRunnerError):
    """Raised when ``solc --version`` exits non-zero."""

    def __init__(self, version: str, stderr: str) -> None:
        super().__init__(f"Problem getting solc version for '{version}': {stderr}")
        self.version = version
        self.stderr = stderr
