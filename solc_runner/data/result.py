"""Strong-typed data definitions for compiler invocations and their outcomes."""

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ConfigDict, Field, model_validator

from .utils import BaseModelWithDocstrings

STDIN_MARKER = "-"
"""Argument telling solc to read its source from standard input instead of a file."""


class CommandSpec(BaseModelWithDocstrings):
    """A fully resolved compiler command line.

    Built once per invocation by the command builder and consumed immediately by the
    process runner.
    """

    argv: List[str] = Field(min_length=1)
    """The argument vector. The first element is the canonical path of the executable."""
    cwd: Path
    """Working directory of the child process, the directory containing the executable."""
    env: Dict[str, str] = Field(default_factory=dict)
    """Variables added to the inherited environment of the child process."""

    @property
    def executable(self) -> str:
        """The executable path, i.e. ``argv[0]``."""
        return self.argv[0]

    @property
    def reads_stdin(self) -> bool:
        """Whether the command ends with the stdin marker."""
        return self.argv[-1] == STDIN_MARKER


class Result(BaseModelWithDocstrings):
    """The outcome of one compiler invocation.

    A non-zero exit is a normal, unsuccessful result: compile errors are part of the
    compiler's expected output, and their text is in ``errors``.
    """

    model_config = ConfigDict(validate_assignment=True)

    errors: str = ""
    """Everything the compiler wrote to standard error, one trailing newline per line."""
    output: str = ""
    """Everything the compiler wrote to standard output, one trailing newline per line."""
    success: bool
    """True if and only if the compiler exited with status zero."""
    returncode: Optional[int] = None
    """The exit status of the compiler, when known."""

    @model_validator(mode="after")
    def _validate_success_matches_returncode(self) -> "Result":
        """Reject a result whose success flag contradicts its exit status.

        Raises
        ------
        ValueError
            If ``returncode`` is set and ``success`` is not ``returncode == 0``.
        """
        if self.returncode is not None and self.success != (self.returncode == 0):
            raise ValueError(
                f"Inconsistent result: success={self.success} with returncode={self.returncode}"
            )
        return self

    def is_failed(self) -> bool:
        return not self.success
