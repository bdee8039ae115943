"""Data layer with strongly-typed models for compiler invocations."""

from .result import STDIN_MARKER, CommandSpec, Result
from .utils import BaseModelWithDocstrings, FrozenModelWithDocstrings, NonEmptyString

__all__ = [
    "STDIN_MARKER",
    "CommandSpec",
    "Result",
    "BaseModelWithDocstrings",
    "FrozenModelWithDocstrings",
    "NonEmptyString",
]
