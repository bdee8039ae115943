"""Typed command-line options for solc.

Every option is one of four immutable variants, discriminated by ``kind``:

- FlagOption: a bare ``--name`` switch (``--optimize``, ``--version``).
- OutputOption: an output artifact selector (``--abi``, ``--bin``, ...). In combined-JSON
  mode all selectors are folded into a single ``--combined-json abi,bin,...`` argument.
- ListOption: ``--name v1,v2,...``. Paths are rendered as absolute paths.
- CustomOption: any other ``--name [value]`` the caller wants to pass through.

:func:`render_option` turns an option into command-line tokens.
"""

from __future__ import annotations

import os
from typing import Annotated, Any, Iterable, List, Literal, Optional, Sequence, Tuple, Union

from pydantic import Field, TypeAdapter, field_validator

from solc_runner.data.utils import FrozenModelWithDocstrings, NonEmptyString

from .errors import UnsupportedValueTypeError


class FlagOption(FrozenModelWithDocstrings):
    """A switch without a value, rendered as ``--name``."""

    kind: Literal["flag"] = "flag"
    """Variant tag."""
    name: NonEmptyString
    """The flag name without the leading dashes."""

    def __init__(self, name: str, **data: Any) -> None:
        super().__init__(name=name, **data)


class OutputOption(FrozenModelWithDocstrings):
    """An output artifact selector such as ``abi`` or ``bin``."""

    kind: Literal["output"] = "output"
    """Variant tag."""
    name: NonEmptyString
    """The selector name, used both as ``--name`` and as a ``--combined-json`` entry."""

    def __init__(self, name: str, **data: Any) -> None:
        super().__init__(name=name, **data)


class ListOption(FrozenModelWithDocstrings):
    """An option taking a comma-separated list, rendered as ``--name v1,v2,...``."""

    kind: Literal["list"] = "list"
    """Variant tag."""
    name: NonEmptyString
    """The option name without the leading dashes."""
    values: Tuple[Any, ...] = ()
    """The raw values in render order. Each must be a ``str`` or an ``os.PathLike``."""

    def __init__(self, name: str, values: Iterable[Any] = (), **data: Any) -> None:
        super().__init__(name=name, values=values, **data)

    @field_validator("values", mode="before")
    @classmethod
    def _validate_values(cls, values: Any) -> Tuple[Any, ...]:
        """Check every value can be rendered.

        Raises
        ------
        UnsupportedValueTypeError
            If a value is neither a string nor path-like.
        """
        if isinstance(values, (str, os.PathLike)):
            values = (values,)
        values = tuple(values)
        for value in values:
            if not isinstance(value, (str, os.PathLike)):
                raise UnsupportedValueTypeError(
                    f"Unexpected type {type(value).__name__}, value '{value}' cannot be rendered."
                )
        return values

    @property
    def value(self) -> str:
        """The comma-joined rendering of all values."""
        return ",".join(_render_value(v) for v in self.values)


class CustomOption(FrozenModelWithDocstrings):
    """A pass-through option, rendered as ``--name`` or ``--name value``."""

    kind: Literal["custom"] = "custom"
    """Variant tag."""
    name: NonEmptyString
    """The option name. A leading ``--`` given by the caller is stripped."""
    value: Optional[str] = None
    """The option value, if any."""

    def __init__(self, name: str, value: Optional[str] = None, **data: Any) -> None:
        super().__init__(name=name, value=value, **data)

    @field_validator("name")
    @classmethod
    def _strip_dashes(cls, name: str) -> str:
        if name.startswith("--"):
            name = name[2:]
        if not name:
            raise ValueError("Custom option name must not be empty")
        return name


Option = Annotated[
    Union[FlagOption, OutputOption, ListOption, CustomOption], Field(discriminator="kind")
]
"""Any solc option. Dispatch on the concrete type or on ``kind``."""

_OPTIONS_ADAPTER = TypeAdapter(List[Option])

COMBINED_JSON = "combined-json"
"""Name of the list option that folds output selectors into one JSON document."""


def _render_value(value: Any) -> str:
    if isinstance(value, os.PathLike):
        return os.path.abspath(os.fsdecode(value))
    if isinstance(value, str):
        return value
    raise UnsupportedValueTypeError(
        f"Unexpected type {type(value).__name__}, value '{value}' cannot be rendered."
    )


def render_option(option: Option) -> List[str]:
    """Render one option to its command-line tokens.

    Output selectors render standalone here; folding them into ``--combined-json`` is up to
    the command builder.

    Parameters
    ----------
    option : Option
        The option to render.

    Returns
    -------
    List[str]
        Zero or more tokens, in command-line order.

    Raises
    ------
    UnsupportedValueTypeError
        If ``option`` is not one of the option variants.
    """
    if isinstance(option, (FlagOption, OutputOption)):
        return [f"--{option.name}"]
    if isinstance(option, ListOption):
        return [f"--{option.name}", option.value]
    if isinstance(option, CustomOption):
        if option.value is None:
            return [f"--{option.name}"]
        return [f"--{option.name}", option.value]
    raise UnsupportedValueTypeError(f"Not a solc option: {option!r}")


def parse_options(raw: Sequence[Any]) -> List[Option]:
    """Validate options given as plain data, e.g. ``[{"kind": "output", "name": "abi"}]``.

    Already constructed options are accepted unchanged.

    Parameters
    ----------
    raw : Sequence[Any]
        Option dicts or option instances.

    Returns
    -------
    List[Option]
        The validated options, in the given order.
    """
    return _OPTIONS_ADAPTER.validate_python(list(raw))


class Options:
    """Namespace listing the supported solc options."""

    AST = OutputOption("ast")
    BIN = OutputOption("bin")
    INTERFACE = OutputOption("interface")
    ABI = OutputOption("abi")
    METADATA = OutputOption("metadata")
    ASTJSON = OutputOption("ast-json")

    OPTIMIZE = FlagOption("optimize")
    VERSION = FlagOption("version")

    @staticmethod
    def allow_paths(values: Iterable[Any]) -> ListOption:
        """Allow solc to import from the given directories."""
        return ListOption("allow-paths", values)

    @staticmethod
    def combined_json(selectors: Iterable[OutputOption]) -> ListOption:
        """Fold output selectors into one ``--combined-json`` option, keeping their order."""
        return ListOption(COMBINED_JSON, [s.name for s in selectors])
