"""Building solc command lines from typed options."""

from __future__ import annotations

from typing import List, Sequence, Type, TypeVar

from solc_runner.data import STDIN_MARKER, CommandSpec

from .errors import UnsupportedValueTypeError
from .options import (
    COMBINED_JSON,
    CustomOption,
    FlagOption,
    ListOption,
    Option,
    Options,
    OutputOption,
    render_option,
)
from .tool import SolcTool

LIBRARY_PATH_VARIABLE = "LD_LIBRARY_PATH"
"""Environment variable pointing the dynamic loader at the libraries shipped next to solc."""

_OptionT = TypeVar("_OptionT")


def _elements_of(option_type: Type[_OptionT], options: Sequence[Option]) -> List[_OptionT]:
    return [o for o in options if isinstance(o, option_type)]


def _check_options(options: Sequence[Option]) -> None:
    for option in options:
        if not isinstance(option, (FlagOption, OutputOption, ListOption, CustomOption)):
            raise UnsupportedValueTypeError(f"Not a solc option: {option!r}")


def _make_spec(tool: SolcTool, argv: List[str]) -> CommandSpec:
    directory = tool.directory
    return CommandSpec(argv=argv, cwd=directory, env={LIBRARY_PATH_VARIABLE: str(directory)})


def build_command(
    tool: SolcTool, optimize: bool, combined_json: bool, options: Sequence[Option]
) -> CommandSpec:
    """Build the command line compiling source read from standard input.

    The argument vector is laid out as::

        [solc, --optimize?, (--combined-json a,b | --a --b), --list v1,v2 ..., --custom [value] ...,
         --flag ..., -]

    Options of each kind keep the order they were given in. The function is pure apart from
    resolving the tool's canonical path.

    Parameters
    ----------
    tool : SolcTool
        The installation to run.
    optimize : bool
        Whether to pass ``--optimize``. ``Options.OPTIMIZE`` among ``options`` has the same
        effect.
    combined_json : bool
        Fold all output selectors into one ``--combined-json`` argument. An empty selector
        list is passed through as an empty value.
    options : Sequence[Option]
        The options to render.

    Returns
    -------
    CommandSpec
        The command, with the executable's directory as working directory and library path.

    Raises
    ------
    UnsupportedValueTypeError
        If an element of ``options`` is not a solc option.
    ValueError
        If ``combined_json`` is set and ``options`` already holds a ``--combined-json`` list
        option.
    """
    _check_options(options)
    flags = _elements_of(FlagOption, options)
    if Options.OPTIMIZE in flags:
        optimize = True
    flags = [f for f in flags if f != Options.OPTIMIZE]

    argv = [tool.executable]
    if optimize:
        argv.extend(render_option(Options.OPTIMIZE))

    selectors = _elements_of(OutputOption, options)
    if combined_json:
        if any(o.name == COMBINED_JSON for o in _elements_of(ListOption, options)):
            raise ValueError(
                "Pass output selectors instead of a combined-json option when combined_json is set"
            )
        argv.extend(render_option(Options.combined_json(selectors)))
    else:
        for option in selectors:
            argv.extend(render_option(option))

    for option in _elements_of(ListOption, options):
        argv.extend(render_option(option))

    for option in _elements_of(CustomOption, options):
        argv.extend(render_option(option))

    for option in flags:
        argv.extend(render_option(option))

    # Since solc 0.5.0 reading from stdin requires an explicit "-"; older releases accept it too.
    argv.append(STDIN_MARKER)

    return _make_spec(tool, argv)


def build_version_command(tool: SolcTool) -> CommandSpec:
    """Build ``solc --version``. The command reads nothing from standard input."""
    return _make_spec(tool, [tool.executable, *render_option(Options.VERSION)])
