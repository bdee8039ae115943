"""Compiler invocation subsystem.

This package runs installed solc release lines as child processes. It includes:
- SolcTool: Descriptor of one installed release line
- SolcRegistry: Thread-safe cache resolving version keys to tools
- Options: The typed option model rendered into command-line arguments
- ProcessRunner: Deadlock-free execution with concurrent stdout/stderr draining
- SolidityCompiler: Facade wiring the above together

The typical workflow is:
1. Compile: result = compile_source(source, "0.8", True, Options.ABI, Options.BIN)
2. Check: if result.is_failed(): print(result.errors)
3. Use: result.output
"""

from .command import LIBRARY_PATH_VARIABLE, build_command, build_version_command
from .compiler import SolidityCompiler, compile_source, get_default_compiler, get_version
from .errors import (
    ExecutionInterruptedError,
    ExecutionTimeoutError,
    ProcessStartError,
    SolcRunnerError,
    UnsupportedValueTypeError,
    UnsupportedVersionError,
    VersionQueryError,
)
from .options import (
    CustomOption,
    FlagOption,
    ListOption,
    Option,
    Options,
    OutputOption,
    parse_options,
    render_option,
)
from .process import ProcessRunner
from .registry import SUPPORTED_VERSIONS, SolcRegistry
from .tool import SolcTool

__all__ = [
    "LIBRARY_PATH_VARIABLE",
    "SUPPORTED_VERSIONS",
    "build_command",
    "build_version_command",
    "SolidityCompiler",
    "compile_source",
    "get_default_compiler",
    "get_version",
    "ExecutionInterruptedError",
    "ExecutionTimeoutError",
    "ProcessStartError",
    "SolcRunnerError",
    "UnsupportedValueTypeError",
    "UnsupportedVersionError",
    "VersionQueryError",
    "CustomOption",
    "FlagOption",
    "ListOption",
    "Option",
    "Options",
    "OutputOption",
    "parse_options",
    "render_option",
    "ProcessRunner",
    "SolcRegistry",
    "SolcTool",
]
