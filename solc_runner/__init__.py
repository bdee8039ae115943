from solc_runner.compile import (
    SUPPORTED_VERSIONS,
    CustomOption,
    ExecutionInterruptedError,
    ExecutionTimeoutError,
    FlagOption,
    ListOption,
    Option,
    Options,
    OutputOption,
    ProcessRunner,
    ProcessStartError,
    SolcRegistry,
    SolcRunnerError,
    SolcTool,
    SolidityCompiler,
    UnsupportedValueTypeError,
    UnsupportedVersionError,
    VersionQueryError,
    compile_source,
    get_version,
)
from solc_runner.data import CommandSpec, Result
from solc_runner.logging import configure_logging, get_logger

__all__ = [
    # Entry points
    "SolidityCompiler",
    "compile_source",
    "get_version",
    "SUPPORTED_VERSIONS",
    # Building blocks
    "SolcRegistry",
    "SolcTool",
    "ProcessRunner",
    # Options
    "Option",
    "Options",
    "FlagOption",
    "OutputOption",
    "ListOption",
    "CustomOption",
    # Data types
    "CommandSpec",
    "Result",
    # Errors
    "SolcRunnerError",
    "UnsupportedVersionError",
    "UnsupportedValueTypeError",
    "ProcessStartError",
    "ExecutionInterruptedError",
    "ExecutionTimeoutError",
    "VersionQueryError",
    "configure_logging",
    "get_logger",
]
