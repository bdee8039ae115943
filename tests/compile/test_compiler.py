import json
import os
import sys
import threading
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from solc_runner.compile import (
    CustomOption,
    ExecutionInterruptedError,
    Options,
    ProcessRunner,
    ProcessStartError,
    SolcTool,
    SolidityCompiler,
    UnsupportedVersionError,
    VersionQueryError,
    compile_source,
    get_default_compiler,
    get_version,
)
from solc_runner.compile.registry import SolcRegistry
from solc_runner.data import Result

pytestmark = pytest.mark.requires_posix

_VALID_SOURCE = b"pragma solidity >=0.6.0;\ncontract Empty {}\n"


def _report(result: Result) -> dict:
    return json.loads(result.output.splitlines()[0])


def test_compile_valid_source(fake_solc_home: Path):
    result = SolidityCompiler().compile(_VALID_SOURCE, "0.8", True, Options.ABI, Options.BIN)
    assert result.success
    assert result.output
    report = _report(result)
    assert report["argv"] == ["--combined-json", "abi,bin", "-"]
    assert report["source_length"] == len(_VALID_SOURCE)


def test_compile_invalid_source(fake_solc_home: Path):
    result = SolidityCompiler().compile(b"invalid contract", "0.7", True, Options.ABI)
    assert result.is_failed()
    assert result.errors
    assert "ParserError" in result.errors


def test_compile_runs_in_executable_directory(fake_solc_home: Path):
    result = SolidityCompiler().compile(_VALID_SOURCE, "0.6")
    report = _report(result)
    expected = str((fake_solc_home / "0.6").resolve())
    assert report["cwd"] == expected
    assert report["library_path"] == expected


def test_compile_accepts_text_source(fake_solc_home: Path):
    source = "contract Größe {}\n"
    result = SolidityCompiler().compile(source, "0.8")
    assert _report(result)["source_length"] == len(source)


def test_compile_does_not_optimize_by_default(fake_solc_home: Path):
    result = SolidityCompiler().compile(_VALID_SOURCE, "0.8", False, Options.BIN)
    assert _report(result)["argv"] == ["--bin", "-"]


def test_compile_with_optimize(fake_solc_home: Path):
    result = SolidityCompiler().compile(_VALID_SOURCE, "0.8", False, Options.BIN, optimize=True)
    assert _report(result)["argv"] == ["--optimize", "--bin", "-"]


def test_compile_with_all_option_kinds(fake_solc_home: Path, tmp_path: Path):
    options = [
        Options.ABI,
        Options.allow_paths([tmp_path, "/vendor"]),
        CustomOption("--evm-version", "paris"),
    ]
    result = SolidityCompiler().compile(_VALID_SOURCE, "0.8", False, *options)
    assert _report(result)["argv"] == [
        "--abi",
        "--allow-paths",
        f"{os.path.abspath(tmp_path)},/vendor",
        "--evm-version",
        "paris",
        "-",
    ]


def test_compile_unsupported_version_spawns_nothing():
    runner = MagicMock(spec=ProcessRunner)
    compiler = SolidityCompiler(registry=SolcRegistry(), runner=runner)
    with pytest.raises(UnsupportedVersionError):
        compiler.compile(_VALID_SOURCE, "0.5")
    runner.execute.assert_not_called()


def test_compile_missing_installation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SOLC_RUNNER_HOME", str(tmp_path / "nowhere"))
    monkeypatch.delenv("SOLC_RUNNER_SOLC_0_8", raising=False)
    with pytest.raises(ProcessStartError):
        SolidityCompiler(registry=SolcRegistry()).compile(_VALID_SOURCE, "0.8")


def test_compile_uses_injected_collaborators(tmp_path: Path):
    tool = SolcTool("0.8", tmp_path / "solc")
    registry = MagicMock(spec=SolcRegistry)
    registry.resolve.return_value = tool
    runner = MagicMock(spec=ProcessRunner)
    runner.execute.return_value = Result(output="ok\n", success=True, returncode=0)

    result = SolidityCompiler(registry=registry, runner=runner).compile(b"src", "0.8", True)

    assert result.output == "ok\n"
    registry.resolve.assert_called_once_with("0.8")
    spec, stdin = runner.execute.call_args.args
    assert spec.argv == [tool.executable, "--combined-json", "", "-"]
    assert stdin == b"src"


def test_get_version(fake_solc_home: Path):
    text = SolidityCompiler().get_version("0.7")
    assert "Version: 0.7.0" in text


def test_get_version_unsupported_spawns_nothing():
    runner = MagicMock(spec=ProcessRunner)
    with pytest.raises(UnsupportedVersionError):
        SolidityCompiler(registry=SolcRegistry(), runner=runner).get_version("1.0")
    runner.execute.assert_not_called()


def test_get_version_failure_carries_stderr(tmp_path: Path, make_fake_solc):
    path = make_fake_solc(tmp_path / "broken" / "solc", "broken")
    registry = SolcRegistry(tool_factory=lambda version: SolcTool(version, path))
    with pytest.raises(VersionQueryError) as exc_info:
        SolidityCompiler(registry=registry).get_version("0.8")
    assert "cannot determine version" in exc_info.value.stderr
    assert exc_info.value.version == "0.8"


def test_available_versions(fake_solc_home: Path):
    assert SolidityCompiler().available_versions() == ["0.6", "0.7", "0.8"]
    os.remove(fake_solc_home / "0.7" / "solc")
    assert SolidityCompiler(registry=SolcRegistry()).available_versions() == ["0.6", "0.8"]


def test_module_level_entry_points(fake_solc_home: Path):
    assert get_default_compiler() is get_default_compiler()
    assert get_default_compiler().registry is SolcRegistry.get_instance()
    result = compile_source(_VALID_SOURCE, "0.8", True, Options.BIN)
    assert result.success
    assert "Version: 0.8.0" in get_version("0.8")


def test_cancellation_does_not_corrupt_shared_cache(fake_solc_home: Path):
    compiler = SolidityCompiler()
    tool_before = compiler.registry.resolve("0.8")
    cancel = threading.Event()
    timer = threading.Timer(0.2, cancel.set)
    timer.start()
    try:
        with pytest.raises(ExecutionInterruptedError):
            compiler.compile(
                _VALID_SOURCE, "0.8", False, CustomOption("sleep", "30"), cancel_event=cancel
            )
    finally:
        timer.cancel()

    assert compiler.registry.resolve("0.8") is tool_before
    assert compiler.compile(_VALID_SOURCE, "0.8").success
    assert compiler.compile(_VALID_SOURCE, "0.6").success


def test_concurrent_compiles_share_one_tool(fake_solc_home: Path):
    created = []
    lock = threading.Lock()

    def factory(version: str) -> SolcTool:
        with lock:
            created.append(version)
        return SolcTool(version)

    compiler = SolidityCompiler(registry=SolcRegistry(tool_factory=factory))
    results = []

    def worker() -> None:
        results.append(compiler.compile(_VALID_SOURCE, "0.8", True, Options.ABI))

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert created == ["0.8"]
    assert len(results) == 6
    assert all(r.success for r in results)


@pytest.mark.requires_solc
def test_real_solc_compiles_minimal_contract():
    source = b"// SPDX-License-Identifier: MIT\npragma solidity ^0.8.0;\ncontract Empty {}\n"
    result = SolidityCompiler().compile(source, "0.8", True, Options.ABI, Options.BIN)
    assert result.success, result.errors
    assert "Empty" in result.output


@pytest.mark.requires_solc
def test_real_solc_reports_syntax_errors():
    result = SolidityCompiler().compile(b"contract {", "0.8", True, Options.ABI)
    assert result.is_failed()
    assert "Error" in result.errors


@pytest.mark.requires_solc
def test_real_solc_version():
    assert "Version: 0.8" in SolidityCompiler().get_version("0.8")


if __name__ == "__main__":
    pytest.main(sys.argv)
