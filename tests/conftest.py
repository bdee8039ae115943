import stat
import sys
from pathlib import Path
from typing import List

import pytest

from solc_runner.compile import SUPPORTED_VERSIONS, SolcTool
from solc_runner.compile import compiler as compiler_module
from solc_runner.compile.registry import SolcRegistry

# A stand-in for solc. It understands a few extra switches so tests can drive its behavior:
#   --flood N   write N lines to stdout and stderr before reading any input
#   --sleep S   sleep S seconds before reading input
#   --echo      copy the source to stdout after the report line
# Sources containing "invalid" fail with a parser error on stderr.
_FAKE_SOLC = '''\
import json
import os
import sys
import time

VERSION = {version!r}


def main():
    args = sys.argv[1:]
    if "--version" in args:
        if VERSION == "broken":
            sys.stderr.write("solc: cannot determine version\\n")
            return 3
        sys.stdout.write("solc, the solidity compiler commandline interface\\n")
        sys.stdout.write("Version: " + VERSION + ".0+commit.deadbeef.Linux.g++\\n")
        return 0
    if args[-1:] != ["-"]:
        sys.stderr.write("No input files given.\\n")
        return 1
    if "--flood" in args:
        count = int(args[args.index("--flood") + 1])
        line = "x" * 99 + "\\n"
        for _ in range(count):
            sys.stdout.write(line)
            sys.stderr.write(line)
    if "--sleep" in args:
        time.sleep(float(args[args.index("--sleep") + 1]))
    source = sys.stdin.buffer.read().decode("utf-8")
    if "invalid" in source:
        sys.stderr.write("Error: ParserError: Expected pragma, import directive or contract\\n")
        return 1
    report = {{
        "argv": args,
        "cwd": os.getcwd(),
        "library_path": os.environ.get("LD_LIBRARY_PATH"),
        "source_length": len(source),
    }}
    sys.stdout.write(json.dumps(report) + "\\n")
    if "--echo" in args:
        sys.stdout.write(source)
    return 0


sys.exit(main())
'''


def write_fake_solc(path: Path, version: str) -> Path:
    """Write an executable fake solc to ``path`` and return it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!{sys.executable}\n" + _FAKE_SOLC.format(version=version))
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def _real_solc_available() -> bool:
    """Check if a real solc 0.8 installation can be resolved from the environment.

    Returns
    -------
    bool
        True if the executable exists and is executable, False otherwise.
    """
    return SolcTool("0.8").is_available()


def pytest_collection_modifyitems(config: pytest.Config, items: List[pytest.Item]) -> None:
    """Skip tests that need a real solc when none is installed, and process tests on Windows."""
    skip_solc = pytest.mark.skip(reason="solc 0.8 not installed, skip test")
    skip_posix = pytest.mark.skip(reason="fake solc executables need a POSIX shebang")
    real_solc = _real_solc_available()
    for item in items:
        if not real_solc and any(item.iter_markers(name="requires_solc")):
            item.add_marker(skip_solc)
        if sys.platform == "win32" and any(item.iter_markers(name="requires_posix")):
            item.add_marker(skip_posix)


@pytest.fixture(autouse=True)
def _isolate_shared_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give every test a fresh shared registry and default compiler."""
    monkeypatch.setattr(SolcRegistry, "_instance", None)
    monkeypatch.setattr(compiler_module, "_default_compiler", None)
    monkeypatch.delenv("SOLC_RUNNER_TIMEOUT", raising=False)


@pytest.fixture
def fake_solc_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Install a fake solc for every supported version under a temporary SOLC_RUNNER_HOME."""
    home = tmp_path / "solc"
    for version in SUPPORTED_VERSIONS:
        write_fake_solc(home / version / "solc", version)
        monkeypatch.delenv(f"SOLC_RUNNER_SOLC_{version.replace('.', '_')}", raising=False)
    monkeypatch.setenv("SOLC_RUNNER_HOME", str(home))
    return home


@pytest.fixture
def make_fake_solc():
    """Factory writing a fake solc executable: ``make_fake_solc(path, version) -> path``."""
    return write_fake_solc
