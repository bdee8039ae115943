"""Running solc as a child process.

The child gets pipes for stdin, stdout and stderr. Writing all of the source and only then
reading the output deadlocks as soon as the child fills an output pipe before consuming all
of its input, so both output streams are drained by their own worker while a third worker
feeds the source. The calling thread waits for the child to exit and for the workers to
finish, checking for cancellation and the deadline throughout.
"""

from __future__ import annotations

import io
import os
import signal
import subprocess
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from typing import IO, List, Optional

from solc_runner.data import CommandSpec, Result
from solc_runner.env import get_solc_runner_timeout
from solc_runner.logging import get_logger

from .errors import ExecutionInterruptedError, ExecutionTimeoutError, ProcessStartError

logger = get_logger("ProcessRunner")

_NEW_SESSION = os.name == "posix"
"""Start each child in a new session so it can be killed together with its descendants."""


def _drain(stream: IO[bytes]) -> str:
    """Read a stream to end-of-file. Every line, including an unterminated last one, ends
    with a single ``\\n``."""
    lines = []
    with io.TextIOWrapper(stream, encoding="utf-8", errors="replace") as reader:
        for line in reader:
            lines.append(line if line.endswith("\n") else line + "\n")
    return "".join(lines)


def _feed(stream: IO[bytes], payload: bytes) -> None:
    """Write the whole payload and close the stream to signal end of input."""
    try:
        with stream:
            if payload:
                stream.write(payload)
    except BrokenPipeError:
        # The child exited or closed its stdin without reading everything.
        logger.debug("solc closed its standard input before the source was fully written")


def _kill(process: subprocess.Popen) -> None:
    """Kill the child and everything it started, then reap it.

    On POSIX the child leads its own process group, so descendants that inherited the output
    pipes die too and the drain workers reach end-of-file.
    """
    if _NEW_SESSION:
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            # Nothing left to signal, at most the unreaped child itself.
            pass
    elif process.poll() is None:
        process.kill()
    process.wait()


class ProcessRunner:
    """Executes CommandSpecs and captures their output into a Result.

    A runner holds no per-invocation state, so one instance can serve concurrent calls; each
    call owns its own child process, pipes and worker threads.
    """

    def __init__(self, timeout: Optional[float] = None, poll_interval: float = 0.05) -> None:
        """Initialize the runner.

        Parameters
        ----------
        timeout : Optional[float]
            Default timeout in seconds for each invocation. Default is ``SOLC_RUNNER_TIMEOUT``,
            or no timeout when that is unset.
        poll_interval : float
            How often, in seconds, a waiting call checks its cancel event and deadline.
        """
        self._timeout = timeout if timeout is not None else get_solc_runner_timeout()
        self._poll_interval = poll_interval

    def execute(
        self,
        spec: CommandSpec,
        stdin: bytes = b"",
        *,
        cancel_event: Optional[threading.Event] = None,
        timeout: Optional[float] = None,
    ) -> Result:
        """Run a command to completion.

        Parameters
        ----------
        spec : CommandSpec
            The command, working directory and environment additions.
        stdin : bytes
            The payload written to the child's standard input, which is then closed.
        cancel_event : Optional[threading.Event]
            Setting this event from another thread kills the child and aborts the call. The
            event is left set.
        timeout : Optional[float]
            Overrides the runner's default timeout for this call.

        Returns
        -------
        Result
            The captured output. A non-zero exit yields ``success=False``; it is not raised.

        Raises
        ------
        ProcessStartError
            If the child cannot be spawned (missing executable, permission denied, ...).
        ExecutionInterruptedError
            If the call is cancelled through ``cancel_event`` or a KeyboardInterrupt while
            waiting. The KeyboardInterrupt is kept as ``__cause__``.
        ExecutionTimeoutError
            If the child runs longer than the timeout.
        """
        if timeout is None:
            timeout = self._timeout
        env = os.environ.copy()
        env.update(spec.env)

        logger.debug(f"Running {subprocess.list2cmdline(spec.argv)} in {spec.cwd}")
        try:
            process = subprocess.Popen(
                spec.argv,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=spec.cwd,
                env=env,
                start_new_session=_NEW_SESSION,
            )
        except OSError as e:
            logger.error(f"Failed to start {spec.executable}: {e}")
            raise ProcessStartError(f"Failed to start solc at '{spec.executable}': {e}") from e

        with process, ThreadPoolExecutor(max_workers=3, thread_name_prefix="solc-io") as pool:
            stdout_future = pool.submit(_drain, process.stdout)
            stderr_future = pool.submit(_drain, process.stderr)
            stdin_future = pool.submit(_feed, process.stdin, stdin)
            workers = [stdout_future, stderr_future, stdin_future]
            try:
                returncode = self._wait(process, workers, cancel_event, timeout)
            except BaseException:
                # Killing the child's process group closes every write end of the pipes,
                # which lets every worker finish.
                _kill(process)
                raise
            stdin_future.result()
            output = stdout_future.result()
            errors = stderr_future.result()

        logger.debug(f"{spec.executable} exited with status {returncode}")
        return Result(errors=errors, output=output, success=returncode == 0, returncode=returncode)

    def _wait(
        self,
        process: subprocess.Popen,
        workers: List[Future],
        cancel_event: Optional[threading.Event],
        timeout: Optional[float],
    ) -> int:
        """Wait for the child to exit and for the I/O workers to finish.

        A descendant of the child may keep the output pipes open after the child exits, so
        cancellation and the deadline are checked until the workers are done too.

        Returns
        -------
        int
            The child's exit status.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        try:
            if cancel_event is None and deadline is None:
                returncode = process.wait()
                wait_futures(workers)
                return returncode
            returncode = None
            while True:
                if cancel_event is not None and cancel_event.is_set():
                    logger.warning(f"Cancelled solc process {process.pid}")
                    raise ExecutionInterruptedError("solc invocation was cancelled")
                wait = self._poll_interval
                if deadline is not None:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        logger.warning(f"solc process {process.pid} timed out after {timeout}s")
                        raise ExecutionTimeoutError(f"solc did not finish within {timeout} seconds")
                    wait = min(wait, remaining)
                if returncode is None:
                    try:
                        returncode = process.wait(timeout=wait)
                    except subprocess.TimeoutExpired:
                        continue
                _, pending = wait_futures(workers, timeout=wait)
                if not pending:
                    return returncode
        except KeyboardInterrupt as e:
            logger.warning(f"Interrupted while waiting for solc process {process.pid}")
            raise ExecutionInterruptedError("Interrupted while waiting for solc") from e
