"""
External process invocation.

Runs tools such as the NuGet restore with a hard wall-clock timeout. A stuck tool
only delays the step: on timeout the child is left to finish on its own and the
call returns. Nothing here raises; failures are logged and reported as results.
"""

from __future__ import annotations

import subprocess
import time
from collections.abc import Sequence
from pathlib import Path

from ..core.exceptions import SubprocessFailureError
from ..core.logging import get_logger
from ..core.types import StepResult

logger = get_logger(__name__)


class ProcessRunner:
    """Bounded-timeout invocation of external executables."""

    STEP = "run_process"

    def __init__(self, default_timeout_seconds: float = 600) -> None:
        """Initialize the runner.

        Args:
            default_timeout_seconds: Timeout used when a call does not pass one
        """
        self.default_timeout_seconds = default_timeout_seconds

    def run(
        self,
        command: str | Path,
        arguments: Sequence[str] = (),
        timeout_seconds: float | None = None,
        cwd: Path | None = None,
    ) -> StepResult:
        """Run ``command`` with ``arguments`` and wait at most ``timeout_seconds``.

        Args:
            command: Executable to launch.
            arguments: Arguments passed verbatim, without a shell.
            timeout_seconds: Wall-clock limit; defaults to the runner's default.
            cwd: Working directory for the child.

        Returns:
            StepResult: ``applied`` on exit code 0, ``warned`` on timeout,
            ``failed`` on launch failure or non-zero exit.
        """
        timeout = self.default_timeout_seconds if timeout_seconds is None else timeout_seconds
        cmd = [str(command), *arguments]
        cmd_str = " ".join(cmd)
        logger.info("Running command", command=cmd_str, timeout=timeout)

        start = time.perf_counter()
        try:
            process = subprocess.Popen(
                cmd,
                cwd=cwd,
                stdin=subprocess.DEVNULL,
            )
        except OSError as e:
            error = SubprocessFailureError(message="failed to launch", command=cmd_str, cause=e)
            logger.exception("Command failed to launch", command=cmd_str, error=str(error))
            return StepResult.failed(self.STEP, str(error), command=cmd_str)

        try:
            returncode = process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            error = SubprocessFailureError(
                message=f"no exit after {timeout}s, leaving it running",
                command=cmd_str,
                timed_out=True,
            )
            logger.warning("Command timed out", command=cmd_str, pid=process.pid, timeout=timeout)
            return StepResult.warned(self.STEP, str(error), command=cmd_str, pid=process.pid)

        duration_ms = (time.perf_counter() - start) * 1000
        if returncode != 0:
            error = SubprocessFailureError(
                message="command exited with an error",
                command=cmd_str,
                returncode=returncode,
            )
            logger.error("Command failed", command=cmd_str, returncode=returncode)
            return StepResult.failed(self.STEP, str(error), command=cmd_str, returncode=returncode)

        logger.info("Command finished", command=cmd_str, duration_ms=round(duration_ms, 1))
        return StepResult.applied(self.STEP, command=cmd_str, returncode=returncode)
