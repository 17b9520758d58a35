"""
Subprocess runner — the single place where ``subprocess.run`` is called.

Runs commands without a shell, captures their output, and turns every
failure mode into a RunResult.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path

from podsync.adapters.base import ProcessRunner
from podsync.core.models.process import RunResult

logger = logging.getLogger(__name__)


class SubprocessRunner(ProcessRunner):
    """Run commands through ``subprocess.run``.

    Args:
        timeout: Seconds before a command is abandoned.  ``None`` waits
            for the process to exit on its own.
    """

    def __init__(self, timeout: float | None = None):
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "subprocess"

    def is_available(self, executable: str) -> bool:
        return shutil.which(executable) is not None

    def run(
        self,
        cmd: list[str],
        *,
        cwd: Path | str | None = None,
        env_overrides: dict[str, str] | None = None,
    ) -> RunResult:
        env = None
        if env_overrides:
            env = os.environ.copy()
            env.update(env_overrides)

        logger.debug("Executing: %s (cwd=%s)", " ".join(cmd), cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(
                cmd,
                cwd=str(cwd) if cwd is not None else None,
                env=env,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            return RunResult.launch_failure(
                f"Command timed out after {self._timeout}s",
                duration_ms=int((time.monotonic() - start) * 1000),
            )
        except OSError as e:
            # FileNotFoundError / PermissionError: executable missing or not runnable
            logger.debug("Could not launch %s: %s", cmd[0], e)
            return RunResult.launch_failure(f"Cannot run {cmd[0]}: {e}")

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("%s exited with %d after %dms", cmd[0], result.returncode, elapsed_ms)

        return RunResult(
            exit_code=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            duration_ms=elapsed_ms,
        )
