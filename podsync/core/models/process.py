"""
RunResult — the subprocess execution contract.

Runners return a RunResult for every invocation, including the ones
that never got as far as starting a process.  Callers inspect the
result; runners never raise for external failures.
"""

from __future__ import annotations

from pydantic import BaseModel

# Exit code reported when the executable could not be launched at all
LAUNCH_FAILURE_EXIT_CODE = 127


class RunResult(BaseModel):
    """Outcome of one subprocess invocation."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    error: str | None = None        # launch/timeout failure, None if the process ran
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        """Whether the process ran and exited with status 0."""
        return self.error is None and self.exit_code == 0

    @classmethod
    def launch_failure(cls, error: str, **kwargs) -> RunResult:
        """Create a result for a process that could not be started."""
        return cls(exit_code=LAUNCH_FAILURE_EXIT_CODE, error=error, **kwargs)
