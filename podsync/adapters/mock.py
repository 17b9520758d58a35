"""
Mock runner — scripted test double for subprocess invocations.

Used in tests to simulate ``pod`` and ``xcodebuild`` without touching
real tools.  Responses are keyed by the command's argument list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from podsync.adapters.base import ProcessRunner
from podsync.core.models.process import RunResult


@dataclass
class RecordedCall:
    """One invocation received by the mock."""

    cmd: list[str]
    cwd: Path | str | None = None
    env_overrides: dict[str, str] = field(default_factory=dict)


class MockRunner(ProcessRunner):
    """Universal mock runner for testing.

    By default, every command exits 0 with empty output.  Executables
    listed in ``missing`` behave as if absent from the search path.
    """

    def __init__(self, missing: tuple[str, ...] = ()):
        self._missing = set(missing)
        self._responses: dict[tuple[str, ...], RunResult] = {}
        self._call_log: list[RecordedCall] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[RecordedCall]:
        """All calls this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times run has been called."""
        return len(self._call_log)

    def calls_to(self, *prefix: str) -> list[RecordedCall]:
        """Recorded calls whose command starts with ``prefix``."""
        return [c for c in self._call_log if tuple(c.cmd[: len(prefix)]) == prefix]

    def is_available(self, executable: str) -> bool:
        return executable not in self._missing

    def set_response(self, cmd: list[str], result: RunResult) -> None:
        """Set a custom response for an exact command."""
        self._responses[tuple(cmd)] = result

    def set_output(self, cmd: list[str], stdout: str = "", stderr: str = "", exit_code: int = 0) -> None:
        """Configure a command to exit with ``exit_code`` and the given output."""
        self.set_response(cmd, RunResult(exit_code=exit_code, stdout=stdout, stderr=stderr))

    def run(
        self,
        cmd: list[str],
        *,
        cwd: Path | str | None = None,
        env_overrides: dict[str, str] | None = None,
    ) -> RunResult:
        self._call_log.append(RecordedCall(list(cmd), cwd, dict(env_overrides or {})))

        if cmd and cmd[0] in self._missing:
            return RunResult.launch_failure(f"Cannot run {cmd[0]}: not found")

        if tuple(cmd) in self._responses:
            return self._responses[tuple(cmd)]

        return RunResult(exit_code=0)

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()
