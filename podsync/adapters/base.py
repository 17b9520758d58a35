"""
Runner base — the contract between services and external processes.

Services never call ``subprocess`` directly.  They receive a
ProcessRunner and get a RunResult back for every command.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from podsync.core.models.process import RunResult


class ProcessRunner(ABC):
    """Abstract base class for subprocess runners.

    Runners perform external side effects and return results.
    They NEVER raise for process failures — a missing executable,
    a timeout, or a non-zero exit all end up in the RunResult.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The runner identifier (e.g., 'subprocess', 'mock')."""

    @abstractmethod
    def is_available(self, executable: str) -> bool:
        """Check whether ``executable`` can be found on the search path.

        Should be fast and never raise.
        """

    @abstractmethod
    def run(
        self,
        cmd: list[str],
        *,
        cwd: Path | str | None = None,
        env_overrides: dict[str, str] | None = None,
    ) -> RunResult:
        """Run ``cmd`` to completion and capture its output.

        Args:
            cmd: Command and arguments, no shell interpretation.
            cwd: Working directory for the process.
            env_overrides: Variables added on top of the current environment.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
