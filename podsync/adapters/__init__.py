"""Adapters — bindings for external tools.

Public re-exports for convenient access.
"""

from podsync.adapters.base import ProcessRunner
from podsync.adapters.mock import MockRunner
from podsync.adapters.shell.command import SubprocessRunner
from podsync.adapters.xcode.project import XcodeProjectInterpreter

__all__ = [
    "MockRunner",
    "ProcessRunner",
    "SubprocessRunner",
    "XcodeProjectInterpreter",
]
