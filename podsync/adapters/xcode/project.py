"""
Xcode project interpreter — read-only probes over ``xcodebuild``.

Answers two questions for the Podfile scaffolder: is Xcode usable on
this host, and what are the build settings of a project target.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from podsync.adapters.base import ProcessRunner

logger = logging.getLogger(__name__)

XCODEBUILD = "xcodebuild"

# "    SWIFT_VERSION = 4.0"
_SETTING_RE = re.compile(r"^\s*(\w+)\s*=\s*(.*)$")


def parse_build_settings(output: str) -> dict[str, str]:
    """Parse ``xcodebuild -showBuildSettings`` output into a mapping.

    Header lines ("Build settings for action build ...") are ignored.
    """
    settings: dict[str, str] = {}
    for line in output.splitlines():
        match = _SETTING_RE.match(line)
        if match:
            settings[match.group(1)] = match.group(2).strip()
    return settings


class XcodeProjectInterpreter:
    """Query Xcode projects through a ProcessRunner."""

    def __init__(self, runner: ProcessRunner):
        self._runner = runner
        self._installed: bool | None = None

    @property
    def is_installed(self) -> bool:
        """Whether ``xcodebuild -version`` succeeds on this host.

        Probed once per instance.
        """
        if self._installed is None:
            if not self._runner.is_available(XCODEBUILD):
                self._installed = False
            else:
                result = self._runner.run([XCODEBUILD, "-version"])
                self._installed = result.ok
                if result.ok:
                    logger.debug("Found %s", result.stdout.strip().split("\n")[0])
            logger.debug("xcodebuild installed: %s", self._installed)
        return self._installed

    def get_build_settings(self, project_path: Path | str, target: str) -> dict[str, str]:
        """Build settings of ``target`` in the ``.xcodeproj`` at ``project_path``.

        Returns an empty mapping when xcodebuild fails.
        """
        result = self._runner.run([
            XCODEBUILD,
            "-project",
            str(project_path),
            "-target",
            target,
            "-showBuildSettings",
        ])
        if not result.ok:
            logger.warning(
                "Could not read build settings of %s (%s): %s",
                project_path, target, result.error or result.stderr.strip(),
            )
            return {}
        return parse_build_settings(result.stdout)
