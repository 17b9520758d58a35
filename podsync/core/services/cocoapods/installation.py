"""
CocoaPods installation probe.

Read-only: runs ``pod --version`` once per instance, classifies the
result against the minimum and recommended versions, and checks for
the specs repo that ``pod setup`` clones.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from packaging.version import InvalidVersion, Version

from podsync.adapters.base import ProcessRunner
from podsync.core.config.loader import CocoaPodsSettings
from podsync.core.models.pods import CocoaPodsStatus

logger = logging.getLogger(__name__)

_UNSET = object()


def classify_version(
    version_text: str | None,
    minimum_version: str,
    recommended_version: str,
) -> CocoaPodsStatus:
    """Map a ``pod --version`` string onto an installation tier.

    Absent or unparsable text counts as not installed.
    """
    if version_text is None:
        return CocoaPodsStatus.NOT_INSTALLED
    try:
        installed = Version(version_text)
    except InvalidVersion:
        logger.debug("Unparsable CocoaPods version %r", version_text)
        return CocoaPodsStatus.NOT_INSTALLED

    if installed < Version(minimum_version):
        return CocoaPodsStatus.BELOW_MINIMUM_VERSION
    if installed < Version(recommended_version):
        return CocoaPodsStatus.BELOW_RECOMMENDED_VERSION
    return CocoaPodsStatus.RECOMMENDED


class CocoaPodsInstallation:
    """Probe the local CocoaPods installation.

    Args:
        runner: Used for ``pod --version``.
        settings: Executable name and version thresholds.
        home_dir: Home directory holding ``.cocoapods``.
    """

    def __init__(self, runner: ProcessRunner, settings: CocoaPodsSettings, home_dir: Path):
        self._runner = runner
        self._settings = settings
        self._home_dir = home_dir
        self._lock = threading.Lock()
        self._version_text: str | None | object = _UNSET

    @property
    def minimum_version(self) -> str:
        return self._settings.minimum_version

    @property
    def recommended_version(self) -> str:
        return self._settings.recommended_version

    @property
    def specs_repo_dir(self) -> Path:
        """Directory created by ``pod setup``."""
        return self._home_dir / ".cocoapods" / "repos" / "master"

    def version_text(self) -> str | None:
        """Trimmed output of ``pod --version``, or None if it failed.

        The first caller runs the command; every later or concurrent
        caller gets the same value.
        """
        with self._lock:
            if self._version_text is _UNSET:
                self._version_text = self._query_version()
            else:
                logger.debug("CocoaPods version cache hit")
        return self._version_text  # type: ignore[return-value]

    def _query_version(self) -> str | None:
        result = self._runner.run([self._settings.executable, "--version"])
        if not result.ok:
            logger.debug(
                "%s --version failed (exit %d): %s",
                self._settings.executable, result.exit_code, result.error or result.stderr.strip(),
            )
            return None
        return result.stdout.strip()

    def evaluate_installation(self) -> CocoaPodsStatus:
        """Classify the installed CocoaPods version."""
        status = classify_version(
            self.version_text(),
            self._settings.minimum_version,
            self._settings.recommended_version,
        )
        logger.debug("CocoaPods installation: %s", status.value)
        return status

    def is_initialized(self) -> bool:
        """Whether ``pod setup`` ran once and cloned the specs repo."""
        return self.specs_repo_dir.is_dir()
