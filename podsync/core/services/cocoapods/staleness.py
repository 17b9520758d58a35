"""
Pod install staleness check.

``pod install`` is slow, so it only runs when one of these holds:

1. Flutter dependencies have changed
2. Podfile.lock doesn't exist or is older than Podfile
3. Pods/Manifest.lock doesn't exist (it is deleted when plugins change)
4. Podfile.lock doesn't match Pods/Manifest.lock
"""

from __future__ import annotations

import logging
from pathlib import Path

from podsync.core.models.pods import IosLayout

logger = logging.getLogger(__name__)


def should_run_pod_install(ios_dir: Path, dependencies_changed: bool) -> bool:
    """Decide whether ``pod install`` must run for ``ios_dir``."""
    if dependencies_changed:
        return True

    layout = IosLayout(ios_dir=ios_dir)
    reason = _stale_reason(layout)
    if reason:
        logger.debug("pod install needed: %s", reason)
        return True
    logger.debug("Pods are up to date in %s", ios_dir)
    return False


def _stale_reason(layout: IosLayout) -> str | None:
    if not layout.podfile_lock.is_file():
        return "Podfile.lock missing"
    if not layout.manifest_lock.is_file():
        return "Pods/Manifest.lock missing"
    if (
        layout.podfile.is_file()
        and layout.podfile_lock.stat().st_mtime < layout.podfile.stat().st_mtime
    ):
        return "Podfile.lock older than Podfile"
    if layout.podfile_lock.read_bytes() != layout.manifest_lock.read_bytes():
        return "Podfile.lock differs from Pods/Manifest.lock"
    return None
