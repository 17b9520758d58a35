"""
Podfile scaffolding for the ``ios`` sub-project of a Flutter app.

Creates ``ios/Podfile`` from a bundled template when it is missing and
makes the Flutter build-mode xcconfig files include the configuration
that ``pod install`` generates.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from podsync.adapters.xcode.project import XcodeProjectInterpreter
from podsync.core.models.pods import IosLayout

logger = logging.getLogger(__name__)

BUILD_MODES = ("Debug", "Release")

RUNNER_TARGET = "Runner"

# Build setting present only in Swift projects
SWIFT_SETTING = "SWIFT_VERSION"

# Bundled templates: podsync/templates/cocoapods/Podfile-{swift,objc}
DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[3] / "templates"


class PodfileError(Exception):
    """Raised when a Podfile template cannot be found."""


def pods_include_line(mode: str) -> str:
    """The ``#include`` that pulls pods settings into ``Flutter/<mode>.xcconfig``."""
    return f'#include "Pods/Target Support Files/Pods-Runner/Pods-Runner.{mode.lower()}.xcconfig"'


def invalidate_manifest(ios_dir: Path) -> bool:
    """Delete ``Pods/Manifest.lock`` under ``ios_dir`` so pod install runs next time.

    Returns:
        True if the manifest existed and was deleted.
    """
    manifest = IosLayout(ios_dir=ios_dir).manifest_lock
    if manifest.exists():
        manifest.unlink()
        logger.debug("Deleted %s", manifest)
        return True
    return False


def invalidate_pod_install_output(app_dir: Path) -> bool:
    """Make sure pod install is deemed needed on the next check of ``app_dir/ios``."""
    return invalidate_manifest(IosLayout.for_app(app_dir).ios_dir)


class PodfileScaffolder:
    """Ensure a Flutter app's ``ios`` directory is wired up for CocoaPods.

    Args:
        xcode: Used to detect whether the host supports iOS and whether
            the Runner project is written in Swift.
        templates_dir: Root holding ``cocoapods/Podfile-swift`` and
            ``cocoapods/Podfile-objc``.
    """

    def __init__(self, xcode: XcodeProjectInterpreter, templates_dir: Path | None = None):
        self._xcode = xcode
        self._templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR

    def template_for(self, is_swift: bool) -> Path:
        name = "Podfile-swift" if is_swift else "Podfile-objc"
        return self._templates_dir / "cocoapods" / name

    def setup_podfile(self, app_dir: Path) -> bool:
        """Ensure ``ios/Podfile`` exists and the xcconfig files include pods.

        Does nothing when the host cannot build for iOS.

        Returns:
            True if a new Podfile was written.

        Raises:
            PodfileError: If the selected template is missing.
        """
        if not self._xcode.is_installed:
            logger.debug("Xcode not installed, skipping Podfile setup")
            return False

        layout = IosLayout.for_app(app_dir)
        created = False
        if not layout.podfile.exists():
            settings = self._xcode.get_build_settings(layout.xcodeproj, RUNNER_TARGET)
            is_swift = SWIFT_SETTING in settings
            template = self.template_for(is_swift)
            if not template.is_file():
                raise PodfileError(f"Podfile template not found: {template}")
            shutil.copyfile(template, layout.podfile)
            logger.info("Created %s from %s", layout.podfile, template.name)
            created = True

        for mode in BUILD_MODES:
            self.add_pods_dependency_to_xcconfig(app_dir, mode)
        return created

    def add_pods_dependency_to_xcconfig(self, app_dir: Path, mode: str) -> bool:
        """Prepend the pods include to ``Flutter/<mode>.xcconfig`` if missing.

        Returns:
            True if the file was changed.
        """
        xcconfig = IosLayout.for_app(app_dir).xcconfig(mode)
        if not xcconfig.exists():
            return False

        content = xcconfig.read_text(encoding="utf-8")
        include = pods_include_line(mode)
        if include in content:
            return False

        with xcconfig.open("w", encoding="utf-8") as fh:
            fh.write(f"{include}\n{content}")
            fh.flush()
        logger.debug("Added pods include to %s", xcconfig)
        return True
