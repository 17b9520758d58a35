"""
Tests for Podfile scaffolding, xcconfig includes, and invalidation.
"""

from pathlib import Path

import pytest

from podsync.adapters.mock import MockRunner
from podsync.adapters.xcode.project import XcodeProjectInterpreter
from podsync.core.services.cocoapods.podfile import (
    DEFAULT_TEMPLATES_DIR,
    PodfileError,
    PodfileScaffolder,
    invalidate_manifest,
    invalidate_pod_install_output,
    pods_include_line,
)

SHOW_SETTINGS = [
    "xcodebuild",
    "-project",
    None,  # filled per app
    "-target",
    "Runner",
    "-showBuildSettings",
]

SWIFT_SETTINGS = """\
Build settings for action build and target Runner:
    PRODUCT_NAME = Runner
    SWIFT_VERSION = 4.0
"""

OBJC_SETTINGS = """\
Build settings for action build and target Runner:
    PRODUCT_NAME = Runner
    CLANG_ENABLE_MODULES = YES
"""


@pytest.fixture
def new_app(tmp_path: Path) -> Path:
    """A Flutter app whose ``ios`` directory has no Podfile yet."""
    app = tmp_path / "fresh"
    (app / "ios" / "Flutter").mkdir(parents=True)
    (app / "ios" / "Flutter" / "Debug.xcconfig").write_text('#include "Generated.xcconfig"\n')
    (app / "ios" / "Flutter" / "Release.xcconfig").write_text('#include "Generated.xcconfig"\n')
    return app


def _xcode_runner(app: Path, settings_output: str) -> MockRunner:
    runner = MockRunner()
    runner.set_output(["xcodebuild", "-version"], stdout="Xcode 9.4\nBuild version 9F1027a\n")
    cmd = list(SHOW_SETTINGS)
    cmd[2] = str(app / "ios" / "Runner.xcodeproj")
    runner.set_output(cmd, stdout=settings_output)
    return runner


def _scaffolder(runner: MockRunner, templates_dir: Path | None = None) -> PodfileScaffolder:
    return PodfileScaffolder(XcodeProjectInterpreter(runner), templates_dir)


class TestSetupPodfile:
    def test_swift_template(self, new_app):
        created = _scaffolder(_xcode_runner(new_app, SWIFT_SETTINGS)).setup_podfile(new_app)
        podfile = new_app / "ios" / "Podfile"
        assert created
        assert podfile.read_text() == (
            DEFAULT_TEMPLATES_DIR / "cocoapods" / "Podfile-swift"
        ).read_text()
        assert "use_frameworks!" in podfile.read_text()

    def test_objc_template(self, new_app):
        _scaffolder(_xcode_runner(new_app, OBJC_SETTINGS)).setup_podfile(new_app)
        podfile = new_app / "ios" / "Podfile"
        assert podfile.read_text() == (
            DEFAULT_TEMPLATES_DIR / "cocoapods" / "Podfile-objc"
        ).read_text()
        assert "use_frameworks!" not in podfile.read_text()

    def test_unreadable_settings_fall_back_to_objc(self, new_app):
        runner = MockRunner()
        runner.set_output(["xcodebuild", "-version"], stdout="Xcode 9.4")
        # Any other xcodebuild call fails
        cmd = list(SHOW_SETTINGS)
        cmd[2] = str(new_app / "ios" / "Runner.xcodeproj")
        runner.set_output(cmd, stderr="error: project not found", exit_code=66)
        _scaffolder(runner).setup_podfile(new_app)
        assert "use_frameworks!" not in (new_app / "ios" / "Podfile").read_text()

    def test_existing_podfile_kept(self, new_app):
        podfile = new_app / "ios" / "Podfile"
        podfile.write_text("# custom\n")
        runner = _xcode_runner(new_app, SWIFT_SETTINGS)
        created = _scaffolder(runner).setup_podfile(new_app)
        assert not created
        assert podfile.read_text() == "# custom\n"
        assert runner.calls_to("xcodebuild", "-project") == []

    def test_no_xcode_does_nothing(self, new_app):
        runner = MockRunner(missing=("xcodebuild",))
        created = _scaffolder(runner).setup_podfile(new_app)
        assert not created
        assert not (new_app / "ios" / "Podfile").exists()
        debug = (new_app / "ios" / "Flutter" / "Debug.xcconfig").read_text()
        assert "Pods-Runner" not in debug

    def test_xcodebuild_failing_counts_as_not_installed(self, new_app):
        runner = MockRunner()
        runner.set_output(["xcodebuild", "-version"], stderr="requires Xcode", exit_code=1)
        assert not _scaffolder(runner).setup_podfile(new_app)
        assert not (new_app / "ios" / "Podfile").exists()

    def test_custom_templates_dir(self, new_app, tmp_path):
        templates = tmp_path / "templates"
        (templates / "cocoapods").mkdir(parents=True)
        (templates / "cocoapods" / "Podfile-objc").write_text("# objc template\n")
        _scaffolder(_xcode_runner(new_app, OBJC_SETTINGS), templates).setup_podfile(new_app)
        assert (new_app / "ios" / "Podfile").read_text() == "# objc template\n"

    def test_missing_template_raises(self, new_app, tmp_path):
        with pytest.raises(PodfileError, match="Podfile-swift"):
            _scaffolder(
                _xcode_runner(new_app, SWIFT_SETTINGS), tmp_path / "nowhere"
            ).setup_podfile(new_app)


class TestXcconfigIncludes:
    def test_includes_prepended(self, new_app):
        _scaffolder(_xcode_runner(new_app, OBJC_SETTINGS)).setup_podfile(new_app)
        flutter = new_app / "ios" / "Flutter"
        assert (flutter / "Debug.xcconfig").read_text() == (
            '#include "Pods/Target Support Files/Pods-Runner/Pods-Runner.debug.xcconfig"\n'
            '#include "Generated.xcconfig"\n'
        )
        assert (flutter / "Release.xcconfig").read_text().startswith(
            '#include "Pods/Target Support Files/Pods-Runner/Pods-Runner.release.xcconfig"\n'
        )

    def test_idempotent(self, new_app):
        scaffolder = _scaffolder(_xcode_runner(new_app, OBJC_SETTINGS))
        scaffolder.setup_podfile(new_app)
        podfile_before = (new_app / "ios" / "Podfile").read_text()
        scaffolder.setup_podfile(new_app)
        debug = (new_app / "ios" / "Flutter" / "Debug.xcconfig").read_text()
        assert debug.count(pods_include_line("Debug")) == 1
        assert (new_app / "ios" / "Podfile").read_text() == podfile_before

    def test_include_found_anywhere_in_file(self, new_app):
        scaffolder = _scaffolder(_xcode_runner(new_app, OBJC_SETTINGS))
        debug = new_app / "ios" / "Flutter" / "Debug.xcconfig"
        content = f'#include "Generated.xcconfig"\n{pods_include_line("Debug")}  // kept\n'
        debug.write_text(content)
        assert not scaffolder.add_pods_dependency_to_xcconfig(new_app, "Debug")
        assert debug.read_text() == content

    def test_missing_xcconfig_skipped(self, new_app):
        (new_app / "ios" / "Flutter" / "Release.xcconfig").unlink()
        scaffolder = _scaffolder(_xcode_runner(new_app, OBJC_SETTINGS))
        assert not scaffolder.add_pods_dependency_to_xcconfig(new_app, "Release")
        assert not (new_app / "ios" / "Flutter" / "Release.xcconfig").exists()

    def test_include_line(self):
        assert pods_include_line("Release") == (
            '#include "Pods/Target Support Files/Pods-Runner/Pods-Runner.release.xcconfig"'
        )


class TestInvalidate:
    def test_deletes_manifest(self, app_dir):
        manifest = app_dir / "ios" / "Pods" / "Manifest.lock"
        manifest.parent.mkdir(parents=True)
        manifest.write_text("PODS: []\n")
        assert invalidate_pod_install_output(app_dir)
        assert not manifest.exists()

    def test_missing_manifest_is_noop(self, app_dir):
        assert not invalidate_pod_install_output(app_dir)

    def test_manifest_under_any_directory_name(self, tmp_path):
        manifest = tmp_path / "platform_ios" / "Pods" / "Manifest.lock"
        manifest.parent.mkdir(parents=True)
        manifest.write_text("PODS: []\n")
        assert invalidate_manifest(tmp_path / "platform_ios")
        assert not manifest.exists()
