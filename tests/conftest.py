"""
Shared test fixtures and configuration.
"""

import os
from pathlib import Path

import pytest

from podsync.adapters.mock import MockRunner
from podsync.core.config.loader import PodsSettings
from podsync.core.observability.reporter import Reporter


class CapturingReporter(Reporter):
    """Reporter that keeps every line it would print."""

    def __init__(self, verbose: bool = False):
        self.lines: list[tuple[str, bool]] = []
        super().__init__(echo=lambda text, err: self.lines.append((text, err)), verbose=verbose)

    @property
    def output(self) -> str:
        return "\n".join(text for text, err in self.lines if not err)

    @property
    def errors(self) -> str:
        return "\n".join(text for text, err in self.lines if err)


@pytest.fixture
def mock_runner() -> MockRunner:
    """A runner where ``pod --version`` reports 1.5.3."""
    runner = MockRunner()
    runner.set_output(["pod", "--version"], stdout="1.5.3\n")
    return runner


@pytest.fixture
def reporter() -> CapturingReporter:
    return CapturingReporter()


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """A home directory where ``pod setup`` has already run."""
    home = tmp_path / "home"
    (home / ".cocoapods" / "repos" / "master").mkdir(parents=True)
    return home


@pytest.fixture
def settings(home_dir: Path) -> PodsSettings:
    return PodsSettings(home_dir=home_dir)


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """A Flutter app with an ``ios`` sub-project and a Podfile."""
    app = tmp_path / "app"
    ios = app / "ios"
    (ios / "Flutter").mkdir(parents=True)
    (ios / "Podfile").write_text("target 'Runner' do\nend\n")
    return app


@pytest.fixture
def ios_dir(app_dir: Path) -> Path:
    return app_dir / "ios"


LOCK_CONTENT = "PODS:\n  - Flutter (1.0.0)\n\nCOCOAPODS: 1.5.3\n"


def write_synced_locks(ios_dir: Path, content: str = LOCK_CONTENT) -> None:
    """Write Podfile.lock and Pods/Manifest.lock as a successful pod install would.

    Both lock files are stamped newer than the Podfile.
    """
    podfile_mtime = (ios_dir / "Podfile").stat().st_mtime
    lock = ios_dir / "Podfile.lock"
    manifest = ios_dir / "Pods" / "Manifest.lock"
    manifest.parent.mkdir(parents=True, exist_ok=True)
    lock.write_text(content)
    manifest.write_text(content)
    os.utime(lock, (podfile_mtime + 10, podfile_mtime + 10))
    os.utime(manifest, (podfile_mtime + 10, podfile_mtime + 10))


@pytest.fixture
def synced_ios_dir(ios_dir: Path) -> Path:
    """An ``ios`` directory whose pods are up to date."""
    write_synced_locks(ios_dir)
    return ios_dir
