"""
CocoaPods domain models — installation tiers, outcomes, and iOS layout.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel


class CocoaPodsStatus(str, Enum):
    """Result of evaluating the CocoaPods installation."""

    # iOS plugins will not work, installation required.
    NOT_INSTALLED = "not-installed"
    # iOS plugins will not work, upgrade required.
    BELOW_MINIMUM_VERSION = "below-minimum-version"
    # iOS plugins may not work in certain situations (Swift, static
    # libraries), upgrade recommended.
    BELOW_RECOMMENDED_VERSION = "below-recommended-version"
    # Everything should be fine.
    RECOMMENDED = "recommended"

    @property
    def usable(self) -> bool:
        """Whether ``pod install`` may be attempted at this tier."""
        return self in (
            CocoaPodsStatus.BELOW_RECOMMENDED_VERSION,
            CocoaPodsStatus.RECOMMENDED,
        )


# Skip reasons reported by process_pods
SKIP_NOT_INSTALLED = "not-installed"
SKIP_BELOW_MINIMUM = "below-minimum-version"
SKIP_NOT_INITIALIZED = "not-initialized"
SKIP_UP_TO_DATE = "up-to-date"


class PodsOutcome(BaseModel):
    """Result of one ``process_pods`` call.

    ``ran`` — pod install executed and succeeded.
    ``skipped`` — nothing was run; ``reason`` says why.
    ``failed`` — a fatal condition; the caller decides whether to exit.
    """

    status: Literal["ran", "skipped", "failed"]
    reason: str = ""
    error: str | None = None

    @property
    def ran(self) -> bool:
        return self.status == "ran"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls) -> PodsOutcome:
        return cls(status="ran")

    @classmethod
    def skip(cls, reason: str) -> PodsOutcome:
        return cls(status="skipped", reason=reason)

    @classmethod
    def failure(cls, error: str) -> PodsOutcome:
        return cls(status="failed", error=error)


class IosLayout(BaseModel):
    """Fixed file layout of the ``ios`` sub-project of a Flutter app.

    All paths are derived from ``ios_dir``; nothing here touches disk.
    """

    ios_dir: Path

    @classmethod
    def for_app(cls, app_dir: Path) -> IosLayout:
        """Layout for the ``ios`` directory of a Flutter app directory."""
        return cls(ios_dir=Path(app_dir) / "ios")

    @property
    def app_dir(self) -> Path:
        return self.ios_dir.parent

    @property
    def podfile(self) -> Path:
        return self.ios_dir / "Podfile"

    @property
    def podfile_lock(self) -> Path:
        return self.ios_dir / "Podfile.lock"

    @property
    def manifest_lock(self) -> Path:
        return self.ios_dir / "Pods" / "Manifest.lock"

    @property
    def xcodeproj(self) -> Path:
        return self.ios_dir / "Runner.xcodeproj"

    def xcconfig(self, mode: str) -> Path:
        """Flutter build-mode config, e.g. ``Flutter/Debug.xcconfig``."""
        return self.ios_dir / "Flutter" / f"{mode}.xcconfig"
