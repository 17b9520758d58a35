"""
Run ``pod install`` for a Flutter app's ``ios`` sub-project.

``CocoaPods.process_pods`` is the entry point: it checks the Podfile
precondition, gates on the installation tier and the specs repo, skips
when the pods are up to date, and otherwise runs ``pod install``.
It never raises for tool failures; the outcome says what happened.
"""

from __future__ import annotations

import logging
from pathlib import Path

from podsync.adapters.base import ProcessRunner
from podsync.core.config.loader import PodsSettings
from podsync.core.models.pods import (
    SKIP_BELOW_MINIMUM,
    SKIP_NOT_INITIALIZED,
    SKIP_NOT_INSTALLED,
    SKIP_UP_TO_DATE,
    CocoaPodsStatus,
    IosLayout,
    PodsOutcome,
)
from podsync.core.models.process import RunResult
from podsync.core.observability.reporter import Reporter
from podsync.core.services.cocoapods import messages
from podsync.core.services.cocoapods.installation import CocoaPodsInstallation
from podsync.core.services.cocoapods.podfile import invalidate_manifest
from podsync.core.services.cocoapods.staleness import should_run_pod_install

logger = logging.getLogger(__name__)

# Substring pod prints when the local specs repo lacks a required spec version
OUT_OF_DATE_MARKER = "out-of-date source repos"


class CocoaPods:
    """Coordinate CocoaPods for one process.

    Args:
        runner: Runs ``pod``.
        reporter: Receives warnings and echoed pod output.
        settings: Executable, thresholds and home directory.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        reporter: Reporter,
        settings: PodsSettings | None = None,
    ):
        self._runner = runner
        self._reporter = reporter
        self._settings = settings or PodsSettings()
        self.installation = CocoaPodsInstallation(
            runner,
            self._settings.cocoapods,
            self._settings.resolved_home_dir,
        )

    # ── Installation probes ─────────────────────────────────────

    def version_text(self) -> str | None:
        return self.installation.version_text()

    def evaluate_installation(self) -> CocoaPodsStatus:
        return self.installation.evaluate_installation()

    def is_initialized(self) -> bool:
        return self.installation.is_initialized()

    # ── Entry point ─────────────────────────────────────────────

    def process_pods(
        self,
        app_ios_dir: Path,
        ios_engine_dir: str,
        dependencies_changed: bool = True,
    ) -> PodsOutcome:
        """Run ``pod install`` in ``app_ios_dir`` if it is usable and needed.

        Args:
            app_ios_dir: The ``ios`` directory of a Flutter app.
            ios_engine_dir: Flutter framework directory, exported as
                ``FLUTTER_FRAMEWORK_DIR`` for Podfiles created before
                the symlinked layout.
            dependencies_changed: Whether Flutter plugin dependencies changed
                since the last run.
        """
        layout = IosLayout(ios_dir=Path(app_ios_dir))
        if not layout.podfile.exists():
            return PodsOutcome.failure("Podfile missing")

        skip_reason = self._check_pod_condition()
        if skip_reason:
            return PodsOutcome.skip(skip_reason)

        if not should_run_pod_install(layout.ios_dir, dependencies_changed):
            return PodsOutcome.skip(SKIP_UP_TO_DATE)

        return self._run_pod_install(layout, ios_engine_dir)

    def _check_pod_condition(self) -> str | None:
        """Make sure the CocoaPods tools are in the right state.

        Returns:
            A skip reason, or None when pod install may run.
        """
        executable = self._settings.cocoapods.executable
        installation = self.evaluate_installation()
        if installation is CocoaPodsStatus.NOT_INSTALLED:
            self._reporter.error(messages.not_installed(executable), emphasis=True)
            return SKIP_NOT_INSTALLED
        if installation is CocoaPodsStatus.BELOW_MINIMUM_VERSION:
            self._reporter.error(
                messages.below_minimum(self.installation.minimum_version, executable), emphasis=True,
            )
            return SKIP_BELOW_MINIMUM
        if installation is CocoaPodsStatus.BELOW_RECOMMENDED_VERSION:
            self._reporter.error(
                messages.below_recommended(self.installation.recommended_version, executable), emphasis=True,
            )

        if not self.is_initialized():
            self._reporter.error(messages.not_initialized(executable), emphasis=True)
            return SKIP_NOT_INITIALIZED

        return None

    def _run_pod_install(self, layout: IosLayout, engine_dir: str) -> PodsOutcome:
        cocoapods = self._settings.cocoapods
        env = {
            # For backward compatibility with previously created Podfile only.
            "FLUTTER_FRAMEWORK_DIR": engine_dir,
        }
        if cocoapods.disable_stats:
            # CocoaPods analytics adds a lot of latency.
            env["COCOAPODS_DISABLE_STATS"] = "true"

        with self._reporter.progress("Running pod install..."):
            result = self._runner.run(
                [cocoapods.executable, "install", "--verbose"],
                cwd=layout.ios_dir,
                env_overrides=env,
            )

        if self._reporter.verbose or not result.ok:
            self._echo_output(result)

        if not result.ok:
            logger.debug(
                "pod install failed with exit code %d after %dms", result.exit_code, result.duration_ms,
            )
            invalidate_manifest(layout.ios_dir)
            self._diagnose_pod_install_failure(result)
            return PodsOutcome.failure("Error running pod install")

        logger.debug("pod install finished in %dms", result.duration_ms)
        return PodsOutcome.success()

    def _echo_output(self, result: RunResult) -> None:
        if result.stdout:
            self._reporter.status("CocoaPods' output:\n↳")
            self._reporter.status(result.stdout, indent=4)
        if result.stderr:
            self._reporter.status("Error output from CocoaPods:\n↳")
            self._reporter.status(result.stderr, indent=4)
        if result.error:
            self._reporter.status(result.error, indent=4)

    def _diagnose_pod_install_failure(self, result: RunResult) -> None:
        if OUT_OF_DATE_MARKER in result.stdout:
            self._reporter.error(
                messages.out_of_date_specs(self._settings.cocoapods.executable), emphasis=True,
            )
