"""CocoaPods services — installation probe, staleness check, Podfile setup, pod install."""

from podsync.core.services.cocoapods.install import CocoaPods
from podsync.core.services.cocoapods.installation import CocoaPodsInstallation, classify_version
from podsync.core.services.cocoapods.podfile import (
    PodfileError,
    PodfileScaffolder,
    invalidate_manifest,
    invalidate_pod_install_output,
)
from podsync.core.services.cocoapods.staleness import should_run_pod_install

__all__ = [
    "CocoaPods",
    "CocoaPodsInstallation",
    "PodfileError",
    "PodfileScaffolder",
    "classify_version",
    "invalidate_manifest",
    "invalidate_pod_install_output",
    "should_run_pod_install",
]
