"""
User-facing CocoaPods texts — warnings and remediation steps.

Commands in the texts use the configured ``pod`` executable.
"""

from __future__ import annotations

NO_COCOAPODS_CONSEQUENCE = """\
  CocoaPods is used to retrieve the iOS platform side's plugin code that responds to your plugin usage on the Dart side.
  Without resolving iOS dependencies with CocoaPods, plugins will not work on iOS.
  For more info, see https://flutter.io/platform-plugins"""


def install_instructions(executable: str = "pod") -> str:
    return f"  brew install cocoapods\n  {executable} setup"


def upgrade_instructions(executable: str = "pod") -> str:
    return f"  brew upgrade cocoapods\n  {executable} setup"


def not_installed(executable: str = "pod") -> str:
    return (
        "Warning: CocoaPods not installed. Skipping pod install.\n"
        f"{NO_COCOAPODS_CONSEQUENCE}\n"
        "To install:\n"
        f"{install_instructions(executable)}\n"
    )


def below_minimum(minimum_version: str, executable: str = "pod") -> str:
    return (
        f"Warning: CocoaPods minimum required version {minimum_version} or greater not installed. "
        "Skipping pod install.\n"
        f"{NO_COCOAPODS_CONSEQUENCE}\n"
        "To upgrade:\n"
        f"{upgrade_instructions(executable)}\n"
    )


def below_recommended(recommended_version: str, executable: str = "pod") -> str:
    return (
        f"Warning: CocoaPods recommended version {recommended_version} or greater not installed.\n"
        "Pods handling may fail on some projects involving plugins.\n"
        "To upgrade:\n"
        f"{upgrade_instructions(executable)}\n"
    )


def not_initialized(executable: str = "pod") -> str:
    return (
        "Warning: CocoaPods installed but not initialized. Skipping pod install.\n"
        f"{NO_COCOAPODS_CONSEQUENCE}\n"
        "To initialize CocoaPods, run:\n"
        f"  {executable} setup\n"
        "once to finalize CocoaPods' installation."
    )


def out_of_date_specs(executable: str = "pod") -> str:
    return (
        "Error: CocoaPods's specs repository is too out-of-date to satisfy dependencies.\n"
        "To update the CocoaPods specs, run:\n"
        f"  {executable} repo update\n"
    )
