"""podsync — CocoaPods coordination for Flutter iOS sub-projects."""

__version__ = "0.1.0"
