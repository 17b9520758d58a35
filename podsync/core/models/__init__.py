"""
Domain models — Pydantic types for podsync.

All models are re-exported here for convenient access:

    from podsync.core.models import RunResult, CocoaPodsStatus, PodsOutcome, IosLayout
"""

from podsync.core.models.pods import CocoaPodsStatus, IosLayout, PodsOutcome
from podsync.core.models.process import RunResult

__all__ = [
    # pods.py
    "CocoaPodsStatus",
    "IosLayout",
    "PodsOutcome",
    # process.py
    "RunResult",
]
