"""Engine exports."""

from .engine import SyncEngine
from .progress import LoggingSyncProgress, NullSyncProgress, SyncPhase, SyncProgress

__all__ = ["LoggingSyncProgress", "NullSyncProgress", "SyncEngine", "SyncPhase", "SyncProgress"]
