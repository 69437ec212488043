"""CLI progress displays."""

from taskpilot.cli.progress.rich import RichSyncProgress

__all__ = ["RichSyncProgress"]
