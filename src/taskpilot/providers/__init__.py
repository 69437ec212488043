"""Remote queue clients."""

from __future__ import annotations

from taskpilot.contracts.client import CloudTasksClient
from taskpilot.contracts.config import TaskPilotConfig
from taskpilot.providers.cloudtasks import CloudTasksRestClient


def create_client(config: TaskPilotConfig, *, token: str) -> CloudTasksClient:
    """Build the queue client for *config*. Use it as an async context manager."""
    return CloudTasksRestClient(
        token=token,
        endpoint=config.endpoint,
        timeout=config.timeout,
        max_retries=config.max_retries,
    )


__all__ = ["CloudTasksRestClient", "create_client"]
