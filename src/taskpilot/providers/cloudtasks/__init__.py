"""Cloud Tasks provider."""

from taskpilot.providers.cloudtasks.client import DEFAULT_ENDPOINT, CloudTasksRestClient

__all__ = ["DEFAULT_ENDPOINT", "CloudTasksRestClient"]
