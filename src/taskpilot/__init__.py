"""Public API surface for taskpilot."""

__version__ = "0.1.0"

from taskpilot.contracts.client import CloudTasksClient, TaskLister
from taskpilot.contracts.config import TaskPilotConfig
from taskpilot.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    ConversionError,
    IdentityError,
    MalformedIdentityError,
    ManifestLoadError,
    NotOwnedError,
    TaskAlreadyExistsError,
    TaskPilotError,
    TaskValidationError,
    TransportError,
    UnsupportedAuthorizationError,
    UnsupportedMessageTypeError,
    UnsupportedMethodError,
)
from taskpilot.contracts.sync import SyncPlan, SyncResult
from taskpilot.contracts.task import Authorization, HttpMethod, HttpRequest, OAuthToken, OIDCToken, Task, Timestamp
from taskpilot.auth import create_token_resolver
from taskpilot.config import load_config
from taskpilot.engine import LoggingSyncProgress, NullSyncProgress, SyncEngine, SyncPhase, SyncProgress
from taskpilot.iterator import TaskIterator
from taskpilot.manifest import load_tasks
from taskpilot.providers import create_client
from taskpilot.sdk import TaskPilot

__all__ = [
    "AuthenticationError",
    "Authorization",
    "CloudTasksClient",
    "ConfigError",
    "ConversionError",
    "HttpMethod",
    "HttpRequest",
    "IdentityError",
    "LoggingSyncProgress",
    "MalformedIdentityError",
    "ManifestLoadError",
    "NotOwnedError",
    "NullSyncProgress",
    "OAuthToken",
    "OIDCToken",
    "SyncEngine",
    "SyncPhase",
    "SyncPlan",
    "SyncProgress",
    "SyncResult",
    "Task",
    "TaskAlreadyExistsError",
    "TaskIterator",
    "TaskLister",
    "TaskPilot",
    "TaskPilotConfig",
    "TaskPilotError",
    "TaskValidationError",
    "Timestamp",
    "TransportError",
    "UnsupportedAuthorizationError",
    "UnsupportedMessageTypeError",
    "UnsupportedMethodError",
    "__version__",
    "create_client",
    "create_token_resolver",
    "load_config",
    "load_tasks",
]
