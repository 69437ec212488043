"""Public contracts for taskpilot."""

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
from taskpilot.contracts.wire import (
    CreateTaskRequest,
    DeleteTaskRequest,
    ListTasksPage,
    ListTasksRequest,
    ResponseView,
    WireHttpRequest,
    WireOAuthToken,
    WireOidcToken,
    WireTask,
)

__all__ = [
    "AuthenticationError",
    "Authorization",
    "CloudTasksClient",
    "ConfigError",
    "ConversionError",
    "CreateTaskRequest",
    "DeleteTaskRequest",
    "HttpMethod",
    "HttpRequest",
    "IdentityError",
    "ListTasksPage",
    "ListTasksRequest",
    "MalformedIdentityError",
    "ManifestLoadError",
    "NotOwnedError",
    "OAuthToken",
    "OIDCToken",
    "ResponseView",
    "SyncPlan",
    "SyncResult",
    "Task",
    "TaskAlreadyExistsError",
    "TaskLister",
    "TaskPilotConfig",
    "TaskPilotError",
    "TaskValidationError",
    "Timestamp",
    "TransportError",
    "UnsupportedAuthorizationError",
    "UnsupportedMessageTypeError",
    "UnsupportedMethodError",
    "WireHttpRequest",
    "WireOAuthToken",
    "WireOidcToken",
    "WireTask",
]
