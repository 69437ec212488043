"""Exception hierarchy for taskpilot."""

from __future__ import annotations


class TaskPilotError(Exception):
    """Base exception for all taskpilot errors."""


class ConfigError(TaskPilotError):
    """Configuration loading or validation failure."""


class ManifestLoadError(TaskPilotError):
    """Task manifest loading/parsing failure."""


class TaskValidationError(TaskPilotError):
    """Task rejected before any remote call (empty id, charset, length, duplicates)."""


class ConversionError(TaskPilotError):
    """Task could not be mapped to or from the wire format."""


class UnsupportedMethodError(ConversionError):
    """HTTP method is not one the remote queue can dispatch."""

    def __init__(self, method: str) -> None:
        super().__init__(f"unsupported http method: {method}")
        self.method = method


class UnsupportedMessageTypeError(ConversionError):
    """Remote task carries a dispatch kind other than a plain HTTP request."""


class UnsupportedAuthorizationError(ConversionError):
    """Remote task carries an authorization header variant that is not modeled."""


class IdentityError(TaskPilotError):
    """Encoded task identity could not be decoded."""

    def __init__(self, message: str, *, name: str) -> None:
        super().__init__(message)
        self.name = name


class NotOwnedError(IdentityError):
    """Task name does not carry the managed prefix."""


class MalformedIdentityError(IdentityError):
    """Task name carries the managed prefix but not a decodable identity."""


class TransportError(TaskPilotError):
    """Remote call failed.

    ``status`` is the canonical remote status name (``ALREADY_EXISTS``,
    ``NOT_FOUND``, ...) when the remote reported one.
    """

    def __init__(self, message: str, *, status: str | None = None, http_status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.http_status = http_status


class AuthenticationError(TransportError):
    """Authentication/authorization failure."""


class TaskAlreadyExistsError(TaskPilotError):
    """Create collided with an existing remote task name."""

    def __init__(self, task_name: str) -> None:
        super().__init__(f"task already exists: {task_name}")
        self.task_name = task_name
