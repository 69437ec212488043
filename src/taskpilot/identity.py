"""Task identity codec.

The remote queue has no metadata field, so everything the engine needs to
recognise a task it owns lives in the task name suffix::

    <prefix><id>_<hex unix nanoseconds>v<decimal version>

``prefix + id + "_" + hex`` is the comparison key: the same logical task
regardless of version.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from taskpilot.contracts.exceptions import MalformedIdentityError, NotOwnedError, TaskValidationError

if TYPE_CHECKING:
    from taskpilot.contracts.task import Task

TIMESTAMP_SEPARATOR = "_"
VERSION_SEPARATOR = "v"
MAX_TASK_ID_LENGTH = 500

_TASK_ID_CHARS = re.compile(r"[A-Za-z0-9_-]*")
_VERSION = re.compile(r"[0-9]+")


def queue_path(project: str, location: str, queue: str) -> str:
    return f"projects/{project}/locations/{location}/queues/{queue}"


def task_name(queue_path: str, task_id: str) -> str:
    return f"{queue_path}/tasks/{task_id}"


def comparison_key(prefix: str, id: str, scheduled_at_ns: int) -> str:
    return f"{prefix}{id}{TIMESTAMP_SEPARATOR}{scheduled_at_ns:x}"


def encode(prefix: str, id: str, scheduled_at_ns: int, version: int) -> str:
    return f"{comparison_key(prefix, id, scheduled_at_ns)}{VERSION_SEPARATOR}{version}"


def decode(prefix: str, name: str) -> tuple[str, int]:
    """Recover ``(id, version)`` from a task name or bare task id.

    Only the last path segment of *name* is considered. Both separators are
    located by their last occurrence, so ids containing ``_`` or ``v`` decode
    correctly: the hex timestamp field never contains either character.
    """
    segment = name.rsplit("/", 1)[-1]
    if not segment.startswith(prefix):
        raise NotOwnedError(f"task name has no prefix {prefix!r}: {name}", name=name)

    rest = segment[len(prefix) :]
    id, sep, encoded = rest.rpartition(TIMESTAMP_SEPARATOR)
    if not sep:
        raise MalformedIdentityError(f"task name has no timestamp separator: {name}", name=name)

    _, sep, raw_version = encoded.rpartition(VERSION_SEPARATOR)
    if not sep:
        raise MalformedIdentityError(f"task name has no version: {name}", name=name)
    if _VERSION.fullmatch(raw_version) is None:
        raise MalformedIdentityError(f"failed to parse version {raw_version!r}: {name}", name=name)

    return id, int(raw_version)


def validate_task_id(task_id: str) -> None:
    """Enforce the remote naming rule: ``[A-Za-z0-9_-]``, at most 500 characters."""
    if len(task_id) > MAX_TASK_ID_LENGTH:
        raise TaskValidationError(f"task id maximum length is {MAX_TASK_ID_LENGTH}: got {len(task_id)}")

    if _TASK_ID_CHARS.fullmatch(task_id) is None:
        invalid = next(char for char in task_id if _TASK_ID_CHARS.fullmatch(char) is None)
        raise TaskValidationError(f"task id contains invalid character {invalid!r}: {task_id}")


def validate(task: Task) -> None:
    if not task.id:
        raise TaskValidationError("task id is empty")
    validate_task_id(task.task_id)
