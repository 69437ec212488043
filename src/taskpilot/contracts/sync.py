"""Sync plan/result contracts."""

from __future__ import annotations

from pydantic import BaseModel, Field

from taskpilot.contracts.task import Task


class SyncPlan(BaseModel):
    """Remote operations needed to converge the queue on the desired tasks.

    ``creates`` holds copies of the desired tasks carrying the version they
    will be created with; ``unchanged`` holds the remote tasks left in place.
    """

    queue_path: str
    prefix: str
    deletes: list[str] = Field(default_factory=list)
    creates: list[Task] = Field(default_factory=list)
    unchanged: list[Task] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.deletes and not self.creates


class SyncResult(BaseModel):
    plan: SyncPlan
    deleted: list[str] = Field(default_factory=list)
    created: list[str] = Field(default_factory=list)
    dry_run: bool = False
