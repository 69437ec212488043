"""Sync command formatting."""

from __future__ import annotations

import argparse

from taskpilot import SyncResult, TaskPilotConfig
from taskpilot.cli.common import plural
from taskpilot.cli.progress.rich import RichSyncProgress
from taskpilot.engine.progress import LoggingSyncProgress


def format_sync_summary(result: SyncResult, config: TaskPilotConfig) -> str:
    mode = "dry-run" if result.dry_run else "apply"
    plan = result.plan
    deletes = plan.deletes if result.dry_run else result.deleted
    creates = [task.task_name for task in plan.creates] if result.dry_run else result.created
    verb_delete = "To delete" if result.dry_run else "Deleted"
    verb_create = "To create" if result.dry_run else "Created"

    lines = [
        "",
        f"taskpilot - sync complete ({mode})",
        "",
        f"  Queue:     {plan.queue_path}",
        f"  Prefix:    {plan.prefix}",
        f"  Manifest:  {config.tasks_path}",
        "",
        f"  Unchanged: {plural(len(plan.unchanged), 'task')}",
        f"  {verb_delete + ':':<10} {plural(len(deletes), 'task')}",
    ]
    lines.extend(f"    - {name}" for name in deletes)
    lines.append(f"  {verb_create + ':':<10} {plural(len(creates), 'task')}")
    lines.extend(f"    + {name}" for name in creates)

    if plan.is_empty:
        lines.append("  Status:    all tasks up to date")

    if result.dry_run:
        lines.append("")
        lines.append("  [dry-run] No changes were made")

    lines.append("")
    return "\n".join(lines)


async def run_sync(args: argparse.Namespace) -> SyncResult:
    import taskpilot.cli as cli

    config = cli.load_config(args.config)

    if not args.verbose:
        with RichSyncProgress() as progress:
            tp = await cli.TaskPilot.from_config(config, progress=progress)
            result = await tp.sync(dry_run=args.dry_run)
    else:
        tp = await cli.TaskPilot.from_config(config, progress=LoggingSyncProgress())
        result = await tp.sync(dry_run=args.dry_run)

    print(cli._format_summary(result, config))
    return result


__all__ = ["format_sync_summary", "run_sync"]
