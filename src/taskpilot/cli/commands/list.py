"""List command formatting."""

from __future__ import annotations

import argparse

from taskpilot import Task, TaskPilotConfig
from taskpilot.cli.common import plural


def format_task_line(task: Task) -> str:
    request = task.request
    return f"{task.task_id}  {task.scheduled_at.isoformat()}  {request.method} {request.url}"


def format_task_list(tasks: list[Task], config: TaskPilotConfig) -> str:
    lines = [f"{config.queue_path} ({config.prefix}): {plural(len(tasks), 'managed task')}"]
    lines.extend(f"  {format_task_line(task)}" for task in tasks)
    return "\n".join(lines)


async def run_list(args: argparse.Namespace) -> list[Task]:
    import taskpilot.cli as cli

    config = cli.load_config(args.config)
    tp = await cli.TaskPilot.from_config(config)
    tasks = await tp.list_tasks()

    print(cli._format_task_list(tasks, config))
    return tasks


__all__ = ["format_task_line", "format_task_list", "run_list"]
