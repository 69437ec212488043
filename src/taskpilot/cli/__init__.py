"""Command-line interface for taskpilot."""

from __future__ import annotations

import asyncio as asyncio
import logging as logging

from taskpilot import TaskPilot as TaskPilot
from taskpilot import load_config as load_config
from taskpilot.cli.app import main as main
from taskpilot.cli.commands import list as list_command
from taskpilot.cli.commands import sync as sync_command
from taskpilot.cli.parser import build_parser as build_parser

_format_summary = sync_command.format_sync_summary
_format_task_list = list_command.format_task_list

_run_sync = sync_command.run_sync
_run_list = list_command.run_list
