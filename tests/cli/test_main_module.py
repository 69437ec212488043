"""Tests for the taskpilot module entrypoint."""

from __future__ import annotations

import runpy
import sys
import types

import pytest


def test_module_entrypoint_exits_with_cli_status(monkeypatch: pytest.MonkeyPatch) -> None:
    cli_module = types.ModuleType("taskpilot.cli")
    cli_module.main = lambda: 7  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "taskpilot.cli", cli_module)
    monkeypatch.delitem(sys.modules, "taskpilot.__main__", raising=False)

    with pytest.raises(SystemExit) as exc_info:
        runpy.run_module("taskpilot", run_name="__main__")

    assert exc_info.value.code == 7
