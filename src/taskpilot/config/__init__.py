"""Configuration loading."""

from taskpilot.config.loader import load_config

__all__ = ["load_config"]
