"""Auth module public exports."""

from taskpilot.auth.base import TokenResolver
from taskpilot.auth.factory import create_token_resolver

__all__ = ["TokenResolver", "create_token_resolver"]
