"""Concrete token resolvers."""

from taskpilot.auth.resolvers.env import EnvTokenResolver
from taskpilot.auth.resolvers.gcloud import GcloudTokenResolver
from taskpilot.auth.resolvers.static import StaticTokenResolver

__all__ = ["EnvTokenResolver", "GcloudTokenResolver", "StaticTokenResolver"]
