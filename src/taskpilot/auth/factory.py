"""Token resolver factory."""

from __future__ import annotations

from taskpilot.auth.base import TokenResolver
from taskpilot.auth.resolvers.env import EnvTokenResolver
from taskpilot.auth.resolvers.gcloud import GcloudTokenResolver
from taskpilot.auth.resolvers.static import StaticTokenResolver
from taskpilot.contracts.config import TaskPilotConfig
from taskpilot.contracts.exceptions import ConfigError

RESOLVERS: dict[str, type[TokenResolver]] = {
    "gcloud": GcloudTokenResolver,
    "env": EnvTokenResolver,
    "token": StaticTokenResolver,
}


def create_token_resolver(config: TaskPilotConfig) -> TokenResolver:
    auth_mode = config.auth
    if auth_mode not in RESOLVERS:
        raise ConfigError(f"Unknown auth mode: {auth_mode}")

    if auth_mode == "gcloud":
        return GcloudTokenResolver(account=config.gcloud_account)
    if auth_mode == "env":
        return EnvTokenResolver()
    return StaticTokenResolver(token=config.token or "")
