"""Environment token resolver."""

from __future__ import annotations

import os

from taskpilot.auth.base import TokenResolver
from taskpilot.contracts.exceptions import AuthenticationError

TOKEN_ENV_VARS = ("CLOUDSDK_AUTH_ACCESS_TOKEN", "GOOGLE_OAUTH_ACCESS_TOKEN")


class EnvTokenResolver(TokenResolver):
    async def resolve(self) -> str:
        for name in TOKEN_ENV_VARS:
            token = (os.getenv(name) or "").strip()
            if token:
                return token
        raise AuthenticationError(f"none of {', '.join(TOKEN_ENV_VARS)} is set or non-empty")
