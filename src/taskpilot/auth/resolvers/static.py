"""Token supplied in the config file."""

from __future__ import annotations

from dataclasses import dataclass, field

from taskpilot.auth.base import TokenResolver
from taskpilot.contracts.exceptions import AuthenticationError


@dataclass(frozen=True)
class StaticTokenResolver(TokenResolver):
    token: str = field(repr=False)

    async def resolve(self) -> str:
        resolved = self.token.strip()
        scheme, _, credentials = resolved.partition(" ")
        if scheme.lower() == "bearer":
            resolved = credentials.strip()
        if not resolved:
            raise AuthenticationError("configured token is empty")
        if any(char.isspace() for char in resolved):
            raise AuthenticationError("configured token must not contain whitespace")
        return resolved
