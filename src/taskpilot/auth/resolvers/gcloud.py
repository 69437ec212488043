"""gcloud CLI token resolver."""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass

from taskpilot.auth.base import TokenResolver
from taskpilot.contracts.exceptions import AuthenticationError

# gcloud prefixes every failure with "ERROR: (gcloud.<command>) ".
_ERROR_PREFIX = re.compile(r"^ERROR: \(gcloud[\w.-]*\)\s*")

_NO_ACCOUNT_MARKERS = ("do not currently have an active account", "no credentialed accounts")
_EXPIRED_MARKERS = ("reauthentication", "refreshing your current auth tokens", "invalid_grant")


def _failure_message(stderr: str) -> str:
    details = _ERROR_PREFIX.sub("", stderr.strip())
    lowered = details.lower()
    if any(marker in lowered for marker in _NO_ACCOUNT_MARKERS):
        return f"gcloud has no active account; run 'gcloud auth login' ({details})"
    if any(marker in lowered for marker in _EXPIRED_MARKERS):
        return f"gcloud credentials need reauthentication; run 'gcloud auth login' ({details})"
    if details:
        return f"gcloud auth print-access-token failed: {details}"
    return "gcloud auth print-access-token failed"


@dataclass(frozen=True)
class GcloudTokenResolver(TokenResolver):
    """Borrows an access token from the gcloud CLI.

    Uses the active gcloud account unless *account* names another
    credentialed one.
    """

    executable: str = "gcloud"
    account: str | None = None

    def command(self) -> tuple[str, ...]:
        args: tuple[str, ...] = (self.executable, "auth", "print-access-token")
        if self.account:
            args += (self.account,)
        return args

    async def resolve(self) -> str:
        try:
            process = await asyncio.create_subprocess_exec(
                *self.command(),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise AuthenticationError(f"Failed to execute gcloud CLI: {exc}") from exc

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            raise AuthenticationError(_failure_message(stderr.decode(errors="replace")))

        token = stdout.decode(errors="replace").strip()
        if not token:
            raise AuthenticationError("gcloud auth print-access-token returned an empty token")

        return token
