"""Remote git ref lookups through ``git ls-remote``."""
from __future__ import annotations

import logging
import os
from typing import List, Optional

from constants import Constants
from common.shell import CommandRunner, run_command

logger = logging.getLogger(__name__)


def parse_ls_remote(text: Optional[str]) -> Optional[str]:
    """Return the hash of the first ``<sha>\\t<ref>`` record, or None."""
    if not text:
        return None
    first = text.split("\n", 1)[0].strip()
    if not first:
        return None
    sha = first.split("\t", 1)[0].strip()
    return sha or None


class GitRemoteClient:
    """Resolves branch and tag heads of remote repositories.

    Private HTTPS remotes are retried once with a bearer token taken from the
    environment variable named by ``token_env`` (GIT_HTTP_TOKEN by default).
    """

    def __init__(self, runner: CommandRunner = run_command, timeout: Optional[float] = None,
                 token_env: Optional[str] = None):
        self.runner = runner
        self.timeout = timeout
        self.token_env = token_env or Constants.ENV_GIT_HTTP_TOKEN

    def _token(self) -> Optional[str]:
        token = os.environ.get(self.token_env)
        return token.strip() if token and token.strip() else None

    def _ls_remote(self, argv: List[str]) -> Optional[str]:
        result = self.runner(argv, self.timeout)
        if result is None or not result.ok:
            return None
        return parse_ls_remote(result.stdout)

    def ls_remote(self, url: str, ref: str) -> Optional[str]:
        """Return the commit ``ref`` points to on ``url``, or None on failure."""
        sha = self._ls_remote(["git", "ls-remote", url, ref])
        if sha:
            return sha

        token = self._token()
        if token and url.startswith("https://"):
            sha = self._ls_remote([
                "git", "-c", f"http.extraHeader=Authorization: Bearer {token}",
                "ls-remote", url, ref,
            ])
            if sha:
                return sha

        logger.debug("[git] ls-remote failed url=%s ref=%s", url, ref)
        return None
