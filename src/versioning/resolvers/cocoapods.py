"""CocoaPods version resolver: trunk version lists and git heads."""

from __future__ import annotations

import logging
from typing import List, Optional

from semantic_version import Version

from common.shell import CommandRunner, run_command
from registry.cocoapods.client import fetch_trunk_info, parse_trunk_info
from registry.cocoapods.models import GitRefKind, GitSource
from repository.git_remote import GitRemoteClient

from ..cache import VersionCache

logger = logging.getLogger(__name__)


class CocoaPodsResolver:
    """Queries the trunk and git remotes for the newest available versions.

    Every lookup is read-only and failure tolerant: a lookup that cannot be
    answered returns None so the report can degrade that single row.
    """

    def __init__(
        self,
        cache: Optional[VersionCache] = None,
        runner: CommandRunner = run_command,
        allow_prerelease: bool = False,
        timeout: Optional[float] = None,
        git_client: Optional[GitRemoteClient] = None,
    ):
        self.cache = cache if cache is not None else VersionCache()
        self.runner = runner
        self.allow_prerelease = allow_prerelease
        self.timeout = timeout
        self.git_client = git_client or GitRemoteClient(runner=runner, timeout=timeout)

    def trunk_versions(self, name: str) -> Optional[List[Version]]:
        """Return every published version of ``name`` known to the trunk.

        Args:
            name: Pod name

        Returns:
            List of versions, or None if the trunk query failed or listed nothing
        """
        cached = self.cache.get(name)
        if cached is not None:
            return cached

        text = fetch_trunk_info(name, runner=self.runner, timeout=self.timeout)
        if text is None:
            return None
        logger.debug("[cli] pod trunk info OK for %s", name)

        versions = parse_trunk_info(text, allow_prerelease=self.allow_prerelease)
        if not versions:
            logger.debug("[cli] no versions parsed for %s", name)
            return None

        self.cache.put(name, versions)
        return versions

    def git_head(self, source: GitSource) -> Optional[str]:
        """Return the commit the source's branch or tag points to.

        Pinned commits are returned as-is without touching the network.
        """
        ref = source.ref
        if ref.kind == GitRefKind.COMMIT:
            return ref.value
        return self.git_client.ls_remote(source.url, ref.remote_ref)
