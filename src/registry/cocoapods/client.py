"""CocoaPods trunk access through the ``pod`` command line tool."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from semantic_version import Version

from common.shell import CommandRunner, run_command
from versioning.parser import parse_version

logger = logging.getLogger(__name__)

_VERSION_BULLET_RE = re.compile(r"^\s*-\s+([0-9][0-9A-Za-z.\-+]+)\b", re.MULTILINE)
_VERSIONS_HEADING = "Versions:"


def trunk_info_command(name: str) -> List[str]:
    return ["pod", "trunk", "info", name]


def fetch_trunk_info(name: str, runner: CommandRunner = run_command,
                     timeout: Optional[float] = None) -> Optional[str]:
    """Run ``pod trunk info <name>`` and return its stdout.

    The exit status is ignored on purpose: ``pod`` may exit non-zero while
    still printing the version list.
    """
    result = runner(trunk_info_command(name), timeout)
    if result is None:
        logger.debug("[cli] pod trunk info failed for %s", name)
        return None
    if not result.ok:
        logger.debug("[cli] pod trunk info exited %s for %s; using output anyway", result.returncode, name)
    return result.stdout


def parse_trunk_info(text: str, allow_prerelease: bool = False) -> List[Version]:
    """Parse the version list printed by ``pod trunk info``.

    Bullet lines (``  - 5.4.0 (2021-...)``) are preferred; when there are
    none the comma separated list on the ``Versions:`` line is used.
    Prereleases are dropped unless ``allow_prerelease`` is set.
    """
    versions: List[Version] = []
    for m in _VERSION_BULLET_RE.finditer(text):
        v = parse_version(m.group(1), allow_prerelease=allow_prerelease)
        if v is not None:
            versions.append(v)

    if not versions:
        line = next((ln for ln in text.splitlines() if _VERSIONS_HEADING in ln), None)
        if line is not None:
            inline = line.split(":", 1)[1] if ":" in line else ""
            for part in inline.split(","):
                v = parse_version(part.strip(), allow_prerelease=allow_prerelease)
                if v is not None:
                    versions.append(v)
    return versions
