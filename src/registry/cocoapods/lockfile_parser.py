"""Podfile.lock parser.

Extracts locked versions from the ``PODS:`` listing and checkout commits
from the ``CHECKOUT OPTIONS:`` section. Lines that do not fit the expected
shape are skipped.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

from common.logging_utils import is_debug_enabled

from .models import LockInfo

logger = logging.getLogger(__name__)

_PODS_HEADER = "PODS:"
_LISTING_END_HEADERS = ("DEPENDENCIES:", "SPEC REPOS:")
_CHECKOUT_HEADER = "CHECKOUT OPTIONS:"
_COMMIT_MARKER = ":commit:"

_POD_LINE_RE = re.compile(r"^-\s+([A-Za-z0-9_\-+./]+)\s+\(([^)]+)\)")


def parse_pod_entry(line: str) -> Optional[Tuple[str, str]]:
    """Parse ``- Name/Subspec (1.2.3)`` into (top-level name, version)."""
    m = _POD_LINE_RE.match(line)
    if not m:
        return None
    full_name, version = m.group(1), m.group(2)
    return full_name.split("/", 1)[0], version


def parse_podfile_lock(text: str) -> LockInfo:
    """Extract locked versions and checkout SHAs from Podfile.lock text.

    Args:
        text: Full Podfile.lock content

    Returns:
        LockInfo with name -> version and name -> commit mappings
    """
    info = LockInfo()
    in_pods = False
    current_name: Optional[str] = None
    listing_indent: Optional[int] = None
    debug = is_debug_enabled(logger)

    for raw in text.splitlines():
        if raw.startswith(_PODS_HEADER):
            in_pods = True
            listing_indent = None
            continue
        if raw.startswith(_LISTING_END_HEADERS):
            in_pods = False

        line = raw.strip()
        indent = len(raw) - len(raw.lstrip())
        if in_pods and line.startswith("- "):
            # Deeper bullets list the requirements of the pod above, not locked pods.
            if listing_indent is None:
                listing_indent = indent
            if indent > listing_indent:
                continue
            entry = parse_pod_entry(line.replace('"', ""))
            if entry:
                name, version = entry
                info.locked_versions[name] = version
                if debug:
                    logger.debug("[lock] %s -> %s", name, version)

        if raw.startswith(_CHECKOUT_HEADER):
            current_name = None
            continue
        if line.endswith(":") and " " not in line and not line.startswith(":"):
            current_name = line.replace(":", "")
        if _COMMIT_MARKER in raw and current_name:
            sha = raw.split(_COMMIT_MARKER)[-1].strip()
            if sha:
                info.locked_shas[current_name] = sha
                if debug:
                    logger.debug("[lock] %s sha=%s", current_name, sha)

    return info
