"""Podfile parser.

Line oriented: only ``pod 'Name', ...`` declarations are considered and
anything that does not fit the expected shape is skipped.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List

from constants import Constants
from common.logging_utils import is_debug_enabled
from versioning.models import AnyRequirement
from versioning.parser import parse_requirement

from .models import DependencySpec, GitRef, GitRefKind, GitSource, RegistrySource

logger = logging.getLogger(__name__)

_POD_RE = re.compile(r"""pod\s+['"]([^'"]+)['"]\s*(?:,(.*))?""")
# Both hash styles: ":git => 'url'" and "git: 'url'".
_OPTION_RE = re.compile(
    r""":([a-zA-Z_]+)\s*=>\s*['"]([^'"]+)['"]|\b([a-zA-Z_]+):\s*['"]([^'"]+)['"]"""
)
# First option key of a declaration tail; constraints only appear before it.
_OPTIONS_START_RE = re.compile(r""":[a-zA-Z_]+\s*=>|\b[a-zA-Z_]+:\s""")
_QUOTED_RE = re.compile(r"""(['"])([^'"]+)\1""")

# Precedence when a git pod carries more than one ref option.
_REF_PRECEDENCE = (GitRefKind.BRANCH, GitRefKind.TAG, GitRefKind.COMMIT)


def parse_options(tail: str) -> Dict[str, str]:
    """Extract ``:key => 'value'`` options from a declaration tail."""
    options: Dict[str, str] = {}
    for m in _OPTION_RE.finditer(tail):
        if m.group(1):
            options[m.group(1)] = m.group(2)
        else:
            options[m.group(3)] = m.group(4)
    return options


def _git_ref(options: Dict[str, str]) -> GitRef:
    for kind in _REF_PRECEDENCE:
        value = options.get(kind.value)
        if value:
            return GitRef(kind, value)
    return GitRef(GitRefKind.BRANCH, Constants.DEFAULT_GIT_BRANCH)


def _constraint_tokens(tail: str) -> List[str]:
    m = _OPTIONS_START_RE.search(tail)
    constraints = tail[:m.start()] if m else tail
    return [q.group(2) for q in _QUOTED_RE.finditer(constraints)]


def strip_comment(line: str) -> str:
    """Drop a trailing Ruby comment, ignoring "#" inside quoted strings."""
    quote = None
    for i, ch in enumerate(line):
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == "#":
            return line[:i]
    return line


def parse_pod_line(line: str):
    """Parse one Podfile line into a DependencySpec, or None when it is not a pod.

    Subspec declarations (``pod 'Firebase/Analytics'``) are keyed by their
    top-level pod, the same name Podfile.lock records.
    """
    stripped = strip_comment(line).strip()
    if not stripped.startswith("pod "):
        return None
    m = _POD_RE.match(stripped)
    if not m:
        return None
    name = m.group(1).split("/", 1)[0]
    tail = m.group(2) or ""

    options = parse_options(tail)
    git_url = options.get("git")
    if git_url:
        return DependencySpec(
            name=name,
            requirement=AnyRequirement(),
            source=GitSource(url=git_url, ref=_git_ref(options)),
        )

    return DependencySpec(
        name=name,
        requirement=parse_requirement(_constraint_tokens(tail)),
        source=RegistrySource(),
    )


def parse_podfile(text: str) -> Dict[str, DependencySpec]:
    """Extract pod declarations from Podfile text.

    Args:
        text: Full Podfile content

    Returns:
        Mapping of pod name to DependencySpec; a repeated name keeps its last declaration
    """
    result: Dict[str, DependencySpec] = {}
    for raw in text.splitlines():
        spec = parse_pod_line(raw)
        if spec is None:
            continue
        result[spec.name] = spec
        if is_debug_enabled(logger):
            logger.debug(
                "[parse] %s req=%s source=%s",
                spec.name,
                spec.requirement.raw if spec.requirement.raw is not None else "any",
                spec.source.describe(),
            )
    return result
