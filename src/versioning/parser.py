"""Parsing utilities for versions and requirement strings."""

import re
from typing import List, Optional

from semantic_version import Version

from .models import (
    AnyRequirement,
    Bound,
    BoundOp,
    CompatibleRequirement,
    ExactRequirement,
    RangeRequirement,
    RawRequirement,
    Requirement,
)

_NUMERIC = re.compile(r"^\d+$")


def parse_version(text: str, allow_prerelease: bool = True) -> Optional[Version]:
    """Parse ``1``, ``1.2``, ``1.2.3`` or ``1.2.3-beta.1`` into a Version.

    Missing components default to 0 and numeric components past the third
    are ignored. Returns None for anything else, or for a prerelease when
    ``allow_prerelease`` is False.
    """
    if text is None:
        return None
    s = text.strip()
    if not s:
        return None

    numbers, _, prerelease = s.partition("-")
    parts = numbers.split(".")
    if not all(_NUMERIC.match(p) for p in parts):
        return None
    values = [int(p) for p in parts[:3]]
    values += [0] * (3 - len(values))

    if prerelease and not allow_prerelease:
        return None
    if "-" in s and not prerelease:
        return None
    try:
        return Version(
            major=values[0],
            minor=values[1],
            patch=values[2],
            prerelease=tuple(prerelease.split(".")) if prerelease else (),
        )
    except ValueError:
        return None


def parse_bound(text: str) -> Optional[Bound]:
    """Parse ``OP VERSION`` (exactly two space separated tokens) into a Bound."""
    parts = text.split()
    if len(parts) != 2:
        return None
    try:
        op = BoundOp(parts[0])
    except ValueError:
        return None
    version = parse_version(parts[1])
    if version is None:
        return None
    return Bound(op=op, version=version)


def _bound_requirement(bound: Bound) -> RangeRequirement:
    if bound.op.is_lower:
        return RangeRequirement(lower=bound)
    return RangeRequirement(upper=bound)


def parse_requirement_token(token: str) -> Requirement:
    """Parse a single constraint string from a manifest declaration."""
    t = token.strip()
    if t.startswith("~>"):
        version = parse_version(t[2:])
        if version is not None:
            return CompatibleRequirement(version)
    if t.startswith("="):
        version = parse_version(t[1:])
        if version is not None:
            return ExactRequirement(version)
    bound = parse_bound(t)
    if bound is not None:
        return _bound_requirement(bound)
    version = parse_version(t)
    if version is not None:
        return ExactRequirement(version)
    return RawRequirement(t)


def parse_requirement(tokens: List[str]) -> Requirement:
    """Combine the constraint strings of one declaration into a Requirement.

    Zero tokens mean unconstrained, one token is parsed on its own and two or
    more are read as range bounds. When none of several tokens is a bound the
    joined text is kept as a raw requirement.
    """
    if not tokens:
        return AnyRequirement()
    if len(tokens) == 1:
        return parse_requirement_token(tokens[0])

    lower: Optional[Bound] = None
    upper: Optional[Bound] = None
    for token in tokens:
        bound = parse_bound(token)
        if bound is None:
            continue
        if bound.op.is_lower:
            lower = bound
        else:
            upper = bound
    if lower is None and upper is None:
        return RawRequirement(", ".join(tokens))
    return RangeRequirement(lower=lower, upper=upper)
