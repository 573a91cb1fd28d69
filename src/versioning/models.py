"""Data models for versions and version requirements.

Versions are ``semantic_version.Version`` instances. Requirements form a
closed family of frozen dataclasses sharing the ``matches`` predicate and
a display form (``raw``).
"""

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from semantic_version import Version


class BoundOp(Enum):
    """Comparison operator of a range bound."""
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="

    @property
    def is_lower(self) -> bool:
        return self in (BoundOp.GT, BoundOp.GTE)


_COMPARATORS = {
    BoundOp.GT: operator.gt,
    BoundOp.GTE: operator.ge,
    BoundOp.LT: operator.lt,
    BoundOp.LTE: operator.le,
}


@dataclass(frozen=True)
class Bound:
    """One side of a range requirement, e.g. ``>= 1.0.0``."""
    op: BoundOp
    version: Version

    def admits(self, version: Version) -> bool:
        return _COMPARATORS[self.op](version, self.version)

    def __str__(self) -> str:
        return f"{self.op.value} {self.version}"


class Requirement:
    """Base class for version requirements."""

    @property
    def raw(self) -> Optional[str]:
        """Display text of the requirement; None means unconstrained."""
        raise NotImplementedError

    def matches(self, version: Version, allow_prerelease: bool = False) -> bool:
        """Return True if ``version`` satisfies the requirement.

        Prerelease versions never match unless ``allow_prerelease`` is set.
        """
        if version.prerelease and not allow_prerelease:
            return False
        return self._matches(version)

    def _matches(self, version: Version) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class AnyRequirement(Requirement):
    """No constraint at all."""

    @property
    def raw(self) -> Optional[str]:
        return None

    def _matches(self, version: Version) -> bool:
        return True


@dataclass(frozen=True)
class ExactRequirement(Requirement):
    """``= 1.2.3`` or a bare version."""
    version: Version

    @property
    def raw(self) -> Optional[str]:
        return f"= {self.version}"

    def _matches(self, version: Version) -> bool:
        return version == self.version


@dataclass(frozen=True)
class CompatibleRequirement(Requirement):
    """Pessimistic ``~>`` requirement.

    ``~> 1.2.3`` allows ``>= 1.2.3, < 1.3.0``; with a zero patch
    (``~> 1.2`` or ``~> 1.2.0``) it allows ``< 2.0.0``.
    """
    version: Version

    @property
    def raw(self) -> Optional[str]:
        return f"~> {self.version}"

    @property
    def upper_bound(self) -> Version:
        base = self.version
        if base.patch != 0:
            return Version(major=base.major, minor=base.minor + 1, patch=0)
        return Version(major=base.major + 1, minor=0, patch=0)

    def _matches(self, version: Version) -> bool:
        return self.version <= version < self.upper_bound


@dataclass(frozen=True)
class RangeRequirement(Requirement):
    """Explicit lower and/or upper bound, e.g. ``>= 1.0, < 2.0``.

    Without any bound it matches everything but still renders as an empty
    constraint rather than as unconstrained.
    """
    lower: Optional[Bound] = None
    upper: Optional[Bound] = None

    @property
    def raw(self) -> Optional[str]:
        return ", ".join(str(b) for b in (self.lower, self.upper) if b is not None)

    def _matches(self, version: Version) -> bool:
        if self.lower is not None and not self.lower.admits(version):
            return False
        if self.upper is not None and not self.upper.admits(version):
            return False
        return True


@dataclass(frozen=True)
class RawRequirement(Requirement):
    """Constraint text that could not be parsed.

    Always reports a match; callers must read this as "cannot evaluate".
    """
    text: str

    @property
    def raw(self) -> Optional[str]:
        return self.text

    def _matches(self, version: Version) -> bool:
        return True
