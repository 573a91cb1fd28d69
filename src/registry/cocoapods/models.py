"""Data models for CocoaPods dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Union

from versioning.models import AnyRequirement, Requirement


class GitRefKind(Enum):
    """What a git-sourced pod is pinned to."""
    BRANCH = "branch"
    TAG = "tag"
    COMMIT = "commit"


@dataclass(frozen=True)
class GitRef:
    """Branch name, tag name or commit hash of a git source."""
    kind: GitRefKind
    value: str

    @property
    def remote_ref(self) -> str:
        """Fully qualified ref for ``git ls-remote`` (commits have none)."""
        if self.kind == GitRefKind.BRANCH:
            return f"refs/heads/{self.value}"
        if self.kind == GitRefKind.TAG:
            return f"refs/tags/{self.value}"
        return self.value

    def describe(self) -> str:
        if self.kind == GitRefKind.COMMIT:
            return f"commit={self.value[:7]}"
        return f"{self.kind.value}={self.value}"


@dataclass(frozen=True)
class RegistrySource:
    """Pod resolved from the CocoaPods trunk by name."""

    def describe(self) -> str:
        return "trunk"


@dataclass(frozen=True)
class GitSource:
    """Pod referenced directly from a git repository."""
    url: str
    ref: GitRef

    def describe(self) -> str:
        return f"git:{self.ref.describe()}"


Source = Union[RegistrySource, GitSource]


@dataclass(frozen=True)
class DependencySpec:
    """One ``pod`` declaration of the Podfile."""
    name: str
    requirement: Requirement = field(default_factory=AnyRequirement)
    source: Source = field(default_factory=RegistrySource)


@dataclass
class LockInfo:
    """Locked versions and checkout commits recorded in Podfile.lock."""
    locked_versions: Dict[str, str] = field(default_factory=dict)
    locked_shas: Dict[str, str] = field(default_factory=dict)

    def names(self):
        return set(self.locked_versions)
