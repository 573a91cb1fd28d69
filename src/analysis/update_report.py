"""Pod update analysis.

Joins the Podfile declarations, the Podfile.lock snapshot and the resolver's
answers into one report row per pod. Status compares the locked version
with the newest published one, while the would-update flag compares it with
the newest version the Podfile constraint accepts; the two can disagree.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from constants import Constants
from common.logging_utils import Timer, extra_context, is_debug_enabled
from registry.cocoapods.models import DependencySpec, GitSource, LockInfo, RegistrySource
from versioning.models import AnyRequirement, RawRequirement
from versioning.parser import parse_version
from versioning.resolvers.cocoapods import CocoaPodsResolver

logger = logging.getLogger(__name__)

NOTE_TRUNK_FAILED = "trunk info failed"
NOTE_GIT_FAILED = "git head check failed"


class Status(Enum):
    """Per-pod update status."""
    UP_TO_DATE = "upToDate"
    OUTDATED = "outdated"
    NOT_INSTALLED = "notInstalled"
    UNKNOWN = "unknown"


@dataclass
class ReportRow:
    """Analysis outcome for a single pod."""
    name: str
    locked: Optional[str]
    locked_sha: Optional[str]
    constraint: Optional[str]
    source: str
    latest_satisfying: Optional[str]
    latest: Optional[str]
    would_update: bool
    status: Status
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "locked": self.locked,
            "lockedSHA": self.locked_sha,
            "constraint": self.constraint,
            "source": self.source,
            "latestSatisfying": self.latest_satisfying,
            "latest": self.latest,
            "wouldUpdateIfDeleteLock": self.would_update,
            "status": self.status.value,
            "note": self.note,
        }


@dataclass
class Report:
    """All rows of one analysis run."""
    rows: List[ReportRow] = field(default_factory=list)
    generated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generatedAt": self.generated_at,
            "rows": [row.to_dict() for row in self.rows],
        }


def _join_notes(*notes: Optional[str]) -> Optional[str]:
    present = [n for n in notes if n]
    return "; ".join(present) if present else None


def _evaluate_trunk(spec: DependencySpec, locked: Optional[str], resolver: CocoaPodsResolver,
                    allow_prerelease: bool):
    """Return (latest, latest_satisfying, status, note) for a trunk pod."""
    versions = resolver.trunk_versions(spec.name)
    if versions is None:
        status = Status.NOT_INSTALLED if locked is None else Status.UNKNOWN
        return None, None, status, NOTE_TRUNK_FAILED

    latest_v = max(versions)
    latest = str(latest_v)
    if isinstance(spec.requirement, AnyRequirement):
        latest_satisfying: Optional[str] = latest
    else:
        matching = [v for v in versions if spec.requirement.matches(v, allow_prerelease)]
        latest_satisfying = str(max(matching)) if matching else None

    if locked is None:
        status = Status.NOT_INSTALLED
    else:
        locked_v = parse_version(locked)
        if locked_v is None:
            status = Status.UNKNOWN
        else:
            status = Status.UP_TO_DATE if locked_v == latest_v else Status.OUTDATED
    return latest, latest_satisfying, status, None


def _evaluate_git(source: GitSource, locked_sha: Optional[str], resolver: CocoaPodsResolver):
    """Return (head, status, note) for a git pod."""
    head = resolver.git_head(source)
    if head is None:
        status = Status.NOT_INSTALLED if locked_sha is None else Status.UNKNOWN
        return None, status, NOTE_GIT_FAILED
    if locked_sha is None:
        return head, Status.UNKNOWN, None
    return head, (Status.UP_TO_DATE if locked_sha == head else Status.OUTDATED), None


def would_update(spec: DependencySpec, locked: Optional[str], locked_sha: Optional[str],
                 latest_satisfying: Optional[str]) -> bool:
    """Whether deleting Podfile.lock and re-resolving would change this pod."""
    if isinstance(spec.source, GitSource):
        if locked_sha is None or latest_satisfying is None:
            return False
        return locked_sha != latest_satisfying
    if locked is None or latest_satisfying is None:
        return False
    locked_v = parse_version(locked)
    target_v = parse_version(latest_satisfying)
    if locked_v is None or target_v is None:
        return False
    return locked_v < target_v


def evaluate_pod(name: str, spec: Optional[DependencySpec], lock: LockInfo,
                 resolver: CocoaPodsResolver, allow_prerelease: bool = False) -> ReportRow:
    """Build the report row of a single pod.

    Pods that only appear in the lockfile are treated as unconstrained
    trunk pods.
    """
    if spec is None:
        spec = DependencySpec(name=name, requirement=AnyRequirement(), source=RegistrySource())
    locked = lock.locked_versions.get(name)
    locked_sha = lock.locked_shas.get(name)

    if isinstance(spec.source, GitSource):
        head, status, note = _evaluate_git(spec.source, locked_sha, resolver)
        latest = latest_satisfying = head
    else:
        latest, latest_satisfying, status, note = _evaluate_trunk(spec, locked, resolver, allow_prerelease)

    if isinstance(spec.requirement, RawRequirement):
        note = _join_notes(note, f"constraint not evaluated: {spec.requirement.text}")

    return ReportRow(
        name=name,
        locked=locked,
        locked_sha=locked_sha,
        constraint=spec.requirement.raw,
        source=spec.source.describe(),
        latest_satisfying=latest_satisfying,
        latest=latest,
        would_update=would_update(spec, locked, locked_sha, latest_satisfying),
        status=status,
        note=note,
    )


def filter_outdated(rows: Iterable[ReportRow]) -> List[ReportRow]:
    """Keep rows that are outdated or would change if the lockfile were removed."""
    return [row for row in rows if row.status == Status.OUTDATED or row.would_update]


def sorted_names(specs: Mapping[str, DependencySpec], lock: LockInfo) -> List[str]:
    """Union of declared and locked pod names, sorted case-insensitively."""
    return sorted(set(specs) | lock.names(), key=lambda n: (n.lower(), n))


def build_report(
    specs: Mapping[str, DependencySpec],
    lock: LockInfo,
    resolver: CocoaPodsResolver,
    allow_prerelease: bool = False,
    only_outdated: bool = False,
    max_workers: Optional[int] = None,
) -> Report:
    """Evaluate every pod and assemble the report.

    Lookups run on a thread pool bounded by ``max_workers`` (default
    Constants.MAX_WORKERS); rows keep the sorted name order.
    """
    names = sorted_names(specs, lock)
    rows: List[ReportRow] = []

    with Timer() as t:
        if names:
            workers = max(1, min(len(names), max_workers or Constants.MAX_WORKERS))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                rows = list(executor.map(
                    lambda n: evaluate_pod(n, specs.get(n), lock, resolver, allow_prerelease),
                    names,
                ))

    if is_debug_enabled(logger):
        logger.debug(
            "Evaluated %d pods",
            len(rows),
            extra=extra_context(
                event="function_exit",
                component="update_report",
                action="build_report",
                count=len(rows),
                duration_ms=t.duration_ms(),
            ),
        )

    if only_outdated:
        rows = filter_outdated(rows)
    return Report(rows=rows)
