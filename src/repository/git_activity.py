"""Local git history queries used by ``devkit gitlog``."""
from __future__ import annotations

import calendar
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from common.shell import CommandRunner, run_command

logger = logging.getLogger(__name__)

FIELD_SEP = "\x1f"  # unit separator
RECORD_SEP = "\x1e"  # record separator

_RELATIVE_RE = re.compile(r"^(\d+)([dwmy])$")


@dataclass(frozen=True)
class CommitItem:
    """One commit as printed by ``git log``."""
    hash: str
    date: str  # ISO 8601 committer date
    subject: str
    author_name: str
    author_email: str

    @property
    def day(self) -> str:
        return self.date[:10]


@dataclass
class BranchCommits:
    branch: str
    commits: List[CommitItem] = field(default_factory=list)


def _git(runner: CommandRunner, args: List[str]) -> Optional[str]:
    result = runner(["git"] + args, None)
    if result is None or not result.ok:
        return None
    return result.stdout


def detect_repo_root(runner: CommandRunner = run_command) -> Optional[str]:
    """Return the top-level directory of the enclosing work tree, or None."""
    inside = _git(runner, ["rev-parse", "--is-inside-work-tree"])
    if inside is None or inside.strip() != "true":
        return None
    root = _git(runner, ["rev-parse", "--show-toplevel"])
    if root is None or not root.strip():
        return None
    return root.strip()


def list_local_branches(repo_root: str, runner: CommandRunner = run_command) -> List[str]:
    """Local branches, most recently committed first."""
    out = _git(runner, [
        "-C", repo_root, "for-each-ref", "--sort=-committerdate",
        "--format=%(refname:short)", "refs/heads/",
    ])
    if not out:
        return []
    return [line.strip() for line in out.splitlines() if line.strip()]


def parse_git_log(text: str) -> List[CommitItem]:
    """Parse ``git log`` output written with the field/record separators."""
    items: List[CommitItem] = []
    for raw in text.split(RECORD_SEP):
        fields = raw.strip("\n").split(FIELD_SEP)
        if len(fields) < 5:
            continue
        items.append(CommitItem(
            hash=fields[0].strip(),
            date=fields[1].strip(),
            subject=fields[2].strip(),
            author_name=fields[3],
            author_email=fields[4].strip(),
        ))
    return items


def git_log(repo_root: str, branch: str, since: datetime, until: datetime,
            author: Optional[str] = None, limit: int = 0,
            runner: CommandRunner = run_command) -> List[CommitItem]:
    """Non-merge commits of ``branch`` committed between ``since`` and ``until``."""
    fmt = FIELD_SEP.join(["%H", "%cd", "%s", "%an", "%ae"]) + RECORD_SEP
    args = [
        "-C", repo_root, "log", branch,
        "--no-merges",
        "--date=iso-strict",
        f"--pretty=format:{fmt}",
        "--since", iso8601(since),
        "--until", iso8601(until),
    ]
    if author:
        args += ["--author", author]
    if limit > 0:
        args += ["-n", str(limit)]

    out = _git(runner, args)
    if not out:
        return []
    logger.debug("[git] %s: %d bytes", branch, len(out))
    return parse_git_log(out)


def resolve_author(explicit: Optional[str], repo_root: str,
                   runner: CommandRunner = run_command) -> Optional[str]:
    """Explicit author, else repo then global user.email / user.name, else None."""
    if explicit:
        return explicit
    lookups = [
        ["-C", repo_root, "config", "user.email"],
        ["-C", repo_root, "config", "user.name"],
        ["config", "--global", "user.email"],
        ["config", "--global", "user.name"],
    ]
    for args in lookups:
        value = _git(runner, args)
        if value and value.strip():
            return value.strip()
    logger.debug("[git-activity] author not resolved; showing all authors")
    return None


def _months_ago(now: datetime, months: int) -> datetime:
    total = now.year * 12 + (now.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


def parse_since(text: str, now: Optional[datetime] = None) -> datetime:
    """Parse ``30d``, ``2w``, ``6m``, ``1y`` or ``YYYY-MM-DD``.

    Raises:
        ValueError: If the value matches none of the accepted forms.
    """
    now = now or datetime.now().astimezone()
    t = text.strip().lower()
    m = _RELATIVE_RE.match(t)
    if m:
        num, unit = int(m.group(1)), m.group(2)
        if unit == "d":
            return now - timedelta(days=num)
        if unit == "w":
            return now - timedelta(weeks=num)
        if unit == "m":
            return _months_ago(now, num)
        return _months_ago(now, num * 12)
    try:
        return datetime.strptime(t, "%Y-%m-%d").astimezone()
    except ValueError as e:
        raise ValueError(f"Bad --since: {text}. Examples: 30d, 2w, 6m, 1y, 2025-07-01") from e


def parse_until(text: Optional[str], now: Optional[datetime] = None) -> datetime:
    """Parse an optional ``YYYY-MM-DD``; anything else means now."""
    now = now or datetime.now().astimezone()
    if not text:
        return now
    try:
        return datetime.strptime(text.strip(), "%Y-%m-%d").astimezone()
    except ValueError:
        return now


def iso8601(value: datetime) -> str:
    return value.isoformat(timespec="seconds")
