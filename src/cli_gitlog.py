"""CLI entry point for ``devkit gitlog``: commits per branch or per day."""

from __future__ import annotations

import logging
import sys
from collections import OrderedDict
from datetime import datetime
from typing import Any, List, Optional, Tuple

from common.logging_utils import set_level
from common.shell import CommandRunner, run_command
from common.text import adaptive_width, pad_right, truncate_middle
from constants import Constants, ExitCodes
from repository.git_activity import (
    BranchCommits,
    CommitItem,
    detect_repo_root,
    git_log,
    iso8601,
    list_local_branches,
    parse_since,
    parse_until,
    resolve_author,
)

logger = logging.getLogger(__name__)

HASH_WIDTH = 10
DATE_WIDTH = 10
SUBJECT_CAP = 80
BRANCH_CAP = 30


def _header(author: Optional[str], since: datetime, until: datetime) -> List[str]:
    return [
        f"🗂  Commits {author or '(any)'}  {iso8601(since)} → {iso8601(until)}",
        Constants.EMPTY_CELL * Constants.GITLOG_RULE_WIDTH,
    ]


def _total(data: List[BranchCommits]) -> str:
    return f"Total: {sum(len(b.commits) for b in data)}"


def render_by_branch(data: List[BranchCommits], since: datetime, until: datetime,
                     author: Optional[str]) -> str:
    """One block per branch: short hash, day, subject."""
    lines = _header(author, since, until)
    subject_w = adaptive_width(
        [len(c.subject) for b in data for c in b.commits], 20, SUBJECT_CAP, 20
    )
    for br in data:
        lines.append(f"🌿 {br.branch}  ({len(br.commits)})")
        for c in br.commits:
            lines.append(
                f"  {pad_right(c.hash[:7], HASH_WIDTH)}  {pad_right(c.day, DATE_WIDTH)}  "
                f"{truncate_middle(c.subject, subject_w)}"
            )
        lines.append("")
    lines.append(_total(data))
    return "\n".join(lines) + "\n"


def render_by_date(data: List[BranchCommits], since: datetime, until: datetime,
                   author: Optional[str]) -> str:
    """One block per day (newest first): branch, short hash, subject."""
    lines = _header(author, since, until)
    flat: List[Tuple[str, CommitItem]] = [(b.branch, c) for b in data for c in b.commits]

    grouped: "OrderedDict[str, List[Tuple[str, CommitItem]]]" = OrderedDict()
    for day in sorted({c.day for _, c in flat}, reverse=True):
        grouped[day] = []
    for branch, c in flat:
        grouped[c.day].append((branch, c))

    branch_w = adaptive_width([len(b) for b, _ in flat], 10, BRANCH_CAP, 10)
    subject_w = adaptive_width([len(c.subject) for _, c in flat], 20, SUBJECT_CAP, 20)

    for day, items in grouped.items():
        lines.append(f"📅 {day}")
        for branch, c in items:
            lines.append(
                f"  {pad_right(truncate_middle(branch, branch_w), branch_w)}  "
                f"{pad_right(c.hash[:7], HASH_WIDTH)}  {truncate_middle(c.subject, subject_w)}"
            )
        lines.append("")
    lines.append(_total(data))
    return "\n".join(lines) + "\n"


def collect_commits(repo_root: str, since: datetime, until: datetime, author: Optional[str],
                    limit: int, runner: CommandRunner = run_command) -> List[BranchCommits]:
    return [
        BranchCommits(branch=br, commits=git_log(repo_root, br, since, until,
                                                 author=author, limit=limit, runner=runner))
        for br in list_local_branches(repo_root, runner=runner)
    ]


def run_gitlog(args: Any, runner: CommandRunner = run_command) -> int:
    """Entry point for the gitlog command."""
    if getattr(args, "VERBOSE", False):
        set_level("DEBUG")

    repo_root = detect_repo_root(runner=runner)
    if repo_root is None:
        sys.stderr.write("Error: Not inside a git repo (rev-parse --is-inside-work-tree != true).\n")
        return ExitCodes.FILE_ERROR.value
    logger.debug("[git-activity] repoRoot=%s", repo_root)

    try:
        since = parse_since(getattr(args, "SINCE", None) or Constants.GITLOG_SINCE_DEFAULT)
    except ValueError as e:
        sys.stderr.write(f"Error: {e}\n")
        return ExitCodes.USAGE_ERROR.value
    until = parse_until(getattr(args, "UNTIL", None))
    author = resolve_author(getattr(args, "AUTHOR", None), repo_root, runner=runner)
    logger.debug("[git-activity] author=%s since=%s until=%s", author or "<any>", iso8601(since), iso8601(until))

    data = collect_commits(repo_root, since, until, author, int(getattr(args, "LIMIT", 0) or 0), runner=runner)
    if not data:
        print("No local branches.")
        return ExitCodes.SUCCESS.value

    if getattr(args, "GROUP", "branch") == "date":
        sys.stdout.write(render_by_date(data, since, until, author))
    else:
        sys.stdout.write(render_by_branch(data, since, until, author))
    return ExitCodes.SUCCESS.value
