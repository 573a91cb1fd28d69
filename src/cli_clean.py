"""CLI entry point for ``devkit clean``: removes Xcode caches."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from typing import Any, List

from constants import Constants, ExitCodes

logger = logging.getLogger(__name__)


def _remove(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.remove(path)


def clean_path(path: str, remove_self: bool = False, dry_run: bool = False) -> int:
    """Delete the contents of ``path`` (or ``path`` itself when ``remove_self``).

    Missing paths are skipped. Entries that cannot be removed are logged and
    skipped so one locked file does not stop the cleanup.

    Returns:
        Number of entries removed (or that would be removed in dry-run mode).
    """
    path = os.path.expanduser(path)
    if not os.path.lexists(path):
        logger.debug("Nothing to clean at %s", path)
        return 0

    entries: List[str] = [path] if remove_self else [
        os.path.join(path, entry) for entry in sorted(os.listdir(path))
    ]
    removed = 0
    for entry in entries:
        if dry_run:
            print(f"  would remove {entry}")
            removed += 1
            continue
        try:
            _remove(entry)
            removed += 1
        except OSError as e:
            logger.warning("Could not remove %s: %s", entry, e)
    return removed


def clean_target(name: str, dry_run: bool = False) -> int:
    """Clean one named target from Constants.CLEAN_TARGETS."""
    description, paths, remove_self = Constants.CLEAN_TARGETS[name]
    print(f"🧹 Cleaning {description}...")
    removed = sum(clean_path(p, remove_self=remove_self, dry_run=dry_run) for p in paths)
    print(f"✅ {description} cleaned! ({removed} entries)")
    return removed


def run_clean(args: Any) -> int:
    """Entry point for the clean command."""
    targets = list(getattr(args, "targets", None) or Constants.CLEAN_TARGETS)
    unknown = [t for t in targets if t not in Constants.CLEAN_TARGETS]
    if unknown:
        sys.stderr.write(
            f"Error: Unknown clean target(s): {', '.join(unknown)}.\n"
            "Supported targets: " + ", ".join(Constants.CLEAN_TARGETS) + "\n"
        )
        return ExitCodes.USAGE_ERROR.value

    dry_run = bool(getattr(args, "DRY_RUN", False))
    print("🚀 Performing Xcode cleanup..." + (" (dry run)" if dry_run else ""))
    total = 0
    for target in targets:
        total += clean_target(target, dry_run=dry_run)
    print(f"🎉 Xcode cleanup complete! ({total} entries)")
    return ExitCodes.SUCCESS.value
