"""CLI entry point for ``devkit pod-analyze``.

Reads Podfile and Podfile.lock, asks the trunk and git remotes for the
newest versions and prints what would change if Podfile.lock were deleted.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Optional, Tuple

from analysis.update_report import Report, build_report
from common.shell import CommandRunner, run_command
from constants import Constants, ExitCodes
from registry.cocoapods.lockfile_parser import parse_podfile_lock
from registry.cocoapods.podfile_parser import parse_podfile
from report_export import export_report
from versioning.cache import VersionCache
from versioning.resolvers.cocoapods import CocoaPodsResolver

logger = logging.getLogger(__name__)


def resolve_input_paths(path: Optional[str]) -> Tuple[str, str]:
    """Return (Podfile path, Podfile.lock path) for ``path`` or the cwd."""
    directory = os.path.abspath(os.path.expanduser(path or os.getcwd()))
    return (
        os.path.join(directory, Constants.PODFILE_FILE),
        os.path.join(directory, Constants.PODFILE_LOCK_FILE),
    )


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _output_format(args: Any) -> str:
    if getattr(args, "JSON", False):
        return "json"
    if getattr(args, "OUTPUT_FORMAT", None):
        return args.OUTPUT_FORMAT
    output = getattr(args, "OUTPUT", None)
    if output and output.lower().endswith(".json"):
        return "json"
    return "table"


def analyze(podfile_text: str, lock_text: str, runner: CommandRunner = run_command,
            allow_prerelease: bool = False, only_outdated: bool = False,
            max_workers: Optional[int] = None, timeout: Optional[float] = None) -> Report:
    """Run the full analysis over already loaded Podfile and Podfile.lock text."""
    specs = parse_podfile(podfile_text)
    lock = parse_podfile_lock(lock_text)
    logger.debug("Parsed %d declared and %d locked pods", len(specs), len(lock.locked_versions))

    resolver = CocoaPodsResolver(
        cache=VersionCache(),
        runner=runner,
        allow_prerelease=allow_prerelease,
        timeout=timeout,
    )
    return build_report(
        specs,
        lock,
        resolver,
        allow_prerelease=allow_prerelease,
        only_outdated=only_outdated,
        max_workers=max_workers,
    )


def run_pod_analyze(args: Any, runner: CommandRunner = run_command) -> int:
    """Entry point for the pod-analyze command.

    Args:
        args: Parsed CLI arguments namespace.
        runner: Subprocess collaborator (replaced in tests).

    Returns:
        Process exit code.
    """
    podfile_path, lock_path = resolve_input_paths(getattr(args, "PATH", None))
    for required, label in ((podfile_path, Constants.PODFILE_FILE), (lock_path, Constants.PODFILE_LOCK_FILE)):
        if not os.path.isfile(required):
            sys.stderr.write(f"Error: {label} not found: {required}\n")
            return ExitCodes.FILE_ERROR.value

    try:
        podfile_text = _read_text(podfile_path)
        lock_text = _read_text(lock_path)
    except (OSError, UnicodeDecodeError) as e:
        sys.stderr.write(f"Error: could not read input files: {e}\n")
        return ExitCodes.FILE_ERROR.value

    allow_prerelease = bool(getattr(args, "ALLOW_PRERELEASE", False) or Constants.ALLOW_PRERELEASE)
    report = analyze(
        podfile_text,
        lock_text,
        runner=runner,
        allow_prerelease=allow_prerelease,
        only_outdated=bool(getattr(args, "ONLY_OUTDATED", False)),
        max_workers=getattr(args, "MAX_WORKERS", None),
        timeout=getattr(args, "TIMEOUT", None),
    )

    try:
        export_report(
            report,
            fmt=_output_format(args),
            path=getattr(args, "OUTPUT", None),
            no_emoji=bool(getattr(args, "NO_EMOJI", False) or Constants.NO_EMOJI),
        )
    except OSError as e:
        logger.error("Report couldn't be written to disk: %s", e)
        return ExitCodes.FILE_ERROR.value

    return ExitCodes.SUCCESS.value
