"""CLI entry point for ``devkit extract``: prepare Swift sources as an Xcode template."""

from __future__ import annotations

import logging
import sys
from typing import Any, List

from constants import Constants, ExitCodes
from repository.swift_template import extract_class_names, find_swift_files, pick_prefix, templatize_file

logger = logging.getLogger(__name__)


def _read(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def run_extract(args: Any) -> int:
    """Entry point for the extract command."""
    try:
        files = find_swift_files(args.PATH)
    except FileNotFoundError as e:
        sys.stderr.write(f"Error: {e}\n")
        return ExitCodes.FILE_ERROR.value
    except ValueError as e:
        sys.stderr.write(f"Error: {e}\n")
        return ExitCodes.USAGE_ERROR.value

    class_names: List[str] = []
    try:
        for path in files:
            class_names.extend(extract_class_names(_read(path)))
    except (OSError, UnicodeDecodeError) as e:
        sys.stderr.write(f"Error: could not read Swift sources: {e}\n")
        return ExitCodes.FILE_ERROR.value

    if not class_names:
        print("No class declarations found in the files.")
        return ExitCodes.SUCCESS.value

    print("Classes Found:")
    for name in class_names:
        print(f"- {name}")

    prefix = pick_prefix(class_names)
    if not prefix:
        print("No common class-name prefix found; nothing to replace.")
        return ExitCodes.SUCCESS.value

    dry_run = bool(getattr(args, "DRY_RUN", False))
    print(f"Replacing prefix '{prefix}' with {Constants.TEMPLATE_PLACEHOLDER}" + (" (dry run)" if dry_run else ""))
    failed = 0
    for path in files:
        try:
            target = templatize_file(path, prefix, dry_run=dry_run)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error updating file %s: %s", path, e)
            failed += 1
            continue
        if target != path:
            print(f"  {path} -> {target}")
    return ExitCodes.FILE_ERROR.value if failed else ExitCodes.SUCCESS.value
