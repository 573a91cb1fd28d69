"""Turn a set of Swift sources into a reusable Xcode template.

Class declarations are collected with a line scan, the prefix shared by most
of the class names is picked and every occurrence of it (in file contents and
file names) is replaced with the Xcode template placeholder.
"""
from __future__ import annotations

import logging
import os
import re
from collections import Counter
from typing import Dict, List, Optional

from constants import Constants

logger = logging.getLogger(__name__)

_CLASS_RE = re.compile(r"\bclass\s+([A-Za-z_]\w*)")
_LINE_COMMENT_RE = re.compile(r"//.*$", re.MULTILINE)
# Words that follow "class" as a modifier (class func, class var, ...) rather than a declaration.
_NOT_A_NAME = frozenset({
    "func", "var", "let", "subscript", "init", "deinit", "override", "final",
    "static", "private", "fileprivate", "internal", "public", "open",
    "required", "convenience", "protocol",
})


def property_name(name: str) -> str:
    """Lower-camel variant used for properties: ``MyModule`` -> ``myModule``."""
    return name[:1].lower() + name[1:]


def find_swift_files(path: str) -> List[str]:
    """Swift files under ``path`` (recursively), or ``[path]`` for a single file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If ``path`` is a file that is not a Swift source.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"The path '{path}' does not exist.")
    if os.path.isfile(path):
        if not path.endswith(Constants.SWIFT_SUFFIX):
            raise ValueError("The provided path is not a Swift file or directory.")
        return [path]

    found: List[str] = []
    for root, dirs, files in os.walk(path):
        dirs.sort()
        found.extend(os.path.join(root, f) for f in sorted(files) if f.endswith(Constants.SWIFT_SUFFIX))
    return found


def extract_class_names(source: str) -> List[str]:
    """Names of the classes declared in Swift ``source``, in order of appearance."""
    code = _LINE_COMMENT_RE.sub("", source)
    return [m.group(1) for m in _CLASS_RE.finditer(code) if m.group(1) not in _NOT_A_NAME]


def common_prefix(a: str, b: str) -> str:
    return os.path.commonprefix([a, b])


def most_common_prefixes(names: List[str]) -> Dict[str, List[str]]:
    """Prefixes shared by the most neighbouring pairs of the sorted names.

    Returns:
        Mapping of each winning prefix to the sorted names that share it
    """
    ordered = sorted(names)
    counts: Counter = Counter()
    members: Dict[str, set] = {}
    for first, second in zip(ordered, ordered[1:]):
        prefix = common_prefix(first, second)
        if not prefix:
            continue
        counts[prefix] += 1
        members.setdefault(prefix, set()).update((first, second))
    if not counts:
        return {}
    best = max(counts.values())
    return {p: sorted(members[p]) for p, c in counts.items() if c == best}


def pick_prefix(names: List[str]) -> Optional[str]:
    """The single prefix to templatize: the longest of the most common ones."""
    candidates = most_common_prefixes(names)
    if not candidates:
        return None
    return sorted(candidates, key=lambda p: (-len(p), p))[0]


def replace_prefix(text: str, prefix: str, replacement: str = Constants.TEMPLATE_PLACEHOLDER) -> str:
    """Replace ``prefix`` line by line, falling back to its lower-camel variant."""
    lower_prefix = property_name(prefix)
    lower_replacement = property_name(replacement)
    lines = []
    for line in text.split("\n"):
        if prefix in line:
            line = line.replace(prefix, replacement)
        elif lower_prefix in line:
            line = line.replace(lower_prefix, lower_replacement)
        lines.append(line)
    return "\n".join(lines)


def templated_path(path: str, prefix: str, replacement: str = Constants.TEMPLATE_PLACEHOLDER) -> Optional[str]:
    """New path for ``path`` when its file name contains ``prefix``, else None."""
    directory, name = os.path.split(path)
    if prefix not in name:
        return None
    return os.path.join(directory, name.replace(prefix, replacement))


def templatize_file(path: str, prefix: str, dry_run: bool = False) -> str:
    """Rewrite one file in place and rename it; returns the final path.

    Raises:
        OSError: If the file cannot be read, written or renamed.
    """
    with open(path, "r", encoding="utf-8") as f:
        original = f.read()
    updated = replace_prefix(original, prefix)
    target = templated_path(path, prefix) or path

    if dry_run:
        return target
    if updated != original:
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated)
    if target != path:
        os.replace(path, target)
        logger.debug("[extract] renamed %s -> %s", path, target)
    return target
