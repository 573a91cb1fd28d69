"""CocoaPods manifest/lockfile parsing and trunk registry access."""

from .client import fetch_trunk_info, parse_trunk_info
from .lockfile_parser import parse_podfile_lock
from .models import DependencySpec, GitRef, GitRefKind, GitSource, LockInfo, RegistrySource, Source
from .podfile_parser import parse_podfile

__all__ = [
    "DependencySpec",
    "GitRef",
    "GitRefKind",
    "GitSource",
    "LockInfo",
    "RegistrySource",
    "Source",
    "fetch_trunk_info",
    "parse_podfile",
    "parse_podfile_lock",
    "parse_trunk_info",
]
