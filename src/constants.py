"""Constants used in the project."""

import os
from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    USAGE_ERROR = 2
    COMMAND_ERROR = 3


class CleanTargets(Enum):
    """Xcode cache locations handled by the clean command.

    Args:
        Enum (string): Target names accepted on the command line.
    """

    DERIVED_DATA = "derived-data"
    XCODE_CACHE = "xcode-cache"
    LOGS = "logs"
    MODULE_CACHE = "module-cache"
    SPM_CACHE = "spm-cache"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PODFILE_FILE = "Podfile"
    PODFILE_LOCK_FILE = "Podfile.lock"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "DEVKIT_LOG_LEVEL"
    ENV_CONFIG = "DEVKIT_CONFIG"
    DEFAULT_CONFIG_FILE = os.path.join("~", ".devkit.yml")

    # pod-analyze tunables (overridable from config and CLI)
    COMMAND_TIMEOUT_SEC = 60  # Timeout in seconds for every subprocess call
    MAX_WORKERS = 8
    ENV_GIT_HTTP_TOKEN = "GIT_HTTP_TOKEN"
    DEFAULT_GIT_BRANCH = "main"
    NO_EMOJI = False
    ALLOW_PRERELEASE = False

    # Table layout for the pod report
    TABLE_HEADERS = ["Pod", "Locked", "Constraint", "Source", "Latest Sat.", "Latest", "Update", "Status"]
    TABLE_WIDTHS = [32, 10, 16, 18, 18, 14, 8, 8]
    EMPTY_CELL = "—"

    # network aliases
    NETWORK_ALIASES_FILE = os.path.join("~", ".network_aliases.json")

    # clean targets: (description, paths, remove_directory_itself)
    CLEAN_TARGETS = {
        CleanTargets.DERIVED_DATA.value: (
            "Derived Data",
            ["~/Library/Developer/Xcode/DerivedData"],
            False,
        ),
        CleanTargets.XCODE_CACHE.value: (
            "Xcode Cache Files",
            ["~/Library/Caches/com.apple.dt.Xcode"],
            False,
        ),
        CleanTargets.LOGS.value: (
            "Xcode Logs",
            ["~/Library/Logs/Xcode"],
            False,
        ),
        CleanTargets.MODULE_CACHE.value: (
            "Module & Indexing Cache",
            ["~/Library/Developer/Xcode/ModuleCache.noindex"],
            False,
        ),
        CleanTargets.SPM_CACHE.value: (
            "Swift Package Manager Cache",
            ["~/Library/Caches/org.swift.swiftpm", "~/.swiftpm"],
            True,
        ),
    }

    # gitlog layout
    GITLOG_SINCE_DEFAULT = "30d"
    GITLOG_RULE_WIDTH = 100

    # extract: Xcode template placeholder substituted for the shared class-name prefix
    TEMPLATE_PLACEHOLDER = "___VARIABLE_moduleName___"
    SWIFT_SUFFIX = ".swift"
