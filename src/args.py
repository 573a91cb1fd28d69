"""Argument parsing functionality for devkit."""

import argparse

from constants import CleanTargets, Constants


def _common_parser() -> argparse.ArgumentParser:
    """Options shared by every subcommand."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    common.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    common.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    return common


def _add_pod_parser(subparsers, common):
    pod = subparsers.add_parser(
        "pod-analyze",
        aliases=["pod"],
        parents=[common],
        help="Show what would update if Podfile.lock were deleted",
        description=(
            "Scan Podfile and Podfile.lock, fetch latest versions (trunk/git), "
            "and show what would update if you delete Podfile.lock."
        ),
    )
    pod.set_defaults(action="pod-analyze")
    pod.add_argument("-p", "--path",
                     dest="PATH",
                     help="Path to the directory with Podfile (defaults to current directory)",
                     action="store",
                     type=str)
    pod.add_argument("--json",
                     dest="JSON",
                     help="Output JSON report (same as --format json)",
                     action="store_true")
    pod.add_argument("-f", "--format",
                     dest="OUTPUT_FORMAT",
                     help="Output format (table or json). Defaults to table.",
                     action="store",
                     type=str.lower,
                     choices=["table", "json"])
    pod.add_argument("-o", "--output",
                     dest="OUTPUT",
                     help="Write the report to this file instead of stdout",
                     action="store",
                     type=str)
    pod.add_argument("--only-outdated",
                     dest="ONLY_OUTDATED",
                     help="Show only outdated / updatable entries",
                     action="store_true")
    pod.add_argument("--allow-prerelease",
                     dest="ALLOW_PRERELEASE",
                     help="Include beta/RC versions when comparing",
                     action="store_true")
    pod.add_argument("--verbose",
                     dest="VERBOSE",
                     help="Verbose logs to stderr",
                     action="store_true")
    pod.add_argument("--no-emoji",
                     dest="NO_EMOJI",
                     help="Disable emojis in statuses (useful for CI)",
                     action="store_true")
    pod.add_argument("--max-workers",
                     dest="MAX_WORKERS",
                     help=f"Concurrent lookups (default: {Constants.MAX_WORKERS})",
                     action="store",
                     type=int)
    pod.add_argument("--timeout",
                     dest="TIMEOUT",
                     help=f"Timeout in seconds per external command (default: {Constants.COMMAND_TIMEOUT_SEC})",
                     action="store",
                     type=float)


def _add_clean_parser(subparsers, common):
    clean = subparsers.add_parser(
        "clean",
        parents=[common],
        help="Clean Xcode caches",
        description="Perform a cleanup of Xcode cache files.",
    )
    clean.set_defaults(action="clean")
    clean.add_argument("targets",
                       metavar="TARGET",
                       nargs="*",
                       help="Caches to clean (default: all): " + ", ".join(t.value for t in CleanTargets))
    clean.add_argument("--dry-run",
                       dest="DRY_RUN",
                       help="List what would be removed without deleting anything",
                       action="store_true")


def _add_gitlog_parser(subparsers, common):
    gitlog = subparsers.add_parser(
        "gitlog",
        aliases=["ga"],
        parents=[common],
        help="Commits in the current git repo for a period",
        description="Commits in the CURRENT git repo for a period, grouped by branch or date.",
    )
    gitlog.set_defaults(action="gitlog")
    gitlog.add_argument("--author",
                        dest="AUTHOR",
                        help="Author (email or name). Defaults to git config user.email|user.name.",
                        action="store",
                        type=str)
    gitlog.add_argument("--since",
                        dest="SINCE",
                        help="Start: 30d, 2w, 6m, 1y or date 2025-07-01",
                        action="store",
                        type=str,
                        default=Constants.GITLOG_SINCE_DEFAULT)
    gitlog.add_argument("--until",
                        dest="UNTIL",
                        help="End date (YYYY-MM-DD). Defaults to now.",
                        action="store",
                        type=str)
    gitlog.add_argument("--limit",
                        dest="LIMIT",
                        help="Per-branch commit limit (0 = unlimited)",
                        action="store",
                        type=int,
                        default=0)
    gitlog.add_argument("--group",
                        dest="GROUP",
                        help="Grouping: branch or date",
                        action="store",
                        type=str.lower,
                        choices=["branch", "date"],
                        default="branch")
    gitlog.add_argument("--verbose",
                        dest="VERBOSE",
                        help="Verbose logs to stderr",
                        action="store_true")


def _add_network_parser(subparsers, common):
    network = subparsers.add_parser(
        "network",
        parents=[common],
        help="Add network aliases and switch between them",
        description="Add network service aliases and switch between them.",
    )
    network.set_defaults(action="network")
    net_sub = network.add_subparsers(dest="network_action", metavar="{add,switch,list,reset}")

    add = net_sub.add_parser("add", help="Add a new network alias")
    add.add_argument("-n", "--name",
                     dest="NAME",
                     help="Network service name as seen in System Settings",
                     required=True)
    add.add_argument("-k", "--key",
                     dest="KEY",
                     help="Shortcut key for switching",
                     required=True)

    switch = net_sub.add_parser("switch", help="Switch between saved network aliases")
    switch.add_argument("KEY", help="The alias key to activate")

    net_sub.add_parser("list", help="List all saved network aliases")
    net_sub.add_parser("reset", help="Enable all saved network aliases")


def _add_extract_parser(subparsers, common):
    extract = subparsers.add_parser(
        "extract",
        parents=[common],
        help="Turn Swift sources into a reusable Xcode template",
        description=(
            "Analyze Swift files, extract class names, and replace their common prefix "
            "with the Xcode template placeholder."
        ),
    )
    extract.set_defaults(action="extract")
    extract.add_argument("PATH",
                         help="The path to the directory or Swift file to analyze")
    extract.add_argument("--dry-run",
                         dest="DRY_RUN",
                         help="Show the prefix and renames without changing any file",
                         action="store_true")


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with one subparser per command."""
    parser = argparse.ArgumentParser(
        prog="devkit",
        description="devkit - everyday tooling for iOS/macOS engineers",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", metavar="COMMAND")
    subparsers.required = True
    common = _common_parser()

    _add_pod_parser(subparsers, common)
    _add_clean_parser(subparsers, common)
    _add_gitlog_parser(subparsers, common)
    _add_network_parser(subparsers, common)
    _add_extract_parser(subparsers, common)
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
