"""devkit - everyday command line tooling for iOS/macOS engineers.

Subcommands:
    pod-analyze  What would change if Podfile.lock were deleted
    clean        Remove Xcode caches
    gitlog       Commits in the current repository for a period
    network      Switch macOS network services by alias
    extract      Prepare Swift sources as an Xcode template

Returns:
    int: Exit code
"""
import logging
import os
import sys

from args import parse_args
from cli_clean import run_clean
from cli_extract import run_extract
from cli_gitlog import run_gitlog
from cli_network import run_network
from cli_pod import run_pod_analyze
from common.config_loader import apply_config, load_config, resolve_config_path
from common.logging_utils import configure_logging, extra_context, is_debug_enabled, set_level
from constants import Constants, ExitCodes
from errors import ConfigError

_HANDLERS = {
    "pod-analyze": run_pod_analyze,
    "pod": run_pod_analyze,
    "clean": run_clean,
    "gitlog": run_gitlog,
    "ga": run_gitlog,
    "network": run_network,
    "extract": run_extract,
}


def setup_logging(args) -> None:
    """Configure logging; CLI --loglevel wins over the environment and --verbose forces DEBUG."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging(getattr(args, "LOG_FILE", None))
    set_level(getattr(args, "LOG_LEVEL", None))
    if getattr(args, "VERBOSE", False):
        set_level("DEBUG")


def apply_overrides(args) -> None:
    """Apply CLI tunables onto Constants (CLI has highest precedence)."""
    if getattr(args, "MAX_WORKERS", None) is not None:
        Constants.MAX_WORKERS = max(1, int(args.MAX_WORKERS))
    if getattr(args, "TIMEOUT", None) is not None:
        Constants.COMMAND_TIMEOUT_SEC = float(args.TIMEOUT)
    if getattr(args, "NO_EMOJI", False):
        Constants.NO_EMOJI = True
    if getattr(args, "ALLOW_PRERELEASE", False):
        Constants.ALLOW_PRERELEASE = True


def run(argv=None) -> int:
    """Parse arguments, load configuration and dispatch to the chosen command."""
    logger = logging.getLogger(__name__)
    args = parse_args(argv)
    setup_logging(args)

    config_path = resolve_config_path(getattr(args, "CONFIG", None))
    if config_path:
        try:
            apply_config(load_config(config_path))
        except ConfigError as e:
            sys.stderr.write(f"Error: {e}\n")
            return ExitCodes.FILE_ERROR.value
        logger.debug("Loaded configuration from %s", config_path)

    apply_overrides(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action),
        )

    handler = _HANDLERS[args.action]
    return handler(args)


def main():
    """Main function of the program."""
    sys.exit(run())


if __name__ == "__main__":
    main()
