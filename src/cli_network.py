"""CLI entry point for ``devkit network``: switch macOS network services by alias."""

from __future__ import annotations

import logging
import sys
from typing import Any, List

from common.alias_store import NetworkAlias, load_aliases, save_aliases
from common.shell import CommandRunner, run_command
from constants import ExitCodes

logger = logging.getLogger(__name__)


def set_service_enabled(name: str, enabled: bool, runner: CommandRunner = run_command) -> bool:
    """Toggle a network service through ``networksetup``; returns success."""
    result = runner(
        ["networksetup", "-setnetworkserviceenabled", name, "on" if enabled else "off"],
        None,
    )
    if result is None or not result.ok:
        logger.warning("networksetup failed for %s", name)
        return False
    return True


def add_alias(key: str, name: str) -> int:
    aliases = load_aliases()
    if any(a.key == key for a in aliases):
        print(f"❌ Alias key '{key}' already exists. Choose a different key.")
        return ExitCodes.FILE_ERROR.value
    aliases.append(NetworkAlias(key=key, name=name))
    try:
        save_aliases(aliases)
    except OSError as e:
        sys.stderr.write(f"Error: could not save network aliases: {e}\n")
        return ExitCodes.FILE_ERROR.value
    print(f"✅ Added network alias: {key} → {name}")
    return ExitCodes.SUCCESS.value


def switch_alias(key: str, runner: CommandRunner = run_command) -> int:
    aliases = load_aliases()
    selected = next((a for a in aliases if a.key == key), None)
    if selected is None:
        print(f"❌ No network alias found for key '{key}'. Use 'network list' to check available aliases.")
        return ExitCodes.FILE_ERROR.value

    for alias in aliases:
        set_service_enabled(alias.name, False, runner=runner)
    if not set_service_enabled(selected.name, True, runner=runner):
        return ExitCodes.COMMAND_ERROR.value
    print(f"🔄 Switched to: {selected.name} ✅")
    return ExitCodes.SUCCESS.value


def format_aliases(aliases: List[NetworkAlias]) -> str:
    if not aliases:
        return "⚠️  No network aliases found. Use 'network add' to add one.\n"
    lines = ["📋 Saved Network Aliases:"]
    lines.extend(f"🔹 {a.key} → {a.name}" for a in aliases)
    return "\n".join(lines) + "\n"


def reset_aliases(runner: CommandRunner = run_command) -> int:
    aliases = load_aliases()
    if not aliases:
        print("⚠️ No saved networks found. Use 'network add' to add aliases.")
        return ExitCodes.SUCCESS.value
    for alias in aliases:
        if set_service_enabled(alias.name, True, runner=runner):
            print(f"✅ Activated: {alias.name}")
    print("🌍 All saved networks are now enabled! ✅")
    return ExitCodes.SUCCESS.value


def run_network(args: Any, runner: CommandRunner = run_command) -> int:
    """Entry point for the network command."""
    action = getattr(args, "network_action", None) or "list"
    if action == "add":
        return add_alias(args.KEY, args.NAME)
    if action == "switch":
        return switch_alias(args.KEY, runner=runner)
    if action == "reset":
        return reset_aliases(runner=runner)
    sys.stdout.write(format_aliases(load_aliases()))
    return ExitCodes.SUCCESS.value
