"""Subprocess helper shared by the subcommands that shell out.

The helper never raises for launch failures or timeouts: callers receive
None and decide how to degrade. Output is captured regardless of the exit
status because some tools (``pod trunk info``) print usable data while
exiting non-zero.
"""
from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from constants import Constants
from common.logging_utils import Timer, extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of a finished subprocess."""

    stdout: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# Signature of the runner collaborator injected into resolvers and clients.
CommandRunner = Callable[[Sequence[str], Optional[float]], Optional[CommandResult]]


def run_command(argv: Sequence[str], timeout: Optional[float] = None) -> Optional[CommandResult]:
    """Run ``argv`` and capture its standard output.

    Args:
        argv: Command and arguments (no shell).
        timeout: Seconds before the process is killed; defaults to
            Constants.COMMAND_TIMEOUT_SEC.

    Returns:
        CommandResult with decoded stdout and exit code, or None if the
        executable could not be launched or the timeout expired.
    """
    effective_timeout = timeout if timeout is not None else Constants.COMMAND_TIMEOUT_SEC
    with Timer() as t:
        try:
            proc = subprocess.run(  # noqa: S603
                list(argv),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=effective_timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Command timed out after %s seconds: %s", effective_timeout, argv[0])
            return None
        except OSError as exc:  # FileNotFoundError, PermissionError
            logger.debug("Command could not be launched: %s (%s)", argv[0], exc)
            return None

    if is_debug_enabled(logger):
        logger.debug(
            "Command finished",
            extra=extra_context(
                event="subprocess",
                component="shell",
                action=argv[0],
                outcome="success" if proc.returncode == 0 else "nonzero_exit",
                returncode=proc.returncode,
                duration_ms=t.duration_ms(),
            ),
        )
    return CommandResult(stdout=proc.stdout or "", returncode=proc.returncode)
