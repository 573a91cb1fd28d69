"""JSON persistence of network service aliases."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from typing import List, Optional

from constants import Constants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkAlias:
    """Shortcut key mapped to a macOS network service name."""
    key: str
    name: str


def aliases_path(path: Optional[str] = None) -> str:
    return os.path.expanduser(path or Constants.NETWORK_ALIASES_FILE)


def load_aliases(path: Optional[str] = None) -> List[NetworkAlias]:
    """Load saved aliases; a missing or unreadable file yields an empty list."""
    target = aliases_path(path)
    if not os.path.isfile(target):
        return []
    try:
        with open(target, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Failed to read network aliases from %s: %s", target, e)
        return []
    if not isinstance(data, list):
        logger.warning("Ignoring network aliases file %s (expected a list)", target)
        return []
    return [
        NetworkAlias(key=str(item["key"]), name=str(item["name"]))
        for item in data
        if isinstance(item, dict) and "key" in item and "name" in item
    ]


def save_aliases(aliases: List[NetworkAlias], path: Optional[str] = None) -> None:
    """Write aliases as a JSON list of ``{"key", "name"}`` objects.

    Raises:
        OSError: If the file cannot be written.
    """
    target = aliases_path(path)
    with open(target, "w", encoding="utf-8") as f:
        json.dump([asdict(a) for a in aliases], f, indent=2)
