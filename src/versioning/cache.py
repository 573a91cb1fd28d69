"""Process-lifetime cache of discovered version lists."""

import threading
from typing import Dict, List, Optional

from semantic_version import Version


class VersionCache:
    """Thread-safe mapping from dependency name to its known versions.

    Concurrent lookups for the same name may both miss and both populate the
    entry; the last write wins, which is harmless because the data is the
    same registry answer.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Dict[str, List[Version]] = {}

    def get(self, name: str) -> Optional[List[Version]]:
        """Return a copy of the cached versions for ``name`` or None."""
        with self._lock:
            cached = self._entries.get(name)
            return list(cached) if cached is not None else None

    def put(self, name: str, versions: List[Version]) -> None:
        """Store ``versions`` for ``name``, replacing any previous entry."""
        with self._lock:
            self._entries[name] = list(versions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries
