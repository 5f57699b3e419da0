import logging
import secrets
import string
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_TTL = 5 * 60

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
_SUFFIX_LENGTH = 9


@dataclass(frozen=True)
class ReferenceEntry:
    key: str
    payload: str
    created_at: float


class ReferenceStore:
    """Short-lived key -> message text mapping for the language picker.

    An entry lives until it is taken once or until it is older than ``ttl``
    seconds and a sweep runs, whichever happens first. A single lock guards
    the mapping, so put/take/sweep are atomic with respect to each other.
    """

    def __init__(self, ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, ReferenceEntry] = {}
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def __contains__(self, key):
        with self._lock:
            return key in self._entries

    def _new_key(self) -> str:
        suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))
        return f"{int(time.time() * 1000)}-{suffix}"

    def put(self, payload: str) -> str:
        """Store ``payload`` and return the freshly issued key"""
        with self._lock:
            key = self._new_key()
            while key in self._entries:
                key = self._new_key()
            self._entries[key] = ReferenceEntry(key, payload, self._clock())
        return key

    def take(self, key: str) -> Optional[str]:
        """Remove and return the payload for ``key``.

        Returns None when the key was never issued, was already taken or has
        expired. Expired entries are treated as absent even before the next
        sweep removes them.
        """
        if not key:
            return None
        with self._lock:
            entry = self._entries.pop(key, None)
        if entry is None:
            return None
        if self._clock() - entry.created_at >= self.ttl:
            return None
        return entry.payload

    def sweep(self, now: Optional[float] = None) -> int:
        """Drop every entry at least ``ttl`` seconds old; returns how many went"""
        if now is None:
            now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if now - entry.created_at >= self.ttl]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug(f"🧹 Swept {len(expired)} expired message reference(s)")
        return len(expired)

    def clear(self):
        with self._lock:
            self._entries.clear()
