"""
Island collaborator used for rank and setting lookups.

The resolver only needs the IslandView protocol. Island is a simple
in-memory implementation of it.
"""

import threading
import time
from typing import Dict, Optional, Protocol

from .flag import Flag


class IslandView(Protocol):
    """What the flag system reads from an island."""

    def get_effective_rank(self, flag: Flag) -> int:
        """Minimum rank required for a protection flag on this island."""
        ...

    def is_allowed(self, flag: Flag) -> bool:
        """Whether a setting flag is switched on for this island."""
        ...

    def is_on_cooldown(self, flag: Flag) -> bool:
        """Whether a setting flag was toggled too recently to change again."""
        ...


class Island:
    """In-memory island with per-flag overrides and cooldowns."""

    def __init__(self, name: str = ""):
        self.name = name
        self._ranks: Dict[str, int] = {}
        self._settings: Dict[str, bool] = {}
        self._cooldowns: Dict[str, float] = {}
        self._lock = threading.Lock()

    def get_effective_rank(self, flag: Flag) -> int:
        with self._lock:
            return self._ranks.get(flag.id, flag.default_rank)

    def set_rank(self, flag: Flag, rank: int) -> None:
        with self._lock:
            self._ranks[flag.id] = rank

    def is_allowed(self, flag: Flag) -> bool:
        with self._lock:
            return self._settings.get(flag.id, flag.default_setting)

    def set_setting(self, flag: Flag, value: bool, now: Optional[float] = None) -> None:
        """Switch a setting flag and start its cooldown if it has one."""
        with self._lock:
            self._settings[flag.id] = value
            if flag.cooldown > 0:
                self._cooldowns[flag.id] = (time.time() if now is None else now) + flag.cooldown

    def is_on_cooldown(self, flag: Flag, now: Optional[float] = None) -> bool:
        with self._lock:
            expiry = self._cooldowns.get(flag.id)
        if expiry is None:
            return False
        return (time.time() if now is None else now) < expiry
