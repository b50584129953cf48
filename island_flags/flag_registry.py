"""
Flag Registry

Owns the table of registered flags and the index of which game mode
contexts each flag applies to.
"""

import logging
import threading
from typing import Any, Dict, List, Optional, Set

from .flag import Flag

logger = logging.getLogger(__name__)


class FlagRegistry:
    """
    Registry of flags keyed by id.

    Flags never reference their contexts or extensions back; the registry
    keeps the context index. A flag with no contexts applies to all of them.
    """

    def __init__(self):
        self._flags: Dict[str, Flag] = {}
        self._contexts: Dict[str, Set[str]] = {}
        self._lock = threading.RLock()

    def register_flag(self, flag: Flag) -> bool:
        """
        Register a flag.

        Returns:
            False if a flag with the same id is already registered
        """
        with self._lock:
            if flag.id in self._flags:
                logger.warning(f"Flag '{flag.id}' is already registered, ignoring duplicate")
                return False
            self._flags[flag.id] = flag
            self._contexts[flag.id] = set(flag.applicable_contexts)
        logger.info(f"Registered flag: {flag.id} ({flag.type.name})")
        return True

    def unregister_flag(self, flag_id: str) -> bool:
        with self._lock:
            if flag_id not in self._flags:
                return False
            del self._flags[flag_id]
            self._contexts.pop(flag_id, None)
        logger.info(f"Unregistered flag: {flag_id}")
        return True

    def unregister_owner(self, owner: Any) -> List[str]:
        """
        Unregister every flag registered by an extension.

        Returns:
            Ids of the removed flags
        """
        with self._lock:
            removed = [flag_id for flag_id, flag in self._flags.items() if flag.owner is owner]
            for flag_id in removed:
                del self._flags[flag_id]
                self._contexts.pop(flag_id, None)
        if removed:
            logger.info(f"Unregistered {len(removed)} flags owned by {owner!r}")
        return removed

    def get_flag(self, flag_id: str) -> Optional[Flag]:
        """Get a flag by id."""
        with self._lock:
            return self._flags.get(flag_id)

    def get_flags(self) -> List[Flag]:
        """Get all registered flags sorted by id."""
        with self._lock:
            return sorted(self._flags.values())

    def add_context(self, flag_id: str, context: str) -> bool:
        """Limit a flag to an additional game mode context."""
        with self._lock:
            if flag_id not in self._flags:
                return False
            self._contexts[flag_id].add(context)
            return True

    def remove_context(self, flag_id: str, context: str) -> bool:
        """
        Remove a game mode context from a flag.

        Returns:
            True if the flag was limited to that context
        """
        with self._lock:
            contexts = self._contexts.get(flag_id)
            if contexts is None or context not in contexts:
                return False
            contexts.remove(context)
            return True

    def get_contexts(self, flag_id: str) -> Set[str]:
        """Get the contexts a flag is limited to. Empty means all contexts."""
        with self._lock:
            return set(self._contexts.get(flag_id, ()))

    def applies_to(self, flag_id: str, context: str) -> bool:
        with self._lock:
            if flag_id not in self._flags:
                return False
            contexts = self._contexts[flag_id]
            return not contexts or context in contexts

    def flags_for_context(self, context: str) -> List[Flag]:
        """Get the flags that apply to a game mode context, sorted by id."""
        with self._lock:
            return sorted(flag for flag_id, flag in self._flags.items()
                          if not self._contexts[flag_id] or context in self._contexts[flag_id])

    def __len__(self) -> int:
        with self._lock:
            return len(self._flags)

    def __contains__(self, flag_id: str) -> bool:
        with self._lock:
            return flag_id in self._flags
