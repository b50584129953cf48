"""
Game mode extensions that own world contexts.

An extension owns one world flag store shared by all of its worlds and
decides when that store is written out.
"""

import logging
from typing import Optional

from .config import FlagSettings, get_flag_settings
from .world_store import WorldFlagStore


logger = logging.getLogger(__name__)


class GameModeExtension:
    """
    Extension that provides a game mode and owns its world flag settings.

    Args:
        name: Unique name of the game mode, also the settings file name
        world_flags: Store to use instead of the configured settings file
        settings: Configuration to use instead of the global one
    """

    def __init__(self, name: str, world_flags: Optional[WorldFlagStore] = None,
                 settings: Optional[FlagSettings] = None):
        self.name = name
        if world_flags is None:
            settings = settings or get_flag_settings()
            world_flags = WorldFlagStore(
                name,
                settings.settings_path_for(name),
                debounce_seconds=settings.flags_debounce_seconds,
            )
            if settings.flags_watch_files:
                world_flags.start_watching()
        self._world_flags = world_flags

    @property
    def world_flags(self) -> WorldFlagStore:
        return self._world_flags

    def persist(self) -> bool:
        """
        Save this game mode's world flag settings.

        Failures are logged and do not undo in-memory changes.

        Returns:
            True if the settings were written, False if the store has no
            settings file or the write failed
        """
        try:
            return self._world_flags.save()
        except RuntimeError as e:
            logger.error(f"Could not save world flags for game mode '{self.name}': {e}")
            return False

    def shutdown(self) -> None:
        """Stop watching the settings file."""
        self._world_flags.stop_watching()

    def __repr__(self) -> str:
        return f"GameModeExtension(name={self.name!r})"
