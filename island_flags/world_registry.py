"""
World Context Registry

Tracks which worlds belong to which game mode and hands out their flag stores.
"""

import logging
import threading
from typing import Dict, Iterable, Optional

from .errors import UnregisteredContextError
from .extension import GameModeExtension
from .world_store import WorldFlagStore

logger = logging.getLogger(__name__)


class WorldContextRegistry:
    """
    Registry of game mode worlds.

    A game mode's linked worlds (nether, end) are registered alongside its
    overworld and share the same flag store.
    """

    def __init__(self):
        self._worlds: Dict[str, GameModeExtension] = {}
        self._lock = threading.Lock()

    def register_world(self, world: str, extension: GameModeExtension,
                       linked_worlds: Iterable[str] = ()) -> None:
        """
        Register a world and its linked worlds to a game mode.

        Raises:
            ValueError: If any of the worlds already belongs to another game mode
        """
        names = [world, *linked_worlds]
        with self._lock:
            for name in names:
                existing = self._worlds.get(name)
                if existing is not None and existing is not extension:
                    raise ValueError(f"World '{name}' is already registered to game mode '{existing.name}'")
            for name in names:
                self._worlds[name] = extension
        logger.info(f"Registered worlds {names} to game mode '{extension.name}'")

    def unregister_world(self, world: str) -> bool:
        """
        Unregister a single world.

        Returns:
            True if the world was unregistered, False if not found
        """
        with self._lock:
            extension = self._worlds.pop(world, None)
        if extension is None:
            return False
        logger.info(f"Unregistered world '{world}' from game mode '{extension.name}'")
        return True

    def unregister_extension(self, extension: GameModeExtension) -> int:
        """Unregister every world of a game mode. Returns how many were removed."""
        with self._lock:
            worlds = [name for name, owner in self._worlds.items() if owner is extension]
            for name in worlds:
                del self._worlds[name]
        if worlds:
            logger.info(f"Unregistered {len(worlds)} worlds from game mode '{extension.name}'")
        return len(worlds)

    def in_world(self, world: Optional[str]) -> bool:
        """Check whether the world belongs to a registered game mode."""
        if world is None:
            return False
        with self._lock:
            return world in self._worlds

    def get_owning_extension(self, world: Optional[str]) -> Optional[GameModeExtension]:
        if world is None:
            return None
        with self._lock:
            return self._worlds.get(world)

    def get_settings(self, world: str) -> WorldFlagStore:
        """
        Get the flag store for a world.

        Raises:
            UnregisteredContextError: If the world is not registered
        """
        extension = self.get_owning_extension(world)
        if extension is None:
            raise UnregisteredContextError(world)
        return extension.world_flags

    def get_worlds(self) -> Dict[str, str]:
        """Get all registered worlds mapped to their game mode name."""
        with self._lock:
            return {name: extension.name for name, extension in self._worlds.items()}
