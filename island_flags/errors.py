"""Errors raised by the island flag system."""

from typing import Any


class UnregisteredContextError(LookupError):
    """A world that no game mode has registered was used where a registered one is required."""

    def __init__(self, world: Any, message: str = ""):
        self.world = world
        super().__init__(message or f"World '{world}' is not registered to any game mode")
