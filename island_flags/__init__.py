"""
Island flags package with rank-gated protections and world settings.

This package provides the flag system for island game modes:
- Typed flags (protection, island setting, world setting)
- Per-world overrides persisted per game mode
- Lazy defaults for world-scoped flags
- Subflags that follow their parent's world setting
- Rank gating and rank reporting for protection flags

Basic usage:
    ```python
    from island_flags import (FlagBuilder, FlagType, FlagResolver,
                              GameModeExtension, WorldContextRegistry)

    # Create flags
    FIRE = FlagBuilder("allow-fire", "FLINT_AND_STEEL").build()
    PVP = FlagBuilder("pvp", "ARROW").type(FlagType.WORLD_SETTING).build()

    # Register a game mode's worlds
    worlds = WorldContextRegistry()
    worlds.register_world("bskyblock_world", GameModeExtension("bskyblock"),
                          linked_worlds=["bskyblock_world_nether"])

    # Evaluate and write
    resolver = FlagResolver(worlds)
    if resolver.is_set_for_world(PVP, "bskyblock_world"):
        print("PvP enabled")
    resolver.set_setting(FIRE, "bskyblock_world", True)
    ```
"""

# Core classes
from .flag import Flag
from .flag_builder import FlagBuilder
from .flag_types import ClickAction, ClickHandler, FlagMode, FlagType, RankTier
from .flag_resolver import FlagReport, FlagResolver, RankTierEntry
from .flag_registry import FlagRegistry

# Worlds and ranks
from .errors import UnregisteredContextError
from .extension import GameModeExtension
from .island import Island, IslandView
from .ranks import RankTable
from .world_registry import WorldContextRegistry
from .world_store import WorldFlagStore

# Configuration
from .config import FlagSettings, get_flag_settings

# Public API
__all__ = [
    # Core classes
    'Flag',
    'FlagBuilder',
    'FlagType',
    'FlagMode',
    'ClickAction',
    'ClickHandler',
    'RankTier',
    'FlagResolver',
    'FlagReport',
    'RankTierEntry',
    'FlagRegistry',

    # Worlds and ranks
    'UnregisteredContextError',
    'GameModeExtension',
    'Island',
    'IslandView',
    'RankTable',
    'WorldContextRegistry',
    'WorldFlagStore',

    # Configuration
    'FlagSettings',
    'get_flag_settings',
]

# Version info
__version__ = "1.0.0"
__description__ = "Rank-gated island protection flags with per-world settings"
