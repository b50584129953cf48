"""
Classification types for island flags.

This module contains the flag types, display modes, default interaction
descriptors and rank reporting tiers used throughout the flag system.
"""

from enum import Enum
from dataclasses import dataclass


class FlagType(Enum):
    """Defines who may change a flag and how it is evaluated."""
    PROTECTION = "protection"
    """Protects an island. Changed by the island owner, evaluated against the actor's rank."""
    SETTING = "setting"
    """An on/off island setting. Changed by the island owner."""
    WORLD_SETTING = "world_setting"
    """An on/off setting for the whole world. Changed by administrators only."""

    @property
    def icon(self) -> str:
        """Default icon used when displaying flags of this type."""
        return _TYPE_ICONS[self]

    @property
    def is_world_scoped(self) -> bool:
        """True for types that keep a record in the world flag store."""
        return self in (FlagType.PROTECTION, FlagType.WORLD_SETTING)


_TYPE_ICONS = {
    FlagType.PROTECTION: "SHIELD",
    FlagType.SETTING: "COMPARATOR",
    FlagType.WORLD_SETTING: "GRASS_BLOCK",
}


class FlagMode(Enum):
    """Settings panel tier a flag is shown in."""
    BASIC = "basic"
    ADVANCED = "advanced"
    EXPERT = "expert"
    TOP_ROW = "top_row"
    """Shown in the top row where applicable. Not part of the tier cycle."""

    def next(self) -> 'FlagMode':
        """
        Get the next tier above this one, cycling back to BASIC at the top.

        TOP_ROW is not part of the cycle and also yields BASIC.
        """
        return _NEXT_MODE.get(self, FlagMode.BASIC)

    def is_greater_than(self, other: 'FlagMode') -> bool:
        """
        Check whether this tier ranks above another.

        Only EXPERT > {BASIC, ADVANCED} and ADVANCED > BASIC hold. Any
        comparison involving TOP_ROW is False.
        """
        return other in _LOWER_MODES.get(self, frozenset())


_NEXT_MODE = {
    FlagMode.BASIC: FlagMode.ADVANCED,
    FlagMode.ADVANCED: FlagMode.EXPERT,
}

_LOWER_MODES = {
    FlagMode.EXPERT: frozenset({FlagMode.BASIC, FlagMode.ADVANCED}),
    FlagMode.ADVANCED: frozenset({FlagMode.BASIC}),
}


class ClickAction(Enum):
    """Interaction performed when a flag's panel entry is clicked."""
    ISLAND_TOGGLE = "island_toggle"
    WORLD_TOGGLE = "world_toggle"
    CYCLE = "cycle"


@dataclass(frozen=True)
class ClickHandler:
    """Describes the interaction bound to a flag."""
    action: ClickAction
    flag_id: str


class RankTier(Enum):
    """How a rank relates to a protection flag's threshold, for reporting."""
    BLOCKED = "blocked"
    ALLOWED = "allowed"
    MINIMAL = "minimal"
