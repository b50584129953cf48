"""
Flag resolution engine.

This module provides the FlagResolver, which reconciles a flag's compiled
default with the per-world overrides of its game mode, gates actions on
rank, and writes world settings with subflag fan-out.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import UnregisteredContextError
from .flag import Flag
from .flag_types import FlagMode, FlagType, RankTier
from .island import IslandView
from .ranks import BANNED_RANK, OWNER_RANK, RankTable
from .world_registry import WorldContextRegistry


logger = logging.getLogger(__name__)


@dataclass
class RankTierEntry:
    """One rank's standing against a protection flag threshold."""
    reference: str
    score: int
    tier: RankTier


@dataclass
class FlagReport:
    """Decision data shown for a flag in a settings panel."""
    flag_id: str
    flag_type: FlagType
    mode: FlagMode
    name_reference: str
    description_reference: str
    setting: Optional[bool] = None
    on_cooldown: bool = False
    threshold: Optional[int] = None
    rank_tiers: List[RankTierEntry] = field(default_factory=list)


class FlagResolver:
    """
    Evaluates and writes flag state for worlds.

    PROTECTION and WORLD_SETTING flags keep a durable record in the world
    flag store of their game mode; it is created from the flag's default the
    first time it is read. SETTING flags are evaluated per island elsewhere
    and only fall back to their compiled default here.

    Args:
        worlds: Registry of game mode worlds and their flag stores
        ranks: Rank table used for reporting
    """

    def __init__(self, worlds: WorldContextRegistry, ranks: Optional[RankTable] = None):
        self.worlds = worlds
        self.ranks = ranks or RankTable()

    def is_set_for_world(self, flag: Flag, world: Optional[str]) -> bool:
        """
        Check if a flag is set in a world.

        Returns:
            The world setting, or the flag's default setting if the world has
            none yet. Always False if the world is not a game mode world.
        """
        extension = self.worlds.get_owning_extension(world)
        if extension is None:
            return False
        if not flag.type.is_world_scoped:
            return flag.default_setting

        store = extension.world_flags
        with store.lock:
            value = store.get(flag.id)
            if value is not None:
                return value
            value = flag.default_setting
            store.put(flag.id, value)
        logger.debug(f"Materialized default {value} for flag '{flag.id}' in world '{world}'")
        extension.persist()
        return value

    resolve = is_set_for_world

    def set_setting(self, flag: Flag, world: str, value: bool) -> None:
        """
        Set a world setting for a PROTECTION or WORLD_SETTING flag.

        Subflags of those types are set to the same value. SETTING flags are
        ignored.

        Raises:
            UnregisteredContextError: If the world is not a game mode world
        """
        if not flag.type.is_world_scoped:
            logger.debug(f"Ignoring world setting for island setting flag '{flag.id}'")
            return
        extension = self._require_extension(world, flag)

        store = extension.world_flags
        with store.lock:
            store.put(flag.id, value)
            for subflag in flag.subflags:
                if subflag.type.is_world_scoped:
                    store.put(subflag.id, value)
        extension.persist()
        logger.debug(f"Set flag '{flag.id}' to {value} in world '{world}'")

    write = set_setting

    def set_default_setting(self, flag: Flag, value: bool) -> None:
        """
        Set the flag's default outside of islands for every world.

        May be overridden by a world setting. Does not affect subflags.
        """
        flag.default_setting = value

    def set_world_default_setting(self, flag: Flag, world: str, value: bool) -> None:
        """
        Set the flag's default outside of islands for one world.

        The world must be registered before this is called. Does not affect
        subflags.

        Raises:
            UnregisteredContextError: If the world is not a game mode world
        """
        extension = self._require_extension(world, flag)
        store = extension.world_flags
        store.put(flag.id, value)
        extension.persist()

    def _require_extension(self, world: str, flag: Flag):
        extension = self.worlds.get_owning_extension(world)
        if extension is None:
            logger.error(f"Attempt to set flag '{flag.id}' for unregistered world '{world}'. "
                         f"Register flags when the game mode is enabled.")
            raise UnregisteredContextError(world)
        return extension

    @staticmethod
    def is_allowed_rank(score: int, threshold: int) -> bool:
        """The permission gate: an actor may act when their rank reaches the threshold."""
        return score >= threshold

    @staticmethod
    def is_greater_rank(score: int, threshold: int) -> bool:
        """Check if a rank is strictly above a threshold. Banned ranks never are."""
        return score > BANNED_RANK and score > threshold

    def is_allowed(self, flag: Flag, island: IslandView, score: int) -> bool:
        """Check if an actor with the given rank may perform the action a protection flag guards."""
        return self.is_allowed_rank(score, island.get_effective_rank(flag))

    def classify_ranks(self, threshold: int) -> List[RankTierEntry]:
        """
        Classify every rank against a protection threshold.

        Banned ranks, and ranks above the owner that are not the threshold,
        are left out.
        """
        entries: List[RankTierEntry] = []
        for reference, score in self.ranks.items():
            if BANNED_RANK < score < threshold:
                entries.append(RankTierEntry(reference, score, RankTier.BLOCKED))
            elif threshold < score <= OWNER_RANK:
                entries.append(RankTierEntry(reference, score, RankTier.ALLOWED))
            elif score == threshold:
                entries.append(RankTierEntry(reference, score, RankTier.MINIMAL))
        return entries

    def build_report(self, flag: Flag, world: Optional[str], island: Optional[IslandView] = None,
                     is_op: bool = False, invisible: bool = False) -> Optional[FlagReport]:
        """
        Collect what a settings panel shows for a flag.

        Returns:
            None if the flag is invisible to a non-op viewer
        """
        if invisible and not is_op:
            return None

        report = FlagReport(
            flag_id=flag.id,
            flag_type=flag.type,
            mode=flag.mode,
            name_reference=flag.name_reference,
            description_reference=flag.description_reference,
        )
        if flag.use_panel:
            return report

        if flag.type == FlagType.PROTECTION:
            if island is not None:
                report.threshold = island.get_effective_rank(flag)
                report.rank_tiers = self.classify_ranks(report.threshold)
        elif flag.type == FlagType.SETTING:
            if island is not None:
                report.setting = island.is_allowed(flag)
                report.on_cooldown = flag.cooldown > 0 and island.is_on_cooldown(flag)
        else:
            report.setting = self.is_set_for_world(flag, world)
        return report
