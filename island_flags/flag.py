"""
Flag definition for the island flag system.

A Flag is the immutable identity, classification and defaults of one unit
of access control. Flags hold no per-world or per-island state; the
FlagResolver reconciles them with the world flag stores.
"""

from typing import Any, FrozenSet, Optional
from pydantic import BaseModel, Field

from .flag_types import FlagMode, FlagType
from .ranks import MEMBER_RANK


PROTECTION_FLAGS = "protection.flags."


class Flag(BaseModel):
    """
    Named, typed unit of access control.

    Flags are normally created through FlagBuilder. Every field is frozen
    except ``default_setting``, which may be overridden programmatically
    independent of any world.

    Two flags are equal when their id and type match. Flags sort by id.

    Examples:
        ```python
        FIRE = FlagBuilder("allow-fire", "FLINT_AND_STEEL").build()
        PVP = FlagBuilder("pvp", "ARROW").type(FlagType.WORLD_SETTING).build()
        ```
    """

    id: str = Field(frozen=True, description="Unique identifier of the flag")
    icon: str = Field(frozen=True, description="Icon shown in settings panels")
    type: FlagType = Field(FlagType.PROTECTION, frozen=True)
    mode: FlagMode = Field(FlagMode.EXPERT, frozen=True)
    default_setting: bool = Field(False, description="Compiled default outside islands")
    default_rank: int = Field(MEMBER_RANK, frozen=True, description="Minimum rank for protection flags")
    cooldown: int = Field(0, frozen=True, description="Toggle cooldown in seconds for settings")
    use_panel: bool = Field(False, frozen=True)
    owner: Optional[Any] = Field(None, frozen=True, description="Extension that registered the flag")
    listener: Optional[Any] = Field(None, frozen=True)
    click_handler: Optional[Any] = Field(None, frozen=True)
    applicable_contexts: FrozenSet[str] = Field(default_factory=frozenset, frozen=True)
    subflags: FrozenSet['Flag'] = Field(default_factory=frozenset, frozen=True)

    class Config:
        validate_assignment = True

    def __init__(self, id: str, icon: str, **data: Any):
        super().__init__(id=id, icon=icon, **data)

    def __eq__(self, other) -> bool:
        if isinstance(other, Flag):
            return self.id == other.id and self.type == other.type
        return False

    def __hash__(self) -> int:
        return hash((self.id, self.type))

    def __lt__(self, other: 'Flag') -> bool:
        if not isinstance(other, Flag):
            return NotImplemented
        return self.id < other.id

    def compare_to(self, other: 'Flag') -> int:
        """Compare ids lexicographically, returning -1, 0 or 1."""
        return (self.id > other.id) - (self.id < other.id)

    def __repr__(self) -> str:
        return f"Flag(id={self.id!r}, type={self.type.name})"

    def __str__(self) -> str:
        return self.id

    def has_subflags(self) -> bool:
        """True if this flag is a parent flag."""
        return len(self.subflags) > 0

    def applies_to(self, context: str) -> bool:
        """Check the flag's own context list. An empty list applies everywhere."""
        return not self.applicable_contexts or context in self.applicable_contexts

    @property
    def name_reference(self) -> str:
        return f"{PROTECTION_FLAGS}{self.id}.name"

    @property
    def description_reference(self) -> str:
        return f"{PROTECTION_FLAGS}{self.id}.description"

    @property
    def hint_reference(self) -> str:
        return f"{PROTECTION_FLAGS}{self.id}.hint"

    @property
    def icon_reference(self) -> str:
        return f"{PROTECTION_FLAGS}{self.id}.icon"
