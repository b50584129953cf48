"""
Builder for island flags.

Collects the optional parts of a flag definition and applies the
type-appropriate default interaction before freezing it into a Flag.
"""

from typing import Any, Optional, Set

from .flag import Flag
from .flag_types import ClickAction, ClickHandler, FlagMode, FlagType
from .ranks import MEMBER_RANK


class FlagBuilder:
    """
    Builder for making flags.

    Only the id and icon are mandatory. The id must be unique across the
    registry; the builder itself does not check it.

    Examples:
        ```python
        ENDER_CHEST = FlagBuilder("ender-chest-access", "ENDER_CHEST").build()
        CHEST = (FlagBuilder("chest-access", "CHEST")
                 .default_rank(TRUSTED_RANK)
                 .mode(FlagMode.BASIC)
                 .subflags(ENDER_CHEST)
                 .build())
        ```
    """

    def __init__(self, id: str, icon: str):
        self._id = id
        self._icon = icon
        self._listener: Optional[Any] = None
        self._type = FlagType.PROTECTION
        self._default_setting = False
        self._default_rank = MEMBER_RANK
        self._click_handler: Optional[Any] = None
        self._use_panel = False
        self._game_mode: Optional[str] = None
        self._owner: Optional[Any] = None
        self._cooldown = 0
        self._mode = FlagMode.EXPERT
        self._subflags: Set[Flag] = set()

    def listener(self, listener: Any) -> 'FlagBuilder':
        """Event listener that enforces this flag. Share one listener between flags where possible."""
        self._listener = listener
        return self

    def type(self, flag_type: FlagType) -> 'FlagBuilder':
        self._type = flag_type
        return self

    def click_handler(self, click_handler: Any) -> 'FlagBuilder':
        """Interaction used when the flag is clicked. Overrides the type default."""
        self._click_handler = click_handler
        return self

    def default_setting(self, default_setting: bool) -> 'FlagBuilder':
        """Default setting for SETTING and WORLD_SETTING flags."""
        self._default_setting = default_setting
        return self

    def default_rank(self, default_rank: int) -> 'FlagBuilder':
        """Default minimum rank for PROTECTION flags."""
        self._default_rank = default_rank
        return self

    def use_panel(self, use_panel: bool) -> 'FlagBuilder':
        """Open a sub-panel when the flag is clicked."""
        self._use_panel = use_panel
        return self

    def game_mode(self, game_mode: str) -> 'FlagBuilder':
        """Limit this flag to one game mode context."""
        self._game_mode = game_mode
        return self

    def owner(self, owner: Any) -> 'FlagBuilder':
        """Extension registering this flag. Set it so the extension can be reloaded."""
        self._owner = owner
        return self

    def cooldown(self, cooldown: int) -> 'FlagBuilder':
        """Cooldown in seconds. Only applies to SETTING flags."""
        self._cooldown = cooldown
        return self

    def mode(self, mode: FlagMode) -> 'FlagBuilder':
        self._mode = mode
        return self

    def subflags(self, *flags: Flag) -> 'FlagBuilder':
        """
        Add subflags and make this a parent flag.

        Subflags have their world state changed together with the parent.
        They should have the same number of possible values as the parent.
        """
        self._subflags.update(flags)
        return self

    def _default_click_handler(self) -> ClickHandler:
        if self._type == FlagType.SETTING:
            return ClickHandler(ClickAction.ISLAND_TOGGLE, self._id)
        if self._type == FlagType.WORLD_SETTING:
            return ClickHandler(ClickAction.WORLD_TOGGLE, self._id)
        return ClickHandler(ClickAction.CYCLE, self._id)

    def build(self) -> Flag:
        """Build the flag."""
        if self._click_handler is None:
            self._click_handler = self._default_click_handler()

        contexts = frozenset([self._game_mode]) if self._game_mode else frozenset()
        return Flag(
            self._id,
            self._icon,
            type=self._type,
            mode=self._mode,
            default_setting=self._default_setting,
            default_rank=self._default_rank,
            cooldown=self._cooldown,
            use_panel=self._use_panel,
            owner=self._owner,
            listener=self._listener,
            click_handler=self._click_handler,
            applicable_contexts=contexts,
            subflags=frozenset(self._subflags),
        )
