"""
Rank table for island members.

Ranks map a locale reference (``ranks.member``) to an integer score. Higher
scores carry more privilege. The flag system only reads this table.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional, Tuple


logger = logging.getLogger(__name__)

ADMIN_RANK = 10000
MOD_RANK = 5000
OWNER_RANK = 1000
SUB_OWNER_RANK = 900
MEMBER_RANK = 500
TRUSTED_RANK = 400
COOP_RANK = 200
VISITOR_RANK = 0
BANNED_RANK = -1

ADMIN_RANK_REF = "ranks.admin"
MOD_RANK_REF = "ranks.mod"
OWNER_RANK_REF = "ranks.owner"
SUB_OWNER_RANK_REF = "ranks.sub-owner"
MEMBER_RANK_REF = "ranks.member"
TRUSTED_RANK_REF = "ranks.trusted"
COOP_RANK_REF = "ranks.coop"
VISITOR_RANK_REF = "ranks.visitor"
BANNED_RANK_REF = "ranks.banned"

DEFAULT_RANKS: Dict[str, int] = {
    ADMIN_RANK_REF: ADMIN_RANK,
    MOD_RANK_REF: MOD_RANK,
    OWNER_RANK_REF: OWNER_RANK,
    SUB_OWNER_RANK_REF: SUB_OWNER_RANK,
    MEMBER_RANK_REF: MEMBER_RANK,
    TRUSTED_RANK_REF: TRUSTED_RANK,
    COOP_RANK_REF: COOP_RANK,
    VISITOR_RANK_REF: VISITOR_RANK,
    BANNED_RANK_REF: BANNED_RANK,
}


class RankTable:
    """
    Ordered mapping of rank reference to score.

    Iteration is always in ascending score order. Custom ranks can be added
    by extensions; the built-in ranks are loaded unless ``ranks`` is given.
    """

    BANNED_RANK = BANNED_RANK
    VISITOR_RANK = VISITOR_RANK
    MEMBER_RANK = MEMBER_RANK
    OWNER_RANK = OWNER_RANK

    def __init__(self, ranks: Optional[Dict[str, int]] = None):
        self._lock = threading.RLock()
        self._ranks: Dict[str, int] = {}
        for reference, score in (DEFAULT_RANKS if ranks is None else ranks).items():
            self._ranks[reference] = score
        self._sort()

    def _sort(self):
        """Keep the mapping ordered by ascending score (must be called within lock)."""
        self._ranks = dict(sorted(self._ranks.items(), key=lambda item: item[1]))

    def add_rank(self, reference: str, score: int) -> bool:
        """
        Add a custom rank.

        Returns:
            False if a rank with this reference already exists
        """
        with self._lock:
            if reference in self._ranks:
                logger.warning(f"Rank '{reference}' already exists with score {self._ranks[reference]}")
                return False
            self._ranks[reference] = score
            self._sort()
        logger.info(f"Added rank '{reference}' with score {score}")
        return True

    def remove_rank(self, reference: str) -> bool:
        """Remove a rank. Returns False if it did not exist."""
        with self._lock:
            return self._ranks.pop(reference, None) is not None

    def get_rank_value(self, reference: str) -> Optional[int]:
        with self._lock:
            return self._ranks.get(reference)

    def get_rank(self, score: int) -> str:
        """Get the reference for a score, or an empty string if none matches."""
        with self._lock:
            for reference, value in self._ranks.items():
                if value == score:
                    return reference
        return ""

    def get_ranks(self) -> Dict[str, int]:
        """Get a copy of the ranks in ascending score order."""
        with self._lock:
            return self._ranks.copy()

    def items(self) -> List[Tuple[str, int]]:
        with self._lock:
            return list(self._ranks.items())

    def for_each(self, action: Callable[[str, int], None]) -> None:
        """Call ``action(reference, score)`` for every rank in ascending order."""
        for reference, score in self.items():
            action(reference, score)

    def get_rank_up_value(self, current: int) -> int:
        """
        Get the next score above ``current``, capped at the owner rank.

        Used when cycling a protection flag's threshold upwards.
        """
        for _, score in self.items():
            if current < score <= OWNER_RANK:
                return score
        return OWNER_RANK

    def get_rank_down_value(self, current: int) -> int:
        """Get the next score below ``current``, never lower than the visitor rank."""
        lower = VISITOR_RANK
        for _, score in self.items():
            if VISITOR_RANK <= score < current:
                lower = score
        return lower

    def __contains__(self, reference: str) -> bool:
        with self._lock:
            return reference in self._ranks

    def __len__(self) -> int:
        with self._lock:
            return len(self._ranks)
