"""XP, leveling and streak bonus calculations for Daily Side Quests.

Levels follow a quadratic curve, xp(level) = 100 * (level - 1) ** 2:

    level 2 = 100 XP, level 3 = 400, level 5 = 1600, level 10 = 8100, level 20 = 36100

Completing a quest earns its base XP plus a streak bonus. The bonus percent
grows with consecutive days and caps at 50% from a 7-day streak on.
"""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from .const import BASE_XP_PER_LEVEL, MAX_STREAK_BONUS_PERCENT, STREAK_BONUS_PERCENT
from .models import LevelInfo, XpEvent, level_title

if TYPE_CHECKING:
    from .progress import ProgressTracker

_LOGGER = logging.getLogger(__name__)


def calculate_level(total_xp: int) -> int:
    """Return floor(sqrt(total_xp / 100)) + 1, never below 1."""
    if total_xp <= 0:
        return 1
    return math.isqrt(total_xp // BASE_XP_PER_LEVEL) + 1


def get_xp_for_level(level: int) -> int:
    """Total XP at which a level starts."""
    if level <= 1:
        return 0
    return BASE_XP_PER_LEVEL * (level - 1) * (level - 1)


def get_streak_multiplier(streak: int) -> int:
    """Bonus percent for a daily streak of the given length."""
    return STREAK_BONUS_PERCENT.get(max(streak, 0), MAX_STREAK_BONUS_PERCENT)


def apply_streak_bonus(base_xp: int, streak: int) -> int:
    """Return base_xp plus the streak bonus, with the bonus rounded up."""
    multiplier = get_streak_multiplier(streak)
    bonus = -(-base_xp * multiplier // 100)  # ceiling division
    return base_xp + bonus


def get_level_title(level: int) -> str:
    return level_title(level)


def _progress_percentage(progress_in_level: int, needed_for_next: int) -> float:
    if needed_for_next <= 0:
        return 100.0
    return min(100.0, progress_in_level / needed_for_next * 100)


class XpCalculator:
    """Applies the XP rules to the progression tracker."""

    def __init__(self, tracker: ProgressTracker) -> None:
        self._tracker = tracker

    def get_level_info(self) -> LevelInfo:
        progress = self._tracker.progress
        level = calculate_level(progress.total_xp)
        xp_for_current = get_xp_for_level(level)
        xp_for_next = get_xp_for_level(level + 1)
        progress_in_level = progress.total_xp - xp_for_current
        needed_for_next = xp_for_next - xp_for_current

        return LevelInfo(
            level=level,
            total_xp=progress.total_xp,
            xp_for_current_level=xp_for_current,
            xp_for_next_level=xp_for_next,
            xp_progress_in_level=progress_in_level,
            xp_needed_for_next_level=needed_for_next,
            progress_percentage=_progress_percentage(progress_in_level, needed_for_next),
            daily_streak=progress.daily_streak,
            streak_multiplier=get_streak_multiplier(progress.daily_streak),
        )

    async def async_award_quest_xp(self, base_xp: int) -> XpEvent:
        """Award XP for a completed quest and advance the streak.

        The bonus uses the streak as it was before this completion; the
        returned event reflects the state after both the XP add and the
        streak update.
        """
        progress = self._tracker.progress
        previous_level = calculate_level(progress.total_xp)

        streak_bonus = apply_streak_bonus(base_xp, progress.daily_streak) - base_xp
        await self._tracker.async_add_xp(base_xp + streak_bonus)
        await self._tracker.async_update_streak()

        info = self.get_level_info()
        _LOGGER.debug("Awarded %d XP (+%d streak bonus), total %d", base_xp, streak_bonus, info.total_xp)

        return XpEvent(
            xp_gained=base_xp,
            streak_bonus=streak_bonus,
            total_xp=info.total_xp,
            previous_level=previous_level,
            new_level=info.level,
            xp_progress_in_level=info.xp_progress_in_level,
            xp_to_next_level=info.xp_needed_for_next_level - info.xp_progress_in_level,
            progress_percentage=info.progress_percentage,
        )

    async def async_remove_quest_xp(self, xp: int) -> LevelInfo:
        """Take back a quest's face-value XP and one streak day."""
        await self._tracker.async_remove_xp(xp)
        await self._tracker.async_decrement_streak()
        _LOGGER.debug("Removed %d XP, total %d", xp, self._tracker.progress.total_xp)
        return self.get_level_info()
