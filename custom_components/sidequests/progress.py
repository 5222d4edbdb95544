"""User progression tracking for Daily Side Quests integration."""
from __future__ import annotations

from datetime import timedelta
import logging

from homeassistant.util import dt as dt_util

from .const import KEY_USER_PROGRESS
from .models import UserProgress
from .storage import SideQuestsStore
from .xp import calculate_level

_LOGGER = logging.getLogger(__name__)


class ProgressTracker:
    """Owns the single UserProgress record: XP, level and daily streak."""

    def __init__(self, store: SideQuestsStore) -> None:
        self._store = store
        self._progress = UserProgress()

    @property
    def progress(self) -> UserProgress:
        return self._progress

    async def async_load(self) -> None:
        stored = await self._store.async_get(KEY_USER_PROGRESS)
        if stored is not None:
            self._progress = UserProgress.from_dict(stored)
        else:
            self._progress = UserProgress()
            await self.async_save()

    async def async_save(self) -> None:
        await self._store.async_set(KEY_USER_PROGRESS, self._progress.as_dict())

    async def async_add_xp(self, amount: int) -> None:
        self._progress.total_xp += amount
        self._progress.level = calculate_level(self._progress.total_xp)
        await self.async_save()

    async def async_remove_xp(self, amount: int) -> None:
        self._progress.total_xp = max(0, self._progress.total_xp - amount)
        self._progress.level = calculate_level(self._progress.total_xp)
        await self.async_save()

    async def async_update_streak(self) -> None:
        """Advance the daily streak for a completion happening now.

        A second completion on the same calendar day changes nothing and is not saved.
        """
        now = dt_util.now()
        today = now.date()
        last = self._progress.last_quest_completed
        last_day = dt_util.as_local(last).date() if last is not None else None

        if last_day == today:
            return
        if last_day == today - timedelta(days=1):
            self._progress.daily_streak += 1
        else:
            self._progress.daily_streak = 1

        self._progress.last_quest_completed = now
        _LOGGER.debug("Daily streak is now %d", self._progress.daily_streak)
        await self.async_save()

    async def async_decrement_streak(self) -> None:
        self._progress.daily_streak = max(0, self._progress.daily_streak - 1)
        await self.async_save()
