"""Unit tests for Daily Side Quests progress tracking."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from custom_components.sidequests.const import KEY_USER_PROGRESS
from custom_components.sidequests.models import UserProgress
from custom_components.sidequests.progress import ProgressTracker

from .conftest import NOW


class TestProgressTracker:
    """Test ProgressTracker."""

    @pytest.fixture
    def tracker(self, mock_store):
        return ProgressTracker(mock_store)

    def test_progress_before_load(self, tracker):
        assert tracker.progress == UserProgress()

    @pytest.mark.asyncio
    async def test_load_without_stored_progress(self, tracker, mock_store, store_data):
        await tracker.async_load()

        assert tracker.progress.total_xp == 0
        assert tracker.progress.level == 1
        assert tracker.progress.daily_streak == 0
        assert tracker.progress.last_quest_completed is None
        mock_store.async_set.assert_called_once()
        assert store_data[KEY_USER_PROGRESS]["total_xp"] == 0

    @pytest.mark.asyncio
    async def test_load_with_stored_progress(self, tracker, mock_store, store_data):
        store_data[KEY_USER_PROGRESS] = {
            "total_xp": 500,
            "level": 3,
            "daily_streak": 4,
            "last_quest_completed": "2026-10-18T09:30:00+00:00",
        }

        await tracker.async_load()

        assert tracker.progress.total_xp == 500
        assert tracker.progress.level == 3
        assert tracker.progress.daily_streak == 4
        assert tracker.progress.last_quest_completed == datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)
        mock_store.async_set.assert_not_called()

    @pytest.mark.asyncio
    async def test_save(self, tracker, mock_store):
        tracker._progress = UserProgress(total_xp=42, level=1, daily_streak=2)

        await tracker.async_save()

        mock_store.async_set.assert_called_once_with(
            KEY_USER_PROGRESS,
            {"total_xp": 42, "level": 1, "daily_streak": 2, "last_quest_completed": None},
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("xp", "expected_level"), [(0, 1), (99, 1), (100, 2), (400, 3), (1600, 5), (8100, 10)])
    async def test_add_xp_updates_level(self, tracker, mock_store, xp, expected_level):
        await tracker.async_add_xp(xp)

        assert tracker.progress.total_xp == xp
        assert tracker.progress.level == expected_level
        mock_store.async_set.assert_called_once()

    @pytest.mark.asyncio
    async def test_remove_xp(self, tracker, mock_store):
        tracker._progress = UserProgress(total_xp=450, level=3)

        await tracker.async_remove_xp(100)

        assert tracker.progress.total_xp == 350
        assert tracker.progress.level == 2
        mock_store.async_set.assert_called_once()

    @pytest.mark.asyncio
    async def test_remove_xp_never_negative(self, tracker):
        tracker._progress = UserProgress(total_xp=30)

        await tracker.async_remove_xp(100)

        assert tracker.progress.total_xp == 0
        assert tracker.progress.level == 1

    @pytest.mark.asyncio
    async def test_update_streak_consecutive_day(self, tracker, mock_store, set_now):
        tracker._progress = UserProgress(daily_streak=2, last_quest_completed=NOW - timedelta(days=1))

        await tracker.async_update_streak()

        assert tracker.progress.daily_streak == 3
        assert tracker.progress.last_quest_completed == NOW
        mock_store.async_set.assert_called_once()

    @pytest.mark.asyncio
    async def test_update_streak_broken(self, tracker, set_now):
        tracker._progress = UserProgress(daily_streak=6, last_quest_completed=NOW - timedelta(days=3))

        await tracker.async_update_streak()

        assert tracker.progress.daily_streak == 1
        assert tracker.progress.last_quest_completed == NOW

    @pytest.mark.asyncio
    async def test_update_streak_never_completed(self, tracker, set_now):
        await tracker.async_update_streak()

        assert tracker.progress.daily_streak == 1
        assert tracker.progress.last_quest_completed == NOW

    @pytest.mark.asyncio
    async def test_update_streak_same_day_is_noop(self, tracker, mock_store, set_now):
        earlier = NOW - timedelta(hours=3)
        tracker._progress = UserProgress(daily_streak=5, last_quest_completed=earlier)

        await tracker.async_update_streak()

        assert tracker.progress.daily_streak == 5
        assert tracker.progress.last_quest_completed == earlier
        mock_store.async_set.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_streak_twice_same_day(self, tracker, mock_store, set_now):
        tracker._progress = UserProgress(daily_streak=1, last_quest_completed=NOW - timedelta(days=1))

        await tracker.async_update_streak()
        set_now(NOW + timedelta(hours=2))
        await tracker.async_update_streak()

        assert tracker.progress.daily_streak == 2
        assert tracker.progress.last_quest_completed == NOW
        assert mock_store.async_set.call_count == 1

    @pytest.mark.asyncio
    async def test_decrement_streak(self, tracker, mock_store):
        tracker._progress = UserProgress(daily_streak=3)

        await tracker.async_decrement_streak()

        assert tracker.progress.daily_streak == 2
        mock_store.async_set.assert_called_once()

    @pytest.mark.asyncio
    async def test_decrement_streak_not_below_zero(self, tracker, mock_store):
        await tracker.async_decrement_streak()

        assert tracker.progress.daily_streak == 0
        mock_store.async_set.assert_called_once()
