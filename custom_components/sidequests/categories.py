"""Quest category registry for Daily Side Quests integration."""
from __future__ import annotations

import logging

from .const import KEY_CATEGORIES
from .exceptions import CategoryNotFoundError
from .models import Category
from .storage import SideQuestsStore

_LOGGER = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("health", "#28a745"),
    ("chores", "#ffc107"),
    ("fun", "#17a2b8"),
    ("learning", "#6610f2"),
    ("social", "#e83e8c"),
    ("creative", "#fd7e14"),
    ("productivity", "#20c997"),
]


class CategoryRegistry:
    """Holds the quest categories and their enabled flags."""

    def __init__(self, store: SideQuestsStore) -> None:
        self._store = store
        self._categories: list[Category] = []

    async def async_load(self) -> None:
        """Load categories, seeding the defaults on a fresh store."""
        if await self._store.async_has(KEY_CATEGORIES):
            stored = await self._store.async_get(KEY_CATEGORIES) or []
            self._categories[:] = [Category.from_dict(c) for c in stored]
        else:
            self._seed_categories()
            await self.async_save()

    async def async_save(self) -> None:
        await self._store.async_set(KEY_CATEGORIES, [c.as_dict() for c in self._categories])

    def _seed_categories(self) -> None:
        if self._categories:
            return
        self._categories[:] = [Category(name=name, color=color) for name, color in DEFAULT_CATEGORIES]
        _LOGGER.info("Seeded %d default categories", len(self._categories))

    def get_categories(self) -> list[Category]:
        return self._categories

    def get_category(self, name: str) -> Category | None:
        """Case-insensitive lookup by name."""
        wanted = name.lower()
        for category in self._categories:
            if category.name.lower() == wanted:
                return category
        return None

    def get_category_color(self, name: str) -> str | None:
        category = self.get_category(name)
        return category.color if category else None

    def get_enabled_categories(self) -> list[str]:
        return [c.name for c in self._categories if c.enabled]

    async def async_set_enabled(self, name: str, enabled: bool) -> Category:
        """Enable or disable a category and persist the change."""
        category = self.get_category(name)
        if category is None:
            raise CategoryNotFoundError(f"Category not found: {name}")
        category.enabled = enabled
        await self.async_save()
        _LOGGER.info("Category %s %s", category.name, "enabled" if enabled else "disabled")
        return category
