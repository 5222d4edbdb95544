"""Quest orchestration for Daily Side Quests integration."""
from __future__ import annotations

from collections.abc import Callable
import logging
import random
from typing import Any

from homeassistant.core import HomeAssistant, callback
from homeassistant.util import dt as dt_util

from .categories import CategoryRegistry
from .const import EVENT_LEVEL_UP, EVENT_QUEST_COMPLETED
from .daily import DailyQuestGenerator
from .exceptions import QuestNotFoundError, TemplateNotFoundError
from .models import Category, DailyQuest, LevelInfo, QuestTemplate, QuestToggleResult
from .progress import ProgressTracker
from .storage import SideQuestsStore
from .templates import EDITABLE_FIELDS, TEMPLATE_SCHEMA, TemplateCatalog
from .xp import XpCalculator

_LOGGER = logging.getLogger(__name__)


class SideQuestsCoordinator:
    """Wires the quest components together and is the entry point for entities and services."""

    def __init__(
        self,
        hass: HomeAssistant,
        store: SideQuestsStore | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the coordinator."""
        self.hass = hass
        self.store = store or SideQuestsStore(hass)
        self.categories = CategoryRegistry(self.store)
        self.templates = TemplateCatalog(self.store)
        self.progress = ProgressTracker(self.store)
        self.xp = XpCalculator(self.progress)
        self.daily = DailyQuestGenerator(self.store, self.categories, self.templates, rng)
        self._initialized = False
        self._listeners: list[Callable[[], None]] = []

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def async_initialize_if_needed(self) -> None:
        """Load every component once; a failed load leaves us uninitialized so the next call retries."""
        if self._initialized:
            return
        await self.progress.async_load()
        await self.templates.async_load()
        await self.categories.async_load()
        await self.daily.async_load()
        self._initialized = True
        _LOGGER.debug("Initialized with %d quests for today", len(self.daily.quests))

    # ---- listeners ----
    @callback
    def async_add_listener(self, update_callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback run after quest state changes; returns a remover."""
        self._listeners.append(update_callback)

        @callback
        def remove_listener() -> None:
            if update_callback in self._listeners:
                self._listeners.remove(update_callback)

        return remove_listener

    @callback
    def _async_notify_listeners(self) -> None:
        for update_callback in list(self._listeners):
            update_callback()

    # ---- quests ----
    async def async_get_todays_quests(self) -> tuple[DailyQuest, ...]:
        """Return today's quests; the same objects for every call within a day."""
        await self.async_initialize_if_needed()
        await self.async_roll_over_if_needed()
        return tuple(self.daily.quests)

    async def async_roll_over_if_needed(self) -> bool:
        """Load a fresh batch when the current one belongs to an earlier day."""
        if not self._initialized or self.daily.batch_date == dt_util.now().date():
            return False
        _LOGGER.info("New day, refreshing daily quests")
        await self.daily.async_load()
        self._async_notify_listeners()
        return True

    def get_quest(self, quest_id: str) -> DailyQuest | None:
        for quest in self.daily.quests:
            if quest.id == quest_id:
                return quest
        return None

    async def async_toggle_complete(self, quest_id: str) -> QuestToggleResult:
        """Flip a quest's completion and award or take back its XP."""
        await self.async_initialize_if_needed()

        quest = self.get_quest(quest_id)
        if quest is None:
            raise QuestNotFoundError(f"Quest not found: {quest_id}")

        quest.is_completed = not quest.is_completed

        if quest.is_completed:
            xp_event = await self.xp.async_award_quest_xp(quest.xp)
            result = QuestToggleResult(
                quest=quest,
                xp_event=xp_event,
                level_info=self.xp.get_level_info(),
                was_completed=True,
            )
        else:
            result = QuestToggleResult(
                quest=quest,
                level_info=await self.xp.async_remove_quest_xp(quest.xp),
                was_completed=False,
            )

        await self.daily.async_save()

        if result.xp_event is not None:
            self._fire_completion_events(result)
        else:
            _LOGGER.info("Quest un-completed: %s (-%d XP)", quest.title, quest.xp)

        self._async_notify_listeners()
        return result

    def _fire_completion_events(self, result: QuestToggleResult) -> None:
        event = result.xp_event
        _LOGGER.info("Quest completed: %s (+%d XP, +%d streak bonus)",
                     result.quest.title, event.xp_gained, event.streak_bonus)
        self.hass.bus.async_fire(
            EVENT_QUEST_COMPLETED,
            {
                "quest_id": result.quest.id,
                "title": result.quest.title,
                "xp_gained": event.xp_gained,
                "streak_bonus": event.streak_bonus,
                "total_xp": event.total_xp,
            },
        )
        if event.leveled_up:
            _LOGGER.info("Level up: %d -> %d", event.previous_level, event.new_level)
            self.hass.bus.async_fire(
                EVENT_LEVEL_UP,
                {
                    "previous_level": event.previous_level,
                    "new_level": event.new_level,
                    "title": result.level_info.title,
                },
            )

    # ---- progression ----
    def get_level_info(self) -> LevelInfo:
        return self.xp.get_level_info()

    # ---- categories ----
    def get_categories(self) -> list[Category]:
        return self.categories.get_categories()

    def get_category_color(self, name: str) -> str | None:
        return self.categories.get_category_color(name)

    def get_enabled_categories(self) -> list[str]:
        return self.categories.get_enabled_categories()

    async def async_set_category_enabled(self, name: str, enabled: bool) -> Category:
        await self.async_initialize_if_needed()
        return await self.categories.async_set_enabled(name, enabled)

    # ---- templates ----
    def get_templates(self) -> list[QuestTemplate]:
        return self.templates.get_templates()

    async def async_add_template(self, **fields: Any) -> QuestTemplate:
        """Validate and add a template; takes effect from the next generated batch."""
        await self.async_initialize_if_needed()
        return await self.templates.async_add_template(QuestTemplate(**TEMPLATE_SCHEMA(fields)))

    async def async_update_template(self, template_id: str, **changes: Any) -> QuestTemplate:
        await self.async_initialize_if_needed()
        existing = self.templates.get_template(template_id)
        if existing is None:
            raise TemplateNotFoundError(f"Template not found: {template_id}")
        merged = {name: getattr(existing, name) for name in EDITABLE_FIELDS}
        merged.update(changes)
        updated = QuestTemplate(id=template_id, **TEMPLATE_SCHEMA(merged))
        return await self.templates.async_update_template(updated)

    async def async_delete_template(self, template_id: str) -> None:
        await self.async_initialize_if_needed()
        if not await self.templates.async_delete_template(template_id):
            raise TemplateNotFoundError(f"Template not found: {template_id}")

    async def async_toggle_template_active(self, template_id: str) -> QuestTemplate:
        await self.async_initialize_if_needed()
        if not await self.templates.async_toggle_active(template_id):
            raise TemplateNotFoundError(f"Template not found: {template_id}")
        return self.templates.get_template(template_id)
