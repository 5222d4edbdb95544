"""Todo entity for Daily Side Quests integration."""
from __future__ import annotations

import logging

from homeassistant.components.todo import TodoItem, TodoItemStatus, TodoListEntity, TodoListEntityFeature
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .config_flow import use_todo_enabled
from .const import DOMAIN
from .coordinator import SideQuestsCoordinator
from .exceptions import QuestNotFoundError

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry, add_entities: AddEntitiesCallback):
    if not use_todo_enabled(entry):
        return
    coordinator: SideQuestsCoordinator = hass.data[DOMAIN][entry.entry_id]
    add_entities([DailyQuestTodoList(coordinator)], True)


class DailyQuestTodoList(TodoListEntity):
    """Today's quests as a checklist; checking an item completes the quest."""

    _attr_should_poll = False

    def __init__(self, coord: SideQuestsCoordinator):
        self._coord = coord
        self._attr_name = "Daily Side Quests"
        self._attr_unique_id = f"{DOMAIN}_todo_daily"
        self._attr_icon = "mdi:sword-cross"
        self._attr_supported_features = TodoListEntityFeature.UPDATE_TODO_ITEM

    async def async_added_to_hass(self) -> None:
        await super().async_added_to_hass()
        self.async_on_remove(self._coord.async_add_listener(self.async_write_ha_state))

    @property
    def todo_items(self) -> list[TodoItem]:
        return [
            TodoItem(
                summary=f"{q.title} (+{q.xp} XP)",
                uid=q.id,
                status=TodoItemStatus.COMPLETED if q.is_completed else TodoItemStatus.NEEDS_ACTION,
                description=q.category,
            )
            for q in self._coord.daily.quests
        ]

    async def async_update_todo_item(self, item: TodoItem) -> None:
        """Toggle the quest when its checkbox state changes; other edits are ignored."""
        quest = self._coord.get_quest(item.uid)
        if quest is None:
            raise QuestNotFoundError(f"Quest not found: {item.uid}")

        want_completed = item.status == TodoItemStatus.COMPLETED
        if quest.is_completed == want_completed:
            _LOGGER.debug("Quest %s already in requested state", quest.title)
            return
        await self._coord.async_toggle_complete(quest.id)
