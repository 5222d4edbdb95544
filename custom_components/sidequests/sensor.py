"""Sensor entities for Daily Side Quests integration."""
from __future__ import annotations

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN
from .coordinator import SideQuestsCoordinator


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry, add_entities: AddEntitiesCallback):
    coordinator: SideQuestsCoordinator = hass.data[DOMAIN][entry.entry_id]
    add_entities([
        SideQuestsLevelSensor(coordinator),
        SideQuestsTotalXpSensor(coordinator),
        SideQuestsStreakSensor(coordinator),
        SideQuestsCompletedTodaySensor(coordinator),
    ], True)


class SideQuestsSensor(SensorEntity):
    """Base for sensors that follow coordinator updates."""

    _attr_should_poll = False

    def __init__(self, coord: SideQuestsCoordinator, key: str, name: str, icon: str):
        self._coord = coord
        self._attr_unique_id = f"{DOMAIN}_{key}"
        self._attr_name = f"Side Quests {name}"
        self._attr_icon = icon

    async def async_added_to_hass(self) -> None:
        await super().async_added_to_hass()
        self.async_on_remove(self._coord.async_add_listener(self.async_write_ha_state))

    @property
    def available(self) -> bool:
        """Check if coordinator is ready."""
        return self._coord.initialized


class SideQuestsLevelSensor(SideQuestsSensor):
    def __init__(self, coord: SideQuestsCoordinator):
        super().__init__(coord, "level", "Level", "mdi:shield-star")

    @property
    def native_value(self):
        return self._coord.get_level_info().level

    @property
    def extra_state_attributes(self):
        """Full level snapshot for progress bars and titles."""
        return self._coord.get_level_info().as_dict()


class SideQuestsTotalXpSensor(SideQuestsSensor):
    _attr_state_class = SensorStateClass.TOTAL
    _attr_native_unit_of_measurement = "XP"

    def __init__(self, coord: SideQuestsCoordinator):
        super().__init__(coord, "total_xp", "Total XP", "mdi:star-four-points")

    @property
    def native_value(self):
        return self._coord.progress.progress.total_xp


class SideQuestsStreakSensor(SideQuestsSensor):
    _attr_native_unit_of_measurement = "days"

    def __init__(self, coord: SideQuestsCoordinator):
        super().__init__(coord, "daily_streak", "Daily Streak", "mdi:fire")

    @property
    def native_value(self):
        return self._coord.progress.progress.daily_streak

    @property
    def extra_state_attributes(self):
        progress = self._coord.progress.progress
        last = progress.last_quest_completed
        return {
            "streak_bonus_percent": self._coord.get_level_info().streak_multiplier,
            "last_quest_completed": last.isoformat() if last else None,
        }


class SideQuestsCompletedTodaySensor(SideQuestsSensor):
    def __init__(self, coord: SideQuestsCoordinator):
        super().__init__(coord, "completed_today", "Completed Today", "mdi:clipboard-check")

    @property
    def native_value(self):
        return sum(1 for q in self._coord.daily.quests if q.is_completed)

    @property
    def extra_state_attributes(self):
        quests = self._coord.daily.quests
        return {
            "total": len(quests),
            "quests": [
                {
                    "id": q.id,
                    "title": q.title,
                    "xp": q.xp,
                    "category": q.category,
                    "color": self._coord.get_category_color(q.category),
                    "completed": q.is_completed,
                }
                for q in quests
            ],
        }
