"""Diagnostics support for Daily Side Quests integration."""
from __future__ import annotations

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .config_flow import use_todo_enabled
from .const import CONF_USE_TODO, DOMAIN, STORAGE_KEY, STORAGE_VERSION
from .coordinator import SideQuestsCoordinator


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: SideQuestsCoordinator = hass.data[DOMAIN][entry.entry_id]

    if not coordinator.initialized:
        return {"error": "Coordinator not initialized"}

    templates = coordinator.get_templates()
    quests = coordinator.daily.quests
    templates_by_category: dict[str, int] = {}
    for template in templates:
        templates_by_category[template.category] = templates_by_category.get(template.category, 0) + 1

    return {
        "config_data": {
            CONF_USE_TODO: use_todo_enabled(entry),
        },
        "progress": coordinator.get_level_info().as_dict(),
        "statistics": {
            "total_templates": len(templates),
            "active_templates": sum(1 for t in templates if t.is_active),
            "templates_by_category": templates_by_category,
            "enabled_categories": coordinator.get_enabled_categories(),
            "disabled_categories": [c.name for c in coordinator.get_categories() if not c.enabled],
        },
        "todays_quests": {
            "batch_date": coordinator.daily.batch_date.isoformat() if coordinator.daily.batch_date else None,
            "count": len(quests),
            "completed": sum(1 for q in quests if q.is_completed),
            "quests": [q.as_dict() for q in quests],
        },
        "storage_status": {
            "storage_version": STORAGE_VERSION,
            "storage_key": STORAGE_KEY,
        },
    }
