"""The Daily Side Quests integration."""
from __future__ import annotations

import asyncio
from datetime import datetime
import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.exceptions import ConfigEntryNotReady, HomeAssistantError
import homeassistant.helpers.config_validation as cv
from homeassistant.helpers.event import async_track_time_change
from homeassistant.helpers.typing import ConfigType
import voluptuous as vol

from .const import (
    DOMAIN,
    PLATFORMS,
    SERVICE_ADD_TEMPLATE,
    SERVICE_DELETE_TEMPLATE,
    SERVICE_SET_CATEGORY_ENABLED,
    SERVICE_TOGGLE_QUEST,
    SERVICE_TOGGLE_TEMPLATE_ACTIVE,
    SERVICE_UPDATE_TEMPLATE,
)
from .coordinator import SideQuestsCoordinator
from .exceptions import SideQuestsError
from .templates import TEMPLATE_FIELDS

_LOGGER = logging.getLogger(__name__)

SERVICES = [
    SERVICE_TOGGLE_QUEST,
    SERVICE_ADD_TEMPLATE,
    SERVICE_UPDATE_TEMPLATE,
    SERVICE_DELETE_TEMPLATE,
    SERVICE_TOGGLE_TEMPLATE_ACTIVE,
    SERVICE_SET_CATEGORY_ENABLED,
]

TOGGLE_QUEST_SCHEMA = vol.Schema({
    vol.Required("quest_id"): cv.string,
})

ADD_TEMPLATE_SCHEMA = vol.Schema(TEMPLATE_FIELDS)

# All editable fields optional, no defaults: only what is given changes
UPDATE_TEMPLATE_SCHEMA = vol.Schema({
    vol.Required("template_id"): cv.string,
    **{vol.Optional(str(key)): validator for key, validator in TEMPLATE_FIELDS.items()},
})

TEMPLATE_ID_SCHEMA = vol.Schema({
    vol.Required("template_id"): cv.string,
})

SET_CATEGORY_ENABLED_SCHEMA = vol.Schema({
    vol.Required("category"): cv.string,
    vol.Required("enabled"): cv.boolean,
})


async def async_setup(hass: HomeAssistant, config: ConfigType) -> bool:
    """Set up the Daily Side Quests component."""
    return True

async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Daily Side Quests from a config entry."""
    try:
        coordinator = SideQuestsCoordinator(hass)
        await coordinator.async_initialize_if_needed()
    except (asyncio.TimeoutError, ConnectionError, OSError) as ex:
        raise ConfigEntryNotReady(f"Failed to load quest data: {ex}") from ex
    except Exception as ex:
        _LOGGER.exception("Unexpected error setting up Daily Side Quests")
        raise ConfigEntryNotReady(f"Setup failed: {ex}") from ex

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = coordinator

    try:
        await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    except Exception as ex:
        _LOGGER.exception("Failed to set up platforms")
        raise ConfigEntryNotReady(f"Failed to set up platforms: {ex}") from ex

    async def _midnight_rollover(now: datetime) -> None:
        """Swap in the new day's quests right after midnight."""
        try:
            await coordinator.async_roll_over_if_needed()
        except Exception:
            _LOGGER.exception("Failed to refresh daily quests at midnight")

    entry.async_on_unload(
        async_track_time_change(hass, _midnight_rollover, hour=0, minute=0, second=0)
    )

    # ---- Services ----
    async def _toggle_quest(call: ServiceCall) -> None:
        """Toggle quest completion service handler."""
        try:
            quest_id = call.data["quest_id"]
            result = await coordinator.async_toggle_complete(quest_id)
            _LOGGER.debug("Toggled quest %s, completed=%s, level=%d",
                          quest_id, result.was_completed, result.level_info.level)
        except KeyError as ex:
            _LOGGER.error("Missing required parameter in toggle_quest service: %s", ex)
            raise HomeAssistantError(f"Missing required parameter: {ex}") from ex
        except SideQuestsError:
            raise
        except Exception as ex:
            _LOGGER.exception("Unexpected error in toggle_quest service")
            raise HomeAssistantError(f"Service failed: {ex}") from ex

    async def _add_template(call: ServiceCall) -> None:
        """Add quest template service handler."""
        try:
            template = await coordinator.async_add_template(**call.data)
            _LOGGER.info("Added quest template '%s' (%d XP, %s)",
                         template.title, template.base_xp, template.category)
        except vol.Invalid as ex:
            _LOGGER.error("Invalid template in add_template service: %s", ex)
            raise HomeAssistantError(f"Invalid template: {ex}") from ex
        except Exception as ex:
            _LOGGER.exception("Unexpected error in add_template service")
            raise HomeAssistantError(f"Service failed: {ex}") from ex

    async def _update_template(call: ServiceCall) -> None:
        """Update quest template service handler."""
        try:
            changes = dict(call.data)
            template_id = changes.pop("template_id")
            await coordinator.async_update_template(template_id, **changes)
            _LOGGER.info("Updated quest template %s", template_id)
        except KeyError as ex:
            _LOGGER.error("Missing required parameter in update_template service: %s", ex)
            raise HomeAssistantError(f"Missing required parameter: {ex}") from ex
        except vol.Invalid as ex:
            _LOGGER.error("Invalid template in update_template service: %s", ex)
            raise HomeAssistantError(f"Invalid template: {ex}") from ex
        except SideQuestsError:
            raise
        except Exception as ex:
            _LOGGER.exception("Unexpected error in update_template service")
            raise HomeAssistantError(f"Service failed: {ex}") from ex

    async def _delete_template(call: ServiceCall) -> None:
        """Delete quest template service handler."""
        try:
            await coordinator.async_delete_template(call.data["template_id"])
        except KeyError as ex:
            _LOGGER.error("Missing required parameter in delete_template service: %s", ex)
            raise HomeAssistantError(f"Missing required parameter: {ex}") from ex
        except SideQuestsError:
            raise
        except Exception as ex:
            _LOGGER.exception("Unexpected error in delete_template service")
            raise HomeAssistantError(f"Service failed: {ex}") from ex

    async def _toggle_template_active(call: ServiceCall) -> None:
        """Toggle quest template active flag service handler."""
        try:
            template = await coordinator.async_toggle_template_active(call.data["template_id"])
            _LOGGER.info("Template '%s' is now %s",
                         template.title, "active" if template.is_active else "inactive")
        except KeyError as ex:
            _LOGGER.error("Missing required parameter in toggle_template_active service: %s", ex)
            raise HomeAssistantError(f"Missing required parameter: {ex}") from ex
        except SideQuestsError:
            raise
        except Exception as ex:
            _LOGGER.exception("Unexpected error in toggle_template_active service")
            raise HomeAssistantError(f"Service failed: {ex}") from ex

    async def _set_category_enabled(call: ServiceCall) -> None:
        """Enable or disable a category service handler."""
        try:
            await coordinator.async_set_category_enabled(call.data["category"], call.data["enabled"])
        except KeyError as ex:
            _LOGGER.error("Missing required parameter in set_category_enabled service: %s", ex)
            raise HomeAssistantError(f"Missing required parameter: {ex}") from ex
        except SideQuestsError:
            raise
        except Exception as ex:
            _LOGGER.exception("Unexpected error in set_category_enabled service")
            raise HomeAssistantError(f"Service failed: {ex}") from ex

    hass.services.async_register(DOMAIN, SERVICE_TOGGLE_QUEST, _toggle_quest, schema=TOGGLE_QUEST_SCHEMA)
    hass.services.async_register(DOMAIN, SERVICE_ADD_TEMPLATE, _add_template, schema=ADD_TEMPLATE_SCHEMA)
    hass.services.async_register(DOMAIN, SERVICE_UPDATE_TEMPLATE, _update_template, schema=UPDATE_TEMPLATE_SCHEMA)
    hass.services.async_register(DOMAIN, SERVICE_DELETE_TEMPLATE, _delete_template, schema=TEMPLATE_ID_SCHEMA)
    hass.services.async_register(
        DOMAIN, SERVICE_TOGGLE_TEMPLATE_ACTIVE, _toggle_template_active, schema=TEMPLATE_ID_SCHEMA
    )
    hass.services.async_register(
        DOMAIN, SERVICE_SET_CATEGORY_ENABLED, _set_category_enabled, schema=SET_CATEGORY_ENABLED_SCHEMA
    )

    return True

async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        hass.data[DOMAIN].pop(entry.entry_id, None)
        # Unregister services if this is the last instance
        if not hass.data[DOMAIN]:
            for service in SERVICES:
                hass.services.async_remove(DOMAIN, service)
    return unload_ok
