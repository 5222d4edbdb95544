"""Config flow for Daily Side Quests integration."""
from __future__ import annotations

from typing import Any

from homeassistant import config_entries
from homeassistant.core import callback
import voluptuous as vol

from .const import CONF_USE_TODO, DOMAIN

ENTRY_TITLE = "Daily Side Quests"


def use_todo_enabled(entry: config_entries.ConfigEntry) -> bool:
    """Whether the todo list is on; options override the value chosen at setup."""
    if CONF_USE_TODO in entry.options:
        return entry.options[CONF_USE_TODO]
    return entry.data.get(CONF_USE_TODO, True)


def _use_todo_schema(default: bool) -> vol.Schema:
    return vol.Schema({vol.Optional(CONF_USE_TODO, default=default): bool})


class SideQuestsConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None):
        # Quest progress is single-user, so only one instance
        if self._async_current_entries():
            return self.async_abort(reason="single_instance_allowed")

        if user_input is not None:
            return self.async_create_entry(title=ENTRY_TITLE, data=user_input)

        return self.async_show_form(step_id="user", data_schema=_use_todo_schema(True), errors={})

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        return SideQuestsOptionsFlow(config_entry)


class SideQuestsOptionsFlow(config_entries.OptionsFlow):
    """Lets the todo list be switched on or off after setup."""

    def __init__(self, entry):
        self.entry = entry

    async def async_step_init(self, user_input=None):
        if user_input is not None:
            return self.async_create_entry(title="", data=user_input)

        return self.async_show_form(step_id="init", data_schema=_use_todo_schema(use_todo_enabled(self.entry)))
