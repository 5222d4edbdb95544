"""Storage utilities for Daily Side Quests integration."""
from __future__ import annotations

import logging
from typing import Any

from homeassistant.core import HomeAssistant
from homeassistant.helpers.storage import Store

from .const import STORAGE_KEY, STORAGE_VERSION

_LOGGER = logging.getLogger(__name__)


class SideQuestsStore:
    """Key-value store backed by a single Home Assistant Store document.

    Every write saves the complete document, never a diff.
    """

    def __init__(self, hass: HomeAssistant):
        self._store: Store[dict[str, Any]] = Store(hass, STORAGE_VERSION, STORAGE_KEY)
        self._data: dict[str, Any] | None = None

    async def _async_data(self) -> dict[str, Any]:
        if self._data is None:
            self._data = await self._store.async_load() or {}
        return self._data

    async def async_has(self, key: str) -> bool:
        return key in await self._async_data()

    async def async_get(self, key: str) -> Any | None:
        return (await self._async_data()).get(key)

    async def async_set(self, key: str, value: Any) -> None:
        data = await self._async_data()
        data[key] = value
        _LOGGER.debug("Saving %s", key)
        await self._store.async_save(data)
