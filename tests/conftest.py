"""Pytest configuration for Daily Side Quests tests."""
from __future__ import annotations

from datetime import datetime, timezone
import random
from unittest.mock import AsyncMock, Mock, patch

from homeassistant.core import HomeAssistant
import pytest
import pytest_asyncio

from custom_components.sidequests.coordinator import SideQuestsCoordinator
from custom_components.sidequests.storage import SideQuestsStore

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store_data():
    """Backing dict for the in-memory key-value store."""
    return {}


@pytest.fixture
def mock_store(store_data):
    """Return an in-memory store whose async methods record their calls."""
    store = Mock(spec=SideQuestsStore)

    async def _has(key):
        return key in store_data

    async def _get(key):
        return store_data.get(key)

    async def _set(key, value):
        store_data[key] = value

    store.async_has = AsyncMock(side_effect=_has)
    store.async_get = AsyncMock(side_effect=_get)
    store.async_set = AsyncMock(side_effect=_set)
    return store


@pytest.fixture
def rng():
    """Return a seeded random source."""
    return random.Random(1234)


@pytest.fixture
def set_now():
    """Freeze Home Assistant's clock; call the fixture value to move it."""
    with patch("homeassistant.util.dt.now") as mock_now:
        def _set(value: datetime) -> None:
            mock_now.return_value = value

        _set(NOW)
        yield _set


@pytest_asyncio.fixture
async def mock_hass():
    """Return a mock Home Assistant instance."""
    hass = Mock(spec=HomeAssistant)
    hass.data = {}
    hass.bus = Mock()
    hass.config_entries = Mock()
    hass.services = Mock()

    hass.config_entries.async_forward_entry_setups = AsyncMock(return_value=True)
    hass.config_entries.async_unload_platforms = AsyncMock(return_value=True)
    hass.services.async_register = Mock()
    hass.services.async_remove = Mock()

    return hass


@pytest.fixture
def coordinator(mock_hass, mock_store, rng, set_now):
    """Return a coordinator wired to the in-memory store."""
    return SideQuestsCoordinator(mock_hass, store=mock_store, rng=rng)
