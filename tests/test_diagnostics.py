"""Unit tests for Daily Side Quests diagnostics."""
from __future__ import annotations

from unittest.mock import Mock

import pytest

from custom_components.sidequests.const import CONF_USE_TODO, DOMAIN, STORAGE_KEY
from custom_components.sidequests.diagnostics import async_get_config_entry_diagnostics

from .conftest import NOW


@pytest.fixture
def mock_entry():
    """Return a mock config entry."""
    entry = Mock()
    entry.entry_id = "test_entry"
    entry.data = {CONF_USE_TODO: True}
    entry.options = {CONF_USE_TODO: False}
    return entry


@pytest.mark.asyncio
async def test_diagnostics_not_initialized(mock_hass, mock_entry, coordinator):
    mock_hass.data = {DOMAIN: {mock_entry.entry_id: coordinator}}

    result = await async_get_config_entry_diagnostics(mock_hass, mock_entry)

    assert result == {"error": "Coordinator not initialized"}


@pytest.mark.asyncio
async def test_diagnostics(mock_hass, mock_entry, coordinator):
    mock_hass.data = {DOMAIN: {mock_entry.entry_id: coordinator}}
    quests = await coordinator.async_get_todays_quests()
    await coordinator.async_toggle_complete(quests[0].id)
    await coordinator.async_set_category_enabled("fun", False)

    result = await async_get_config_entry_diagnostics(mock_hass, mock_entry)

    assert result["config_data"] == {CONF_USE_TODO: False}
    assert result["progress"]["total_xp"] == quests[0].xp
    assert result["statistics"]["total_templates"] == 10
    assert result["statistics"]["active_templates"] == 10
    assert result["statistics"]["templates_by_category"]["health"] == 3
    assert result["statistics"]["disabled_categories"] == ["fun"]
    assert "fun" not in result["statistics"]["enabled_categories"]
    assert result["todays_quests"]["batch_date"] == NOW.date().isoformat()
    assert result["todays_quests"]["count"] == len(quests)
    assert result["todays_quests"]["completed"] == 1
    assert result["storage_status"]["storage_key"] == STORAGE_KEY
