"""Integration tests for Daily Side Quests config flow."""
from __future__ import annotations

from unittest.mock import Mock

from homeassistant.data_entry_flow import FlowResultType
import pytest

from custom_components.sidequests import config_flow
from custom_components.sidequests.const import CONF_USE_TODO


def _schema_default(schema, key):
    for marker in schema.schema:
        if marker == key:
            return marker.default()
    raise KeyError(key)


class TestSideQuestsConfigFlow:
    """Test Daily Side Quests config flow."""

    @pytest.mark.asyncio
    async def test_user_form_display(self):
        """Test the user form is displayed correctly."""
        flow = config_flow.SideQuestsConfigFlow()
        flow.hass = Mock()
        flow._async_current_entries = Mock(return_value=[])

        result = await flow.async_step_user()

        assert result["type"] == FlowResultType.FORM
        assert result["step_id"] == "user"
        assert result["errors"] == {}
        assert CONF_USE_TODO in result["data_schema"].schema
        assert _schema_default(result["data_schema"], CONF_USE_TODO) is True

    @pytest.mark.asyncio
    async def test_user_form_submission(self):
        """Test successful form submission."""
        flow = config_flow.SideQuestsConfigFlow()
        flow.hass = Mock()
        flow._async_current_entries = Mock(return_value=[])

        user_input = {CONF_USE_TODO: False}

        result = await flow.async_step_user(user_input)

        assert result["type"] == FlowResultType.CREATE_ENTRY
        assert result["title"] == "Daily Side Quests"
        assert result["data"] == user_input

    @pytest.mark.asyncio
    async def test_single_instance_restriction(self):
        """Test that only one instance is allowed."""
        flow = config_flow.SideQuestsConfigFlow()
        flow.hass = Mock()
        flow._async_current_entries = Mock(return_value=[Mock()])

        result = await flow.async_step_user()

        assert result["type"] == FlowResultType.ABORT
        assert result["reason"] == "single_instance_allowed"

    def test_options_flow_creation(self):
        """Test options flow is created correctly."""
        mock_entry = Mock()
        options_flow = config_flow.SideQuestsConfigFlow.async_get_options_flow(mock_entry)

        assert isinstance(options_flow, config_flow.SideQuestsOptionsFlow)
        assert options_flow.entry == mock_entry


class TestSideQuestsOptionsFlow:
    """Test Daily Side Quests options flow."""

    @pytest.fixture
    def mock_entry(self):
        """Return a mock config entry."""
        entry = Mock()
        entry.data = {CONF_USE_TODO: True}
        entry.options = {CONF_USE_TODO: False}
        return entry

    @pytest.mark.asyncio
    async def test_options_form_display(self, mock_entry):
        """Test the options form defaults to the saved option."""
        flow = config_flow.SideQuestsOptionsFlow(mock_entry)

        result = await flow.async_step_init()

        assert result["type"] == FlowResultType.FORM
        assert result["step_id"] == "init"
        assert _schema_default(result["data_schema"], CONF_USE_TODO) is False

    @pytest.mark.asyncio
    async def test_options_form_falls_back_to_entry_data(self):
        """Test the default comes from setup data when no options are saved."""
        entry = Mock()
        entry.data = {CONF_USE_TODO: False}
        entry.options = {}

        flow = config_flow.SideQuestsOptionsFlow(entry)
        result = await flow.async_step_init()

        assert _schema_default(result["data_schema"], CONF_USE_TODO) is False

    @pytest.mark.asyncio
    async def test_options_form_submission(self, mock_entry):
        """Test successful options form submission."""
        flow = config_flow.SideQuestsOptionsFlow(mock_entry)

        result = await flow.async_step_init({CONF_USE_TODO: True})

        assert result["type"] == FlowResultType.CREATE_ENTRY
        assert result["title"] == ""
        assert result["data"] == {CONF_USE_TODO: True}


class TestUseTodoEnabled:
    """Test resolving the todo list switch."""

    @pytest.mark.parametrize(
        ("data", "options", "expected"),
        [
            ({}, {}, True),
            ({CONF_USE_TODO: False}, {}, False),
            ({CONF_USE_TODO: False}, {CONF_USE_TODO: True}, True),
            ({CONF_USE_TODO: True}, {CONF_USE_TODO: False}, False),
        ],
    )
    def test_use_todo_enabled(self, data, options, expected):
        entry = Mock()
        entry.data = data
        entry.options = options

        assert config_flow.use_todo_enabled(entry) is expected
