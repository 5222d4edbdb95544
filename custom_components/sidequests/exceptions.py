"""Exceptions for Daily Side Quests integration."""
from __future__ import annotations

from homeassistant.exceptions import HomeAssistantError


class SideQuestsError(HomeAssistantError):
    """Base error for Daily Side Quests."""


class QuestNotFoundError(SideQuestsError):
    """Quest id is not part of today's batch."""


class TemplateNotFoundError(SideQuestsError):
    """Quest template id is unknown."""


class CategoryNotFoundError(SideQuestsError):
    """Category name is unknown."""
