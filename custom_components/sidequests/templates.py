"""Quest template catalog for Daily Side Quests integration."""
from __future__ import annotations

import logging

import homeassistant.helpers.config_validation as cv
import voluptuous as vol

from .const import KEY_TEMPLATES
from .models import QuestTemplate, new_id
from .storage import SideQuestsStore

_LOGGER = logging.getLogger(__name__)

# Editable template fields, with the limits the template editor enforces
TEMPLATE_FIELDS = {
    vol.Required("title"): vol.All(cv.string, vol.Length(min=3, max=100)),
    vol.Optional("description", default=""): vol.All(cv.string, vol.Length(max=500)),
    vol.Required("base_xp"): vol.All(vol.Coerce(int), vol.Range(min=1, max=100)),
    vol.Optional("category", default="general"): cv.string,
    vol.Optional("rarity_weight", default=1): vol.All(vol.Coerce(int), vol.Range(min=1, max=5)),
    vol.Optional("is_active", default=True): cv.boolean,
}
TEMPLATE_SCHEMA = vol.Schema(TEMPLATE_FIELDS)

EDITABLE_FIELDS = ("title", "description", "base_xp", "category", "rarity_weight", "is_active")

DEFAULT_TEMPLATES = [
    ("Drink 1L of water", 5, "health", 1),
    ("Clean your desk", 8, "chores", 2),
    ("Watch 1 new anime episode", 3, "fun", 3),
    ("Stretch for 5 minutes", 4, "health", 1),
    ("Read 10 pages of a book", 6, "learning", 2),
    ("Send a message to a friend", 6, "social", 3),
    ("Tidy one shelf", 7, "chores", 3),
    ("Try a 5-minute breathing exercise", 4, "health", 2),
    ("Sketch something for 10 minutes", 5, "creative", 4),
    ("Plan tomorrow for 5 minutes", 4, "productivity", 2),
]


class TemplateCatalog:
    """Owns the pool of quest templates daily quests are drawn from."""

    def __init__(self, store: SideQuestsStore) -> None:
        self._store = store
        self._templates: list[QuestTemplate] = []

    async def async_load(self) -> None:
        """Load templates, seeding the defaults on a fresh store."""
        if await self._store.async_has(KEY_TEMPLATES):
            stored = await self._store.async_get(KEY_TEMPLATES) or []
            self._templates = [QuestTemplate.from_dict(t) for t in stored]
        else:
            self._seed_templates()
            await self.async_save()

    async def async_save(self) -> None:
        await self._store.async_set(KEY_TEMPLATES, [t.as_dict() for t in self._templates])

    def _seed_templates(self) -> None:
        if self._templates:
            return
        self._templates = [
            QuestTemplate(title=title, base_xp=base_xp, category=category, rarity_weight=weight)
            for title, base_xp, category, weight in DEFAULT_TEMPLATES
        ]
        _LOGGER.info("Seeded %d default quest templates", len(self._templates))

    def get_templates(self) -> list[QuestTemplate]:
        return self._templates

    def get_template(self, template_id: str) -> QuestTemplate | None:
        for template in self._templates:
            if template.id == template_id:
                return template
        return None

    async def async_add_template(self, template: QuestTemplate) -> QuestTemplate:
        """Add a template under a freshly generated id."""
        template.id = new_id()
        self._templates.append(template)
        await self.async_save()
        _LOGGER.info("Added quest template %s: %s", template.id, template.title)
        return template

    async def async_update_template(self, template: QuestTemplate) -> QuestTemplate | None:
        """Copy the editable fields onto the stored template with the same id."""
        existing = self.get_template(template.id)
        if existing is None:
            return None
        for name in EDITABLE_FIELDS:
            setattr(existing, name, getattr(template, name))
        await self.async_save()
        return existing

    async def async_delete_template(self, template_id: str) -> bool:
        template = self.get_template(template_id)
        if template is None:
            return False
        self._templates.remove(template)
        await self.async_save()
        _LOGGER.info("Deleted quest template %s: %s", template_id, template.title)
        return True

    async def async_toggle_active(self, template_id: str) -> bool:
        template = self.get_template(template_id)
        if template is None:
            return False
        template.is_active = not template.is_active
        await self.async_save()
        return True
