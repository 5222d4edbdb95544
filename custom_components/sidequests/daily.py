"""Daily quest generation for Daily Side Quests integration."""
from __future__ import annotations

from datetime import date, timedelta
import logging
import random

from homeassistant.util import dt as dt_util

from .categories import CategoryRegistry
from .const import KEY_DAILY_QUESTS, MAX_DAILY_QUESTS, MAX_PICK_ATTEMPTS, MIN_DAILY_QUESTS
from .models import DailyQuest, QuestTemplate
from .storage import SideQuestsStore
from .templates import TemplateCatalog

_LOGGER = logging.getLogger(__name__)


class DailyQuestGenerator:
    """Produces and persists the day's batch of quests."""

    def __init__(
        self,
        store: SideQuestsStore,
        categories: CategoryRegistry,
        templates: TemplateCatalog,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._categories = categories
        self._templates = templates
        self._rng = rng or random.Random()
        self._quests: list[DailyQuest] = []
        self._batch_date: date | None = None

    @property
    def quests(self) -> list[DailyQuest]:
        return self._quests

    @property
    def batch_date(self) -> date | None:
        """Day the in-memory batch belongs to, None before the first load."""
        return self._batch_date

    async def async_load(self) -> None:
        """Adopt today's stored batch, or generate and persist a new one."""
        stored = await self._store.async_get(KEY_DAILY_QUESTS) or []
        self._quests = [DailyQuest.from_dict(q) for q in stored]
        today = dt_util.now().date()

        if not any(q.date_generated == today for q in self._quests):
            await self._categories.async_load()
            self._quests = self.generate(today)
            await self.async_save()
            _LOGGER.info("Generated %d quests for %s", len(self._quests), today)

        self._batch_date = today

    async def async_save(self) -> None:
        await self._store.async_set(KEY_DAILY_QUESTS, [q.as_dict() for q in self._quests])

    def generate(self, for_date: date) -> list[DailyQuest]:
        """Pick 3-5 quests by rarity weight from active templates in enabled categories.

        Templates used the day before are skipped unless that would leave nothing to pick from.
        """
        count = self._rng.randint(MIN_DAILY_QUESTS, MAX_DAILY_QUESTS)
        enabled = set(self._categories.get_enabled_categories())
        known = {c.name for c in self._categories.get_categories()}

        eligible = []
        for template in self._templates.get_templates():
            if not template.is_active:
                continue
            if template.category not in known:
                _LOGGER.warning("Template %s uses unknown category %s", template.title, template.category)
            if template.category in enabled:
                eligible.append(template)

        yesterday = for_date - timedelta(days=1)
        used_yesterday = {q.template_id for q in self._quests if q.date_generated == yesterday}
        pool = [t for t in eligible if t.id not in used_yesterday] or eligible

        chosen: list[QuestTemplate] = []
        chosen_ids: set[str] = set()
        attempts = 0
        while pool and len(chosen) < count and attempts < MAX_PICK_ATTEMPTS:
            attempts += 1
            template = self._weighted_pick(pool)
            if template.id in chosen_ids:
                continue
            chosen.append(template)
            chosen_ids.add(template.id)

        if len(chosen) < count:
            remaining = [t for t in pool if t.id not in chosen_ids]
            self._rng.shuffle(remaining)
            chosen.extend(remaining[: count - len(chosen)])

        _LOGGER.debug(
            "Quest pool: %d eligible, %d after excluding yesterday; target %d, picked %d in %d attempts",
            len(eligible), len(pool), count, len(chosen), attempts,
        )

        return [
            DailyQuest(
                template_id=t.id,
                title=t.title,
                xp=t.base_xp,
                category=t.category,
                date_generated=for_date,
            )
            for t in chosen
        ]

    def _weighted_pick(self, pool: list[QuestTemplate]) -> QuestTemplate:
        total = sum(t.rarity_weight for t in pool)
        if total <= 0:
            return self._rng.choice(pool)

        pick = self._rng.randrange(total)
        acc = 0
        for template in pool:
            acc += template.rarity_weight
            if pick < acc:
                return template
        return pool[0]
