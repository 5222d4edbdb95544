"""Data models for Daily Side Quests integration."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import date, datetime
from typing import Any
import uuid

from homeassistant.util import dt as dt_util

from .const import LEVEL_TITLES, MAX_LEVEL_TITLE


def new_id() -> str:
    return uuid.uuid4().hex


def level_title(level: int) -> str:
    """Return the display title for a level."""
    for upper, title in LEVEL_TITLES:
        if level < upper:
            return title
    return MAX_LEVEL_TITLE


def _known_fields(cls, data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys that are not fields of cls (older/newer snapshots)."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


@dataclass
class Category:
    name: str
    color: str = "#888888"
    enabled: bool = True

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Category:
        return cls(**_known_fields(cls, data))


@dataclass
class QuestTemplate:
    title: str
    description: str = ""
    base_xp: int = 5
    category: str = "general"
    rarity_weight: int = 1  # higher = picked more often
    is_active: bool = True
    id: str = field(default_factory=new_id)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QuestTemplate:
        return cls(**_known_fields(cls, data))


@dataclass
class DailyQuest:
    """One day's concrete quest, a snapshot of its template at generation time."""
    template_id: str
    title: str
    xp: int
    category: str = "general"
    date_generated: date = field(default_factory=lambda: dt_util.now().date())
    is_completed: bool = False
    id: str = field(default_factory=new_id)

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["date_generated"] = self.date_generated.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DailyQuest:
        data = _known_fields(cls, data)
        generated = data.get("date_generated")
        if isinstance(generated, str):
            data["date_generated"] = dt_util.parse_date(generated[:10])
        return cls(**data)


@dataclass
class UserProgress:
    total_xp: int = 0
    level: int = 1
    daily_streak: int = 0
    last_quest_completed: datetime | None = None  # None = never

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if self.last_quest_completed is not None:
            data["last_quest_completed"] = self.last_quest_completed.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserProgress:
        data = _known_fields(cls, data)
        last = data.get("last_quest_completed")
        if isinstance(last, str):
            data["last_quest_completed"] = dt_util.parse_datetime(last)
        return cls(**data)


@dataclass(frozen=True)
class LevelInfo:
    """Read-only snapshot of progression state for display."""
    level: int
    total_xp: int
    xp_for_current_level: int
    xp_for_next_level: int
    xp_progress_in_level: int
    xp_needed_for_next_level: int
    progress_percentage: float
    daily_streak: int
    streak_multiplier: int  # percent

    @property
    def title(self) -> str:
        return level_title(self.level)

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["title"] = self.title
        return data


@dataclass(frozen=True)
class XpEvent:
    """Outcome of a single quest completion."""
    xp_gained: int  # base, before bonus
    streak_bonus: int
    total_xp: int
    previous_level: int
    new_level: int
    xp_progress_in_level: int
    xp_to_next_level: int
    progress_percentage: float

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.previous_level

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["leveled_up"] = self.leveled_up
        return data


@dataclass(frozen=True)
class QuestToggleResult:
    quest: DailyQuest
    level_info: LevelInfo
    was_completed: bool
    xp_event: XpEvent | None = None  # only set when the quest was completed
