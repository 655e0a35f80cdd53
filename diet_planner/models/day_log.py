# diet_planner/models/day_log.py
"""
Daily intake log models and their parse-and-sanitize functions.

A DayLog is created lazily the first time a date is viewed (seeded from
that date's plan, every item unchecked) and is overwritten, never deleted.
"""
import json
import math
import re
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

from .meal_plan import MealSlot, SLOT_ORDER, MAIN_SLOTS

MAX_SERVINGS = 8
MAX_MEDICATION_IDS = 200


def clamp_servings(value) -> int:
    """Round and clamp a serving multiplier to [1, MAX_SERVINGS]."""
    return max(1, min(MAX_SERVINGS, int(math.floor(value + 0.5))))


@dataclass
class TrackItem:
    """
    One loggable food entry within a meal slot.

    Attributes:
        id: Stable identifier ("2024-03-10-lunch-0" for seeded items)
        name: Display name, optionally "name · amount"
        eaten: Checked as eaten
        not_eaten: Checked as not eaten (never together with eaten)
        is_manual: Typed by the user rather than seeded from the plan
        servings: Serving multiplier, 1..MAX_SERVINGS
    """
    id: str
    name: str
    eaten: bool = False
    not_eaten: bool = False
    is_manual: bool = False
    servings: int = 1

    def __post_init__(self):
        """Eaten wins over not-eaten; servings are clamped."""
        if self.eaten:
            self.not_eaten = False
        self.servings = clamp_servings(self.servings)

    def mark_eaten(self) -> None:
        self.eaten = True
        self.not_eaten = False

    def mark_not_eaten(self) -> None:
        self.eaten = False
        self.not_eaten = True

    def clear_check(self) -> None:
        self.eaten = False
        self.not_eaten = False

    def set_servings(self, servings) -> None:
        self.servings = clamp_servings(servings)

    @property
    def is_checked(self) -> bool:
        return self.eaten or self.not_eaten

    def copy(self) -> "TrackItem":
        return TrackItem(self.id, self.name, self.eaten, self.not_eaten,
                         self.is_manual, self.servings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "eaten": self.eaten,
            "notEaten": self.not_eaten,
            "isManual": self.is_manual,
            "servings": self.servings,
        }


@dataclass
class DayLog:
    """
    Per-date intake record.

    Attributes:
        meals: Ordered TrackItems per slot
        memo: Free-text memo
        medication_taken_ids: Medication schedule ids marked as taken
    """
    meals: Dict[MealSlot, List[TrackItem]] = field(
        default_factory=lambda: {slot: [] for slot in SLOT_ORDER}
    )
    memo: str = ""
    medication_taken_ids: List[str] = field(default_factory=list)

    def __post_init__(self):
        for slot in SLOT_ORDER:
            self.meals.setdefault(slot, [])

    def items(self, slot: MealSlot) -> List[TrackItem]:
        return self.meals[slot]

    def all_items(self) -> List[TrackItem]:
        return [item for slot in SLOT_ORDER for item in self.meals[slot]]

    def eaten_items(self) -> List[TrackItem]:
        """Eaten items across all slots, in slot order."""
        return [item for item in self.all_items() if item.eaten]

    def slot_has_eaten(self, slot: MealSlot) -> bool:
        return any(item.eaten for item in self.meals[slot])

    def skipped_main_meals(self) -> int:
        """Number of main meal slots with no eaten item."""
        return sum(1 for slot in MAIN_SLOTS if not self.slot_has_eaten(slot))

    def reliability(self) -> float:
        """
        Fraction of items explicitly checked eaten or not-eaten.

        Returns:
            0.0 for an empty log, 1.0 when every item is checked
        """
        items = self.all_items()
        if not items:
            return 0.0
        return sum(1 for item in items if item.is_checked) / len(items)

    def has_meaningful_entries(self) -> bool:
        """
        True when the user touched this log at all.

        Untouched auto-seeded logs are excluded from score averages.
        """
        if self.memo.strip():
            return True
        if self.medication_taken_ids:
            return True
        return any(
            item.eaten or item.not_eaten or item.is_manual or item.servings != 1
            for item in self.all_items()
        )

    def find_item(self, item_id: str) -> Optional[TrackItem]:
        for item in self.all_items():
            if item.id == item_id:
                return item
        return None

    def copy(self) -> "DayLog":
        return DayLog(
            meals={slot: [item.copy() for item in self.meals[slot]] for slot in SLOT_ORDER},
            memo=self.memo,
            medication_taken_ids=list(self.medication_taken_ids),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meals": {
                slot.value: [item.to_dict() for item in self.meals[slot]]
                for slot in SLOT_ORDER
            },
            "memo": self.memo,
            "medicationTakenIds": list(self.medication_taken_ids),
        }


def parse_track_items(raw: Any, slot: MealSlot, date_key: str) -> List[TrackItem]:
    """
    Sanitize a stored list of track items for one slot.

    Non-object entries and entries without a name are dropped. Missing
    ids are synthesized, whitespace in names is collapsed, eaten wins over
    not-eaten and servings are clamped.

    Args:
        raw: Stored value (anything)
        slot: Slot being parsed
        date_key: Date of the log, used for synthesized ids

    Returns:
        Valid TrackItems (possibly empty)
    """
    if not isinstance(raw, list):
        return []

    items = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            continue

        name = entry.get("name")
        name = re.sub(r"\s+", " ", name).strip() if isinstance(name, str) else ""
        if not name:
            continue

        item_id = entry.get("id")
        if not isinstance(item_id, str) or not item_id.strip():
            item_id = f"{date_key}-{slot.value}-server-{index}"

        servings = entry.get("servings")
        if isinstance(servings, bool) or not isinstance(servings, (int, float)) or not math.isfinite(servings):
            servings = 1

        items.append(TrackItem(
            id=item_id,
            name=name,
            eaten=bool(entry.get("eaten")),
            not_eaten=bool(entry.get("notEaten")),
            is_manual=bool(entry.get("isManual")),
            servings=servings,
        ))
    return items


def parse_medication_taken_ids(raw: Any) -> List[str]:
    """Deduplicated, trimmed string ids, capped at MAX_MEDICATION_IDS."""
    if not isinstance(raw, list):
        return []

    ids = []
    for value in raw:
        if isinstance(value, str) and value.strip() and value.strip() not in ids:
            ids.append(value.strip())
    return ids[:MAX_MEDICATION_IDS]


def parse_day_log(raw: Any, date_key: str) -> Optional[DayLog]:
    """
    Parse and sanitize one stored day log.

    Accepts a dict or a JSON string. Unknown shapes yield None rather
    than raising; field-level problems are repaired or dropped.

    Args:
        raw: Stored log payload
        date_key: Date the log belongs to

    Returns:
        DayLog, or None when the payload is not an object
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return None

    if not isinstance(raw, dict):
        return None

    meals_raw = raw.get("meals")
    if not isinstance(meals_raw, dict):
        meals_raw = {}

    memo = raw.get("memo")
    return DayLog(
        meals={
            slot: parse_track_items(meals_raw.get(slot.value), slot, date_key)
            for slot in SLOT_ORDER
        },
        memo=memo.strip() if isinstance(memo, str) else "",
        medication_taken_ids=parse_medication_taken_ids(raw.get("medicationTakenIds")),
    )


def make_track_items(date_key: str, slot: MealSlot, names: List[str]) -> List[TrackItem]:
    """Unchecked plan-seeded items with ids "{date}-{slot}-{index}"."""
    return [
        TrackItem(id=f"{date_key}-{slot.value}-{index}", name=name)
        for index, name in enumerate(names)
    ]
