# diet_planner/models/analysis_result.py
"""
Result models produced by adjusters, analyzers and the substitution engine.
"""
from typing import List, Dict, Any
from dataclasses import dataclass, field

from .meal_plan import DayPlan, MealSlot, SLOT_ORDER


@dataclass
class AdjustmentResult:
    """A plan plus the human-readable notes explaining how it got there."""

    plan: DayPlan
    notes: List[str] = field(default_factory=list)


@dataclass
class SlotCoverage:
    """Covered/total planned items for one slot."""

    covered: int = 0
    total: int = 0

    @property
    def percent(self) -> int:
        if self.total == 0:
            return 0
        return int(self.covered * 100 / self.total + 0.5)


@dataclass
class PlanCoverage:
    """How much of a plan the logged eaten items account for."""

    covered: int                # Planned items matched by an eaten item
    total: int                  # Planned items
    by_slot: Dict[MealSlot, SlotCoverage] = field(default_factory=dict)

    @property
    def percent(self) -> int:
        if self.total == 0:
            return 0
        return int(self.covered * 100 / self.total + 0.5)

    def slot_percents(self) -> Dict[MealSlot, int]:
        return {
            slot: self.by_slot.get(slot, SlotCoverage()).percent
            for slot in SLOT_ORDER
        }


@dataclass
class DayAnalysis:
    """Adherence score and qualitative findings for one logged day."""

    match_score: int            # Plan coverage percent (0 when nothing eaten)
    daily_score: int            # Coverage plus slot bonus minus penalties, 0-100
    concerns: List[str] = field(default_factory=list)
    deficiencies: List[str] = field(default_factory=list)
    excesses: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matchScore": self.match_score,
            "dailyScore": self.daily_score,
            "concerns": list(self.concerns),
            "deficiencies": list(self.deficiencies),
            "excesses": list(self.excesses),
        }


@dataclass
class SubstituteSuggestion:
    """Swap candidates for one food, with the nutrition role they share."""

    hint: str
    options: List[str] = field(default_factory=list)


@dataclass
class RollingScores:
    """Average daily scores over meaningful logs."""

    weekly: int = 0
    monthly: int = 0
    total: int = 0
    days_counted: int = 0
