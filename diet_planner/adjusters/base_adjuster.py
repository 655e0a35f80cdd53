# diet_planner/adjusters/base_adjuster.py
"""
Base class for plan adjusters.

Defines the interface every personalization stage implements. Adjusters
take a DayPlan and stage-specific parameters and return a NEW plan plus
the notes explaining each change.
"""
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

from diet_planner.models import AdjustmentResult, DayPlan, MealSuggestion, MAIN_SLOTS


class PlanAdjuster(ABC):
    """
    Abstract base class for plan adjusters.

    All adjusters follow a common contract:
    - Never mutate the incoming plan (work on plan.copy())
    - Return AdjustmentResult(plan, notes) with deduplicated notes
    - Degrade to a no-op (same plan, no notes) when preconditions are unmet

    Subclasses must implement:
    - name: Stage name used in the pipeline and registry
    - adjust(): Core adjustment logic
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Adjuster name (matches registry key).

        Example: "user_context", "medication", "preference"
        """
        pass

    @abstractmethod
    def adjust(self, plan: DayPlan, params: Any) -> AdjustmentResult:
        """
        Apply the stage's rules to a plan.

        Args:
            plan: Plan from the previous stage (not modified)
            params: Stage-specific context (see each subclass)

        Returns:
            AdjustmentResult with the new plan and its notes
        """
        pass

    def unchanged(self, plan: DayPlan) -> AdjustmentResult:
        """No-op result."""
        return AdjustmentResult(plan=plan, notes=[])


class NoteList(list):
    """List of notes that ignores duplicates."""

    def add(self, text: str) -> None:
        if text and text not in self:
            self.append(text)


def sync_main_summaries(plan: DayPlan) -> None:
    """Rebuild the summary of every main meal."""
    for slot in MAIN_SLOTS:
        plan.meal(slot).sync_summary()


def set_meal_fields(plan: DayPlan, field_name: str, breakfast: Optional[str] = None,
                    lunch: Optional[str] = None, dinner: Optional[str] = None) -> None:
    """Assign one field across the three main meals (None leaves a meal as is)."""
    for slot, value in zip(MAIN_SLOTS, (breakfast, lunch, dinner)):
        if value is not None:
            setattr(plan.meal(slot), field_name, value)


def set_side(meal: MealSuggestion, index: int, value: str) -> None:
    """Replace one side dish, padding the list when it is shorter."""
    while len(meal.sides) <= index:
        meal.sides.append(value)
    meal.sides[index] = value


def replace_snack(plan: DayPlan, main: str, sides: Iterable[str], soup: str,
                  recipe_name: Optional[str] = None,
                  recipe_steps: Optional[List[str]] = None,
                  summary: Optional[str] = None) -> None:
    """
    Swap the snack for a fixed combination.

    Args:
        plan: Plan being adjusted (modified in place)
        main: Snack main item
        sides: Accompaniments
        soup: Drink served with the snack
        recipe_name: Recipe title; kept as is when None
        recipe_steps: Recipe steps; kept as is when None
        summary: Display summary; defaults to "main + sides"
    """
    snack = plan.snack
    snack.main = main
    snack.sides = list(sides)
    snack.soup = soup
    snack.summary = summary or " + ".join([main] + snack.sides)
    if recipe_name is not None:
        snack.recipe_name = recipe_name
    if recipe_steps is not None:
        snack.recipe_steps = list(recipe_steps)
