# diet_planner/models/meal_plan.py
"""
Core data models for daily meal plans.

A DayPlan holds one MealSuggestion per MealSlot. Suggestions are cloned
(never aliased) whenever a pipeline stage changes them.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Iterator, Tuple


class MealSlot(Enum):
    """One of the four daily meal slots, in display order."""
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"

    @property
    def label(self) -> str:
        """Korean display label for the slot."""
        return _SLOT_LABELS[self]

    @classmethod
    def parse(cls, value: str) -> "MealSlot":
        """
        Parse a slot from its key or Korean label.

        Args:
            value: Slot key ("lunch"), short alias ("l") or label ("점심")

        Returns:
            Matching MealSlot

        Raises:
            ValueError: If the text names no slot
        """
        text = (value or "").strip().lower()
        for slot in cls:
            if text in (slot.value, slot.value[0], slot.label, slot.label.split("/")[0]):
                return slot
        raise ValueError(f"Unknown meal slot: '{value}'")


_SLOT_LABELS = {
    MealSlot.BREAKFAST: "아침",
    MealSlot.LUNCH: "점심",
    MealSlot.DINNER: "저녁",
    MealSlot.SNACK: "간식/커피",
}

SLOT_ORDER: Tuple[MealSlot, ...] = (
    MealSlot.BREAKFAST,
    MealSlot.LUNCH,
    MealSlot.DINNER,
    MealSlot.SNACK,
)

MAIN_SLOTS: Tuple[MealSlot, ...] = (
    MealSlot.BREAKFAST,
    MealSlot.LUNCH,
    MealSlot.DINNER,
)


@dataclass
class MealNutrient:
    """
    Macronutrient ratio of one meal, in percent.

    Attributes:
        carb: Carbohydrate share
        protein: Protein share
        fat: Fat share
    """
    carb: int
    protein: int
    fat: int

    def total(self) -> int:
        return self.carb + self.protein + self.fat

    def copy(self) -> "MealNutrient":
        return MealNutrient(self.carb, self.protein, self.fat)

    def to_dict(self) -> Dict[str, int]:
        return {"carb": self.carb, "protein": self.protein, "fat": self.fat}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MealNutrient":
        return cls(
            int(data.get("carb", 0)),
            int(data.get("protein", 0)),
            int(data.get("fat", 0)),
        )


@dataclass
class MealSuggestion:
    """
    A recommended menu for one meal slot.

    Attributes:
        summary: Human-readable one-line summary
        rice_type: Staple descriptor (e.g. "현미밥", "잡곡밥(소량)")
        main: Main dish
        soup: Soup or beverage descriptor
        sides: Ordered side dishes (may repeat)
        caution_flour: Flour-food caution text
        nutrient: Carb/protein/fat ratio
        recipe_name: Recipe title
        recipe_steps: Ordered recipe steps
    """
    summary: str
    rice_type: str
    main: str
    soup: str
    sides: List[str] = field(default_factory=list)
    caution_flour: str = ""
    nutrient: MealNutrient = field(default_factory=lambda: MealNutrient(35, 30, 35))
    recipe_name: str = ""
    recipe_steps: List[str] = field(default_factory=list)

    def copy(self) -> "MealSuggestion":
        """Deep copy (lists and nutrient are not shared)."""
        return MealSuggestion(
            summary=self.summary,
            rice_type=self.rice_type,
            main=self.main,
            soup=self.soup,
            sides=list(self.sides),
            caution_flour=self.caution_flour,
            nutrient=self.nutrient.copy(),
            recipe_name=self.recipe_name,
            recipe_steps=list(self.recipe_steps),
        )

    def sync_summary(self) -> None:
        """Rebuild the main-meal summary from staple, main and soup."""
        self.summary = f"{self.rice_type} + {self.main} + {self.soup}"

    def planned_items(self, slot: MealSlot) -> List[str]:
        """
        Names a patient is expected to eat for this meal.

        The snack is tracked as its summary; main meals list staple, main,
        soup and sides without duplicates.

        Args:
            slot: Slot this suggestion belongs to

        Returns:
            Ordered list of planned item names
        """
        if slot is MealSlot.SNACK:
            return [self.summary]

        names = [self.rice_type, self.main, self.soup] + list(self.sides)
        unique = []
        for name in names:
            if name.strip() and name not in unique:
                unique.append(name)
        return unique

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary,
            "riceType": self.rice_type,
            "main": self.main,
            "soup": self.soup,
            "sides": list(self.sides),
            "cautionFlour": self.caution_flour,
            "nutrient": self.nutrient.to_dict(),
            "recipeName": self.recipe_name,
            "recipeSteps": list(self.recipe_steps),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MealSuggestion":
        return cls(
            summary=data.get("summary", ""),
            rice_type=data.get("riceType", ""),
            main=data.get("main", ""),
            soup=data.get("soup", ""),
            sides=list(data.get("sides", [])),
            caution_flour=data.get("cautionFlour", ""),
            nutrient=MealNutrient.from_dict(data.get("nutrient", {})),
            recipe_name=data.get("recipeName", ""),
            recipe_steps=list(data.get("recipeSteps", [])),
        )


@dataclass
class DayPlan:
    """
    Four-slot recommended menu for one calendar date.

    Example:
        >>> plan = generate_plan("2024-03-10", StageType.CHEMO, 70)
        >>> plan.meal(MealSlot.DINNER).nutrient.total()
        100
    """
    date: str
    breakfast: MealSuggestion
    lunch: MealSuggestion
    dinner: MealSuggestion
    snack: MealSuggestion

    def meal(self, slot: MealSlot) -> MealSuggestion:
        """Get the suggestion for a slot."""
        return getattr(self, slot.value)

    def set_meal(self, slot: MealSlot, meal: MealSuggestion) -> None:
        setattr(self, slot.value, meal)

    def meals(self) -> Iterator[Tuple[MealSlot, MealSuggestion]]:
        """Iterate (slot, suggestion) pairs in slot order."""
        for slot in SLOT_ORDER:
            yield slot, self.meal(slot)

    def copy(self) -> "DayPlan":
        """Clone every meal so the copy shares no mutable state."""
        return DayPlan(
            date=self.date,
            breakfast=self.breakfast.copy(),
            lunch=self.lunch.copy(),
            dinner=self.dinner.copy(),
            snack=self.snack.copy(),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"date": self.date}
        for slot, meal in self.meals():
            data[slot.value] = meal.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DayPlan":
        return cls(
            date=data.get("date", ""),
            breakfast=MealSuggestion.from_dict(data.get("breakfast", {})),
            lunch=MealSuggestion.from_dict(data.get("lunch", {})),
            dinner=MealSuggestion.from_dict(data.get("dinner", {})),
            snack=MealSuggestion.from_dict(data.get("snack", {})),
        )
