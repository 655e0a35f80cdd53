# diet_planner/generators/plan_generator.py
"""
Deterministic baseline plan generation.

The calendar date seeds every menu pick, the treatment stage selects the
nutrient profile and the prior-month adherence score nudges difficulty.
Identical inputs always yield identical plans.
"""
import re
from typing import Dict, List, Optional, Tuple

from diet_planner.models import (
    DayPlan, MealSuggestion, MealNutrient, MealSlot, StageType, SLOT_ORDER,
)
from diet_planner.utils.dates import parse_date_key, month_date_keys
from diet_planner.utils.nutrients import rebalance_meal_nutrient
from .menu_catalog import (
    RICE_TYPES, PROTEIN_MAINS, SOUPS, SIDES, SNACKS, SNACK_FRUITS,
    SEASONAL_FOOD, DEFAULT_SEASONAL, MAIN_POOLS,
)

DEFAULT_ADHERENCE_SCORE = 70
EASIER_MENU_SCORE = 60
VARIETY_MENU_SCORE = 85

FLOUR_GUIDE_EASIER = "밀가루 음식은 주 2회 이하로 줄여보세요."
FLOUR_GUIDE_DEFAULT = "밀가루 음식은 가능한 한 적게 드세요."

# Nutrient profiles: (breakfast, lunch, dinner) carb/protein/fat
_SNACK_NUTRIENT = (35, 30, 35)
_LOWER_CARB_NUTRIENTS = ((36, 34, 30), (34, 36, 30), (30, 40, 30))
_SOFT_NUTRIENTS = ((42, 31, 27), (40, 33, 27), (36, 35, 29))
_DEFAULT_NUTRIENTS = ((40, 32, 28), (38, 34, 28), (34, 36, 30))


def base_meal_nutrient(stage: StageType, slot: MealSlot) -> MealNutrient:
    """
    Stage-specific starting ratio for a slot.

    Dinner carbohydrate steps down from breakfast and lunch in every
    profile to limit late-evening glucose spikes.
    """
    if slot is MealSlot.SNACK:
        return MealNutrient(*_SNACK_NUTRIENT)

    if stage.is_lower_carb:
        profile = _LOWER_CARB_NUTRIENTS
    elif stage.is_soft:
        profile = _SOFT_NUTRIENTS
    else:
        profile = _DEFAULT_NUTRIENTS

    index = [MealSlot.BREAKFAST, MealSlot.LUNCH, MealSlot.DINNER].index(slot)
    return MealNutrient(*profile[index])


def build_recipe(main: str, soup: str, side: str, seasonal: str) -> Tuple[str, List[str]]:
    """Recipe name and steps for a main meal."""
    return f"{main} 한 끼", [
        f"재료 손질: {seasonal}, {side}를 깨끗하게 씻어 한입 크기로 준비해요.",
        f"{main}은 기름을 많이 쓰지 않고 굽거나 찌는 방식으로 익혀요.",
        f"{soup}은 저염으로 끓이고 자극적인 양념은 줄여요.",
        "밥-단백질-채소 반찬 순서로 천천히 드세요.",
    ]


def build_snack_recipe(main: str, side: str, hydration: str,
                       recipe_name: Optional[str] = None) -> Tuple[str, List[str]]:
    """Recipe name and steps for a snack."""
    return recipe_name or f"{main} 간식", [
        f"{main}을(를) 1회 분량으로 준비해요.",
        f"{side}을(를) 소량 곁들여요.",
        f"{hydration}을 함께 마셔 수분을 보충해요.",
        "시럽·설탕 추가는 피하고 담백하게 드세요.",
    ]


def seasonal_from_side(side: str) -> str:
    """
    Seasonal produce word at the start of a side dish name.

    Example:
        >>> seasonal_from_side("냉이 시금치나물")
        '냉이'
    """
    cleaned = re.sub(r"\([^)]*\)", "", side or "")
    cleaned = re.sub(r"저염|담백한|구운|데친|따뜻한|차가운", "", cleaned).strip()
    tokens = cleaned.split()
    return tokens[0] if tokens else "채소"


def create_meal_suggestion(seed: int, stage: StageType, slot: MealSlot,
                           prev_month_score: int, month: int,
                           fixed_rice_type: Optional[str] = None) -> MealSuggestion:
    """
    Build one slot's suggestion from a seed.

    Args:
        seed: Per-slot seed derived from the date
        stage: Treatment stage (nutrient profile)
        slot: Meal slot
        prev_month_score: Prior-month adherence score
        month: Calendar month (1-based), for seasonal produce
        fixed_rice_type: Staple shared by the day's main meals

    Returns:
        MealSuggestion
    """
    seasonal_set = SEASONAL_FOOD.get(month, DEFAULT_SEASONAL)
    seasonal = seasonal_set[seed % len(seasonal_set)]
    rice_type = fixed_rice_type or RICE_TYPES[seed % len(RICE_TYPES)]
    is_snack = slot is MealSlot.SNACK
    easier_menu = prev_month_score < EASIER_MENU_SCORE
    wider_variety = prev_month_score >= VARIETY_MENU_SCORE

    if is_snack:
        main = SNACKS[seed % len(SNACKS)]
        soup = "따뜻한 물"
        side_a = SNACK_FRUITS[(seed + 2) % len(SNACK_FRUITS)]
    else:
        if wider_variety:
            pool = MAIN_POOLS[slot]
            main = pool[(seed + 1) % len(pool)]
        else:
            main = PROTEIN_MAINS[(seed + 1) % len(PROTEIN_MAINS)]
        soup = SOUPS[(seed + 2) % len(SOUPS)]
        side_a = f"{seasonal} {SIDES[(seed + 3) % len(SIDES)]}"
    side_b = SIDES[(seed + 4) % len(SIDES)]
    side_c = SIDES[(seed + 5) % len(SIDES)]

    nutrient = base_meal_nutrient(stage, slot)
    if easier_menu and not is_snack:
        # Familiar, slightly more carbohydrate-forward meals are easier to keep up
        nutrient = rebalance_meal_nutrient(nutrient, 2, -2)

    if is_snack:
        summary = f"{main} + {side_a} + {soup}"
        sides = [side_a]
        recipe_name, recipe_steps = build_snack_recipe(main, side_a, soup)
    else:
        summary = f"{rice_type} + {main} + {soup}"
        sides = [side_a, side_b, side_c]
        recipe_name, recipe_steps = build_recipe(main, soup, side_a, seasonal)

    return MealSuggestion(
        summary=summary,
        rice_type=rice_type,
        main=main,
        soup=soup,
        sides=sides,
        caution_flour=FLOUR_GUIDE_EASIER if easier_menu else FLOUR_GUIDE_DEFAULT,
        nutrient=nutrient,
        recipe_name=recipe_name,
        recipe_steps=recipe_steps,
    )


def date_seed(date_key: str) -> int:
    """Seed shared by every slot of a date: day + month*37 + year."""
    current = parse_date_key(date_key)
    return current.day + current.month * 37 + current.year


def generate_plan(date_key: str, stage, prev_month_score: int = DEFAULT_ADHERENCE_SCORE) -> DayPlan:
    """
    Generate the baseline plan for a date.

    Args:
        date_key: Date as YYYY-MM-DD
        stage: StageType or stage key; unknown values use the generic profile
        prev_month_score: Rolling adherence score of the previous month

    Returns:
        Four-slot DayPlan

    Raises:
        ValueError: If date_key is malformed

    Example:
        >>> plan = generate_plan("2024-03-10", "chemo", 70)
        >>> plan.breakfast.rice_type == plan.dinner.rice_type
        True
    """
    stage = StageType.parse(stage)
    current = parse_date_key(date_key)
    seed = date_seed(date_key)
    day_rice = RICE_TYPES[(seed + 11) % len(RICE_TYPES)]

    meals = {}
    for offset, slot in enumerate(SLOT_ORDER, start=1):
        fixed_rice = None if slot is MealSlot.SNACK else day_rice
        meals[slot.value] = create_meal_suggestion(
            seed + offset, stage, slot, prev_month_score, current.month, fixed_rice
        )

    return DayPlan(date=date_key, **meals)


def generate_month_plans(year: int, month: int, stage, prev_month_score: int) -> List[DayPlan]:
    """Baseline plans for every day of a calendar month (month is 1-based)."""
    return [generate_plan(key, stage, prev_month_score) for key in month_date_keys(year, month)]


class PlanCache:
    """
    Memoizes baseline plans by (date, stage, score).

    Owned by a single planning session. Cached plans are copied on the
    way out so callers can never alias cache contents.
    """

    def __init__(self):
        self._plans: Dict[Tuple[str, StageType, int], DayPlan] = {}
        self.hits = 0
        self.misses = 0

    def get_plan(self, date_key: str, stage, prev_month_score: int) -> DayPlan:
        key = (date_key, StageType.parse(stage), prev_month_score)
        plan = self._plans.get(key)
        if plan is None:
            self.misses += 1
            plan = generate_plan(date_key, key[1], prev_month_score)
            self._plans[key] = plan
        else:
            self.hits += 1
        return plan.copy()

    def clear(self) -> None:
        self._plans.clear()

    def __len__(self) -> int:
        return len(self._plans)
