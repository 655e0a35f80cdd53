# diet_planner/generators/substitute_generator.py
"""
Substitute generation.

Finds swap candidates for a planned or logged food that keep its
nutritional role: the static options of the food's nutrition group plus
names from the candidate pool that look similar.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from diet_planner.models import DayLog, DayPlan, MealSlot, SubstituteSuggestion
from diet_planner.utils.search import (
    compact_food_text, normalize_food_name, search_food_candidates, strip_portion_label,
)
from .menu_catalog import COMMON_FOOD_CANDIDATES

MAX_SUBSTITUTES = 8
DEFAULT_HINT = "비슷한 영양군"


@dataclass(frozen=True)
class SubstituteGroup:
    """
    Nutrition-equivalence cluster.

    Attributes:
        id: Group key (grain, protein, vegetable, soup, snack)
        hint: Korean label for the nutrition role
        keywords: Substrings that place a food in the group
        options: Interchangeable foods offered as substitutes
    """
    id: str
    hint: str
    keywords: Tuple[str, ...]
    options: Tuple[str, ...]


SUBSTITUTE_GROUPS: List[SubstituteGroup] = [
    SubstituteGroup(
        id="grain",
        hint="탄수화물 공급원군",
        keywords=("밥", "죽", "오트밀", "국수", "덮밥", "고구마", "감자"),
        options=("현미밥", "잡곡밥", "오트밀", "죽", "고구마", "감자"),
    ),
    SubstituteGroup(
        id="protein",
        hint="단백질 공급원군",
        keywords=("닭", "생선", "연어", "흰살", "두부", "달걀", "계란", "소고기", "돼지"),
        options=("닭가슴살", "연어구이", "흰살생선찜", "두부조림", "달걀찜"),
    ),
    SubstituteGroup(
        id="vegetable",
        hint="저열량 채소군",
        keywords=("브로콜리", "당근", "양배추", "버섯", "시금치", "오이", "샐러드", "채소"),
        options=("브로콜리찜", "당근볶음", "양배추볶음", "버섯볶음", "시금치나물", "오이무침", "샐러드"),
    ),
    SubstituteGroup(
        id="soup",
        hint="국/수프군",
        keywords=("국", "수프", "탕", "미역", "된장", "콩나물"),
        options=("된장국", "미역국", "콩나물국", "채소수프"),
    ),
    SubstituteGroup(
        id="snack",
        hint="간식 과일·유제품군",
        keywords=("바나나", "사과", "배", "키위", "오렌지", "과일", "요거트", "두유", "견과"),
        options=("바나나", "사과", "배", "키위", "오렌지", "그릭요거트", "무가당 요거트", "두유", "견과류"),
    ),
]

_GROUPS_BY_ID = {group.id: group for group in SUBSTITUTE_GROUPS}


def find_substitute_group(food_name: str, slot: MealSlot) -> Optional[SubstituteGroup]:
    """
    Nutrition group for a food.

    The snack slot always resolves to the snack group. Otherwise groups
    are checked in catalog order against the compacted name.

    Args:
        food_name: Food name (a portion suffix is ignored)
        slot: Slot the food belongs to

    Returns:
        Matching group, or None when no group applies
    """
    normalized = compact_food_text(strip_portion_label(food_name))
    if not normalized:
        return None

    if slot is MealSlot.SNACK:
        return _GROUPS_BY_ID["snack"]

    for group in SUBSTITUTE_GROUPS:
        if any(compact_food_text(keyword) in normalized for keyword in group.keywords):
            return group
    return None


def build_substitute_candidates(food_name: str, slot: MealSlot,
                                candidate_pool: Iterable[str]) -> SubstituteSuggestion:
    """
    Swap candidates for a food.

    Group options come first (minus the food itself), then similar names
    from the pool. The hint is always set, even with no options.

    Example:
        >>> build_substitute_candidates("현미밥 · 2/3공기", MealSlot.LUNCH, []).hint
        '탄수화물 공급원군'
    """
    current = normalize_food_name(strip_portion_label(food_name))
    group = find_substitute_group(current, slot)

    options: List[str] = []
    group_options = group.options if group else ()
    similar = search_food_candidates(current, list(candidate_pool), MAX_SUBSTITUTES) if current else []

    for name in list(group_options) + similar:
        normalized = normalize_food_name(name)
        if normalized and normalized != current and normalized not in options:
            options.append(normalized)

    return SubstituteSuggestion(
        hint=group.hint if group else DEFAULT_HINT,
        options=options[:MAX_SUBSTITUTES],
    )


def build_candidate_pool(plans: Iterable[DayPlan] = (), logs: Iterable[DayLog] = ()) -> List[str]:
    """
    Food names available for fuzzy matching.

    The static catalog of common foods plus every name seen in plans and
    logs, portion suffixes removed, first occurrence order kept.
    """
    pool: List[str] = []
    seen = set()

    def add(name: str) -> None:
        cleaned = strip_portion_label(name)
        if cleaned and cleaned not in seen:
            seen.add(cleaned)
            pool.append(cleaned)

    for name in COMMON_FOOD_CANDIDATES:
        add(name)
    for plan in plans:
        for slot, meal in plan.meals():
            for name in [meal.rice_type, meal.main, meal.soup] + list(meal.sides):
                add(name)
    for log in logs:
        for item in log.all_items():
            add(item.name)
    return pool
