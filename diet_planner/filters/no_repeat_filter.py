# diet_planner/filters/no_repeat_filter.py
"""
No-repeat filter for displayed plans.

Spreads main dishes, soups and snack parts over a trailing window of
recent plans. A dish that was served yesterday, or that already took more
than its fair share of the window, is swapped for the least-used
alternative in its pool. A second pass compares whole meals against the
last week by token similarity and regenerates meals that still look like
a recent one.
"""
import math
import re
from typing import Dict, List, Optional, Sequence, Set

from diet_planner.generators.menu_catalog import (
    MAIN_POOLS, SOUPS, SNACK_SIDE_VARIANTS, SNACK_HYDRATION_VARIANTS,
)
from diet_planner.generators.plan_generator import build_recipe, build_snack_recipe, seasonal_from_side
from diet_planner.models import AdjustmentResult, DayPlan, MealSlot, MealSuggestion, SLOT_ORDER

DEFAULT_WINDOW_DAYS = 30
MAX_WINDOW_DAYS = 30
SIMILARITY_WINDOW_DAYS = 7
SIMILARITY_THRESHOLD = 0.72
MAX_REGENERATION_ATTEMPTS = 5

_MODIFIER_RE = re.compile(r"저염|담백한|무가당|저지방|따뜻한|차가운|부드러운|소량")

# (token prefix, value, substrings)
_TOKEN_FAMILIES = [
    ("protein", "chicken", ("닭",)),
    ("protein", "fish", ("생선", "연어", "고등어", "흰살")),
    ("protein", "tofu_bean", ("두부", "콩")),
    ("protein", "egg", ("달걀", "계란")),
    ("protein", "dairy_soy", ("요거트", "두유")),
    ("carb", "grain", ("밥", "죽", "덮밥", "국수", "면")),
    ("carb", "fruit_starch", ("고구마", "바나나", "사과", "배", "키위", "딸기", "베리")),
    ("method", "grill", ("구이", "구운")),
    ("method", "steam", ("찜",)),
    ("method", "stir_fry", ("볶음",)),
    ("method", "season", ("무침",)),
    ("dish", "soup", ("국", "수프")),
    ("dish", "salad", ("샐러드",)),
]


def normalize_menu_name(name: str) -> str:
    """
    Menu identity used for similarity: no parentheses, modifiers or spaces.

    Example:
        >>> normalize_menu_name("미역국(저염)")
        '미역국'
    """
    text = re.sub(r"\([^)]*\)", "", (name or "").lower())
    text = _MODIFIER_RE.sub("", text)
    return re.sub(r"\s+", "", text)


def menu_tokens(name: str) -> Set[str]:
    """Similarity tokens for one menu name."""
    normalized = normalize_menu_name(name)
    if not normalized:
        return set()
    tokens = {f"menu:{normalized}"}
    for prefix, value, markers in _TOKEN_FAMILIES:
        if any(marker in normalized for marker in markers):
            tokens.add(f"{prefix}:{value}")
    return tokens


def meal_tokens(meal: MealSuggestion, slot: MealSlot) -> Set[str]:
    if slot is MealSlot.SNACK:
        names = [meal.main] + list(meal.sides[:2]) + [meal.soup]
    else:
        names = [meal.rice_type, meal.main, meal.soup] + list(meal.sides[:2])
    tokens: Set[str] = set()
    for name in names:
        tokens |= menu_tokens(name)
    return tokens


def jaccard_similarity(a: Set[str], b: Set[str]) -> float:
    """Jaccard index; two empty sets count as 0."""
    if not a and not b:
        return 0.0
    return len(a & b) / len(a | b)


def pick_next_non_repeating(current: str, pool: Sequence[str], recent: Set[str], offset: int) -> str:
    """
    First pool entry after current (shifted by offset) not in recent.

    Falls back to the shifted entry itself when every candidate is recent.
    """
    if not pool:
        return current
    start = pool.index(current) if current in pool else -1
    for step in range(len(pool)):
        candidate = pool[(start + offset + step) % len(pool)]
        if candidate != current and candidate not in recent:
            return candidate
    fallback = pool[(start + offset) % len(pool)]
    return fallback if fallback != current else current


def overuse_threshold(window_length: int, pool_size: int) -> int:
    """Appearances that exhaust a dish's fair share of the window."""
    return max(1, math.ceil(window_length / max(1, pool_size)))


def pick_least_used(current: str, history: Sequence[str], pool: Sequence[str]) -> str:
    """
    Replacement for an overused dish, or current when it is not overused.

    Args:
        current: Dish in the candidate plan
        history: Dish served in the same slot on each window day, oldest first
        pool: Alternatives for the slot

    Returns:
        Least-counted alternative; ties go to the oldest last appearance,
        then to pool order starting after current
    """
    if not history or not pool:
        return current

    counts: Dict[str, int] = {}
    last_seen: Dict[str, int] = {}
    for index, name in enumerate(history):
        counts[name] = counts.get(name, 0) + 1
        last_seen[name] = index

    overused = history[-1] == current or counts.get(current, 0) >= overuse_threshold(len(history), len(pool))
    if not overused:
        return current

    start = pool.index(current) + 1 if current in pool else 0
    ordered = [pool[(start + step) % len(pool)] for step in range(len(pool))]
    candidates = [name for name in ordered if name != current]
    if not candidates:
        return current

    return min(
        candidates,
        key=lambda name: (counts.get(name, 0), last_seen.get(name, -1), ordered.index(name)),
    )


def rebuild_meal_text(meal: MealSuggestion, slot: MealSlot) -> None:
    """Refresh summary and recipe after a menu swap."""
    if slot is MealSlot.SNACK:
        side = meal.sides[0] if meal.sides else ""
        meal.summary = " + ".join(name for name in [meal.main] + list(meal.sides) + [meal.soup] if name)
        meal.recipe_name, meal.recipe_steps = build_snack_recipe(meal.main, side, meal.soup)
        return

    meal.sync_summary()
    first_side = meal.sides[0] if meal.sides else ""
    meal.recipe_name, meal.recipe_steps = build_recipe(
        meal.main, meal.soup, first_side, seasonal_from_side(first_side)
    )


def _join_labels(slots: List[MealSlot]) -> str:
    return ", ".join(slot.label for slot in slots)


class NoRepeatFilter:
    """
    Diversifies a plan against recent history.

    Example:
        >>> result = NoRepeatFilter().enforce(plan, recent_plans)
        >>> result.plan is plan
        False
    """

    def __init__(self, window_size: int = DEFAULT_WINDOW_DAYS):
        self.window_size = window_size

    def enforce(self, plan: DayPlan, recent_plans: Sequence[DayPlan],
                window_size: Optional[int] = None) -> AdjustmentResult:
        """
        Apply the frequency and similarity rules.

        Args:
            plan: Candidate plan (not modified)
            recent_plans: Plans before the candidate's date, oldest first
            window_size: Trailing days to consider, clamped to [1, 30]

        Returns:
            AdjustmentResult with the diversified plan and notes
        """
        window = int(window_size if window_size is not None else self.window_size)
        window = max(1, min(MAX_WINDOW_DAYS, window))
        history = list(recent_plans)[-window:]
        if not history:
            return AdjustmentResult(plan=plan.copy(), notes=[])

        adjusted = plan.copy()
        diversified: List[MealSlot] = []
        for slot in SLOT_ORDER:
            if self._spread_frequent_dishes(adjusted.meal(slot), slot, history):
                diversified.append(slot)

        regenerated, unresolved = self._regenerate_similar_meals(adjusted, history[-SIMILARITY_WINDOW_DAYS:])

        notes = []
        if diversified:
            notes.append(f"최근 {window}일 중복 방지 규칙으로 {_join_labels(diversified)} 메뉴를 자동 분산했어요.")
        if regenerated:
            notes.append(f"유사도 필터(72% 이상)로 {_join_labels(regenerated)} 메뉴를 재생성해 반복을 더 줄였어요.")
        if unresolved:
            notes.append(
                f"메뉴 풀이 제한적이라 {_join_labels(unresolved)}은 일부 유사 패턴이 남았어요. "
                "다음 추천에서 후보군을 더 늘려 개선할게요."
            )
        return AdjustmentResult(plan=adjusted, notes=notes)

    def _spread_frequent_dishes(self, meal: MealSuggestion, slot: MealSlot,
                                history: List[DayPlan]) -> bool:
        changed = False

        main = pick_least_used(meal.main, [day.meal(slot).main for day in history], MAIN_POOLS[slot])
        if main != meal.main:
            meal.main = main
            changed = True

        if slot is MealSlot.SNACK:
            if meal.sides:
                side = pick_least_used(
                    meal.sides[0],
                    [day.snack.sides[0] for day in history if day.snack.sides],
                    SNACK_SIDE_VARIANTS,
                )
                if side != meal.sides[0]:
                    meal.sides[0] = side
                    changed = True
            hydration = pick_least_used(meal.soup, [day.snack.soup for day in history], SNACK_HYDRATION_VARIANTS)
            if hydration != meal.soup:
                meal.soup = hydration
                changed = True
        else:
            soup = pick_least_used(meal.soup, [day.meal(slot).soup for day in history], SOUPS)
            if soup != meal.soup:
                meal.soup = soup
                changed = True

        if changed:
            rebuild_meal_text(meal, slot)
        return changed

    def _regenerate_similar_meals(self, plan: DayPlan, recent: List[DayPlan]):
        regenerated: List[MealSlot] = []
        unresolved: List[MealSlot] = []
        if not recent:
            return regenerated, unresolved

        for slot in SLOT_ORDER:
            recent_tokens = [meal_tokens(day.meal(slot), slot) for day in recent]

            def max_similarity(meal: MealSuggestion) -> float:
                tokens = meal_tokens(meal, slot)
                return max(jaccard_similarity(tokens, other) for other in recent_tokens)

            current = plan.meal(slot)
            best_score = max_similarity(current)
            if best_score < SIMILARITY_THRESHOLD:
                continue

            recent_mains = {day.meal(slot).main for day in recent}
            best = current
            for attempt in range(1, MAX_REGENERATION_ATTEMPTS + 1):
                candidate = self._regenerate(current, slot, recent, recent_mains, attempt)
                score = max_similarity(candidate)
                if score < best_score:
                    best, best_score = candidate, score
                if score < SIMILARITY_THRESHOLD:
                    break

            plan.set_meal(slot, best)
            if best_score < SIMILARITY_THRESHOLD:
                regenerated.append(slot)
            else:
                unresolved.append(slot)
        return regenerated, unresolved

    def _regenerate(self, meal: MealSuggestion, slot: MealSlot, recent: List[DayPlan],
                    recent_mains: Set[str], offset: int) -> MealSuggestion:
        candidate = meal.copy()
        candidate.main = pick_next_non_repeating(meal.main, MAIN_POOLS[slot], recent_mains, offset)
        if slot is MealSlot.SNACK:
            if candidate.sides:
                recent_sides = {day.snack.sides[0] for day in recent if day.snack.sides}
                candidate.sides[0] = pick_next_non_repeating(
                    meal.sides[0], SNACK_SIDE_VARIANTS, recent_sides, offset
                )
        else:
            recent_soups = {day.meal(slot).soup for day in recent}
            candidate.soup = pick_next_non_repeating(meal.soup, SOUPS, recent_soups, offset)
        rebuild_meal_text(candidate, slot)
        return candidate
