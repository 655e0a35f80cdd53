# diet_planner/generators/portion_guide.py
"""
Portion guides and default day logs.

Every planned item gets a household-measure amount ("2/3공기(110~130g)").
A date's default log lists each planned item as "name · amount", all
unchecked, so a patient only has to tick what they ate.
"""
import re
from dataclasses import dataclass, field
from typing import List, Tuple

from diet_planner.models import DayLog, DayPlan, MealSlot, MealSuggestion, SLOT_ORDER, make_track_items
from diet_planner.utils.search import PORTION_DELIMITER

# (keywords, amount) checked in order; first hit wins
_AMOUNT_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (("죽",), "1공기(220~250g)"),
    (("덮밥",), "2/3공기(180~200g)"),
    (("국수",), "1공기(180g)"),
    (("닭가슴살", "닭안심"), "손바닥 크기 1장(90~100g)"),
    (("연어",), "한 토막(80~100g)"),
    (("고등어",), "반 마리(90~100g)"),
    (("흰살생선",), "한 토막(80~90g)"),
    (("생선",), "반 마리 또는 한 토막(80~100g)"),
    (("소고기",), "한 줌(70~80g)"),
    (("돼지안심",), "한 줌(70~80g)"),
]

_LATER_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (("달걀",), "달걀 1~2개 분량(90~120g)"),
    (("콩불고기",), "1/2컵(80g)"),
    (("무가당요거트",), "1/2컵(100g)"),
    (("그릭요거트",), "1/2컵(90g)"),
    (("두유",), "1팩 또는 1컵(150~190ml)"),
    (("아몬드", "호두", "견과"), "한 줌의 절반(10~15g)"),
    (("바나나",), "중간 크기 1/2개(50g)"),
    (("사과",), "중간 크기 1/4개(60g)"),
    (("배",), "중간 크기 1/4개(70g)"),
    (("키위",), "1/2개(50g)"),
    (("딸기",), "3~4개(60g)"),
    (("베리",), "한 줌(50~60g)"),
    (("브로콜리",), "작은 송이 5~6개(70g)"),
    (("당근볶음",), "2~3큰술(40~50g)"),
    (("버섯볶음",), "작은 접시 1개(50g)"),
    (("시금치",), "2~3젓가락(40g)"),
    (("오이무침",), "작은 접시 1개(50g)"),
    (("애호박볶음",), "작은 접시 1개(50g)"),
    (("채소볶음", "채소무침", "구운채소", "나물", "샐러드"), "작은 접시 1개(50~60g)"),
    (("국", "수프", "육수"), "1컵(180~200ml)"),
]

GRAIN_NAMES = ("현미밥", "잡곡밥", "귀리밥", "보리밥", "흑미밥", "기장밥")
FRUIT_MARKERS = ("바나나", "사과", "배", "키위", "딸기", "베리", "과일")
GRAIN_MARKERS = ("밥", "죽", "덮밥", "국수")
HALF_BOWL = "반 공기(90~100g)"


@dataclass
class PortionGuide:
    """Per-item amounts for one meal, plus portion notes."""
    items: List[Tuple[str, str]] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)


def _compact(name: str) -> str:
    return re.sub(r"\s+", "", name or "")


def is_fruit_name(name: str) -> bool:
    normalized = _compact(name)
    return any(marker in normalized for marker in FRUIT_MARKERS)


def base_amount_by_food_name(name: str, slot: MealSlot) -> str:
    """
    Household-measure amount for one food.

    Example:
        >>> base_amount_by_food_name("현미밥", MealSlot.DINNER)
        '반 공기~2/3공기(100~120g)'
    """
    normalized = _compact(name)

    if any(grain in normalized for grain in GRAIN_NAMES):
        if "소량" in normalized:
            return HALF_BOWL
        return "반 공기~2/3공기(100~120g)" if slot is MealSlot.DINNER else "2/3공기(110~130g)"

    for keywords, amount in _AMOUNT_RULES:
        if any(keyword in normalized for keyword in keywords):
            return amount

    if "두부" in normalized:
        return "1/2모(150g)" if "연두부" in normalized else "1/3모(100g)"

    for keywords, amount in _LATER_RULES:
        if any(keyword in normalized for keyword in keywords):
            return amount

    if normalized == "물" or "따뜻한물" in normalized:
        return "1컵(200ml)"

    return "1회 간식 소량(40~80g)" if slot is MealSlot.SNACK else "작은 반찬 1접시(40~60g)"


def meal_portion_guide(meal: MealSuggestion, slot: MealSlot) -> PortionGuide:
    """
    Amounts for every item of a meal.

    When a staple and fruit share a meal the staple drops to half a bowl.

    Args:
        meal: Planned meal
        slot: Slot the meal belongs to

    Returns:
        PortionGuide with (name, amount) pairs and notes
    """
    if slot is MealSlot.SNACK:
        names = [meal.main] + list(meal.sides) + [meal.soup]
    else:
        names = meal.planned_items(slot)

    unique: List[str] = []
    for name in names:
        name = (name or "").strip()
        if name and name not in unique:
            unique.append(name)

    guide = PortionGuide(items=[(name, base_amount_by_food_name(name, slot)) for name in unique])

    grain_index = next(
        (index for index, (name, _) in enumerate(guide.items)
         if any(marker in _compact(name) for marker in GRAIN_MARKERS)),
        -1,
    )
    if grain_index >= 0 and any(is_fruit_name(name) for name, _ in guide.items):
        guide.items[grain_index] = (guide.items[grain_index][0], HALF_BOWL)
        guide.notes.append("곡류와 과일이 함께 있을 때는 곡류를 반 공기 기준으로 줄여 과식을 방지해요.")

    if slot is MealSlot.SNACK:
        if sum(1 for name, _ in guide.items if is_fruit_name(name)) >= 2:
            guide.notes.append("간식 과일은 합쳐서 1회(80~100g) 이내로 조절해 당류를 관리해요.")
        if any("요거트" in name or "두유" in name for name, _ in guide.items):
            guide.notes.append("요거트·두유는 무가당 제품을 우선으로 선택해요.")
    else:
        guide.notes.append("한 끼는 배부름 80% 수준에서 멈추고 천천히 드세요.")

    return guide


def track_names_with_portion(meal: MealSuggestion, slot: MealSlot) -> List[str]:
    """Tracked item names: "name · amount"."""
    guide = meal_portion_guide(meal, slot)
    return [f"{name}{PORTION_DELIMITER}{amount}" for name, amount in guide.items]


def build_default_log(date_key: str, plan: DayPlan) -> DayLog:
    """
    Seed a date's log from its displayed plan, every item unchecked.

    Example:
        >>> log = build_default_log("2024-03-10", plan)
        >>> log.has_meaningful_entries()
        False
    """
    meals = {
        slot: make_track_items(date_key, slot, track_names_with_portion(plan.meal(slot), slot))
        for slot in SLOT_ORDER
    }
    return DayLog(meals=meals, memo="", medication_taken_ids=[])
