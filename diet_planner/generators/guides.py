# diet_planner/generators/guides.py
"""
Stage-specific food, drink and timing guides shown beside a day's plan.
"""
from dataclasses import dataclass
from typing import Dict, List

from diet_planner.models import DayPlan, StageType, CHEMO_STAGES, MAIN_SLOTS

MAX_TEA_RECOMMENDATIONS = 3
MAX_COFFEE_RECOMMENDATIONS = 2


@dataclass(frozen=True)
class DrinkRecommendation:
    """A tea or coffee suggestion with a one-line reason."""
    name: str
    reason: str


_STAGE_FOOD_GUIDES = {
    "chemo": {
        "help": ["부드러운 단백질 음식", "따뜻한 수분", "자극이 적은 반찬"],
        "caution": ["생식(회/육회/날달걀)", "너무 매운 음식", "기름진 튀김류"],
    },
    "radiation": {
        "help": ["수분 많은 음식", "부드러운 죽/국", "싱거운 반찬"],
        "caution": ["뜨겁거나 거친 음식", "자극적인 양념", "과도한 카페인"],
    },
    "hormone_therapy": {
        "help": ["채소 반찬", "콩/두부류", "잡곡밥"],
        "caution": ["당류가 높은 간식", "야식", "과도한 가공식품"],
    },
    "surgery": {
        "help": ["단백질 반찬", "수분 보충", "소화 쉬운 식사"],
        "caution": ["짜고 자극적인 음식", "과식", "알코올"],
    },
    "default": {
        "help": ["다양한 채소", "잡곡밥", "적당한 단백질 반찬"],
        "caution": ["밀가루/당류 과다", "지나치게 짠 음식", "야식 습관"],
    },
}


def get_stage_food_guides(stage) -> Dict[str, List[str]]:
    """
    Foods that help and foods to be careful with for a stage.

    Returns:
        Dict with "help" and "caution" lists (fresh copies)
    """
    stage = StageType.parse(stage)
    if stage in CHEMO_STAGES:
        key = "chemo"
    elif stage.value in _STAGE_FOOD_GUIDES:
        key = stage.value
    else:
        key = "default"
    guide = _STAGE_FOOD_GUIDES[key]
    return {"help": list(guide["help"]), "caution": list(guide["caution"])}


def get_snack_coffee_timing_guide(stage) -> Dict[str, str]:
    """When to eat the snack and when to drink coffee."""
    stage = StageType.parse(stage)
    if stage in CHEMO_STAGES:
        return {
            "snack": "간식은 점심 2~3시간 후(14시~16시)에 소량으로 드세요.",
            "coffee": "커피는 식후 1시간 뒤, 하루 1잔 이내로 줄여보세요.",
        }
    if stage is StageType.RADIATION:
        return {
            "snack": "간식은 15시 전후에 수분이 있는 음식으로 드세요.",
            "coffee": "카페인은 탈수를 줄이기 위해 물과 함께 드세요.",
        }
    return {
        "snack": "간식은 오후 3시 전후, 저당 간식 위주로 드세요.",
        "coffee": "커피는 오전/점심 식후에 마시고 저녁에는 피하세요.",
    }


def _plan_text(plan: DayPlan) -> str:
    parts = []
    for slot in MAIN_SLOTS:
        meal = plan.meal(slot)
        parts.extend([meal.summary, meal.soup])
    parts.append(plan.snack.summary)
    return " ".join(parts)


def _append_unique(items: List[DrinkRecommendation], name: str, reason: str) -> None:
    if all(item.name != name for item in items):
        items.append(DrinkRecommendation(name, reason))


def build_daily_tea_recommendations(stage, plan: DayPlan) -> List[DrinkRecommendation]:
    """
    Caffeine-free teas that suit the stage and the day's menu.

    Barley tea always comes first; at most three are returned.
    """
    stage = StageType.parse(stage)
    text = _plan_text(plan)
    teas: List[DrinkRecommendation] = []

    _append_unique(teas, "보리차", "기본 수분 보충에 좋고 카페인이 없어요.")
    if stage in CHEMO_STAGES:
        _append_unique(teas, "카모마일차", "속이 예민한 날에 비교적 부담이 적은 무카페인 차예요.")
        _append_unique(teas, "루이보스차", "저녁에도 마시기 쉬운 무카페인 차예요.")
    if stage is StageType.RADIATION:
        _append_unique(teas, "배도라지차(무가당)", "목 건조감이 있는 날에 수분 보충용으로 좋아요.")
    if any(word in text for word in ("죽", "국", "수프")):
        _append_unique(teas, "생강차(연하게)", "따뜻한 온도로 소량 마시면 속이 편안한 데 도움이 돼요.")
    if "요거트" in text or "두유" in text:
        _append_unique(teas, "레몬밤차", "카페인 없이 가볍게 마시기 좋아요.")
    if any(word in text for word in ("튀김", "볶음", "매콤")):
        _append_unique(teas, "페퍼민트차(연하게)", "식후 더부룩함이 있을 때 부담을 줄이는 데 도움이 돼요.")

    return teas[:MAX_TEA_RECOMMENDATIONS]


def build_daily_coffee_recommendations(stage, plan: DayPlan) -> List[DrinkRecommendation]:
    """Coffee options, decaf first; at most two."""
    stage = StageType.parse(stage)
    text = _plan_text(plan)
    coffees: List[DrinkRecommendation] = []

    _append_unique(coffees, "디카페인 아메리카노(연하게)",
                   "카페인 민감도가 있는 날에 비교적 부담이 적은 선택지예요.")
    if not stage.is_soft:
        _append_unique(coffees, "연한 아메리카노(카페인, 소량)",
                       "원할 때만 식후에 반 잔~한 잔 이내로 조심해서 마셔요.")
    if any(word in text for word in ("요거트", "두유", "수프")):
        _append_unique(coffees, "디카페인 라떼(무가당, 저지방 우유/두유)",
                       "속이 예민한 날에는 진하지 않게 소량으로 선택해요.")

    return coffees[:MAX_COFFEE_RECOMMENDATIONS]


def coffee_guidance(stage) -> str:
    if StageType.parse(stage).is_soft:
        return "치료 중 커피는 필수가 아니며, 몸이 예민한 날은 커피를 쉬고 무카페인 차를 우선해 주세요."
    return "커피는 매일 마실 필요가 없고, 원할 때만 식후 1잔 이내로 제한해 늦은 오후·저녁은 피하세요."
