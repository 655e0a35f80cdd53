# diet_planner/adjusters/preference_adjuster.py
"""
Preference adjustment.

Each PreferenceTag maps to a fixed menu rewrite and one note. Rules run
in a fixed order regardless of the order tags were chosen in, so the
same tag set always produces the same plan.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence

from diet_planner.generators.menu_catalog import MEAT_MAINS
from diet_planner.models import AdjustmentResult, DayPlan, MealNutrient, PreferenceTag
from .base_adjuster import (
    PlanAdjuster, NoteList, set_meal_fields, set_side, sync_main_summaries, replace_snack,
)

EXTERNAL_SIGNAL_NOTE = "외부 최신 식단/영양 소식 키워드를 반영해 메뉴 다양성을 보강했어요."

WEIGHT_LOSS_NUTRIENTS = {
    "breakfast": MealNutrient(30, 45, 25),
    "lunch": MealNutrient(28, 47, 25),
    "dinner": MealNutrient(24, 48, 28),
    "snack": MealNutrient(22, 43, 35),
}


@dataclass
class PreferenceParams:
    """
    Tags applied to one date.

    Attributes:
        tags: Merged tag set (adaptive, daily choice and external)
        external_tags: Tags that came from external signals
    """
    tags: List[PreferenceTag] = field(default_factory=list)
    external_tags: List[PreferenceTag] = field(default_factory=list)


def _pizza(plan: DayPlan) -> None:
    lunch = plan.lunch
    lunch.main = "통밀 또띠아 채소 피자"
    lunch.soup = "맑은채소국"
    lunch.sides = ["그린샐러드", "저당 피클", "구운채소"]
    lunch.recipe_name = "통밀 또띠아 채소 피자"
    lunch.recipe_steps = [
        "통밀 또띠아 위에 토마토소스를 얇게 펴 주세요.",
        "채소와 저지방 단백질 토핑을 올려요.",
        "치즈는 소량만 사용하고 오븐에서 짧게 익혀요.",
        "맑은채소국과 함께 먹어 자극을 줄여요.",
    ]
    plan.dinner.main = "두부스테이크"
    plan.dinner.soup = "버섯수프"


def _spicy(plan: DayPlan) -> None:
    set_side(plan.lunch, 0, "저자극 매콤 두부무침")
    set_side(plan.dinner, 0, "고춧가루 소량 채소무침")


def _meat(plan: DayPlan) -> None:
    plan.dinner.main = MEAT_MAINS[0]


def _sweet(plan: DayPlan) -> None:
    replace_snack(
        plan, "무가당 요거트", ["제철 과일", "견과류 소량"], plan.snack.soup,
        recipe_name="당이 낮은 간식 조합",
        recipe_steps=[
            "무가당 요거트를 작은 그릇에 담아요.",
            "제철 과일을 작은 조각으로 추가해요.",
            "견과류는 한 줌 이내로 마무리해요.",
        ],
    )


def _healthy(plan: DayPlan) -> None:
    set_meal_fields(plan, "rice_type", "잡곡밥", "잡곡밥", "잡곡밥")
    set_side(plan.breakfast, 1, "데친브로콜리")
    set_side(plan.lunch, 1, "저염 나물모둠")
    set_side(plan.dinner, 1, "구운채소")


def _fish(plan: DayPlan) -> None:
    plan.lunch.main = "고등어구이"
    plan.dinner.main = "흰살생선찜"


def _sashimi(plan: DayPlan) -> None:
    plan.lunch.main = "익힌 생선 숙회무침"
    set_side(plan.lunch, 0, "저염 해초무침")


def _sushi(plan: DayPlan) -> None:
    plan.lunch.main = "익힌 생선 초밥(저염)"
    set_side(plan.lunch, 2, "따뜻한 미소수프")


def _cool_food(plan: DayPlan) -> None:
    plan.lunch.soup = "오이냉국(저염)"
    replace_snack(
        plan, "시원한 두유", ["제철 과일"], "물",
        recipe_name="시원한 간식 조합",
        recipe_steps=[
            "시원한 두유를 작은 컵 1잔으로 준비해요.",
            "제철 과일은 한 줌 이내로 곁들여요.",
            "차가운 간식 뒤에는 물을 조금 더 마셔 주세요.",
        ],
        summary="시원한 두유 + 과일 조각",
    )


def _warm_food(plan: DayPlan) -> None:
    set_meal_fields(plan, "soup", "들깨버섯수프", "두부맑은국", "단호박수프")


def _soft_food(plan: DayPlan) -> None:
    set_meal_fields(plan, "main", "두부달걀찜", "연두부덮밥", "흰살생선찜")


def _soupy(plan: DayPlan) -> None:
    set_meal_fields(plan, "soup", "미역국(저염)", "맑은채소국", "두부맑은국")


def _high_protein(plan: DayPlan) -> None:
    set_meal_fields(plan, "main", "달걀두부찜", "닭가슴살구이", "연어구이")
    replace_snack(
        plan, "그릭요거트", ["두유"], "물",
        recipe_name="단백질 보강 간식",
        recipe_steps=[
            "그릭요거트를 1회 분량으로 담아 주세요.",
            "무가당 두유를 작은 컵으로 곁들여요.",
            "당 함량이 높은 토핑은 생략하고 담백하게 드세요.",
        ],
    )


def _vegetable(plan: DayPlan) -> None:
    set_meal_fields(
        plan, "sides",
        ["브로콜리찜", "시금치나물", "당근볶음"],
        ["양배추볶음", "버섯볶음", "오이무침"],
        ["애호박볶음", "시금치나물", "구운채소"],
    )


def _bland(plan: DayPlan) -> None:
    set_side(plan.breakfast, 0, "저염 나물무침")
    set_side(plan.lunch, 0, "담백한 두부무침")
    set_side(plan.dinner, 0, "담백한 채소무침")


def _appetite_boost(plan: DayPlan) -> None:
    set_side(plan.lunch, 2, "새콤한 무피클(저염)")
    set_side(plan.dinner, 2, "레몬채소무침")


def _digestive(plan: DayPlan) -> None:
    set_meal_fields(plan, "main", "부드러운 죽", "두부덮밥", "닭안심찜")
    plan.breakfast.soup = "단호박수프"
    plan.dinner.soup = "들깨버섯수프"


def _low_salt(plan: DayPlan) -> None:
    set_meal_fields(plan, "soup", "두부맑은국", "맑은채소국", "미역국(저염)")
    set_side(plan.breakfast, 2, "저염 채소볶음")
    set_side(plan.lunch, 2, "저염 나물")
    set_side(plan.dinner, 2, "저염 버섯볶음")


def _noodle(plan: DayPlan) -> None:
    plan.lunch.main = "잔치국수(저염)"
    plan.lunch.soup = "멸치육수국(저염)"
    plan.lunch.sides = ["데친채소", "달걀지단", "두부무침"]


def _weight_loss(plan: DayPlan) -> None:
    set_meal_fields(plan, "rice_type", "현미밥(소량)", "잡곡밥(소량)", "현미밥(소량)")
    set_meal_fields(plan, "main", "달걀두부찜", "닭가슴살구이", "흰살생선찜")
    set_meal_fields(
        plan, "sides",
        ["브로콜리찜", "버섯볶음", "당근볶음"],
        ["양배추볶음", "저염 나물", "구운채소"],
        ["애호박볶음", "버섯볶음", "오이무침"],
    )
    replace_snack(
        plan, "그릭요거트", ["베리류", "아몬드 소량"], "물",
        recipe_name="체중감량형 간식 조합",
        recipe_steps=[
            "그릭요거트를 1회 분량으로 담아 주세요.",
            "베리류를 한 줌 이내로 곁들여 주세요.",
            "아몬드는 5~6알 이내로 추가해 주세요.",
        ],
    )
    for slot, meal in plan.meals():
        meal.nutrient = WEIGHT_LOSS_NUTRIENTS[slot.value].copy()


def _fried_chicken(plan: DayPlan) -> None:
    plan.dinner.main = "오븐 닭다리구이(껍질 제거)"
    set_side(plan.dinner, 0, "양배추샐러드")


def _sandwich(plan: DayPlan) -> None:
    lunch = plan.lunch
    lunch.rice_type = "통밀빵"
    lunch.main = "닭가슴살 통밀 샌드위치"
    lunch.soup = "단호박수프"
    lunch.sides = ["그린샐러드", "토마토", "오이무침"]
    lunch.recipe_name = "닭가슴살 통밀 샌드위치"
    lunch.recipe_steps = [
        "통밀빵 두 장을 가볍게 데워 주세요.",
        "삶은 닭가슴살과 채소를 충분히 넣어요.",
        "소스는 요거트 드레싱을 소량만 사용해요.",
        "단호박수프와 함께 천천히 드세요.",
    ]


def _beef(plan: DayPlan) -> None:
    plan.dinner.main = MEAT_MAINS[1]


def _pork(plan: DayPlan) -> None:
    plan.dinner.main = MEAT_MAINS[2]


def _chicken(plan: DayPlan) -> None:
    plan.lunch.main = "닭안심구이"


def _duck(plan: DayPlan) -> None:
    plan.dinner.main = "기름 뺀 훈제오리 소량"
    set_side(plan.dinner, 0, "부추무침")


@dataclass(frozen=True)
class PreferenceRule:
    rewrite: Callable[[DayPlan], None]
    note: str


PREFERENCE_RULES: Dict[PreferenceTag, PreferenceRule] = {
    PreferenceTag.PIZZA: PreferenceRule(_pizza, "피자 메뉴를 반영했어요. 같은 날 저녁은 가볍게 조정했어요."),
    PreferenceTag.SPICY: PreferenceRule(_spicy, "매운 맛은 유지하면서 자극은 줄인 양념으로 조정했어요."),
    PreferenceTag.MEAT: PreferenceRule(_meat, "고기 메뉴는 기름이 적은 부위로 반영했어요."),
    PreferenceTag.SWEET: PreferenceRule(_sweet, "단맛 요청을 반영해 혈당 부담이 낮은 간식으로 바꿨어요."),
    PreferenceTag.HEALTHY: PreferenceRule(_healthy, "건강식 방향으로 잡곡밥과 채소 반찬 비중을 높였어요."),
    PreferenceTag.FISH: PreferenceRule(_fish, "생선 메뉴를 늘려 단백질을 보강했어요."),
    PreferenceTag.SASHIMI: PreferenceRule(_sashimi, "회 느낌은 생식 대신 안전한 익힘 메뉴로 바꿨어요."),
    PreferenceTag.SUSHI: PreferenceRule(_sushi, "초밥 느낌은 익힌 재료 위주로 안전하게 반영했어요."),
    PreferenceTag.COOL_FOOD: PreferenceRule(_cool_food, "시원한 음식 요청을 반영하되 자극은 낮췄어요."),
    PreferenceTag.WARM_FOOD: PreferenceRule(_warm_food, "따뜻한 국·수프 중심으로 구성했어요."),
    PreferenceTag.SOFT_FOOD: PreferenceRule(_soft_food, "씹기 편한 부드러운 메뉴를 중심으로 조정했어요."),
    PreferenceTag.SOUPY: PreferenceRule(_soupy, "국물 음식은 저염 기준으로 반영했어요."),
    PreferenceTag.HIGH_PROTEIN: PreferenceRule(_high_protein, "단백질 보충을 위해 닭·생선·두부 비중을 높였어요."),
    PreferenceTag.VEGETABLE: PreferenceRule(_vegetable, "채소 반찬 종류를 더 다양하게 넣었어요."),
    PreferenceTag.BLAND: PreferenceRule(_bland, "강한 양념을 줄이고 담백하게 조정했어요."),
    PreferenceTag.APPETITE_BOOST: PreferenceRule(_appetite_boost, "입맛을 돕는 새콤한 반찬을 소량 추가했어요."),
    PreferenceTag.DIGESTIVE: PreferenceRule(_digestive, "속이 편한 소화 중심 메뉴로 조정했어요."),
    PreferenceTag.LOW_SALT: PreferenceRule(_low_salt, "저염식 기준으로 국·반찬 간을 낮췄어요."),
    PreferenceTag.NOODLE: PreferenceRule(_noodle, "면 요리는 자극을 줄인 저염 방식으로 반영했어요."),
    PreferenceTag.WEIGHT_LOSS: PreferenceRule(
        _weight_loss, "체중감량 방향을 반영해 저녁 탄수화물 비율을 더 낮추고 단백질 중심으로 조정했어요."
    ),
    PreferenceTag.FRIED_CHICKEN: PreferenceRule(
        _fried_chicken, "치킨을 자주 드셔서 튀기지 않은 오븐구이 닭 메뉴로 바꿨어요."
    ),
    PreferenceTag.SANDWICH: PreferenceRule(_sandwich, "샌드위치는 통밀빵과 저지방 단백질 구성으로 반영했어요."),
    PreferenceTag.BEEF: PreferenceRule(_beef, "소고기는 기름이 적은 부위로 반영했어요."),
    PreferenceTag.PORK: PreferenceRule(_pork, "돼지고기는 기름을 뺀 안심 수육으로 반영했어요."),
    PreferenceTag.CHICKEN: PreferenceRule(_chicken, "닭고기는 껍질을 뺀 담백한 조리로 반영했어요."),
    PreferenceTag.DUCK: PreferenceRule(_duck, "오리고기는 기름을 빼고 소량만 반영했어요."),
}


class PreferenceAdjuster(PlanAdjuster):
    """
    Apply a date's preference tags as menu rewrites.

    An empty tag set is a no-op with no notes.
    """

    @property
    def name(self) -> str:
        return "preference"

    def adjust(self, plan: DayPlan, params) -> AdjustmentResult:
        params = self._coerce(params)
        if not params.tags:
            return self.unchanged(plan)

        adjusted = plan.copy()
        notes = NoteList()
        for tag, rule in PREFERENCE_RULES.items():
            if tag in params.tags:
                rule.rewrite(adjusted)
                notes.add(rule.note)

        # Main summaries follow staple/main/soup changes; snack summaries are set by rules
        for slot, meal in adjusted.meals():
            if slot.value != "snack":
                meal.sync_summary()

        if params.external_tags:
            notes.add(EXTERNAL_SIGNAL_NOTE)

        return AdjustmentResult(plan=adjusted, notes=list(notes))

    @staticmethod
    def _coerce(params) -> PreferenceParams:
        if isinstance(params, PreferenceParams):
            return params
        tags: Sequence = params or []
        return PreferenceParams(tags=[tag for tag in (PreferenceTag.parse(t) for t in tags) if tag])
