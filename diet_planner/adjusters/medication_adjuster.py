# diet_planner/adjusters/medication_adjuster.py
"""
Medication-interaction adjustment.

Medication names (and categories) are matched against keyword tables of
drug families with known food interactions; each matched family rewrites
the affected meal components.
"""
import re
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from diet_planner.models import AdjustmentResult, DayPlan, MAIN_SLOTS
from .base_adjuster import PlanAdjuster, NoteList, set_meal_fields, set_side, sync_main_summaries, replace_snack

HORMONE_OR_TARGETED_KEYWORDS = (
    "타목시펜", "tamoxifen", "레트로졸", "letrozole", "아나스트로졸", "anastrozole",
    "엑세메스탄", "exemestane", "팔보시클립", "palbociclib", "리보시클립", "ribociclib",
)
STEROID_KEYWORDS = (
    "덱사메타손", "dexamethasone", "프레드니솔론", "prednisolone",
    "프레드니손", "prednisone", "스테로이드",
)
ANTICOAGULANT_KEYWORDS = ("와파린", "warfarin", "쿠마딘", "coumadin")


def _low_sugar_snack(plan: DayPlan) -> None:
    replace_snack(
        plan, "무가당 요거트", ["베리류", "호두 소량"], "따뜻한 물",
        recipe_name="약물치료 고려 간식 조합",
        recipe_steps=[
            "무가당 요거트를 작은 그릇에 담아 주세요.",
            "베리류를 한 줌 정도 추가해 주세요.",
            "호두는 소량(4~5알)만 곁들여 주세요.",
            "자몽·자몽주스는 피하고 물을 함께 드세요.",
        ],
    )


def _low_salt_meals(plan: DayPlan) -> None:
    set_meal_fields(plan, "soup", "두부맑은국", "맑은채소국", "미역국(저염)")
    for slot, side in zip(MAIN_SLOTS, ("저염 채소볶음", "저염 나물", "저염 버섯볶음")):
        set_side(plan.meal(slot), 2, side)
    sync_main_summaries(plan)


def _steady_vitamin_k(plan: DayPlan) -> None:
    # Spinach swings vitamin K intake; keep greens steady with mushrooms
    for slot in MAIN_SLOTS:
        meal = plan.meal(slot)
        meal.sides = ["버섯볶음" if "시금치" in side else side for side in meal.sides]


@dataclass(frozen=True)
class InteractionRule:
    """A drug family, its keywords, the menu rewrite and the note it adds."""
    family: str
    keywords: Tuple[str, ...]
    rewrite: Callable[[DayPlan], None]
    note: str


INTERACTION_RULES: List[InteractionRule] = [
    InteractionRule(
        "hormone_or_targeted",
        HORMONE_OR_TARGETED_KEYWORDS,
        _low_sugar_snack,
        "복용 약을 고려해 간식을 저당·저자극 조합으로 조정했어요.",
    ),
    InteractionRule(
        "steroid",
        STEROID_KEYWORDS,
        _low_salt_meals,
        "복용 약을 고려해 염분과 당 부담이 적은 구성으로 조정했어요.",
    ),
    InteractionRule(
        "anticoagulant",
        ANTICOAGULANT_KEYWORDS,
        _steady_vitamin_k,
        "복용 약을 고려해 특정 채소 섭취량이 급격히 바뀌지 않도록 반찬을 완만하게 조정했어요.",
    ),
]


def normalize_medications(medications: Sequence[str]) -> List[str]:
    """Lowercase, whitespace-free medication names (empty ones dropped)."""
    normalized = [re.sub(r"\s+", "", (name or "").lower()) for name in medications]
    return [name for name in normalized if name]


def matched_interaction_families(medications: Sequence[str]) -> List[str]:
    """Names of the drug families present in a medication list."""
    normalized = normalize_medications(medications)
    return [
        rule.family for rule in INTERACTION_RULES
        if any(keyword in name for name in normalized for keyword in rule.keywords)
    ]


class MedicationAdjuster(PlanAdjuster):
    """
    Rewrite meal components that interact with the patient's medications.

    Params are a list of medication names; categories may be mixed in so
    that category keywords (e.g. "스테로이드") match as well.
    """

    @property
    def name(self) -> str:
        return "medication"

    def adjust(self, plan: DayPlan, params: Sequence[str]) -> AdjustmentResult:
        families = matched_interaction_families(params or [])
        if not families:
            return self.unchanged(plan)

        adjusted = plan.copy()
        notes = NoteList()
        for rule in INTERACTION_RULES:
            if rule.family in families:
                rule.rewrite(adjusted)
                notes.add(rule.note)

        return AdjustmentResult(plan=adjusted, notes=list(notes))
