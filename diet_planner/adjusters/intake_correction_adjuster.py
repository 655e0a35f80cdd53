# diet_planner/adjusters/intake_correction_adjuster.py
"""
Prior-day intake correction.

Looks at yesterday's log and nudges today's plan back toward balance:
after an overeating day carbohydrate goes down and protein up, after a
day of skipped meals (or no protein) energy and protein go up. How hard
the plan is nudged depends on the treatment stage, BMI and how much of
yesterday's log was actually filled in.
"""
from dataclasses import dataclass
from typing import Optional

from diet_planner.models import AdjustmentResult, DayLog, DayPlan, StageType, MAIN_SLOTS
from diet_planner.utils.keywords import (
    FLOUR_KEYWORDS, CORRECTION_SUGAR_KEYWORDS, CORRECTION_HEAVY_KEYWORDS, PROTEIN_KEYWORDS,
    count_keywords_by_items,
)
from diet_planner.utils.nutrients import clamp, round_half_up, rebalance_meal_nutrient
from .base_adjuster import PlanAdjuster, NoteList, replace_snack

RELIABLE_LOG = 0.7
RELIABLE_THRESHOLD = 3
UNRELIABLE_THRESHOLD = 4
SKIPPED_MEALS_THRESHOLD = 2

STAPLE_MARKERS = ("밥", "죽", "덮밥")
SMALL_PORTION = "(소량)"


@dataclass
class IntakeCorrectionContext:
    """
    Inputs for the correction.

    Attributes:
        yesterday_log: The previous day's log, or None
        stage: Treatment stage (risk weight and note label)
        bmi: Body-mass index, or None when unknown
    """
    yesterday_log: Optional[DayLog] = None
    stage: StageType = StageType.OTHER
    bmi: Optional[float] = None


@dataclass
class IntakeSignals:
    """Keyword counts and record quality read from one day's log."""
    flour_sugar: int
    heavy: int
    protein: int
    skipped_meals: int
    reliability: float

    @property
    def heavy_threshold(self) -> int:
        # A well-filled log is trusted with a lower trigger
        return RELIABLE_THRESHOLD if self.reliability >= RELIABLE_LOG else UNRELIABLE_THRESHOLD

    @property
    def overeating(self) -> bool:
        return self.flour_sugar + self.heavy >= self.heavy_threshold

    @property
    def undereating(self) -> bool:
        return self.skipped_meals >= SKIPPED_MEALS_THRESHOLD or self.protein == 0


def read_intake_signals(log: DayLog) -> IntakeSignals:
    """Serving-weighted keyword counts over a log's eaten items."""
    eaten = log.eaten_items()
    return IntakeSignals(
        flour_sugar=(count_keywords_by_items(eaten, FLOUR_KEYWORDS)
                     + count_keywords_by_items(eaten, CORRECTION_SUGAR_KEYWORDS)),
        heavy=count_keywords_by_items(eaten, CORRECTION_HEAVY_KEYWORDS),
        protein=count_keywords_by_items(eaten, PROTEIN_KEYWORDS),
        skipped_meals=log.skipped_main_meals(),
        reliability=log.reliability(),
    )


def stage_risk_weight(stage: StageType) -> float:
    if stage.is_soft:
        return 1.15
    if stage is StageType.SURGERY:
        return 1.1
    if stage.is_lower_carb:
        return 1.05
    return 1.0


def overeat_correction_strength(stage: StageType, bmi: Optional[float], reliability: float) -> float:
    """
    Multiplier for the overeating correction, in [0.65, 1.5].

    Higher for chemo/radiation/surgery stages and high BMI, lower for
    underweight patients and sparsely filled logs.
    """
    bmi_weight = 1.0
    if bmi is not None:
        if bmi >= 30:
            bmi_weight = 1.3
        elif bmi >= 25:
            bmi_weight = 1.18
        elif bmi < 18.5:
            bmi_weight = 0.85
    reliability_weight = clamp(0.65 + reliability * 0.45, 0.65, 1.1)
    return clamp(stage_risk_weight(stage) * bmi_weight * reliability_weight, 0.65, 1.5)


def undereat_correction_strength(stage: StageType, bmi: Optional[float], reliability: float) -> float:
    """
    Multiplier for the undereating correction, in [0.7, 1.6].

    Inverse of the overeating weights: low BMI and surgery/chemo stages
    push harder.
    """
    bmi_weight = 1.0
    if bmi is not None:
        if bmi < 18.5:
            bmi_weight = 1.25
        elif bmi >= 25:
            bmi_weight = 0.9

    stage_weight = 1.0
    if stage is StageType.SURGERY:
        stage_weight = 1.15
    elif stage.is_soft:
        stage_weight = 1.1

    reliability_weight = clamp(0.6 + reliability * 0.5, 0.6, 1.1)
    return clamp(stage_weight * bmi_weight * reliability_weight, 0.7, 1.6)


def strength_note(strength: float, stage: StageType, bmi: Optional[float], reliability: float) -> str:
    bmi_text = f"{bmi:.1f}" if bmi else "미입력"
    return (
        f"보정 강도: {strength:.2f}배 (치료 단계 {stage.label}, BMI {bmi_text}, "
        f"기록 신뢰도 {round_half_up(reliability * 100)}%)"
    )


class IntakeCorrectionAdjuster(PlanAdjuster):
    """
    Correct today's plan for yesterday's over- or under-eating.

    No-op when yesterday has no log or no eaten items. Overeating is
    checked first; undereating only when overeating did not trigger.
    """

    @property
    def name(self) -> str:
        return "intake_correction"

    def adjust(self, plan: DayPlan, params: IntakeCorrectionContext) -> AdjustmentResult:
        context = params or IntakeCorrectionContext()
        log = context.yesterday_log
        if log is None or not log.eaten_items():
            return self.unchanged(plan)

        signals = read_intake_signals(log)
        stage = StageType.parse(context.stage)

        if signals.overeating:
            strength = overeat_correction_strength(stage, context.bmi, signals.reliability)
            adjusted = self._correct_overeating(plan, strength)
            notes = NoteList()
            notes.add("전날 기록을 반영해 오늘은 탄수화물·당류를 낮추고 단백질 중심으로 자동 조정했어요.")
        elif signals.undereating:
            strength = undereat_correction_strength(stage, context.bmi, signals.reliability)
            adjusted = self._correct_undereating(plan, strength)
            notes = NoteList()
            notes.add("전날 섭취 부족 기록을 반영해 오늘은 결식을 막는 회복형 구성을 보강했어요.")
        else:
            return self.unchanged(plan)

        notes.add(strength_note(strength, stage, context.bmi, signals.reliability))
        return AdjustmentResult(plan=adjusted, notes=list(notes))

    def _correct_overeating(self, plan: DayPlan, strength: float) -> DayPlan:
        adjusted = plan.copy()
        meal_carb = round_half_up(-6 * strength)
        meal_protein = round_half_up(4 * strength)
        snack_carb = round_half_up(-8 * strength)
        snack_protein = round_half_up(5 * strength)

        for slot in MAIN_SLOTS:
            meal = adjusted.meal(slot)
            meal.nutrient = rebalance_meal_nutrient(meal.nutrient, meal_carb, meal_protein)
            is_staple = any(marker in meal.rice_type for marker in STAPLE_MARKERS)
            if is_staple and "소량" not in meal.rice_type:
                meal.rice_type = f"{meal.rice_type}{SMALL_PORTION}"
                meal.sync_summary()

        snack_nutrient = rebalance_meal_nutrient(adjusted.snack.nutrient, snack_carb, snack_protein)
        replace_snack(
            adjusted, "그릭요거트", ["베리류", "아몬드 소량"], "물",
            recipe_name="전날 과식 보정 간식",
            recipe_steps=[
                "그릭요거트를 1회 분량(90g)으로 준비해 주세요.",
                "베리류는 한 줌(50~60g)만 곁들여 주세요.",
                "아몬드는 5~6알 이내로 제한해 주세요.",
                "당류가 많은 음료는 피하고 물과 함께 드세요.",
            ],
            summary="그릭요거트 + 베리류 + 아몬드 소량 + 물",
        )
        adjusted.snack.nutrient = snack_nutrient
        return adjusted

    def _correct_undereating(self, plan: DayPlan, strength: float) -> DayPlan:
        adjusted = plan.copy()
        meal_carb = round_half_up(2 * strength)
        meal_protein = round_half_up(3 * strength)
        snack_carb = round_half_up(2 * strength)
        snack_protein = round_half_up(4 * strength)

        for slot in MAIN_SLOTS:
            meal = adjusted.meal(slot)
            meal.nutrient = rebalance_meal_nutrient(meal.nutrient, meal_carb, meal_protein)

        snack_nutrient = rebalance_meal_nutrient(adjusted.snack.nutrient, snack_carb, snack_protein)
        replace_snack(
            adjusted, "무가당 요거트", ["바나나 반 개"], "따뜻한 물",
            recipe_name="전날 결식 보정 간식",
            recipe_steps=[
                "무가당 요거트를 1회 분량으로 준비해 주세요.",
                "바나나 반 개를 추가해 부족한 에너지를 보충해 주세요.",
                "따뜻한 물과 함께 천천히 드세요.",
            ],
            summary="무가당 요거트 + 바나나 반 개 + 따뜻한 물",
        )
        adjusted.snack.nutrient = snack_nutrient
        return adjusted
