# diet_planner/adjusters/dinner_carb_adjuster.py
"""
Dinner carbohydrate safety.

Evening carbohydrate is cut for overweight patients or anyone aiming to
lose weight, and relaxed again for patients at risk of under-feeding
(underweight or poor appetite).
"""
from dataclasses import dataclass
from typing import Optional

from diet_planner.models import AdjustmentResult, DayPlan, MealNutrient
from diet_planner.utils.nutrients import clamp, rebalance_meal_nutrient, CARB_PROTEIN_MIN, CARB_PROTEIN_MAX
from .base_adjuster import PlanAdjuster, NoteList

UNDERWEIGHT_BMI = 18.5
OVERWEIGHT_BMI = 25
OBESE_BMI = 30

REDUCE_CARB = 4
REDUCE_CARB_OBESE = 6
REDUCE_CARB_LOW_APPETITE = 2

SMALL_PORTION = "(소량)"


@dataclass
class DinnerCarbSafetyContext:
    """
    Inputs for the dinner carbohydrate rule.

    Attributes:
        bmi: Body-mass index, or None when unknown
        low_appetite_risk: appetite_boost applied, or yesterday had <= 2 eaten items
        weight_loss_preference: weight_loss tag applied for the date
    """
    bmi: Optional[float] = None
    low_appetite_risk: bool = False
    weight_loss_preference: bool = False


def relax_dinner_carb(nutrient: MealNutrient, carb_floor: int) -> MealNutrient:
    """
    Raise carbohydrate to a floor at the expense of protein.

    Fat is held; protein never drops below 20, giving back carb first.
    """
    original_carb = nutrient.carb
    carb = max(original_carb, carb_floor)
    fat = nutrient.fat
    protein = 100 - carb - fat

    if protein < CARB_PROTEIN_MIN:
        lack = CARB_PROTEIN_MIN - protein
        carb = max(original_carb, carb - lack)
        protein = 100 - carb - fat

    return MealNutrient(carb, clamp(protein, CARB_PROTEIN_MIN, CARB_PROTEIN_MAX), fat)


def relax_carb_floor(underweight: bool, appetite_risk: bool, weight_loss: bool) -> int:
    combined = underweight and appetite_risk
    if weight_loss:
        return 32 if combined else 30
    return 36 if combined else 34


class DinnerCarbSafetyAdjuster(PlanAdjuster):
    """
    Tune dinner carbohydrate against body size, appetite and weight goals.

    The reduction runs first and the relaxation second, so under-feeding
    risk always has the last word on the dinner ratio.
    """

    @property
    def name(self) -> str:
        return "dinner_carb_safety"

    def adjust(self, plan: DayPlan, params: DinnerCarbSafetyContext) -> AdjustmentResult:
        context = params or DinnerCarbSafetyContext()
        bmi = context.bmi
        overweight = bmi is not None and bmi >= OVERWEIGHT_BMI
        underweight = bmi is not None and bmi < UNDERWEIGHT_BMI
        appetite_risk = context.low_appetite_risk

        should_reduce = overweight or context.weight_loss_preference
        should_relax = underweight or appetite_risk
        if not should_reduce and not should_relax:
            return self.unchanged(plan)

        adjusted = plan.copy()
        notes = NoteList()
        dinner = adjusted.dinner

        if should_reduce:
            cut = REDUCE_CARB_OBESE if bmi is not None and bmi >= OBESE_BMI else REDUCE_CARB
            if appetite_risk:
                cut = min(cut, REDUCE_CARB_LOW_APPETITE)

            reduced = rebalance_meal_nutrient(dinner.nutrient, -cut, cut)
            if reduced.carb < dinner.nutrient.carb:
                dinner.nutrient = reduced
                notes.add(f"체중 관리 목표를 반영해 저녁 탄수화물을 {cut}%p 낮추고 단백질로 보완했어요.")

            if not appetite_risk and SMALL_PORTION not in dinner.rice_type and dinner.rice_type.strip():
                dinner.rice_type = f"{dinner.rice_type}{SMALL_PORTION}"
                dinner.sync_summary()
                notes.add("저녁 곡류는 소량으로 줄여 늦은 시간 혈당 부담을 낮췄어요.")

        if should_relax:
            floor = relax_carb_floor(underweight, appetite_risk, context.weight_loss_preference)
            relative_floor = max(floor, adjusted.lunch.nutrient.carb - 4)
            relaxed = relax_dinner_carb(dinner.nutrient, relative_floor)
            if relaxed.carb > dinner.nutrient.carb:
                dinner.nutrient = relaxed
                notes.add("체중저하/식욕저하 위험을 반영해 저녁 탄수화물 감량 강도를 완화했어요.")

        if not notes:
            return self.unchanged(plan)
        return AdjustmentResult(plan=adjusted, notes=list(notes))
