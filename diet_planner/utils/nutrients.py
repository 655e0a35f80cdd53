# diet_planner/utils/nutrients.py
"""
Numeric helpers for nutrient ratios.
"""
import math

from diet_planner.models.meal_plan import MealNutrient

CARB_PROTEIN_MIN = 20
CARB_PROTEIN_MAX = 60
FAT_MIN = 20
FAT_MAX = 35


def clamp(value, minimum, maximum):
    return max(minimum, min(maximum, value))


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves toward positive infinity.

    Python's round() uses banker's rounding; percentages and deltas here
    must round 2.5 to 3 and -7.5 to -7.

    Example:
        >>> round_half_up(2.5), round_half_up(-7.5)
        (3, -7)
    """
    return int(math.floor(value + 0.5))


def rebalance_meal_nutrient(nutrient: MealNutrient, carb_delta: float,
                            protein_delta: float) -> MealNutrient:
    """
    Apply carb/protein deltas and restore a valid ratio.

    Carb and protein are re-clamped to [20, 60] and fat is derived as the
    remainder. A fat deficit is recovered from protein first (down to 20),
    then from carb; a fat excess above 35 is pushed into carb.

    Args:
        nutrient: Current ratio (not modified)
        carb_delta: Change in carbohydrate percent
        protein_delta: Change in protein percent

    Returns:
        New MealNutrient summing to 100
    """
    carb = clamp(round_half_up(nutrient.carb + carb_delta), CARB_PROTEIN_MIN, CARB_PROTEIN_MAX)
    protein = clamp(round_half_up(nutrient.protein + protein_delta), CARB_PROTEIN_MIN, CARB_PROTEIN_MAX)
    fat = 100 - carb - protein

    if fat < FAT_MIN:
        need = FAT_MIN - fat
        protein_cut = min(need, max(0, protein - CARB_PROTEIN_MIN))
        protein -= protein_cut
        remain = need - protein_cut
        if remain > 0:
            carb = max(CARB_PROTEIN_MIN, carb - remain)
        fat = 100 - carb - protein

    if fat > FAT_MAX:
        excess = fat - FAT_MAX
        carb = clamp(carb + excess, CARB_PROTEIN_MIN, CARB_PROTEIN_MAX)
        fat = 100 - carb - protein

    return MealNutrient(carb, protein, fat)


def is_balanced(nutrient: MealNutrient) -> bool:
    """True when the ratio sums to 100 and fat sits in [20, 35]."""
    return nutrient.total() == 100 and FAT_MIN <= nutrient.fat <= FAT_MAX
