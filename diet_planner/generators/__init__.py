# diet_planner/generators/__init__.py
"""
Plan, substitute and guide generators.
"""
from .plan_generator import (
    generate_plan, generate_month_plans, create_meal_suggestion,
    build_recipe, build_snack_recipe, seasonal_from_side,
    PlanCache, DEFAULT_ADHERENCE_SCORE,
)
from .substitute_generator import (
    SubstituteGroup, SUBSTITUTE_GROUPS,
    find_substitute_group, build_substitute_candidates, build_candidate_pool,
)
from .portion_guide import (
    PortionGuide, meal_portion_guide, base_amount_by_food_name,
    track_names_with_portion, build_default_log,
)
from .guides import (
    DrinkRecommendation, get_stage_food_guides, get_snack_coffee_timing_guide,
    build_daily_tea_recommendations, build_daily_coffee_recommendations, coffee_guidance,
)

__all__ = [
    'generate_plan',
    'generate_month_plans',
    'create_meal_suggestion',
    'build_recipe',
    'build_snack_recipe',
    'seasonal_from_side',
    'PlanCache',
    'DEFAULT_ADHERENCE_SCORE',
    'SubstituteGroup',
    'SUBSTITUTE_GROUPS',
    'find_substitute_group',
    'build_substitute_candidates',
    'build_candidate_pool',
    'PortionGuide',
    'meal_portion_guide',
    'base_amount_by_food_name',
    'track_names_with_portion',
    'build_default_log',
    'DrinkRecommendation',
    'get_stage_food_guides',
    'get_snack_coffee_timing_guide',
    'build_daily_tea_recommendations',
    'build_daily_coffee_recommendations',
    'coffee_guidance',
]
