"""
Utility functions for the diet planner.
"""
from .dates import (
    validate_date_key,
    is_date_key,
    parse_date_key,
    format_date_key,
    offset_date_key,
    month_date_keys,
    previous_month,
    format_date_label,
    today_key,
)
from .nutrients import clamp, round_half_up, rebalance_meal_nutrient, is_balanced
from .search import (
    strip_portion_label,
    normalize_food_name,
    compact_food_text,
    levenshtein_distance,
    food_name_similarity,
    search_food_candidates,
)
from .keywords import count_keywords_by_items, includes_any_keyword_by_items, count_keywords

__all__ = [
    'validate_date_key',
    'is_date_key',
    'parse_date_key',
    'format_date_key',
    'offset_date_key',
    'month_date_keys',
    'previous_month',
    'format_date_label',
    'today_key',
    'clamp',
    'round_half_up',
    'rebalance_meal_nutrient',
    'is_balanced',
    'strip_portion_label',
    'normalize_food_name',
    'compact_food_text',
    'levenshtein_distance',
    'food_name_similarity',
    'search_food_candidates',
    'count_keywords_by_items',
    'includes_any_keyword_by_items',
    'count_keywords',
]
