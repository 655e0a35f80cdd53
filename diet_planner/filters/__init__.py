# diet_planner/filters/__init__.py
"""
Plan filters applied after personalization.
"""
from .no_repeat_filter import (
    NoRepeatFilter,
    jaccard_similarity,
    meal_tokens,
    menu_tokens,
    pick_least_used,
    DEFAULT_WINDOW_DAYS,
    SIMILARITY_THRESHOLD,
)

__all__ = [
    'NoRepeatFilter',
    'jaccard_similarity',
    'meal_tokens',
    'menu_tokens',
    'pick_least_used',
    'DEFAULT_WINDOW_DAYS',
    'SIMILARITY_THRESHOLD',
]
