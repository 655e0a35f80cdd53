# diet_planner/recommenders/__init__.py
"""
Preference recommenders.
"""
from .preference_recommender import (
    recommend_preferences_by_recent_logs,
    recommend_adaptive_preferences,
    recommend_preferences_by_external_signals,
    build_recent_diet_signals,
    diet_signal_label,
    merge_preferences,
    RECENT_LOG_DAYS,
)

__all__ = [
    'recommend_preferences_by_recent_logs',
    'recommend_adaptive_preferences',
    'recommend_preferences_by_external_signals',
    'build_recent_diet_signals',
    'diet_signal_label',
    'merge_preferences',
    'RECENT_LOG_DAYS',
]
