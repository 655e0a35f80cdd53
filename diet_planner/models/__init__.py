"""
Data models for the diet planner.
"""
from .meal_plan import MealSlot, MealNutrient, MealSuggestion, DayPlan, SLOT_ORDER, MAIN_SLOTS
from .day_log import (
    TrackItem, DayLog,
    parse_track_items, parse_day_log, make_track_items,
    MAX_SERVINGS,
)
from .diet_context import (
    StageType, MedicationSchedule, AdditionalCondition, UserDietContext,
    SOFT_STAGES, CHEMO_STAGES, LOWER_CARB_STAGES,
    calculate_bmi, parse_medication_schedules, parse_additional_conditions,
    parse_medication_names, parse_cancer_stage_level,
)
from .preferences import PreferenceTag, DailyPreferences, parse_preference_list, SELECTABLE_PREFERENCES
from .analysis_result import (
    AdjustmentResult, SlotCoverage, PlanCoverage, DayAnalysis,
    SubstituteSuggestion, RollingScores,
)

__all__ = [
    # Plan models
    'MealSlot',
    'MealNutrient',
    'MealSuggestion',
    'DayPlan',
    'SLOT_ORDER',
    'MAIN_SLOTS',
    # Log models
    'TrackItem',
    'DayLog',
    'parse_track_items',
    'parse_day_log',
    'make_track_items',
    'MAX_SERVINGS',
    # Context models
    'StageType',
    'SOFT_STAGES',
    'CHEMO_STAGES',
    'LOWER_CARB_STAGES',
    'MedicationSchedule',
    'AdditionalCondition',
    'UserDietContext',
    'calculate_bmi',
    'parse_medication_schedules',
    'parse_additional_conditions',
    'parse_medication_names',
    'parse_cancer_stage_level',
    # Preferences
    'PreferenceTag',
    'DailyPreferences',
    'parse_preference_list',
    'SELECTABLE_PREFERENCES',
    # Results
    'AdjustmentResult',
    'SlotCoverage',
    'PlanCoverage',
    'DayAnalysis',
    'SubstituteSuggestion',
    'RollingScores',
]
