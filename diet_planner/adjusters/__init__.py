# diet_planner/adjusters/__init__.py
"""
Plan adjusters.

Each adjuster personalizes a DayPlan for one concern and returns the new
plan plus notes explaining what changed. The AdjustmentPipeline composes
them in a fixed order: user context, medication, preference, dinner
carbohydrate safety, prior-day intake correction.
"""
from .base_adjuster import PlanAdjuster
from .user_context_adjuster import UserContextAdjuster
from .medication_adjuster import MedicationAdjuster
from .preference_adjuster import PreferenceAdjuster, PreferenceParams, EXTERNAL_SIGNAL_NOTE
from .dinner_carb_adjuster import DinnerCarbSafetyAdjuster, DinnerCarbSafetyContext
from .intake_correction_adjuster import IntakeCorrectionAdjuster, IntakeCorrectionContext
from .cancer_profiles import detect_cancer_profile, CancerProfileMatch
from .pipeline import AdjustmentPipeline

# Adjuster registry - maps stage names to classes, in pipeline order
ADJUSTER_REGISTRY = {
    "user_context": UserContextAdjuster,
    "medication": MedicationAdjuster,
    "preference": PreferenceAdjuster,
    "dinner_carb_safety": DinnerCarbSafetyAdjuster,
    "intake_correction": IntakeCorrectionAdjuster,
}


def create_adjuster(adjuster_name: str) -> PlanAdjuster:
    """
    Factory function to create adjuster instances.

    Args:
        adjuster_name: Name of adjuster (e.g., "medication")

    Returns:
        PlanAdjuster instance

    Raises:
        ValueError: If adjuster_name not found in registry
    """
    if adjuster_name not in ADJUSTER_REGISTRY:
        raise ValueError(
            f"Unknown adjuster: {adjuster_name}. "
            f"Available: {list(ADJUSTER_REGISTRY.keys())}"
        )
    return ADJUSTER_REGISTRY[adjuster_name]()


__all__ = [
    'PlanAdjuster',
    'UserContextAdjuster',
    'MedicationAdjuster',
    'PreferenceAdjuster',
    'PreferenceParams',
    'EXTERNAL_SIGNAL_NOTE',
    'DinnerCarbSafetyAdjuster',
    'DinnerCarbSafetyContext',
    'IntakeCorrectionAdjuster',
    'IntakeCorrectionContext',
    'detect_cancer_profile',
    'CancerProfileMatch',
    'AdjustmentPipeline',
    'ADJUSTER_REGISTRY',
    'create_adjuster',
]
