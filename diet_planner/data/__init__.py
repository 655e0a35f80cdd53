# diet_planner/data/__init__.py
"""
Data access layer for the diet planner.

Provides managers for the diet store, the patient profile and external
signal items.
"""
from .diet_store import (
    DietStore, DietStoreManager, MedicationHistoryEntry,
    parse_store, parse_medication_history,
)
from .profile_manager import ProfileManager
from .signals_manager import SignalsManager

__all__ = [
    'DietStore',
    'DietStoreManager',
    'MedicationHistoryEntry',
    'parse_store',
    'parse_medication_history',
    'ProfileManager',
    'SignalsManager',
]
