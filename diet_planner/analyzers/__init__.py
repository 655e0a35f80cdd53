# diet_planner/analyzers/__init__.py
"""
Adherence analysis and score tracking.
"""
from .adherence_analyzer import AdherenceAnalyzer, replacement_match_score, COVERED_THRESHOLD
from .score_tracker import ScoreTracker, score_to_percentile, DEFAULT_PREVIOUS_MONTH_SCORE

__all__ = [
    'AdherenceAnalyzer',
    'replacement_match_score',
    'COVERED_THRESHOLD',
    'ScoreTracker',
    'score_to_percentile',
    'DEFAULT_PREVIOUS_MONTH_SCORE',
]
