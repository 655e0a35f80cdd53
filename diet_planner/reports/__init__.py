# diet_planner/reports/__init__.py
"""
Report generation: text rendering and score charts.
"""
from .plan_report import (
    format_plan, format_portions, format_guides, format_log,
    format_analysis, format_rolling_scores, format_substitutes,
)
from .chart_builder import ScoreChartBuilder

__all__ = [
    'format_plan',
    'format_portions',
    'format_guides',
    'format_log',
    'format_analysis',
    'format_rolling_scores',
    'format_substitutes',
    'ScoreChartBuilder',
]
