# diet_planner/analyzers/score_tracker.py
"""
Rolling adherence scores.

Daily scores of meaningful logs are collected into a date-indexed pandas
DataFrame; weekly, monthly and lifetime averages and the previous-month
score used to seed plan generation are read from it.
"""
from datetime import timedelta
from typing import Callable, Dict, Optional

import pandas as pd

from diet_planner.models import DayLog, DayPlan, RollingScores
from diet_planner.utils.dates import is_date_key, parse_date_key
from diet_planner.utils.nutrients import clamp, round_half_up
from .adherence_analyzer import AdherenceAnalyzer

DEFAULT_PREVIOUS_MONTH_SCORE = 70
WEEK_DAYS = 7

SCORE_COLUMNS = ["date", "match_score", "daily_score"]


def score_to_percentile(score: float) -> int:
    """
    Rough percentile shown next to a score.

    Example:
        >>> score_to_percentile(75)
        80
    """
    return int(clamp(round_half_up(35 + score * 0.6), 1, 99))


def _rounded_mean(series: pd.Series) -> int:
    if series.empty:
        return 0
    return round_half_up(float(series.mean()))


class ScoreTracker:
    """
    Builds score frames from logs.

    Args:
        analyzer: AdherenceAnalyzer for the patient's stage
        plan_provider: Returns the plan a log is scored against
    """

    def __init__(self, analyzer: AdherenceAnalyzer, plan_provider: Callable[[str], DayPlan]):
        self.analyzer = analyzer
        self.plan_provider = plan_provider

    def build_dataframe(self, logs: Dict[str, DayLog]) -> pd.DataFrame:
        """
        Daily scores for every meaningful log.

        Untouched seeded logs and malformed date keys are skipped.

        Returns:
            DataFrame indexed by date with match_score and daily_score
        """
        rows = []
        for date_key in sorted(logs):
            log = logs[date_key]
            if not is_date_key(date_key) or log is None or not log.has_meaningful_entries():
                continue
            analysis = self.analyzer.analyze_day(self.plan_provider(date_key), log)
            rows.append({
                "date": date_key,
                "match_score": analysis.match_score,
                "daily_score": analysis.daily_score,
            })

        df = pd.DataFrame(rows, columns=SCORE_COLUMNS)
        df["date"] = pd.to_datetime(df["date"], errors="coerce")
        df = df.dropna(subset=["date"]).sort_values("date")
        return df.set_index("date")

    def rolling_scores(self, logs: Dict[str, DayLog], reference_date: str) -> RollingScores:
        """
        Weekly, monthly and lifetime averages of daily scores.

        Weekly covers the 7 days ending at the reference date, monthly the
        reference date's calendar month.
        """
        df = self.build_dataframe(logs)
        reference = pd.Timestamp(parse_date_key(reference_date))
        week_start = reference - timedelta(days=WEEK_DAYS - 1)

        weekly = df[(df.index >= week_start) & (df.index <= reference)]
        monthly = df[(df.index.year == reference.year) & (df.index.month == reference.month)]

        return RollingScores(
            weekly=_rounded_mean(weekly["daily_score"]),
            monthly=_rounded_mean(monthly["daily_score"]),
            total=_rounded_mean(df["daily_score"]),
            days_counted=len(df),
        )

    def month_average(self, logs: Dict[str, DayLog], year: int, month: int,
                      default: Optional[int] = DEFAULT_PREVIOUS_MONTH_SCORE) -> Optional[int]:
        """Average daily score of one calendar month, or default with no data."""
        month_logs = {
            key: log for key, log in logs.items()
            if is_date_key(key) and parse_date_key(key).year == year and parse_date_key(key).month == month
        }
        df = self.build_dataframe(month_logs)
        if df.empty:
            return default
        return _rounded_mean(df["daily_score"])

    def score_series(self, logs: Dict[str, DayLog]) -> pd.DataFrame:
        """Date/daily_score rows for charting."""
        df = self.build_dataframe(logs).reset_index()
        return df[["date", "daily_score"]]
