"""
Tests for rolling scores and the score chart.
"""
import pandas as pd
import pytest
from diet_planner.models import DayLog, StageType
from diet_planner.generators import generate_plan, build_default_log
from diet_planner.analyzers import AdherenceAnalyzer, ScoreTracker, score_to_percentile
from diet_planner.reports import ScoreChartBuilder
from diet_planner.utils import round_half_up


def plan_provider(date_key):
    return generate_plan(date_key, StageType.CHEMO, 70)


def full_log(date_key):
    log = build_default_log(date_key, plan_provider(date_key))
    for item in log.all_items():
        item.mark_eaten()
    return log


@pytest.fixture
def analyzer():
    return AdherenceAnalyzer(StageType.CHEMO)


@pytest.fixture
def logs():
    return {
        "2024-03-10": full_log("2024-03-10"),
        "2024-03-09": DayLog(memo="입맛 없음"),
        "2024-02-15": DayLog(memo="병원"),
        "2024-02-20": build_default_log("2024-02-20", plan_provider("2024-02-20")),
        "not-a-date": DayLog(memo="x"),
    }


# Percentile tests
def test_score_to_percentile():
    """Test the percentile mapping and its bounds."""
    assert score_to_percentile(75) == 80
    assert score_to_percentile(0) == 35
    assert score_to_percentile(100) == 95
    assert score_to_percentile(-500) == 1


# Tracker tests
def test_build_dataframe_skips_untouched(analyzer, logs):
    """Test untouched logs and bad keys are excluded."""
    df = ScoreTracker(analyzer, plan_provider).build_dataframe(logs)
    assert list(df.index.strftime("%Y-%m-%d")) == ["2024-02-15", "2024-03-09", "2024-03-10"]
    assert df.loc[pd.Timestamp("2024-03-09"), "daily_score"] == 0


def test_rolling_scores(analyzer, logs):
    """Test weekly, monthly and total averages."""
    full = analyzer.analyze_day(plan_provider("2024-03-10"), logs["2024-03-10"]).daily_score
    scores = ScoreTracker(analyzer, plan_provider).rolling_scores(logs, "2024-03-10")
    assert scores.weekly == round_half_up(full / 2)
    assert scores.monthly == round_half_up(full / 2)
    assert scores.total == round_half_up(full / 3)
    assert scores.days_counted == 3


def test_rolling_scores_empty(analyzer):
    """Test no logs gives zero averages."""
    scores = ScoreTracker(analyzer, plan_provider).rolling_scores({}, "2024-03-10")
    assert (scores.weekly, scores.monthly, scores.total, scores.days_counted) == (0, 0, 0, 0)


def test_month_average(analyzer, logs):
    """Test month averages and the empty-month default."""
    tracker = ScoreTracker(analyzer, plan_provider)
    assert tracker.month_average(logs, 2024, 2) == 0
    assert tracker.month_average(logs, 2024, 1) == 70
    assert tracker.month_average(logs, 2024, 1, default=None) is None


def test_score_series_columns(analyzer, logs):
    """Test chart rows carry date and daily score."""
    df = ScoreTracker(analyzer, plan_provider).score_series(logs)
    assert list(df.columns) == ["date", "daily_score"]
    assert len(df) == 3


# Chart tests
def test_continuous_calendar_gaps():
    """Test missing days become NaN rows."""
    builder = ScoreChartBuilder()
    df = builder.prepare_data(pd.DataFrame({
        "date": ["2024-03-04", "2024-03-01"],
        "daily_score": [80, 60],
    }))
    full = builder.continuous_calendar(df)
    assert len(full) == 4
    assert full["daily_score"].isna().sum() == 2
    assert full["daily_score"].iloc[0] == 60


def test_prepare_data_drops_bad_dates():
    """Test unparseable dates are dropped and scores coerced."""
    df = ScoreChartBuilder().prepare_data(pd.DataFrame({
        "date": ["2024-03-01", "garbage"],
        "daily_score": ["75", "80"],
    }))
    assert len(df) == 1
    assert df["daily_score"].iloc[0] == 75


def test_chart_written(tmp_path, analyzer, logs):
    """Test a chart file is written without opening a browser."""
    output = tmp_path / "chart.jpg"
    df = ScoreTracker(analyzer, plan_provider).score_series(logs)
    assert ScoreChartBuilder(output).build_from_dataframe(df, window=3, open_browser=False)
    assert output.exists()


def test_chart_empty(tmp_path, capsys):
    """Test an empty frame writes nothing."""
    output = tmp_path / "chart.jpg"
    empty = pd.DataFrame(columns=["date", "daily_score"])
    assert ScoreChartBuilder(output).build_from_dataframe(empty, open_browser=False) is False
    assert not output.exists()
    assert "(no data to chart)" in capsys.readouterr().out
