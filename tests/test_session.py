"""
Tests for the planning session.
"""
import pytest
from diet_planner.data import DietStore
from diet_planner.generators import build_default_log
from diet_planner.generators.plan_generator import FLOUR_GUIDE_EASIER, FLOUR_GUIDE_DEFAULT
from diet_planner.models import DayLog, MealSlot, PreferenceTag, StageType, UserDietContext, MAIN_SLOTS
from diet_planner.session import PlanningSession


def make_session(store=None, today="2024-03-10", external=None, **context):
    context.setdefault("active_stage_type", StageType.CHEMO)
    return PlanningSession(UserDietContext(**context), store or DietStore(),
                           external_items=external, today=today, window_size=3)


# Construction tests
def test_invalid_today_raises():
    """Test a malformed reference date raises ValueError."""
    with pytest.raises(ValueError):
        make_session(today="10/03/2024")


def test_invalid_plan_date_raises():
    """Test malformed plan dates raise ValueError."""
    session = make_session()
    with pytest.raises(ValueError):
        session.plan_for_date("2024-02-31")
    with pytest.raises(ValueError):
        session.ensure_log("tomorrow")


# Previous month tests
def test_previous_month_default():
    """Test no logs last month defaults to 70."""
    session = make_session()
    assert session.previous_month_score() == 70
    assert session.plan_for_date("2024-03-10").plan.breakfast.caution_flour == FLOUR_GUIDE_DEFAULT


def test_previous_month_from_logs():
    """Test a poor previous month selects the easier menu."""
    store = DietStore(logs={"2024-02-10": DayLog(memo="못 먹음")})
    session = make_session(store)
    assert session.previous_month_score() == 0
    assert session.plan_for_date("2024-03-10").plan.breakfast.caution_flour == FLOUR_GUIDE_EASIER


# Plan tests
def test_plan_for_date_returns_copies():
    """Test callers cannot alias memoized plans."""
    session = make_session()
    first = session.plan_for_date("2024-03-10")
    first.plan.lunch.main = "changed"
    first.notes.append("extra")
    second = session.plan_for_date("2024-03-10")
    assert second.plan.lunch.main != "changed"
    assert "extra" not in second.notes


def test_plans_are_deterministic():
    """Test identical inputs give identical displayed plans."""
    first = make_session(age=70).plan_for_date("2024-03-10")
    second = make_session(age=70).plan_for_date("2024-03-10")
    assert first.plan == second.plan
    assert first.notes == second.notes


def test_adjusted_plan_keeps_notes_order():
    """Test displayed notes start with the adjuster notes."""
    session = make_session(age=70)
    adjusted = session.adjusted_plan("2024-03-10")
    displayed = session.plan_for_date("2024-03-10")
    assert displayed.notes[:len(adjusted.notes)] == adjusted.notes


def test_recent_history_length():
    """Test history covers the window, oldest first."""
    session = make_session()
    history = session.recent_history_plans("2024-03-10")
    assert [plan.date for plan in history] == ["2024-03-07", "2024-03-08", "2024-03-09"]


def test_store_medications_applied():
    """Test stored medications reach the medication stage."""
    session = make_session(DietStore(medications=["와파린"]))
    plan = session.plan_for_date("2024-03-10").plan
    for slot in MAIN_SLOTS:
        assert not any("시금치" in side for side in plan.meal(slot).sides)
    assert "와파린" in session.medication_names()


# Preference tests
def test_preferences_scoped_to_date():
    """Test a date's explicit choice does not leak to other dates."""
    store = DietStore()
    store.preferences.toggle("2024-03-10", PreferenceTag.FISH)
    session = make_session(store)
    assert PreferenceTag.FISH in session.resolve_preferences("2024-03-10")
    assert PreferenceTag.FISH not in session.resolve_preferences("2024-03-11")


def test_carried_preferences_not_applied():
    """Test legacy carried tags are never applied automatically."""
    store = DietStore()
    store.preferences.carried = [PreferenceTag.PIZZA]
    assert make_session(store).resolve_preferences("2024-03-10") == []


def test_external_signals_merged():
    """Test external tags join every date's preferences."""
    session = make_session(external=[{"title": "연어 오메가3"}])
    assert session.resolve_preferences("2024-03-10") == [PreferenceTag.FISH]
    assert session.plan_for_date("2024-03-10").plan.lunch.main != ""


# Log tests
def test_ensure_log_seeds_from_displayed_plan():
    """Test a first view seeds an unchecked log into the store."""
    store = DietStore()
    session = make_session(store)
    log = session.ensure_log("2024-03-10")
    assert store.logs["2024-03-10"] is log
    assert log == build_default_log("2024-03-10", session.plan_for_date("2024-03-10").plan)
    assert not log.has_meaningful_entries()


def test_ensure_log_keeps_existing():
    """Test an existing log is returned as is."""
    existing = DayLog(memo="기존")
    session = make_session(DietStore(logs={"2024-03-10": existing}))
    assert session.ensure_log("2024-03-10") is existing


def test_analyze_without_log():
    """Test analysis of an unlogged date scores zero."""
    assert make_session().analyze("2024-03-10").daily_score == 0


def test_analyze_full_day():
    """Test eating the displayed plan covers every planned item."""
    session = make_session()
    log = session.ensure_log("2024-03-10")
    for item in log.all_items():
        item.mark_eaten()
    lunch = session.coverage("2024-03-10").by_slot[MealSlot.LUNCH]
    assert lunch.covered == lunch.total > 0
    assert session.analyze("2024-03-10").daily_score > 0


def test_rolling_scores_without_logs():
    """Test empty stores give zero rolling scores."""
    assert make_session().rolling_scores().days_counted == 0


def test_substitutes():
    """Test substitutes use the nutrition group of the food."""
    suggestion = make_session().substitutes("2024-03-10", "현미밥", MealSlot.LUNCH)
    assert suggestion.hint == "탄수화물 공급원군"
    assert "현미밥" not in suggestion.options
