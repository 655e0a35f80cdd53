"""
Tests for adherence analysis.
"""
import pytest
from diet_planner.models import DayLog, MealSlot, StageType, TrackItem, SLOT_ORDER
from diet_planner.generators import generate_plan, build_default_log
from diet_planner.analyzers import AdherenceAnalyzer, replacement_match_score, COVERED_THRESHOLD
from diet_planner.analyzers.adherence_analyzer import (
    NO_MEALS_CHECKED, GENERIC_CONCERN, CHEMO_CONCERN, PROTEIN_DEFICIENCY,
    FLOUR_EXCESS, SUGAR_EXCESS,
)


@pytest.fixture
def plan():
    return generate_plan("2024-03-10", StageType.CHEMO, 70)


def eaten_log(slot, names):
    log = DayLog()
    log.meals[slot] = [TrackItem(f"{slot.value}-{i}", name, eaten=True) for i, name in enumerate(names)]
    return log


# Match score tests
def test_replacement_same_group():
    """Test grains in the same group meet the group floor."""
    assert replacement_match_score("현미밥", "잡곡밥", MealSlot.LUNCH) == pytest.approx(0.74)


def test_replacement_containment():
    """Test a contained name scores at least 0.8."""
    assert replacement_match_score("현미밥 · 2/3공기", "현미밥 조금", MealSlot.LUNCH) >= 0.8


def test_replacement_unrelated():
    """Test unrelated foods fall below the covered threshold."""
    assert replacement_match_score("연어구이", "콜라", MealSlot.LUNCH) < COVERED_THRESHOLD
    assert replacement_match_score("", "콜라", MealSlot.LUNCH) == 0.0


def test_slot_coverage_one_to_one():
    """Test one eaten item covers at most one planned item."""
    analyzer = AdherenceAnalyzer()
    coverage = analyzer.slot_coverage(["현미밥", "잡곡밥"], ["현미밥"], MealSlot.LUNCH)
    assert coverage.covered == 1
    assert coverage.total == 2
    assert coverage.percent == 50


# Day analysis tests
def test_zero_eaten_day(plan):
    """Test a day with nothing eaten scores zero."""
    analysis = AdherenceAnalyzer(StageType.CHEMO).analyze_day(plan, build_default_log(plan.date, plan))
    assert analysis.daily_score == 0
    assert analysis.match_score == 0
    assert analysis.deficiencies == [NO_MEALS_CHECKED]
    assert analysis.concerns == []
    assert analysis.excesses == []


def test_everything_eaten(plan):
    """Test eating every planned item gives full coverage."""
    log = build_default_log(plan.date, plan)
    for item in log.all_items():
        item.mark_eaten()
    analyzer = AdherenceAnalyzer(StageType.CHEMO)
    assert analyzer.coverage(plan, log).percent == 100
    assert analyzer.analyze_day(plan, log).match_score == 100


def test_coverage_monotone(plan):
    """Test checking more planned items never lowers coverage."""
    log = build_default_log(plan.date, plan)
    analyzer = AdherenceAnalyzer(StageType.CHEMO)
    previous = analyzer.coverage(plan, log).percent
    for item in log.all_items():
        item.mark_eaten()
        current = analyzer.coverage(plan, log).percent
        assert current >= previous
        previous = current


def test_coverage_by_slot(plan):
    """Test per-slot percentages cover every slot."""
    log = build_default_log(plan.date, plan)
    for item in log.items(MealSlot.LUNCH):
        item.mark_eaten()
    percents = AdherenceAnalyzer().coverage(plan, log).slot_percents()
    assert percents[MealSlot.LUNCH] == 100
    assert percents[MealSlot.DINNER] == 0
    assert set(percents) == set(SLOT_ORDER)


def test_concerns_for_chemo(plan):
    """Test irritants raise both concerns for chemo patients."""
    log = eaten_log(MealSlot.DINNER, ["새우튀김", "두부조림"])
    analysis = AdherenceAnalyzer(StageType.CHEMO).analyze_day(plan, log)
    assert analysis.concerns == [GENERIC_CONCERN, CHEMO_CONCERN]

    other = AdherenceAnalyzer(StageType.SURGERY).analyze_day(plan, log)
    assert other.concerns == [GENERIC_CONCERN]


def test_protein_deficiency(plan):
    """Test a day without protein foods is flagged."""
    log = eaten_log(MealSlot.LUNCH, ["현미밥", "오이무침"])
    analysis = AdherenceAnalyzer().analyze_day(plan, log)
    assert PROTEIN_DEFICIENCY in analysis.deficiencies


def test_excesses_and_penalties(plan):
    """Test flour and sugar excesses lower the daily score."""
    log = eaten_log(MealSlot.SNACK, ["라면", "식빵", "쿠키", "케이크"])
    analysis = AdherenceAnalyzer().analyze_day(plan, log)
    assert analysis.excesses == [FLOUR_EXCESS, SUGAR_EXCESS]
    assert analysis.daily_score == max(0, analysis.match_score + 4 - 16)


def test_daily_score_bounds(plan):
    """Test the daily score stays within 0..100."""
    log = build_default_log(plan.date, plan)
    for item in log.all_items():
        item.mark_eaten()
    analysis = AdherenceAnalyzer(StageType.CHEMO).analyze_day(plan, log)
    assert 0 <= analysis.daily_score <= 100


def test_analysis_to_dict(plan):
    """Test the serialized analysis uses camelCase keys."""
    data = AdherenceAnalyzer().analyze_day(plan, DayLog()).to_dict()
    assert data["dailyScore"] == 0
    assert data["deficiencies"] == [NO_MEALS_CHECKED]
