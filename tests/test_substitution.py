"""
Tests for substitute generation.
"""
from diet_planner.models import DayLog, MealSlot, TrackItem
from diet_planner.generators import (
    generate_plan, find_substitute_group, build_substitute_candidates, build_candidate_pool,
)
from diet_planner.generators.menu_catalog import COMMON_FOOD_CANDIDATES
from diet_planner.generators.substitute_generator import DEFAULT_HINT


# Group tests
def test_grain_group():
    """Test rice resolves to the carbohydrate group."""
    assert find_substitute_group("현미밥 · 2/3공기", MealSlot.LUNCH).id == "grain"


def test_protein_group():
    """Test salmon resolves to the protein group."""
    assert find_substitute_group("연어구이", MealSlot.DINNER).id == "protein"


def test_snack_slot_always_snack_group():
    """Test snack slot foods use the snack group."""
    assert find_substitute_group("찐고구마", MealSlot.SNACK).id == "snack"


def test_unknown_food_has_no_group():
    """Test foods outside every group resolve to None."""
    assert find_substitute_group("초콜릿", MealSlot.LUNCH) is None
    assert find_substitute_group("", MealSlot.LUNCH) is None


# Candidate tests
def test_grain_substitutes():
    """Test grain options exclude the food itself."""
    suggestion = build_substitute_candidates("현미밥 · 2/3공기", MealSlot.LUNCH, [])
    assert suggestion.hint == "탄수화물 공급원군"
    assert suggestion.options == ["잡곡밥", "오트밀", "죽", "고구마", "감자"]


def test_protein_substitutes():
    """Test protein options exclude the food itself."""
    suggestion = build_substitute_candidates("연어구이", MealSlot.LUNCH, [])
    assert suggestion.options == ["닭가슴살", "흰살생선찜", "두부조림", "달걀찜"]


def test_unknown_food_default_hint():
    """Test an unknown food still gets a hint."""
    suggestion = build_substitute_candidates("초콜릿", MealSlot.LUNCH, [])
    assert suggestion.hint == DEFAULT_HINT
    assert suggestion.options == []


def test_pool_names_follow_group_options():
    """Test similar pool names are appended after group options."""
    suggestion = build_substitute_candidates("연어구이", MealSlot.LUNCH, ["연어스테이크"])
    assert "연어스테이크" in suggestion.options
    assert suggestion.options.index("연어스테이크") > suggestion.options.index("달걀찜")
    assert len(suggestion.options) <= 8


# Pool tests
def test_candidate_pool_includes_plans_and_logs():
    """Test the pool merges catalog, plan and log names."""
    plan = generate_plan("2024-03-10", "chemo", 70)
    log = DayLog(meals={MealSlot.LUNCH: [TrackItem("a", "김밥 · 1줄", eaten=True)]})
    pool = build_candidate_pool([plan], [log])
    assert pool[:len(COMMON_FOOD_CANDIDATES)] == list(dict.fromkeys(COMMON_FOOD_CANDIDATES))
    assert plan.lunch.main in pool
    assert "김밥" in pool
    assert len(pool) == len(set(pool))
