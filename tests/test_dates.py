"""
Tests for date-key, nutrient and keyword helpers.
"""
import pytest
from diet_planner.models import MealNutrient, TrackItem
from diet_planner.utils import (
    is_date_key, validate_date_key, offset_date_key, month_date_keys,
    previous_month, format_date_label,
    round_half_up, rebalance_meal_nutrient, is_balanced,
    count_keywords_by_items, count_keywords,
)
from diet_planner.utils.keywords import FLOUR_KEYWORDS


# Date key tests
def test_is_date_key():
    """Test only real YYYY-MM-DD dates are keys."""
    assert is_date_key("2024-02-29")
    assert not is_date_key("2023-02-29")
    assert not is_date_key("2024-3-10")
    assert not is_date_key(20240310)


def test_validate_date_key_raises():
    """Test invalid keys raise ValueError."""
    with pytest.raises(ValueError):
        validate_date_key("2024-13-01")


def test_offset_date_key_across_leap_day():
    """Test offsets cross month boundaries."""
    assert offset_date_key("2024-03-01", -1) == "2024-02-29"
    assert offset_date_key("2024-12-31", 1) == "2025-01-01"


def test_month_date_keys():
    """Test a month lists every day."""
    keys = month_date_keys(2024, 2)
    assert len(keys) == 29
    assert keys[0] == "2024-02-01"
    assert keys[-1] == "2024-02-29"


def test_previous_month_wraps_year():
    """Test January steps back to December."""
    assert previous_month("2024-01-15") == (2023, 12)
    assert previous_month("2024-03-10") == (2024, 2)


def test_format_date_label():
    """Test the short weekday label."""
    assert format_date_label("2024-03-10") == "3/10(일)"


# Nutrient tests
def test_round_half_up():
    """Test halves round toward positive infinity."""
    assert round_half_up(2.5) == 3
    assert round_half_up(-7.5) == -7
    assert round_half_up(1.49) == 1


def test_rebalance_simple_shift():
    """Test deltas apply and fat takes the remainder."""
    result = rebalance_meal_nutrient(MealNutrient(40, 33, 27), -10, 5)
    assert result == MealNutrient(30, 38, 32)


def test_rebalance_fat_deficit_from_protein():
    """Test a fat deficit is recovered from protein first."""
    result = rebalance_meal_nutrient(MealNutrient(60, 30, 10), 0, 0)
    assert result == MealNutrient(60, 20, 20)


def test_rebalance_fat_excess_into_carb():
    """Test excess fat is pushed into carb."""
    result = rebalance_meal_nutrient(MealNutrient(20, 20, 60), 0, 0)
    assert result == MealNutrient(45, 20, 35)


def test_rebalance_always_balanced():
    """Test every delta combination yields a valid ratio."""
    for base in (MealNutrient(42, 31, 27), MealNutrient(36, 35, 29), MealNutrient(55, 25, 20)):
        for carb_delta in range(-40, 41, 5):
            for protein_delta in range(-40, 41, 5):
                result = rebalance_meal_nutrient(base, carb_delta, protein_delta)
                assert result.total() == 100
                assert is_balanced(result)
                assert 20 <= result.carb <= 60
                assert 20 <= result.protein <= 60


def test_rebalance_does_not_mutate_input():
    """Test the input ratio is left untouched."""
    base = MealNutrient(40, 33, 27)
    rebalance_meal_nutrient(base, -20, 20)
    assert base == MealNutrient(40, 33, 27)


# Keyword tests
def test_count_keywords_by_items_weighted_by_servings():
    """Test matches are weighted by servings."""
    items = [TrackItem("a", "라면", servings=2), TrackItem("b", "현미밥"),
             TrackItem("c", "식빵 · 2장")]
    assert count_keywords_by_items(items, FLOUR_KEYWORDS) == 3


def test_count_keywords_distinct():
    """Test distinct keywords are counted once each."""
    assert count_keywords("라면 라면 빵", FLOUR_KEYWORDS) == 3
