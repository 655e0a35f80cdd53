"""
Tests for portion guides, default logs and drink guides.
"""
from diet_planner.models import MealSlot, MealSuggestion, StageType, SLOT_ORDER, parse_day_log
from diet_planner.generators import (
    generate_plan, base_amount_by_food_name, meal_portion_guide,
    track_names_with_portion, build_default_log,
    get_stage_food_guides, get_snack_coffee_timing_guide,
    build_daily_tea_recommendations, build_daily_coffee_recommendations, coffee_guidance,
)
from diet_planner.generators.portion_guide import HALF_BOWL


# Amount tests
def test_grain_amount_by_slot():
    """Test dinner rice is smaller than lunch rice."""
    assert base_amount_by_food_name("현미밥", MealSlot.DINNER) == "반 공기~2/3공기(100~120g)"
    assert base_amount_by_food_name("현미밥", MealSlot.LUNCH) == "2/3공기(110~130g)"


def test_small_grain_amount():
    """Test a reduced staple gets half a bowl."""
    assert base_amount_by_food_name("현미밥(소량)", MealSlot.DINNER) == HALF_BOWL


def test_tofu_amounts():
    """Test silken tofu differs from regular tofu."""
    assert base_amount_by_food_name("두부조림", MealSlot.LUNCH) == "1/3모(100g)"
    assert base_amount_by_food_name("연두부", MealSlot.LUNCH) == "1/2모(150g)"
    assert base_amount_by_food_name("연두부덮밥", MealSlot.BREAKFAST) == "2/3공기(180~200g)"


def test_fallback_amounts():
    """Test unknown foods get slot-dependent defaults."""
    assert base_amount_by_food_name("따뜻한 물", MealSlot.SNACK) == "1컵(200ml)"
    assert base_amount_by_food_name("초코", MealSlot.SNACK) == "1회 간식 소량(40~80g)"
    assert base_amount_by_food_name("초코", MealSlot.LUNCH) == "작은 반찬 1접시(40~60g)"


# Portion guide tests
def test_grain_halved_with_fruit():
    """Test a staple shrinks when fruit shares the meal."""
    meal = MealSuggestion("s", "현미밥", "두부조림", "미역국", sides=["사과 조각"])
    guide = meal_portion_guide(meal, MealSlot.LUNCH)
    assert guide.items[0] == ("현미밥", HALF_BOWL)
    assert len(guide.notes) == 2


def test_snack_fruit_note():
    """Test two fruits in a snack add a sugar note."""
    meal = MealSuggestion("s", "", "바나나 반 개", "따뜻한 물", sides=["사과 조각"])
    guide = meal_portion_guide(meal, MealSlot.SNACK)
    assert [name for name, _ in guide.items] == ["바나나 반 개", "사과 조각", "따뜻한 물"]
    assert len(guide.notes) == 1


def test_track_names_carry_amount():
    """Test tracked names are 'name · amount'."""
    meal = MealSuggestion("s", "현미밥", "두부조림", "미역국")
    assert track_names_with_portion(meal, MealSlot.LUNCH)[0] == "현미밥 · 2/3공기(110~130g)"


# Default log tests
def test_default_log_is_unchecked():
    """Test the seeded log mirrors the plan with nothing checked."""
    plan = generate_plan("2024-03-10", "chemo", 70)
    log = build_default_log("2024-03-10", plan)
    assert not log.has_meaningful_entries()
    assert log.reliability() == 0.0
    for slot in SLOT_ORDER:
        items = log.items(slot)
        assert items
        assert items[0].id == f"2024-03-10-{slot.value}-0"
    assert log.items(MealSlot.LUNCH)[0].name == f"{plan.lunch.rice_type} · 2/3공기(110~130g)"


def test_default_log_round_trip():
    """Test a seeded log survives serialization unchanged."""
    for date_key in ("2024-03-10", "2024-07-01"):
        log = build_default_log(date_key, generate_plan(date_key, StageType.RADIATION, 55))
        assert parse_day_log(log.to_dict(), date_key) == log


# Drink and stage guide tests
def test_chemo_teas():
    """Test barley tea leads and at most three teas are given."""
    plan = generate_plan("2024-03-10", "chemo", 70)
    teas = build_daily_tea_recommendations(StageType.CHEMO, plan)
    assert [tea.name for tea in teas] == ["보리차", "카모마일차", "루이보스차"]


def test_tea_cap_for_other_stages():
    """Test barley tea is always first."""
    plan = generate_plan("2024-03-10", "surgery", 70)
    teas = build_daily_tea_recommendations("surgery", plan)
    assert teas[0].name == "보리차"
    assert 1 <= len(teas) <= 3


def test_coffee_decaf_first():
    """Test decaf leads and caffeinated coffee is withheld in soft stages."""
    plan = generate_plan("2024-03-10", "chemo", 70)
    coffees = build_daily_coffee_recommendations("chemo", plan)
    assert coffees[0].name.startswith("디카페인 아메리카노")
    assert len(coffees) <= 2
    assert all("카페인, 소량" not in coffee.name for coffee in coffees)

    other = build_daily_coffee_recommendations("surgery", plan)
    assert other[1].name == "연한 아메리카노(카페인, 소량)"


def test_coffee_guidance_by_stage():
    """Test soft stages get the stricter coffee guidance."""
    assert coffee_guidance("chemo") != coffee_guidance("surgery")


def test_stage_food_guides():
    """Test second-line chemo shares the chemo guide and copies are returned."""
    guides = get_stage_food_guides(StageType.CHEMO_2ND)
    assert guides == get_stage_food_guides(StageType.CHEMO)
    guides["help"].append("x")
    assert "x" not in get_stage_food_guides(StageType.CHEMO)["help"]
    assert get_stage_food_guides("immunotherapy") == get_stage_food_guides("other")


def test_timing_guide_keys():
    """Test the timing guide names snack and coffee."""
    assert set(get_snack_coffee_timing_guide("radiation")) == {"snack", "coffee"}
