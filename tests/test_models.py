"""
Tests for data models.
"""
import pytest
from diet_planner.models import (
    MealSlot, MealNutrient, MealSuggestion,
    TrackItem, DayLog, parse_day_log, make_track_items, MAX_SERVINGS,
    StageType, UserDietContext, MedicationSchedule,
    calculate_bmi, parse_medication_schedules, parse_cancer_stage_level,
    PreferenceTag, DailyPreferences, parse_preference_list,
)


# MealSlot tests
def test_meal_slot_parse_key_and_label():
    """Test slots parse from keys, aliases and Korean labels."""
    assert MealSlot.parse("lunch") is MealSlot.LUNCH
    assert MealSlot.parse("d") is MealSlot.DINNER
    assert MealSlot.parse("아침") is MealSlot.BREAKFAST
    assert MealSlot.parse("간식") is MealSlot.SNACK


def test_meal_slot_parse_unknown():
    """Test unknown slot text raises ValueError."""
    with pytest.raises(ValueError):
        MealSlot.parse("brunch")


# MealSuggestion tests
def test_suggestion_copy_is_independent():
    """Test copies share no lists or nutrient."""
    meal = MealSuggestion("s", "현미밥", "두부조림", "미역국", sides=["김치"],
                          nutrient=MealNutrient(40, 30, 30))
    clone = meal.copy()
    clone.sides.append("나물")
    clone.nutrient.carb = 10
    assert meal.sides == ["김치"]
    assert meal.nutrient.carb == 40


def test_planned_items_dedupes_main_meal():
    """Test main meals list staple, main, soup and sides once each."""
    meal = MealSuggestion("s", "현미밥", "두부조림", "미역국", sides=["김치", "김치", "나물"])
    assert meal.planned_items(MealSlot.LUNCH) == ["현미밥", "두부조림", "미역국", "김치", "나물"]


def test_planned_items_snack_uses_summary():
    """Test the snack is tracked as its summary."""
    meal = MealSuggestion("그릭요거트 + 블루베리", "", "그릭요거트", "보리차")
    assert meal.planned_items(MealSlot.SNACK) == ["그릭요거트 + 블루베리"]


# TrackItem tests
def test_track_item_eaten_wins():
    """Test eaten and not-eaten are never both set."""
    item = TrackItem("id", "현미밥", eaten=True, not_eaten=True)
    assert item.eaten is True
    assert item.not_eaten is False


def test_track_item_servings_clamped():
    """Test servings are rounded and clamped to 1..MAX_SERVINGS."""
    assert TrackItem("a", "x", servings=20).servings == MAX_SERVINGS
    assert TrackItem("a", "x", servings=0).servings == 1
    assert TrackItem("a", "x", servings=2.5).servings == 3


def test_track_item_mark_transitions():
    """Test check transitions keep the flags exclusive."""
    item = TrackItem("a", "x")
    item.mark_not_eaten()
    assert item.not_eaten and not item.eaten
    item.mark_eaten()
    assert item.eaten and not item.not_eaten
    item.clear_check()
    assert not item.is_checked


# DayLog tests
def test_day_log_has_all_slots():
    """Test an empty log has an empty list per slot."""
    log = DayLog()
    assert all(log.items(slot) == [] for slot in MealSlot)


def test_day_log_reliability():
    """Test reliability is the checked fraction."""
    log = DayLog()
    assert log.reliability() == 0.0
    log.meals[MealSlot.LUNCH] = [
        TrackItem("1", "a", eaten=True),
        TrackItem("2", "b", not_eaten=True),
        TrackItem("3", "c"),
        TrackItem("4", "d"),
    ]
    assert log.reliability() == 0.5


def test_day_log_meaningful_entries():
    """Test untouched seeded logs are not meaningful."""
    log = DayLog(meals={MealSlot.LUNCH: make_track_items("2024-03-10", MealSlot.LUNCH, ["현미밥"])})
    assert not log.has_meaningful_entries()
    log.memo = "입맛 없음"
    assert log.has_meaningful_entries()


def test_make_track_items_ids():
    """Test seeded ids follow date-slot-index."""
    items = make_track_items("2024-03-10", MealSlot.DINNER, ["a", "b"])
    assert [item.id for item in items] == ["2024-03-10-dinner-0", "2024-03-10-dinner-1"]
    assert not any(item.is_checked for item in items)


def test_parse_day_log_sanitizes():
    """Test stored logs are repaired on parse."""
    raw = {
        "meals": {
            "lunch": [
                {"name": "  현미밥   반 공기 ", "eaten": True, "notEaten": True, "servings": 99},
                {"id": "x", "name": ""},
                "garbage",
            ],
        },
        "memo": "  메모 ",
        "medicationTakenIds": ["a", "a", " ", 3],
    }
    log = parse_day_log(raw, "2024-03-10")
    items = log.items(MealSlot.LUNCH)
    assert len(items) == 1
    assert items[0].id == "2024-03-10-lunch-server-0"
    assert items[0].name == "현미밥 반 공기"
    assert items[0].eaten and not items[0].not_eaten
    assert items[0].servings == MAX_SERVINGS
    assert log.memo == "메모"
    assert log.medication_taken_ids == ["a"]


def test_parse_day_log_rejects_non_object():
    """Test non-object payloads yield None."""
    assert parse_day_log([1, 2], "2024-03-10") is None
    assert parse_day_log("not json", "2024-03-10") is None


def test_parse_day_log_accepts_json_string():
    """Test a JSON string payload is parsed."""
    log = parse_day_log('{"memo": "ok"}', "2024-03-10")
    assert log.memo == "ok"


def test_parse_day_log_trims_memo():
    """Test stored memos lose surrounding whitespace on parse."""
    log = DayLog(memo="  입맛 없음 \n")
    parsed = parse_day_log(log.to_dict(), "2024-03-10")
    assert parsed.memo == "입맛 없음"
    assert parse_day_log(parsed.to_dict(), "2024-03-10") == parsed


def test_day_log_round_trip():
    """Test to_dict output parses back to an equal log."""
    log = DayLog(meals={MealSlot.BREAKFAST: [TrackItem("b-0", "죽", eaten=True, servings=2)]},
                 memo="memo", medication_taken_ids=["m1"])
    assert parse_day_log(log.to_dict(), "2024-03-10") == log


# UserDietContext tests
def test_calculate_bmi():
    """Test BMI needs positive height and weight."""
    assert calculate_bmi(160, 52) == 20.3
    assert calculate_bmi(None, 52) is None
    assert calculate_bmi(160, 0) is None


def test_context_from_dict_falls_back():
    """Test invalid profile fields fall back to unknown values."""
    context = UserDietContext.from_dict({
        "age": -3, "sex": "robot", "heightCm": "tall",
        "activeStageType": "nonsense", "activeStageStatus": "paused",
    })
    assert context.age is None
    assert context.sex == "unknown"
    assert context.height_cm is None
    assert context.active_stage_type is StageType.OTHER
    assert context.active_stage_status is None


def test_context_from_non_dict():
    """Test a non-object profile yields the default context."""
    assert UserDietContext.from_dict(None) == UserDietContext()


def test_stage_type_parse_label():
    """Test stages parse from Korean labels."""
    assert StageType.parse("항암치료") is StageType.CHEMO
    assert StageType.parse("radiation") is StageType.RADIATION
    assert StageType.CHEMO.is_soft
    assert StageType.HORMONE_THERAPY.is_lower_carb


def test_medication_schedules_dedupe_and_require_fields():
    """Test schedules need name, category and a main-meal timing."""
    schedules = parse_medication_schedules([
        {"name": "덱사메타손", "category": "스테로이드", "timing": "breakfast"},
        {"name": "덱사메타손", "category": "스테로이드", "timing": "breakfast"},
        {"name": "와파린", "category": "항응고제", "timing": "snack"},
        {"name": "", "category": "x", "timing": "lunch"},
    ])
    assert len(schedules) == 1
    assert schedules[0].timing is MealSlot.BREAKFAST
    assert schedules[0].id


def test_medication_names_prefers_explicit_list():
    """Test explicit names win and categories are appended."""
    context = UserDietContext(
        medications=("타목시펜",),
        medication_schedules=(MedicationSchedule("덱사메타손", "스테로이드", MealSlot.BREAKFAST, "m1"),),
    )
    assert context.medication_names() == ["타목시펜", "스테로이드"]


def test_medication_names_from_schedules():
    """Test schedule names are used without an explicit list."""
    context = UserDietContext(
        medication_schedules=(MedicationSchedule("덱사메타손", "스테로이드", MealSlot.BREAKFAST, "m1"),),
    )
    assert context.medication_names() == ["덱사메타손", "스테로이드"]


def test_parse_cancer_stage_level():
    """Test the first digit 1-4 is the stage level."""
    assert parse_cancer_stage_level("3기") == 3
    assert parse_cancer_stage_level("IV") is None


# Preference tests
def test_preference_parse_label():
    """Test tags parse from keys and labels."""
    assert PreferenceTag.parse("fish") is PreferenceTag.FISH
    assert PreferenceTag.parse("생선") is PreferenceTag.FISH
    assert PreferenceTag.parse("unknown") is None


def test_parse_preference_list_drops_unknown():
    """Test unknown keys are dropped and order kept."""
    assert parse_preference_list(["fish", "bogus", "fish", "meat", 5]) == [
        PreferenceTag.FISH, PreferenceTag.MEAT,
    ]


def test_daily_preferences_toggle_scoped_to_date():
    """Test a toggle only affects its own date."""
    prefs = DailyPreferences()
    assert prefs.toggle("2024-03-10", PreferenceTag.FISH) is True
    assert prefs.for_date("2024-03-10") == [PreferenceTag.FISH]
    assert prefs.for_date("2024-03-11") == []
    assert prefs.toggle("2024-03-10", PreferenceTag.FISH) is False
    assert "2024-03-10" not in prefs.by_date
