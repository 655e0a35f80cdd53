"""
Tests for plan adjusters and the adjustment pipeline.
"""
import pytest
from diet_planner.models import (
    MealSlot, MealNutrient, StageType, UserDietContext, AdditionalCondition,
    MedicationSchedule, PreferenceTag, MAIN_SLOTS,
)
from diet_planner.generators import generate_plan
from diet_planner.adjusters import (
    UserContextAdjuster, MedicationAdjuster, PreferenceAdjuster, PreferenceParams,
    DinnerCarbSafetyAdjuster, DinnerCarbSafetyContext, IntakeCorrectionAdjuster,
    AdjustmentPipeline, EXTERNAL_SIGNAL_NOTE, ADJUSTER_REGISTRY,
    create_adjuster, detect_cancer_profile,
)
from diet_planner.adjusters.medication_adjuster import matched_interaction_families
from diet_planner.adjusters.dinner_carb_adjuster import relax_dinner_carb, relax_carb_floor
from diet_planner.utils import is_balanced


@pytest.fixture
def chemo_plan():
    return generate_plan("2024-03-10", StageType.CHEMO, 70)


# Registry tests
def test_registry_pipeline_order():
    """Test the registry lists stages in pipeline order."""
    assert list(ADJUSTER_REGISTRY) == [
        "user_context", "medication", "preference", "dinner_carb_safety", "intake_correction",
    ]


def test_create_adjuster():
    """Test the factory builds adjusters by name."""
    assert isinstance(create_adjuster("medication"), MedicationAdjuster)
    with pytest.raises(ValueError):
        create_adjuster("nonexistent")


# UserContextAdjuster tests
def test_default_context_no_change(chemo_plan):
    """Test an empty context changes nothing."""
    result = UserContextAdjuster().adjust(chemo_plan, UserDietContext())
    assert result.notes == []
    assert result.plan == chemo_plan


def test_senior_gets_soft_menu(chemo_plan):
    """Test age 65+ switches to easy-to-chew mains."""
    result = UserContextAdjuster().adjust(chemo_plan, UserDietContext(age=70))
    assert result.plan.breakfast.main == "달걀두부찜"
    assert result.plan.breakfast.summary.endswith("달걀두부찜 + 들깨버섯수프")
    assert len(result.notes) == 1


def test_input_plan_not_mutated(chemo_plan):
    """Test adjusters work on a copy."""
    before = chemo_plan.copy()
    UserContextAdjuster().adjust(chemo_plan, UserDietContext(age=70, sex="female", cancer_type="유방암"))
    assert chemo_plan == before


def test_overweight_context(chemo_plan):
    """Test a high BMI swaps staples and snack."""
    context = UserDietContext(height_cm=160, weight_kg=70)
    result = UserContextAdjuster().adjust(chemo_plan, context)
    assert result.plan.dinner.rice_type == "현미밥"
    assert result.plan.snack.main == "무가당 요거트"


def test_breast_cancer_profile(chemo_plan):
    """Test the breast cancer profile rewrites the menu."""
    result = UserContextAdjuster().adjust(chemo_plan, UserDietContext(cancer_type="유방암 2기"))
    assert result.plan.lunch.main == "연어구이"
    assert result.plan.snack.summary == "무가당 요거트 + 베리류 + 호두 소량"
    assert any("유방암" in note for note in result.notes)


def test_unknown_cancer_type_note(chemo_plan):
    """Test unmatched cancer types add a fallback note."""
    result = UserContextAdjuster().adjust(chemo_plan, UserDietContext(cancer_type="희귀암"))
    assert any("희귀암" in note for note in result.notes)


def test_medication_timing_soup(chemo_plan):
    """Test a breakfast medication gets a low-salt breakfast soup."""
    schedule = MedicationSchedule("덱사메타손", "스테로이드", MealSlot.BREAKFAST, "m1")
    result = UserContextAdjuster().adjust(chemo_plan, UserDietContext(medication_schedules=(schedule,)))
    assert result.plan.breakfast.soup == "두부맑은국"


def test_additional_conditions(chemo_plan):
    """Test cardiovascular conditions lower soup salt."""
    context = UserDietContext(additional_conditions=(AdditionalCondition("고혈압", "I10", "심혈관"),))
    result = UserContextAdjuster().adjust(chemo_plan, context)
    assert result.plan.lunch.soup == "맑은채소국"


def test_detect_cancer_profile():
    """Test profile detection by keyword."""
    assert detect_cancer_profile("Breast cancer").profile_label == "유방암"
    assert detect_cancer_profile("") is None


# MedicationAdjuster tests
def test_steroid_low_salt(chemo_plan):
    """Test steroids switch to low-salt soups."""
    result = MedicationAdjuster().adjust(chemo_plan, ["덱사메타손"])
    assert result.plan.lunch.soup == "맑은채소국"
    assert len(result.notes) == 1


def test_warfarin_removes_spinach(chemo_plan):
    """Test anticoagulants replace spinach sides."""
    plan = chemo_plan.copy()
    plan.lunch.sides = ["시금치나물", "오이무침"]
    result = MedicationAdjuster().adjust(plan, ["Warfarin"])
    for slot in MAIN_SLOTS:
        assert not any("시금치" in side for side in result.plan.meal(slot).sides)
    assert result.plan.lunch.sides == ["버섯볶음", "오이무침"]


def test_no_medications_no_change(chemo_plan):
    """Test unknown or missing medications are a no-op."""
    assert MedicationAdjuster().adjust(chemo_plan, []).plan is chemo_plan
    assert MedicationAdjuster().adjust(chemo_plan, ["비타민"]).notes == []


def test_interaction_families_case_insensitive():
    """Test keywords match regardless of case and spacing."""
    assert matched_interaction_families(["Tamoxifen", "Dexa methasone"]) == [
        "hormone_or_targeted", "steroid",
    ]


# PreferenceAdjuster tests
def test_fish_preference(chemo_plan):
    """Test the fish tag changes lunch and dinner mains."""
    result = PreferenceAdjuster().adjust(chemo_plan, [PreferenceTag.FISH])
    assert result.plan.lunch.main == "고등어구이"
    assert result.plan.lunch.summary.split(" + ")[1] == "고등어구이"


def test_preference_order_independent(chemo_plan):
    """Test tag order does not change the outcome."""
    first = PreferenceAdjuster().adjust(chemo_plan, [PreferenceTag.FISH, PreferenceTag.PIZZA])
    second = PreferenceAdjuster().adjust(chemo_plan, [PreferenceTag.PIZZA, PreferenceTag.FISH])
    assert first.plan == second.plan
    assert first.notes == second.notes


def test_external_tags_add_note(chemo_plan):
    """Test external signals add their note."""
    params = PreferenceParams(tags=[PreferenceTag.FISH], external_tags=[PreferenceTag.FISH])
    result = PreferenceAdjuster().adjust(chemo_plan, params)
    assert result.notes[-1] == EXTERNAL_SIGNAL_NOTE


def test_empty_preferences_no_change(chemo_plan):
    """Test no tags is a no-op."""
    result = PreferenceAdjuster().adjust(chemo_plan, PreferenceParams())
    assert result.plan is chemo_plan
    assert result.notes == []


def test_weight_loss_nutrients(chemo_plan):
    """Test weight loss sets low-carb ratios that stay balanced."""
    result = PreferenceAdjuster().adjust(chemo_plan, ["weight_loss"])
    assert result.plan.dinner.nutrient == MealNutrient(24, 48, 28)
    assert all(is_balanced(meal.nutrient) for _, meal in result.plan.meals())


# DinnerCarbSafetyAdjuster tests
def test_overweight_dinner_carb(chemo_plan):
    """Test overweight patients get a smaller dinner staple."""
    result = DinnerCarbSafetyAdjuster().adjust(chemo_plan, DinnerCarbSafetyContext(bmi=27))
    assert result.plan.dinner.nutrient.carb == 32
    assert result.plan.dinner.rice_type.endswith("(소량)")
    assert len(result.notes) == 2


def test_underweight_relaxes_dinner():
    """Test underweight patients get dinner carb raised."""
    plan = generate_plan("2024-03-10", StageType.HORMONE_THERAPY, 70)
    result = DinnerCarbSafetyAdjuster().adjust(plan, DinnerCarbSafetyContext(bmi=17))
    assert result.plan.dinner.nutrient == MealNutrient(34, 36, 30)
    assert len(result.notes) == 1


def test_low_appetite_softens_cut(chemo_plan):
    """Test appetite risk limits the cut and keeps the full staple."""
    context = DinnerCarbSafetyContext(bmi=27, low_appetite_risk=True)
    result = DinnerCarbSafetyAdjuster().adjust(chemo_plan, context)
    assert "(소량)" not in result.plan.dinner.rice_type
    assert result.plan.dinner.nutrient.carb >= 34


def test_normal_bmi_no_change(chemo_plan):
    """Test no trigger leaves the plan alone."""
    result = DinnerCarbSafetyAdjuster().adjust(chemo_plan, DinnerCarbSafetyContext(bmi=21))
    assert result.plan is chemo_plan
    assert result.notes == []


def test_relax_dinner_carb_protein_floor():
    """Test protein never drops below 20 when relaxing."""
    result = relax_dinner_carb(MealNutrient(30, 35, 35), 50)
    assert result.protein == 20
    assert result.carb == 45
    assert result.total() == 100


def test_relax_carb_floor_values():
    """Test the relaxation floors."""
    assert relax_carb_floor(True, True, False) == 36
    assert relax_carb_floor(True, False, False) == 34
    assert relax_carb_floor(True, True, True) == 32
    assert relax_carb_floor(False, True, True) == 30


# Pipeline tests
def test_pipeline_stage_names():
    """Test stages are recorded in order."""
    pipeline = AdjustmentPipeline()
    pipeline.add(UserContextAdjuster(), UserDietContext()).add(MedicationAdjuster(), [])
    assert pipeline.stage_names == ["user_context", "medication"]
    assert len(pipeline) == 2


def test_pipeline_folds_and_collects_notes(chemo_plan):
    """Test each stage sees the previous plan and notes concatenate."""
    pipeline = AdjustmentPipeline()
    pipeline.add(UserContextAdjuster(), UserDietContext(age=70))
    pipeline.add(MedicationAdjuster(), ["덱사메타손"])
    pipeline.add(PreferenceAdjuster(), [PreferenceTag.FISH])
    pipeline.add(DinnerCarbSafetyAdjuster(), DinnerCarbSafetyContext())
    pipeline.add(IntakeCorrectionAdjuster(), None)
    result = pipeline.run(chemo_plan)

    assert result.plan.breakfast.main == "달걀두부찜"
    assert result.plan.lunch.main == "고등어구이"
    assert result.plan.lunch.soup == "맑은채소국"
    assert len(result.notes) == 3
    assert result.notes[0].startswith("연령 정보")


def test_pipeline_does_not_mutate_input(chemo_plan):
    """Test the baseline plan is left untouched."""
    before = chemo_plan.copy()
    pipeline = AdjustmentPipeline().add(PreferenceAdjuster(), [PreferenceTag.PIZZA])
    pipeline.run(chemo_plan)
    assert chemo_plan == before


def test_empty_pipeline_returns_copy(chemo_plan):
    """Test an empty pipeline returns an equal copy."""
    result = AdjustmentPipeline().run(chemo_plan)
    assert result.plan == chemo_plan
    assert result.plan is not chemo_plan
    assert result.notes == []
