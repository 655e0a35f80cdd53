# diet_planner/adjusters/user_context_adjuster.py
"""
User-context adjustment.

Rewrites a plan from the patient's profile: age, body size, sex,
ethnicity, cancer type and stage, active treatment stage, medication
timing and any additional diagnosed conditions. Rules run in a fixed
order, so later rules win where they touch the same field.
"""
from diet_planner.models import AdjustmentResult, DayPlan, UserDietContext, MAIN_SLOTS
from diet_planner.models.diet_context import SOFT_STAGES, CHEMO_STAGES, parse_cancer_stage_level
from .base_adjuster import (
    PlanAdjuster, NoteList, set_meal_fields, set_side, sync_main_summaries, replace_snack,
)
from .cancer_profiles import find_cancer_profile, normalize_for_match

SENIOR_AGE = 65
UNDERWEIGHT_BMI = 18.5
OVERWEIGHT_BMI = 25
ADVANCED_STAGE_LEVEL = 3

LOW_SALT_SOUPS = ("두부맑은국", "맑은채소국", "미역국(저염)")


class UserContextAdjuster(PlanAdjuster):
    """
    Personalize a plan from a UserDietContext.

    Example:
        >>> context = UserDietContext(age=70)
        >>> result = UserContextAdjuster().adjust(plan, context)
        >>> result.plan.breakfast.main
        '달걀두부찜'
    """

    @property
    def name(self) -> str:
        return "user_context"

    def adjust(self, plan: DayPlan, params: UserDietContext) -> AdjustmentResult:
        if params is None:
            return self.unchanged(plan)

        context = params
        adjusted = plan.copy()
        notes = NoteList()

        self._apply_age(adjusted, context, notes)
        self._apply_body_size(adjusted, context, notes)
        self._apply_sex(adjusted, context, notes)

        if context.ethnicity.strip():
            notes.add(f"식습관 배경({context.ethnicity.strip()})을 반영해 익숙한 밥·반찬 중심 구성을 유지했어요.")

        self._apply_cancer_type(adjusted, context, notes)
        self._apply_cancer_stage(adjusted, context, notes)
        self._apply_active_stage(adjusted, context, notes)
        self._apply_stage_order(adjusted, context, notes)
        self._apply_medication_timing(adjusted, context, notes)
        self._apply_additional_conditions(adjusted, context, notes)

        return AdjustmentResult(plan=adjusted, notes=list(notes))

    def _apply_age(self, plan: DayPlan, context: UserDietContext, notes: NoteList) -> None:
        age = context.valid_age
        if age is None or age < SENIOR_AGE:
            return
        set_meal_fields(plan, "main", "달걀두부찜", "닭안심찜", "흰살생선찜")
        set_meal_fields(plan, "soup", "들깨버섯수프", "두부맑은국", "단호박수프")
        sync_main_summaries(plan)
        notes.add("연령 정보를 반영해 씹기 쉽고 소화가 편한 메뉴 비중을 높였어요.")

    def _apply_body_size(self, plan: DayPlan, context: UserDietContext, notes: NoteList) -> None:
        bmi = context.bmi
        if bmi is None:
            return

        if bmi < UNDERWEIGHT_BMI:
            set_meal_fields(plan, "main", "달걀두부찜", "닭가슴살구이", "연어구이")
            replace_snack(
                plan, "그릭요거트", ["두유", "바나나 반 개"], "물",
                recipe_name="체중 보완 간식 조합",
                recipe_steps=[
                    "그릭요거트를 작은 그릇에 담아 주세요.",
                    "무가당 두유를 작은 컵으로 곁들여 주세요.",
                    "바나나 반 개를 추가해 에너지를 보충해 주세요.",
                ],
            )
            sync_main_summaries(plan)
            notes.add("키/몸무게 정보를 반영해 체중 유지에 도움되는 단백질·간식 구성을 보강했어요.")
        elif bmi >= OVERWEIGHT_BMI:
            set_meal_fields(plan, "rice_type", "귀리밥", "보리밥", "현미밥")
            replace_snack(plan, "무가당 요거트", ["베리류", "견과류 소량"], "물")
            sync_main_summaries(plan)
            notes.add("키/몸무게 정보를 반영해 정제 탄수화물 비중을 줄인 곡류·간식으로 조정했어요.")

    def _apply_sex(self, plan: DayPlan, context: UserDietContext, notes: NoteList) -> None:
        if context.sex == "female":
            set_side(plan.lunch, 0, "브로콜리찜")
            set_side(plan.dinner, 0, "버섯볶음")
            notes.add("성별 정보를 반영해 채소·단백질 균형 반찬을 우선 배치했어요.")
        elif context.sex == "male":
            set_side(plan.lunch, 0, "브로콜리찜")
            set_side(plan.dinner, 1, "시금치나물")
            notes.add("성별 정보를 반영해 채소 반찬 다양성을 늘렸어요.")

    def _apply_cancer_type(self, plan: DayPlan, context: UserDietContext, notes: NoteList) -> None:
        if not normalize_for_match(context.cancer_type):
            return

        profile, _ = find_cancer_profile(context.cancer_type)
        if profile is None:
            notes.add(
                f"암 종류({context.cancer_type.strip()}) 전용 규칙이 아직 없어 "
                "기본 안전식 + 치료 단계 기준으로 추천했어요."
            )
            return

        profile.apply(plan)
        for note in profile.notes:
            notes.add(note)

    def _apply_cancer_stage(self, plan: DayPlan, context: UserDietContext, notes: NoteList) -> None:
        level = parse_cancer_stage_level(context.cancer_stage)
        if level is None or level < ADVANCED_STAGE_LEVEL:
            return
        set_meal_fields(plan, "main", "부드러운 죽", "두부덮밥", "닭안심찜")
        set_meal_fields(plan, "soup", "단호박수프", "두부맑은국", "들깨버섯수프")
        sync_main_summaries(plan)
        notes.add("암 기수 정보를 반영해 자극을 낮추고 회복 중심 메뉴 비중을 높였어요.")

    def _apply_active_stage(self, plan: DayPlan, context: UserDietContext, notes: NoteList) -> None:
        if not context.is_active_treatment or context.active_stage_type not in SOFT_STAGES:
            return
        set_meal_fields(plan, "soup", "두부맑은국", "맑은채소국", "단호박수프")
        set_side(plan.lunch, 2, "저염 나물")
        set_side(plan.dinner, 2, "저염 버섯볶음")
        sync_main_summaries(plan)
        notes.add("현재 치료 단계 상태(진행중)를 반영해 속이 편한 저자극 메뉴로 보정했어요.")

    def _apply_stage_order(self, plan: DayPlan, context: UserDietContext, notes: NoteList) -> None:
        order = context.active_stage_order
        if not order or order < 2:
            return

        chemo_label = "항암" in normalize_for_match(context.active_stage_label)
        if not chemo_label and context.active_stage_type not in CHEMO_STAGES:
            return

        replace_snack(
            plan, "무가당 요거트", ["바나나 반 개"], "따뜻한 물",
            recipe_name="치료 단계 고려 간식 조합",
            recipe_steps=[
                "무가당 요거트를 소량 준비해 주세요.",
                "바나나 반 개를 곁들여 부담을 줄여 주세요.",
                "따뜻한 물과 함께 천천히 드세요.",
            ],
            summary="무가당 요거트 + 바나나 반 개 + 따뜻한 물",
        )
        notes.add("치료 단계 순서를 반영해 간식을 더 부드럽게 조정했어요.")

    def _apply_medication_timing(self, plan: DayPlan, context: UserDietContext, notes: NoteList) -> None:
        schedules = [item for item in context.medication_schedules if item.name.strip()]
        if not schedules:
            return

        timings = {item.timing for item in schedules}
        for slot, soup in zip(MAIN_SLOTS, LOW_SALT_SOUPS):
            if slot in timings:
                plan.meal(slot).soup = soup
                plan.meal(slot).sync_summary()
        notes.add("복용 시기 정보를 반영해 약 복용 전후 부담이 적은 식사 구성으로 맞췄어요.")

    def _apply_additional_conditions(self, plan: DayPlan, context: UserDietContext, notes: NoteList) -> None:
        categories = " ".join(
            f"{condition.category} {condition.name}" for condition in context.additional_conditions
        )
        if not categories.strip():
            return

        if any(keyword in categories for keyword in ("심혈관", "신장", "고혈압")):
            set_meal_fields(plan, "soup", *LOW_SALT_SOUPS)
            sync_main_summaries(plan)
            notes.add("동반 질환(심혈관·신장)을 반영해 국물 간을 저염 기준으로 맞췄어요.")

        if any(keyword in categories for keyword in ("대사", "당뇨")):
            replace_snack(plan, "무가당 요거트", ["베리류", "견과류 소량"], "물")
            notes.add("동반 질환(대사)을 반영해 간식을 당 부담이 낮은 조합으로 바꿨어요.")

        if any(keyword in categories for keyword in ("간/담도", "간 질환", "지방간", "간염")):
            notes.add("동반 질환(간·담도)을 고려해 기름을 적게 쓰는 찜·구이 조리를 권장해요.")
