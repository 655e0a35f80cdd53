# diet_planner/reports/plan_report.py
"""
Text rendering of plans, logs and analyses for the REPL.

Every function returns a list of lines; commands print them.
"""
from typing import List, Optional

from diet_planner.generators import (
    build_daily_coffee_recommendations, build_daily_tea_recommendations,
    get_snack_coffee_timing_guide, get_stage_food_guides, meal_portion_guide,
)
from diet_planner.models import (
    AdjustmentResult, DayAnalysis, DayLog, DayPlan, MealSlot, PlanCoverage,
    RollingScores, SLOT_ORDER, StageType, SubstituteSuggestion,
)
from diet_planner.utils.dates import format_date_label

RULE = "=" * 70


def format_plan(result: AdjustmentResult, show_recipes: bool = False) -> List[str]:
    """
    Lines for a displayed plan and its notes.

    Args:
        result: Plan plus adjustment notes
        show_recipes: Include recipe steps under each meal

    Returns:
        Printable lines
    """
    plan = result.plan
    lines = [f"식단 {plan.date} {format_date_label(plan.date)}", RULE]

    for slot, meal in plan.meals():
        nutrient = meal.nutrient
        lines.append(f"[{slot.label}] {meal.summary}")
        if meal.sides:
            lines.append(f"    반찬: {', '.join(meal.sides)}")
        lines.append(f"    탄수 {nutrient.carb}% / 단백질 {nutrient.protein}% / 지방 {nutrient.fat}%")
        if meal.caution_flour:
            lines.append(f"    주의: {meal.caution_flour}")
        if show_recipes and meal.recipe_steps:
            lines.append(f"    레시피: {meal.recipe_name}")
            for index, step in enumerate(meal.recipe_steps, 1):
                lines.append(f"      {index}. {step}")

    if result.notes:
        lines.append(RULE)
        lines.append("조정 내역:")
        lines.extend(f"  - {note}" for note in result.notes)
    return lines


def format_portions(plan: DayPlan) -> List[str]:
    """Per-slot amount guide for a plan."""
    lines = []
    for slot, meal in plan.meals():
        guide = meal_portion_guide(meal, slot)
        lines.append(f"[{slot.label}]")
        for name, amount in guide.items:
            lines.append(f"    {name:16} {amount}")
        for note in guide.notes:
            lines.append(f"    * {note}")
    return lines


def format_guides(stage: StageType, plan: DayPlan) -> List[str]:
    """Stage food guide, snack and coffee timing, tea and coffee picks."""
    foods = get_stage_food_guides(stage)
    timing = get_snack_coffee_timing_guide(stage)

    lines = [f"{stage.label} 단계 가이드", RULE]
    lines.append(f"도움이 되는 음식: {', '.join(foods['help'])}")
    lines.append(f"주의할 음식: {', '.join(foods['caution'])}")
    lines.append(timing["snack"])
    lines.append(timing["coffee"])

    teas = build_daily_tea_recommendations(stage, plan)
    if teas:
        lines.append("오늘의 차:")
        lines.extend(f"  - {tea.name}: {tea.reason}" for tea in teas)

    coffees = build_daily_coffee_recommendations(stage, plan)
    if coffees:
        lines.append("커피:")
        lines.extend(f"  - {coffee.name}: {coffee.reason}" for coffee in coffees)
    return lines


def _check_mark(item) -> str:
    if item.eaten:
        return "[O]"
    if item.not_eaten:
        return "[X]"
    return "[ ]"


def format_log(date_key: str, log: DayLog) -> List[str]:
    """
    Tracked items per slot with check marks and servings.

    Items are numbered across the whole day; the log editing commands
    take those numbers.
    """
    lines = [f"기록 {date_key} {format_date_label(date_key)}", RULE]
    number = 0
    for slot in SLOT_ORDER:
        lines.append(f"[{slot.label}]")
        items = log.items(slot)
        if not items:
            lines.append("    (none)")
        for item in items:
            number += 1
            servings = f" x{item.servings}" if item.servings != 1 else ""
            manual = " (직접 입력)" if item.is_manual else ""
            lines.append(f"  {number:3}. {_check_mark(item)} {item.name}{servings}{manual}")
    if log.memo:
        lines.append(f"메모: {log.memo}")
    lines.append(f"체크율: {int(log.reliability() * 100 + 0.5)}%")
    return lines


def format_analysis(analysis: DayAnalysis, coverage: Optional[PlanCoverage] = None) -> List[str]:
    """Scores, coverage and qualitative findings."""
    lines = [
        f"식단 일치도: {analysis.match_score}%",
        f"오늘 점수: {analysis.daily_score}",
    ]
    if coverage is not None:
        per_slot = coverage.slot_percents()
        lines.append("  " + "  ".join(f"{slot.label} {per_slot[slot]}%" for slot in SLOT_ORDER))

    for title, entries in (("주의", analysis.concerns),
                           ("부족", analysis.deficiencies),
                           ("과다", analysis.excesses)):
        for entry in entries:
            lines.append(f"  [{title}] {entry}")
    return lines


def format_rolling_scores(scores: RollingScores) -> List[str]:
    if scores.days_counted == 0:
        return ["(no logged days yet)"]
    return [
        f"최근 7일 평균: {scores.weekly}",
        f"이번 달 평균: {scores.monthly}",
        f"전체 평균: {scores.total} ({scores.days_counted}일)",
    ]


def format_substitutes(food_name: str, slot: MealSlot, suggestion: SubstituteSuggestion) -> List[str]:
    lines = [f"{food_name} ({slot.label}) 대체 후보:"]
    if not suggestion.options:
        lines.append("  (no candidates)")
    lines.extend(f"  {index}. {option}" for index, option in enumerate(suggestion.options, 1))
    if suggestion.hint:
        lines.append(f"  * {suggestion.hint}")
    return lines
