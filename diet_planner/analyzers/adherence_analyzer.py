# diet_planner/analyzers/adherence_analyzer.py
"""
Adherence analysis: how closely a day's log followed its plan.

Planned items are matched one-to-one against eaten items in the same
slot, then keyword families over the eaten items raise concerns,
deficiencies and excesses that adjust the daily score.
"""
from typing import List

from diet_planner.generators.substitute_generator import find_substitute_group
from diet_planner.models import (
    DayAnalysis, DayLog, DayPlan, MealSlot, PlanCoverage, SlotCoverage,
    StageType, CHEMO_STAGES, SLOT_ORDER,
)
from diet_planner.utils.keywords import (
    ANALYSIS_FLOUR_KEYWORDS, CONCERN_KEYWORDS, PROTEIN_KEYWORDS, SUGAR_KEYWORDS,
    count_keywords_by_items, includes_any_keyword_by_items,
)
from diet_planner.utils.nutrients import clamp
from diet_planner.utils.search import (
    compact_food_text, food_name_similarity, normalize_food_name, strip_portion_label,
)

COVERED_THRESHOLD = 0.68
CONTAINMENT_FLOOR = 0.8
SAME_GROUP_FLOOR = 0.74

EATEN_SLOT_BONUS = 4
CONCERN_PENALTY = 10
EXCESS_PENALTY = 8
EXCESS_COUNT = 2

NO_MEALS_CHECKED = "아직 체크한 식사가 없어요. 먹은 메뉴를 체크해 보세요."
GENERIC_CONCERN = "치료 중에는 생식/술/자극적인 음식은 주의해 주세요."
CHEMO_CONCERN = "항암 치료 중에는 기름지거나 매운 음식이 속을 불편하게 할 수 있어요."
PROTEIN_DEFICIENCY = "단백질 반찬이 부족해 보여요. 두부·생선·달걀 반찬을 추가해 보세요."
FLOUR_EXCESS = "밀가루 음식이 많은 편이에요. 잡곡밥/감자로 일부 바꿔보세요."
SUGAR_EXCESS = "단 간식이 많은 편이에요. 과일·견과류 중심으로 바꿔보세요."

CHEMO_IRRITANT_KEYWORDS = ["튀김", "매운"]


def replacement_match_score(planned: str, eaten: str, slot: MealSlot) -> float:
    """
    How well an eaten item stands in for a planned one.

    Similarity, raised to 0.8 when one name contains the other and to
    0.74 when both fall in the same substitute group.

    Example:
        >>> replacement_match_score("현미밥", "잡곡밥", MealSlot.LUNCH)
        0.74
    """
    planned_name = normalize_food_name(strip_portion_label(planned))
    eaten_name = normalize_food_name(strip_portion_label(eaten))
    if not planned_name or not eaten_name:
        return 0.0

    score = food_name_similarity(planned_name, eaten_name)

    planned_compact = compact_food_text(planned_name)
    eaten_compact = compact_food_text(eaten_name)
    if planned_compact and eaten_compact and (planned_compact in eaten_compact or eaten_compact in planned_compact):
        score = max(score, CONTAINMENT_FLOOR)

    planned_group = find_substitute_group(planned_name, slot)
    eaten_group = find_substitute_group(eaten_name, slot)
    if planned_group is not None and eaten_group is not None and planned_group.id == eaten_group.id:
        score = max(score, SAME_GROUP_FLOOR)

    return clamp(score, 0.0, 1.0)


class AdherenceAnalyzer:
    """
    Scores logs against plans for one treatment stage.

    Example:
        >>> analyzer = AdherenceAnalyzer(StageType.CHEMO)
        >>> analyzer.analyze_day(plan, DayLog()).deficiencies == [NO_MEALS_CHECKED]
        True
    """

    def __init__(self, stage=StageType.OTHER):
        self.stage = StageType.parse(stage)

    def slot_coverage(self, planned: List[str], eaten: List[str], slot: MealSlot) -> SlotCoverage:
        """
        Greedy one-to-one matching of planned items to eaten items.

        Each planned item, in order, takes the best-scoring eaten item not
        yet used; it is covered when that score reaches 0.68.
        """
        used = set()
        covered = 0
        for expected in planned:
            best_index = -1
            best_score = 0.0
            for index, name in enumerate(eaten):
                if index in used:
                    continue
                score = replacement_match_score(expected, name, slot)
                if score > best_score:
                    best_index, best_score = index, score
            if best_index >= 0 and best_score >= COVERED_THRESHOLD:
                used.add(best_index)
                covered += 1
        return SlotCoverage(covered=covered, total=len(planned))

    def coverage(self, plan: DayPlan, log: DayLog) -> PlanCoverage:
        """
        Covered/total planned items, overall and per slot.

        Args:
            plan: The plan displayed for the date
            log: The date's log

        Returns:
            PlanCoverage
        """
        by_slot = {}
        for slot in SLOT_ORDER:
            planned = plan.meal(slot).planned_items(slot)
            eaten = [item.name for item in log.items(slot) if item.eaten]
            by_slot[slot] = self.slot_coverage(planned, eaten, slot)

        return PlanCoverage(
            covered=sum(entry.covered for entry in by_slot.values()),
            total=sum(entry.total for entry in by_slot.values()),
            by_slot=by_slot,
        )

    def analyze_day(self, plan: DayPlan, log: DayLog) -> DayAnalysis:
        """
        Match score, daily score and findings for one day.

        A day with nothing eaten scores 0 with a single "no meals checked"
        deficiency.
        """
        eaten = log.eaten_items()
        if not eaten:
            return DayAnalysis(match_score=0, daily_score=0, deficiencies=[NO_MEALS_CHECKED])

        match_score = self.coverage(plan, log).percent

        concerns = []
        if includes_any_keyword_by_items(eaten, CONCERN_KEYWORDS):
            concerns.append(GENERIC_CONCERN)
        if self.stage in CHEMO_STAGES and includes_any_keyword_by_items(eaten, CHEMO_IRRITANT_KEYWORDS):
            concerns.append(CHEMO_CONCERN)

        deficiencies = []
        if count_keywords_by_items(eaten, PROTEIN_KEYWORDS) == 0:
            deficiencies.append(PROTEIN_DEFICIENCY)

        excesses = []
        if count_keywords_by_items(eaten, ANALYSIS_FLOUR_KEYWORDS) >= EXCESS_COUNT:
            excesses.append(FLOUR_EXCESS)
        if count_keywords_by_items(eaten, SUGAR_KEYWORDS) >= EXCESS_COUNT:
            excesses.append(SUGAR_EXCESS)

        eaten_slots = sum(1 for slot in SLOT_ORDER if log.slot_has_eaten(slot))
        daily_score = (
            match_score
            + eaten_slots * EATEN_SLOT_BONUS
            - len(concerns) * CONCERN_PENALTY
            - len(excesses) * EXCESS_PENALTY
        )

        return DayAnalysis(
            match_score=match_score,
            daily_score=int(clamp(daily_score, 0, 100)),
            concerns=concerns,
            deficiencies=deficiencies,
            excesses=excesses,
        )
