# diet_planner/adjusters/pipeline.py
"""
Annotated adjustment pipeline.

A left fold over ordered (adjuster, params) stages: each stage receives
the previous stage's plan, and notes are concatenated in stage order.
"""
from typing import Any, List, Tuple

from diet_planner.models import AdjustmentResult, DayPlan
from .base_adjuster import PlanAdjuster


class AdjustmentPipeline:
    """
    Ordered sequence of plan adjusters.

    Example:
        >>> pipeline = AdjustmentPipeline()
        >>> pipeline.add(UserContextAdjuster(), context)
        >>> pipeline.add(MedicationAdjuster(), context.medication_names())
        >>> result = pipeline.run(plan)
    """

    def __init__(self):
        self._stages: List[Tuple[PlanAdjuster, Any]] = []

    def add(self, adjuster: PlanAdjuster, params: Any = None) -> "AdjustmentPipeline":
        """Append a stage; returns self for chaining."""
        self._stages.append((adjuster, params))
        return self

    @property
    def stage_names(self) -> List[str]:
        return [adjuster.name for adjuster, _ in self._stages]

    def run(self, plan: DayPlan) -> AdjustmentResult:
        """
        Fold the plan through every stage.

        Args:
            plan: Baseline plan (not modified)

        Returns:
            AdjustmentResult with the final plan and all notes in order
        """
        current = plan.copy()
        notes: List[str] = []
        for adjuster, params in self._stages:
            result = adjuster.adjust(current, params)
            current = result.plan
            notes.extend(result.notes)
        return AdjustmentResult(plan=current, notes=notes)

    def __len__(self) -> int:
        return len(self._stages)
