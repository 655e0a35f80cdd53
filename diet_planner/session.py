# diet_planner/session.py
"""
Planning session.

Composes generator, adjusters, no-repeat filter, analyzer and
recommenders for one planning request. The session owns its plan cache
and memoized results; build a new session whenever the underlying store
changes.
"""
from typing import Dict, Iterable, List, Optional

from diet_planner.adjusters import (
    AdjustmentPipeline, UserContextAdjuster, MedicationAdjuster, PreferenceAdjuster,
    PreferenceParams, DinnerCarbSafetyAdjuster, DinnerCarbSafetyContext,
    IntakeCorrectionAdjuster, IntakeCorrectionContext,
)
from diet_planner.analyzers import AdherenceAnalyzer, ScoreTracker, DEFAULT_PREVIOUS_MONTH_SCORE
from diet_planner.data.diet_store import DietStore
from diet_planner.filters import NoRepeatFilter, DEFAULT_WINDOW_DAYS
from diet_planner.generators import (
    PlanCache, build_candidate_pool, build_default_log, build_substitute_candidates,
)
from diet_planner.models import (
    AdjustmentResult, DayAnalysis, DayLog, DayPlan, MealSlot, PlanCoverage, PreferenceTag,
    RollingScores, SubstituteSuggestion, UserDietContext,
)
from diet_planner.recommenders import (
    build_recent_diet_signals, merge_preferences,
    recommend_adaptive_preferences, recommend_preferences_by_external_signals,
    recommend_preferences_by_recent_logs,
)
from diet_planner.utils.dates import offset_date_key, previous_month, today_key, validate_date_key

LOW_APPETITE_EATEN_ITEMS = 2


class PlanningSession:
    """
    One planning request's view of a patient.

    Args:
        context: Patient snapshot (never mutated)
        store: Logs, medications and daily preferences
        external_items: External signal records ({"title": ...})
        today: Reference date key; defaults to the current date

    Example:
        >>> session = PlanningSession(context, store, today="2024-03-10")
        >>> result = session.plan_for_date("2024-03-10")
        >>> result.plan.date
        '2024-03-10'
    """

    def __init__(self, context: UserDietContext, store: DietStore,
                 external_items: Optional[Iterable[dict]] = None,
                 today: Optional[str] = None,
                 window_size: int = DEFAULT_WINDOW_DAYS):
        self.context = context or UserDietContext()
        self.store = store or DietStore()
        self.today = validate_date_key(today) if today is not None else today_key()
        self.window_size = window_size
        self.stage = self.context.active_stage_type

        self.cache = PlanCache()
        self.analyzer = AdherenceAnalyzer(self.stage)
        self.no_repeat = NoRepeatFilter(window_size)
        self.external_tags = recommend_preferences_by_external_signals(list(external_items or []))

        self._previous_month_score: Optional[int] = None
        self._adjusted: Dict[str, AdjustmentResult] = {}
        self._displayed: Dict[str, AdjustmentResult] = {}

    # =========================================================================
    # Scores and preferences
    # =========================================================================

    def previous_month_score(self) -> int:
        """
        Average daily score of the calendar month before today.

        Scored against baseline plans generated with the default score,
        so the value never depends on itself. Defaults to 70.
        """
        if self._previous_month_score is None:
            year, month = previous_month(self.today)
            tracker = ScoreTracker(
                self.analyzer,
                lambda date_key: self.cache.get_plan(date_key, self.stage, DEFAULT_PREVIOUS_MONTH_SCORE),
            )
            self._previous_month_score = tracker.month_average(
                self.store.logs, year, month, default=DEFAULT_PREVIOUS_MONTH_SCORE
            )
        return self._previous_month_score

    def resolve_preferences(self, date_key: str) -> List[PreferenceTag]:
        """Adaptive tags, the date's explicit choice and external tags, merged."""
        date_key = validate_date_key(date_key)
        return merge_preferences(
            recommend_adaptive_preferences(self.store.logs, date_key),
            self.store.preferences.for_date(date_key),
            self.external_tags,
        )

    def recommended_preferences(self) -> List[PreferenceTag]:
        return recommend_preferences_by_recent_logs(self.store.logs, self.today)

    def recent_diet_signals(self) -> List[str]:
        return build_recent_diet_signals(self.store.logs, self.today)

    def medication_names(self) -> List[str]:
        """Profile medications plus stored names and schedule categories."""
        names = list(self.context.medication_names()) + list(self.store.medications)
        for schedule in self.store.medication_schedules:
            names.extend([schedule.name, schedule.category])

        unique = []
        for name in names:
            name = (name or "").strip()
            if name and name not in unique:
                unique.append(name)
        return unique

    # =========================================================================
    # Plans
    # =========================================================================

    def build_pipeline(self, date_key: str, preferences: List[PreferenceTag]) -> AdjustmentPipeline:
        """Ordered adjuster stages for one date."""
        yesterday_log = self.store.logs.get(offset_date_key(date_key, -1))
        low_appetite_risk = PreferenceTag.APPETITE_BOOST in preferences or (
            yesterday_log is not None and len(yesterday_log.eaten_items()) <= LOW_APPETITE_EATEN_ITEMS
        )
        external = [tag for tag in self.external_tags if tag in preferences]

        return (
            AdjustmentPipeline()
            .add(UserContextAdjuster(), self.context)
            .add(MedicationAdjuster(), self.medication_names())
            .add(PreferenceAdjuster(), PreferenceParams(tags=preferences, external_tags=external))
            .add(DinnerCarbSafetyAdjuster(), DinnerCarbSafetyContext(
                bmi=self.context.bmi,
                low_appetite_risk=low_appetite_risk,
                weight_loss_preference=PreferenceTag.WEIGHT_LOSS in preferences,
            ))
            .add(IntakeCorrectionAdjuster(), IntakeCorrectionContext(
                yesterday_log=yesterday_log,
                stage=self.stage,
                bmi=self.context.bmi,
            ))
        )

    def adjusted_plan(self, date_key: str) -> AdjustmentResult:
        """
        Baseline plan run through every adjuster (no-repeat excluded).

        Raises:
            ValueError: If date_key is malformed
        """
        date_key = validate_date_key(date_key)
        if date_key not in self._adjusted:
            base = self.cache.get_plan(date_key, self.stage, self.previous_month_score())
            preferences = self.resolve_preferences(date_key)
            self._adjusted[date_key] = self.build_pipeline(date_key, preferences).run(base)
        result = self._adjusted[date_key]
        return AdjustmentResult(plan=result.plan.copy(), notes=list(result.notes))

    def recent_history_plans(self, date_key: str) -> List[DayPlan]:
        """Adjusted plans of the days before date_key, oldest first."""
        date_key = validate_date_key(date_key)
        return [
            self.adjusted_plan(offset_date_key(date_key, -offset)).plan
            for offset in range(self.window_size, 0, -1)
        ]

    def plan_for_date(self, date_key: str) -> AdjustmentResult:
        """
        The plan displayed for a date, with every note in stage order.

        Raises:
            ValueError: If date_key is malformed
        """
        date_key = validate_date_key(date_key)
        if date_key not in self._displayed:
            adjusted = self.adjusted_plan(date_key)
            filtered = self.no_repeat.enforce(adjusted.plan, self.recent_history_plans(date_key))
            self._displayed[date_key] = AdjustmentResult(
                plan=filtered.plan, notes=adjusted.notes + filtered.notes
            )
        result = self._displayed[date_key]
        return AdjustmentResult(plan=result.plan.copy(), notes=list(result.notes))

    # =========================================================================
    # Logs and analysis
    # =========================================================================

    def ensure_log(self, date_key: str) -> DayLog:
        """
        The date's log, seeded from its displayed plan on first view.

        The seeded log is added to the store; persisting it is the
        caller's job.
        """
        date_key = validate_date_key(date_key)
        log = self.store.logs.get(date_key)
        if log is None:
            log = build_default_log(date_key, self.plan_for_date(date_key).plan)
            self.store.logs[date_key] = log
        return log

    def coverage(self, date_key: str) -> PlanCoverage:
        date_key = validate_date_key(date_key)
        log = self.store.logs.get(date_key) or DayLog()
        return self.analyzer.coverage(self.plan_for_date(date_key).plan, log)

    def analyze(self, date_key: str) -> DayAnalysis:
        """Adherence analysis of a date's log against its displayed plan."""
        date_key = validate_date_key(date_key)
        log = self.store.logs.get(date_key) or DayLog()
        return self.analyzer.analyze_day(self.plan_for_date(date_key).plan, log)

    def rolling_scores(self, reference_date: Optional[str] = None) -> RollingScores:
        reference = validate_date_key(reference_date) if reference_date else self.today
        return self.score_tracker().rolling_scores(self.store.logs, reference)

    def score_tracker(self) -> ScoreTracker:
        """Tracker scoring each log against its displayed plan."""
        return ScoreTracker(self.analyzer, lambda date_key: self.plan_for_date(date_key).plan)

    def substitutes(self, date_key: str, food_name: str, slot: MealSlot) -> SubstituteSuggestion:
        """Swap candidates for a food in a date's plan or log."""
        date_key = validate_date_key(date_key)
        pool = build_candidate_pool([self.plan_for_date(date_key).plan], self.store.logs.values())
        return build_substitute_candidates(food_name, slot, pool)
