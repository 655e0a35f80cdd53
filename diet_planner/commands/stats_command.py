"""
Scores command - rolling adherence averages.
"""
from .base import Command, register_command
from diet_planner.analyzers import score_to_percentile
from diet_planner.reports import format_rolling_scores


@register_command
class ScoresCommand(Command):
    """Show weekly, monthly and lifetime adherence scores."""

    name = ("scores", "stats")
    help_text = "Show rolling adherence scores (scores [date])"

    def execute(self, args: str) -> None:
        date_key, _ = self._split_date(args)
        session = self.ctx.session()
        scores = session.rolling_scores(date_key)

        print(f"\nScores as of {date_key}")
        print("=" * 70)
        for line in format_rolling_scores(scores):
            print(line)
        if scores.days_counted:
            print(f"상위 약 {100 - score_to_percentile(scores.weekly)}% 수준 (최근 7일 기준)")
        print(f"지난달 점수 (식단 생성 기준): {session.previous_month_score()}")
        print()
