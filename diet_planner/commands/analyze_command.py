"""
Analyze command - adherence of a day's log to its plan.
"""
from .base import Command, register_command
from diet_planner.reports import format_analysis


@register_command
class AnalyzeCommand(Command):
    """Score a date's log against its plan."""

    name = ("analyze", "an")
    help_text = "Analyze adherence (analyze [date])"

    def execute(self, args: str) -> None:
        date_key, _ = self._split_date(args)
        session = self.ctx.session()

        if date_key not in session.store.logs:
            print(f"\nNo log for {date_key}. Use 'log {date_key}' to start one.\n")
            return

        analysis = session.analyze(date_key)
        coverage = session.coverage(date_key)

        print(f"\nAdherence {date_key}")
        print("=" * 70)
        for line in format_analysis(analysis, coverage):
            print(line)
        print()
