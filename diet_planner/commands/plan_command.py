"""
Plan commands - show a day's plan and its stage guides.
"""
from .base import Command, register_command
from diet_planner.reports import format_guides, format_plan, format_portions


@register_command
class PlanCommand(Command):
    """Show the plan for a date."""

    name = ("plan", "p")
    help_text = "Show plan (plan [date] [recipes] [portions])"

    def execute(self, args: str) -> None:
        """
        Display the adjusted, no-repeat-filtered plan.

        Args:
            args: Optional date, plus flags:
                  recipes  - include recipe steps
                  portions - include per-item amounts
        """
        date_key, tokens = self._split_date(args)
        flags = {token.lower() for token in tokens}

        result = self.ctx.session().plan_for_date(date_key)

        print()
        for line in format_plan(result, show_recipes="recipes" in flags):
            print(line)
        if "portions" in flags:
            print()
            for line in format_portions(result.plan):
                print(line)
        print()


@register_command
class GuideCommand(Command):
    """Show stage food guides and drink picks for a date."""

    name = ("guide", "g")
    help_text = "Show stage guide, teas and coffee (guide [date])"

    def execute(self, args: str) -> None:
        date_key, _ = self._split_date(args)
        session = self.ctx.session()
        plan = session.plan_for_date(date_key).plan

        print()
        for line in format_guides(session.stage, plan):
            print(line)
        print()
