"""
Search commands - fuzzy food lookup and substitutes.
"""
from .base import Command, register_command
from diet_planner.generators import build_candidate_pool
from diet_planner.models import MealSlot
from diet_planner.reports import format_substitutes
from diet_planner.utils.search import search_food_candidates


@register_command
class FindCommand(Command):
    """Fuzzy search over known food names."""

    name = ("find", "f")
    help_text = "Find foods by fuzzy name (find <text>)"

    def execute(self, args: str) -> None:
        query = args.strip()
        if not query:
            print("Usage: find <text>")
            return

        session = self.ctx.session()
        plan = session.plan_for_date(self.ctx.today).plan
        pool = build_candidate_pool([plan], session.store.logs.values())
        results = search_food_candidates(query, pool)

        if not results:
            print(f"No matches for '{query}'.")
            return

        print(f"\nMatches for '{query}':")
        for index, name in enumerate(results, 1):
            print(f"  {index}. {name}")
        print()


@register_command
class SubstituteCommand(Command):
    """Swap candidates for a planned or logged food."""

    name = ("sub", "substitute")
    help_text = "Suggest substitutes (sub [date] <slot> <food>)"

    def execute(self, args: str) -> None:
        date_key, tokens = self._split_date(args)
        if len(tokens) < 2:
            print("Usage: sub [date] <breakfast|lunch|dinner|snack> <food>")
            return

        try:
            slot = MealSlot.parse(tokens[0])
        except ValueError as e:
            print(str(e))
            return

        food_name = " ".join(tokens[1:])
        suggestion = self.ctx.session().substitutes(date_key, food_name, slot)

        print()
        for line in format_substitutes(food_name, slot, suggestion):
            print(line)
        print()
