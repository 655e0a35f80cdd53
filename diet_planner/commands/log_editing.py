"""
Log editing commands: log, eat, skip, uncheck, add, serve, memo.

Every edit goes to the date's log (seeded from the plan on first view)
and is saved immediately.
"""
from abc import abstractmethod
from typing import List

from .base import Command, register_command
from diet_planner.models import MealSlot, TrackItem
from diet_planner.reports import format_log


class LogEditCommand(Command):
    """Shared helpers for commands that change a date's log."""

    def _load_log(self, date_key: str):
        session = self.ctx.session()
        return session.ensure_log(date_key)

    def _save(self, date_key: str, log) -> None:
        self.ctx.store_mgr.save_log(date_key, log)


@register_command
class LogCommand(LogEditCommand):
    """Show a date's intake log."""

    name = ("log", "l")
    help_text = "Show intake log (log [date])"

    def execute(self, args: str) -> None:
        date_key, _ = self._split_date(args)
        is_new = date_key not in self.ctx.store_mgr.store.logs
        log = self._load_log(date_key)
        if is_new:
            self._save(date_key, log)

        print()
        for line in format_log(date_key, log):
            print(line)
        print()


class CheckCommand(LogEditCommand):
    """Apply one check action to numbered items."""

    action_label = ""

    @abstractmethod
    def apply(self, item: TrackItem) -> None:
        """Change one item's check state."""
        pass

    def execute(self, args: str) -> None:
        date_key, tokens = self._split_date(args)
        if not tokens:
            print(f"Usage: {self.name[0]} [date] <item#> [item# ...]")
            return

        log = self._load_log(date_key)
        changed: List[str] = []
        for token in tokens:
            item = self._item_by_number(log, token)
            if item is None:
                continue
            self.apply(item)
            changed.append(item.name)

        if changed:
            self._save(date_key, log)
            for name in changed:
                print(f"  {self.action_label}: {name}")


@register_command
class EatCommand(CheckCommand):
    """Mark items as eaten."""

    name = ("eat", "e")
    help_text = "Mark items eaten (eat [date] <item#> ...)"
    action_label = "eaten"

    def apply(self, item: TrackItem) -> None:
        item.mark_eaten()


@register_command
class SkipCommand(CheckCommand):
    """Mark items as not eaten."""

    name = ("skip", "x")
    help_text = "Mark items not eaten (skip [date] <item#> ...)"
    action_label = "not eaten"

    def apply(self, item: TrackItem) -> None:
        item.mark_not_eaten()


@register_command
class UncheckCommand(CheckCommand):
    """Clear the check on items."""

    name = ("uncheck",)
    help_text = "Clear item checks (uncheck [date] <item#> ...)"
    action_label = "cleared"

    def apply(self, item: TrackItem) -> None:
        item.clear_check()


@register_command
class AddCommand(LogEditCommand):
    """Add a manually typed food to a slot, checked as eaten."""

    name = ("add", "a")
    help_text = "Add eaten food (add [date] <slot> <food name>)"

    def execute(self, args: str) -> None:
        date_key, tokens = self._split_date(args)
        if len(tokens) < 2:
            print("Usage: add [date] <breakfast|lunch|dinner|snack> <food name>")
            return

        try:
            slot = MealSlot.parse(tokens[0])
        except ValueError as e:
            print(str(e))
            return

        food_name = " ".join(tokens[1:]).strip()
        log = self._load_log(date_key)
        existing = {item.id for item in log.all_items()}
        index = len(log.items(slot))
        item_id = f"{date_key}-{slot.value}-manual-{index}"
        while item_id in existing:
            index += 1
            item_id = f"{date_key}-{slot.value}-manual-{index}"

        log.items(slot).append(TrackItem(id=item_id, name=food_name, eaten=True, is_manual=True))
        self._save(date_key, log)
        print(f"  added to {slot.label}: {food_name}")


@register_command
class ServeCommand(LogEditCommand):
    """Set an item's serving multiplier."""

    name = ("serve",)
    help_text = "Set servings (serve [date] <item#> <1-8>)"

    def execute(self, args: str) -> None:
        date_key, tokens = self._split_date(args)
        if len(tokens) != 2:
            print("Usage: serve [date] <item#> <servings>")
            return

        try:
            servings = float(tokens[1])
        except ValueError:
            print(f"Invalid servings: '{tokens[1]}'")
            return

        log = self._load_log(date_key)
        item = self._item_by_number(log, tokens[0])
        if item is None:
            return
        item.set_servings(servings)
        self._save(date_key, log)
        print(f"  {item.name}: x{item.servings}")


@register_command
class MemoCommand(LogEditCommand):
    """Set or clear a date's memo."""

    name = ("memo",)
    help_text = "Set memo (memo [date] <text>; memo [date] clear)"

    def execute(self, args: str) -> None:
        date_key, tokens = self._split_date(args)
        log = self._load_log(date_key)

        if not tokens:
            print(f"Memo: {log.memo or '(empty)'}")
            return

        text = " ".join(tokens).strip()
        log.memo = "" if text.lower() == "clear" else text
        self._save(date_key, log)
        print("Memo cleared." if not log.memo else "Memo saved.")
