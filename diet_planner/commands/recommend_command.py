"""
Preference commands - recommended tags and per-date choices.
"""
from .base import Command, register_command
from diet_planner.models import PreferenceTag, SELECTABLE_PREFERENCES


def _labels(tags) -> str:
    return ", ".join(tag.label for tag in tags) if tags else "(none)"


@register_command
class RecommendCommand(Command):
    """Show preference tags suggested by recent logs and external signals."""

    name = ("recommend", "rec")
    help_text = "Show recommended preferences (recommend [date])"

    def execute(self, args: str) -> None:
        date_key, _ = self._split_date(args)
        session = self.ctx.session()

        print(f"\nPreferences for {date_key}")
        print("=" * 70)
        print(f"From recent logs:    {_labels(session.recommended_preferences())}")
        print(f"From news signals:   {_labels(session.external_tags)}")
        print(f"Selected for date:   {_labels(session.store.preferences.for_date(date_key))}")
        print(f"Applied to plan:     {_labels(session.resolve_preferences(date_key))}")

        signals = session.recent_diet_signals()
        if signals:
            print("Recent diet signals:")
            for signal in signals:
                print(f"  - {signal}")
        print()


@register_command
class PrefsCommand(Command):
    """Toggle preference tags for a date."""

    name = ("prefs", "pref")
    help_text = "Toggle preferences (prefs [date] [tag ...]; prefs [date] clear)"

    def execute(self, args: str) -> None:
        date_key, tokens = self._split_date(args)
        store = self.ctx.store_mgr.store

        if not tokens:
            self._show(date_key)
            return

        if len(tokens) == 1 and tokens[0].lower() == "clear":
            store.preferences.set_for_date(date_key, [])
            self.ctx.save()
            print(f"Cleared preferences for {date_key}.")
            return

        changed = False
        for token in tokens:
            tag = PreferenceTag.parse(token)
            if tag is None or tag not in SELECTABLE_PREFERENCES:
                print(f"Unknown preference: '{token}'")
                continue
            selected = store.preferences.toggle(date_key, tag)
            print(f"  {tag.label}: {'on' if selected else 'off'}")
            changed = True

        if changed:
            self.ctx.save()

    def _show(self, date_key: str) -> None:
        selected = self.ctx.store_mgr.store.preferences.for_date(date_key)
        print(f"\nSelected for {date_key}: {_labels(selected)}")
        print("Available:")
        for tag in SELECTABLE_PREFERENCES:
            mark = "*" if tag in selected else " "
            print(f"  {mark} {tag.value:16} {tag.label} - {tag.guide}")
        print()
