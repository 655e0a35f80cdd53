"""
Basic commands: help, quit, reload, status.
"""
from .base import Command, register_command, get_registry


@register_command
class HelpCommand(Command):
    """Show help information."""

    name = ("help", "h", "?")
    help_text = "Show this help message"

    def execute(self, args: str) -> None:
        """Display help for all commands."""
        registry = get_registry()

        print("\nAvailable Commands:")
        print("=" * 70)

        commands = registry.get_all_commands()
        commands.sort(key=lambda c: c.name if isinstance(c.name, str) else c.name[0])

        for cmd_class in commands:
            if isinstance(cmd_class.name, str):
                names = cmd_class.name
            else:
                names = ", ".join(cmd_class.name)

            print(f"  {names:20} {cmd_class.help_text}")

        print("=" * 70)
        print("Dates: YYYY-MM-DD, 'today' or 'yesterday' (default: today)")
        print()


@register_command
class QuitCommand(Command):
    """Exit the application."""

    name = ("quit", "exit", "q")
    help_text = "Exit the application"

    def execute(self, args: str) -> None:
        print("Goodbye!")
        raise SystemExit(0)


@register_command
class ReloadCommand(Command):
    """Reload data files from disk."""

    name = "reload"
    help_text = "Reload store, profile and signals from disk"

    def execute(self, args: str) -> None:
        self.ctx.reload()
        store = self.ctx.store_mgr.store
        print(f"Reloaded ({len(store.logs)} log(s), {len(self.ctx.signal_items)} signal item(s)).")
        for error in self.ctx.load_errors():
            print(f"⚠️  {error}")


@register_command
class StatusCommand(Command):
    """Show patient and store status."""

    name = "status"
    help_text = "Show profile, stage and store summary"

    def execute(self, args: str) -> None:
        context = self.ctx.profile.context
        store = self.ctx.store_mgr.store
        session = self.ctx.session()

        print(f"\nToday: {self.ctx.today}")
        print(f"Stage: {session.stage.label}")
        bmi = context.bmi
        print(f"BMI: {bmi:.1f}" if bmi is not None else "BMI: (unknown)")
        if context.cancer_type:
            print(f"Cancer type: {context.cancer_type}")

        medications = session.medication_names()
        print(f"Medications: {', '.join(medications) if medications else '(none)'}")
        print(f"Logs: {len(store.logs)} day(s), "
              f"{sum(1 for log in store.logs.values() if log.has_meaningful_entries())} with entries")
        print(f"Previous month score: {session.previous_month_score()}")

        errors = self.ctx.load_errors()
        if errors:
            for error in errors:
                print(f"⚠️  {error}")
        else:
            print("✓ Data files loaded cleanly")
        print()
