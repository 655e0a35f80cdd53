"""
Base command classes and registry.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Type

from diet_planner.data import DietStoreManager, ProfileManager, SignalsManager
from diet_planner.filters import DEFAULT_WINDOW_DAYS
from diet_planner.models import DayLog, TrackItem
from diet_planner.session import PlanningSession
from diet_planner.utils.dates import is_date_key, offset_date_key, today_key


class CommandContext:
    """
    Shared context for all commands.

    Provides access to data managers and builds planning sessions.
    """

    def __init__(self, store_file: Path, profile_file: Path, signals_file: Path = None,
                 chart_file: Path = None, chart_window: int = 7,
                 window_size: int = DEFAULT_WINDOW_DAYS, today: Optional[str] = None):
        """
        Initialize command context.

        Args:
            store_file: Path to diet store JSON
            profile_file: Path to patient profile JSON
            signals_file: Path to external signals JSON (optional)
            chart_file: Chart image output path (optional)
            chart_window: Default moving-average window for charts
            window_size: No-repeat lookback in days
            today: Fixed reference date (defaults to the current date)
        """
        self.store_mgr = DietStoreManager(store_file)
        self.profile = ProfileManager(profile_file)
        self.signals = SignalsManager(signals_file) if signals_file else None
        self.chart_file = Path(chart_file) if chart_file else Path("diet_score_trend.jpg")
        self.chart_window = chart_window
        self.window_size = window_size
        self.fixed_today = today
        self.signal_items: List[dict] = []
        self.reload()

    def reload(self) -> None:
        """Reload store, profile and signals from disk."""
        self.store_mgr.load()
        self.profile.load()
        self.signal_items = self.signals.load() if self.signals else []

    def load_errors(self) -> List[str]:
        """Non-fatal load problems, one line per data file."""
        errors = []
        for label, manager in (("store", self.store_mgr), ("profile", self.profile),
                               ("signals", self.signals)):
            if manager is None:
                continue
            message = manager.get_error_message()
            if message:
                errors.append(f"{label}: {message}")
        return errors

    @property
    def today(self) -> str:
        return self.fixed_today or today_key()

    def session(self) -> PlanningSession:
        """
        A fresh planning session over the current store.

        Sessions memoize plans, so one is built per command.
        """
        return PlanningSession(
            self.profile.context,
            self.store_mgr.store,
            external_items=self.signal_items,
            today=self.today,
            window_size=self.window_size,
        )

    def save(self) -> None:
        self.store_mgr.save()


class Command(ABC):
    """
    Base class for all commands.

    Each command should override:
    - name: Command name(s) that trigger it
    - help_text: Short description
    - execute(): Command logic
    """

    # Command name(s) - can be string or tuple of strings
    name: str | tuple = ""

    # Help text shown in help command
    help_text: str = ""

    def __init__(self, context: CommandContext):
        """
        Initialize command with context.

        Args:
            context: Shared command context
        """
        self.ctx = context

    @abstractmethod
    def execute(self, args: str) -> None:
        """
        Execute the command.

        Args:
            args: Command arguments (everything after the command name)
        """
        pass

    def matches(self, cmd: str) -> bool:
        """
        Check if command matches this handler.

        Args:
            cmd: Command string to check

        Returns:
            True if this command handles it
        """
        if isinstance(self.name, str):
            return cmd.lower() == self.name.lower()
        else:
            return cmd.lower() in [n.lower() for n in self.name]

    def _split_date(self, args: str) -> Tuple[str, List[str]]:
        """
        Pull an optional leading date off the argument list.

        Accepts YYYY-MM-DD, "today" and "yesterday"; anything else
        leaves the date at today.

        Returns:
            (date_key, remaining tokens)
        """
        tokens = args.strip().split() if args.strip() else []
        if tokens:
            first = tokens[0].lower()
            if is_date_key(tokens[0]):
                return tokens[0], tokens[1:]
            if first == "today":
                return self.ctx.today, tokens[1:]
            if first == "yesterday":
                return offset_date_key(self.ctx.today, -1), tokens[1:]
        return self.ctx.today, tokens

    def _item_by_number(self, log: DayLog, token: str) -> Optional[TrackItem]:
        """
        Resolve a 1-based item number (as shown by 'log') or an item id.

        Prints a message and returns None when nothing matches.
        """
        items = log.all_items()
        if token.isdigit():
            index = int(token)
            if 1 <= index <= len(items):
                return items[index - 1]
            print(f"No item #{token} (log has {len(items)} item(s)).")
            return None

        item = log.find_item(token)
        if item is None:
            print(f"No item with id '{token}'.")
        return item


class CommandRegistry:
    """
    Registry for all available commands.

    Commands register themselves and can be looked up by name.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._commands: Dict[str, Type[Command]] = {}

    def register(self, command_class: Type[Command]) -> None:
        """
        Register a command class.

        Args:
            command_class: Command class to register
        """
        if isinstance(command_class.name, str):
            names = [command_class.name]
        else:
            names = list(command_class.name)

        for name in names:
            self._commands[name.lower()] = command_class

    def get(self, cmd: str) -> Optional[Type[Command]]:
        """
        Get command class for a command name.

        Args:
            cmd: Command name

        Returns:
            Command class or None if not found
        """
        return self._commands.get(cmd.lower())

    def list_commands(self) -> List[str]:
        return sorted(set(self._commands.keys()))

    def get_all_commands(self) -> List[Type[Command]]:
        """
        Get list of all unique command classes.

        Returns:
            List of command classes
        """
        seen = set()
        commands = []
        for cmd_class in self._commands.values():
            if cmd_class not in seen:
                seen.add(cmd_class)
                commands.append(cmd_class)
        return commands


# Global registry
_registry = CommandRegistry()


def register_command(command_class: Type[Command]) -> Type[Command]:
    """
    Decorator to register a command.

    Usage:
        @register_command
        class PlanCommand(Command):
            name = "plan"
            ...
    """
    _registry.register(command_class)
    return command_class


def get_registry() -> CommandRegistry:
    """Get the global command registry."""
    return _registry
