"""
Diet Planner - Main Entry Point

Daily meal plans, intake logging and adherence tracking for patients in
cancer treatment.
"""
import traceback

from config import (
    STORE_FILE, PROFILE_FILE, SIGNALS_FILE, CHART_OUTPUT_FILE,
    DEFAULT_CHART_WINDOW, NO_REPEAT_DAYS, MODE, verify_data_files,
)
from diet_planner.commands import CommandContext, get_registry


def print_welcome():
    """Print welcome message."""
    print("=" * 70)
    print("  Diet Planner")
    print("  Type 'help' for commands, 'quit' to exit")
    print("=" * 70)
    print()


def repl():
    """
    Main Read-Eval-Print Loop.

    Handles user input and dispatches to registered commands.
    """
    try:
        verify_data_files()
    except FileNotFoundError as e:
        print(f"Error: {e}")
        print("\nPlease check your configuration and ensure data files exist.")
        return

    print_welcome()

    # Shared state for all commands
    ctx = CommandContext(STORE_FILE, PROFILE_FILE, SIGNALS_FILE,
                         chart_file=CHART_OUTPUT_FILE,
                         chart_window=DEFAULT_CHART_WINDOW,
                         window_size=NO_REPEAT_DAYS)
    for error in ctx.load_errors():
        print(f"⚠️  {error}")

    registry = get_registry()

    while True:
        try:
            user_input = input("> ").strip()

            if not user_input:
                continue

            parts = user_input.split(maxsplit=1)
            cmd_name = parts[0].lower()
            args = parts[1] if len(parts) > 1 else ""

            cmd_class = registry.get(cmd_name)

            if cmd_class is None:
                print(f"Unknown command: '{cmd_name}'. Type 'help' for available commands.")
                continue

            try:
                cmd = cmd_class(ctx)
                cmd.execute(args)
            except SystemExit:
                raise
            except Exception as e:
                print(f"Error executing command: {e}")
                if MODE == "DEVELOPMENT":
                    traceback.print_exc()

        except (KeyboardInterrupt, EOFError):
            # Ctrl+C or Ctrl+D
            print("\nGoodbye!")
            break
        except SystemExit:
            # Quit command
            break


def main():
    """Main entry point."""
    try:
        repl()
    except KeyboardInterrupt:
        print("\nInterrupted. Goodbye!")
    except Exception as e:
        print(f"Fatal error: {e}")
        if MODE == "DEVELOPMENT":
            traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    exit(main())
