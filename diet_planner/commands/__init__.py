"""
Command classes for the diet planner REPL.
"""
from .base import Command, CommandContext, CommandRegistry, register_command, get_registry

# Import all command modules to trigger registration
from . import basic_commands
from . import plan_command
from . import log_editing
from . import analyze_command
from . import search_command
from . import recommend_command
from . import stats_command
from . import chart_command

__all__ = [
    'Command',
    'CommandContext',
    'CommandRegistry',
    'register_command',
    'get_registry',
]
