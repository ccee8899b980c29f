"""
Command System

Tokenizes input lines and dispatches them to registered commands.
Supports quoted arguments, backslash escapes, dash arguments and aliases.
"""

from .parser import CommandParser, ParsedInput, parse_input, split_dash_args
from .registry import Action, Command, CommandRegistry, get_default_registry
from .dispatcher import CommandDispatcher, DispatchResult

__all__ = [
    "CommandParser",
    "ParsedInput",
    "parse_input",
    "split_dash_args",
    "Action",
    "Command",
    "CommandRegistry",
    "get_default_registry",
    "CommandDispatcher",
    "DispatchResult",
]
