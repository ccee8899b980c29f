"""
Command Dispatcher

Resolves triggers against a CommandRegistry and runs the matching action.

An unknown trigger is not an error: the run methods return None and
dispatch() reports found=False.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from .parser import CommandParser, ParsedInput
from .registry import Command, CommandRegistry

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Outcome of dispatching one input line."""

    parsed: ParsedInput
    command: Optional[Command] = None
    value: Any = None

    @property
    def found(self) -> bool:
        return self.command is not None


class CommandDispatcher:
    """Runs commands from a registry."""

    def __init__(self, registry: CommandRegistry, parser: Optional[CommandParser] = None):
        self.registry = registry
        self.parser = parser or CommandParser()

    def run_by_trigger(
        self,
        trigger: str,
        args: Optional[List[str]] = None,
        dash_args: Optional[List[str]] = None,
    ) -> Optional[Any]:
        """Run the command registered under exactly this trigger."""
        cmd = self.registry.lookup(trigger)
        if cmd is None:
            logger.debug(f"No command for trigger: {trigger}")
            return None
        return self.run_command(cmd, args, dash_args)

    def run_command(
        self,
        command: Command,
        args: Optional[List[str]] = None,
        dash_args: Optional[List[str]] = None,
    ) -> Optional[Any]:
        """Run an already resolved command."""
        if not isinstance(command, Command):
            return None
        return command.invoke(list(args) if args is not None else [], dash_args)

    def run(
        self, command: Union[str, Command], args: Optional[List[str]] = None
    ) -> Optional[Any]:
        """Run a command given either its trigger or the record itself."""
        if isinstance(command, str):
            return self.run_by_trigger(command, args)
        return self.run_command(command, args)

    def dispatch(
        self,
        line: str,
        with_dash_args: bool = False,
        case_sensitive: bool = True,
    ) -> DispatchResult:
        """Parse a line, resolve its command word and run it."""
        parsed = self.parser.parse(line, with_dash_args)
        if not parsed.command:
            return DispatchResult(parsed=parsed)

        cmd = self.registry.lookup(parsed.command, case_sensitive=case_sensitive)
        if cmd is None:
            logger.debug(f"Unknown command: {parsed.command}")
            return DispatchResult(parsed=parsed)

        value = cmd.invoke(parsed.parameters, parsed.dash_parameters)
        return DispatchResult(parsed=parsed, command=cmd, value=value)
