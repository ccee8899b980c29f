"""
Command Registry

Table of commands keyed by trigger word.
Commands can be registered with decorators or manually.

Two views of the same commands are kept:
- an ordered list of every registered Command (used for case-insensitive scans)
- a trigger -> Command mapping (exact match)

Registering a trigger twice overwrites the mapping entry while both records
stay in the ordered list. The older record is then only reachable by a
case-insensitive scan.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from ..exceptions import InvalidTriggerError

logger = logging.getLogger(__name__)

# (command, args) or (command, args, dash_args)
Action = Callable[..., Any]


@dataclass(eq=False)
class Command:
    """A trigger word bound to an action."""

    trigger: str
    action: Action
    is_alias: bool = False
    help_text: str = ""
    accepts_dash_args: bool = field(init=False, repr=False)

    def __post_init__(self):
        self.accepts_dash_args = _takes_third_argument(self.action)

    def invoke(self, args: List[str], dash_args: Optional[List[str]] = None) -> Any:
        """
        Call the action.

        dash_args is passed as a third argument only when given and the
        action accepts one; (command, args) actions never see it.
        """
        if dash_args is None or not self.accepts_dash_args:
            return self.action(self, args)
        return self.action(self, args, dash_args)


def _takes_third_argument(action: Action) -> bool:
    try:
        params = inspect.signature(action).parameters.values()
    except (TypeError, ValueError):
        return False

    positional = 0
    for param in params:
        if param.kind == param.VAR_POSITIONAL:
            return True
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            positional += 1
    return positional >= 3


class CommandRegistry:
    """
    Registry of commands.

    Not thread-safe: register/add_alias update the list and the mapping
    separately, so a multi-threaded host must serialize access.
    """

    def __init__(self):
        self._commands: List[Command] = []
        self._by_trigger: Dict[str, Command] = {}

    def register(self, trigger: str, action: Action, help_text: str = "") -> Command:
        """Create a command and add it to the registry."""
        return self._add(Command(trigger=trigger, action=action, help_text=help_text))

    def add_alias(self, command: Command, alias: str) -> Command:
        """
        Register another trigger for an existing command's action.

        The alias is an independent record that shares the action.
        """
        return self._add(
            Command(
                trigger=alias,
                action=command.action,
                is_alias=True,
                help_text=command.help_text,
            )
        )

    def _add(self, cmd: Command) -> Command:
        if not isinstance(cmd.trigger, str) or not cmd.trigger:
            raise InvalidTriggerError(cmd.trigger)

        if cmd.trigger in self._by_trigger:
            logger.debug(f"Command '{cmd.trigger}' shadows an earlier registration")

        self._commands.append(cmd)
        self._by_trigger[cmd.trigger] = cmd

        kind = "alias" if cmd.is_alias else "command"
        logger.debug(f"Registered {kind}: {cmd.trigger}")
        return cmd

    def lookup(self, trigger: str, case_sensitive: bool = True) -> Optional[Command]:
        """
        Get a command by trigger.

        Exact matches win. With case_sensitive=False, falls back to the first
        command in registration order whose trigger matches ignoring case.
        """
        cmd = self._by_trigger.get(trigger)
        if cmd is not None:
            return cmd

        if case_sensitive:
            return None

        wanted = trigger.lower()
        for cmd in self._commands:
            if cmd.trigger.lower() == wanted:
                return cmd
        return None

    @property
    def commands(self) -> Tuple[Command, ...]:
        """All registered commands in registration order."""
        return tuple(self._commands)

    def triggers(self) -> List[str]:
        """Triggers reachable by exact lookup, in registration order."""
        return list(self._by_trigger)

    def command(
        self,
        trigger: str,
        aliases: Optional[List[str]] = None,
        help_text: str = "",
    ):
        """
        Decorator to register a function as a command.

        Usage:
            @registry.command("echo", aliases=["say"])
            def cmd_echo(command, args):
                return " ".join(args)
        """

        def decorator(func: Action) -> Action:
            cmd = self.register(trigger, func, help_text or func.__doc__ or "")
            for alias in aliases or []:
                self.add_alias(cmd, alias)
            return func

        return decorator

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, trigger: object) -> bool:
        return trigger in self._by_trigger

    def __iter__(self) -> Iterator[Command]:
        return iter(list(self._commands))


# Global registry instance
_registry: Optional[CommandRegistry] = None


def get_default_registry() -> CommandRegistry:
    """Get the shared process-wide registry."""
    global _registry
    if _registry is None:
        _registry = CommandRegistry()
    return _registry
