"""
ionode

Command-line input tokenizer with a trigger-based command registry, plus a
progress-tracked file download helper.
"""

from .commands import (
    Command,
    CommandDispatcher,
    CommandParser,
    CommandRegistry,
    DispatchResult,
    ParsedInput,
    get_default_registry,
    parse_input,
    split_dash_args,
)
from .config import ShellConfig, get_shell_config
from .download import Download, DownloadProgress
from .exceptions import DownloadError, InvalidTriggerError, IonodeError

__version__ = "0.1.0"

__all__ = [
    "Command",
    "CommandDispatcher",
    "CommandParser",
    "CommandRegistry",
    "DispatchResult",
    "ParsedInput",
    "get_default_registry",
    "parse_input",
    "split_dash_args",
    "ShellConfig",
    "get_shell_config",
    "Download",
    "DownloadProgress",
    "DownloadError",
    "InvalidTriggerError",
    "IonodeError",
]
