"""
Interactive Shell

Reads lines, tokenizes them and dispatches them to registered commands.

Built-in commands:
- help [command]            list commands or show one command's help
- alias <command> <alias>   add another trigger for a command
- echo <text...>            print the parsed arguments
- download <url> [dest]     fetch a file, -q suppresses the progress line
- exit / quit               leave the shell
"""

import argparse
import logging
import os
import sys
from typing import List, Optional, TextIO

from .commands import Command, CommandDispatcher, CommandParser, CommandRegistry
from .config import ShellConfig, get_shell_config
from .download import Download

logger = logging.getLogger(__name__)


class Shell:
    """Line-oriented front end for a CommandRegistry."""

    def __init__(
        self,
        registry: Optional[CommandRegistry] = None,
        config: Optional[ShellConfig] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.config = config or get_shell_config()
        self.registry = registry if registry is not None else CommandRegistry()
        self.dispatcher = CommandDispatcher(self.registry, CommandParser())
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.running = False

        self._register_builtin_commands()

    def _register_builtin_commands(self) -> None:
        """Register all built-in commands."""
        reg = self.registry

        reg.command("help", aliases=["?"])(self.cmd_help)
        reg.command("alias")(self.cmd_alias)
        reg.command("echo")(self.cmd_echo)
        reg.command("download", aliases=["dl"])(self.cmd_download)
        reg.command("exit", aliases=["quit"])(self.cmd_exit)

    # =========================================================================
    # Execution
    # =========================================================================

    def execute(self, line: str) -> str:
        """
        Run one input line.

        Returns the text to show the user.
        """
        line = line.lstrip()
        if not line:
            return ""

        result = self.dispatcher.dispatch(
            line,
            with_dash_args=self.config.dash_args,
            case_sensitive=self.config.case_sensitive,
        )
        if not result.found:
            return f"Unknown command: {result.parsed.command}. Type 'help' for commands."

        return "" if result.value is None else str(result.value)

    def run(self) -> None:
        """Read and execute lines until EOF or exit."""
        self.running = True
        while self.running:
            self.stdout.write(self.config.prompt)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                break

            try:
                output = self.execute(line.rstrip("\r\n"))
            except Exception as e:
                logger.error(f"Error executing '{line.strip()}': {e}", exc_info=True)
                output = f"Error executing command: {e}"

            if output:
                self.stdout.write(output + "\n")

    # =========================================================================
    # Built-in commands
    # =========================================================================

    def cmd_help(self, command: Command, args: List[str], dash_args=None) -> str:
        """Show available commands, or help for one command."""
        if not args:
            names = [c.trigger for c in self.registry if not c.is_alias]
            return "Available commands: " + ", ".join(names)

        cmd = self.registry.lookup(args[0], case_sensitive=self.config.case_sensitive)
        if cmd is None:
            return f"No help available for: {args[0]}"

        lines = [f"Command: {cmd.trigger}"]
        if cmd.help_text:
            lines.append(cmd.help_text.strip())
        aliases = [
            c.trigger for c in self.registry if c.is_alias and c.action is cmd.action
        ]
        if aliases:
            lines.append(f"Aliases: {', '.join(aliases)}")
        return "\n".join(lines)

    def cmd_alias(self, command: Command, args: List[str], dash_args=None) -> str:
        """Add another trigger for a command: alias <command> <alias>"""
        if len(args) < 2:
            return "Usage: alias <command> <alias>"

        target = self.registry.lookup(args[0], case_sensitive=self.config.case_sensitive)
        if target is None:
            return f"Unknown command: {args[0]}"

        self.registry.add_alias(target, args[1])
        return f"'{args[1]}' now runs '{target.trigger}'."

    def cmd_echo(self, command: Command, args: List[str], dash_args=None) -> str:
        """Print the parsed arguments."""
        return " ".join(args + (dash_args or []))

    def cmd_download(self, command: Command, args: List[str], dash_args=None) -> str:
        """Download a file: download <url> [dest] [-q]"""
        if not args:
            return "Usage: download <url> [dest] [-q]"

        url = args[0]
        dest = args[1] if len(args) > 1 else None
        if dest and self.config.download_dir and not os.path.isabs(dest):
            dest = os.path.join(self.config.download_dir, dest)
        quiet = "-q" in (dash_args or []) or "--quiet" in (dash_args or [])

        errors: List[Exception] = []
        dl = Download(
            url,
            dest,
            chunk_size=self.config.chunk_size,
            timeout=self.config.download_timeout,
        )
        dl.on_error = errors.append
        if not quiet:
            dl.on_data = lambda chunk: self._report_progress(dl)

        dl.start()

        if not quiet:
            self.stdout.write("\n")
        if errors:
            return f"Download failed: {errors[0]}"

        value, unit = dl.downloaded_in_auto_with_unit()
        target = dest or "nowhere (no destination)"
        return f"Downloaded {value:.2f} {unit} to {target}."

    def _report_progress(self, dl: Download) -> None:
        value, unit = dl.downloaded_in_auto_with_unit()
        if dl.total_bytes:
            self.stdout.write(f"\r{value:.2f} {unit} ({dl.download_percent():.1f}%)")
        else:
            self.stdout.write(f"\r{value:.2f} {unit}")
        self.stdout.flush()

    def cmd_exit(self, command: Command, args: List[str], dash_args=None) -> str:
        """Leave the shell."""
        self.running = False
        return ""


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ionode shell."""
    parser = argparse.ArgumentParser(prog="ionode", description="ionode command shell")
    parser.add_argument("-c", "--command", help="run a single command line and exit")
    parser.add_argument("--log-level", default=None, help="logging level (default from env)")
    options = parser.parse_args(argv)

    config = get_shell_config()

    # Configure logging
    logging.basicConfig(
        level=(options.log_level or config.log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    shell = Shell(config=config)
    if options.command is not None:
        try:
            output = shell.execute(options.command)
        except Exception as e:
            logger.error(f"Error executing '{options.command}': {e}", exc_info=True)
            print(f"Error executing command: {e}", file=sys.stderr)
            return 1
        if output:
            print(output)
        return 0

    shell.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
