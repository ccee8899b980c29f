"""
Command Parser

Parses a raw input line into a command word and its arguments.

Features:
- Double quotes group words into a single argument
- Backslash escapes the next character literally
- Optional extraction of dash arguments (-v, --force) into their own list
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

DASH_PREFIX = "-"


@dataclass
class ParsedInput:
    """Represents a parsed input line."""

    command: str  # First word, outer quotes stripped
    parameters: List[str] = field(default_factory=list)
    raw: str = ""  # Normalized re-rendering, every parameter quoted
    dash_parameters: Optional[List[str]] = None  # None unless requested

    @property
    def has_dash_parameters(self) -> bool:
        """True when dash parsing was requested for this input."""
        return self.dash_parameters is not None

    @property
    def arg_string(self) -> str:
        """Get all parameters as a single string."""
        return " ".join(self.parameters)

    def get_param(self, index: int, default: str = "") -> str:
        """Get parameter at index, or default if not present."""
        if 0 <= index < len(self.parameters):
            return self.parameters[index]
        return default


def split_dash_args(
    parameters: List[str], prefix: str = DASH_PREFIX
) -> Tuple[List[str], List[str]]:
    """
    Separate arguments starting with prefix from the positional ones.

    Relative order is kept within both groups.

    Examples:
        ['-i', 'pattern', '-n', 'file'] -> (['pattern', 'file'], ['-i', '-n'])
    """
    positional = []
    dashed = []
    for param in parameters:
        if param.startswith(prefix):
            dashed.append(param)
        else:
            positional.append(param)
    return positional, dashed


class CommandParser:
    """
    Splits input lines into (command, parameters).

    The first space-delimited word is the command. The rest is tokenized
    with quote grouping and backslash escapes. Malformed input (unmatched
    quotes, a dangling backslash) never raises.
    """

    def __init__(self, prefix: str = DASH_PREFIX):
        if not prefix:
            raise ValueError("Dash prefix must be a non-empty string")
        self.prefix = prefix

    def parse(self, text: str, with_dash_args: bool = False) -> ParsedInput:
        """Parse an input line."""
        head, _, rest = text.partition(" ")
        command = self._strip_quotes(head.strip())
        parameters = self._tokenize(rest)

        raw = command + "".join(f' "{param}"' for param in parameters)

        if not with_dash_args:
            return ParsedInput(command=command, parameters=parameters, raw=raw)

        parameters, dashed = split_dash_args(parameters, self.prefix)
        return ParsedInput(
            command=command,
            parameters=parameters,
            raw=raw,
            dash_parameters=dashed,
        )

    @staticmethod
    def _strip_quotes(word: str) -> str:
        """Remove every leading and trailing double quote."""
        return word.lstrip('"').rstrip('"')

    @staticmethod
    def _tokenize(text: str) -> List[str]:
        """
        Tokenize the argument part of a line.

        Examples:
            'a b' -> ['a', 'b']
            '"my file.txt" dest' -> ['my file.txt', 'dest']
            'say \\"hi\\"' -> ['say', '"hi"']
        """
        tokens = []
        current = ""
        in_quotes = False

        i = 0
        length = len(text)
        while i < length:
            char = text[i]
            if char == "\\":
                i += 1
                if i >= length:
                    break
                current += text[i]
            elif char == '"':
                in_quotes = not in_quotes
                if current:
                    tokens.append(current)
                    current = ""
            elif char == " " and not in_quotes:
                if current:
                    tokens.append(current)
                    current = ""
            else:
                current += char
            i += 1

        if current:
            tokens.append(current)

        return tokens


_default_parser = CommandParser()


def parse_input(
    text: str, with_dash_args: bool = False, prefix: str = DASH_PREFIX
) -> ParsedInput:
    """Parse text with a default-configured parser."""
    if prefix == DASH_PREFIX:
        return _default_parser.parse(text, with_dash_args)
    return CommandParser(prefix).parse(text, with_dash_args)
