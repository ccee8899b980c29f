"""
Exception Types

Errors raised by ionode. The tokenizer and dispatcher never raise on bad
input; these cover registration misuse and download failures.
"""

from typing import Optional


class IonodeError(Exception):
    """Base class for all ionode errors."""


class InvalidTriggerError(IonodeError, ValueError):
    """A command was registered with an empty or non-string trigger."""

    def __init__(self, trigger: object):
        super().__init__(f"Invalid command trigger: {trigger!r}")
        self.trigger = trigger


class DownloadError(IonodeError):
    """Error while setting up or running a download."""

    def __init__(
        self,
        message: str,
        url: str = "",
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.url = url
        self.original_error = original_error
