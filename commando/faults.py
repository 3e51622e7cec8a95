"""
Commando faults (errors and control-flow signals) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain to keep logs/searches predictable.
- CommandException: base type that carries message + options and knows how to
  render itself (rich) and how to surface itself (raise, or print and exit).
- HelpRequested: the signal raised by the parser when the reserved help flag is
  met; it is not a fault, but it is surfaced through the same trigger() protocol.
- trigger(): central entry point to surface any fault with runtime options.

Two families
- Declaration faults (UnknownFunctionError, ChainError, LockedCommandError,
  ForbiddenWriteError) are programmer errors. They are raised directly by the
  builder and never trapped.
- Parse faults (MalformedTokenError, UnknownOptionError, ExpectedArgumentError,
  ValidationError, MissingRequiredError) are raised by the parse pass and routed
  by the command through trigger(fault, trap=...). With trap=True the fault is
  printed as "ERROR: <message>" on stderr and the process exits with status 1;
  otherwise it propagates to the caller.

Styling
- The default palette maps "error" to "bold white on red". A host application
  can override any palette entry through a __styles__ mapping in __main__.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the package (stable identifiers).

    grouping (by high-level domain)
    - declaration (1010x)
      • UNKNOWN_FUNCTION, BROKEN_CHAIN, LOCKED_COMMAND, FORBIDDEN_WRITE
    - tokens and switches (1111x)
      • MALFORMED_TOKEN, UNKNOWN_OPTION, EXPECTED_ARGUMENT
    - values (1112x)
      • VALIDATION_FAILED, MISSING_REQUIRED
    """
    # --- declaration errors (10xxx) ---
    UNKNOWN_FUNCTION            = 10101
    BROKEN_CHAIN                = 10102
    LOCKED_COMMAND              = 10103
    FORBIDDEN_WRITE             = 10104

    # --- token/switch errors (11xxx) ---
    MALFORMED_TOKEN             = 11111
    UNKNOWN_OPTION              = 11112
    EXPECTED_ARGUMENT           = 11117

    # --- value errors (11xxx) ---
    VALIDATION_FAILED           = 11123
    MISSING_REQUIRED            = 11125

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    code = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        styles = defaultdict(str, {
            "error": "bold white on red",
        } | getattr(__import__("__main__"), "__styles__", {}))

        style = styles["error"] if self.options.get("colorful", True) else ""
        return Text("ERROR: %s " % self.message, style=style)

    def __trigger__(self):
        if not self.options.get("trap", False):
            raise self from self.__cause__
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        replaced = type(self)(self.message, **{**self.options, **overrides})
        replaced.__cause__ = self.__cause__
        return replaced


class UnknownFunctionError(CommandException, AttributeError):
    code = FaultCode.UNKNOWN_FUNCTION


class ChainError(CommandException):
    code = FaultCode.BROKEN_CHAIN


class LockedCommandError(CommandException):
    code = FaultCode.LOCKED_COMMAND


class ForbiddenWriteError(CommandException):
    code = FaultCode.FORBIDDEN_WRITE


class MalformedTokenError(CommandException):
    code = FaultCode.MALFORMED_TOKEN

    @property
    def token(self):
        return self.options.get("token")


class UnknownOptionError(CommandException):
    code = FaultCode.UNKNOWN_OPTION

    @property
    def input(self):
        return self.options.get("input")


class ExpectedArgumentError(CommandException):
    code = FaultCode.EXPECTED_ARGUMENT

    @property
    def input(self):
        return self.options.get("input")


class ValidationError(CommandException):
    code = FaultCode.VALIDATION_FAILED

    @property
    def value(self):
        return self.options.get("value")


class MissingRequiredError(CommandException):
    code = FaultCode.MISSING_REQUIRED

    @property
    def kind(self):
        """'option' for named options, 'argument' for positional ones."""
        return self.options.get("kind")

    @property
    def name(self):
        return self.options.get("name")


class HelpRequested(Exception):
    """
    Signal raised by the parse pass when the reserved help flag is met.

    Triggering it prints the help of the command passed as the 'tool'
    option and ends the process successfully.
    """

    def __init__(self, /, **options):
        super().__init__("help requested")
        self.options = MappingProxyType(options)

    def __trigger__(self):
        self.options["tool"].print_help()
        sys.exit(0)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(**{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.

    typical options
    - tool (the owning command), trap, colorful, and any context the message
      may want to keep (token, input, index, value, name, kind).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "CommandException",
    "UnknownFunctionError",
    "ChainError",
    "LockedCommandError",
    "ForbiddenWriteError",
    "MalformedTokenError",
    "UnknownOptionError",
    "ExpectedArgumentError",
    "ValidationError",
    "MissingRequiredError",
    "HelpRequested",
    "FaultCode",
    "trigger",
)
