"""
Argwright faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing
  parse failure. Codes are grouped by domain to keep copy consistent and make
  logs/searches predictable.
- ParserException: base type carrying message + options; knows how to render
  itself and how to surface (raise or print-and-exit).
- trigger(): central entry point to surface any fault.
- getdoc(): optional description lookup for a code from the host application.

Taxonomy
- ConfigurationError: invalid declaration, detected before any token is read.
- ArgumentError and its family name the offending argument by its label
  ("argument --count: expected one argument").
- UnrecognizedArgumentsError: raised by the strict entry point only; the engine
  itself reports unknown tokens as extras.

Integration
- The parser catches ParserException around a parse call and, when
  exit_on_error is set, calls trigger(fault, shell=True, ...). In non-shell
  mode, exceptions are raised.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping
    - configuration (101xx): INVALID_CONFIGURATION
    - routing (1110x): UNKNOWN_SUBCOMMAND
    - option tokens (1111x): AMBIGUOUS_OPTION, IGNORED_EXPLICIT_ARGUMENT
    - values (1112x): ARITY_MISMATCH, INVALID_CHOICE
    - constraints (1113x): CONFLICTING_ARGUMENTS, MISSING_REQUIRED, MISSING_REQUIRED_GROUP
    - leftovers (1114x): UNRECOGNIZED_ARGUMENTS

    normalize() allows host remapping to custom labels while keeping the codes stable.
    """
    # --- declaration errors (10xxx) ---
    INVALID_CONFIGURATION     = 10101

    # --- routing errors (11xxx) ---
    UNKNOWN_SUBCOMMAND        = 11102

    # --- option token errors (11xxx) ---
    AMBIGUOUS_OPTION          = 11111
    IGNORED_EXPLICIT_ARGUMENT = 11113

    # --- value errors (11xxx) ---
    ARITY_MISMATCH            = 11122
    INVALID_CHOICE            = 11124

    # --- constraint errors (11xxx) ---
    CONFLICTING_ARGUMENTS     = 11131
    MISSING_REQUIRED          = 11132
    MISSING_REQUIRED_GROUP    = 11133

    # --- leftovers (11xxx) ---
    UNRECOGNIZED_ARGUMENTS    = 11141

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParserException(Exception):
    """
    base fault: a message plus free-form rendering options.

    recognized options
    - argument: label of the offending argument (prefixes str() output).
    - prog: program name shown in the rendered header.
    - shell: surface by printing and exiting instead of raising.
    - colorful / fancy: rendering switches (fancy wraps the fault in a panel).
    - hint: optional one-line follow-up shown under the message.
    - usage: optional rich renderable printed above the fault.
    """
    __code__ = FaultCode.INVALID_CONFIGURATION
    __title__ = "parser error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return type(self).__code__

    def __str__(self):
        if argument := self.options.get("argument"):
            return f"argument {argument}: {self.message}"
        return str(self.message)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = text(getattr(main, "__prog__", self.options.get("prog", "")), "prog-name")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize(), "code"),
            " | ",
            text(type(self).__title__.title(), "error-title"),
            " ]"
        )
        parts = [text(str(self), "error-message")]
        if hint := self.options.get("hint", getdoc(self.code)):
            parts.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        if (usage := self.options.get("usage")) is not None:
            console.print(usage)
        console.print(self)
        sys.exit(2)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConfigurationError(ParserException):
    __title__ = "invalid configuration"


class ArgumentError(ParserException):
    __title__ = "invalid argument"


class AmbiguousOptionError(ArgumentError):
    __code__ = FaultCode.AMBIGUOUS_OPTION
    __title__ = "ambiguous option"


class ArityMismatchError(ArgumentError):
    __code__ = FaultCode.ARITY_MISMATCH
    __title__ = "wrong number of values"


class ExplicitArgumentError(ArityMismatchError):
    __code__ = FaultCode.IGNORED_EXPLICIT_ARGUMENT
    __title__ = "ignored explicit argument"


class ChoiceViolationError(ArgumentError):
    __code__ = FaultCode.INVALID_CHOICE
    __title__ = "invalid choice"


class UnknownSubcommandError(ChoiceViolationError):
    __code__ = FaultCode.UNKNOWN_SUBCOMMAND
    __title__ = "unknown subcommand"


class ConflictError(ArgumentError):
    __code__ = FaultCode.CONFLICTING_ARGUMENTS
    __title__ = "conflicting arguments"


class MissingRequiredError(ArgumentError):
    __code__ = FaultCode.MISSING_REQUIRED
    __title__ = "missing arguments"


class RequiredGroupError(MissingRequiredError, ConflictError):
    __code__ = FaultCode.MISSING_REQUIRED_GROUP
    __title__ = "missing exclusive argument"


class UnrecognizedArgumentsError(ParserException):
    __code__ = FaultCode.UNRECOGNIZED_ARGUMENTS
    __title__ = "unrecognized arguments"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParserException).
    - options are merged into the fault via copy.replace before triggering.
    - in shell mode, rendering happens via the rich console; otherwise, the
      fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ keyed by
    FaultCode; missing entries resolve to None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ParserException",
    "ConfigurationError",
    "ArgumentError",
    "AmbiguousOptionError",
    "UnknownSubcommandError",
    "ArityMismatchError",
    "ExplicitArgumentError",
    "ChoiceViolationError",
    "ConflictError",
    "MissingRequiredError",
    "RequiredGroupError",
    "UnrecognizedArgumentsError",
    "trigger",
    "getdoc",
)
