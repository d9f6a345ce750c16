"""
Argwright parser: declaration surface and parse entry points.

Overview
- ArgumentParser collects argument specs, groups and at most one subcommand
  selector while it is being declared.
- finalize() freezes everything once: action validation, positional required
  flags, the option-string index (TokenClassifier) and the ConflictRegistry.
  Any later declaration raises ConfigurationError. Parsing finalizes implicitly.
- parse_known_args() runs one Engine over one complete token list and returns
  (namespace, extras); parse_args() additionally refuses extras.

Failure channel
- Every parse failure is an ArgumentError raised from the engine.
- With exit_on_error=False it propagates unchanged to the caller.
- With exit_on_error=True (default) the parser prints its usage and the rendered
  fault on stderr and exits with status 2 (see faults.trigger).
- ConfigurationError is a declaration bug and always propagates.

Quick example:
    >>> parser = ArgumentParser("prog", exit_on_error=False)
    >>> _ = parser.add_argument("filename")
    >>> _ = parser.add_argument("--count", nargs=1)
    >>> _ = parser.add_argument("--verbose", action="store_true")
    >>> parser.parse_args(["file_name", "--count", "15", "--verbose"])
    Namespace(verbose='true', filename='file_name', count='15')
"""
import functools
import logging
import os
import shlex
import sys

from rich.console import Console

from . import actions
from . import faults
from .arguments import Option, Positional
from .conflicts import ArgumentGroup, ConflictRegistry, MutuallyExclusiveGroup
from .engine import Engine
from .faults import ArgumentError, ConfigurationError, UnrecognizedArgumentsError, trigger
from .formatting import format_help, format_usage
from .subcommands import ParentHandle, Subcommands
from .tokens import TokenClassifier
from .utils import Unset, SUPPRESS, coalesce

log = logging.getLogger(__name__)


class ArgumentParser:
    """
    Declarative command-line parser.

    Parameters
    - prog: program name (defaults to the basename of sys.argv[0]).
    - usage / description / epilog: help text; usage replaces the generated line.
    - prefix: the single prefix character of option strings ("-").
    - add_help: register "-h/--help" bound to print_help() and exit().
    - allow_abbrev: accept unambiguous prefixes of option strings.
    - exit_on_error: print-and-exit on parse failures instead of raising.
    - colorful / fancy: rendering switches for help and faults.
    - console: rich Console used by print_help()/print_usage() (stdout).
    - parent: ParentHandle, set for parsers created through add_parser().
    """

    def __init__(
            self,
            prog=Unset,
            *,
            usage=Unset,
            description=Unset,
            epilog=Unset,
            prefix="-",
            add_help=True,
            allow_abbrev=True,
            exit_on_error=True,
            colorful=True,
            fancy=False,
            console=Unset,
            parent=Unset,
    ):
        if not isinstance(prog, str | Unset):
            raise TypeError("parser 'prog' must be a string")
        for name, object in (("usage", usage), ("description", description), ("epilog", epilog)):
            if not isinstance(object, str | Unset):
                raise TypeError(f"parser {name!r} must be a string")
        if not isinstance(prefix, str) or len(prefix) != 1 or prefix.isalnum():
            raise ValueError("parser 'prefix' must be a single non-alphanumeric character")
        if not isinstance(parent, ParentHandle | Unset):
            raise TypeError("parser 'parent' must be a ParentHandle")

        self._prog = coalesce(prog, os.path.basename(sys.argv[0]) or "prog")
        self._usage = coalesce(usage)
        self._description = coalesce(description)
        self._epilog = coalesce(epilog)
        self._prefix = prefix
        self._allow_abbrev = bool(allow_abbrev)
        self._exit_on_error = bool(exit_on_error)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._console = coalesce(console, Console())
        self._parent = coalesce(parent)
        self._depth = 0 if parent is Unset else parent.depth + 1

        self._arguments = []
        self._options = {}
        self._groups = []
        self._exclusive = []
        self._subcommands = None

        self._finalized = False
        self._classifier = None
        self._conflicts = None

        if add_help:
            self.add_argument(prefix + "h", prefix * 2 + "help", action="help", help="show this help message and exit")

    @property
    def prog(self):
        return self._prog

    @property
    def usage(self):
        return self._usage

    @property
    def description(self):
        return self._description

    @property
    def epilog(self):
        return self._epilog

    @property
    def prefix(self):
        return self._prefix

    @property
    def allow_abbrev(self):
        return self._allow_abbrev

    @property
    def exit_on_error(self):
        return self._exit_on_error

    @property
    def colorful(self):
        return self._colorful

    @property
    def fancy(self):
        return self._fancy

    @property
    def parent(self):
        return self._parent

    @property
    def depth(self):
        return self._depth

    @property
    def arguments(self):
        return tuple(self._arguments)

    @property
    def groups(self):
        return tuple(self._groups)

    @property
    def subcommands(self):
        return self._subcommands

    @property
    def finalized(self):
        return self._finalized

    def __repr__(self):
        return f"argument-parser(prog={self._prog!r}, arguments={len(self._arguments)}, depth={self._depth})"

    def __rich_repr__(self):
        yield "prog", self._prog
        yield "arguments", self.arguments
        yield "depth", self._depth

    def _check_open(self):
        if self._finalized:
            raise ConfigurationError(f"cannot declare arguments on {self._prog!r} after finalize")

    def _build(self, *names, action=Unset, **options):
        """
        Construct (without registering) the spec described by names/options.
        """
        self._check_open()
        action = actions.resolve(action)
        if isinstance(action, actions.Help):
            action = action.bind(printer=self.print_help, exit=self.exit)

        if not names:
            raise ConfigurationError("add_argument() requires a name or option strings")
        if not all(isinstance(name, str) for name in names):
            raise TypeError("invalid name or flags: name or flags must be string type")
        if all(name.startswith(self._prefix) for name in names):
            return Option(*names, action=action, prefix=self._prefix, **options)
        if len(names) == 1:
            return Positional(names[0], action=action, prefix=self._prefix, **options)
        offender = next(name for name in names if not name.startswith(self._prefix))
        raise ConfigurationError(f"invalid option string {offender!r}: must start with a character {self._prefix!r}")

    def _register(self, argument):
        self._check_open()
        if conflicting := [name for name in argument.names if name in self._options]:
            raise ConfigurationError(f"conflicting option string(s): {", ".join(conflicting)}", argument=argument.label)
        for name in argument.names:
            self._options[name] = argument
        self._arguments.append(argument)

    def add_argument(self, *names, **options):
        """
        Declare a positional (single bare name) or an optional (prefixed option
        strings) and return its spec.

        Keyword options: action, nargs, const, default, choices, required, help,
        metavar, dest.
        """
        argument = self._build(*names, **options)
        self._register(argument)
        return argument

    def add_argument_group(self, title=Unset, description=Unset):
        self._check_open()
        group = ArgumentGroup(self, title, description)
        self._groups.append(group)
        return group

    def add_mutually_exclusive_group(self, required=False):
        self._check_open()
        group = MutuallyExclusiveGroup(self, required)
        self._groups.append(group)
        self._exclusive.append(group)
        return group

    def add_subparsers(self, *, title=Unset, description=Unset, dest=SUPPRESS, help=Unset, metavar=Unset, required=False):
        """
        Declare the subcommand selector; children are added with add_parser().

        Children inherit this parser's prefix, abbreviation, error and rendering
        settings unless add_parser() overrides them.
        """
        self._check_open()
        if self._subcommands is not None:
            raise ConfigurationError(f"{self._prog} cannot have multiple subparser arguments")
        factory = functools.partial(
            type(self),
            prefix=self._prefix,
            allow_abbrev=self._allow_abbrev,
            exit_on_error=self._exit_on_error,
            colorful=self._colorful,
            fancy=self._fancy,
            console=self._console,
        )
        subcommands = Subcommands(
            ParentHandle(self._prog, self._depth),
            factory,
            title=title,
            description=description,
            dest=dest,
            required=required,
            help=help,
            metavar=metavar,
            prefix=self._prefix,
        )
        self._register(subcommands)
        self._subcommands = subcommands
        return subcommands

    def finalize(self):
        """
        Freeze the declaration. Safe to call more than once.
        """
        if self._finalized:
            return self
        for argument in self._arguments:
            argument.finalize()
        self._classifier = TokenClassifier(self._options, prefix=self._prefix, abbrev=self._allow_abbrev)
        self._conflicts = ConflictRegistry(self._exclusive)
        self._finalized = True
        log.debug("finalized %r (%d arguments, depth %d)", self._prog, len(self._arguments), self._depth)
        return self

    def _parse(self, strings):
        """
        Raw parse: no exit handling, used directly by subcommand dispatch.
        """
        self.finalize()
        return Engine(self._classifier, self._arguments, self._conflicts, prefix=self._prefix).run(strings)

    @staticmethod
    def _tokens(args):
        if args is Unset or args is None:
            return sys.argv[1:]
        if isinstance(args, str):
            return shlex.split(args)
        strings = list(args)
        if not all(isinstance(string, str) for string in strings):
            raise TypeError("parse arguments must be strings")
        return strings

    def parse_known_args(self, args=Unset):
        """
        Parse args (sys.argv[1:] by default, a string is shell-split) and return
        (namespace, extras).
        """
        strings = self._tokens(args)
        self.finalize()
        try:
            return self._parse(strings)
        except ArgumentError as fault:
            if not self._exit_on_error:
                raise
            self.error(fault)

    def parse_args(self, args=Unset):
        """
        Like parse_known_args(), but extras are an error.
        """
        namespace, extras = self.parse_known_args(args)
        if extras:
            fault = UnrecognizedArgumentsError(f"unrecognized arguments: {" ".join(extras)}")
            if not self._exit_on_error:
                raise fault
            self.error(fault)
        return namespace

    def error(self, fault):
        """
        Print usage and the rendered fault on stderr, then exit with status 2.
        """
        trigger(
            fault,
            shell=True,
            prog=self._prog,
            usage=self.format_usage(),
            colorful=self._colorful,
            fancy=self._fancy,
        )

    def format_usage(self):
        return format_usage(self)

    def format_help(self):
        return format_help(self)

    def print_usage(self):
        self._console.print(self.format_usage())

    def print_help(self):
        self._console.print(self.format_help())

    def exit(self, status=0, message=Unset):
        if message:
            faults.console.print(message)
        sys.exit(status)


__all__ = (
    "ArgumentParser",
)
