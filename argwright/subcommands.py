"""
Argwright subcommand dispatch.

A Subcommands argument is a positional with the subcommand arity: one selector
token followed by every remaining token, whatever its shape. Its Dispatch action
looks the selector up in a name -> child parser table (aliases map to the same
child), runs the child's full parse on the tail, merges the child namespace into
the parent one (child values win) and hands the child extras back to the engine.

Children are complete, independently finalized parsers. They only know their
parent through a ParentHandle (prog + depth), never through a reference.
"""
import logging
from collections import namedtuple
from types import MappingProxyType

from .actions import Action
from .arguments import Argument, ArgumentKind
from .arity import SUBCOMMAND
from .faults import ConfigurationError, UnknownSubcommandError
from .utils import Unset, SUPPRESS, coalesce, quote_choices

log = logging.getLogger(__name__)

ParentHandle = namedtuple("ParentHandle", ("prog", "depth"))

Entry = namedtuple("Entry", ("name", "aliases", "help"))


class Dispatch(Action):
    def act(self, namespace, argument, values):
        name, *tail = values
        if argument.dest != SUPPRESS:
            namespace.set_value(argument.dest, name)
        try:
            parser = argument.parsers[name]
        except KeyError:
            raise UnknownSubcommandError(
                f"unknown parser {name} (choices: {quote_choices(argument.choices)})",
                argument=argument.label
            ) from None
        log.debug("dispatching %r to %r at depth %d", tail, parser.prog, parser.depth)
        child, extras = parser._parse(tail)
        for dest in child:
            namespace.set_values(dest, child[dest])
        return extras


class Subcommands(Argument):
    """
    Selector argument owning the child parser table.

    Parameters
    - parent: ParentHandle of the parser declaring the subcommands.
    - factory: callable building a child parser from keyword options.
    - title / description: help section metadata.
    - dest: where the chosen name is stored (SUPPRESS keeps it out).
    """
    kind = ArgumentKind.SUBCOMMAND

    def __init__(
            self,
            parent,
            factory,
            /,
            *,
            title=Unset,
            description=Unset,
            dest=SUPPRESS,
            required=False,
            help=Unset,
            metavar=Unset,
            prefix="-",
    ):
        if not isinstance(parent, ParentHandle):
            raise TypeError(f"{type(self).__typename__} parent must be a ParentHandle")
        if not callable(factory):
            raise TypeError(f"{type(self).__typename__} factory must be callable")
        self._parent = parent
        self._factory = factory
        self._title = coalesce(title)
        self._description = coalesce(description)
        self._parsers = {}
        self._entries = []
        self._prefix = prefix
        self._setup({
            "names": (),
            "dest": dest,
            "nargs": SUBCOMMAND,
            "action": Dispatch(),
            "required": bool(required),
            "default": Unset,
            "const": Unset,
            "choices": (),
            "help": help,
            "metavar": metavar,
        })

    @property
    def parent(self):
        return self._parent

    @property
    def title(self):
        return self._title

    @property
    def description(self):
        return self._description

    @property
    def parsers(self):
        return MappingProxyType(self._parsers)

    @property
    def entries(self):
        return tuple(self._entries)

    def add_parser(self, name, /, aliases=(), help=Unset, **options):
        """
        Declare a child parser reachable under name and every alias.

        The child prog is "<parent prog> <name>"; remaining options are passed
        to the child parser constructor.
        """
        if self._finalized:
            raise ConfigurationError("cannot add a parser after finalize", argument=self.label)
        if not isinstance(name, str) or not name:
            raise TypeError(f"{type(self).__typename__} parser name must be a non-empty string")
        if name in self._parsers:
            raise ConfigurationError(f"conflicting subparser: {name}", argument=self.label)
        aliases = tuple(aliases)
        for alias in aliases:
            if alias in self._parsers or alias == name or aliases.count(alias) > 1:
                raise ConfigurationError(f"conflicting subparser alias: {alias}", argument=self.label)

        parser = self._factory(prog=f"{self._parent.prog} {name}", parent=self._parent, **options)
        for key in (name, *aliases):
            self._parsers[key] = parser
        self._choices = (*self._choices, name, *aliases)
        self._entries.append(Entry(name, aliases, coalesce(help)))
        return parser


__all__ = (
    "ParentHandle",
    "Dispatch",
    "Subcommands",
)
