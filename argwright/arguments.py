r"""
Argwright argument specifications.

Overview
- Specs
  • Positional: a bare name ("filename"); consumes tokens by position.
  • Option: one or more prefixed option strings ("-c", "--count").
  • Subcommands (see argwright.subcommands): positional selector that hands the
    tail of the token list to a child parser.
  All three share the Argument base, which carries the data the engine reads:
  kind, option strings, dest, arity, required flag, default/const value lists,
  choices and the action capability.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties (see mirror()).

Lifecycle
- Specs are mutable only through update() while being declared; actions use it
  from initialize() to force their arity/default/const.
- finalize() runs the action's validate(), settles the positional required flag
  and freezes the spec. update() afterwards raises ConfigurationError.

Metadata (sanitized on construction)
- names: option strings; each must start with the prefix character and be
  longer than the prefix alone. Duplicates are rejected.
- dest: explicit for options only. Otherwise the first option string starting
  with two prefix characters (else the first one), prefix stripped, "-" -> "_".
- nargs: Unset | int (>= 0) | "?" | "*" | "+" | "..." | Ellipsis.
- default / const: a scalar or an iterable of scalars, stored as strings
  (booleans as "true"/"false").
- choices: iterable of scalars, stored as strings, duplicates rejected.
- help / metavar: non-empty strings when provided (help may be SUPPRESS).

Quick example:
    >>> Option("-c", "--count", nargs=1).dest
    'count'
    >>> Positional("filename").label
    'filename'
"""
import enum
import functools
import operator
import re
from collections.abc import Iterable

from . import actions
from .arity import Arity, ArityKind
from .faults import ConfigurationError
from .utils import Unset, SUPPRESS, coalesce, mirror, rename, stringify


class ArgumentKind(enum.Enum):
    POSITIONAL = "positional"
    OPTIONAL = "optional"
    SUBCOMMAND = "subcommand"


class ArgumentType(type):
    """
    Metaclass that gives specs a typename, read-only fields and stable reprs.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - every name in __introspectable__ becomes a mirror() property over "_{name}".
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Concise representation with key metadata, e.g.
            option(names=['-v', '--verbose'], dest='verbose', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_values(cls, field, values, /):
    """
    Internal: normalize default/const payloads into a tuple of strings.

    - Unset -> ()
    - str / scalar -> (str,)
    - iterable (non-string) -> one string per item
    """
    if values is Unset or values is None:
        return ()
    if isinstance(values, str | bool | int | float):
        return (stringify(values),)
    if not isinstance(values, Iterable):
        raise TypeError(f"{cls.__typename__} '{field}' must be a string, a scalar or an iterable of them")
    return tuple(map(stringify, values))


def _sanitize_choices(cls, choices, /):
    if not isinstance(choices, Iterable) or isinstance(choices, str):
        raise TypeError(f"{cls.__typename__} 'choices' must be a non-string iterable")
    sanitized = []
    for choice in map(stringify, choices):
        if choice in sanitized:
            raise ConfigurationError(f"{cls.__typename__} 'choices' cannot contain duplicates")
        sanitized.append(choice)
    return tuple(sanitized)


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate the free-text fields shared by every spec.

    - help: Unset | non-empty str (SUPPRESS hides the entry from help)
    - metavar: Unset | non-empty str
    Both are stored as None when omitted.
    """
    for field in ("help", "metavar"):
        if not isinstance(value := metadata[field], str | Unset):
            raise TypeError(f"{cls.__typename__} '{field}' must be a string")
        elif isinstance(value, str) and not (value := value.strip()):
            raise ConfigurationError(f"{cls.__typename__} '{field}' cannot be empty")
        metadata[field] = coalesce(value)


def _sanitize_names(cls, names, prefix, /):
    """
    Internal: validate option strings against the prefix character.
    """
    if not names:
        raise ConfigurationError(f"{cls.__typename__} must specify at least one option string")
    seen = []
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} option strings must be strings")
        if not name.startswith(prefix) or len(name) < 2:
            raise ConfigurationError(f"invalid option string {name!r}: must start with a character {prefix!r}")
        if name in seen:
            raise ConfigurationError(f"{cls.__typename__} option strings cannot contain duplicates")
        seen.append(name)
    return tuple(seen)


def normalize_dest(names, prefix="-", /):
    """
    Derive a dest from option strings.

    The first long option (two prefix characters) wins, else the first option.
    Leading prefix characters are stripped and inner "-" become "_".
    """
    long = next((name for name in names if name.startswith(prefix * 2) and len(name) > 2), names[0])
    return long.lstrip(prefix).replace("-", "_")


class Argument(metaclass=ArgumentType):
    """
    Shared base for every spec the engine consumes.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes;
      containers come back as fresh lists.
    - kind, label, finalized and prefix are plain properties.
    """
    kind = Unset

    __introspectable__ = (
        "names",
        "dest",
        "nargs",
        "action",
        "required",
        "default",
        "const",
        "choices",
        "help",
        "metavar",
    )

    def _setup(self, metadata, /):
        _sanitize_metadata(type(self), metadata)
        try:
            metadata["nargs"] = Arity.of(metadata["nargs"])
        except ValueError as exception:
            raise ConfigurationError(str(exception), argument=self._label(metadata)) from None
        for field in ("default", "const"):
            metadata[field] = _sanitize_values(type(self), field, metadata[field])
        metadata["choices"] = _sanitize_choices(type(self), metadata["choices"])
        metadata["action"] = actions.resolve(metadata["action"])

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._finalized = False

        self._action.initialize(self)

    @staticmethod
    def _label(metadata):
        if metadata["names"]:
            return "/".join(metadata["names"])
        if metadata["dest"] and metadata["dest"] != SUPPRESS:
            return metadata["dest"]
        return "{" + ",".join(map(str, metadata["choices"])) + "}"

    @property
    def label(self):
        """
        Display name used in diagnostics: joined option strings, else dest,
        else the brace-wrapped choice set.
        """
        if self._names:
            return "/".join(self._names)
        if self._dest and self._dest != SUPPRESS:
            return self._dest
        if self._choices:
            return "{" + ",".join(self._choices) + "}"
        return ""

    @property
    def prefix(self):
        return self._prefix

    @property
    def finalized(self):
        return self._finalized

    def update(self, **fields):
        """
        Change arity/default/const/dest/required before finalize.
        """
        if self._finalized:
            raise ConfigurationError("cannot modify a finalized argument", argument=self.label)
        for field, object in fields.items():
            match field:
                case "nargs":
                    object = Arity.of(object)
                case "default" | "const":
                    object = _sanitize_values(type(self), field, object)
                case "required":
                    object = bool(object)
                case "dest":
                    if not isinstance(object, str) or not object:
                        raise TypeError(f"{type(self).__typename__} 'dest' must be a non-empty string")
                case _:
                    raise TypeError(f"{type(self).__typename__} field {field!r} cannot be updated")
            setattr(self, "_" + field, object)

    def finalize(self):
        """
        Validate once and freeze. Safe to call repeatedly.
        """
        if self._finalized:
            return self
        self._action.validate(self)
        self._finalized = True
        return self


class Positional(Argument):
    """
    Positional argument: consumed by position, identified by its dest.

    required is never declared; finalize() derives it from the arity: optional
    arity is never required, zero-or-more is required only without a default,
    everything else is required.
    """
    kind = ArgumentKind.POSITIONAL

    def __init__(
            self,
            name,
            /,
            *,
            action=Unset,
            nargs=Unset,
            default=Unset,
            const=Unset,
            choices=(),
            required=Unset,
            help=Unset,
            metavar=Unset,
            dest=Unset,
            prefix="-",
    ):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} name must be a string")
        if not name or name.startswith(prefix):
            raise ConfigurationError(f"invalid positional name {name!r}")
        if dest is not Unset:
            raise ConfigurationError("dest supplied twice for positional argument", argument=name)
        if required is not Unset:
            raise ConfigurationError("'required' is an invalid argument for positionals", argument=name)
        self._prefix = prefix
        self._setup({
            "names": (),
            "dest": name,
            "nargs": nargs,
            "action": action,
            "required": False,
            "default": default,
            "const": const,
            "choices": choices,
            "help": help,
            "metavar": metavar,
        })

    def finalize(self):
        if not self._finalized:
            kind = self._nargs.kind
            if kind is ArityKind.ZERO_OR_MORE:
                self._required = not self._default
            else:
                self._required = kind is not ArityKind.OPTIONAL
        return super().finalize()


class Option(Argument):
    """
    Optional argument introduced by one of its option strings.

    Inline values ("--count=15", "-c15") and short clusters ("-vvv") are
    resolved by the token classifier and the engine; the spec only records
    which strings it answers to.
    """
    kind = ArgumentKind.OPTIONAL

    def __init__(
            self,
            *names,
            action=Unset,
            nargs=Unset,
            default=Unset,
            const=Unset,
            choices=(),
            required=False,
            help=Unset,
            metavar=Unset,
            dest=Unset,
            prefix="-",
    ):
        names = _sanitize_names(type(self), names, prefix)
        if dest is not Unset and (not isinstance(dest, str) or not dest):
            raise TypeError(f"{type(self).__typename__} 'dest' must be a non-empty string")
        self._prefix = prefix
        self._setup({
            "names": names,
            "dest": coalesce(dest, normalize_dest(names, prefix)),
            "nargs": nargs,
            "action": action,
            "required": bool(required),
            "default": default,
            "const": const,
            "choices": choices,
            "help": help,
            "metavar": metavar,
        })


__all__ = (
    "ArgumentKind",
    "Argument",
    "Positional",
    "Option",
    "normalize_dest",
)
