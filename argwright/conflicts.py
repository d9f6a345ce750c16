"""
Argwright argument groups and the conflict registry.

- ArgumentGroup: help-only grouping; arguments added through a group are
  registered with the owning parser as usual and rendered under the group title.
- MutuallyExclusiveGroup: at most one member may be supplied per parse (exactly
  one when required). Members must not be required themselves.
- ConflictRegistry: symmetric conflict relation derived from the exclusive
  groups, built once at finalize.

Only explicit occurrences count: a member whose value was filled from its
default/const without consuming a token neither conflicts nor satisfies a
required group.
"""
from .arguments import ArgumentKind
from .arity import ArityKind
from .faults import ConfigurationError, ConflictError, RequiredGroupError
from .utils import Unset, SUPPRESS, coalesce


class ArgumentGroup:
    """
    Titled bucket of arguments for help rendering.
    """

    def __init__(self, parser, title=Unset, description=Unset):
        self._parser = parser
        self._title = coalesce(title)
        self._description = coalesce(description)
        self._arguments = []

    @property
    def title(self):
        return self._title

    @property
    def description(self):
        return self._description

    @property
    def arguments(self):
        return tuple(self._arguments)

    def add_argument(self, *names, **options):
        argument = self._parser._build(*names, **options)
        self._admit(argument)
        self._parser._register(argument)
        self._arguments.append(argument)
        return argument

    def _admit(self, argument):
        pass


class MutuallyExclusiveGroup(ArgumentGroup):
    def __init__(self, parser, required=False):
        super().__init__(parser)
        self._required = bool(required)

    @property
    def required(self):
        return self._required

    @property
    def labels(self):
        """
        Labels of the members shown in help, in declaration order.
        """
        return [argument.label for argument in self._arguments if argument.help != SUPPRESS]

    def _admit(self, argument):
        if argument.required:
            raise ConfigurationError("mutually exclusive arguments must be optional", argument=argument.label)
        if argument.kind is not ArgumentKind.POSITIONAL:
            return
        match argument.nargs.kind:
            case ArityKind.OPTIONAL:
                pass
            # finalize() makes a bare "*" positional required
            case ArityKind.ZERO_OR_MORE if argument.default:
                pass
            case _:
                raise ConfigurationError("mutually exclusive arguments must be optional", argument=argument.label)


class ConflictRegistry:
    """
    Which arguments exclude which, and which groups must be satisfied.
    """

    def __init__(self, groups=(), /):
        self._groups = tuple(groups)
        self._conflicts = {}
        for group in self._groups:
            for argument in group.arguments:
                others = self._conflicts.setdefault(argument, [])
                others.extend(other for other in group.arguments if other is not argument and other not in others)

    def conflicts(self, argument, /):
        return tuple(self._conflicts.get(argument, ()))

    def check(self, argument, seen, /):
        """
        Raise ConflictError when a previously seen argument excludes this one.
        """
        for other in seen:
            if other is not argument and other in self._conflicts.get(argument, ()):
                raise ConflictError(f"not allowed with argument {other.label}", argument=argument.label)

    def verify(self, seen, /):
        """
        Raise RequiredGroupError for the first required group with no seen member.
        """
        for group in self._groups:
            if group.required and not any(argument in seen for argument in group.arguments):
                raise RequiredGroupError(f"one of the arguments {" ".join(group.labels)} is required")


__all__ = (
    "ArgumentGroup",
    "MutuallyExclusiveGroup",
    "ConflictRegistry",
)
