"""
Argwright actions: what happens to the values an argument consumes.

The engine only knows the Action interface:
- initialize(argument): adjust arity/default/const once, at declaration time.
- validate(argument): reject invalid combinations eagerly (at finalize).
- act(namespace, argument, values): write the consumed values into the namespace.
  The return value, when not None, is an iterable of tokens the action could not
  use; the engine reports them as extras.

Built-in actions (resolvable by name)
- "store"         overwrite dest with the consumed values (default action)
- "store_const"   overwrite dest with const
- "store_true"    const "true", default "false"
- "store_false"   const "false", default "true"
- "append"        extend dest with the consumed values
- "append_const"  extend dest with const
- "count"         increment an integer counter kept as a string
- "help"          call the help printer, then the exit collaborator

Custom actions subclass Action and are passed as an instance (or class) to
add_argument(action=...).
"""
from abc import ABC, abstractmethod

from .arity import ArityKind
from .faults import ConfigurationError
from .utils import Unset, SUPPRESS


class Action(ABC):
    """
    Action capability attached to every argument.
    """

    def initialize(self, argument):
        pass

    def validate(self, argument):
        pass

    @abstractmethod
    def act(self, namespace, argument, values):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__.lower()}()"


def _check_payload(argument, verb, hint):
    arity = argument.nargs
    if arity.kind is ArityKind.EXACT and arity.count == 0:
        raise ConfigurationError(
            f"nargs for {verb} actions must be != 0; {hint}",
            argument=argument.label
        )
    if argument.const and arity.kind is not ArityKind.OPTIONAL:
        raise ConfigurationError("nargs must be '?'(optional) to supply const", argument=argument.label)


class Store(Action):
    def validate(self, argument):
        _check_payload(
            argument,
            "store",
            "if you have nothing to store, actions such as store true or store const may be more appropriate"
        )

    def act(self, namespace, argument, values):
        namespace.set_values(argument.dest, values)


class StoreConst(Action):
    def initialize(self, argument):
        argument.update(nargs=0)

    def act(self, namespace, argument, values):
        namespace.set_values(argument.dest, argument.const)


class StoreTrue(StoreConst):
    def initialize(self, argument):
        argument.update(nargs=0, const=True, default=argument.default or False)


class StoreFalse(StoreConst):
    def initialize(self, argument):
        argument.update(nargs=0, const=False, default=argument.default or True)


class Append(Action):
    def validate(self, argument):
        _check_payload(
            argument,
            "append",
            "if arg strings are not supplying the value to append, the append const action may be more appropriate"
        )

    def act(self, namespace, argument, values):
        namespace.append_values(argument.dest, values)


class AppendConst(Action):
    def initialize(self, argument):
        argument.update(nargs=0)

    def act(self, namespace, argument, values):
        namespace.append_values(argument.dest, argument.const)


class Count(Action):
    def initialize(self, argument):
        argument.update(nargs=0)

    def act(self, namespace, argument, values):
        try:
            current = int(namespace[argument.dest][0])
        except (KeyError, IndexError, ValueError):
            current = 0
        namespace.set_value(argument.dest, str(current + 1))


class Help(Action):
    """
    Print help, then exit.

    Both side effects are collaborators: the parser binds its own print_help and
    exit when none were given, tests substitute doubles.
    """

    def __init__(self, printer=Unset, exit=Unset):
        self.printer = printer
        self.exit = exit

    def bind(self, *, printer, exit):
        """
        Return a copy with unset collaborators filled in.
        """
        return type(self)(
            self.printer if self.printer is not Unset else printer,
            self.exit if self.exit is not Unset else exit,
        )

    def initialize(self, argument):
        argument.update(nargs=0, default=SUPPRESS, dest=SUPPRESS)

    def validate(self, argument):
        if not callable(self.printer) or not callable(self.exit):
            raise ConfigurationError("help action is not bound to a printer and an exit", argument=argument.label)

    def act(self, namespace, argument, values):
        self.printer()
        self.exit()


_REGISTRY = {
    "store": Store,
    "store_const": StoreConst,
    "store_true": StoreTrue,
    "store_false": StoreFalse,
    "append": Append,
    "append_const": AppendConst,
    "count": Count,
    "help": Help,
}


def resolve(action=Unset, /):
    """
    Turn an action designator (Unset, registered name, Action class or
    instance) into an Action instance.
    """
    if action is Unset:
        return Store()
    if isinstance(action, Action):
        return action
    if isinstance(action, type) and issubclass(action, Action):
        return action()
    if isinstance(action, str):
        try:
            return _REGISTRY[action]()
        except KeyError:
            raise ConfigurationError(f"unknown action {action!r}") from None
    raise TypeError("action must be a string, an Action subclass or an Action instance")


__all__ = (
    "Action",
    "Store",
    "StoreConst",
    "StoreTrue",
    "StoreFalse",
    "Append",
    "AppendConst",
    "Count",
    "Help",
    "resolve",
)
