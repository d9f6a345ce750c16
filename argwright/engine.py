"""
Argwright consumption engine.

One Engine instance serves exactly one parse call and owns everything that call
needs: the token pattern, the resolution table, the positional queue, the seen
sets and the extras. Specs are only read; results go into a fresh Namespace.

Walk
- while an option index remains ahead of the cursor:
  • positional run: give the longest feasible prefix of the remaining pattern
    to the queued positionals (all of them first, then fewer);
  • otherwise leftover plain tokens become extras and the next option is
    consumed (inline value, short cluster, or its own trailing run).
- a last positional run takes the trailing tokens; the rest are extras.
- required arguments and required exclusive groups are verified at the end.
"""
import logging
from collections import deque

from .arguments import ArgumentKind
from .arity import ArityKind, match_partial
from .faults import ArityMismatchError, ChoiceViolationError, ExplicitArgumentError, MissingRequiredError
from .namespace import Namespace
from .utils import SUPPRESS, quote_choices

log = logging.getLogger(__name__)


class Engine:
    """
    Single-use consumption state for one token list.

    Parameters
    - classifier: TokenClassifier built by the finalized parser.
    - arguments: every declared argument, in declaration order.
    - conflicts: ConflictRegistry of the finalized parser.
    - prefix: the parser prefix character (short clusters use it).
    """

    def __init__(self, classifier, arguments, conflicts, /, *, prefix="-"):
        self._classifier = classifier
        self._arguments = tuple(arguments)
        self._conflicts = conflicts
        self._prefix = prefix

        self._strings = []
        self._pattern = ""
        self._table = {}
        self._queue = deque(argument for argument in self._arguments if argument.kind is not ArgumentKind.OPTIONAL)
        # dicts keep insertion order, used as ordered sets
        self._seen = {}
        self._explicit = {}
        self._extras = []
        self._namespace = Namespace()
        self._ran = False

    def run(self, strings, /):
        """
        Consume strings and return (namespace, extras).
        """
        if self._ran:
            raise RuntimeError("an engine instance can only run once")
        self._ran = True
        self._strings = list(strings)
        self._prefill()
        self._pattern, self._table = self._classifier.classify(self._strings)

        start = 0
        last = max(self._table, default=-1)
        while start <= last:
            upcoming = min(index for index in self._table if index >= start)
            if start != upcoming:
                stop = self._consume_positionals(start)
                if stop > start:
                    start = stop
                    continue
            if start not in self._table:
                self._extras.extend(self._strings[start:upcoming])
                start = upcoming
            start = self._consume_optional(start)

        stop = self._consume_positionals(start)
        self._extras.extend(self._strings[stop:])
        self._verify()
        return self._namespace, self._extras

    def _prefill(self):
        for argument in self._arguments:
            if argument.dest == SUPPRESS:
                continue
            if (default := argument.default) and default != [SUPPRESS]:
                self._namespace.set_values(argument.dest, default)

    def _consume_positionals(self, start):
        counts = match_partial((argument.nargs for argument in self._queue), self._pattern[start:])
        for count in counts:
            argument = self._queue.popleft()
            self._take(argument, self._strings[start:start + count], self._pattern[start:start + count])
            start += count
        return start

    def _consume_optional(self, start):
        option, argument, explicit = self._table[start]
        if argument is None:
            self._extras.append(self._strings[start])
            return start + 1

        pending = []
        while True:
            if explicit is None:
                start += 1
                count = argument.nargs.match(self._pattern[start:], optional=True)
                if count is None:
                    raise ArityMismatchError(argument.nargs.mismatch(), argument=argument.label)
                stop = start + count
                pending.append((argument, self._strings[start:stop], self._pattern[start:stop]))
                break

            count = argument.nargs.match("A", optional=True)
            if count is None:
                raise ArityMismatchError(argument.nargs.mismatch(), argument=argument.label)
            if count == 1:
                stop = start + 1
                pending.append((argument, [explicit], "A"))
                break
            if option[1] != self._prefix and explicit:
                # "-vvv": a zero-arity short option followed by more short options
                pending.append((argument, [], ""))
                cluster = self._prefix + explicit[0]
                if (following := self._classifier.lookup(cluster)) is None:
                    raise ExplicitArgumentError(f"ignored explicit argument {explicit}", argument=argument.label)
                argument, option, explicit = following, cluster, explicit[1:] or None
                continue
            raise ExplicitArgumentError(f"ignored explicit argument {explicit}", argument=argument.label)

        for argument, strings, shape in pending:
            self._take(argument, strings, shape)
        return stop

    def _take(self, argument, strings, shape):
        values, defaulted = self._values(argument, strings, shape)
        log.debug("%s <- %r", argument.label or argument.dest, strings)

        self._seen[argument] = None
        if not defaulted:
            self._conflicts.check(argument, self._explicit)
            self._explicit[argument] = None

        if values is SUPPRESS:
            return
        if leftovers := argument.action.act(self._namespace, argument, values):
            self._extras.extend(leftovers)

    def _values(self, argument, strings, shape):
        """
        Resolve consumed strings into the values handed to the action.

        Returns (values, defaulted); defaulted is True when nothing was
        consumed and a positional fell back to its default.
        """
        kind = argument.nargs.kind
        if kind not in (ArityKind.REMAINDER, ArityKind.SUBCOMMAND):
            strings = [string for string, letter in zip(strings, shape) if letter != "-"]

        defaulted = False
        if not strings and kind is ArityKind.OPTIONAL:
            if argument.kind is ArgumentKind.OPTIONAL:
                values = argument.const
            else:
                values, defaulted = argument.default, True
        elif not strings and kind is ArityKind.ZERO_OR_MORE and argument.kind is not ArgumentKind.OPTIONAL:
            values, defaulted = argument.default, True
        elif kind is ArityKind.SUPPRESSED:
            return SUPPRESS, False
        else:
            values = list(strings)

        if values == [SUPPRESS]:
            return SUPPRESS, defaulted

        # the subcommand selector is checked by the dispatcher
        if (choices := argument.choices) and kind is not ArityKind.SUBCOMMAND:
            for value in values:
                if value not in choices:
                    raise ChoiceViolationError(
                        f"invalid choice: {value} (choose from {quote_choices(choices)})",
                        argument=argument.label
                    )
        return values, defaulted

    def _verify(self):
        missing = [argument.label for argument in self._arguments if argument.required and argument not in self._seen]
        if missing:
            raise MissingRequiredError(f"the following arguments are required: {", ".join(missing)}")
        self._conflicts.verify(self._explicit)


__all__ = (
    "Engine",
)
