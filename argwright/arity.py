"""
Argwright arity patterns and the explicit token-shape matcher.

Overview
- Arity: tagged value describing how many tokens an argument consumes.
  Kinds: none (single value), exact(n>=0), optional, zero-or-more,
  one-or-more, remainder, subcommand (selector + tail), suppressed.
- Tokens are abstracted into a pattern string over a three-letter alphabet:
  • "A": plain argument token
  • "O": option-shaped token
  • "-": the "--" separator
- Each arity compiles to a short sequence of atoms (character class + bounds).
  Matching walks the atoms greedily and backtracks only as far as needed; every
  failed (atom, position) pair is remembered so the walk stays polynomial.

Matching modes
- free scan (positional runs): separators may appear around/between values.
- option run (optional=True): separators are removed from the alphabet, a
  single option cannot swallow a "--" boundary.

Declarative forms accepted by Arity.of()
- Unset -> none, int -> exact(n), "?" -> optional, "*" -> zero-or-more,
  "+" -> one-or-more, "..." / Ellipsis -> remainder.
"""
import enum
import functools
from collections import namedtuple

from .utils import Unset


class ArityKind(enum.Enum):
    NONE = "none"
    EXACT = "exact"
    OPTIONAL = "?"
    ZERO_OR_MORE = "*"
    ONE_OR_MORE = "+"
    REMAINDER = "..."
    SUBCOMMAND = "A..."
    SUPPRESSED = "==SUPPRESS=="


_Atom = namedtuple("_Atom", ("chars", "low", "high"))

_SEPARATORS = frozenset("-")
_ARGUMENTS = frozenset("A")
_ANYTHING = frozenset("-AO")


class Arity:
    """
    Immutable, interned arity value.

    Instances are cached per (kind, count) so identity comparison works and
    patterns are compiled once per process.
    """
    __slots__ = ("_kind", "_count")

    @functools.cache
    def __new__(cls, kind, count=0):
        if not isinstance(kind, ArityKind):
            raise TypeError("arity kind must be an ArityKind")
        if kind is not ArityKind.EXACT and count:
            raise ValueError(f"arity {kind.value!r} does not take a count")
        if kind is ArityKind.EXACT and (not isinstance(count, int) or isinstance(count, bool) or count < 0):
            raise ValueError("exact arity must be a non-negative integer")
        self = super().__new__(cls)
        self._kind = kind
        self._count = count
        return self

    @classmethod
    def of(cls, nargs, /):
        """
        Coerce a declarative nargs value into an Arity.
        """
        if nargs is Unset:
            return cls(ArityKind.NONE)
        if nargs is Ellipsis:
            return cls(ArityKind.REMAINDER)
        match nargs:
            case Arity():
                return nargs
            case bool():
                raise TypeError("nargs must be an integer or one of '?', '*', '+', '...'")
            case int():
                return cls(ArityKind.EXACT, nargs)
            case "?":
                return cls(ArityKind.OPTIONAL)
            case "*":
                return cls(ArityKind.ZERO_OR_MORE)
            case "+":
                return cls(ArityKind.ONE_OR_MORE)
            case "...":
                return cls(ArityKind.REMAINDER)
            case str():
                raise ValueError(f"invalid nargs value: {nargs!r}")
            case _:
                raise TypeError("nargs must be an integer or one of '?', '*', '+', '...'")

    @property
    def kind(self):
        return self._kind

    @property
    def count(self):
        return self._count

    @property
    def takes_values(self):
        """
        False for arities that can never consume a token (exact(0), suppressed).
        """
        return not (
            self._kind is ArityKind.SUPPRESSED or
            (self._kind is ArityKind.EXACT and self._count == 0)
        )

    def atoms(self, *, optional=False):
        """
        Compile into the atom sequence used by the matcher.
        """
        return _compile(self, optional)

    def match(self, text, /, *, optional=False):
        """
        Longest feasible token count anchored at the start of text, or None.
        """
        counts = _walk((self.atoms(optional=optional),), text)
        return None if counts is None else counts[0]

    def mismatch(self):
        """
        Human message used when this arity fails to match.
        """
        match self._kind:
            case ArityKind.NONE:
                return "expected one argument"
            case ArityKind.OPTIONAL:
                return "expected at most one argument"
            case ArityKind.ONE_OR_MORE | ArityKind.SUBCOMMAND:
                return "expected at least one argument"
            case _:
                return f"expected {self._count} argument(s)"

    def __repr__(self):
        if self._kind is ArityKind.EXACT:
            return f"arity({self._count})"
        return f"arity({self._kind.value!r})"

    def __reduce__(self):
        return type(self), (self._kind, self._count)


@functools.cache
def _compile(arity, optional):
    # separator runs vanish in option mode, and the separator leaves the value classes
    separators = () if optional else (_Atom(_SEPARATORS, 0, None),)
    values = _ARGUMENTS if optional else _ARGUMENTS | _SEPARATORS
    anything = _ANYTHING - _SEPARATORS if optional else _ANYTHING
    single = _Atom(_ARGUMENTS, 1, 1)

    match arity.kind:
        case ArityKind.NONE:
            return (*separators, single, *separators)
        case ArityKind.OPTIONAL:
            return (*separators, _Atom(_ARGUMENTS, 0, 1), *separators)
        case ArityKind.ZERO_OR_MORE:
            return (*separators, _Atom(values, 0, None))
        case ArityKind.ONE_OR_MORE:
            return (*separators, single, _Atom(values, 0, None))
        case ArityKind.REMAINDER:
            return (_Atom(anything, 0, None),)
        case ArityKind.SUBCOMMAND:
            return (*separators, single, _Atom(anything, 0, None))
        case ArityKind.SUPPRESSED:
            return (*separators, *separators)
        case ArityKind.EXACT:
            atoms = list(separators)
            for _ in range(arity.count):
                atoms += (single, *separators)
            return tuple(atoms) if arity.count else (*separators, *separators)


def _walk(groups, text):
    """
    Match the concatenation of several atom groups against a prefix of text.

    Returns one token count per group, or None when no assignment exists.
    Each atom prefers its longest run and gives tokens back one at a time.
    """
    flat = [atom for atoms in groups for atom in atoms]
    starts = [0]
    for atoms in groups:
        starts.append(starts[-1] + len(atoms))

    positions = [0] * (len(flat) + 1)
    failed = set()

    def step(index, position):
        positions[index] = position
        if index == len(flat):
            return True
        if (index, position) in failed:
            return False
        chars, low, high = flat[index]
        limit = len(text) - position if high is None else min(high, len(text) - position)
        run = 0
        while run < limit and text[position + run] in chars:
            run += 1
        for taken in range(run, low - 1, -1):
            if step(index + 1, position + taken):
                return True
        failed.add((index, position))
        return False

    if not step(0, 0):
        return None
    return [positions[starts[i + 1]] - positions[starts[i]] for i in range(len(groups))]


def match_partial(arities, text, /):
    """
    Assign a prefix of text to as many leading arities as possible.

    The full list is tried first, then progressively shorter prefixes of it
    (dropping the last arity each time). The first window that matches wins
    and its per-arity counts are returned; an empty list means nothing fit.
    """
    arities = list(arities)
    for size in range(len(arities), 0, -1):
        counts = _walk(tuple(arity.atoms() for arity in arities[:size]), text)
        if counts is not None:
            return counts
    return []


NONE = Arity(ArityKind.NONE)
OPTIONAL = Arity(ArityKind.OPTIONAL)
ZERO_OR_MORE = Arity(ArityKind.ZERO_OR_MORE)
ONE_OR_MORE = Arity(ArityKind.ONE_OR_MORE)
REMAINDER = Arity(ArityKind.REMAINDER)
SUBCOMMAND = Arity(ArityKind.SUBCOMMAND)
SUPPRESSED = Arity(ArityKind.SUPPRESSED)


__all__ = (
    "ArityKind",
    "Arity",
    "match_partial",
    "NONE",
    "OPTIONAL",
    "ZERO_OR_MORE",
    "ONE_OR_MORE",
    "REMAINDER",
    "SUBCOMMAND",
    "SUPPRESSED",
)
