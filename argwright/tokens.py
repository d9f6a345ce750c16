"""
Argwright token classifier.

Turns a raw token list into
- a pattern string over the alphabet {"A", "O", "-"} (one letter per token), and
- a table mapping every "O" index to its Resolution: the option string that
  matched, the argument it belongs to (None when unregistered) and the inline
  value, if any.

Resolution order for a prefixed token
1. exact option string                      "--count"        -> --count
2. "opt=value" with an exact option head    "--count=15"     -> --count, "15"
3. long prefix search (allow_abbrev)        "--cou=15"       -> --count, "15"
4. short form: first two characters plus an inline remainder ("-c15"), else a
   prefix search over every option string (allow_abbrev)
5. fallback: negative numbers (when no option looks like one) and tokens with
   whitespace are positional; anything else is an unregistered option.

More than one candidate in (3) or (4) raises AmbiguousOptionError listing the
candidates in lexicographic order. "--" is the separator; every token after it
is positional.
"""
import logging
import re
from collections import namedtuple

from .faults import AmbiguousOptionError

log = logging.getLogger(__name__)

NEGATIVE_NUMBER = re.compile(r"-\d+|-\d*\.\d+")

SEPARATOR = "--"

Resolution = namedtuple("Resolution", ("option", "argument", "explicit"))

Classification = namedtuple("Classification", ("pattern", "table"))


def looks_negative(string, /):
    """
    True for "-1", "-12" or "-.5"/"-1.5" shaped tokens.
    """
    return NEGATIVE_NUMBER.fullmatch(string) is not None


class TokenClassifier:
    """
    Option-string index plus the classification rules above.

    Built once per finalized parser; classify() keeps no state between calls.
    """

    def __init__(self, options, /, *, prefix="-", abbrev=True):
        self._index = dict(options)
        self._prefix = prefix
        self._abbrev = bool(abbrev)
        self._negative = any(map(looks_negative, self._index))

    @property
    def options(self):
        return tuple(self._index)

    def lookup(self, option, /):
        """
        Argument registered under an exact option string, or None.
        """
        return self._index.get(option)

    def classify(self, strings, /):
        pattern = []
        table = {}
        separated = False
        for index, string in enumerate(strings):
            if separated:
                pattern.append("A")
            elif string == SEPARATOR:
                pattern.append("-")
                separated = True
            elif (resolution := self.resolve(string)) is None:
                pattern.append("A")
            else:
                pattern.append("O")
                table[index] = resolution
        pattern = "".join(pattern)
        log.debug("classified %r as %r", strings, pattern)
        return Classification(pattern, table)

    def resolve(self, string, /):
        """
        Resolution for an option-shaped token, or None when it is positional.
        """
        prefix = self._prefix
        if not string or not string.startswith(prefix):
            return None
        if string in self._index:
            return Resolution(string, self._index[string], None)
        if len(string) == 1:
            return None

        head, assign, tail = string.partition("=")
        if assign and head in self._index:
            return Resolution(head, self._index[head], tail)

        candidates = self._candidates(string)
        if len(candidates) > 1:
            raise AmbiguousOptionError(
                f"ambiguous option: {string} could match {", ".join(sorted(candidate.option for candidate in candidates))}"
            )
        if candidates:
            return candidates[0]

        if looks_negative(string) and not self._negative:
            return None
        if any(character.isspace() for character in string):
            return None
        return Resolution(string, None, None)

    def _candidates(self, string):
        prefix = self._prefix
        if string.startswith(prefix * 2):
            if not self._abbrev:
                return []
            head, assign, tail = string.partition("=")
            explicit = tail if assign else None
            return [
                Resolution(option, argument, explicit)
                for option, argument in self._index.items()
                if option.startswith(head)
            ]
        # single-prefix options may carry their value glued to the name
        short = string[:2]
        if short in self._index:
            return [Resolution(short, self._index[short], string[2:])]
        if not self._abbrev:
            return []
        return [
            Resolution(option, argument, None)
            for option, argument in self._index.items()
            if option.startswith(string)
        ]


__all__ = (
    "NEGATIVE_NUMBER",
    "SEPARATOR",
    "Resolution",
    "Classification",
    "TokenClassifier",
    "looks_negative",
)
