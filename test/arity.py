# python
"""
Arity module behavioral tests.

Scope
- Validate Arity.of() coercion of declarative nargs values and interning.
- Validate the explicit matcher over the {"A", "O", "-"} alphabet in both modes
  (free scan and option run).
- Validate match_partial() window shrinking and the mismatch messages.

Conventions
- Test method names follow CamelCase per project convention.
- Patterns are written literally; no token lists are involved here.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argwright.arity import (
    Arity,
    ArityKind,
    match_partial,
    NONE,
    OPTIONAL,
    ZERO_OR_MORE,
    ONE_OR_MORE,
    REMAINDER,
    SUBCOMMAND,
    SUPPRESSED,
)
from argwright.utils import Unset


class TestArityCoercion(TestCase):
    """Arity.of() accepts the declarative nargs forms."""

    def testUnsetIsSingleValue(self):
        self.assertIs(Arity.of(Unset), NONE)

    def testIntegerIsExact(self):
        arity = Arity.of(3)
        self.assertIs(arity.kind, ArityKind.EXACT)
        self.assertEqual(arity.count, 3)

    def testExactIsInterned(self):
        self.assertIs(Arity.of(2), Arity.of(2))

    def testSymbols(self):
        self.assertIs(Arity.of("?"), OPTIONAL)
        self.assertIs(Arity.of("*"), ZERO_OR_MORE)
        self.assertIs(Arity.of("+"), ONE_OR_MORE)
        self.assertIs(Arity.of("..."), REMAINDER)
        self.assertIs(Arity.of(...), REMAINDER)

    def testArityPassesThrough(self):
        self.assertIs(Arity.of(SUBCOMMAND), SUBCOMMAND)

    def testUnknownSymbolRejected(self):
        with self.assertRaises(ValueError):
            Arity.of("x")

    def testNegativeCountRejected(self):
        with self.assertRaises(ValueError):
            Arity.of(-1)

    def testBooleanRejected(self):
        with self.assertRaises(TypeError):
            Arity.of(True)

    def testOtherTypesRejected(self):
        with self.assertRaises(TypeError):
            Arity.of(1.5)

    def testTakesValues(self):
        self.assertFalse(Arity.of(0).takes_values)
        self.assertFalse(SUPPRESSED.takes_values)
        self.assertTrue(NONE.takes_values)


class TestArityMatch(TestCase):
    """Longest anchored match, in free-scan and option-run modes."""

    def testSingleValue(self):
        self.assertEqual(NONE.match("AA"), 1)
        self.assertIsNone(NONE.match("OA"))
        self.assertIsNone(NONE.match(""))

    def testSingleValueAbsorbsSeparators(self):
        self.assertEqual(NONE.match("-A"), 2)

    def testOptional(self):
        self.assertEqual(OPTIONAL.match("AA"), 1)
        self.assertEqual(OPTIONAL.match("O"), 0)

    def testZeroOrMoreStopsAtOption(self):
        self.assertEqual(ZERO_OR_MORE.match("AAO"), 2)
        self.assertEqual(ZERO_OR_MORE.match(""), 0)

    def testOneOrMore(self):
        self.assertEqual(ONE_OR_MORE.match("AAA"), 3)
        self.assertIsNone(ONE_OR_MORE.match(""))
        self.assertIsNone(ONE_OR_MORE.match("O"))

    def testRemainderTakesEverything(self):
        self.assertEqual(REMAINDER.match("AOA-"), 4)
        self.assertEqual(REMAINDER.match(""), 0)

    def testSubcommandNeedsSelector(self):
        self.assertEqual(SUBCOMMAND.match("AOA"), 3)
        self.assertIsNone(SUBCOMMAND.match("OA"))

    def testExact(self):
        self.assertEqual(Arity.of(2).match("AAA"), 2)
        self.assertIsNone(Arity.of(2).match("AO"))
        self.assertEqual(Arity.of(0).match("AAA"), 0)

    def testOptionRunRejectsSeparators(self):
        self.assertEqual(Arity.of(2).match("A-A"), 3)
        self.assertIsNone(Arity.of(2).match("A-A", optional=True))
        self.assertEqual(ZERO_OR_MORE.match("A-A", optional=True), 1)

    def testSuppressedTakesNothing(self):
        self.assertEqual(SUPPRESSED.match("AA"), 0)


class TestMatchPartial(TestCase):
    """Window shrinking over queued positional arities."""

    def testAllArities(self):
        self.assertEqual(match_partial([ONE_OR_MORE, NONE], "AAA"), [2, 1])

    def testShrinksWindow(self):
        self.assertEqual(match_partial([NONE, NONE], "A"), [1])

    def testStopsAtOption(self):
        self.assertEqual(match_partial([NONE, NONE], "AOA"), [1])

    def testNothingFits(self):
        self.assertEqual(match_partial([NONE], "O"), [])
        self.assertEqual(match_partial([], "A"), [])

    def testGreedyLeavesRoomForFollowers(self):
        self.assertEqual(match_partial([ZERO_OR_MORE, Arity.of(2)], "AAAA"), [2, 2])


class TestArityMismatch(TestCase):
    """Diagnostic wording per arity kind."""

    def testMessages(self):
        self.assertEqual(NONE.mismatch(), "expected one argument")
        self.assertEqual(OPTIONAL.mismatch(), "expected at most one argument")
        self.assertEqual(ONE_OR_MORE.mismatch(), "expected at least one argument")
        self.assertEqual(Arity.of(3).mismatch(), "expected 3 argument(s)")

    def testRepr(self):
        self.assertEqual(repr(Arity.of(2)), "arity(2)")
        self.assertEqual(repr(ONE_OR_MORE), "arity('+')")


if __name__ == "__main__":
    unittest.main()
