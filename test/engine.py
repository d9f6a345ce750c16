# python
"""
Consumption engine behavioral tests (driven through ArgumentParser).

Scope
- Validate interleaved positional/optional consumption, option arities, inline
  values and short clusters.
- Validate value resolution: separators, const/default substitution, choices.
- Validate completion checks: required arguments and mutually exclusive groups.
- Validate idempotence of repeated parses.

Conventions
- Test method names follow CamelCase per project convention.
- Parsers are built with exit_on_error=False so faults surface as exceptions.
- Namespaces are compared against plain dicts of string lists.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argwright import (
    AmbiguousOptionError,
    ArgumentParser,
    ArityMismatchError,
    ChoiceViolationError,
    ConflictError,
    ExplicitArgumentError,
    MissingRequiredError,
    RequiredGroupError,
)


def make(**options):
    return ArgumentParser("prog", exit_on_error=False, **options)


class TestEndToEnd(TestCase):
    """The canonical filename/count/verbose declaration."""

    def setUp(self):
        self.parser = make()
        self.parser.add_argument("filename")
        self.parser.add_argument("--count", nargs=1)
        self.parser.add_argument("--verbose", action="store_true")

    def testCanonicalInput(self):
        namespace, extras = self.parser.parse_known_args(["file_name", "--count", "15", "--verbose"])
        self.assertEqual(namespace, {"filename": ["file_name"], "count": ["15"], "verbose": ["true"]})
        self.assertEqual(extras, [])

    def testOptionsBeforePositional(self):
        namespace = self.parser.parse_args(["--verbose", "--count", "15", "file_name"])
        self.assertEqual(namespace["filename"], ["file_name"])
        self.assertEqual(namespace["count"], ["15"])

    def testDefaultsWithoutOptions(self):
        namespace = self.parser.parse_args(["file_name"])
        self.assertEqual(namespace, {"filename": ["file_name"], "verbose": ["false"]})

    def testRepeatedParsesAreEqual(self):
        tokens = ["file_name", "--count", "15"]
        first = self.parser.parse_args(tokens)
        second = self.parser.parse_args(tokens)
        self.assertEqual(first, second)
        self.assertIsNot(first, second)

    def testNoStateSurvivesBetweenParses(self):
        self.parser.parse_args(["a", "--verbose", "--count", "1"])
        namespace = self.parser.parse_args(["b"])
        self.assertEqual(namespace, {"filename": ["b"], "verbose": ["false"]})

    def testShellString(self):
        namespace = self.parser.parse_args("'file name' --count 3")
        self.assertEqual(namespace["filename"], ["file name"])
        self.assertEqual(namespace["count"], ["3"])

    def testMissingPositional(self):
        with self.assertRaises(MissingRequiredError) as context:
            self.parser.parse_args(["--verbose"])
        self.assertEqual(str(context.exception), "the following arguments are required: filename")


class TestOptionArity(TestCase):
    """Each option consumes exactly what its arity allows."""

    def setUp(self):
        self.parser = make()
        self.single = self.parser.add_argument("--single")
        self.pair = self.parser.add_argument("--pair", nargs=2)
        self.maybe = self.parser.add_argument("--maybe", nargs="?", const="fallback")
        self.many = self.parser.add_argument("--many", nargs="*")
        self.some = self.parser.add_argument("--some", nargs="+")

    def testPrimaryOptionWithExactTokens(self):
        cases = (
            (self.single, ["a"]),
            (self.pair, ["a", "b"]),
            (self.maybe, ["a"]),
            (self.many, ["a", "b", "c"]),
            (self.some, ["a", "b"]),
        )
        for argument, values in cases:
            with self.subTest(option=argument.names[0]):
                namespace, extras = self.parser.parse_known_args([argument.names[0], *values])
                self.assertEqual(namespace[argument.dest], values)
                self.assertEqual(extras, [])

    def testSingleMissingValue(self):
        with self.assertRaises(ArityMismatchError) as context:
            self.parser.parse_args(["--single"])
        self.assertEqual(str(context.exception), "argument --single: expected one argument")

    def testPairMissingValue(self):
        with self.assertRaises(ArityMismatchError) as context:
            self.parser.parse_args(["--pair", "a"])
        self.assertEqual(str(context.exception), "argument --pair: expected 2 argument(s)")

    def testOneOrMoreWithoutTokens(self):
        with self.assertRaises(ArityMismatchError) as context:
            self.parser.parse_args(["--some"])
        self.assertEqual(str(context.exception), "argument --some: expected at least one argument")

    def testOneOrMoreStopsAtNextOption(self):
        namespace = self.parser.parse_args(["--some", "a", "b", "--single", "c"])
        self.assertEqual(namespace["some"], ["a", "b"])
        self.assertEqual(namespace["single"], ["c"])

    def testOptionalUsesConst(self):
        namespace = self.parser.parse_args(["--maybe"])
        self.assertEqual(namespace["maybe"], ["fallback"])

    def testZeroOrMoreWithoutTokens(self):
        namespace = self.parser.parse_args(["--many"])
        self.assertEqual(namespace["many"], [])

    def testValueLookingLikeOptionIsRejected(self):
        with self.assertRaises(ArityMismatchError):
            self.parser.parse_args(["--single", "--pair", "a", "b"])

    def testSeparatorEndsOptionRun(self):
        namespace, extras = self.parser.parse_known_args(["--many", "a", "--", "b"])
        self.assertEqual(namespace["many"], ["a"])
        self.assertEqual(extras, ["--", "b"])


class TestInlineValues(TestCase):
    """Values glued to option strings."""

    def setUp(self):
        self.parser = make()
        self.parser.add_argument("-c", "--count")
        self.parser.add_argument("-v", "--verbose", action="count")
        self.parser.add_argument("-q", "--quiet", action="store_true")

    def testLongEquals(self):
        self.assertEqual(self.parser.parse_args(["--count=15"])["count"], ["15"])

    def testShortGlued(self):
        self.assertEqual(self.parser.parse_args(["-c15"])["count"], ["15"])

    def testAbbreviatedEquals(self):
        self.assertEqual(self.parser.parse_args(["--cou=15"])["count"], ["15"])

    def testShortCluster(self):
        self.assertEqual(self.parser.parse_args(["-vvv"])["verbose"], ["3"])

    def testMixedCluster(self):
        namespace = self.parser.parse_args(["-vqv"])
        self.assertEqual(namespace["verbose"], ["2"])
        self.assertEqual(namespace["quiet"], ["true"])

    def testClusterEndingWithValue(self):
        namespace = self.parser.parse_args(["-vc15"])
        self.assertEqual(namespace["verbose"], ["1"])
        self.assertEqual(namespace["count"], ["15"])

    def testClusterWithUnknownLetter(self):
        with self.assertRaises(ExplicitArgumentError) as context:
            self.parser.parse_args(["-vx"])
        self.assertEqual(str(context.exception), "argument -v/--verbose: ignored explicit argument x")

    def testLongFlagWithValue(self):
        with self.assertRaises(ExplicitArgumentError) as context:
            self.parser.parse_args(["--quiet=yes"])
        self.assertIsInstance(context.exception, ArityMismatchError)
        self.assertEqual(str(context.exception), "argument -q/--quiet: ignored explicit argument yes")


class TestAbbreviations(TestCase):
    """Option prefixes resolved by the parse entry point."""

    def setUp(self):
        self.parser = make()
        self.parser.add_argument("-foobar")
        self.parser.add_argument("-foonley")

    def testUniquePrefix(self):
        self.assertEqual(self.parser.parse_args(["-foob", "x"])["foobar"], ["x"])

    def testAmbiguousPrefix(self):
        with self.assertRaises(AmbiguousOptionError) as context:
            self.parser.parse_args(["-foo", "x"])
        self.assertEqual(str(context.exception), "ambiguous option: -foo could match -foobar, -foonley")


class TestPositionals(TestCase):
    """Positional runs interleaved with options."""

    def testInterleaved(self):
        parser = make()
        parser.add_argument("first")
        parser.add_argument("second")
        parser.add_argument("--option")
        namespace = parser.parse_args(["1", "--option", "v", "2"])
        self.assertEqual(namespace, {"first": ["1"], "second": ["2"], "option": ["v"]})

    def testGreedyRunLeavesRoomForFollowers(self):
        parser = make()
        parser.add_argument("sources", nargs="+")
        parser.add_argument("target")
        namespace = parser.parse_args(["a", "b", "c"])
        self.assertEqual(namespace["sources"], ["a", "b"])
        self.assertEqual(namespace["target"], ["c"])

    def testZeroOrMoreFallsBackToDefault(self):
        parser = make()
        parser.add_argument("files", nargs="*", default=("x", "y"))
        self.assertEqual(parser.parse_args([])["files"], ["x", "y"])
        self.assertEqual(parser.parse_args(["z"])["files"], ["z"])

    def testOptionalFallsBackToDefault(self):
        parser = make()
        parser.add_argument("name", nargs="?", default="anonymous")
        self.assertEqual(parser.parse_args([])["name"], ["anonymous"])

    def testRemainderKeepsOptionShapedTokens(self):
        parser = make()
        parser.add_argument("command")
        parser.add_argument("rest", nargs="...")
        namespace = parser.parse_args(["run", "--flag", "x"])
        self.assertEqual(namespace["rest"], ["--flag", "x"])

    def testSeparatorIsDropped(self):
        parser = make()
        parser.add_argument("--verbose", action="store_true")
        parser.add_argument("items", nargs="*")
        namespace = parser.parse_args(["--", "--verbose", "-x"])
        self.assertEqual(namespace["items"], ["--verbose", "-x"])
        self.assertEqual(namespace["verbose"], ["false"])

    def testInnerSeparatorIsDropped(self):
        parser = make()
        parser.add_argument("items", nargs="*")
        self.assertEqual(parser.parse_args(["a", "--", "b"])["items"], ["a", "b"])

    def testNegativeNumbersArePositional(self):
        parser = make()
        parser.add_argument("-x")
        parser.add_argument("value")
        namespace = parser.parse_args(["-x", "-1", "-2.5"])
        self.assertEqual(namespace["x"], ["-1"])
        self.assertEqual(namespace["value"], ["-2.5"])

    def testLeftoversAreExtras(self):
        parser = make()
        parser.add_argument("only")
        namespace, extras = parser.parse_known_args(["a", "b", "--unknown", "c"])
        self.assertEqual(namespace["only"], ["a"])
        self.assertEqual(extras, ["b", "--unknown", "c"])

    def testAggregatedMissingNames(self):
        parser = make()
        parser.add_argument("src")
        parser.add_argument("dst")
        parser.add_argument("--out", required=True)
        with self.assertRaises(MissingRequiredError) as context:
            parser.parse_args([])
        self.assertEqual(str(context.exception), "the following arguments are required: src, dst, --out")


class TestChoices(TestCase):
    """Values outside the declared choice set."""

    def setUp(self):
        self.parser = make()
        self.parser.add_argument("move", choices=("rock", "paper", "scissors"))

    def testValidChoice(self):
        self.assertEqual(self.parser.parse_args(["rock"])["move"], ["rock"])

    def testInvalidChoice(self):
        with self.assertRaises(ChoiceViolationError) as context:
            self.parser.parse_args(["fire"])
        self.assertEqual(
            str(context.exception),
            "argument move: invalid choice: fire (choose from 'rock', 'paper', 'scissors')"
        )

    def testChoicesAreCheckedPerValue(self):
        parser = make()
        parser.add_argument("--level", nargs="+", choices=(1, 2, 3))
        self.assertEqual(parser.parse_args(["--level", "1", "3"])["level"], ["1", "3"])
        with self.assertRaises(ChoiceViolationError):
            parser.parse_args(["--level", "1", "4"])


class TestMutuallyExclusive(TestCase):
    """Conflicts and required exclusive groups."""

    def setUp(self):
        self.parser = make()
        self.group = self.parser.add_mutually_exclusive_group(required=True)
        self.group.add_argument("--alpha", action="store_true")
        self.group.add_argument("--beta", action="store_true")

    def testOneMember(self):
        namespace = self.parser.parse_args(["--beta"])
        self.assertEqual(namespace, {"alpha": ["false"], "beta": ["true"]})

    def testNeitherSupplied(self):
        with self.assertRaises(MissingRequiredError) as context:
            self.parser.parse_args([])
        self.assertIsInstance(context.exception, RequiredGroupError)
        self.assertIsInstance(context.exception, ConflictError)
        self.assertEqual(str(context.exception), "one of the arguments --alpha --beta is required")

    def testBothSupplied(self):
        with self.assertRaises(ConflictError) as context:
            self.parser.parse_args(["--alpha", "--beta"])
        self.assertEqual(str(context.exception), "argument --beta: not allowed with argument --alpha")

    def testRepeatedMemberIsNotAConflict(self):
        self.assertEqual(self.parser.parse_args(["--alpha", "--alpha"])["alpha"], ["true"])

    def testDefaultedPositionalNeitherConflictsNorSatisfies(self):
        parser = make()
        group = parser.add_mutually_exclusive_group(required=True)
        group.add_argument("--flag", action="store_true")
        group.add_argument("name", nargs="?", default="anonymous")
        namespace = parser.parse_args(["--flag"])
        self.assertEqual(namespace["name"], ["anonymous"])
        self.assertEqual(parser.parse_args(["bob"])["name"], ["bob"])
        with self.assertRaises(RequiredGroupError) as context:
            parser.parse_args([])
        self.assertEqual(str(context.exception), "one of the arguments --flag name is required")


if __name__ == "__main__":
    unittest.main()
