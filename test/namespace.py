# python
"""
Namespace behavioral tests.

Scope
- Validate the mutators (set_value, set_values, append_values).
- Validate copy-on-read access, structural equality and the repr shape.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argwright import Namespace


class TestNamespace(TestCase):
    """Mapping from dest to string lists."""

    def testSetValue(self):
        namespace = Namespace()
        namespace.set_value("k", "v")
        self.assertEqual(namespace["k"], ["v"])

    def testSetValuesWrapsStrings(self):
        namespace = Namespace()
        namespace.set_values("k", "abc")
        self.assertEqual(namespace["k"], ["abc"])

    def testSetValuesReplaces(self):
        namespace = Namespace({"k": ["a", "b"]})
        namespace.set_values("k", ["c"])
        self.assertEqual(namespace["k"], ["c"])

    def testAppendValues(self):
        namespace = Namespace()
        namespace.append_values("k", ["a"])
        namespace.append_values("k", ["b", "c"])
        self.assertEqual(namespace["k"], ["a", "b", "c"])

    def testReadsAreCopies(self):
        namespace = Namespace({"k": ["a"]})
        namespace["k"].append("b")
        self.assertEqual(namespace["k"], ["a"])

    def testMissingKey(self):
        with self.assertRaises(KeyError):
            Namespace()["missing"]

    def testMappingProtocol(self):
        namespace = Namespace({"a": ["1"], "b": ["2"]})
        self.assertEqual(list(namespace), ["a", "b"])
        self.assertEqual(len(namespace), 2)
        self.assertIn("a", namespace)
        self.assertEqual(namespace.get("c"), None)

    def testStructuralEquality(self):
        self.assertEqual(Namespace({"a": ["1"]}), Namespace({"a": ["1"]}))
        self.assertEqual(Namespace({"a": ["1"]}), {"a": ["1"]})
        self.assertNotEqual(Namespace({"a": ["1"]}), Namespace({"a": ["2"]}))

    def testRepr(self):
        namespace = Namespace()
        namespace.set_value("k", "v")
        namespace.set_values("l", ["a", "b"])
        namespace.set_values("e", [])
        self.assertEqual(repr(namespace), "Namespace(k='v', l=['a', 'b'], e=None)")

    def testRichRepr(self):
        namespace = Namespace({"k": ["v"], "l": ["a", "b"]})
        self.assertEqual(list(namespace.__rich_repr__()), [("k", "v"), ("l", ["a", "b"])])


if __name__ == "__main__":
    unittest.main()
