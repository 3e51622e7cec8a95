"""
Utility behavioral tests.

Scope
- Unset sentinel and coalesce().
- mirror() read-only properties.
- ordinal() labels used in position-first messages.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from commando.utils import Unset, UnsetType, coalesce, mirror, ordinal


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingletonAndFalsy(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class TestMirror(TestCase):
    """Behavioral tests for mirror()."""

    def testContainersAreCopied(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = {"a"}

        holder = Holder()
        holder.items.add("b")
        self.assertEqual(holder.items, {"a"})
        with self.assertRaises(AttributeError):
            holder.items = set()


class TestOrdinal(TestCase):
    """Behavioral tests for ordinal()."""

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(103), "103rd")
        self.assertEqual(ordinal(111), "111th")


if __name__ == "__main__":
    unittest.main()
