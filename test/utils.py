"""
Tests for the internal helpers.

This module verifies:
- The `Unset` sentinel: singleton identity, falsiness, representation, finality
  and PEP 604 unions.
- `coalesce`, `rename` and `mirror` contracts.
- `aliases` normalization of option names.
"""
import unittest
from unittest import TestCase

from helmsman.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` singleton.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testUnion(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", str | Unset)
        self.assertNotIsInstance(3, str | Unset)


class HelpersTest(TestCase):
    """
    Test suite for coalesce, rename, mirror and aliases.
    """

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 5), 0)
        self.assertIsNone(coalesce(Unset))

    def testRenameForms(self) -> None:
        def function():
            pass

        self.assertEqual(rename(function, "renamed").__name__, "renamed")

        @rename("decorated")
        def other():
            pass

        self.assertEqual(other.__qualname__, "decorated")
        with self.assertRaises(TypeError):
            rename()

    def testMirrorCopiesContainers(self) -> None:
        class Holder:
            items = mirror("items")
            names = mirror("names")

            def __init__(self):
                self._items = [1, [2]]
                self._names = ("a", "b")

        holder = Holder()
        holder.items[1].append(3)
        self.assertEqual(holder.items, [1, [2]])
        self.assertIs(holder.names, holder._names)
        with self.assertRaises(AttributeError):
            holder.items = []

    def testAliases(self) -> None:
        self.assertEqual(aliases("i|j"), ("i", "j"))
        self.assertEqual(aliases(""), ())
        self.assertEqual(aliases([" out ", "o"]), ("out", "o"))
        with self.assertRaises(ValueError):
            aliases("a|a")
        with self.assertRaises(TypeError):
            aliases(3)
        with self.assertRaises(TypeError):
            aliases(["a", 3])


if __name__ == "__main__":
    unittest.main()
