# python
"""
Option descriptor behavioral tests (construction, normalization, introspection).

Scope
- Validate alias normalization ('|'-delimited strings and iterables, env-only options).
- Validate kind inference and kind/type constraints.
- Validate metadata constraints (names, separator, descr, envvar, callables).
- Validate zero/initial values, matching rules, immutability and repr.

Conventions
- Test method names follow CamelCase per project convention.
"""
import enum
import unittest
from unittest import TestCase

from rich.pretty import pretty_repr

from helmsman import Option, Kind, DuplicatePolicy


class Color(enum.Enum):
    red = 1
    blue = 2


class TestOptionNames(TestCase):
    """Alias handling."""

    def testLongDefaultsToName(self):
        option = Option("opt-1")
        self.assertEqual(option.long, ("opt-1",))
        self.assertEqual(option.short, ())
        self.assertEqual(option.primary_long, "opt-1")
        self.assertIsNone(option.primary_short)

    def testPipeDelimitedAliases(self):
        option = Option("opt-9", int, short="i|j", long="incremental|opt-9", kind=Kind.INCREMENTAL)
        self.assertEqual(option.short, ("i", "j"))
        self.assertEqual(option.long, ("incremental", "opt-9"))
        self.assertEqual(option.primary_long, "incremental")
        self.assertEqual(option.primary_short, "i")

    def testIterableAliases(self):
        option = Option("out", long=["output", "out"], short=("o",))
        self.assertEqual(option.long, ("output", "out"))

    def testEmptyLongMeansEnvironmentOnly(self):
        option = Option("token", long="", envvar="TOKEN")
        self.assertEqual(option.long, ())
        self.assertIsNone(option.primary_long)

    def testShortMustBeOneCharacter(self):
        with self.assertRaises(ValueError):
            Option("name", short="nm")
        with self.assertRaises(ValueError):
            Option("name", short="=")

    def testLongMustNotStartWithDash(self):
        with self.assertRaises(ValueError):
            Option("name", long="--name")

    def testRepeatedAliasRejected(self):
        with self.assertRaises(ValueError):
            Option("name", short="n|n")

    def testNameValidation(self):
        with self.assertRaises(ValueError):
            Option("")
        with self.assertRaises(ValueError):
            Option("two words")
        with self.assertRaises(TypeError):
            Option(7)

    def testMatchingCaseRules(self):
        option = Option("name", short="n")
        self.assertTrue(option.matches("NAME", short=False))
        self.assertTrue(option.matches("n", short=True))
        self.assertFalse(option.matches("N", short=True))
        strict = Option("name", short="n", case_sensitive_long=True, case_sensitive_short=False)
        self.assertFalse(strict.matches("NAME", short=False))
        self.assertTrue(strict.matches("N", short=True))

    def testIdentifier(self):
        self.assertEqual(Option("opt-1").identifier, "opt_1")


class TestOptionKinds(TestCase):
    """Kind inference and constraints."""

    def testInference(self):
        self.assertIs(Option("a").kind, Kind.SCALAR)
        self.assertIs(Option("b", int).kind, Kind.SCALAR)
        self.assertIs(Option("c", bool).kind, Kind.BOOLEAN)
        self.assertIs(Option("d", Color).kind, Kind.SCALAR)
        self.assertIs(Option("e", complex).kind, Kind.SCALAR)
        self.assertIs(Option("f", int, parser=int).kind, Kind.CUSTOM)
        self.assertIs(Option("g", lambda text: text[::-1]).kind, Kind.CUSTOM)

    def testExplicitKindKept(self):
        self.assertIs(Option("a", int, kind=Kind.ARRAY).kind, Kind.ARRAY)

    def testIncrementalRequiresInt(self):
        with self.assertRaises(TypeError):
            Option("v", str, kind=Kind.INCREMENTAL)
        with self.assertRaises(TypeError):
            Option("v", bool, kind=Kind.INCREMENTAL)

    def testBadKind(self):
        with self.assertRaises(TypeError):
            Option("v", kind="array")

    def testValueless(self):
        self.assertTrue(Option("a", bool).valueless)
        self.assertTrue(Option("b", int, kind=Kind.INCREMENTAL).valueless)
        self.assertFalse(Option("c", int).valueless)


class TestOptionMetadata(TestCase):
    """Remaining metadata constraints."""

    def testEmptySeparatorRejected(self):
        with self.assertRaises(ValueError):
            Option("a", kind=Kind.ARRAY, separator="")

    def testBlankDescrRejected(self):
        with self.assertRaises(ValueError):
            Option("a", descr="   ")

    def testDescrDefaultsToNone(self):
        self.assertIsNone(Option("a").descr)

    def testEnvvarValidation(self):
        with self.assertRaises(ValueError):
            Option("a", envvar="")
        with self.assertRaises(TypeError):
            Option("a", envvar=3)

    def testCallablesValidated(self):
        with self.assertRaises(TypeError):
            Option("a", validator="positive")
        with self.assertRaises(TypeError):
            Option("a", parser=3)
        with self.assertRaises(TypeError):
            Option("a", type="int")

    def testDuplicatePolicyValidated(self):
        with self.assertRaises(TypeError):
            Option("a", duplicates="reject")
        self.assertIs(Option("a").duplicates, DuplicatePolicy.REJECT)


class TestOptionValues(TestCase):
    """Zero and initial values."""

    def testZeroValues(self):
        self.assertEqual(Option("a").zero(), "")
        self.assertEqual(Option("b", int).zero(), 0)
        self.assertEqual(Option("c", float).zero(), 0.0)
        self.assertIs(Option("d", bool).zero(), False)
        self.assertEqual(Option("e", int, kind=Kind.ARRAY).zero(), [])
        self.assertEqual(Option("f", kind=Kind.MAP).zero(), {})
        self.assertIsNone(Option("g", Color).zero())

    def testInitialCopiesContainers(self):
        default = [1, 2]
        option = Option("a", int, kind=Kind.ARRAY, default=default)
        initial = option.initial()
        initial.append(3)
        self.assertEqual(option.initial(), [1, 2])
        self.assertEqual(default, [1, 2])

    def testInitialFallsBackToZero(self):
        self.assertEqual(Option("a", int).initial(), 0)


class TestOptionIntrospection(TestCase):
    """Immutability and representations."""

    def testImmutable(self):
        option = Option("a")
        with self.assertRaises(AttributeError):
            option.name = "b"
        with self.assertRaises(AttributeError):
            option.extra = 1

    def testRepr(self):
        text = repr(Option("opt-1", short="a"))
        self.assertTrue(text.startswith("option(name='opt-1'"))
        self.assertIn("short=('a',)", text)

    def testRichRepr(self):
        self.assertIn("opt-1", pretty_repr(Option("opt-1")))

    def testDefaultMirroredAsCopy(self):
        option = Option("a", int, kind=Kind.ARRAY, default=[1])
        option.default.append(2)
        self.assertEqual(option.default, [1])


if __name__ == "__main__":
    unittest.main()
