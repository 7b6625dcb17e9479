# python
"""
Help renderer tests (byte-for-byte snapshots and word wrapping).

Scope
- Snapshot the help of an option set mixing short/long/env-only options.
- Snapshot the help of a command tree.
- Validate wrap(): kept newlines, kept leading indentation, column overflow.

Conventions
- Test method names follow CamelCase per project convention.
- Expected texts are literal strings; no trailing whitespace is ever expected.
"""
import unittest
from unittest import TestCase

from helmsman import Option, OptionSet, Kind, Command, CommandTree
from helmsman.helptext import wrap, render

EXPECTED = """\
Options:
  -h  --help          Displays this help message
  -a  --opt-1         This is the description for option 1
  -b  --opt-2         This is the description for option 2
  -B  --opt-3         There are three kinds of comments:
                          1. Something rather sinister
                          2. And something else that's not so sinister
      --opt-4         THis is one that takes an env var
      --opt-5         THis is one that takes an env var as well
      --opt-6
      --opt-7
      --opt-8
  -i  --incremental   sets some level incremental thingy
      --opt-10
      --opt-11
      --opt-12
      --opt-13
  -x  --b0
  -y  --b1
  -z  --b2
      --opt-14
      --opt-15

Environment Vars:
  OPT_4    See: --opt-4
  OPT_5    See: --opt-5
  OPT_16   THis one only takes and envornment variable and cant be set with any flags"""


class TestOptionHelp(TestCase):
    """Snapshot of the option-set help."""

    def setUp(self):
        self.options = OptionSet(
            Option("opt-1", short="a", descr="This is the description for option 1"),
            Option("opt-2", int, short="b", descr="This is the description for option 2"),
            Option("opt-3", int, short="B", descr=(
                "There are three kinds of comments:\n"
                "    1. Something rather sinister\n"
                "    2. And something else that's not so sinister"
            )),
            Option("opt-4", int, default=3, envvar="OPT_4", descr="THis is one that takes an env var"),
            Option("opt-5", int, kind=Kind.ARRAY, envvar="OPT_5", descr="THis is one that takes an env var as well"),
            Option("opt-6", int, kind=Kind.ARRAY, default=[6, 7, 8]),
            Option("opt-7", float, kind=Kind.ARRAY, default=[1, 2]),
            Option("opt-8"),
            Option("opt-9", int, short="i|j", long="incremental|opt-9", kind=Kind.INCREMENTAL,
                   descr="sets some level incremental thingy"),
            Option("opt-10", int),
            Option("opt-11", int, kind=Kind.ARRAY),
            Option("opt-12", int, keytype=int, kind=Kind.MAP, separator="::"),
            Option("opt-13", int),
            Option("b0", int, short="x"),
            Option("b1", int, short="y"),
            Option("b2", int, short="z"),
            Option("opt-14"),
            Option("opt-15", bool),
            Option("opt-16", bool, long="", envvar="OPT_16",
                   descr="THis one only takes and envornment variable and cant be set with any flags"),
        )

    def testSnapshot(self):
        self.assertEqual(self.options.helptext, EXPECTED)

    def testDeterministic(self):
        self.assertEqual(render(self.options), render(self.options))

    def testEnvironmentSectionAlone(self):
        options = [Option("token", long="", envvar="API_TOKEN", descr="secret")]
        self.assertEqual(render(options), "Environment Vars:\n  API_TOKEN   secret")

    def testShortOnlyPointer(self):
        options = [Option("depth", int, long="", short="d", envvar="DEPTH", descr="how deep")]
        self.assertEqual(
            render(options),
            "Options:\n  -d       how deep\n\nEnvironment Vars:\n  DEPTH   See: -d",
        )


class TestCommandHelp(TestCase):
    """Snapshot of the command-tree help."""

    def testSnapshot(self):
        tree = CommandTree(
            Command("cmd1"),
            Command("cmd2", descr="desc"),
            Command("cmd3", OptionSet(Option("opt3", short="d", descr="desc")), descr="desc"),
            options=OptionSet(Option("glob1", short="a", descr="desc")),
        )
        self.assertEqual(
            tree.helptext,
            "Options:\n"
            "  -h  --help    Displays this help message\n"
            "  -a  --glob1   desc\n"
            "Commands:\n"
            "  cmd1\n"
            "  cmd2  desc\n"
            "  cmd3  desc",
        )

    def testWithoutOptions(self):
        tree = CommandTree(Command("run", descr="start it"))
        self.assertEqual(tree.helptext, "Commands:\n  run  start it")


class TestWrap(TestCase):
    """Word wrapping at a fixed column."""

    def testShortTextUntouched(self):
        self.assertEqual(wrap(4, "hello world"), "hello world")

    def testNewlinesIndented(self):
        self.assertEqual(wrap(3, "one\ntwo"), "one\n   two")

    def testLeadingIndentationKept(self):
        self.assertEqual(wrap(2, "a\n  b"), "a\n    b")

    def testOverflowBreaksLine(self):
        self.assertEqual(wrap(2, "aaa bb cc", width=4), "aaa\n  bb cc")

    def testLongDescriptionWraps(self):
        text = wrap(10, " ".join(["word"] * 30))
        for line in text.splitlines()[1:]:
            self.assertTrue(line.startswith(" " * 10 + "word"))
        self.assertGreater(len(text.splitlines()), 1)

    def testTrailingWhitespaceDropped(self):
        self.assertEqual(wrap(2, "x "), "x")
        self.assertEqual(wrap(2, "a \nb"), "a\n  b")


if __name__ == "__main__":
    unittest.main()
