# python
"""
Usage grammar behavioral tests (compile, parse, deserialize).

Scope
- Validate grammar compilation: sections, specs, caching and malformed texts.
- Validate argv parsing: options anywhere, inline/separate values, stacked flags, "--".
- Validate friendly faults: unknown, duplicated, malformed switches and mismatches.
- Validate the help short-circuit and the options_first mode of the top-level grammar.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from dataclasses import dataclass
from unittest import TestCase

from notion import usage
from notion.command import Current, Use
from notion.faults import (
    DuplicatedSwitchError,
    FlagAssignmentError,
    HelpRequest,
    MalformedTokenError,
    OptionValueRequiredError,
    PatternMismatchError,
    UnknownSwitchError,
    UsageError,
)
from notion.invocation import USAGE
from notion.usage import Cardinal, Flag, Option, UsageGrammarError, Word

SHELL_USAGE = """
Print the activation snippet for a shell

Usage:
    notion activate [options] [<dirs> ...]

Options:
    -h, --help        Display this message
    --shell=<name>    Target shell [default: bash]
"""


class TestSpecs(TestCase):
    """Behavioral tests for grammar specs."""

    def testCardinalField(self):
        self.assertEqual(Cardinal("<shim-name>").field, "arg_shim_name")

    def testWordField(self):
        self.assertEqual(Word("list").field, "cmd_list")

    def testFlagKeyPrefersLongName(self):
        spec = Flag("-g", "--global")
        self.assertEqual(spec.key, "--global")
        self.assertEqual(spec.field, "flag_global")
        self.assertEqual(spec.names, ["--global", "-g"])

    def testFlagNameValidated(self):
        with self.assertRaises(UsageGrammarError):
            Flag("global")

    def testFlagRequiresName(self):
        with self.assertRaises(UsageGrammarError):
            Flag()

    def testHelperFlag(self):
        self.assertTrue(Flag("-h", "--help").helper)
        self.assertFalse(Flag("-v", "--verbose").helper)

    def testOptionDefault(self):
        self.assertEqual(Option("--shell", metavar="<name>", value="bash").default, "bash")
        self.assertIsNone(Option("--shell", metavar="<name>").default)

    def testRepr(self):
        self.assertEqual(repr(Word("list")), "word(name='list', repeated=False)")


class TestCompile(TestCase):
    """Behavioral tests for compiling usage texts."""

    def testCompileIsCached(self):
        self.assertIs(usage.compile(Use.USAGE), usage.compile(Use.USAGE))

    def testProgramAndHelp(self):
        grammar = usage.compile(Use.USAGE)
        self.assertEqual(grammar.program, "notion")
        self.assertTrue(grammar.helps)

    def testOptionsSection(self):
        grammar = usage.compile(SHELL_USAGE)
        keys = {spec.key for spec in grammar.options}
        self.assertEqual(keys, {"--help", "--shell"})

    def testMissingUsageSectionRejected(self):
        with self.assertRaises(UsageGrammarError):
            usage.Usage("Options:\n    -h, --help  Display this message\n")

    def testUnbalancedPatternRejected(self):
        with self.assertRaises(UsageGrammarError):
            usage.Usage("Usage:\n    notion use [<version>\n")

    def testDuplicatedDeclarationRejected(self):
        with self.assertRaises(UsageGrammarError):
            usage.Usage("Usage:\n    notion x [options]\n\nOptions:\n    -v  One\n    -v  Two\n")


class TestParse(TestCase):
    """Behavioral tests for parsing argv against a grammar."""

    def testPositional(self):
        values = usage.compile(Use.USAGE).parse(["notion", "use", "10"])
        self.assertEqual(values["<version>"], "10")
        self.assertFalse(values["--global"])

    def testOptionsAnywhere(self):
        grammar = usage.compile(Use.USAGE)
        self.assertTrue(grammar.parse(["notion", "use", "10", "-g"])["--global"])
        self.assertTrue(grammar.parse(["notion", "use", "--global", "10"])["--global"])

    def testStackedShortFlags(self):
        values = usage.compile(Current.USAGE).parse(["notion", "current", "-lg"])
        self.assertTrue(values["--local"])
        self.assertTrue(values["--global"])

    def testOptionValueForms(self):
        grammar = usage.compile(SHELL_USAGE)
        self.assertEqual(grammar.parse(["notion", "activate", "--shell=zsh"])["--shell"], "zsh")
        self.assertEqual(grammar.parse(["notion", "activate", "--shell", "fish"])["--shell"], "fish")
        self.assertEqual(grammar.parse(["notion", "activate"])["--shell"], "bash")

    def testRepeatedCardinal(self):
        grammar = usage.compile(SHELL_USAGE)
        self.assertEqual(grammar.parse(["notion", "activate"])["<dirs>"], [])
        self.assertEqual(grammar.parse(["notion", "activate", "a", "b"])["<dirs>"], ["a", "b"])

    def testLongRepetition(self):
        dirs = ["dir%d" % number for number in range(3000)]
        values = usage.compile(SHELL_USAGE).parse(["notion", "activate", *dirs])
        self.assertEqual(values["<dirs>"], dirs)

    def testLongArgumentListAtTopLevel(self):
        names = ["f%d" % number for number in range(3000)]
        values = usage.compile(USAGE).parse(["notion", "shim", "create", *names], options_first=True)
        self.assertEqual(values["<args>"], ["create", *names])

    def testDoubleDashEndsOptions(self):
        values = usage.compile(Use.USAGE).parse(["notion", "use", "--", "--help"])
        self.assertEqual(values["<version>"], "--help")

    def testUnknownSwitchSuggests(self):
        with self.assertRaises(UnknownSwitchError) as context:
            usage.compile(Use.USAGE).parse(["notion", "use", "10", "--globl"])
        error = context.exception
        self.assertIn("--global", error.options["suggestions"])
        self.assertEqual(error.hint, "did you mean '--global'?")
        self.assertIn("third position", str(error))

    def testFlagAssignmentRaises(self):
        with self.assertRaises(FlagAssignmentError):
            usage.compile(Use.USAGE).parse(["notion", "use", "10", "--global=yes"])

    def testDuplicatedSwitchRaises(self):
        with self.assertRaises(DuplicatedSwitchError):
            usage.compile(Use.USAGE).parse(["notion", "use", "-g", "10", "--global"])

    def testMalformedTokenRaises(self):
        with self.assertRaises(MalformedTokenError):
            usage.compile(Use.USAGE).parse(["notion", "use", "--=10"])

    def testOptionValueRequired(self):
        with self.assertRaises(OptionValueRequiredError):
            usage.compile(SHELL_USAGE).parse(["notion", "activate", "--shell"])

    def testPatternMismatch(self):
        with self.assertRaises(PatternMismatchError) as context:
            usage.compile(Use.USAGE).parse(["notion", "use"])
        self.assertFalse(context.exception.is_help())
        self.assertIn("notion use [options] <version>", context.exception.hint)

    def testTooManyPositionals(self):
        with self.assertRaises(UsageError):
            usage.compile(Use.USAGE).parse(["notion", "use", "10", "12"])

    def testHelpShortCircuits(self):
        for argv in (["notion", "use", "--help"], ["notion", "use", "-h"], ["notion", "use", "--bogus", "--help"]):
            with self.subTest(argv=argv):
                with self.assertRaises(HelpRequest) as context:
                    usage.compile(Use.USAGE).parse(argv)
                self.assertTrue(context.exception.is_help())

    def testOptionsFirst(self):
        values = usage.compile(USAGE).parse(["notion", "-v", "use", "-g", "10"], options_first=True)
        self.assertTrue(values["--verbose"])
        self.assertEqual(values["<command>"], "use")
        self.assertEqual(values["<args>"], ["-g", "10"])

    def testOptionsFirstLeavesHelpToCommand(self):
        values = usage.compile(USAGE).parse(["notion", "use", "--help"], options_first=True)
        self.assertEqual(values["<command>"], "use")
        self.assertEqual(values["<args>"], ["--help"])


class TestDeserialize(TestCase):
    """Behavioral tests for filling Args dataclasses."""

    def testDeserialize(self):
        args = usage.compile(Use.USAGE).deserialize(["notion", "use", "-g", "10"], Use.Args)
        self.assertEqual(args, Use.Args(arg_version="10", flag_global=True))

    def testMissingCounterpartRejected(self):
        @dataclass
        class Args:
            arg_name: str

        with self.assertRaises(UsageGrammarError):
            usage.compile(Use.USAGE).deserialize(["notion", "use", "10"], Args)

    def testNonDataclassRejected(self):
        with self.assertRaises(TypeError):
            usage.compile(Use.USAGE).deserialize(["notion", "use", "10"], dict)


if __name__ == "__main__":
    unittest.main()
