# python
"""
Faults behavioral tests (exit codes, replacement, triggering and rendering).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import io
import unittest
from unittest import TestCase

from rich.console import Console

from notion.faults import (
    CliParseError,
    CliValidationError,
    ConfigKeyError,
    EnvironmentFault,
    ExitCode,
    FaultCode,
    HelpRequest,
    NoVersionError,
    NotInstalledError,
    NotionFault,
    PatternMismatchError,
    StateFileError,
    UnknownCommandError,
    report,
    trigger,
)


class TestExitCodes(TestCase):
    def testExitCodes(self):
        expected = {
            NotionFault: ExitCode.UNKNOWN_ERROR,
            UnknownCommandError: ExitCode.INVALID_ARGUMENTS,
            PatternMismatchError: ExitCode.INVALID_ARGUMENTS,
            CliParseError: ExitCode.INVALID_ARGUMENTS,
            CliValidationError: ExitCode.INVALID_ARGUMENTS,
            NotInstalledError: ExitCode.NO_VERSION_MATCH,
            NoVersionError: ExitCode.NO_VERSION_MATCH,
            EnvironmentFault: ExitCode.ENVIRONMENT_ERROR,
            StateFileError: ExitCode.FILE_SYSTEM_ERROR,
            ConfigKeyError: ExitCode.CONFIGURATION_ERROR,
        }
        for type, code in expected.items():
            with self.subTest(type=type.__name__):
                self.assertEqual(type("failure").exit_code, code)

    def testSyntaxAndValidationAreDistinct(self):
        self.assertNotEqual(CliParseError.code, CliValidationError.code)
        self.assertFalse(issubclass(CliValidationError, CliParseError))

    def testHelpRequest(self):
        self.assertTrue(HelpRequest("help requested").is_help())
        self.assertFalse(PatternMismatchError("no match").is_help())

    def testOverrides(self):
        fault = NotionFault("boom", code=FaultCode.ENVIRONMENT, exit_code=ExitCode.ENVIRONMENT_ERROR)
        self.assertIs(fault.code, FaultCode.ENVIRONMENT)
        self.assertEqual(fault.exit_code, 6)


class TestFaultBehavior(TestCase):
    def testStrFallsBackToTitle(self):
        self.assertEqual(str(UnknownCommandError("unknown command 'x'")), "unknown command 'x'")
        self.assertEqual(str(UnknownCommandError()), "unknown command")

    def testReplaceKeepsTypeAndMergesOptions(self):
        fault = NotInstalledError("node 10 is not installed", version="10")
        replaced = copy.replace(fault, hint="install it first")
        self.assertIsInstance(replaced, NotInstalledError)
        self.assertEqual(replaced.message, fault.message)
        self.assertEqual(dict(replaced.options), {"version": "10", "hint": "install it first"})
        self.assertIsNone(fault.hint)

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            NotionFault("boom").options["hint"] = "x"

    def testFromUsage(self):
        error = PatternMismatchError("'use' does not match any usage pattern", input=["use"], hint="usage: x")
        fault = CliParseError.from_usage(error, command="use")
        self.assertEqual(fault.message, error.message)
        self.assertEqual(fault.options["command"], "use")
        self.assertIs(fault.options["cause"], error)
        self.assertEqual(fault.hint, "usage: x")

    def testFromUsageDefaultHint(self):
        fault = CliParseError.from_usage(PatternMismatchError("no match"), command="use")
        self.assertEqual(fault.hint, "run 'notion help use' to see the expected usage")

    def testTriggerRaises(self):
        with self.assertRaises(UnknownCommandError):
            trigger(UnknownCommandError("unknown command 'x'"))

    def testTriggerRequiresFault(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("x"))


class TestRendering(TestCase):
    def render(self, fault):
        output = io.StringIO()
        code = report(fault, console=Console(file=output, width=200), colorful=False)
        return code, output.getvalue()

    def testReport(self):
        code, text = self.render(UnknownCommandError("unknown command 'x'", hint="run 'notion help'"))
        self.assertEqual(code, ExitCode.INVALID_ARGUMENTS)
        self.assertEqual(text.splitlines(), [
            "[ notion — %d | Unknown Command ]" % FaultCode.UNKNOWN_COMMAND,
            "unknown command 'x'",
            " → run 'notion help'",
        ])

    def testReportWithoutHint(self):
        _, text = self.render(ConfigKeyError("configuration key 'a' is not set"))
        self.assertEqual(len(text.splitlines()), 2)

    def testColorfulReportUsesFaultCode(self):
        output = io.StringIO()
        terminal = Console(file=output, width=200, force_terminal=True, color_system="truecolor")
        report(StateFileError("could not read state.json"), console=terminal)
        self.assertIn("\x1b[", output.getvalue())
        self.assertIn(str(FaultCode.STATE_FILE.value), output.getvalue())
        self.assertIn("Unreadable State File", output.getvalue())

    def testPlainReportHasNoStyles(self):
        _, text = self.render(StateFileError("could not read state.json"))
        self.assertNotIn("\x1b[", text)
        self.assertEqual(text.splitlines()[0], "[ notion — %d | Unreadable State File ]" % FaultCode.STATE_FILE)


if __name__ == "__main__":
    unittest.main()
