"""
Fault tests (statuses, rendering, trigger).

Scope
- Validate exit statuses and codes of every dispatch fault.
- Validate trigger(): header, message and hint on standard error, and where epilogues go.
- Validate option merging through __replace__ and the fancy/plain renderables.

Conventions
- Test method names follow CamelCase per project convention.
- Standard streams are captured with contextlib.redirect_stderr / redirect_stdout.
"""

from __future__ import annotations

import contextlib
import io
import unittest
from unittest import TestCase

from rich.panel import Panel

from cmdtree import (
    CommandGroup,
    FaultCode,
    DispatchError,
    UnknownTokenError,
    AmbiguousTokenError,
    MissingCommandError,
    UnrecognizedGlobalOptionError,
    InvalidFormatError,
    UnsupportedFormatError,
    OutputMode,
    Painter,
    trigger,
)


def noop(args, context):
    return 0


class FaultTestCase(TestCase):

    def setUp(self):
        self.root = CommandGroup("tool <command> [<args>]", name="tool")
        self.check = self.root.command(noop, name="check", descr="Check a filesystem")
        self.root.command(noop, name="quota", descr="manage quotas")
        self.painter = Painter()

    def capture(self, fault, **options):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            status = trigger(fault, prog="tool", **options)
        return status, stderr.getvalue()


class TestStatuses(FaultTestCase):
    """Codes and exit statuses."""

    def testUsageErrorsExitWithOne(self):
        faults = (
            UnknownTokenError(token="x", group=self.root),
            AmbiguousTokenError(token="q", candidates=()),
            MissingCommandError(group=self.root),
            InvalidFormatError(value="yaml"),
            UnsupportedFormatError(command=self.check, mode=OutputMode.JSON),
        )
        for fault in faults:
            with self.subTest(fault=type(fault).__name__):
                self.assertEqual(fault.status, 1)
                self.assertIsInstance(fault, DispatchError)

    def testUnrecognizedGlobalOptionExitsWith129(self):
        self.assertEqual(UnrecognizedGlobalOptionError(token="--bogus").status, 129)

    def testCodes(self):
        self.assertIs(UnknownTokenError.code, FaultCode.UNKNOWN_TOKEN)
        self.assertIs(UnrecognizedGlobalOptionError.code, FaultCode.UNRECOGNIZED_GLOBAL_OPTION)
        self.assertEqual(FaultCode.UNSUPPORTED_FORMAT.normalize(), "11122")

    def testMessageMustBeAString(self):
        with self.assertRaises(TypeError):
            DispatchError(42)

    def testPositionInMessage(self):
        self.assertIn("third position", UnknownTokenError(token="x", group=self.root, index=3).message)
        self.assertNotIn("position", UnknownTokenError(token="x", group=self.root, index=0).message)


class TestReplace(FaultTestCase):
    """Options merging."""

    def testReplaceMergesOptions(self):
        fault = InvalidFormatError(value="yaml")
        replaced = fault.__replace__(prog="tool", fancy=True)
        self.assertIsNot(replaced, fault)
        self.assertIsInstance(replaced, InvalidFormatError)
        self.assertEqual(replaced.message, fault.message)
        self.assertEqual(replaced.options["value"], "yaml")
        self.assertTrue(replaced.options["fancy"])
        self.assertNotIn("fancy", fault.options)

    def testOptionsAreReadOnly(self):
        fault = InvalidFormatError(value="yaml")
        with self.assertRaises(TypeError):
            fault.options["value"] = "json"

    def testFancyRendersAPanel(self):
        fault = MissingCommandError(group=self.root)
        self.assertIsInstance(fault.__replace__(fancy=True).__rich__(), Panel)
        self.assertNotIsInstance(fault.__rich__(), Panel)


class TestTrigger(FaultTestCase):
    """Rendering on standard error."""

    def testHeaderMessageAndHint(self):
        status, stderr = self.capture(UnknownTokenError(token="frobnicate", group=self.root, index=1))
        self.assertEqual(status, 1)
        self.assertIn("[ tool — 11101 | Unknown Token ]", stderr)
        self.assertIn("unknown token 'frobnicate' at first position", stderr)
        self.assertIn("→", stderr)
        self.assertIn("'check'", stderr)

    def testNoEpilogueWithoutPainter(self):
        _, stderr = self.capture(UnknownTokenError(token="x", group=self.root))
        self.assertNotIn("usage", stderr)

    def testUnknownTokenEpilogueIsGroupUsage(self):
        _, stderr = self.capture(UnknownTokenError(token="x", group=self.root), painter=self.painter)
        self.assertIn("usage: tool <command> [<args>]", stderr)
        self.assertIn("Check a filesystem", stderr)

    def testShortMissingCommandEpilogue(self):
        _, stderr = self.capture(MissingCommandError(group=self.root, short=True), painter=self.painter)
        self.assertIn("no command given for 'tool'", stderr)
        self.assertIn("Commands:", stderr)
        self.assertIn("For an overview of a given command use 'tool command --help'", stderr)

    def testInvalidFormatEpilogue(self):
        status, stderr = self.capture(InvalidFormatError(value="yaml"), painter=self.painter, root=self.root)
        self.assertEqual(status, 1)
        self.assertIn("invalid output format 'yaml'", stderr)
        self.assertIn("usage: tool <command> [<args>]", stderr)
        self.assertNotIn("Check a filesystem", stderr)
        self.assertIn('Options for --format are: "text", "json"', stderr)

    def testUnsupportedFormatEpilogue(self):
        fault = UnsupportedFormatError(command=self.check, mode=OutputMode.JSON)
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            _, stderr = self.capture(fault, painter=self.painter)
        self.assertIn("json output is unsupported for 'tool check'", stderr)
        self.assertNotIn("usage", stderr)
        self.assertIn("usage: tool check [<args>]", stdout.getvalue())

    def testCustomHintKept(self):
        _, stderr = self.capture(UnrecognizedGlobalOptionError(token="--help=yes", hint="no value please"))
        self.assertIn("no value please", stderr)
        self.assertNotIn("global options are", stderr)

    def testTriggerRejectsOtherExceptions(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))


if __name__ == "__main__":
    unittest.main()
