"""
Output format tests (modes, capability masks, negotiation).

Scope
- Validate OutputMode lookups (case-insensitive) and spellings.
- Validate the mapping between modes and Formats bits.
- Validate DispatchContext defaults and supports() for leaves and groups.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cmdtree import (
    CommandGroup,
    DispatchContext,
    Formats,
    OutputMode,
    ANY_FORMAT,
    supports,
)


def noop(args, context):
    return 0


class TestOutputMode(TestCase):
    """Names and bits."""

    def testLookupIsCaseInsensitive(self):
        self.assertIs(OutputMode.lookup("json"), OutputMode.JSON)
        self.assertIs(OutputMode.lookup("JSON"), OutputMode.JSON)
        self.assertIs(OutputMode.lookup("Text"), OutputMode.TEXT)

    def testLookupMisses(self):
        self.assertIsNone(OutputMode.lookup("yaml"))
        self.assertIsNone(OutputMode.lookup(""))
        self.assertIsNone(OutputMode.lookup("jso"))

    def testLookupRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            OutputMode.lookup(1)

    def testLabels(self):
        self.assertEqual([mode.label for mode in OutputMode], ["text", "json"])

    def testFlags(self):
        self.assertIs(OutputMode.TEXT.flag, Formats.TEXT)
        self.assertIs(OutputMode.JSON.flag, Formats.JSON)
        self.assertEqual(ANY_FORMAT, Formats.TEXT | Formats.JSON)


class TestDispatchContext(TestCase):
    """Per-invocation state."""

    def testDefaultIsText(self):
        self.assertIs(DispatchContext().output_mode, OutputMode.TEXT)

    def testRepr(self):
        self.assertEqual(repr(DispatchContext(OutputMode.JSON)), "DispatchContext(output_mode='json')")

    def testRejectsPlainIntegers(self):
        with self.assertRaises(TypeError):
            DispatchContext(1)

    def testNoExtraAttributes(self):
        with self.assertRaises(AttributeError):
            DispatchContext().verbose = True


class TestSupports(TestCase):
    """Negotiation between the requested mode and a command."""

    def setUp(self):
        self.root = CommandGroup(name="tool")
        self.plain = self.root.command(noop, name="show")
        self.rich = self.root.command(noop, name="df", formats=Formats.TEXT | Formats.JSON)
        self.group = self.root.group("subvolume")

    def testTextAlwaysSupported(self):
        context = DispatchContext()
        for command in (self.plain, self.rich, self.group):
            with self.subTest(command=command.name):
                self.assertTrue(supports(command, context))

    def testJsonNeedsTheBit(self):
        context = DispatchContext(OutputMode.JSON)
        self.assertFalse(supports(self.plain, context))
        self.assertTrue(supports(self.rich, context))

    def testGroupsAcceptEveryMode(self):
        self.assertTrue(supports(self.group, DispatchContext(OutputMode.JSON)))

    def testJsonOnlyLeafStillSupportsText(self):
        leaf = self.root.command(noop, name="dump", formats=Formats.JSON)
        self.assertTrue(supports(leaf, DispatchContext()))
        self.assertTrue(supports(leaf, DispatchContext(OutputMode.JSON)))


if __name__ == "__main__":
    unittest.main()
