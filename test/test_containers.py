"""
Containers module behavioral tests (registration, conflicts, resolution, groups).

Scope
- Validate add_option() forms and the no-duplicate-spelling invariant.
- Validate exact short lookup and long prefix abbreviation.
- Validate option groups: parent handle, attach-time merging and conflicts.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optnaut import (
    Option,
    OptionGroup,
    OptionParser,
    UnknownOptionError,
    AmbiguousOptionError,
)


class TestRegistration(TestCase):
    """Behavioral tests for add_option() and lookups."""

    def setUp(self):
        self.parser = OptionParser(prog="tool")

    def testAddOptionReturnsTheOption(self):
        o = self.parser.add_option("-f", "--file", help="input")
        self.assertIsInstance(o, Option)
        self.assertEqual(self.parser.options, (o,))
        self.assertIs(self.parser.get_option("-f"), o)
        self.assertIs(self.parser.get_option("--file"), o)

    def testAddOptionAcceptsAnInstance(self):
        o = Option("-q", action="store_true")
        self.assertIs(self.parser.add_option(o), o)
        self.assertTrue(self.parser.has_option("-q"))

    def testInstanceWithAttributesRejected(self):
        with self.assertRaises(TypeError):
            self.parser.add_option(Option("-q"), help="quiet")

    def testConflictingShortNameRejected(self):
        self.parser.add_option("-f", "--file")
        with self.assertRaises(ValueError) as context:
            self.parser.add_option("-f", "--force")
        self.assertIn("-f", str(context.exception))
        self.assertFalse(self.parser.has_option("--force"))

    def testConflictingLongNameRejected(self):
        self.parser.add_option("--file")
        with self.assertRaises(ValueError):
            self.parser.add_option("-F", "--file")

    def testGetOptionUnknown(self):
        self.assertIsNone(self.parser.get_option("--nope"))
        self.assertIsNone(self.parser.get_option("plain"))
        self.assertFalse(self.parser.has_option("-z"))


class TestResolution(TestCase):
    """Behavioral tests for resolve_short() and resolve_long()."""

    def setUp(self):
        self.parser = OptionParser(prog="tool")
        self.foo = self.parser.add_option("--foo")
        self.foobar = self.parser.add_option("--foobar")
        self.foobaz = self.parser.add_option("--foobaz")
        self.verbose = self.parser.add_option("-v", "--verbose", action="count")

    def testResolveShort(self):
        self.assertIs(self.parser.resolve_short("v"), self.verbose)

    def testResolveShortUnknown(self):
        with self.assertRaises(UnknownOptionError) as context:
            self.parser.resolve_short("x")
        self.assertEqual(str(context.exception), "no such option: -x")

    def testExactLongMatchWinsOverPrefix(self):
        self.assertEqual(self.parser.resolve_long("foo"), ("foo", self.foo))

    def testUniquePrefixResolves(self):
        self.assertEqual(self.parser.resolve_long("verb"), ("verbose", self.verbose))
        self.assertEqual(self.parser.resolve_long("foobaz"), ("foobaz", self.foobaz))

    def testAmbiguousPrefix(self):
        with self.assertRaises(AmbiguousOptionError) as context:
            self.parser.resolve_long("foob")
        self.assertEqual(str(context.exception), "ambiguous option: --foob (--foobar, --foobaz?)")
        self.assertEqual(context.exception.candidates, ("--foobar", "--foobaz"))

    def testUnknownLong(self):
        with self.assertRaises(UnknownOptionError) as context:
            self.parser.resolve_long("bar")
        self.assertEqual(str(context.exception), "no such option: --bar")


class TestOptionGroup(TestCase):
    """Behavioral tests for option groups."""

    def setUp(self):
        self.parser = OptionParser(prog="tool")

    def testGroupKeepsItsParser(self):
        group = OptionGroup(self.parser, "Extra", "more switches")
        self.assertIs(group.parser, self.parser)
        self.assertEqual(group.title, "Extra")
        self.assertEqual(group.description, "more switches")

    def testGroupRequiresAParser(self):
        with self.assertRaises(TypeError):
            OptionGroup(object(), "Extra")
        with self.assertRaises(TypeError):
            OptionGroup(OptionGroup(self.parser, "Outer"), "Inner")

    def testAttachMergesIndices(self):
        group = OptionGroup(self.parser, "Extra")
        o = group.add_option("-x", "--extra")
        self.assertFalse(self.parser.has_option("-x"))
        self.parser.add_option_group(group)
        self.assertIs(self.parser.resolve_short("x"), o)
        self.assertEqual(self.parser.groups, (group,))

    def testOptionsAddedAfterAttachAreIndexed(self):
        group = self.parser.add_option_group("Extra", "more switches")
        o = group.add_option("--late")
        self.assertEqual(self.parser.resolve_long("la"), ("late", o))
        self.assertEqual(self.parser.options, ())

    def testGroupConflictsWithParser(self):
        self.parser.add_option("-x")
        group = self.parser.add_option_group("Extra")
        with self.assertRaises(ValueError):
            group.add_option("-x")

    def testAttachConflictRejected(self):
        first = OptionGroup(self.parser, "First")
        first.add_option("--shared")
        second = OptionGroup(self.parser, "Second")
        second.add_option("--shared")
        self.parser.add_option_group(first)
        with self.assertRaises(ValueError):
            self.parser.add_option_group(second)
        self.assertEqual(self.parser.groups, (first,))

    def testAttachOnlyOnce(self):
        group = self.parser.add_option_group("Extra")
        with self.assertRaises(ValueError):
            self.parser.add_option_group(group)

    def testAttachToAnotherParserRejected(self):
        group = OptionGroup(OptionParser(prog="other"), "Extra")
        with self.assertRaises(ValueError):
            self.parser.add_option_group(group)


if __name__ == "__main__":
    unittest.main()
