"""
Values and convert modules behavioral tests.

Scope
- Validate the read-only mapping view, append lists and user-set marks.
- Validate default filling (never overrides, never marks user-set).
- Validate typed decoding through decode() and Values.get_as().

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from collections.abc import Mapping
from unittest import TestCase

from optnaut import Values, decode


class TestValues(TestCase):
    """Behavioral tests for the value store."""

    def setUp(self):
        self.values = Values()

    def testEmptyStore(self):
        self.assertIsInstance(self.values, Mapping)
        self.assertEqual(len(self.values), 0)
        self.assertFalse(self.values.is_set("x"))
        self.assertEqual(self.values.all("x"), ())
        self.assertIsNone(self.values.get("x"))

    def testStoreMarksUserSet(self):
        self.values._store("name", "alpha")
        self.assertEqual(self.values["name"], "alpha")
        self.assertTrue(self.values.is_set("name"))
        self.assertTrue(self.values.is_set_by_user("name"))

    def testAppendKeepsOrderAndLatest(self):
        self.values._append("tag", "x")
        self.values._append("tag", "y")
        self.assertEqual(self.values.all("tag"), ("x", "y"))
        self.assertEqual(self.values["tag"], "y")

    def testFillOnlyWhenUnset(self):
        self.values._store("a", "user")
        self.values._fill("a", "default")
        self.values._fill("b", "default")
        self.assertEqual(self.values["a"], "user")
        self.assertEqual(self.values["b"], "default")
        self.assertTrue(self.values.is_set("b"))
        self.assertFalse(self.values.is_set_by_user("b"))

    def testGetAs(self):
        self.values._store("n", "12")
        self.values._store("flag", "1")
        self.assertEqual(self.values.get_as("n", int), 12)
        self.assertIs(self.values.get_as("flag", "bool"), True)
        self.assertEqual(self.values.get_as("missing", int, 7), 7)

    def testGetAsInvalid(self):
        self.values._store("n", "twelve")
        with self.assertRaises(ValueError):
            self.values.get_as("n", int)

    def testRepr(self):
        self.values._store("a", "1")
        self.assertEqual(repr(self.values), "values({'a': '1'})")


class TestDecode(TestCase):
    """Behavioral tests for decode()."""

    def testScalars(self):
        self.assertEqual(decode("3", int), 3)
        self.assertEqual(decode("3", "long"), 3)
        self.assertEqual(decode("2.5", "double"), 2.5)
        self.assertEqual(decode("1+2j", complex), 1 + 2j)
        self.assertEqual(decode("text", "string"), "text")

    def testBooleans(self):
        for text in ("1", "true", "Yes", "ON"):
            with self.subTest(text=text):
                self.assertIs(decode(text, bool), True)
        for text in ("0", "false", "no", "Off"):
            with self.subTest(text=text):
                self.assertIs(decode(text, bool), False)
        with self.assertRaises(ValueError):
            decode("maybe", bool)

    def testInvalidNumber(self):
        with self.assertRaises(ValueError) as context:
            decode("x", float)
        self.assertEqual(str(context.exception), "invalid float value: 'x'")

    def testUnsupportedKind(self):
        with self.assertRaises(TypeError):
            decode("1", list)
        with self.assertRaises(TypeError):
            decode("1", "decimal")
        with self.assertRaises(TypeError):
            decode(1, int)


if __name__ == "__main__":
    unittest.main()
