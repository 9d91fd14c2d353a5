"""
Utility behavioral tests (Unset sentinel, coalesce, normalize, ordinal).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from scriptkit.utils import Unset, UnsetType, coalesce, normalize, ordinal


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsey(self):
        self.assertFalse(Unset)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testUnionWithTypes(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", Unset | str)

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})


class TestCoalesce(TestCase):
    """Behavioral tests for coalesce()."""

    def testReplacesUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testKeepsFalseyValues(self):
        for value in (None, 0, "", False):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class TestNormalize(TestCase):
    """Behavioral tests for normalize()."""

    def testHyphensBecomeUnderscores(self):
        self.assertEqual(normalize("var-1"), "var_1")
        self.assertEqual(normalize("a-b-c"), "a_b_c")

    def testOtherNamesAreUnchanged(self):
        self.assertEqual(normalize("infile"), "infile")

    def testNonStringIsRejected(self):
        with self.assertRaises(TypeError):
            normalize(1)


class TestOrdinal(TestCase):
    """Behavioral tests for ordinal()."""

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        expected = {21: "21st", 22: "22nd", 23: "23rd", 24: "24th", 101: "101st"}
        for number, label in expected.items():
            with self.subTest(number=number):
                self.assertEqual(ordinal(number), label)

    def testTeens(self):
        for number in (11, 12, 13, 111, 112, 113):
            with self.subTest(number=number):
                self.assertEqual(ordinal(number), f"{number}th")


if __name__ == "__main__":
    unittest.main()
