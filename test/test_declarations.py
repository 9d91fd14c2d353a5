"""
Declaration behavioral tests (tokenizing, classification, table building).

Scope
- Validate whitespace splitting and bracket stripping.
- Validate token classification into Positional, KeywordOption and FlagOption.
- Validate the declaration table: order, defaults, uniqueness, usage line.

Conventions
- Test method names follow CamelCase per project convention.
- An explicit environ mapping is passed so os.environ never leaks into defaults.
"""
import os
import unittest
from unittest import TestCase
from unittest.mock import patch

from scriptkit.declarations import (
    Declaration,
    FlagOption,
    KeywordOption,
    Positional,
    classify,
    declare,
    split,
    tokenize,
)
from scriptkit.faults import DeclarationError, FaultCode


class TestTokenize(TestCase):
    """Behavioral tests for split() and tokenize()."""

    def testSplitsOnAnyWhitespace(self):
        self.assertEqual(split("a \t b\n  c"), ["a", "b", "c"])

    def testEmptyDeclarationHasNoTokens(self):
        self.assertEqual(tokenize(""), [])
        self.assertEqual(tokenize("   "), [])

    def testStripsOneBracketOnEachSide(self):
        self.assertEqual(tokenize("[--force] [[--x]]"), ["--force", "[--x]"])

    def testBracketsAreOptional(self):
        self.assertEqual(tokenize("--force [--mode=<m>]"), ["--force", "--mode=<m>"])

    def testQuotingIsNotSupported(self):
        self.assertEqual(tokenize("'a b'"), ["'a", "b'"])

    def testNonStringIsRejected(self):
        with self.assertRaises(TypeError):
            tokenize(["a", "b"])


class TestClassify(TestCase):
    """Behavioral tests for classify()."""

    def testBareWordIsPositional(self):
        self.assertEqual(classify("infile"), Positional("infile", "infile"))

    def testPositionalIsNormalized(self):
        self.assertEqual(classify("var-1"), Positional("var_1", "var-1"))

    def testKeywordOption(self):
        self.assertEqual(
            classify("--out-file=<path>"),
            KeywordOption("out_file", "out-file", "<path>"),
        )

    def testKeywordPlaceholderMayBeAnything(self):
        self.assertEqual(classify("--mode=fast|slow").placeholder, "fast|slow")

    def testFlagOption(self):
        self.assertEqual(classify("--dry-run"), FlagOption("dry_run", "dry-run"))

    def testEmptyPlaceholderIsRejected(self):
        with self.assertRaises(DeclarationError) as context:
            classify("--name=", index=2)
        self.assertEqual(context.exception.options["token"], "--name=")
        self.assertEqual(context.exception.options["index"], 2)
        self.assertIn("second position", context.exception.message)

    def testSecondEqualsIsRejected(self):
        with self.assertRaises(DeclarationError):
            classify("--name=a=b")

    def testSingleDashIsRejected(self):
        for token in ("-x", "-", "--"):
            with self.subTest(token=token):
                with self.assertRaises(DeclarationError):
                    classify(token)

    def testKeywordNameMustStartWithLetterOrUnderscore(self):
        with self.assertRaises(DeclarationError):
            classify("--1st=<v>")

    def testEmptyTokenIsRejected(self):
        with self.assertRaises(DeclarationError):
            classify("")

    def testDeclarationErrorIsValueError(self):
        with self.assertRaises(ValueError):
            classify("-x")


class TestDeclaration(TestCase):
    """Behavioral tests for the declaration table."""

    def testPositionalsKeepDeclaredOrder(self):
        table = declare("b a c", environ={})
        self.assertEqual([positional.name for positional in table.positionals], ["b", "a", "c"])

    def testDefaults(self):
        table = declare("infile [--outfile=<path>] [--force]", environ={})
        self.assertEqual(dict(table.defaults), {"outfile": None, "force": False})
        self.assertEqual(list(table.options), ["outfile", "force"])

    def testKeywordDefaultFromEnvironment(self):
        table = declare("[--outfile=<path>] [--force]", environ={"outfile": "x.txt", "force": "1"})
        self.assertEqual(dict(table.defaults), {"outfile": "x.txt", "force": False})

    def testEnvironmentIsLookedUpByNormalizedName(self):
        table = declare("[--out-file=<path>]", environ={"out-file": "a", "out_file": "b"})
        self.assertEqual(table.defaults["out_file"], "b")

    def testDefaultEnvironmentIsOsEnviron(self):
        with patch.dict(os.environ, {"outfile": "from-env"}):
            table = Declaration("[--outfile=<path>]")
        self.assertEqual(table.defaults["outfile"], "from-env")

    def testDuplicatedNamesAreRejected(self):
        for spec in ("a a", "a [--a]", "[--x=<v>] [--x]", "dry-run [--dry_run]"):
            with self.subTest(spec=spec):
                with self.assertRaises(DeclarationError) as context:
                    declare(spec, environ={})
                self.assertEqual(context.exception.code, FaultCode.MALFORMED_DECLARATION)

    def testMalformedTokenIsReportedWithPosition(self):
        with self.assertRaises(DeclarationError) as context:
            declare("a [--bad=]", environ={})
        self.assertEqual(context.exception.options["index"], 2)

    def testUsageKeepsBrackets(self):
        table = declare("  infile   [--outfile=<path>]\t[--force] ", environ={})
        self.assertEqual(table.usage, "infile [--outfile=<path>] [--force]")
        self.assertEqual(table.tokens, ("infile", "[--outfile=<path>]", "[--force]"))

    def testContains(self):
        table = declare("var-1 [--var-2=<path>]", environ={})
        self.assertIn("var_1", table)
        self.assertIn("var_2", table)
        self.assertNotIn("var-1", table)

    def testTablesAreReadOnly(self):
        table = declare("[--force]", environ={})
        with self.assertRaises(TypeError):
            table.defaults["force"] = True  # type: ignore[index]

    def testRepr(self):
        self.assertEqual(repr(declare("a", environ={})), "Declaration('a')")


if __name__ == "__main__":
    unittest.main()
