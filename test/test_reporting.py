"""
Reporting behavioral tests (timestamps, verbosity levels, call stacks).

Scope
- Validate the verbosity resolution order (__main__, environment, default).
- Validate which of err/warn/msg print at each verbosity level.
- Validate the call stack printed with errors at verbosity 3.

Conventions
- Test method names follow CamelCase per project convention.
- The module console is patched with an in-memory console to capture stderr.
"""
import __main__
import io
import os
import re
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from scriptkit import reporting
from scriptkit.reporting import callstack, err, msg, notimplemented, timestamp, verbosity, warn


class ReportingTestCase(TestCase):

    def setUp(self):
        self.buffer = io.StringIO()
        patcher = patch.object(
            reporting, "console", Console(file=self.buffer, width=200, color_system=None, force_terminal=False)
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def report(self, level, function, *message):
        with patch.dict(os.environ, {"VERBOSITY": str(level)}):
            function(*message)
        return self.buffer.getvalue()


class TestTimestamp(TestCase):
    """Behavioral tests for timestamp()."""

    def testFormat(self):
        self.assertRegex(timestamp(), r"^\[\d{4}-\d{2}-\d{2}-@-\d{2}:\d{2}:\d{2}[+-]\d{4}\]$")


class TestVerbosity(TestCase):
    """Behavioral tests for verbosity()."""

    def testDefault(self):
        with patch.dict(os.environ, clear=True):
            self.assertEqual(verbosity(), 3)

    def testEnvironment(self):
        with patch.dict(os.environ, {"VERBOSITY": "1"}):
            self.assertEqual(verbosity(), 1)

    def testMainAttributeWins(self):
        with patch.dict(os.environ, {"VERBOSITY": "1"}):
            with patch.object(__main__, "__verbosity__", 0, create=True):
                self.assertEqual(verbosity(), 0)

    def testInvalidLevel(self):
        with patch.dict(os.environ, {"VERBOSITY": "loud"}):
            with self.assertRaises(ValueError):
                verbosity()


class TestLevels(ReportingTestCase):
    """Behavioral tests for err(), warn() and msg() at each verbosity."""

    def testMessageNeedsVerbosityTwo(self):
        self.assertEqual(self.report(1, msg, "hello"), "")
        self.assertIn("hello", self.report(2, msg, "hello"))

    def testWarningNeedsVerbosityOne(self):
        self.assertEqual(self.report(0, warn, "careful"), "")
        self.assertIn("Warning: careful", self.report(1, warn, "careful"))

    def testErrorIsAlwaysShown(self):
        output = self.report(0, err, "disk", "full")
        self.assertRegex(output, r"^\[[^\]]+\] Error: disk full\n$")

    def testErrorPrintsCallStackAtVerbosityThree(self):
        output = self.report(3, err, "disk full")
        lines = output.splitlines()
        self.assertTrue(lines[0].startswith("["))
        self.assertEqual(lines[-1], "Error: disk full")
        self.assertIn("test_reporting.py:report:", output)
        self.assertNotIn(":err:", output)

    def testNotImplementedNamesCaller(self):
        def unfinished():
            notimplemented()

        output = self.report(2, unfinished)
        self.assertIn("Error: unfinished is not yet implemented!", output)


class TestCallStack(TestCase):
    """Behavioral tests for callstack()."""

    def testInnermostFrameIsLast(self):
        def inner():
            return callstack()

        lines = inner().plain.splitlines()
        self.assertRegex(lines[-1], r"^  ⮡ test_reporting\.py:inner:\d+$")
        self.assertRegex(lines[-2], r"^  ⮡ test_reporting\.py:testInnermostFrameIsLast:\d+$")

    def testSourceContextIsNotRead(self):
        with patch.object(reporting.inspect, "stack", wraps=reporting.inspect.stack) as stack:
            callstack()
        stack.assert_called_once_with(0)

    def testSkipDropsInnerFrames(self):
        def inner():
            return callstack(skip=1)

        last = inner().plain.splitlines()[-1]
        self.assertTrue(re.search(r":testSkipDropsInnerFrames:\d+$", last))


if __name__ == "__main__":
    unittest.main()
