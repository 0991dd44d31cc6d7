"""
Faults module behavioral tests (codes, rendering, exit signals, trigger).

Scope
- Validate FaultCode normalization with and without host labels.
- Validate the plain-text report and rich rendering of OptionFault.
- Validate ParserExit / warning surfacing through trigger().

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
import warnings
from contextlib import redirect_stdout, redirect_stderr
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console
from rich.panel import Panel

from optnaut import (
    FaultCode,
    OptionFault,
    UnknownOptionError,
    ParserExit,
    HelpExit,
    UnboundCallbackWarning,
    trigger,
)
from optnaut import faults


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode."""

    def testNormalizeWithoutLabels(self):
        self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "11101")

    def testNormalizeWithHostLabels(self):
        main = __import__("__main__")
        with patch.object(main, "__codes__", {FaultCode.INVALID_CHOICE: "E-CHOICE"}, create=True):
            self.assertEqual(FaultCode.INVALID_CHOICE.normalize(), "E-CHOICE")


class TestOptionFault(TestCase):
    """Behavioral tests for fault rendering."""

    def testRenderWithUsageAndProg(self):
        fault = UnknownOptionError("no such option: -x", usage="Usage: tool [options]\n", prog="tool")
        self.assertEqual(fault.render(), "Usage: tool [options]\n\ntool: error: no such option: -x\n")

    def testRenderWithoutUsage(self):
        fault = UnknownOptionError("no such option: -x", prog="tool")
        self.assertEqual(fault.render(), "tool: error: no such option: -x\n")
        self.assertEqual(OptionFault("boom").render(), "error: boom\n")

    def testReplaceKeepsTypeAndMergesOptions(self):
        fault = UnknownOptionError("no such option: -x", code=FaultCode.UNKNOWN_OPTION)
        replaced = fault.__replace__(prog="tool")
        self.assertIsInstance(replaced, UnknownOptionError)
        self.assertEqual(replaced.options["prog"], "tool")
        self.assertEqual(replaced.options["code"], FaultCode.UNKNOWN_OPTION)
        self.assertNotIn("prog", fault.options)

    def testRichPlainMatchesRender(self):
        fault = UnknownOptionError("no such option: -x", usage="Usage: tool [options]\n", prog="tool")
        console = Console(file=io.StringIO(), width=80, color_system=None)
        console.print(fault, soft_wrap=True, highlight=False)
        self.assertEqual(console.file.getvalue(), fault.render())

    def testRichFancyIsAPanel(self):
        fault = UnknownOptionError("no such option: -x", prog="tool", fancy=True, code=FaultCode.UNKNOWN_OPTION)
        self.assertIsInstance(fault.__rich__(), Panel)

    def testTriggerExitsWithStatusOne(self):
        stream = io.StringIO()
        with patch.object(faults, "console", Console(file=stream, width=80, color_system=None)):
            with self.assertRaises(SystemExit) as context:
                trigger(UnknownOptionError("no such option: -x"), prog="tool")
        self.assertEqual(context.exception.code, 1)
        self.assertEqual(stream.getvalue(), "tool: error: no such option: -x\n")


class TestParserExit(TestCase):
    """Behavioral tests for exit signals."""

    def testTriggerPrintsToStdout(self):
        stdout = io.StringIO()
        with redirect_stdout(stdout), self.assertRaises(SystemExit) as context:
            trigger(HelpExit(0, "Usage: tool\n"))
        self.assertEqual(context.exception.code, 0)
        self.assertEqual(stdout.getvalue(), "Usage: tool\n")

    def testTriggerPrintsToStderr(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            trigger(ParserExit(3, "bye\n"), stderr=True)
        self.assertEqual(context.exception.code, 3)
        self.assertEqual(stderr.getvalue(), "bye\n")

    def testTriggerRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


class TestWarnings(TestCase):
    """Behavioral tests for soft diagnostics."""

    def testTriggerWarns(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            trigger(UnboundCallbackWarning("option -c has no callback bound and was ignored"))
        self.assertEqual(len(caught), 1)
        self.assertIs(caught[0].category, UnboundCallbackWarning)
        self.assertEqual(str(caught[0].message), "option -c has no callback bound and was ignored")


if __name__ == "__main__":
    unittest.main()
