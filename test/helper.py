"""
Help renderer behavioral tests.

Scope
- Validate the fixed help layout (usage, description, options, choices).
- Validate that styled and plain renderings carry the same characters.
- Validate console printing through rich.

Conventions
- Test method names follow CamelCase per project convention.
- Expected lines are built with "  %-20s %s" to mirror the column contract.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from rich.console import Console

from flatargs import Action, Argument, ArgumentParser, ValueType, render, render_text, print_help


def line(label, help):
    return "  %-20s %s\n" % (label, help)


class TestHelpLayout(TestCase):

    def setUp(self):
        self.declarations = (
            Argument("filename", help="File to copy", required=True),
            Argument("count", "-c", "--count", "Number of copies", type=ValueType.INTEGER, default="1"),
            Argument("mode", "-m", "--mode", "Copy strategy", choices=("fast", "safe")),
            Argument("verbose", "-v", "--verbose", "Chatty output", action=Action.FLAG),
        )

    def testFullLayout(self):
        expected = (
            "Usage: copy [options]\n"
            "Copy a file a number of times\n"
            "\n"
            "Options:\n"
            + line("filename", "File to copy")
            + line("-c, --count", "Number of copies")
            + line("-m, --mode", "Copy strategy (fast|safe)")
            + line("-v, --verbose", "Chatty output")
        )
        self.assertEqual(render("copy", "Copy a file a number of times", self.declarations), expected)

    def testEmptyDescriptionIsOmitted(self):
        self.assertEqual(render("tool", "", ()), "Usage: tool [options]\n\nOptions:\n")

    def testLongLabelKeepsOneSpace(self):
        argument = Argument("name", long="--a-really-long-option-name", help="Help")
        self.assertEqual(
            render("tool", "", (argument,)),
            "Usage: tool [options]\n\nOptions:\n  --a-really-long-option-name Help\n",
        )

    def testLabelAtColumnWidth(self):
        argument = Argument("name", long="-" * 20, help="Twenty")
        self.assertTrue(render("tool", "", (argument,)).endswith("  " + "-" * 20 + " Twenty\n"))

    def testSingleFlagLabel(self):
        argument = Argument("output", long="--output", help="Where to write")
        self.assertTrue(render("tool", "", (argument,)).endswith(line("--output", "Where to write")))

    def testRenderIsIdempotent(self):
        self.assertEqual(render("copy", "d", self.declarations), render("copy", "d", self.declarations))

    def testStyledAndPlainAgree(self):
        text = render_text("copy", "d", self.declarations)
        self.assertEqual(text.plain, render("copy", "d", self.declarations))
        self.assertTrue(text.spans)

    def testUncoloredHasNoStyles(self):
        text = render_text("copy", "d", self.declarations, colorful=False)
        self.assertFalse([span for span in text.spans if span.style])

    def testNonArgumentRejected(self):
        with self.assertRaises(TypeError):
            render("tool", "", ("filename",))


class TestHelpPrinting(TestCase):

    def testPrintToConsole(self):
        console = Console(color_system=None, force_terminal=False, width=200)
        with console.capture() as capture:
            print_help("copy", "Copy things", (Argument("filename", help="File to copy"),), console=console)
        self.assertEqual(
            [row.rstrip() for row in capture.get().splitlines()],
            [row.rstrip() for row in render("copy", "Copy things", (Argument("filename", help="File to copy"),)).splitlines()],
        )

    def testParserPrintHelp(self):
        parser = ArgumentParser("tool", "Does things")
        parser.add_argument("verbose", "-v", "--verbose", "Chatty output", action=Action.FLAG)
        console = Console(color_system=None, force_terminal=False, width=200)
        with console.capture() as capture:
            parser.print_help(console)
        self.assertIn("-v, --verbose", capture.get())
        self.assertTrue(capture.get().startswith("Usage: tool [options]"))


if __name__ == "__main__":
    unittest.main()
