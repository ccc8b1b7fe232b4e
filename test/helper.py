# python
"""
Help rendering tests (usage line, groups, annotations, wrapping).

Scope
- Validate the usage line shape for flags, options, choices and nargs.
- Validate the positionals / options groups and their annotations.
- Validate description, epilog, fancy panels and width wrapping.

Conventions
- Test method names follow CamelCase per project convention.
- Output is read through format_help(width), which renders without color.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from argsmith import ArgumentParser, ParseStatus


def capture():
    return Console(file=io.StringIO(), color_system=None, width=200)


def convert(**options):
    parser = ArgumentParser(
        "convert",
        "convert data files",
        "see the manual",
        stdout=capture(),
        stderr=capture(),
        **options,
    )
    parser.add_argument(["input"], "input file", "str", required=True)
    parser.add_argument(["-v", "--verbose"], "chatty output", "bool")
    parser.add_argument(["--count"], "items to process", "int", default="10")
    parser.add_argument(["--format"], "output format", "str", default="json", choices=["json", "xml", "csv"])
    parser.add_argument(["--files"], "additional files", "str", nargs="*")
    return parser


class TestUsage(TestCase):
    def testUsageLine(self):
        self.assertIn(
            "usage: convert [-h] [-v] [--count COUNT] [--format {json,xml,csv}] [--files [FILES ...]] input",
            convert().format_help(200),
        )

    def testUsageWrapsWithHangingIndent(self):
        rendered = convert().format_help(60)
        self.assertIn("usage: convert [-h] [-v] [--count COUNT]\n", rendered)
        self.assertIn("\n" + " " * 15 + "[--format {json,xml,csv}]\n", rendered)
        self.assertIn("\n" + " " * 15 + "[--files [FILES ...]] input\n", rendered)

    def testRequiredOptionIsNotBracketed(self):
        parser = ArgumentParser("tool")
        parser.add_argument(["--name"], required=True)
        self.assertIn("usage: tool [-h] --name NAME", parser.format_help(200))

    def testNargsShapes(self):
        parser = ArgumentParser("tool")
        parser.add_argument(["--point"], type="float", nargs="2")
        parser.add_argument(["--nums"], type="int", nargs="+")
        parser.add_argument(["--level"], type="int", nargs="?")
        rendered = parser.format_help(200)
        self.assertIn("[--point POINT POINT]", rendered)
        self.assertIn("[--nums NUMS [NUMS ...]]", rendered)
        self.assertIn("[--level [LEVEL]]", rendered)

    def testMetavarOverride(self):
        parser = ArgumentParser("tool")
        parser.add_argument(["-o", "--output"], metavar="PATH")
        self.assertIn("[-o PATH]", parser.format_help(200))

    def testOptionalPositionalIsBracketed(self):
        parser = ArgumentParser("tool")
        parser.add_argument(["files"], nargs="*")
        self.assertIn("usage: tool [-h] [files ...]", parser.format_help(200))


class TestSections(TestCase):
    def setUp(self):
        self.rendered = convert().format_help(200)

    def testDescriptionAndEpilog(self):
        self.assertIn("convert data files", self.rendered)
        self.assertTrue(self.rendered.rstrip().endswith("see the manual"))

    def testGroupsInOrder(self):
        self.assertLess(self.rendered.index("positionals:"), self.rendered.index("options:"))

    def testHelpEntry(self):
        self.assertIn("  -h, --help", self.rendered)
        self.assertIn("show this help message and exit", self.rendered)

    def testFlagHasNoMetavar(self):
        self.assertIn("  -v, --verbose", self.rendered)
        self.assertNotIn("VERBOSE", self.rendered)

    def testAnnotations(self):
        self.assertIn("input file (required)", self.rendered)
        self.assertIn("items to process (default: 10)", self.rendered)
        self.assertIn("output format (default: json)", self.rendered)

    def testHelpColumnAligned(self):
        line, = [line for line in self.rendered.splitlines() if "chatty output" in line]
        self.assertEqual(line.index("chatty output"), 24)

    def testFancyPanel(self):
        rendered = convert(fancy=True).format_help(200)
        self.assertIn("CONVERT HELP", rendered)
        self.assertIn("convert data files", rendered)


class TestPrinting(TestCase):
    def testHelpTokenPrintsToStdout(self):
        parser = convert()
        self.assertEqual(parser.parse_args(["convert", "--help"]), ParseStatus.HELP)
        self.assertIn("usage: convert", parser.stdout.file.getvalue())
        self.assertEqual(parser.stderr.file.getvalue(), "")

    def testPrintHelpToGivenConsole(self):
        console = capture()
        convert().print_help(console)
        self.assertIn("positionals:", console.file.getvalue())

    def testStylesOverride(self):
        main = __import__("__main__")
        previous = getattr(main, "__styles__", None)
        main.__styles__ = {"usage-label": "bold red"}
        try:
            self.assertIn("usage: convert", convert().format_help(200))
        finally:
            if previous is None:
                del main.__styles__
            else:
                main.__styles__ = previous


if __name__ == "__main__":
    unittest.main()
