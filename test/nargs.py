# python
"""
Nargs model tests (marker parsing, variants, cardinality rules).

Scope
- Validate Nargs.parse for every accepted marker and its rejections.
- Validate singleton identity of the payload-free variants.
- Validate ExactlyN construction, equality and structural matching.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argsmith import Nargs, ExactlyOne, Optional, ZeroOrMore, OneOrMore, ExactlyN
from argsmith.faults import InvalidNargsSpecificationError
from argsmith.nargs import COUNT_MAX
from argsmith.utils import Unset


class TestNargsParse(TestCase):
    def testEmptyMarkerIsExactlyOne(self):
        self.assertIs(Nargs.parse(""), ExactlyOne())

    def testOneMarkerIsExactlyOne(self):
        self.assertIs(Nargs.parse("1"), ExactlyOne())
        self.assertIs(Nargs.parse(1), ExactlyOne())

    def testUnsetMarkerIsExactlyOne(self):
        self.assertIs(Nargs.parse(Unset), ExactlyOne())

    def testSymbolMarkers(self):
        self.assertIs(Nargs.parse("?"), Optional())
        self.assertIs(Nargs.parse("*"), ZeroOrMore())
        self.assertIs(Nargs.parse("+"), OneOrMore())

    def testSurroundingWhitespaceRejected(self):
        for marker in (" + ", "* ", " 2"):
            with self.subTest(marker=marker):
                with self.assertRaises(InvalidNargsSpecificationError):
                    Nargs.parse(marker)

    def testDigitsAreExactlyN(self):
        self.assertEqual(Nargs.parse("3"), ExactlyN(3))
        self.assertEqual(Nargs.parse(2), ExactlyN(2))
        self.assertEqual(Nargs.parse("0"), ExactlyN(0))

    def testVariantPassesThrough(self):
        variant = ExactlyN(4)
        self.assertIs(Nargs.parse(variant), variant)

    def testInvalidMarkersRejected(self):
        for marker in ("abc", "-1", "2.5", "**", "+?", "one"):
            with self.subTest(marker=marker):
                with self.assertRaises(InvalidNargsSpecificationError):
                    Nargs.parse(marker)

    def testInvalidMarkerIsValueError(self):
        with self.assertRaises(ValueError):
            Nargs.parse("many")

    def testNonStringMarkerRejected(self):
        for marker in (None, True, 2.0, ["+"]):
            with self.subTest(marker=marker):
                with self.assertRaises(InvalidNargsSpecificationError):
                    Nargs.parse(marker)


class TestNargsVariants(TestCase):
    def testNullaryVariantsAreSingletons(self):
        for variant in (ExactlyOne, Optional, ZeroOrMore, OneOrMore):
            with self.subTest(variant=variant.__name__):
                self.assertIs(variant(), variant())

    def testMultiplicity(self):
        self.assertFalse(ExactlyOne().multiple)
        self.assertTrue(Optional().multiple)
        self.assertTrue(ZeroOrMore().multiple)
        self.assertTrue(OneOrMore().multiple)
        self.assertTrue(ExactlyN(2).multiple)

    def testAccepts(self):
        self.assertTrue(ZeroOrMore().accepts(0))
        self.assertFalse(OneOrMore().accepts(0))
        self.assertTrue(OneOrMore().accepts(5))
        self.assertTrue(Optional().accepts(1))
        self.assertFalse(Optional().accepts(2))
        self.assertTrue(ExactlyN(2).accepts(2))
        self.assertFalse(ExactlyN(2).accepts(1))

    def testMarkers(self):
        self.assertEqual(ExactlyOne().marker, "")
        self.assertEqual(OneOrMore().marker, "+")
        self.assertEqual(ExactlyN(3).marker, "3")

    def testExactlyNEqualityAndHash(self):
        self.assertEqual(ExactlyN(2), ExactlyN(2))
        self.assertNotEqual(ExactlyN(2), ExactlyN(3))
        self.assertEqual(hash(ExactlyN(2)), hash(ExactlyN(2)))

    def testExactlyNNegativeRejected(self):
        with self.assertRaises(InvalidNargsSpecificationError):
            ExactlyN(-1)

    def testExactlyNUpperBound(self):
        self.assertEqual(ExactlyN(COUNT_MAX).count, 2 ** 32 - 1)
        with self.assertRaises(InvalidNargsSpecificationError):
            ExactlyN(COUNT_MAX + 1)
        with self.assertRaises(InvalidNargsSpecificationError):
            Nargs.parse("4294967296")

    def testExactlyNNonIntegerRejected(self):
        with self.assertRaises(TypeError):
            ExactlyN("3")

    def testExactlyNStructuralMatch(self):
        match Nargs.parse("4"):
            case ExactlyN(count):
                self.assertEqual(count, 4)
            case _:
                self.fail("expected ExactlyN")

    def testRepr(self):
        self.assertEqual(repr(OneOrMore()), "OneOrMore()")
        self.assertEqual(repr(ExactlyN(3)), "ExactlyN(3)")

    def testForeignSubclassRejected(self):
        with self.assertRaises(TypeError):
            class Custom(Nargs):
                pass


if __name__ == "__main__":
    unittest.main()
