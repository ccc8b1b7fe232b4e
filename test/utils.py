# python
"""
Utilities tests (Unset sentinel, coalesce, rename, mirror, ordinal).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from argsmith.utils import Unset, UnsetType, coalesce, rename, mirror, ordinal


class TestUnset(TestCase):
    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testPickle(self):
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnion(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | Unset)
        self.assertNotIsInstance(3, str | Unset)

    def testSealed(self):
        with self.assertRaises(TypeError):
            class Custom(UnsetType):
                pass


class TestCoalesce(TestCase):
    def testUnsetReplaced(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalsyKept(self):
        for value in (None, 0, "", []):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class TestRename(TestCase):
    def testFunctionForm(self):
        function = rename(lambda: None, "named")
        self.assertEqual(function.__name__, "named")
        self.assertEqual(function.__qualname__, "named")

    def testDecoratorForm(self):
        @rename("named")
        def function():
            pass
        self.assertEqual(function.__name__, "named")

    def testRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            rename(3, "named")

    def testArity(self):
        with self.assertRaises(TypeError):
            rename()


class TestMirror(TestCase):
    def testReadOnlyViews(self):
        class Holder:
            items = mirror("items")
            index = mirror("index")
            name = mirror("name")

            def __init__(self):
                self._items = [1, 2]
                self._index = {"a": 1}
                self._name = "holder"

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.index, MappingProxyType)
        self.assertEqual(holder.name, "holder")
        with self.assertRaises(AttributeError):
            holder.items = ()


class TestOrdinal(TestCase):
    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        for number, expected in (
            (11, "11th"),
            (12, "12th"),
            (13, "13th"),
            (21, "21st"),
            (22, "22nd"),
            (23, "23rd"),
            (101, "101st"),
            (111, "111th"),
        ):
            with self.subTest(number=number):
                self.assertEqual(ordinal(number), expected)


if __name__ == "__main__":
    unittest.main()
