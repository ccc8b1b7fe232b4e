# python
"""
Value store tests (composition, typed getters, read-only behavior).

Scope
- Validate ValueStore.build insertion policy (scanned values, presets, flags).
- Validate get / get_list dispatch over Single and Multiple, with and
  without a requested type.
- Validate mismatch and unknown-key faults and get_with_default fallbacks.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argsmith import ArgumentSpec, ArgumentType, Single, Multiple, ValueStore
from argsmith.faults import TypeMismatchError, UnknownKeyError
from argsmith.registry import Registry


class TestValueStoreGetters(TestCase):
    def setUp(self):
        self.store = ValueStore({
            "count": Single(ArgumentType.INT, 3),
            "ratio": Single(ArgumentType.FLOAT, 0.5),
            "files": Multiple(ArgumentType.STR, ["a", "b"]),
            "empty": Multiple(ArgumentType.INT),
        })

    def testGetAcceptsEveryTypeSpelling(self):
        for type in (int, "int", ArgumentType.INT):
            with self.subTest(type=type):
                self.assertEqual(self.store.get("count", type), 3)

    def testGetWithoutType(self):
        self.assertEqual(self.store.get("ratio"), 0.5)

    def testGetWrongScalarType(self):
        with self.assertRaises(TypeMismatchError) as context:
            self.store.get("count", float)
        self.assertIn("requested float but stored int", str(context.exception))

    def testGetOnList(self):
        with self.assertRaises(TypeMismatchError) as context:
            self.store.get("files")
        self.assertIn("requested str but stored list[str]", str(context.exception))

    def testGetListOnScalar(self):
        with self.assertRaises(TypeMismatchError) as context:
            self.store.get_list("count", int)
        self.assertIn("requested list[int] but stored int", str(context.exception))

    def testGetList(self):
        self.assertEqual(self.store.get_list("files", str), ["a", "b"])
        self.assertEqual(self.store.get_list("empty", int), [])

    def testGetListReturnsCopy(self):
        items = self.store.get_list("files")
        items.append("c")
        self.assertEqual(self.store.get_list("files"), ["a", "b"])

    def testMismatchIsTypeError(self):
        with self.assertRaises(TypeError):
            self.store.get("files", str)

    def testUnknownKey(self):
        with self.assertRaises(UnknownKeyError) as context:
            self.store.get("missing")
        self.assertEqual(context.exception.options["key"], "missing")

    def testUnknownKeyIsKeyError(self):
        with self.assertRaises(KeyError):
            self.store.get_list("missing")

    def testGetWithDefault(self):
        self.assertEqual(self.store.get_with_default("count", 0, int), 3)
        self.assertEqual(self.store.get_with_default("missing", 0, int), 0)
        self.assertEqual(self.store.get_with_default("count", 0.0, float), 0.0)
        self.assertEqual(self.store.get_with_default("files", []), ["a", "b"])
        self.assertEqual(self.store.get_with_default("files", ()), ["a", "b"])
        self.assertEqual(self.store.get_with_default("files", "none"), "none")

    def testGetWithDefaultInfersType(self):
        self.assertEqual(self.store.get_with_default("count", 0), 3)
        self.assertEqual(self.store.get_with_default("count", "x"), "x")
        self.assertEqual(self.store.get_with_default("ratio", 1), 1)
        self.assertEqual(self.store.get_with_default("files", ["z"]), ["a", "b"])
        self.assertEqual(self.store.get_with_default("files", [1]), [1])

    def testGetWithDefaultChecksBooleanBeforeInteger(self):
        self.assertIs(self.store.get_with_default("count", True), True)

    def testKeysAndMembership(self):
        self.assertEqual(self.store.get_all_keys(), ["count", "ratio", "files", "empty"])
        self.assertTrue(self.store.has_argument("files"))
        self.assertFalse(self.store.has_argument("missing"))
        self.assertIn("count", self.store)
        self.assertEqual(len(self.store), 4)

    def testRawValueAccess(self):
        self.assertEqual(self.store["count"], Single(ArgumentType.INT, 3))

    def testReadOnly(self):
        with self.assertRaises(TypeError):
            self.store["count"] = Single(ArgumentType.INT, 4)

    def testEquality(self):
        self.assertEqual(ValueStore({"a": Single("int", 1)}), ValueStore({"a": Single("int", 1)}))
        self.assertNotEqual(ValueStore(), ValueStore({"a": Single("int", 1)}))


class TestValueStoreBuild(TestCase):
    def testInsertionPolicy(self):
        registry = Registry()
        registry.register(ArgumentSpec(["-v", "--verbose"], type="bool"))
        registry.register(ArgumentSpec(["--count"], type="int", default="5"))
        registry.register(ArgumentSpec(["--name"]))
        registry.register(ArgumentSpec("input"))

        store = ValueStore.build(registry, {"input": Single("str", "in.txt")})

        self.assertEqual(store.get_all_keys(), ["help", "verbose", "count", "input"])
        self.assertIs(store.get("help", bool), False)
        self.assertIs(store.get("verbose", bool), False)
        self.assertEqual(store.get("count", int), 5)
        self.assertFalse(store.has_argument("name"))

    def testAbsentListWithoutDefaultIsEmpty(self):
        registry = Registry()
        registry.register(ArgumentSpec(["--files"], nargs="*"))
        registry.register(ArgumentSpec(["--extra"], nargs="?", type="int"))
        registry.register(ArgumentSpec(["--more"], nargs="+"))

        store = ValueStore.build(registry, {})

        self.assertEqual(store["files"], Multiple(ArgumentType.STR))
        self.assertEqual(store.get_list("extra", int), [])
        self.assertFalse(store.has_argument("more"))

    def testScannedValueWinsOverPreset(self):
        registry = Registry()
        registry.register(ArgumentSpec(["--count"], type="int", default="5"))
        store = ValueStore.build(registry, {"count": Single("int", 9)})
        self.assertEqual(store.get("count", int), 9)


if __name__ == "__main__":
    unittest.main()
