"""
Tests for the shared utilities.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, copying, pickling,
  thread safety and finality.
- coalesce() and rename() helpers.
- StorageGuard backing storage and view() properties.
- parse_integer() strictness.
"""
import copy
import pickle
import unittest
from threading import Thread, Lock
from types import MappingProxyType
from unittest import TestCase

from flatargs.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingleton(self) -> None:
        self.assertIs(Unset, UnsetType())
        self.assertIs(UnsetType(), UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testPicklePreservesIdentity(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testThreadSafety(self) -> None:
        """
        Concurrent construction attempts all observe the same instance.
        """
        results = []
        lock = Lock()

        def worker():
            instance = UnsetType()
            with lock:
                results.append(instance)

        threads = [Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 16)
        self.assertTrue(all(result is Unset for result in results))

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testUnion(self) -> None:
        self.assertEqual(Unset | str, UnsetType | str)
        self.assertEqual(str | Unset, str | UnsetType)


class CoalesceTest(TestCase):

    def testUnsetResolvesToDefault(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalsyValuesArePreserved(self) -> None:
        for value in (None, 0, "", ()):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class RenameTest(TestCase):

    def testDirectForm(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testDecoratorForm(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")

    def testRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(42, "name")
        with self.assertRaises(TypeError):
            rename(len, 42)
        with self.assertRaises(TypeError):
            rename()


class Record(StorageGuard):
    items = view("items")
    table = view("table")
    label = view("label")

    def __new__(cls, items, table, label):
        with super().__new__(cls) as self:
            setattr(self, "-items", items)
            setattr(self, "-table", table)
            setattr(self, "-label", label)
        return self


class StorageGuardTest(TestCase):

    def setUp(self) -> None:
        self.record = Record(["a", "b"], {"key": "value"}, "name")

    def testViewsAreImmutable(self) -> None:
        self.assertEqual(self.record.items, ("a", "b"))
        self.assertIsInstance(self.record.table, MappingProxyType)
        self.assertEqual(self.record.label, "name")

    def testBackingIsHidden(self) -> None:
        with self.assertRaises(AttributeError):
            getattr(self.record, "-items")

    def testBackingIsLockedAfterBuild(self) -> None:
        with self.assertRaises(AttributeError):
            setattr(self.record, "-label", "other")
        self.assertEqual(self.record.label, "name")

    def testViewRejectsNonString(self) -> None:
        with self.assertRaises(TypeError):
            view(42)


class ParseIntegerTest(TestCase):

    def testAccepted(self) -> None:
        for text, expected in (("0", 0), ("42", 42), ("-7", -7), ("+7", 7), ("007", 7)):
            with self.subTest(text=text):
                self.assertEqual(parse_integer(text), expected)

    def testRejected(self) -> None:
        for text in ("", "-", "1.5", " 1", "1 ", "1_000", "0x10", "٣"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_integer(text)

    def testNonString(self) -> None:
        with self.assertRaises(TypeError):
            parse_integer(5)


class PackageMetadataTest(TestCase):

    def testMetadata(self) -> None:
        import flatargs

        self.assertEqual(flatargs.__title__, "flatargs")
        self.assertEqual(flatargs.__author__, "flatargs contributors")
        self.assertEqual(flatargs.__license__, "MIT")
        self.assertEqual(flatargs.version_info[:3], (0, 0, 0))


if __name__ == "__main__":
    unittest.main()
