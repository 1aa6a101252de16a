"""
Tests for the internal helpers.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, finality, PEP 604 unions.
- coalesce() resolving only Unset.
- @rename() naming generated callables.
- mirror() exposing copies of private containers.
"""
import unittest
from unittest import TestCase

from notion.utils import *


class UnsetTest(TestCase):
    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testUnion(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", str | Unset)
        self.assertNotIsInstance(None, str | Unset)

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        for value in (None, 0, "", []):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class RenameTest(TestCase):
    def testRename(self):
        @rename("__repr__")
        def generated(self):
            return "generated"

        self.assertEqual(generated.__name__, "__repr__")
        self.assertEqual(generated.__qualname__, "__repr__")
        self.assertEqual(generated(None), "generated")

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            rename(1)

    def testTargetMustBeCallable(self):
        with self.assertRaises(TypeError):
            rename("name")(1)


class MirrorTest(TestCase):
    def testMirrorCopiesContainers(self):
        class Holder:
            names = mirror("names")

            def __init__(self):
                self._names = ("--global", "-g")
                self._value = Unset

            value = mirror("value")

        holder = Holder()
        names = holder.names
        self.assertEqual(names, ["--global", "-g"])
        names.append("-x")
        self.assertEqual(holder.names, ["--global", "-g"])
        self.assertIsNone(holder.value)

    def testMirrorIsReadOnly(self):
        class Holder:
            name = mirror("name")

        with self.assertRaises(AttributeError):
            Holder().name = "x"


if __name__ == "__main__":
    unittest.main()
