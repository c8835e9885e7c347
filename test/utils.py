"""
Utils module behavioral tests (sentinel, metaclass defaults, case keys).

Scope
- Validate the Unset sentinel and coalesce().
- Validate SpecType defaults that rely on the sentinel at class creation.
- Validate casekey() as a one-entry-per-character comparison key.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from switchboard.utils import Unset, UnsetType, SpecType, coalesce, casekey


class TestSentinel(TestCase):
    """Behavioral tests for Unset and coalesce."""

    def testUnsetIsSingletonAndFalsey(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testCoalesceOnlyReplacesUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 5), 0)

    def testUnsetSupportsUnions(self):
        self.assertIsInstance("name", str | Unset)
        self.assertIsInstance(Unset, str | Unset)


class TestSpecType(TestCase):
    """Behavioral tests for the spec metaclass."""

    def testDisplayableDefaultsToSentinel(self):
        self.assertIs(SpecType.__displayable__, Unset)

    def testReprFallsBackToIntrospectable(self):
        class Sample(metaclass=SpecType):
            __introspectable__ = ("size",)

            def __init__(self):
                self._size = 3

        self.assertEqual(Sample.__typename__, "sample")
        self.assertEqual(repr(Sample()), "sample(size=3)")


class TestCaseKey(TestCase):
    """Behavioral tests for casekey."""

    def testIgnoresCase(self):
        self.assertEqual(casekey("-File"), casekey("-FILE"))

    def testKeepsOneEntryPerCharacter(self):
        self.assertNotEqual(casekey("ß"), casekey("ss"))
        self.assertEqual(len(casekey("ß")), 1)


if __name__ == "__main__":
    unittest.main()
