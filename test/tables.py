"""
Tables module behavioral tests (descriptors, placeholders, table invariants).

Scope
- Validate Parameter and Switch construction, kind defaults and kind/binding
  agreement.
- Validate placeholder extraction from help text.
- Validate switch spellings, case-insensitive matching and predefined values.
- Validate table capacity, uniqueness and resolution.

Conventions
- Test method names follow CamelCase per project convention.
- Table-definition faults are asserted through TableDefinitionError.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from switchboard import (
    Kind,
    Width,
    Boolean,
    Unsigned,
    Str,
    EnumIndex,
    Necessity,
    Parameter,
    Switch,
    ParameterTable,
    SwitchTable,
    MAX_SWITCHES,
    PAGER,
    HELP,
    TableDefinitionError,
)


class TestParameter(TestCase):
    """Behavioral tests for positional descriptors."""

    def testKindDefaultsToBindingNaturalKind(self):
        self.assertIs(Parameter(Str(8)).kind, Kind.STRING)
        self.assertIs(Parameter(Unsigned()).kind, Kind.INTEGER)
        self.assertIs(Parameter(EnumIndex([(0, "A")])).kind, Kind.ENUM)

    def testExplicitKindMustSuitBinding(self):
        self.assertIs(Parameter(Unsigned(), kind=Kind.DECIMAL).kind, Kind.DECIMAL)
        with self.assertRaises(TableDefinitionError):
            Parameter(Str(8), kind=Kind.DECIMAL)

    def testParameterNeedsBinding(self):
        with self.assertRaises(TableDefinitionError):
            Parameter()

    def testParameterCannotBeValueLess(self):
        with self.assertRaises(TableDefinitionError):
            Parameter(Boolean())

    def testPlaceholderExtractedFromDescription(self):
        parameter = Parameter(Str(64), "[file] file to read")
        self.assertEqual(parameter.metavar, "file")
        self.assertEqual(parameter.descr, "file to read")

    def testDescriptionWithoutPlaceholder(self):
        parameter = Parameter(Str(64), "file to read")
        self.assertIsNone(parameter.metavar)
        self.assertEqual(parameter.descr, "file to read")

    def testEmptyPlaceholderIgnored(self):
        parameter = Parameter(Str(64), "[] file to read")
        self.assertIsNone(parameter.metavar)
        self.assertEqual(parameter.descr, "file to read")

    def testPlaceholderOnly(self):
        parameter = Parameter(Str(64), "[file]")
        self.assertEqual(parameter.metavar, "file")
        self.assertIsNone(parameter.descr)

    def testUnterminatedBracketIsPlainText(self):
        parameter = Parameter(Str(64), "[file to read")
        self.assertIsNone(parameter.metavar)
        self.assertEqual(parameter.descr, "[file to read")

    def testEmptyDescriptionRejected(self):
        with self.assertRaises(TableDefinitionError):
            Parameter(Str(8), "  ")

    def testDescriptionMustBeString(self):
        with self.assertRaises(TypeError):
            Parameter(Str(8), 42)

    def testPropertiesAreReadOnly(self):
        parameter = Parameter(Str(8))
        with self.assertRaises(AttributeError):
            parameter.kind = Kind.DECIMAL


class TestSwitch(TestCase):
    """Behavioral tests for named descriptors."""

    def testShortAndLongSpellings(self):
        switch = Switch("-f", "-file", binding=Str(16))
        self.assertEqual(switch.short, "-f")
        self.assertEqual(switch.long, "-file")
        self.assertEqual(switch.label, "-f")
        self.assertEqual(switch.names, ("-f", "-file"))

    def testNamesStoredShortFirst(self):
        self.assertEqual(Switch("-file", "-f").names, ("-f", "-file"))

    def testLongOnlyLabel(self):
        switch = Switch("-verbose")
        self.assertIsNone(switch.short)
        self.assertEqual(switch.label, "-verbose")

    def testSlashPrefixAccepted(self):
        self.assertEqual(Switch("/q").short, "/q")

    def testWithoutBindingIsValueLess(self):
        switch = Switch("-v")
        self.assertIs(switch.kind, Kind.NONE)
        self.assertIsNone(switch.binding)

    def testBooleanBindingIsValueLess(self):
        self.assertIs(Switch("-v", binding=Boolean()).kind, Kind.NONE)

    def testNamesRequired(self):
        with self.assertRaises(TableDefinitionError):
            Switch()

    def testAtMostTwoNames(self):
        with self.assertRaises(TableDefinitionError):
            Switch("-a", "-all", "-every")

    def testTwoShortNamesRejected(self):
        with self.assertRaises(TableDefinitionError):
            Switch("-a", "-b")

    def testNameNeedsPrefix(self):
        with self.assertRaises(TableDefinitionError):
            Switch("f")

    def testNameWithoutCharacterRejected(self):
        with self.assertRaises(TableDefinitionError):
            Switch("-")

    def testNameWithBlankRejected(self):
        with self.assertRaises(TableDefinitionError):
            Switch("-dry run")

    def testMatchesIgnoresCase(self):
        switch = Switch("-f", "-file", binding=Str(16))
        self.assertEqual(switch.matches("-F"), "-f")
        self.assertEqual(switch.matches("-FILE"), "-file")
        self.assertEqual(switch.matches("-File"), "-file")
        self.assertIsNone(switch.matches("-fil"))

    def testMatchingKeepsCharacterCount(self):
        switch = Switch("-ss")
        self.assertEqual(switch.matches("-SS"), "-ss")
        self.assertIsNone(switch.matches("-ß"))

    def testPredefinedValue(self):
        switch = Switch("-l", binding=Unsigned(Width.BITS8), value=3)
        self.assertIs(switch.kind, Kind.NONE)
        self.assertEqual(switch.value, 3)

    def testValueLessUnsignedNeedsValue(self):
        with self.assertRaises(TableDefinitionError):
            Switch("-l", binding=Unsigned(), kind=Kind.NONE)

    def testPredefinedValueMustFitWidth(self):
        with self.assertRaises(TableDefinitionError):
            Switch("-l", binding=Unsigned(Width.BITS8), value=256)

    def testPredefinedValueRequiresUnsigned(self):
        with self.assertRaises(TableDefinitionError):
            Switch("-l", binding=Str(4), value=1)
        with self.assertRaises(TableDefinitionError):
            Switch("-l", binding=Unsigned(), kind=Kind.DECIMAL, value=1)

    def testPresenceMustBeBoolean(self):
        with self.assertRaises(TypeError):
            Switch("-v", present=Unsigned())

    def testNecessity(self):
        self.assertFalse(Switch("-v").mandatory)
        self.assertTrue(Switch("-o", binding=Str(8), necessity=Necessity.MANDATORY).mandatory)
        with self.assertRaises(TypeError):
            Switch("-v", necessity=True)

    def testValueKindNeedsBinding(self):
        with self.assertRaises(TableDefinitionError):
            Switch("-n", kind=Kind.DECIMAL)

    def testBuiltinSpellings(self):
        self.assertEqual(PAGER.names, ("-b", "-break"))
        self.assertEqual(HELP.names, ("-h", "-help"))


class TestTables(TestCase):
    """Behavioral tests for ParameterTable and SwitchTable."""

    def testParameterTableKeepsOrder(self):
        first, second = Parameter(Str(8)), Parameter(Str(8))
        table = ParameterTable(first, second)
        self.assertEqual(len(table), 2)
        self.assertIs(table[0], first)
        self.assertEqual(table.parameters, (first, second))

    def testParameterTableRejectsForeignEntry(self):
        with self.assertRaises(TableDefinitionError) as context:
            ParameterTable(Parameter(Str(8)), "oops")
        self.assertEqual(context.exception.options["index"], 1)

    def testSwitchTableRejectsForeignEntry(self):
        with self.assertRaises(TableDefinitionError):
            SwitchTable(Parameter(Str(8)))

    def testSwitchTableRejectsDuplicateSpellings(self):
        with self.assertRaises(TableDefinitionError) as context:
            SwitchTable(Switch("-f", "-file"), Switch("-F"))
        self.assertEqual(context.exception.options["index"], 1)

    def testSpellingsDifferingByCaseFoldingAreDistinct(self):
        table = SwitchTable(Switch("-ss"), Switch("-ß"))
        self.assertEqual(table.resolve("-ß")[0], 1)
        self.assertEqual(table.resolve("-SS")[0], 0)

    def testSwitchTableCapacity(self):
        SwitchTable(*(Switch(f"-s{index}") for index in range(MAX_SWITCHES)))
        with self.assertRaises(TableDefinitionError) as context:
            SwitchTable(*(Switch(f"-s{index}") for index in range(MAX_SWITCHES + 1)))
        self.assertEqual(context.exception.options["index"], MAX_SWITCHES)

    def testTableDefinitionErrorIsValueError(self):
        with self.assertRaises(ValueError):
            SwitchTable(Switch("-f"), Switch("-f"))

    def testResolveIgnoresCase(self):
        first, second = Switch("-f", "-file", binding=Str(8)), Switch("-v")
        table = SwitchTable(first, second)
        self.assertEqual(table.resolve("-FILE"), (0, first, "-file"))
        self.assertEqual(table.resolve("-V"), (1, second, "-v"))
        self.assertIsNone(table.resolve("-x"))


if __name__ == "__main__":
    unittest.main()
