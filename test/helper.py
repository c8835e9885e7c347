"""
Helper module behavioral tests (usage synopsis and help entries).

Scope
- Validate the usage line: program name, positional placeholders (bracketed
  when optional), mandatory switches and the [options] marker.
- Validate aligned entries, enum choices, label overflow and built-ins.

Conventions
- Test method names follow CamelCase per project convention.
- Help is rendered on an uncolored, wide console and asserted line by line.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from switchboard import (
    Boolean,
    Unsigned,
    Str,
    EnumIndex,
    Necessity,
    Parameter,
    Switch,
    ParameterTable,
    SwitchTable,
    PAGER,
    HELP,
    render_help,
)


def entry(label, descr):
    return "  " + label.ljust(20) + descr


class TestHelp(TestCase):
    """Behavioral tests for render_help."""

    def setUp(self):
        self.console = Console(file=io.StringIO(), width=200, color_system=None)
        self.parameters = ParameterTable(
            Parameter(Str(64), "[src] source file"),
            Parameter(Str(64), "[dst] destination file"),
        )
        self.switches = SwitchTable(
            Switch(
                "-m", "-mode",
                binding=EnumIndex([(0, "Fast"), (1, "Slow")]),
                descr="[mode] transfer mode",
                necessity=Necessity.MANDATORY,
            ),
            Switch("-v", "-verbose", binding=Boolean(), descr="say more"),
        )

    def render(self, *args, **options):
        render_help(*args, name="copy", console=self.console, colorful=False, **options)
        return self.console.file.getvalue().splitlines()

    def testDescriptionPrecedesUsage(self):
        lines = self.render(self.parameters, 1, self.switches, "copy files")
        self.assertEqual(lines[:4], ["", "copy files", "", "Usage: copy src [dst] -m mode [options]"])

    def testParametersGroup(self):
        lines = self.render(self.parameters, 1, self.switches)
        self.assertIn(" Parameters:", lines)
        self.assertIn(entry("src", "source file"), lines)
        self.assertIn(entry("[dst]", "destination file"), lines)

    def testRequiredGroupShowsChoices(self):
        lines = self.render(self.parameters, 1, self.switches)
        self.assertIn(" Required:", lines)
        self.assertIn(entry("-m, -mode mode", "transfer mode (Fast|Slow)"), lines)

    def testOptionsGroupEndsWithBuiltins(self):
        lines = self.render(self.parameters, 1, self.switches)
        start = lines.index(" Options:")
        self.assertEqual(lines[start + 1:start + 4], [
            entry("-v, -verbose", "say more"),
            entry("-b, -break", "enable page break mode"),
            entry("-h, -help", "display this help and exit"),
        ])

    def testDisabledBuiltinsAreNotListed(self):
        lines = self.render(self.parameters, 1, self.switches, builtins=(HELP,))
        self.assertNotIn(entry("-b, -break", "enable page break mode"), lines)
        self.assertIn(entry("-h, -help", "display this help and exit"), lines)

    def testMandatoryClampedToTableSize(self):
        lines = self.render(self.parameters, 9, self.switches)
        self.assertIn("Usage: copy src dst -m mode [options]", lines)

    def testDefaultPlaceholder(self):
        parameters = ParameterTable(Parameter(Unsigned(), "how many"))
        switches = SwitchTable(Switch("-n", binding=Unsigned(), descr="limit"))
        lines = self.render(parameters, 0, switches, builtins=())
        self.assertIn("Usage: copy [arg] [options]", lines)
        self.assertIn(entry("-n arg", "limit"), lines)

    def testLongOnlySwitchKeepsColumn(self):
        switches = SwitchTable(Switch("-quiet", descr="say less"))
        lines = self.render(ParameterTable(), 0, switches, builtins=())
        self.assertIn(entry("    -quiet", "say less"), lines)

    def testWideLabelMovesDescriptionToNextLine(self):
        switches = SwitchTable(Switch("-x", "-extraordinarily-long", binding=Str(8), descr="[value] something"))
        lines = self.render(ParameterTable(), 0, switches, builtins=())
        index = lines.index("  -x, -extraordinarily-long value")
        self.assertEqual(lines[index + 1], " " * 22 + "something")

    def testNoOptionalsOmitsOptionsMarker(self):
        switches = SwitchTable(Switch("-o", binding=Str(8), descr="[out] output", necessity=Necessity.MANDATORY))
        lines = self.render(ParameterTable(), 0, switches, builtins=())
        self.assertIn("Usage: copy -o out", lines)
        self.assertNotIn(" Options:", lines)

    def testEnumParameterShowsChoices(self):
        parameters = ParameterTable(Parameter(EnumIndex([(0, "On"), (1, "Off")]), "[state] power state"))
        lines = self.render(parameters, 1, SwitchTable(), builtins=(PAGER, HELP))
        self.assertIn(entry("state", "power state (On|Off)"), lines)

    def testRenderingDoesNotTouchBindings(self):
        binding = Str(64, "seed")
        self.render(ParameterTable(Parameter(binding, "[src] source file")), 1, SwitchTable())
        self.assertEqual(binding.value, "seed")


if __name__ == "__main__":
    unittest.main()
