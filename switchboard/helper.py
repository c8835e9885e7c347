"""
Help rendering: usage synopsis and per-entry help from the descriptor tables.

Layout
    <description>

    Usage: <program> <param> [<optional param>] <-s value> [options]

     Parameters:
      <param>             description
     Required:
      -s, -switch value   description (choice1|choice2)
     Options:
      -o, -option         description
      -b, -break          enable page break mode
      -h, -help           display this help and exit

Palette keys
- usage-label, program-name, group-label, description-section
- switch-name, metavar, choice, argument-description

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
from collections import deque

from rich.containers import Lines
from rich.text import Text

from .bindings import Kind
from .faults import console as default_console
from .tables import PAGER, HELP
from .utils import *

DEFAULT_METAVAR = "arg"


def render_help(
        parameters,
        mandatory,
        switches,
        descr=Unset,
        /,
        *,
        name=Unset,
        console=Unset,
        colorful=True,
        builtins=(PAGER, HELP)
):
    """
    Print the program help for the given tables on the console.

    Parameters
    - parameters: ParameterTable
    - mandatory: int
      Number of leading parameters that are required; clamped to the table size.
    - switches: SwitchTable
    - descr: Unset | str
      Program description printed above the usage line.
    - name: Unset | str
      Program name shown in the usage line.
    - console: Unset | rich.console.Console
      Output console (stdout by default).
    - colorful: bool
      Apply the palette.
    - builtins: Iterable[Switch]
      Built-in switches listed last among the options (the parser always
      passes both, whatever its functional options).
    """
    console = coalesce(console, default_console)
    mandatory = min(mandatory, len(parameters))
    builtins = tuple(builtins)

    styles = palette({
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "description-section": "italic #A3A3A3",  # Neutral gray

        # === Groups / entries ===
        "group-label": "bold #FFFFFF",  # Pure white headers
        "argument-description": "#9CA3AF",  # Muted gray
        "switch-name": "bold #22C55E",  # GREEN for switches
        "metavar": "bold #FFD600",  # AMBER for placeholders
        "choice": "bold #FF4D94",  # MAGENTA → choices stand out
    })

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        # Normalize to Rich Text; preserve existing Text spans.
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    width = console.width

    def placeholder(entry, default, *, optional=False):
        if (metavar := entry.metavar or default) is None:
            return None
        metavar = text(metavar, styler("metavar"))
        return Text.assemble("[", metavar, "]") if optional else metavar

    def spellings(switch):
        # "-s, -long"; a missing short keeps the long column aligned
        short = text(switch.short, styler("switch-name")) if switch.short else None
        long = text(switch.long, styler("switch-name")) if switch.long else None
        if short and long:
            return Text.assemble(short, ", ", long)
        return short or Text.assemble("    ", long)

    def choices(entry):
        if entry.kind is not Kind.ENUM:
            return None
        return Text.assemble(
            "(", Text("|").join(text(name, styler("choice")) for name in entry.binding.table.names), ")"
        )

    def default_metavar(entry):
        return None if entry.kind is Kind.NONE else DEFAULT_METAVAR

    # Usage line: program name + parameters + mandatory switches + [options]
    usage = Text()
    usage.append("Usage", styler("usage-label")).append(":")
    usage.append(" ")
    usage.append(text(coalesce(name, ""), styler("program-name")))
    usage.append(" ")

    offset = len(usage)  # Hanging-indent column for wrapped usage items
    inputs = deque()

    for index, parameter in enumerate(parameters):
        inputs.append(placeholder(parameter, DEFAULT_METAVAR, optional=index >= mandatory))

    for switch in filter(lambda x: x.mandatory, switches):
        segment = text(switch.label, styler("switch-name"))
        if metavar := placeholder(switch, default_metavar(switch)):
            segment = Text.assemble(segment, " ", metavar)
        inputs.append(segment)

    optionals = [switch for switch in switches if not switch.mandatory] + list(builtins)
    if optionals:
        inputs.append(Text("[options]"))

    # Wrap synthesized usage items across terminal width
    try:
        lines = Lines([inputs.popleft()])
    except IndexError:
        lines = Lines()

    while inputs:
        if len(lines[-1]) + 1 + len(input := inputs.popleft()) > width - offset:
            lines.append(input)
        else:
            lines[-1].append(Text(" ") + input)

    try:
        usage.append(lines.pop(0))
    except IndexError:
        pass
    for line in lines:
        usage.append("\n").append(" " * offset).append(line)

    padding = 2  # Leading spaces before the label column
    indent = 22  # Column for description wrap/hanging indent

    def entry(label, descr, extra):
        # Stitch "  <label>   <description> (<choices>)" with a hanging indent
        section = Text(" " * padding).append(label)
        if extra:
            descr = Text.assemble(descr, " ", extra) if descr else extra
        if not descr:
            return section
        if len(section) >= indent - 1:
            section.append("\n").append(" " * indent)
        else:
            section.append(" " * (indent - len(section)))
        wrapped = descr.wrap(console, max(width - indent, 1))
        try:
            section.append(wrapped.pop(0))
        except IndexError:
            pass
        for line in wrapped:
            section.append("\n").append(" " * indent).append(line)
        return section

    def describe(entry):
        return text(entry.descr, styler("argument-description")) if entry.descr else None

    def group(label, entries):
        section = Text(" ").append(text(label, styler("group-label"))).append(":")
        for line in entries:
            section.append("\n").append(line)
        return section

    renders = [Text("")]

    if descr := coalesce(descr):
        renders.append(text(descr, styler("description-section")))
        renders.append(Text(""))

    renders.append(usage)

    if len(parameters):
        renders.append(Text(""))
        renders.append(group("Parameters", (
            entry(placeholder(parameter, DEFAULT_METAVAR, optional=index >= mandatory), describe(parameter), choices(parameter))
            for index, parameter in enumerate(parameters)
        )))

    def label(switch):
        if metavar := placeholder(switch, default_metavar(switch)):
            return Text.assemble(spellings(switch), " ", metavar)
        return spellings(switch)

    if required := [switch for switch in switches if switch.mandatory]:
        renders.append(Text(""))
        renders.append(group("Required", (
            entry(label(switch), describe(switch), choices(switch)) for switch in required
        )))

    if optionals:
        renders.append(Text(""))
        renders.append(group("Options", (
            entry(label(switch), describe(switch), choices(switch)) for switch in optionals
        )))

    renders.append(Text(""))

    console.print(Text("\n").join(renders), soft_wrap=True, highlight=False)


__all__ = (
    "DEFAULT_METAVAR",
    "render_help",
)
