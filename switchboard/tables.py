r"""
Switchboard descriptor tables.

Overview
- Descriptors
  • Parameter: positional, value-bearing entry; its position in the table is
    the argument index it receives.
  • Switch: named entry with a short and/or long spelling (e.g., -f/-file),
    optional or mandatory, value-less (flag) or value-bearing.
- Tables
  • ParameterTable: ordered, immutable tuple of Parameters.
  • SwitchTable: ordered, immutable tuple of at most MAX_SWITCHES Switches
    whose spellings are unique regardless of case.
- Built-ins
  • PAGER (-b/-break) and HELP (-h/-help) are handled by the parser before
    normal scanning and always listed last in help.

Metadata (sanitized on construction)
- binding: the output cell (see switchboard.bindings). Required for every
  descriptor whose kind is not NONE.
- kind: defaults to the natural kind of the binding (Str → STRING,
  Unsigned → INTEGER, EnumIndex → ENUM); value-less switches are NONE.
- descr: help text. A leading ``[name]`` annotation names the value
  placeholder shown in usage/help and is stripped from the description:
      Parameter(Str(64), "[file] file to read")
- names (Switch): one or two spellings starting with '-' or '/', one short
  (a single character after the prefix) and/or one long.
- value (Switch): predefined number stored in an Unsigned binding when a
  value-less switch is present.
- present (Switch): optional Boolean receiving whether the switch was seen.

Validation highlights
- Violations are table-definition faults (TableDefinitionError), raised once
  when the descriptor or table is constructed; wrong argument types raise
  TypeError.

Quick example:
    >>> from switchboard import *
    >>> name = Str(32)
    >>> verbose = Boolean()
    >>> parameters = ParameterTable(Parameter(name, "[name] who to greet"))
    >>> switches = SwitchTable(Switch("-v", "-verbose", binding=verbose, descr="say more"))
"""
import enum
import re

from .bindings import *
from .faults import TableDefinitionError
from .utils import *

MAX_SWITCHES = 30
"""Fixed capacity of a switch table."""


class Necessity(enum.Enum):
    """
    whether a switch must be present on the command line.
    """
    OPTIONAL = "optional"
    MANDATORY = "mandatory"


def _sanitize_descr(cls, metadata, /):
    """
    Internal: split the help text into placeholder and description.

    - descr: Unset | str. Trimmed; empty strings are rejected. A leading
      ``[name]`` annotation becomes ``metavar`` (None when absent or empty);
      the remainder, trimmed, becomes ``descr`` (None when empty).
    """
    metadata["metavar"] = None
    if (descr := metadata["descr"]) is Unset:
        metadata["descr"] = None
        return
    if not isinstance(descr, str):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    if not (descr := descr.strip()):
        raise TableDefinitionError(f"{cls.__typename__} 'descr' cannot be empty")

    # an unterminated '[' is plain text
    if match := re.match(r"\[(?P<metavar>[^\]]*)\]", descr):
        metadata["metavar"] = match["metavar"].strip() or None
        descr = descr[match.end():].strip()
    metadata["descr"] = descr or None


def _sanitize_binding(cls, metadata, /):
    """
    Internal: validate the binding against the declared kind.

    - binding: Unset | None | Binding. None and Unset both mean "no binding",
      which is only valid for value-less switches.
    - kind: Unset | Kind. Defaults to the binding's natural kind.
    """
    if (binding := coalesce(metadata["binding"])) is not None and not isinstance(binding, Binding):
        raise TypeError(f"{cls.__typename__} 'binding' must be a binding")
    if (kind := metadata["kind"]) is not Unset and not isinstance(kind, Kind):
        raise TypeError(f"{cls.__typename__} 'kind' must be a Kind")

    if binding is None:
        kind = coalesce(kind, Kind.NONE)
        if kind is not Kind.NONE:
            raise TableDefinitionError(f"{cls.__typename__} of kind {kind.value!r} has no binding")
    else:
        kind = coalesce(kind, binding.natural)
        if not binding.accepts(kind):
            raise TableDefinitionError(
                f"{cls.__typename__} {binding.__typename__} binding cannot receive {kind.value!r} values"
            )

    metadata["binding"] = binding
    metadata["kind"] = kind


class Parameter(metaclass=SpecType, final=True):
    """
    Positional, value-bearing entry of a ParameterTable.

    Parameters
    - binding: Binding
      Output cell; its type selects the default kind.
    - descr: Unset | str
      Help text, optionally starting with a ``[name]`` placeholder annotation.
    - kind: Unset | Kind
      Overrides the binding's natural kind (e.g., Kind.DECIMAL for an
      Unsigned binding that must not accept hex). NONE is not allowed.
    """

    __introspectable__ = (
        "kind",
        "binding",
        "metavar",
        "descr",
    )

    def __init__(self, binding=Unset, /, descr=Unset, *, kind=Unset):
        metadata = {
            "binding": binding,
            "kind": kind,
            "descr": descr,
        }
        _sanitize_binding(type(self), metadata)
        _sanitize_descr(type(self), metadata)

        if metadata["kind"] is Kind.NONE:
            raise TableDefinitionError("parameter must receive a value (kind cannot be 'none')")

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


class Switch(metaclass=SpecType, final=True):
    """
    Named entry of a SwitchTable.

    Parameters
    - names: one or two str
      Spellings such as "-f" (short) and "-file" (long). Matching is
      case-insensitive, so "-F", "-FILE" and "-File" all select this switch.
    - binding: Unset | Binding
      Output cell. Value-less switches may omit it (presence only).
    - descr: Unset | str
      Help text, optionally starting with a ``[name]`` placeholder annotation.
    - kind: Unset | Kind
      Defaults to the binding's natural kind, or NONE without a binding or
      when ``value`` is given.
    - value: Unset | int
      Predefined number stored into an Unsigned binding by a value-less switch.
    - present: Unset | Boolean
      Receives whether the switch appeared on the command line.
    - necessity: Necessity
      OPTIONAL (default) or MANDATORY.
    """

    __introspectable__ = (
        "names",
        "kind",
        "binding",
        "value",
        "present",
        "necessity",
        "metavar",
        "descr",
    )

    def __init__(
            self,
            *names,
            binding=Unset,
            descr=Unset,
            kind=Unset,
            value=Unset,
            present=Unset,
            necessity=Necessity.OPTIONAL
    ):
        metadata = {
            "names": names,
            "binding": binding,
            "kind": Kind.NONE if kind is Unset and value is not Unset else kind,
            "value": value,
            "present": present,
            "necessity": necessity,
            "descr": descr,
        }
        _sanitize_names(type(self), metadata)
        _sanitize_binding(type(self), metadata)
        _sanitize_flag(type(self), metadata)
        _sanitize_descr(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def short(self):
        return next((name for name in self._names if len(name) == 2), None)

    @property
    def long(self):
        return next((name for name in self._names if len(name) > 2), None)

    @property
    def label(self):
        """
        Spelling used when the switch is named in a diagnostic (short first).
        """
        return self.short or self.long

    @property
    def mandatory(self):
        return self._necessity is Necessity.MANDATORY

    def matches(self, token, /):
        """
        Return the declared spelling equal to ``token`` ignoring case, else None.
        """
        key = casekey(token)
        for name in self._names:
            if casekey(name) == key:
                return name
        return None


def _sanitize_names(cls, metadata, /):
    r"""
    Internal: validate switch spellings.

    - one or two names, each a string starting with '-' or '/' followed by at
      least one non-blank character and containing no whitespace.
    - at most one short (prefix plus a single character) and one long name.
    - stored short first, then long.
    """
    if not metadata["names"]:
        raise TableDefinitionError(f"{cls.__typename__} must specify at least one name")
    if len(metadata["names"]) > 2:
        raise TableDefinitionError(f"{cls.__typename__} accepts a short and a long name only")

    shorts = []
    longs = []
    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (name := name.strip()):
            raise TableDefinitionError(f"{cls.__typename__} names cannot be empty-strings")
        elif not re.fullmatch(r"[-/]\S+", name):
            raise TableDefinitionError(f"{cls.__typename__} name {name!r} must start with '-' or '/' and have no blanks")
        (shorts if len(name) == 2 else longs).append(name)

    # two shorts (or two longs) also covers case-insensitive duplicates
    if len(shorts) > 1 or len(longs) > 1:
        raise TableDefinitionError(f"{cls.__typename__} accepts a short and a long name only")

    metadata["names"] = tuple(shorts + longs)


def _sanitize_flag(cls, metadata, /):
    """
    Internal: validate necessity, presence binding and predefined flag value.

    - necessity: Necessity member.
    - present: Unset | None | Boolean, normalized to None when absent.
    - value: only for value-less switches writing into an Unsigned binding,
      where it is required and must fit the binding's width.
    """
    if not isinstance(metadata["necessity"], Necessity):
        raise TypeError(f"{cls.__typename__} 'necessity' must be a Necessity")

    if (present := coalesce(metadata["present"])) is not None and not isinstance(present, Boolean):
        raise TypeError(f"{cls.__typename__} 'present' must be a boolean binding")
    metadata["present"] = present

    value = metadata["value"]
    binding = metadata["binding"]
    if metadata["kind"] is Kind.NONE and isinstance(binding, Unsigned):
        if value is Unset:
            raise TableDefinitionError(f"value-less {cls.__typename__} with an unsigned binding needs a 'value'")
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"{cls.__typename__} 'value' must be an integer")
        if not 0 <= value <= binding.width.maximum:
            raise TableDefinitionError(f"{cls.__typename__} value {value} does not fit in {int(binding.width)} bits")
    elif value is not Unset:
        raise TableDefinitionError(f"{cls.__typename__} 'value' requires a value-less switch with an unsigned binding")
    metadata["value"] = coalesce(value)


class ParameterTable(metaclass=SpecType, final=True):
    """
    Ordered, immutable list of Parameters.

    ``ParameterTable(*parameters)``; entry ``i`` receives the ``i``-th
    positional token.
    """

    __introspectable__ = (
        "parameters",
    )

    def __init__(self, *parameters):
        for index, parameter in enumerate(parameters):
            if not isinstance(parameter, Parameter):
                raise TableDefinitionError("entry is not a parameter", index=index)
        self._parameters = parameters

    def __iter__(self):
        return iter(self._parameters)

    def __len__(self):
        return len(self._parameters)

    def __getitem__(self, index):
        return self._parameters[index]


class SwitchTable(metaclass=SpecType, final=True):
    """
    Ordered, immutable list of at most MAX_SWITCHES Switches.

    Spellings are unique across the whole table regardless of case, so a
    token always resolves to at most one switch.
    """

    __introspectable__ = (
        "switches",
    )

    def __init__(self, *switches):
        seen = {}
        for index, switch in enumerate(switches):
            if index >= MAX_SWITCHES:
                raise TableDefinitionError("exceeded maximum switch count", index=index)
            if not isinstance(switch, Switch):
                raise TableDefinitionError("entry is not a switch", index=index)
            for name in switch.names:
                if seen.setdefault(casekey(name), index) != index:
                    raise TableDefinitionError(f"switch name {name!r} is already in use", index=index)
        self._switches = switches

    def resolve(self, token, /):
        """
        Find the switch spelled ``token`` (case-insensitive).

        Returns (position, switch, spelling), or None when nothing matches.
        """
        for position, switch in enumerate(self._switches):
            if spelling := switch.matches(token):
                return position, switch, spelling
        return None

    def __iter__(self):
        return iter(self._switches)

    def __len__(self):
        return len(self._switches)

    def __getitem__(self, index):
        return self._switches[index]


PAGER = Switch("-b", "-break", descr="enable page break mode")
HELP = Switch("-h", "-help", descr="display this help and exit")


__all__ = (
    # Constants
    "MAX_SWITCHES",
    "PAGER",
    "HELP",

    # Types
    "Necessity",
    "Parameter",
    "Switch",
    "ParameterTable",
    "SwitchTable",
)
