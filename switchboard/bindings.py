r"""
Switchboard value kinds, widths, enum tables, and output bindings.

Overview
- Kind: how a raw token is interpreted (NONE, STRING, DECIMAL, HEXADECIMAL,
  INTEGER, ENUM). NONE marks a value-less switch.
- Width: storage width of unsigned numbers (8/16/32 bits or NATIVE = 64 bits).
- EnumTable: ordered (value, name) pairs used for symbolic values.
- Bindings: mutable output cells written in place by the parser.
  • Boolean: target of value-less flags and of switch presence flags.
  • Unsigned: target of DECIMAL/HEXADECIMAL/INTEGER values (and predefined
    flag values), bounded by its Width.
  • Str: target of STRING values, bounded by its capacity.
  • EnumIndex: target of ENUM values; stores the numeric value of the match.

Each binding class advertises the kinds it can receive (``kinds``) and the
kind it implies when a descriptor does not name one (``natural``). Descriptors
reject a kind their binding cannot receive, so a mismatch between declared
kind and storage target is caught when the table is built, never mid-parse.

Quick example:
    >>> from switchboard.bindings import EnumTable, EnumIndex, Unsigned, Width
    >>> speeds = EnumTable((0, "Fast"), (1, "Slow"))
    >>> speed = EnumIndex(speeds)
    >>> retries = Unsigned(Width.BITS8)
"""
import enum
from collections.abc import Iterable

from .faults import TableDefinitionError
from .utils import *


class Kind(enum.Enum):
    """
    value kind of a descriptor.
    """
    NONE = "none"
    STRING = "string"
    DECIMAL = "decimal"
    HEXADECIMAL = "hexadecimal"
    INTEGER = "integer"
    ENUM = "enum"


class Width(enum.IntEnum):
    """
    storage width of an unsigned binding, in bits.

    NATIVE is the 64-bit machine word.
    """
    BITS8 = 8
    BITS16 = 16
    BITS32 = 32
    NATIVE = 64

    @property
    def maximum(self):
        return (1 << self.value) - 1


class EnumTable(metaclass=SpecType, final=True):
    """
    Ordered mapping of numeric values to display names.

    Names are matched case-insensitively when parsing and shown in declaration
    order in help (``(Fast|Slow)``). The table is non-empty, names are
    non-empty and unique regardless of case, values are non-negative integers.

    Construction
    - EnumTable((0, "Fast"), (1, "Slow"))
    - EnumTable.from_enum(Speed)   # any enum.Enum with integer values
    """

    __introspectable__ = (
        "entries",
    )

    def __init__(self, *entries):
        if not entries:
            raise TableDefinitionError("enum table must contain at least one entry")

        sanitized = []
        names = set()
        for index, entry in enumerate(entries):
            if not isinstance(entry, tuple) or len(entry) != 2:
                raise TypeError("enum table entries must be (value, name) pairs")
            value, name = entry
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError("enum table values must be integers")
            if not isinstance(name, str):
                raise TypeError("enum table names must be strings")
            if value < 0:
                raise TableDefinitionError("enum table values cannot be negative", index=index)
            if not (name := name.strip()):
                raise TableDefinitionError("enum table names cannot be empty", index=index)
            if casekey(name) in names:
                raise TableDefinitionError("enum table names cannot contain duplicates (%r)" % name, index=index)
            names.add(casekey(name))
            sanitized.append((value, name))

        self._entries = tuple(sanitized)

    @classmethod
    def from_enum(cls, enumeration, /):
        """
        Build a table from an ``enum.Enum`` subclass using member names and values.
        """
        if not isinstance(enumeration, type) or not issubclass(enumeration, enum.Enum):
            raise TypeError("from_enum() argument must be an enum class")
        return cls(*((member.value, member.name) for member in enumeration))

    @property
    def names(self):
        return tuple(name for _, name in self._entries)

    def lookup(self, name, /):
        """
        Return the value whose name matches ``name`` case-insensitively.

        Raises KeyError when nothing matches.
        """
        key = casekey(name)
        for value, candidate in self._entries:
            if casekey(candidate) == key:
                return value
        raise KeyError(name)

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)


class Binding(metaclass=SpecType):
    """
    Base output cell. ``value`` holds the current content and is written in
    place by the parser; everything else is fixed at construction.
    """
    kinds = frozenset()
    natural = Unset

    __displayable__ = ("value",)

    def __init__(self, default, /):
        self.value = default

    def accepts(self, kind, /):
        return kind in type(self).kinds


class Boolean(Binding, final=True):
    """
    True/false cell set by value-less switches and presence flags.
    """
    kinds = frozenset({Kind.NONE})
    natural = Kind.NONE

    def __init__(self, default=False):
        super().__init__(bool(default))


class Unsigned(Binding, final=True):
    """
    Unsigned number bounded by ``width``.

    Receives DECIMAL, HEXADECIMAL and INTEGER values (INTEGER by default), and
    the predefined value of a value-less switch.
    """
    kinds = frozenset({Kind.NONE, Kind.DECIMAL, Kind.HEXADECIMAL, Kind.INTEGER})
    natural = Kind.INTEGER

    __introspectable__ = (
        "width",
    )
    __displayable__ = ("width", "value")

    def __init__(self, width=Width.NATIVE, default=0):
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError("unsigned 'width' must be a Width")
        try:
            width = Width(width)
        except ValueError:
            raise TableDefinitionError("unsigned width must be 8, 16, 32 or 64 bits") from None
        if not isinstance(default, int) or isinstance(default, bool):
            raise TypeError("unsigned 'default' must be an integer")
        if not 0 <= default <= width.maximum:
            raise TableDefinitionError("unsigned default does not fit in %d bits" % width)
        self._width = width
        super().__init__(default)


class Str(Binding, final=True):
    """
    Text cell holding at most ``capacity - 1`` characters.

    Capacity counts a terminator slot, as fixed C buffers do, so
    ``Str(8)`` keeps up to 7 characters and reports longer tokens as truncated.
    """
    kinds = frozenset({Kind.STRING})
    natural = Kind.STRING

    __introspectable__ = (
        "capacity",
    )
    __displayable__ = ("capacity", "value")

    def __init__(self, capacity, default=""):
        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise TypeError("string 'capacity' must be an integer")
        if capacity < 1:
            raise TableDefinitionError("string capacity must be at least 1")
        if not isinstance(default, str):
            raise TypeError("string 'default' must be a string")
        self._capacity = capacity
        super().__init__(default)


class EnumIndex(Binding, final=True):
    """
    Cell receiving the numeric value of the enum entry whose name matched.
    """
    kinds = frozenset({Kind.ENUM})
    natural = Kind.ENUM

    __introspectable__ = (
        "table",
    )
    __displayable__ = ("table", "value")

    def __init__(self, table, default=None):
        if isinstance(table, Iterable) and not isinstance(table, EnumTable):
            table = EnumTable(*table)
        if not isinstance(table, EnumTable):
            raise TypeError("enum 'table' must be an EnumTable")
        self._table = table
        super().__init__(default)


__all__ = (
    # Value kinds and widths
    "Kind",
    "Width",

    # Enum tables
    "EnumTable",

    # Bindings
    "Binding",
    "Boolean",
    "Unsigned",
    "Str",
    "EnumIndex",
)
