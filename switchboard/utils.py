import builtins
import functools
import operator
import re
from collections import defaultdict
from collections.abc import Mapping
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.

    Typical use
    - Use Unset as a default to signal “no user input”.
    - Downstream, call coalesce(value, default) to materialize a concrete value.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        """
        Falsey sentinel: allows simple truthiness checks without equating Unset to None.
        """
        return False

    def __repr__(self):
        """
        Human-friendly representation used in logs and errors.
        """
        return "Unset"

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


def coalesce(object, default=None, /):
    """
    Resolve an internal Unset sentinel to a concrete default.

    This returns the given object unless it is the Unset sentinel, in which case
    the provided default is returned. Falsey values like None, 0, "" or () are
    preserved as-is; they are not treated as “unset”.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - Function form: rename(callable, name) -> callable
    - Decorator form: rename(name) -> decorator

    Some built-in or C-implemented callables are not updatable and will
    raise TypeError.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    """
    Shallow read-only view of builtin mutable containers.

    - list → tuple
    - dict → MappingProxyType
    - set → frozenset
    - anything else (tuples, tables, bindings) is returned as-is.
    """
    if isinstance(object, list):
        return tuple(object)
    elif isinstance(object, dict):
        return MappingProxyType(object)
    elif isinstance(object, set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads from an attribute named "_{name}" on the
    instance and freezes builtin containers on the way out, so the public
    surface of a descriptor cannot be mutated after construction.

    Example
    - Given self._names, declare names = mirror("names") to expose it safely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


class SpecType(type):
    """
    Metaclass for immutable, introspectable specification objects.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens)
      for use in messages, e.g. ``ParameterTable`` → ``parameter-table``.
    - Expose every name listed in __introspectable__ as a read-only property
      backed by ``_<name>`` (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations driven by
      __displayable__ (falls back to __introspectable__).
    - Seal the class against subclassing when created with ``final=True``.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("final", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def casekey(text, /):
    """
    Case-insensitive comparison key built one character at a time.

    Unlike str.casefold(), the key keeps one entry per character, so "ß" never
    matches "ss".
    """
    return tuple(character.upper() for character in text)


def hostattr(name, default=None, /):
    """
    Read an optional host override from the running program's ``__main__``.

    Hosts customize rendering by defining module-level names such as
    ``__prog__`` (display name) or ``__styles__`` (palette overrides).
    """
    return getattr(__import__("__main__"), name, default)


def palette(defaults, /):
    """
    Merge a default style palette with the host's ``__styles__`` overrides.

    Unknown keys resolve to an empty style.
    """
    overrides = hostattr("__styles__", {})
    if not isinstance(overrides, Mapping):
        raise TypeError("__styles__ must be a mapping of style names to styles")
    return defaultdict(str, dict(defaults) | dict(overrides))


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "casekey",
    "hostattr",
    "palette",

    # Types
    "UnsetType",
    "SpecType",

    # Constants
    "Unset",
)
