"""
Value conversion: interpret one raw token per a descriptor's kind and store it.

Grammar (leading spaces/tabs are skipped, nothing may trail)
- decimal:      [ \\t]* [0-9]*
- hexadecimal:  [ \\t]* (0+[xX])? [0-9A-Fa-f]*
- integer:      hexadecimal when the token has a hex prefix (whitespace, at
                least one zero, then x/X), decimal otherwise.

An ``x`` is only a prefix after at least one zero: "0x1A" and "000X1a" are
prefixed hex, a bare "x1A" is not. An empty digit run reads as 0.
"""
import re

from .bindings import Kind
from .faults import *

_DECIMAL = re.compile(r"[ \t]*(?P<digits>[0-9]*)")
_HEXADECIMAL = re.compile(r"[ \t]*(?:0+[xX])?(?P<digits>[0-9A-Fa-f]*)")
_HEX_PREFIX = re.compile(r"[ \t]*0+[xX]")


def is_decimal(token, /):
    return _DECIMAL.fullmatch(token) is not None


def is_hex(token, /):
    return _HEXADECIMAL.fullmatch(token) is not None


def has_hex_prefix(token, /):
    return _HEX_PREFIX.match(token) is not None


def _number(token, match, base, binding):
    digits = match["digits"].lstrip("0")
    # a longer decimal run cannot fit, and would exceed int() digit limits
    if base == 10 and len(digits) > len(str(binding.width.maximum)):
        raise TooBigError(token=token, width=int(binding.width))
    return int(digits, base) if digits else 0


def _store(token, number, binding):
    if number > binding.width.maximum:
        raise TooBigError(token=token, width=int(binding.width))
    binding.value = number


def convert(token, kind, binding, /):
    """
    Convert ``token`` according to ``kind`` and write it into ``binding``.

    Raises
    - TruncatedValueError: STRING longer than capacity - 1; the truncated
      prefix is still stored.
    - InvalidDecimalError / InvalidHexError / InvalidIntegerError: malformed
      number for the kind.
    - TooBigError: number above the binding's width maximum.
    - InvalidOptionError: ENUM name not in the binding's table.
    - TypeError: the kind carries no value (NONE).

    On any error other than truncation, the binding is left untouched.
    """
    match kind:
        case Kind.STRING:
            binding.value = token[:binding.capacity - 1]
            if len(token) > binding.capacity - 1:
                raise TruncatedValueError(token=token)
        case Kind.DECIMAL:
            if not (match := _DECIMAL.fullmatch(token)):
                raise InvalidDecimalError(token=token)
            _store(token, _number(token, match, 10, binding), binding)
        case Kind.HEXADECIMAL:
            if not (match := _HEXADECIMAL.fullmatch(token)):
                raise InvalidHexError(token=token)
            _store(token, _number(token, match, 16, binding), binding)
        case Kind.INTEGER:
            if has_hex_prefix(token):
                if not (match := _HEXADECIMAL.fullmatch(token)):
                    raise InvalidIntegerError(token=token)
                number = _number(token, match, 16, binding)
            elif match := _DECIMAL.fullmatch(token):
                number = _number(token, match, 10, binding)
            else:
                raise InvalidIntegerError(token=token)
            _store(token, number, binding)
        case Kind.ENUM:
            try:
                binding.value = binding.table.lookup(token)
            except KeyError:
                raise InvalidOptionError(token=token) from None
        case _:
            raise TypeError(f"convert() cannot store {kind.value!r} values")


__all__ = (
    "convert",
    "is_decimal",
    "is_hex",
    "has_hex_prefix",
)
