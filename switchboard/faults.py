"""
Switchboard faults (statuses, fault codes, and diagnostics rendering).

Scope
- Status: the coarse outcome of one parse call, returned to the caller.
- FaultCode: canonical, stable numeric identifiers for every failure kind.
  Codes are grouped by domain to keep copy consistent and make logs/searches
  predictable.
- ParseFault and subclasses: exceptions that carry their context as options
  and know how to render themselves as exactly one diagnostic line.
- trigger(): central entry point to surface any fault (print in shell mode,
  raise otherwise).

Diagnostic lines
- conversion faults:
    <program>: Switch '<name>' <phrase> - '<token>'
    <program>: Parameter '<index>' <phrase> - '<token>'
- scan faults:
    <program>: Unrecognized switch - '<token>'
    <program>: Duplicate switch - '<name>'
    <program>: Switch '<name>' requires a value
    <program>: Too many parameters, only <n> required
    <program>: Too few parameters, at least <n> required
    <program>: Missing switch - '<name>'
- table-definition faults:
    TBLERR(<index>): <message>

Styling
- The program name, switch names, indexes and tokens are highlighted when the
  "colorful" option is set. Hosts can override the palette with a mapping
  named __styles__ in __main__.
"""
import copy
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .utils import *

console = Console()


class Status(IntEnum):
    """
    coarse outcome of a parse call.

    the detail channel is the printed diagnostic; the status only tells the
    caller whether to continue, stop quietly (help shown), or fail.
    """
    SUCCESS           = 0
    INVALID_PARAMETER = 2
    UNSUPPORTED       = 3
    OUT_OF_RESOURCES  = 9
    ABORTED           = 21


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - conversion (101xx): value could not be stored in its binding.
    - scan (102xx): token stream does not fit the descriptor tables.
    - table (103xx): the tables themselves are malformed (caller bug).
    - environment (104xx): no token vector to parse.
    """
    # --- conversion ---
    TRUNCATED           = 10101
    DECIMAL_INVALID     = 10102
    HEX_INVALID         = 10103
    INTEGER_INVALID     = 10104
    UINT8_TOO_BIG       = 10105
    UINT16_TOO_BIG      = 10106
    UINT32_TOO_BIG      = 10107
    UINT64_TOO_BIG      = 10108
    OPTION_INVALID      = 10109

    # --- scan ---
    UNRECOGNIZED        = 10201
    DUPLICATE           = 10202
    MISSING_VALUE       = 10203
    TOO_MANY_PARAMETERS = 10204
    TOO_FEW_PARAMETERS  = 10205
    MISSING_SWITCH      = 10206

    # --- table ---
    TABLE_DEFINITION    = 10301

    # --- environment ---
    UNSUPPORTED         = 10401


class ParseFault(Exception):
    """
    base type of every failure the parser can surface.

    a fault is created where the failure is detected, enriched with context
    via copy.replace() as it travels up (switch name, parameter index, program
    name, console), and finally triggered once.

    options (all optional)
    - prog: display name of the program (prefix of the line).
    - switch: matched switch spelling.
    - index: 1-based parameter position.
    - token: the raw token that failed.
    - count: a parameter count shown by cardinality faults.
    - colorful, shell, console: runtime rendering options.
    """
    code = Unset
    status = Status.INVALID_PARAMETER

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def _compose(self, text, styler):
        """
        Build the body of the diagnostic (everything after "<program>: ").

        Returns an empty Text when there is nothing meaningful to say.
        """
        return text(coalesce(self.message, ""), styler("message"))

    def __rich__(self):
        styles = palette({
            "prog-name": "bold #00E5FF",  # neon cyan program name
            "switch": "bold #FFD600",  # amber switch spelling
            "index": "bold #FFD600",  # amber parameter position
            "token": "bold #FF4DA6",  # pinky offending token
            "message": "",
            "table-error": "bold #FF4D4D",  # red table fault tag
        })

        def styler(style):
            return styles[style] if self.options.get("colorful", True) else ""

        def text(fragment, style=""):
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        if not (body := self._compose(text, styler)):
            return Text("")

        if prog := self.options.get("prog"):
            return Text.assemble(text(prog, styler("prog-name")), ": ", body)
        return body

    def __str__(self):
        return self.__rich__().plain

    def __trigger__(self):
        if not self.options.get("shell", True):
            raise self from None
        if render := self.__rich__():
            self.options.get("console", console).print(render, soft_wrap=True, highlight=False)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnrecognizedSwitchError(ParseFault):
    code = FaultCode.UNRECOGNIZED

    def _compose(self, text, styler):
        return Text.assemble("Unrecognized switch - '", text(self.options["token"], styler("token")), "'")


class DuplicateSwitchError(ParseFault):
    code = FaultCode.DUPLICATE

    def _compose(self, text, styler):
        return Text.assemble("Duplicate switch - '", text(self.options["switch"], styler("switch")), "'")


class MissingValueError(ParseFault):
    code = FaultCode.MISSING_VALUE

    def _compose(self, text, styler):
        return Text.assemble("Switch '", text(self.options["switch"], styler("switch")), "' requires a value")


class TooManyParametersError(ParseFault):
    code = FaultCode.TOO_MANY_PARAMETERS

    def _compose(self, text, styler):
        return Text.assemble("Too many parameters, only ", str(self.options["count"]), " required")


class TooFewParametersError(ParseFault):
    code = FaultCode.TOO_FEW_PARAMETERS

    def _compose(self, text, styler):
        return Text.assemble("Too few parameters, at least ", str(self.options["count"]), " required")


class MissingSwitchError(ParseFault):
    code = FaultCode.MISSING_SWITCH

    def _compose(self, text, styler):
        return Text.assemble("Missing switch - '", text(self.options["switch"], styler("switch")), "'")


class UnsupportedError(ParseFault):
    code = FaultCode.UNSUPPORTED
    status = Status.UNSUPPORTED

    def _compose(self, text, styler):
        return Text("Command line arguments are unavailable")


class ConversionError(ParseFault):
    """
    a token could not be stored in its binding.

    the converter raises these with only the token known; the scanner adds
    either the switch spelling or the 1-based parameter index. a conversion
    fault that carries neither renders to nothing.
    """
    phrase = "has an undefined error"

    def _compose(self, text, styler):
        token = text(self.options.get("token", ""), styler("token"))
        if switch := self.options.get("switch"):
            return Text.assemble("Switch '", text(switch, styler("switch")), "' ", self.phrase, " - '", token, "'")
        if index := self.options.get("index"):
            return Text.assemble("Parameter '", text(index, styler("index")), "' ", self.phrase, " - '", token, "'")
        return Text("")


class TruncatedValueError(ConversionError):
    code = FaultCode.TRUNCATED
    phrase = "has its string truncated"


class InvalidDecimalError(ConversionError):
    code = FaultCode.DECIMAL_INVALID
    phrase = "has invalid decimal value"


class InvalidHexError(ConversionError):
    code = FaultCode.HEX_INVALID
    phrase = "has invalid hex value"


class InvalidIntegerError(ConversionError):
    code = FaultCode.INTEGER_INVALID
    phrase = "has invalid integer value"


class InvalidOptionError(ConversionError):
    code = FaultCode.OPTION_INVALID
    phrase = "has invalid option"


class TooBigError(ConversionError):
    """
    a parsed number exceeds the maximum of its binding's width.

    the "width" option carries the width in bits (8, 16, 32 or 64) and selects
    both the fault code and the phrase.
    """

    @property
    def code(self):
        return {
            8: FaultCode.UINT8_TOO_BIG,
            16: FaultCode.UINT16_TOO_BIG,
            32: FaultCode.UINT32_TOO_BIG,
            64: FaultCode.UINT64_TOO_BIG,
        }[int(self.options["width"])]

    @property
    def phrase(self):
        return "has too large a number (%d-bit)" % int(self.options["width"])


class TableDefinitionError(ParseFault, ValueError):
    """
    malformed descriptor table (a bug in the calling program, not bad input).

    raised by descriptor and table constructors. when parse() builds the
    tables itself, it reports the fault with a distinguishable "TBLERR" prefix
    and the out-of-resources status.
    """
    code = FaultCode.TABLE_DEFINITION
    status = Status.OUT_OF_RESOURCES

    def __rich__(self):
        styles = palette({"table-error": "bold #FF4D4D"})
        tag = "TBLERR" if (index := self.options.get("index")) is None else "TBLERR(%d)" % index
        return Text.assemble(
            Text(tag, styles["table-error"] if self.options.get("colorful", True) else ""),
            ": ",
            coalesce(self.message, "malformed table"),
        )


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseFault).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode the diagnostic is printed on the console; otherwise the
      fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "Status",
    "FaultCode",
    "ParseFault",
    "UnrecognizedSwitchError",
    "DuplicateSwitchError",
    "MissingValueError",
    "TooManyParametersError",
    "TooFewParametersError",
    "MissingSwitchError",
    "UnsupportedError",
    "ConversionError",
    "TruncatedValueError",
    "InvalidDecimalError",
    "InvalidHexError",
    "InvalidIntegerError",
    "InvalidOptionError",
    "TooBigError",
    "TableDefinitionError",
    "trigger",
)
