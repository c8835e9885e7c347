"""
Switchboard parser: scan a token vector against descriptor tables.

What this module provides
- Options: bitwise-combinable functional options (NO_HELP, NO_BREAK).
- Parser: per-invocation context holding the program name, console, pager
  state and runtime flags; Parser.parse() runs one scan.
- parse(): convenience wrapper building a Parser and running it once.

Phases of Parser.parse()
- setup
  • obtain the tokens (explicit argv, a shell-like string, or sys.argv);
    no tokens → UnsupportedError.
  • build/validate the tables; table faults → TBLERR diagnostic and
    OUT_OF_RESOURCES.
  • resolve the display name (explicit name, __main__.__prog__, or the last
    path component of token 0).
- built-ins (pre-scan over every token, independent of position)
  • pager toggle (-b/-break): paging is reset on every call, then enabled
    if present.
  • help (-h/-help): render help and return ABORTED; nothing is bound.
    Both built-ins are always listed last in help.
- scan (left to right from token 1)
  • switch tokens ('-' or '/' prefix) resolve case-insensitively; unknown →
    UnrecognizedSwitchError, seen twice → DuplicateSwitchError.
  • value-less switches store True (Boolean) or their predefined value
    (Unsigned); value-bearing switches take the next token unless it is
    missing or looks like a switch (MissingValueError).
  • other tokens fill the next positional parameter (TooManyParametersError
    past the table's end).
- post-scan
  • too few positionals → TooFewParametersError; absent mandatory switch →
    MissingSwitchError.
  • presence flags are copied into each switch's presence binding whatever
    the outcome of the scan.

The first fault stops the scan; it is triggered once (printed in shell mode,
raised otherwise) and its status is returned.

Quick start
    from switchboard import *

    source = Str(256)
    count = Unsigned(Width.BITS16)
    verbose = Boolean()

    status = parse(
        ParameterTable(Parameter(source, "[source] file to read")),
        1,
        SwitchTable(
            Switch("-n", "-count", binding=count, descr="[n] number of lines"),
            Switch("-v", "-verbose", binding=verbose, descr="say more"),
        ),
        "print the head of a file",
    )
    if status is not Status.SUCCESS:
        raise SystemExit(status)
"""
import contextlib
import copy
import enum
import re
import shlex
import sys
from collections import deque
from collections.abc import Iterable

from rich.pretty import pprint

from .bindings import *
from .converter import convert
from .faults import *
from .faults import console as default_console
from .helper import render_help
from .tables import *
from .utils import *


class Options(enum.IntFlag):
    """
    functional options of a parse call (bit values to be ORed).
    """
    NONE = 0x0000
    NO_HELP = 0x0001
    NO_BREAK = 0x0002


def _tables(parameters, switches):
    """
    Coerce plain iterables (or None) into validated tables.
    """
    if not isinstance(parameters, ParameterTable):
        parameters = ParameterTable(*coalesce(parameters, None) or ())
    if not isinstance(switches, SwitchTable):
        switches = SwitchTable(*coalesce(switches, None) or ())
    return parameters, switches


def _is_switch(token):
    return token.startswith(("-", "/"))


class Parser(metaclass=SpecType):
    """
    Per-invocation parsing context.

    Parameters (keyword-only)
    - name: Unset | str
      Display name used in usage and diagnostics. When omitted, the host's
      __main__.__prog__ is used, then the last path component of token 0.
    - console: Unset | rich.console.Console
      Where help and diagnostics are printed (stdout by default).
    - shell: bool
      True: print diagnostics and return a Status. False: raise the fault.
    - colorful: bool
      Apply the highlight palette.
    - trace: bool
      Pretty-print the token vector before scanning.

    State (read-only, refreshed by every parse())
    - paging: whether the pager toggle was present.
    - count: number of positional parameters filled.
    """

    __introspectable__ = (
        "console",
        "shell",
        "colorful",
        "trace",
    )
    __displayable__ = ("name", "shell", "colorful", "paging", "count")

    def __init__(self, *, name=Unset, console=Unset, shell=True, colorful=True, trace=False):
        if not isinstance(name, str | Unset):
            raise TypeError("parser 'name' must be a string")
        self._name = name
        self._prog = name
        self._console = coalesce(console, default_console)
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._trace = bool(trace)
        self._paging = False
        self._count = 0

    @property
    def name(self):
        return coalesce(self._prog)

    @property
    def paging(self):
        return self._paging

    @property
    def count(self):
        return self._count

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's runtime options merged in.
        """
        trigger(
            fault,
            **{"prog": self.name} | options,
            console=self._console,
            shell=self._shell,
            colorful=self._colorful,
        )

    def _tokens(self, argv):
        """
        Normalize the token source into a list[str].

        - Unset: sys.argv.
        - str: shell-like string split with shlex.split.
        - Iterable[str]: used as-is (empty strings are kept; they are
          positional tokens).
        """
        if argv is Unset:
            argv = sys.argv
        if argv is None:
            raise UnsupportedError()
        if isinstance(argv, str):
            tokens = shlex.split(argv)
        elif isinstance(argv, Iterable):
            tokens = list(argv)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argv must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argv must be a string or an iterable of strings")
        if not tokens:
            raise UnsupportedError()
        return tokens

    def _resolve_name(self, path):
        if self._name is not Unset:
            return self._name
        return hostattr("__prog__") or re.split(r"[\\/]", path)[-1]

    def _helper(self, parameters, mandatory, switches, descr):
        if self._paging and self._console.is_terminal:
            pager = self._console.pager(styles=self._colorful)
        else:
            pager = contextlib.nullcontext()
        with pager:
            render_help(
                parameters,
                mandatory,
                switches,
                descr,
                name=self.name,
                console=self._console,
                colorful=self._colorful,
            )

    def parse(self, parameters=(), mandatory=0, switches=(), descr=Unset, options=Options.NONE, /, argv=Unset, *, count=Unset):
        """
        Parse a token vector, writing every matched value into its binding.

        Parameters
        - parameters: ParameterTable | Iterable[Parameter] | None
        - mandatory: int
          Number of leading parameters that must be supplied (clamped to the
          table size).
        - switches: SwitchTable | Iterable[Switch] | None
        - descr: Unset | str
          Program description shown in help.
        - options: Options
        - argv: Unset | str | Iterable[str]
          Token vector including the program path at index 0.
        - count: Unset | Unsigned
          Receives the number of positional parameters supplied.

        Returns
        - Status.SUCCESS, Status.ABORTED (help shown), or the status of the
          first fault (printed in shell mode, raised otherwise).
        """
        if not isinstance(mandatory, int) or isinstance(mandatory, bool):
            raise TypeError("parse() 'mandatory' must be an integer")
        if mandatory < 0:
            raise ValueError("parse() 'mandatory' cannot be negative")
        if not isinstance(options, int):
            raise TypeError("parse() 'options' must be Options")
        if count is not Unset and not isinstance(count, Unsigned):
            raise TypeError("parse() 'count' must be an unsigned binding")
        options = Options(options)

        self._count = 0
        self._paging = False
        if count is not Unset:
            count.value = 0

        try:
            tokens = self._tokens(argv)
            parameters, switches = _tables(parameters, switches)
            mandatory = min(mandatory, len(parameters))

            self._prog = self._resolve_name(tokens[0])

            if self._trace:
                pprint(tokens, console=self._console)

            # pager toggle is honoured wherever it appears
            if not options & Options.NO_BREAK:
                self._paging = any(PAGER.matches(token) for token in tokens)

            # help wins over everything else, including malformed input
            if not options & Options.NO_HELP and any(HELP.matches(token) for token in tokens):
                self._helper(parameters, mandatory, switches, descr)
                return Status.ABORTED

            self._parseargs(deque(tokens[1:]), parameters, mandatory, switches, options, count)
        except ParseFault as fault:
            self.trigger(fault)
            return fault.status

        return Status.SUCCESS

    def _parseargs(self, tokens, parameters, mandatory, switches, options, count):
        present = [False] * len(switches)
        try:
            while tokens:
                token = tokens.popleft()

                if not _is_switch(token):
                    if self._count >= len(parameters):
                        raise TooManyParametersError(count=len(parameters), token=token)
                    parameter = parameters[self._count]
                    try:
                        convert(token, parameter.kind, parameter.binding)
                    except ConversionError as error:
                        raise copy.replace(error, index=self._count + 1) from None
                    self._count += 1
                    if count is not Unset:
                        count.value = self._count
                    continue

                if not options & Options.NO_BREAK and PAGER.matches(token):
                    continue

                if (resolved := switches.resolve(token)) is None:
                    raise UnrecognizedSwitchError(token=token)
                position, switch, spelling = resolved

                if present[position]:
                    raise DuplicateSwitchError(switch=spelling, token=token)
                present[position] = True

                if switch.kind is Kind.NONE:
                    if isinstance(switch.binding, Unsigned):
                        switch.binding.value = switch.value
                    elif isinstance(switch.binding, Boolean):
                        switch.binding.value = True
                    continue

                # a switch-looking token is never taken as a value
                if not tokens or _is_switch(tokens[0]):
                    raise MissingValueError(switch=spelling)
                try:
                    convert(tokens.popleft(), switch.kind, switch.binding)
                except ConversionError as error:
                    raise copy.replace(error, switch=spelling) from None

            if self._count < mandatory:
                raise TooFewParametersError(count=mandatory)

            for switch, seen in zip(switches, present):
                if switch.mandatory and not seen:
                    raise MissingSwitchError(switch=switch.label)
        finally:
            for switch, seen in zip(switches, present):
                if switch.present is not None:
                    switch.present.value = seen


def parse(parameters=(), mandatory=0, switches=(), descr=Unset, options=Options.NONE, /, argv=Unset, *, count=Unset, **config):
    """
    Parse the command line in one call.

    Equivalent to ``Parser(**config).parse(parameters, mandatory, switches,
    descr, options, argv, count=count)``; see Parser for the configuration
    keywords (name, console, shell, colorful, trace).
    """
    return Parser(**config).parse(parameters, mandatory, switches, descr, options, argv, count=count)


__all__ = (
    "Options",
    "Parser",
    "parse",
)
