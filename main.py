import sys

from rich.pretty import pprint

from switchboard import *

__prog__ = "head"

lines = Unsigned(Width.BITS16, 10)
mode = EnumIndex([(0, "Lines"), (1, "Bytes")], 0)
source = Str(256)
quiet = Boolean()


if __name__ == '__main__':
    status = parse(
        ParameterTable(Parameter(source, "[file] file to read")),
        1,
        SwitchTable(
            Switch("-n", "-lines", binding=lines, descr="[count] number of units to print"),
            Switch("-m", "-mode", binding=mode, descr="[unit] what to count"),
            Switch("-q", "-quiet", binding=quiet, descr="never print headers"),
        ),
        "print the first part of a file",
    )
    if status is not Status.SUCCESS:
        sys.exit(0 if status is Status.ABORTED else int(status))
    pprint({"file": source, "lines": lines, "mode": mode, "quiet": quiet})
