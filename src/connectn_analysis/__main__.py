from __future__ import annotations

import sys

from .cli.analyze_csv import main as analyze_main

COMMANDS = {
    "analyze": analyze_main,
    "analysis": analyze_main,
}

USAGE = "usage: python -m connectn_analysis analyze [--csv PATH | --results-dir DIR] [--metric M] [--by preset depth]"


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    # bare flags go to the only command there is
    if not args or args[0].startswith("-"):
        return analyze_main(args)

    command = COMMANDS.get(args[0].lower())
    if command is None:
        print(USAGE)
        return 2
    return command(args[1:])


if __name__ == "__main__":
    raise SystemExit(main())
