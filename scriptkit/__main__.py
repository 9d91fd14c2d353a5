#!/usr/bin/env python3
"""
Parse shell script arguments and print them as shell assignments.

Usage:
    scriptkit SPEC [--prog=<name>] [--source=<path>] [-- ARGS...]

SPEC is the declaration (e.g. "infile [--outfile=<path>] [--force]"), and
everything after "--" is the invocation to parse. On success every declared
name is printed as name='value' on stdout, ready for eval:

    eval "$(scriptkit 'infile [--force]' --source="$0" -- "$@")"

On "--help" or a usage error the diagnostics go to stderr, "exit 1" is printed on
stdout (so the eval stops the calling script) and the status is 1. --source
names the file whose leading comment block "--help" prints; --prog is the name
shown in usage lines.
"""
import os.path
import sys

from .faults import DeclarationError
from .parser import run
from .reporting import err
from .utils import Unset, coalesce

USAGE = "spec [--prog=<name>] [--source=<path>]"


def main(argv=Unset):
    arguments = list(coalesce(argv, sys.argv[1:]))

    # Arguments before "--" configure this tool; the rest is the invocation.
    if "--" in arguments:
        split = arguments.index("--")
        head, tail = arguments[:split], arguments[split + 1:]
    else:
        head, tail = arguments, []

    try:
        cli = run(USAGE, head, prog="scriptkit", source=__file__, environ={})
        source = cli.source or __file__
        prog = cli.prog or os.path.basename(cli.source or "scriptkit")
        bindings = run(cli.spec, tail, prog=prog, source=source)
    except DeclarationError as exception:
        err(exception.message)
        print("exit 1")
        return 1
    except SystemExit:
        print("exit 1")
        raise

    if output := bindings.export():
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
