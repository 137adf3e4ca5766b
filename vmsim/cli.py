"""Command line entry point of the virtual memory simulator."""

import getopt
import sys
from contextlib import ExitStack
from typing import List, Optional

from .constants import parse_replacement
from .errors import Panic
from .selftest import run_tests
from .simulator import Simulator, TraceError

_HELP = """\
vmsim [OPTIONS] -i traces/file.trace -r<replacement algorithm>
  -i\t\tReads the trace from the specified path
  -s\t\tReads the trace from standard input
  -r\t\tSelect the replacement algorithm (either 'random' or 'lru' or 'fifo')
  -c\t\tEnables strict memory corruption checking
    \t\t(automatically checks a variety of conditions that can cause bugs)
  -t\t\tRun tests
  -h\t\tThis helpful output"""

_PANIC_HINTS = (
    "-> Hint: To debug a panic, use a debugger.",
    "-> Set a breakpoint where Panic is raised and examine the traceback to "
    "determine where it was called.",
)


def _help() -> int:
    print(_HELP)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run the simulator; return the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)

    with ExitStack() as stack:
        try:
            options, _ = getopt.gnu_getopt(args, "i:htscr:")
        except getopt.GetoptError as exc:
            print(exc, file=sys.stderr)
            return _help()

        fin = None
        replacement = None
        check_corruption = False

        for opt, value in options:
            if opt == "-i":
                try:
                    fin = stack.enter_context(open(value, "r"))
                except OSError as exc:
                    print(f"Unable to open trace file: {exc.strerror}", file=sys.stderr)
                    return 1
            elif opt == "-s":
                print("Input trace lines.")
                fin = sys.stdin
            elif opt == "-c":
                check_corruption = True
                print("-> Note: Strict memory corruption checking is enabled.")
            elif opt == "-r":
                try:
                    replacement = parse_replacement(value)
                except ValueError as exc:
                    print(exc, file=sys.stderr)
                    return 1
            elif opt == "-t":
                try:
                    run_tests()
                except AssertionError as exc:
                    print(f"Test failed: {exc}", file=sys.stderr)
                return 1
            else:
                return _help()

        if fin is None:
            print("ERROR: You must specify a trace filename or stdin.", file=sys.stderr)
            return _help()
        if replacement is None:
            print("ERROR: You must select a replacement algorithm using -r.", file=sys.stderr)
            return _help()

        try:
            simulator = Simulator(replacement, check_corruption, sys.stdout)
            simulator.run(fin)
        except TraceError as exc:
            print(exc)
            return 1
        except Panic as exc:
            print(exc)
            for hint in _PANIC_HINTS:
                print(hint)
            return 1

    print(simulator.report(), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())