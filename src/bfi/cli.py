from __future__ import annotations

import argparse
import sys
import time
from typing import List, Optional, Tuple

from .config import DEFAULT_TAPE_SIZE, InterpreterConfig
from .engine import Interpreter
from .errors import BFIError
from .instructions import symbols_from_string


def _format_dump(tape, count: int) -> str:
    cells = [int(b) for b in tape[:count]]
    rows = [" ".join(f"{v:3d}" for v in cells[i:i + 8]) for i in range(0, len(cells), 8)]
    return "\n".join(rows)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bfi",
        description="Byte-tape interpreter. Snippets (-e) run first, then files, all on the same tape.",
    )
    parser.add_argument("files", nargs="*", help="Program files to run in order")
    parser.add_argument("-e", "--eval", dest="snippets", action="append", default=[], metavar="CODE",
                        help="Program text to run (repeatable)")
    parser.add_argument("--tape-size", type=int, default=DEFAULT_TAPE_SIZE,
                        help=f"Number of tape cells (default {DEFAULT_TAPE_SIZE})")
    parser.add_argument("--symbols", metavar="CHARS",
                        help="8 replacement symbols in '><+-.,[]' order, e.g. 'DAWSOI()'")
    parser.add_argument("--trace", action="store_true", help="Print every executed step to stderr")
    parser.add_argument("--dump", type=int, default=0, metavar="N",
                        help="Print the first N tape cells to stderr when done")
    parser.add_argument("--time", action="store_true", help="Print execution time to stderr")
    args = parser.parse_args(argv)

    if not args.files and not args.snippets:
        parser.error("nothing to run: give a FILE or -e CODE")

    custom = None
    if args.symbols is not None:
        try:
            custom = symbols_from_string(args.symbols)
        except ValueError as e:
            parser.error(f"--symbols: {e}")

    programs: List[Tuple[str, str]] = [("<eval>", code) for code in args.snippets]
    for name in args.files:
        try:
            with open(name, "r", encoding="utf-8") as f:
                programs.append((name, f.read()))
        except OSError as e:
            print(f"bfi: cannot read {name}: {e.strerror}", file=sys.stderr)
            return 1

    try:
        interp = Interpreter(InterpreterConfig(tape_size=args.tape_size, custom_instructions=custom, trace=args.trace))
    except BFIError as e:
        print(e, file=sys.stderr)
        return 1

    status = 0
    start = time.time()
    for name, code in programs:
        try:
            interp.run(code)
        except BFIError as e:
            print(f"{name}: {e}", file=sys.stderr)
            status = 1
            break
        finally:
            if args.trace and interp.trace:
                print("\n".join(interp.trace), file=sys.stderr)
    end = time.time()

    if args.time:
        print(f"Execution took {(end - start) * 1000:.2f} ms", file=sys.stderr)
    if args.dump > 0:
        print(f"dp={interp.data_pointer}", file=sys.stderr)
        print(_format_dump(interp.tape, args.dump), file=sys.stderr)

    return status
