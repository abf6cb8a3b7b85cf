"""Command-line entry point: read a scheme, walk it randomly, write the result."""

from __future__ import annotations

import argparse
import random
import sys
from collections.abc import Sequence

from .scheme import Scheme, expanded
from .tensor import DEFAULT_MAX_ORDER

USAGE = "USAGE: epsflip filename pathlength (check)"


class _UsageError(Exception):
    """Raised when the command line cannot be parsed."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise _UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="epsflip",
        description="Take a random walk of flips over a scheme and write the result.",
    )
    parser.add_argument("filename", help="scheme file in e^k*(a..)(b..)(c..) notation")
    parser.add_argument("pathlength", type=int, help="maximum number of moves")
    parser.add_argument(
        "check",
        type=int,
        nargs="?",
        default=0,
        help="non-zero to verify that the expanded scheme is unchanged",
    )
    parser.add_argument(
        "--max-order",
        type=int,
        default=DEFAULT_MAX_ORDER,
        help="work modulo e^MAX_ORDER (default: %(default)s)",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for the random walk")
    parser.add_argument(
        "--output-dir", default=".", help="directory for the k<number>.exp output file"
    )
    return parser


def _signature(scheme: Scheme) -> list[tuple[int, int, int, int]]:
    return [(t.coeff, t.a[0], t.b[0], t.c[0]) for t in scheme.tensors]


def main(argv: Sequence[str] | None = None) -> int:
    """Run the walk; return 0 on success and 1 on any error."""
    try:
        args = _build_parser().parse_args(argv)
    except _UsageError:
        print(USAGE)
        return 1
    if args.max_order < 1:
        print(f"max order must be positive, got {args.max_order}", file=sys.stderr)
        return 1

    rng = random.Random(args.seed)
    try:
        scheme = Scheme.from_file(args.filename, args.max_order, rng)
    except OSError:
        print(f"Could not open file for reading: {args.filename}", file=sys.stderr)
        return 1

    before = expanded(scheme) if args.check else None
    scheme.update()
    scheme.random_walk(args.pathlength)

    try:
        path = scheme.write_to_file(args.output_dir)
    except OSError:
        print("Failed to open file", file=sys.stderr)
        return 1
    print(f"{path},{len(scheme)}")

    if before is not None:
        if _signature(before) != _signature(expanded(scheme)):
            print("ERROR HERE", file=sys.stderr)
            return 1
        print("correct")
    return 0


if __name__ == "__main__":
    sys.exit(main())