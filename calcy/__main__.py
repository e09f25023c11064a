from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from calcy.config import EvaluatorConfig, Strategy
from calcy.errors import CalcyError
from calcy.interpreter import Interpreter, repl
from calcy.debug_utils.pprint import pformat

logger = logging.getLogger("calcy")


def _strategy(raw: str) -> Strategy:
    try:
        return Strategy.parse(raw)
    except CalcyError as e:
        raise argparse.ArgumentTypeError(str(e))


def create_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calcy",
        description="Evaluate calcy programs, or start a REPL when no file is given.",
    )
    parser.add_argument("file", nargs="?", help="source file to evaluate")
    parser.add_argument(
        "--strategy",
        type=_strategy,
        help="argument passing: value, name or need (default: $CALCY_STRATEGY or value)",
    )
    parser.add_argument("--max-depth", type=int, help="maximum evaluation depth")
    memo = parser.add_mutually_exclusive_group()
    memo.add_argument("--memoize", dest="memoize", action="store_true", default=None,
                      help="cache forced thunks")
    memo.add_argument("--no-memoize", dest="memoize", action="store_false",
                      help="re-evaluate thunks on every force")
    parser.add_argument("--trace", action="store_true", default=None,
                        help="log every evaluation step")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = create_arg_parser().parse_args(argv)
    try:
        config = EvaluatorConfig.from_env().with_overrides(
            strategy=args.strategy,
            max_depth=args.max_depth,
            memoize=args.memoize,
            trace=args.trace,
        )
    except CalcyError as e:
        print(e, file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if config.trace else logging.WARNING,
        format="%(message)s",
    )
    logger.debug("Configuration: %s", config)
    interpreter = Interpreter(config)

    if args.file is None:
        repl(interpreter)
        return 0

    path = Path(args.file)
    try:
        source = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        print(f"Error: file not found: {args.file}", file=sys.stderr)
        return 1
    try:
        result = interpreter.eval_program(source)
    except CalcyError as e:
        print(e, file=sys.stderr)
        return 1
    if result is not None:
        print(pformat(result))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
