from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .brackets import resolve_brackets
from .engine import EofPolicy, RunStatus, RuntimeSettings, run
from .errors import BFRuntimeError, BFStructuralError
from .lexer import count_instructions, strip_shebang
from .streams import as_reader, as_writer
from .tape import DEFAULT_TAPE_LENGTH

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
# 2 is argparse's usage error
EXIT_STRUCTURAL_ERROR = 3
EXIT_RUNTIME_ERROR = 4
EXIT_INTERRUPTED = 130


def _tape_length(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid tape length: {value!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"tape length must be at least 1, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bf-engine',
        description="Brainfuck interpreter. Reads the program from FILE, from -e, or from stdin.",
    )
    parser.add_argument('file', nargs='?', metavar='FILE', help='Brainfuck program to run')
    parser.add_argument('-e', '--eval', metavar='CODE', help='Run CODE instead of reading a file')
    parser.add_argument('-t', '--tape-length', type=_tape_length, default=DEFAULT_TAPE_LENGTH, metavar='BYTES',
                        help=f'Number of tape cells (default {DEFAULT_TAPE_LENGTH})')
    parser.add_argument('--no-flush', action='store_true',
                        help='Buffer output instead of flushing after every byte')
    parser.add_argument('--eof', choices=[p.value for p in EofPolicy], default=EofPolicy.UNCHANGED.value,
                        help="What ',' does at end of input (default: unchanged)")
    parser.add_argument('-v', '--verbose', action='count', default=0, help='Increase verbosity (-v, -vv)')
    parser.add_argument('-q', '--quiet', action='store_true', help='Only report errors')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def setup_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose == 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logging.basicConfig(level=level, handlers=[handler], force=True)


def _load_program(args: argparse.Namespace) -> bytes:
    if args.eval is not None:
        return args.eval.encode('utf-8')
    if args.file is not None:
        return Path(args.file).read_bytes()
    return as_reader(sys.stdin).read()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.quiet)

    if args.file is not None and args.eval is not None:
        parser.error('give either FILE or --eval, not both')

    try:
        source = _load_program(args)
    except OSError as exc:
        logger.error("unable to open file %r: %s", args.file, exc.strerror or exc)
        return EXIT_LOAD_ERROR
    except KeyboardInterrupt:
        logger.error("interrupted")
        return EXIT_INTERRUPTED

    program = strip_shebang(source)
    if not program.strip():
        logger.info("empty program, nothing to run")
        return EXIT_OK

    try:
        jump_table = resolve_brackets(program)
    except BFStructuralError as exc:
        logger.error("%s", exc)
        return EXIT_STRUCTURAL_ERROR

    logger.info("%d instruction(s), %d loop(s), tape length %d",
                count_instructions(program), len(jump_table), args.tape_length)

    settings = RuntimeSettings(flush_output=not args.no_flush, eof_policy=EofPolicy(args.eof))
    # the program's own ',' reads stdin; when stdin held the program it is already drained
    reader = as_reader(sys.stdin) if (args.file is not None or args.eval is not None) else as_reader(None)
    writer = as_writer(sys.stdout)

    try:
        completion = run(program, jump_table, args.tape_length, reader, writer, settings=settings)
    except BFRuntimeError as exc:
        logger.error("%s", exc)
        return EXIT_RUNTIME_ERROR
    except KeyboardInterrupt:
        logger.error("interrupted")
        return EXIT_INTERRUPTED

    if completion.status is RunStatus.INPUT_EXHAUSTED:
        logger.info("stopped at end of input (offset %d)", completion.ip)
    logger.info("%d step(s)", completion.steps)
    return EXIT_OK


if __name__ == '__main__':
    raise SystemExit(main())
