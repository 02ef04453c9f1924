from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .lexer import locate

_MAX_LISTED = 10


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * max(0, column - 1)}^")
    return "\n".join(out)


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'unmatched-close':
        return 'Every "]" needs an earlier "[" at the same nesting level. Check for a missing "[" or an extra "]".'
    if kind == 'unmatched-open':
        return 'Check for a missing "]" at the end of a loop body.'
    if kind == 'right':
        return 'Use a larger tape (--tape-length) if the program expects more cells.'
    if kind == 'left':
        return 'The pointer starts at cell 0; there are no cells to its left.'
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFStructuralError(BFError):
    kind: str
    position: int
    positions: Tuple[int, ...]
    line: int
    column: int
    context: str


@dataclass
class BFRuntimeError(BFError):
    ip: int


@dataclass
class BFTapeBoundsError(BFRuntimeError):
    pointer: int
    direction: str
    tape_length: int


@dataclass
class BFOutputError(BFRuntimeError):
    pass


@dataclass
class BFInputError(BFRuntimeError):
    pass


def _source_lines(program: bytes) -> List[str]:
    return program.decode('utf-8', errors='replace').split('\n')


def make_structural_error(*, kind: str, program: bytes, positions: Tuple[int, ...]) -> BFStructuralError:
    position = positions[0]
    line, column = locate(program, position)
    # caret goes under the decoded text, so count characters, not bytes
    line_start = program.rfind(b'\n', 0, position) + 1
    caret = len(program[line_start:position].decode('utf-8', errors='replace')) + 1
    ctx = _build_context(_source_lines(program), line, caret)
    hint = _hint_for(kind)
    hint_block = f"\nHint: {hint}" if hint else ""

    if kind == 'unmatched-close':
        what = "unmatched ']'"
    else:
        what = "unmatched '['"
    extra = ""
    if len(positions) > 1:
        shown = ', '.join(str(p) for p in positions[:_MAX_LISTED])
        more = len(positions) - _MAX_LISTED
        if more > 0:
            shown += f" and {more} more"
        extra = f" ({len(positions)} unclosed loops, at offsets {shown})"

    return BFStructuralError(
        message=f"StructuralError: {what} at offset {position} (line {line}, column {column}){extra}\n{ctx}{hint_block}",
        kind=kind,
        position=position,
        positions=tuple(positions),
        line=line,
        column=column,
        context=ctx,
    )


def make_tape_bounds_error(*, ip: int, pointer: int, direction: str, tape_length: int) -> BFTapeBoundsError:
    op = '>' if direction == 'right' else '<'
    hint = _hint_for(direction)
    hint_block = f"\nHint: {hint}" if hint else ""
    return BFTapeBoundsError(
        message=(
            f"TapeBoundsError: '{op}' at offset {ip} moves the pointer {direction} "
            f"of cell {pointer} (tape length {tape_length}){hint_block}"
        ),
        ip=ip,
        pointer=pointer,
        direction=direction,
        tape_length=tape_length,
    )
