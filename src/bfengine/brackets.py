from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from .errors import make_structural_error
from .lexer import LOOP_CLOSE, LOOP_OPEN, Source, to_program

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JumpTable:
    """Matching loop brackets, by byte offset, in both directions."""

    forward: Dict[int, int] = field(default_factory=dict)
    backward: Dict[int, int] = field(default_factory=dict)
    max_depth: int = 0

    def __getitem__(self, position: int) -> int:
        if position in self.forward:
            return self.forward[position]
        return self.backward[position]

    def __contains__(self, position: object) -> bool:
        return position in self.forward or position in self.backward

    def __len__(self) -> int:
        return len(self.forward)

    def pairs(self) -> Iterator[Tuple[int, int]]:
        for start in sorted(self.forward):
            yield start, self.forward[start]


def resolve_brackets(source: Source) -> JumpTable:
    """Match every '[' with its ']' in one pass.

    Pending opens live on an explicit list, not the call stack, so nesting
    depth is bounded only by memory.

    Raises:
        BFStructuralError: on the first unmatched ']', or after the scan if
            any '[' is left open (all of them are reported).
    """
    program = to_program(source)
    forward: Dict[int, int] = {}
    backward: Dict[int, int] = {}
    stack: List[int] = []
    max_depth = 0

    for pos, b in enumerate(program):
        if b == LOOP_OPEN:
            stack.append(pos)
            if len(stack) > max_depth:
                max_depth = len(stack)
        elif b == LOOP_CLOSE:
            if not stack:
                raise make_structural_error(kind='unmatched-close', program=program, positions=(pos,))
            start = stack.pop()
            forward[start] = pos
            backward[pos] = start

    if stack:
        raise make_structural_error(kind='unmatched-open', program=program, positions=tuple(stack))

    logger.debug("resolved %d loop(s), max depth %d, program %d bytes", len(forward), max_depth, len(program))
    return JumpTable(forward=forward, backward=backward, max_depth=max_depth)
