from __future__ import annotations

from typing import Tuple, Union

Source = Union[str, bytes, bytearray, memoryview]

CODE_CHARS = b'+-<>.,[]'

INC = ord('+')
DEC = ord('-')
RIGHT = ord('>')
LEFT = ord('<')
OUTPUT = ord('.')
INPUT = ord(',')
LOOP_OPEN = ord('[')
LOOP_CLOSE = ord(']')


def is_code_byte(b: int) -> bool:
    return b in CODE_CHARS


def to_program(source: Source) -> bytes:
    """Return the program as bytes. Text is encoded as UTF-8.

    Comment bytes are kept, so every offset in the result matches the
    offset in the original file.
    """
    if isinstance(source, str):
        return source.encode('utf-8')
    return bytes(source)


def strip_shebang(source: Source) -> bytes:
    # Blank the line instead of cutting it so offsets stay aligned with the file.
    program = to_program(source)
    if not program.startswith(b'#!'):
        return program
    end = program.find(b'\n')
    if end == -1:
        end = len(program)
    return b' ' * end + program[end:]


def count_instructions(source: Source) -> int:
    program = to_program(source)
    return sum(program.count(bytes((c,))) for c in CODE_CHARS)


def locate(program: bytes, position: int) -> Tuple[int, int]:
    """1-based (line, column) of a byte offset."""
    head = program[:position]
    line = head.count(b'\n') + 1
    column = position - (head.rfind(b'\n') + 1) + 1
    return line, column
