from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from . import streams
from .brackets import JumpTable
from .errors import BFInputError, BFOutputError
from .lexer import (
    DEC,
    INC,
    INPUT,
    LEFT,
    LOOP_CLOSE,
    LOOP_OPEN,
    OUTPUT,
    RIGHT,
    Source,
    to_program,
)
from .streams import ByteReader, ByteWriter
from .tape import DEFAULT_TAPE_LENGTH, Tape

logger = logging.getLogger(__name__)


class EofPolicy(enum.Enum):
    """What ',' does once the input stream has no more bytes."""

    UNCHANGED = 'unchanged'
    ZERO = 'zero'
    HALT = 'halt'


class RunStatus(enum.Enum):
    FINISHED = 'finished'
    INPUT_EXHAUSTED = 'input-exhausted'


@dataclass(frozen=True)
class RuntimeSettings:
    flush_output: bool = True
    eof_policy: EofPolicy = EofPolicy.UNCHANGED


@dataclass(frozen=True)
class Completion:
    status: RunStatus
    steps: int
    ip: int
    pointer: int

    @property
    def finished(self) -> bool:
        return self.status is RunStatus.FINISHED


class Engine:
    """Runs one program on one tape.

    Loops are plain jumps through the precomputed ``JumpTable``; nothing in
    the dispatch path recurses, so neither nesting depth nor iteration count
    is limited by the interpreter stack.
    """

    def __init__(self, program: Source, jump_table: JumpTable, tape_length: int = DEFAULT_TAPE_LENGTH,
                 settings: Optional[RuntimeSettings] = None):
        self.program = to_program(program)
        self.jump_table = jump_table
        self.tape = Tape(tape_length)
        self.settings = settings or RuntimeSettings()
        self.ip = 0
        self.steps = 0
        self.status: Optional[RunStatus] = None

    @property
    def done(self) -> bool:
        return self.status is not None or self.ip >= len(self.program)

    def step(self, reader: ByteReader, writer: ByteWriter) -> bool:
        """Execute the byte at ``ip``. Returns False once the run is over."""
        if self.done:
            return False

        ip = self.ip
        op = self.program[ip]
        tape = self.tape

        if op == INC:
            tape.increment()
        elif op == DEC:
            tape.decrement()
        elif op == RIGHT:
            tape.move_right(ip)
        elif op == LEFT:
            tape.move_left(ip)
        elif op == OUTPUT:
            self._write(writer, ip)
        elif op == INPUT:
            if not self._read(reader, writer, ip):
                # ip stays on the ',' that hit end-of-data
                self.status = RunStatus.INPUT_EXHAUSTED
                return False
        elif op == LOOP_OPEN:
            if tape.value == 0:
                ip = self.jump_table.forward[ip]
        elif op == LOOP_CLOSE:
            if tape.value != 0:
                ip = self.jump_table.backward[ip]
        else:
            self.ip = ip + 1
            return not self.done

        self.steps += 1
        self.ip = ip + 1
        return not self.done

    def run(self, reader: ByteReader, writer: ByteWriter) -> Completion:
        logger.debug("run: %d byte program, %d loop(s), tape length %d, eof=%s",
                     len(self.program), len(self.jump_table), self.tape.length,
                     self.settings.eof_policy.value)
        try:
            while self.step(reader, writer):
                pass
        finally:
            if not self.settings.flush_output:
                self._flush(writer, self.ip)

        if self.status is None:
            self.status = RunStatus.FINISHED
        logger.debug("run: %s after %d step(s), ip=%d, pointer=%d",
                     self.status.value, self.steps, self.ip, self.tape.pointer)
        return Completion(status=self.status, steps=self.steps, ip=self.ip, pointer=self.tape.pointer)

    def _write(self, writer: ByteWriter, ip: int) -> None:
        try:
            writer.write(bytes((self.tape.value,)))
            if self.settings.flush_output:
                streams.flush(writer)
        except (OSError, ValueError, TypeError) as exc:
            raise BFOutputError(message=f"OutputError: write failed at offset {ip}: {exc}", ip=ip) from exc

    def _flush(self, writer: ByteWriter, ip: int) -> None:
        try:
            streams.flush(writer)
        except (OSError, ValueError) as exc:
            raise BFOutputError(message=f"OutputError: flush failed at offset {ip}: {exc}", ip=ip) from exc

    def _read(self, reader: ByteReader, writer: ByteWriter, ip: int) -> bool:
        # Buffered output has to reach the user before we block on input.
        if not self.settings.flush_output:
            self._flush(writer, ip)
        try:
            data = reader.read(1)
        except (OSError, ValueError) as exc:
            raise BFInputError(message=f"InputError: read failed at offset {ip}: {exc}", ip=ip) from exc

        if data:
            if not isinstance(data, (bytes, bytearray)):
                raise BFInputError(
                    message=f"InputError: read at offset {ip} returned {type(data).__name__}, expected bytes", ip=ip)
            self.tape.store(data[0])
            return True

        policy = self.settings.eof_policy
        if policy is EofPolicy.HALT:
            logger.debug("end of input at offset %d, halting", ip)
            return False
        if policy is EofPolicy.ZERO:
            self.tape.store(0)
        return True


def run(program: Source, jump_table: JumpTable, tape_length: int, input: ByteReader, output: ByteWriter,
        *, settings: Optional[RuntimeSettings] = None) -> Completion:
    engine = Engine(program, jump_table, tape_length, settings=settings)
    return engine.run(streams.as_reader(input), streams.as_writer(output))
