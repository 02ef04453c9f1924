from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .brackets import resolve_brackets
from .engine import Completion, RuntimeSettings, run
from .lexer import Source, strip_shebang
from .streams import InputLike, as_reader
from .tape import DEFAULT_TAPE_LENGTH


@dataclass(frozen=True)
class RunOptions:
    tape_length: int = DEFAULT_TAPE_LENGTH
    settings: RuntimeSettings = field(default_factory=RuntimeSettings)


@dataclass(frozen=True)
class RunResult:
    output: bytes
    completion: Completion

    @property
    def text(self) -> str:
        return self.output.decode('latin-1')


def run_string(source: Source, input_data: InputLike = b'', *, options: Optional[RunOptions] = None) -> RunResult:
    opts = options or RunOptions()
    program = strip_shebang(source)
    jump_table = resolve_brackets(program)
    out = io.BytesIO()
    completion = run(program, jump_table, opts.tape_length, as_reader(input_data), out, settings=opts.settings)
    return RunResult(output=out.getvalue(), completion=completion)


def run_file(path: str | Path, input_data: InputLike = b'', *, options: Optional[RunOptions] = None) -> RunResult:
    p = Path(path)
    return run_string(p.read_bytes(), input_data, options=options)
