__version__ = '0.1.0'

from .brackets import JumpTable, resolve_brackets
from .engine import Completion, Engine, EofPolicy, RunStatus, RuntimeSettings, run
from .errors import (
    BFError,
    BFInputError,
    BFOutputError,
    BFRuntimeError,
    BFStructuralError,
    BFTapeBoundsError,
)
from .tape import DEFAULT_TAPE_LENGTH, Tape
from .api import RunOptions, RunResult, run_file, run_string

__all__ = [
    'resolve_brackets',
    'JumpTable',
    'run',
    'Engine',
    'Completion',
    'RunStatus',
    'EofPolicy',
    'RuntimeSettings',
    'Tape',
    'DEFAULT_TAPE_LENGTH',
    'BFError',
    'BFStructuralError',
    'BFRuntimeError',
    'BFTapeBoundsError',
    'BFOutputError',
    'BFInputError',
    'RunOptions',
    'RunResult',
    'run_string',
    'run_file',
]
