
from .instructions import InstructionKind, decode, decode_bytes
from .program import Program, build
from .cursor import Cursor
from .tape import TAPE_SIZE, PointerPolicy, Tape
from .engine import Engine, EngineMode, EofPolicy
from .jumptable import JumpTableEngine, build_jump_table
from .errors import BFError, SourceUnavailableError, TapeOverrunError, UnmatchedBracketError
from .api import RunOptions, RunResult, run_bytes, run_file, run_program, run_string

__all__ = [
    'InstructionKind',
    'decode',
    'decode_bytes',
    'Program',
    'build',
    'Cursor',
    'TAPE_SIZE',
    'PointerPolicy',
    'Tape',
    'Engine',
    'EngineMode',
    'EofPolicy',
    'JumpTableEngine',
    'build_jump_table',
    'BFError',
    'SourceUnavailableError',
    'TapeOverrunError',
    'UnmatchedBracketError',
    'RunOptions',
    'RunResult',
    'run_bytes',
    'run_file',
    'run_program',
    'run_string',
]
