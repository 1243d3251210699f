
from .instructions import DEFAULT_SYMBOLS, Instruction, build_symbol_table, symbols_for, symbols_from_string
from .config import DEFAULT_TAPE_SIZE, InterpreterConfig
from .errors import (
    BFIError,
    ConfigError,
    EngineBusyError,
    TapeBoundsError,
    TapeOverflowError,
    TapeUnderflowError,
    UnmatchedBracketError,
)
from .engine import Interpreter
from .api import RunResult, run_file, run_string

__all__ = [
    'Instruction',
    'DEFAULT_SYMBOLS',
    'build_symbol_table',
    'symbols_for',
    'symbols_from_string',
    'DEFAULT_TAPE_SIZE',
    'InterpreterConfig',
    'BFIError',
    'ConfigError',
    'EngineBusyError',
    'TapeBoundsError',
    'TapeOverflowError',
    'TapeUnderflowError',
    'UnmatchedBracketError',
    'Interpreter',
    'RunResult',
    'run_file',
    'run_string',
]
