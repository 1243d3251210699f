from __future__ import annotations

import io
import sys
from typing import BinaryIO, Dict, List, Mapping, Optional, Union

import numpy as np

from .config import InterpreterConfig
from .errors import EngineBusyError, make_tape_error
from .instructions import Instruction, build_symbol_table
from .lexer import Token, build_bracket_map, tokenize
from .state import EngineState

Stream = Union[BinaryIO, io.TextIOBase]


class Interpreter:
    """
    Byte-tape interpreter.

    Memory Layout:
    - A fixed-size tape of unsigned bytes, all zero at construction
    - A data pointer starting at cell 0, never wrapping around the tape ends

    Lifecycle:
    - The symbol table is fixed at construction (default or custom, never merged)
    - Each run() scans the source and matches brackets before executing anything
    - Tape and data pointer persist between run() calls; reset() clears them

    Example:
        interp = Interpreter(InterpreterConfig(tape_size=1024))
        interp.run('++++++++[>++++++++<-]>+.', io.BytesIO(), sys.stdout.buffer)
    """

    def __init__(self, config: Optional[InterpreterConfig] = None):
        config = InterpreterConfig() if config is None else config
        config.validate()
        self.config = config
        self._symbols = build_symbol_table(config.custom_instructions)
        self._tape_size = int(config.tape_size)
        self.state = EngineState.allocate(
            self._tape_size, is_tracing=config.trace, trace_limit=int(config.trace_limit)
        )

    # ===== Inspection =====

    @property
    def symbols(self) -> Mapping[str, Instruction]:
        return self._symbols

    @property
    def tape_size(self) -> int:
        return self._tape_size

    @property
    def data_pointer(self) -> int:
        return self.state.data_pointer

    @property
    def tape(self) -> np.ndarray:
        view = self.state.tape.view()
        view.flags.writeable = False
        return view

    @property
    def current_cell(self) -> int:
        return int(self.state.tape[self.state.data_pointer])

    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def trace(self) -> List[str]:
        return list(self.state.trace)

    def reset(self) -> None:
        if self.state.running:
            raise EngineBusyError(message='EngineBusyError: cannot reset while a run is in progress')
        self.state.reset()

    # ===== Execution =====

    def run(self, source: str, input_stream: Optional[Stream] = None, output_stream: Optional[Stream] = None) -> None:
        """
        Execute ``source`` against the current tape.

        Steps:
        1. Tokenize: keep only characters present in the symbol table
        2. Match brackets over the filtered tokens (UnmatchedBracketError)
        3. Execute until the last token, or until a tape bounds fault

        Args:
            source: program text; unknown characters are comments
            input_stream: read(1) source for the input instruction, stdin by default
            output_stream: write() sink for the output instruction, stdout by default
        """
        if self.state.running:
            raise EngineBusyError(message='EngineBusyError: run() called while this interpreter is already running')

        self.state.trace.clear()
        tokens = tokenize(source, self._symbols)
        bracket_map = build_bracket_map(tokens, source)

        reader = _ByteReader(sys.stdin if input_stream is None else input_stream)
        output_stream = _binary_output(sys.stdout if output_stream is None else output_stream)

        self.state.running = True
        try:
            self._execute(tokens, bracket_map, reader, output_stream)
        finally:
            self.state.running = False

    def _execute(self, tokens: List[Token], bracket_map: Dict[int, int], reader: _ByteReader, output_stream: Stream) -> None:
        state = self.state
        tape = state.tape
        size = self._tape_size
        program = [token.instruction for token in tokens]
        length = len(program)

        text_out = isinstance(output_stream, io.TextIOBase)
        flush = getattr(output_stream, 'flush', None)

        ip = 0
        while ip < length:
            pos = ip
            command = program[ip]

            if command is Instruction.POINTER_INC:
                if state.data_pointer + 1 >= size:
                    raise make_tape_error(index=state.data_pointer + 1, tape_size=size, position=pos)
                state.data_pointer += 1
            elif command is Instruction.POINTER_DEC:
                if state.data_pointer - 1 < 0:
                    raise make_tape_error(index=state.data_pointer - 1, tape_size=size, position=pos)
                state.data_pointer -= 1
            elif command is Instruction.BYTE_INC:
                tape[state.data_pointer] = (int(tape[state.data_pointer]) + 1) & 0xFF
            elif command is Instruction.BYTE_DEC:
                tape[state.data_pointer] = (int(tape[state.data_pointer]) - 1) & 0xFF
            elif command is Instruction.OUTPUT:
                value = int(tape[state.data_pointer])
                # Text streams without a byte buffer get one latin-1 char per byte.
                output_stream.write(chr(value) if text_out else bytes((value,)))
                if flush is not None:
                    flush()
            elif command is Instruction.INPUT:
                tape[state.data_pointer] = reader.read_byte()
            elif command is Instruction.JUMP_IF_ZERO:
                if tape[state.data_pointer] == 0:
                    ip = bracket_map[ip]
            elif command is Instruction.JUMP_BACK_IF_NONZERO:
                if tape[state.data_pointer] != 0:
                    ip = bracket_map[ip]

            if state.is_tracing:
                state.add_trace(
                    f"{pos:5d} {command.name:<22} dp={state.data_pointer} cell={int(tape[state.data_pointer])}"
                )
            ip += 1


def _binary_output(stream: Stream) -> Stream:
    # Text wrappers are written through their byte buffer; pending text goes out first.
    buffer = getattr(stream, 'buffer', None)
    if buffer is None:
        return stream
    flush = getattr(stream, 'flush', None)
    if flush is not None:
        flush()
    return buffer


class _ByteReader:
    """
    One-byte-at-a-time view of an input stream.

    Text wrappers are read through their byte buffer. Text streams without one
    (io.StringIO) are encoded as UTF-8 and every byte is handed out in turn.
    """

    def __init__(self, stream: Stream):
        self.stream = getattr(stream, 'buffer', stream)
        self.pending = b''

    def read_byte(self) -> int:
        if not self.pending:
            chunk = self.stream.read(1) or b''
            self.pending = chunk.encode('utf-8') if isinstance(chunk, str) else bytes(chunk)
            if not self.pending:
                # End of stream stores zero.
                return 0
        value, self.pending = self.pending[0], self.pending[1:]
        return value
