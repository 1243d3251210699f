from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .config import InterpreterConfig
from .engine import Interpreter


@dataclass(frozen=True)
class RunResult:
    output: bytes
    data_pointer: int
    tape: bytes


def _as_bytes(data: Union[str, bytes]) -> bytes:
    if isinstance(data, str):
        return data.encode('utf-8')
    return bytes(data)


def run_string(
    source: str,
    input_data: Union[str, bytes] = b"",
    *,
    config: Optional[InterpreterConfig] = None,
    interpreter: Optional[Interpreter] = None,
) -> RunResult:
    """
    Run ``source`` with in-memory I/O. Text input is fed in as UTF-8 bytes.

    Pass ``interpreter`` to keep its tape between calls.
    """
    if interpreter is None:
        interpreter = Interpreter(config)
    elif config is not None:
        raise ValueError('Pass either config or interpreter, not both')

    stdout = io.BytesIO()
    interpreter.run(source, io.BytesIO(_as_bytes(input_data)), stdout)
    return RunResult(
        output=stdout.getvalue(),
        data_pointer=interpreter.data_pointer,
        tape=interpreter.tape.tobytes(),
    )


def run_file(
    path: str | Path,
    input_data: Union[str, bytes] = b"",
    *,
    config: Optional[InterpreterConfig] = None,
    encoding: str = "utf-8",
) -> RunResult:
    p = Path(path)
    return run_string(p.read_text(encoding=encoding), input_data, config=config)
