from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


def _locate(source: str, offset: int) -> Tuple[int, int]:
    """Return the 1-based (line, column) of a source offset."""
    line = source.count('\n', 0, offset) + 1
    column = offset - (source.rfind('\n', 0, offset) + 1) + 1
    return line, column


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 1) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'close':
        return 'This loop end has no loop start before it. Remove it or add the missing opening symbol.'
    if kind == 'open':
        return 'This loop start is never closed. Add the matching closing symbol after the loop body.'
    if kind == 'overflow':
        return 'The program moved past the last cell. Use a larger tape_size or check the pointer moves.'
    if kind == 'underflow':
        return 'The program moved left of cell 0. The tape does not wrap around.'
    return None


@dataclass
class BFIError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ConfigError(BFIError):
    field: str


@dataclass
class UnmatchedBracketError(BFIError):
    position: int
    offset: int
    kind: str
    line: int
    context: str


@dataclass
class TapeBoundsError(BFIError):
    index: int
    tape_size: int
    position: int


class TapeOverflowError(TapeBoundsError):
    pass


class TapeUnderflowError(TapeBoundsError):
    pass


class EngineBusyError(BFIError):
    pass


def make_config_error(*, field: str, message: str) -> ConfigError:
    return ConfigError(message=f"ConfigError: {field}: {message}", field=field)


def make_bracket_error(*, source: str, position: int, offset: int, kind: str) -> UnmatchedBracketError:
    line, column = _locate(source, offset)
    ctx = _build_context(source.split('\n'), line, column)
    what = 'unopened loop end' if kind == 'close' else 'unclosed loop start'
    hint = _hint_for(kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    return UnmatchedBracketError(
        message=(
            f"UnmatchedBracketError: {what} {source[offset]!r} at instruction {position} "
            f"(line {line}, column {column})\n{ctx}{hint_block}"
        ),
        position=position,
        offset=offset,
        kind=kind,
        line=line,
        context=ctx,
    )


def make_tape_error(*, index: int, tape_size: int, position: int) -> TapeBoundsError:
    if index < 0:
        cls, kind = TapeUnderflowError, 'underflow'
    else:
        cls, kind = TapeOverflowError, 'overflow'
    hint = _hint_for(kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    return cls(
        message=(
            f"{cls.__name__}: data pointer moved to {index}, outside the tape "
            f"[0, {tape_size}) (instruction {position}){hint_block}"
        ),
        index=index,
        tape_size=tape_size,
        position=position,
    )
