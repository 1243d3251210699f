from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping

from .errors import make_bracket_error
from .instructions import Instruction


@dataclass(frozen=True)
class Token:
    offset: int  # position in the source text
    instruction: Instruction


def tokenize(source: str, symbols: Mapping[str, Instruction]) -> List[Token]:
    # Characters without a symbol are comments.
    return [Token(offset, symbols[ch]) for offset, ch in enumerate(source) if ch in symbols]


def build_bracket_map(tokens: List[Token], source: str) -> Dict[int, int]:
    """
    Pair every loop start with its loop end.

    Positions are indices into ``tokens``, not source offsets. The map holds
    both directions, so ``bracket_map[start] == end`` and
    ``bracket_map[end] == start``.
    """
    bracket_map: Dict[int, int] = {}
    stack: List[int] = []

    for pos, token in enumerate(tokens):
        if token.instruction is Instruction.JUMP_IF_ZERO:
            stack.append(pos)
        elif token.instruction is Instruction.JUMP_BACK_IF_NONZERO:
            if not stack:
                raise make_bracket_error(source=source, position=pos, offset=token.offset, kind='close')
            start = stack.pop()
            bracket_map[start] = pos
            bracket_map[pos] = start

    if stack:
        pos = stack[-1]
        raise make_bracket_error(source=source, position=pos, offset=tokens[pos].offset, kind='open')

    return bracket_map
