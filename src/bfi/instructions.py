from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional


class Instruction(Enum):
    """The eight tape operations."""

    POINTER_INC = 'pointer_inc'
    POINTER_DEC = 'pointer_dec'
    BYTE_INC = 'byte_inc'
    BYTE_DEC = 'byte_dec'
    OUTPUT = 'output'
    INPUT = 'input'
    JUMP_IF_ZERO = 'jump_if_zero'
    JUMP_BACK_IF_NONZERO = 'jump_back_if_nonzero'


# Order used by symbols_from_string(): '><+-.,[]'
CANONICAL_ORDER = (
    Instruction.POINTER_INC,
    Instruction.POINTER_DEC,
    Instruction.BYTE_INC,
    Instruction.BYTE_DEC,
    Instruction.OUTPUT,
    Instruction.INPUT,
    Instruction.JUMP_IF_ZERO,
    Instruction.JUMP_BACK_IF_NONZERO,
)

DEFAULT_SYMBOLS: Mapping[str, Instruction] = MappingProxyType({
    '>': Instruction.POINTER_INC,
    '<': Instruction.POINTER_DEC,
    '+': Instruction.BYTE_INC,
    '-': Instruction.BYTE_DEC,
    '.': Instruction.OUTPUT,
    ',': Instruction.INPUT,
    '[': Instruction.JUMP_IF_ZERO,
    ']': Instruction.JUMP_BACK_IF_NONZERO,
})


def build_symbol_table(custom: Optional[Mapping[str, Instruction]] = None) -> Mapping[str, Instruction]:
    """
    Finalize the character -> Instruction table for an engine.

    A custom table replaces the default one entirely. Nothing is merged, so an
    instruction missing from ``custom`` has no symbol and cannot be written.
    """
    if custom is None:
        return DEFAULT_SYMBOLS
    return MappingProxyType(dict(custom))


def symbols_for(table: Mapping[str, Instruction], instruction: Instruction) -> List[str]:
    return sorted(ch for ch, ins in table.items() if ins is instruction)


def symbols_from_string(chars: str) -> Dict[str, Instruction]:
    """Build a table from 8 characters given in '><+-.,[]' order."""
    if len(chars) != len(CANONICAL_ORDER):
        raise ValueError(f'Expected {len(CANONICAL_ORDER)} symbols, got {len(chars)}')
    if len(set(chars)) != len(chars):
        raise ValueError(f'Duplicate symbols in {chars!r}')
    return dict(zip(chars, CANONICAL_ORDER))
