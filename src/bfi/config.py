from __future__ import annotations

import numbers
from collections.abc import Mapping as MappingABC
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import make_config_error
from .instructions import Instruction

DEFAULT_TAPE_SIZE = 30000
DEFAULT_TRACE_LIMIT = 10000


@dataclass(frozen=True)
class InterpreterConfig:
    tape_size: int = DEFAULT_TAPE_SIZE
    custom_instructions: Optional[Mapping[str, Instruction]] = None
    trace: bool = False
    trace_limit: int = DEFAULT_TRACE_LIMIT  # newest steps kept when tracing

    def validate(self) -> None:
        for name in ('tape_size', 'trace_limit'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise make_config_error(field=name, message=f'expected an int, got {type(value).__name__}')
            if value <= 0:
                raise make_config_error(field=name, message=f'must be positive, got {value}')

        if self.custom_instructions is None:
            return
        if not isinstance(self.custom_instructions, MappingABC):
            raise make_config_error(
                field='custom_instructions',
                message=f'expected a mapping of symbol to Instruction, got {type(self.custom_instructions).__name__}',
            )
        for key, value in self.custom_instructions.items():
            if not isinstance(key, str) or len(key) != 1:
                raise make_config_error(
                    field='custom_instructions',
                    message=f'symbols must be single characters, got {key!r}',
                )
            if not isinstance(value, Instruction):
                raise make_config_error(
                    field='custom_instructions',
                    message=f'symbol {key!r} maps to {value!r}, which is not an Instruction',
                )
