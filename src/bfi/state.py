from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque

import numpy as np


@dataclass
class EngineState:
    tape: np.ndarray
    data_pointer: int = 0
    running: bool = False
    trace: Deque[str] = field(default_factory=deque)
    is_tracing: bool = False

    @classmethod
    def allocate(cls, tape_size: int, *, is_tracing: bool = False, trace_limit: int = 10000) -> "EngineState":
        return cls(
            tape=np.zeros(tape_size, dtype=np.uint8),
            trace=deque(maxlen=trace_limit),
            is_tracing=is_tracing,
        )

    def reset(self) -> None:
        self.tape.fill(0)
        self.data_pointer = 0
        self.trace.clear()

    def add_trace(self, message: str) -> None:
        # Oldest lines fall off once trace.maxlen is reached.
        if self.is_tracing:
            self.trace.append(message)
