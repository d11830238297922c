from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InstructionType(Enum):
    A = "A"  # @value
    C = "C"  # dest=comp;jump
    L = "L"  # (LABEL)


@dataclass(frozen=True)
class Instruction:
    text: str
    type: InstructionType

    @property
    def emits_word(self) -> bool:
        return self.type is not InstructionType.L
