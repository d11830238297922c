from __future__ import annotations

import copy
from pathlib import Path
from typing import Iterable, Optional, Sequence

from hackasm.model import Instruction, InstructionType


COMMENT_PREFIX = "//"


class ParseError(Exception):
    def __init__(self, message: str, text: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.text = text


def clean_line(raw_line: str) -> str:
    """Drop the trailing comment and every whitespace character."""
    line = raw_line.split(COMMENT_PREFIX, 1)[0]
    return "".join(line.split())


def classify(text: str) -> InstructionType:
    if text.startswith("@"):
        return InstructionType.A
    if text.startswith("("):
        return InstructionType.L
    if "=" in text or ";" in text:
        return InstructionType.C
    raise ParseError(f"Invalid instruction: {text}", text)


class Parser:
    """Cursor over the instruction lines of a Hack program.

    Lines are held as an immutable sequence; ``clone`` returns an independent
    cursor at the same position.
    """

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: Sequence[str] = tuple(lines)
        self._position = 0
        self._current: Optional[Instruction] = None
        self._instruction_index = 0

    @classmethod
    def from_text(cls, text: str) -> Parser:
        return cls(text.splitlines())

    @classmethod
    def from_path(cls, path: Path | str) -> Parser:
        return cls.from_text(Path(path).read_text(encoding="utf-8-sig"))

    def clone(self) -> Parser:
        return copy.copy(self)

    def _next_real_line(self) -> int:
        position = self._position
        while position < len(self._lines) and not clean_line(self._lines[position]):
            position += 1
        return position

    def has_more_lines(self) -> bool:
        return self._next_real_line() < len(self._lines)

    def advance(self) -> None:
        position = self._next_real_line()
        if position >= len(self._lines):
            raise ParseError("No more instructions to advance to")
        text = clean_line(self._lines[position])
        self._position = position + 1
        self._current = Instruction(text=text, type=classify(text))
        # Labels occupy no ROM word.
        if self._current.emits_word:
            self._instruction_index += 1

    @property
    def current_instruction(self) -> Instruction:
        if self._current is None:
            raise ParseError("No current instruction")
        return self._current

    def instruction_type(self) -> InstructionType:
        return self.current_instruction.type

    def instruction_index(self) -> int:
        return self._instruction_index

    def _expect(self, *allowed: InstructionType) -> str:
        instruction = self.current_instruction
        if instruction.type not in allowed:
            expected = "/".join(kind.value for kind in allowed)
            raise ParseError(
                f"Expected {expected} instruction, got {instruction.type.value}",
                instruction.text,
            )
        return instruction.text

    def symbol(self) -> str:
        text = self._expect(InstructionType.A, InstructionType.L)
        if text.startswith("@"):
            return text[1:]
        symbol = text[1:]
        if symbol.endswith(")"):
            symbol = symbol[:-1]
        return symbol

    def dest(self) -> str:
        text = self._expect(InstructionType.C)
        if "=" not in text:
            return ""
        return text.split("=", 1)[0]

    def comp(self) -> str:
        text = self._expect(InstructionType.C)
        if "=" in text:
            remainder = text.split("=", 1)[1]
        elif ";" in text:
            remainder = text
        else:
            raise ParseError("Missing comp field", text)
        return remainder.split(";", 1)[0]

    def jump(self) -> str:
        text = self._expect(InstructionType.C)
        if ";" not in text:
            return ""
        return text.split(";", 1)[1]
