from __future__ import annotations

import logging
from typing import List, Optional

from hackasm.code import a_value_to_binary, c_instruction_to_binary, parse_unsigned
from hackasm.model import InstructionType
from hackasm.parser import Parser
from hackasm.symbol_table import VARIABLE_BASE_ADDRESS, SymbolTable


logger = logging.getLogger(__name__)


class AssemblyError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnresolvedAssembler:
    """First phase: only the label scan is available.

    ``fill_symbol_table`` hands the parser and table over to a
    ``ResolvedAssembler`` and leaves this instance unusable.
    """

    def __init__(self, parser: Parser, symbol_table: Optional[SymbolTable] = None) -> None:
        self._parser: Optional[Parser] = parser
        self._symbol_table = symbol_table if symbol_table is not None else SymbolTable()

    @classmethod
    def from_text(cls, text: str, variable_base: int = VARIABLE_BASE_ADDRESS) -> UnresolvedAssembler:
        return cls(Parser.from_text(text), SymbolTable(variable_base))

    def fill_symbol_table(self) -> ResolvedAssembler:
        if self._parser is None:
            raise AssemblyError("Symbol table has already been filled")
        parser, self._parser = self._parser, None

        scan = parser.clone()
        labels = 0
        while scan.has_more_lines():
            scan.advance()
            if scan.instruction_type() is InstructionType.L:
                self._symbol_table.add_label(scan.symbol(), scan.instruction_index())
                labels += 1
        logger.debug("label scan done: %d labels, %d words", labels, scan.instruction_index())
        return ResolvedAssembler(parser, self._symbol_table)


class ResolvedAssembler:
    """Second phase: every label is known, addresses can be emitted.

    Obtained from ``UnresolvedAssembler.fill_symbol_table``.
    """

    def __init__(self, parser: Parser, symbol_table: SymbolTable) -> None:
        self._parser: Optional[Parser] = parser
        self.symbol_table = symbol_table

    def resolve_address(self, symbol: str) -> str:
        address = self.symbol_table.address(symbol)
        if address is not None:
            return str(address)
        if parse_unsigned(symbol) is None:
            return str(self.symbol_table.add_variable(symbol))
        return symbol

    def compile(self) -> str:
        if self._parser is None:
            raise AssemblyError("Program has already been compiled")
        parser, self._parser = self._parser, None

        words: List[str] = []
        while parser.has_more_lines():
            parser.advance()
            kind = parser.instruction_type()
            if kind is InstructionType.L:
                continue
            if kind is InstructionType.A:
                words.append(a_value_to_binary(self.resolve_address(parser.symbol())))
            else:
                words.append(c_instruction_to_binary(parser.dest(), parser.comp(), parser.jump()))
        logger.debug("compiled %d words", len(words))
        return "".join(word + "\n" for word in words)


def assemble(text: str, variable_base: int = VARIABLE_BASE_ADDRESS) -> str:
    return UnresolvedAssembler.from_text(text, variable_base).fill_symbol_table().compile()
