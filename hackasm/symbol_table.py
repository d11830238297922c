from __future__ import annotations

import logging
from typing import Dict, ItemsView, Optional


logger = logging.getLogger(__name__)

VARIABLE_BASE_ADDRESS = 16

PREDEFINED_SYMBOLS: Dict[str, int] = {
    **{f"R{i}": i for i in range(16)},
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    "SCREEN": 16384,
    "KBD": 24576,
}


class SymbolTable:
    def __init__(self, variable_base: int = VARIABLE_BASE_ADDRESS) -> None:
        self._table: Dict[str, int] = dict(PREDEFINED_SYMBOLS)
        self._next_variable = variable_base

    def __contains__(self, name: str) -> bool:
        return name in self._table

    def __len__(self) -> int:
        return len(self._table)

    def items(self) -> ItemsView[str, int]:
        return self._table.items()

    def add_label(self, name: str, address: int) -> None:
        # Redefinitions replace the previous binding, predefined names included.
        self._table[name] = address
        logger.debug("label %s -> %d", name, address)

    def add_variable(self, name: str) -> int:
        """Bind ``name`` to the next free variable address and return it.

        No lookup happens here: callers check ``address`` first, otherwise a
        repeated name is allocated a second slot.
        """
        address = self._next_variable
        self._table[name] = address
        self._next_variable += 1
        logger.debug("variable %s -> %d", name, address)
        return address

    def address(self, name: str) -> Optional[int]:
        return self._table.get(name)
