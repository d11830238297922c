from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path

from hackasm.symbol_table import VARIABLE_BASE_ADDRESS


OUTPUT_SUFFIX = ".hack"

VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO}


@dataclass(frozen=True)
class AssemblerConfig:
    input_path: Path
    output_suffix: str = OUTPUT_SUFFIX
    variable_base: int = VARIABLE_BASE_ADDRESS
    log_level: int = logging.WARNING

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> AssemblerConfig:
        return cls(
            input_path=Path(args.input),
            log_level=VERBOSITY_LEVELS.get(args.verbose, logging.DEBUG),
        )

    @property
    def output_path(self) -> Path:
        return self.input_path.with_suffix(self.output_suffix)
