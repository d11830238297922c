from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from rich.logging import RichHandler

from hackasm.assembler import AssemblyError, UnresolvedAssembler
from hackasm.code import EncodingError
from hackasm.config import AssemblerConfig
from hackasm.parser import ParseError, Parser
from hackasm.symbol_table import SymbolTable


logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hackasm",
        description="Assemble a Hack .asm program into .hack binary text.",
    )
    parser.add_argument("-i", "--input", required=True, help="Path to the input file.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )
    return parser


def configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


def run(config: AssemblerConfig) -> int:
    parser = Parser.from_path(config.input_path)
    assembler = UnresolvedAssembler(parser, SymbolTable(config.variable_base))
    output = assembler.fill_symbol_table().compile()
    # Written only after the whole program compiled.
    config.output_path.write_text(output, encoding="utf-8")
    return output.count("\n")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    config = AssemblerConfig.from_args(args)
    configure_logging(config.log_level)

    try:
        count = run(config)
    except (ParseError, EncodingError) as exc:
        logger.error("%s: %s", config.input_path, exc.message)
        return 1
    except AssemblyError as exc:
        logger.error(exc.message)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("I/O failure: %s", exc)
        return 1

    logger.info("wrote %s (%d instructions)", config.output_path, count)
    return 0
