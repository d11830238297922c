from __future__ import annotations

import re
from typing import Dict, Optional


C_PREFIX = "111"
WORD_BITS = 16
MAX_WORD = (1 << WORD_BITS) - 1

# 6-bit ALU control codes; the A and M spellings share a code and differ
# only in the leading a-bit.
COMP_CODES: Dict[str, str] = {
    "0": "101010",
    "1": "111111",
    "-1": "111010",
    "D": "001100",
    "A": "110000",
    "M": "110000",
    "!D": "001101",
    "!A": "110001",
    "!M": "110001",
    "-D": "001111",
    "-A": "110011",
    "-M": "110011",
    "D+1": "011111",
    "A+1": "110111",
    "M+1": "110111",
    "D-1": "001110",
    "A-1": "110010",
    "M-1": "110010",
    "D+A": "000010",
    "D+M": "000010",
    "D-A": "010011",
    "D-M": "010011",
    "A-D": "000111",
    "M-D": "000111",
    "D&A": "000000",
    "D&M": "000000",
    "D|A": "010101",
    "D|M": "010101",
}

JUMP_CODES: Dict[str, str] = {
    "": "000",
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
}

DEST_BITS = (("M", 1), ("D", 2), ("A", 4))

UNSIGNED_RE = re.compile(r"[0-9]+")


class EncodingError(Exception):
    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.message = message
        self.text = text


def parse_unsigned(text: str) -> Optional[int]:
    if not UNSIGNED_RE.fullmatch(text):
        return None
    return int(text, 10)


def a_value_to_binary(value: str) -> str:
    """Render a resolved decimal address as a 16-bit word."""
    number = parse_unsigned(value)
    if number is None:
        raise EncodingError(f"Address is not an unsigned integer: {value}", value)
    if number > MAX_WORD:
        raise EncodingError(f"Address does not fit in {WORD_BITS} bits: {value}", value)
    return f"{number:0{WORD_BITS}b}"


def dest_to_binary(dest: str) -> str:
    bits = sum(weight for register, weight in DEST_BITS if register in dest)
    return f"{bits:03b}"


def comp_to_binary(comp: str) -> str:
    code = COMP_CODES.get(comp)
    if code is None:
        raise EncodingError(f"Unknown comp mnemonic: {comp}", comp)
    a_bit = "1" if "M" in comp else "0"
    return a_bit + code


def jump_to_binary(jump: str) -> str:
    code = JUMP_CODES.get(jump)
    if code is None:
        raise EncodingError(f"Unknown jump mnemonic: {jump}", jump)
    return code


def c_instruction_to_binary(dest: str, comp: str, jump: str) -> str:
    return C_PREFIX + comp_to_binary(comp) + dest_to_binary(dest) + jump_to_binary(jump)
