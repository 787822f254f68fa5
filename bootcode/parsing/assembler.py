# parsing/assembler.py
"""
Turns bootcode source text into instructions.

Each line holds one instruction: an opcode, whitespace, and a signed
argument, e.g. `acc +1` or `jmp -4`.
"""

import re
from pathlib import Path
from typing import Iterable, Union

import structlog

from ..core.instruction import Instruction, Opcode, Program
from ..errors import InstructionParseError

logger = structlog.get_logger()

INSTRUCTION_RE = re.compile(r"^(?P<opcode>nop|acc|jmp)\s+(?P<argument>[+-]\d+)$")


def parse_instruction(text: str, line_number=None) -> Instruction:
    match = INSTRUCTION_RE.match(text.strip())
    if not match:
        raise InstructionParseError(text, line_number)
    return Instruction(Opcode(match.group("opcode")), int(match.group("argument")))


def parse_program(lines: Iterable[str]) -> Program:
    """
    Parse program text, one instruction per line.

    Blank lines are skipped. Line numbers in errors are 1-based.
    """
    program = []
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        program.append(parse_instruction(line.strip(), line_number))
    logger.debug("Parsed program", instructions=len(program))
    return tuple(program)


def load_program(path: Union[str, Path]) -> Program:
    """Read and parse a program file."""
    path = Path(path)
    logger.info("Loading program", path=str(path))
    with open(path, "rb") as f:
        raw_lines = f.read().splitlines()

    lines = []
    for line_number, raw in enumerate(raw_lines, start=1):
        try:
            lines.append(raw.decode("utf-8"))
        except UnicodeDecodeError:
            raise InstructionParseError(
                raw.decode("utf-8", errors="replace"), line_number
            ) from None
    return parse_program(lines)
