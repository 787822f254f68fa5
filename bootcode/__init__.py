"""
Bootcode virtual machine and single-flip program repair.
"""

__version__ = "0.1.0"

from .errors import (
    BootcodeError,
    InstructionParseError,
    InstructionPointerError,
    ProgramTerminatesError,
    RepairExhaustedError,
)
from .core.instruction import (
    Instruction,
    Opcode,
    Program,
    build_program,
    flip,
    flip_first_from,
    is_flippable,
)
from .core.computer import Computer, ExecutionResult, ExitStatus
from .repair.search import Diagnosis, RepairResult, diagnose, repair_program
from .parsing.assembler import load_program, parse_instruction, parse_program


__all__ = [
    # Errors
    "BootcodeError",
    "InstructionParseError",
    "InstructionPointerError",
    "ProgramTerminatesError",
    "RepairExhaustedError",
    # Program model
    "Instruction",
    "Opcode",
    "Program",
    "build_program",
    "flip",
    "flip_first_from",
    "is_flippable",
    # Execution
    "Computer",
    "ExecutionResult",
    "ExitStatus",
    # Repair
    "Diagnosis",
    "RepairResult",
    "diagnose",
    "repair_program",
    # Parsing
    "load_program",
    "parse_instruction",
    "parse_program",
]
