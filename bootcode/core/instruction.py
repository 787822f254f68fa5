# core/instruction.py
"""
Instruction and program definitions for the bootcode machine.
"""

import dataclasses
from enum import Enum
from typing import Iterable, Tuple, Union


class Opcode(Enum):
    """Bootcode opcodes"""

    NOP = "nop"
    ACC = "acc"
    JMP = "jmp"


# Opcodes that can be swapped for one another during repair
FLIPS = {
    Opcode.NOP: Opcode.JMP,
    Opcode.JMP: Opcode.NOP,
}


@dataclasses.dataclass(frozen=True)
class Instruction:
    """A single opcode with its signed argument."""

    opcode: Opcode
    argument: int

    def __str__(self) -> str:
        return f"{self.opcode.value} {self.argument:+d}"


Program = Tuple[Instruction, ...]

InstructionRecord = Union[Instruction, Tuple[Union[Opcode, str], int]]


def build_program(records: Iterable[InstructionRecord]) -> Program:
    """
    Build an immutable program from instructions or (opcode, argument) pairs.

    Args:
        records: Instructions, or pairs whose opcode is an Opcode or its
            mnemonic string ("nop", "acc", "jmp").

    Returns:
        The program as a tuple of Instruction objects.
    """
    program = []
    for record in records:
        if isinstance(record, Instruction):
            program.append(record)
        else:
            opcode, argument = record
            program.append(Instruction(Opcode(opcode), int(argument)))
    return tuple(program)


def is_flippable(instruction: Instruction) -> bool:
    return instruction.opcode in FLIPS


def flip(instruction: Instruction) -> Instruction:
    """Swap nop <-> jmp, keeping the argument."""
    if not is_flippable(instruction):
        raise ValueError(f"Cannot flip instruction: {instruction}")
    return dataclasses.replace(instruction, opcode=FLIPS[instruction.opcode])


def flip_first_from(program: Program, start: int) -> Tuple[int, Program]:
    """
    Flip the first nop or jmp at or after `start`.

    Returns (index after the flipped instruction, flipped copy). When no
    flippable instruction remains, returns (len(program), unchanged copy).
    """
    new_program = list(program)
    for index in range(start, len(new_program)):
        instruction = new_program[index]
        if is_flippable(instruction):
            new_program[index] = flip(instruction)
            return index + 1, tuple(new_program)
    return len(new_program), tuple(new_program)
