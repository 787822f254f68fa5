# repair/search.py
"""
Single-flip program repair.

A corrupted program loops forever because exactly one nop/jmp has the
wrong opcode. The search flips one candidate at a time, always starting
from the untouched original, and stops at the first variant that halts.
"""

import dataclasses
from typing import Optional

import structlog

from ..core.computer import Computer
from ..core.instruction import Instruction, Program, flip_first_from
from ..errors import ProgramTerminatesError, RepairExhaustedError

logger = structlog.get_logger()


@dataclasses.dataclass(frozen=True)
class RepairResult:
    """The first flip that makes the program halt."""

    flipped_index: int
    original: Instruction
    replacement: Instruction
    accumulator: int
    program: Program
    attempts: int


@dataclasses.dataclass(frozen=True)
class Diagnosis:
    """Both answers for a corrupted program plus the flip that fixed it."""

    loop_accumulator: int
    loop_index: int
    repaired_accumulator: int
    flipped_index: int
    original_instruction: str
    repaired_instruction: str
    attempts: int


def repair_program(
    program: Program, computer: Optional[Computer] = None
) -> RepairResult:
    """
    Find the lowest-index nop/jmp flip that makes `program` halt.

    Args:
        program: The original program. It is never modified.
        computer: Computer to reuse across candidates (a new one if None).

    Returns:
        RepairResult for the first candidate that halts.

    Raises:
        RepairExhaustedError: If no candidate halts, or there are none.
    """
    program = tuple(program)
    computer = computer or Computer()
    cursor = 0
    attempts = 0

    while True:
        next_cursor, candidate = flip_first_from(program, cursor)
        if candidate == program:
            logger.error("Repair search exhausted", attempts=attempts)
            raise RepairExhaustedError(attempts)

        flipped_index = next_cursor - 1
        attempts += 1
        result = computer.execute(candidate)
        if result.halted:
            logger.info(
                "Repair found",
                index=flipped_index,
                original=str(program[flipped_index]),
                replacement=str(candidate[flipped_index]),
                accumulator=result.accumulator,
                attempts=attempts,
            )
            return RepairResult(
                flipped_index=flipped_index,
                original=program[flipped_index],
                replacement=candidate[flipped_index],
                accumulator=result.accumulator,
                program=candidate,
                attempts=attempts,
            )

        logger.debug(
            "Candidate still loops",
            index=flipped_index,
            loop_index=result.pointer,
            accumulator=result.accumulator,
        )
        cursor = next_cursor


def diagnose(program: Program, computer: Optional[Computer] = None) -> Diagnosis:
    """
    Run a corrupted program once, then repair it.

    Raises:
        ProgramTerminatesError: If the original program halts instead of looping.
        RepairExhaustedError: If no single flip makes it halt.
    """
    program = tuple(program)
    computer = computer or Computer()
    original_run = computer.execute(program)
    if original_run.halted:
        logger.error(
            "Original program did not loop", accumulator=original_run.accumulator
        )
        raise ProgramTerminatesError(original_run.accumulator)
    logger.info(
        "Original program loops",
        index=original_run.pointer,
        accumulator=original_run.accumulator,
    )

    repair = repair_program(program, computer)
    return Diagnosis(
        loop_accumulator=original_run.accumulator,
        loop_index=original_run.pointer,
        repaired_accumulator=repair.accumulator,
        flipped_index=repair.flipped_index,
        original_instruction=str(repair.original),
        repaired_instruction=str(repair.replacement),
        attempts=repair.attempts,
    )
