# core/computer.py
import dataclasses
from enum import Enum
from typing import List, Set, Tuple

import structlog

from ..errors import InstructionPointerError
from .instruction import Opcode, Program

logger = structlog.get_logger()


class ExitStatus(Enum):
    HALTED = "halted"  # pointer moved exactly one past the last instruction
    LOOPED = "looped"  # an instruction was about to run a second time


@dataclasses.dataclass(frozen=True)
class ExecutionResult:
    """
    Outcome of one run of a program.

    `accumulator` is the final value for a halted run and the value at
    loop detection for a looped one. `pointer` is the program length on
    halt and the revisited index on loop.
    """

    status: ExitStatus
    accumulator: int
    pointer: int
    trace: Tuple[int, ...] = ()

    @property
    def halted(self) -> bool:
        return self.status is ExitStatus.HALTED

    @property
    def looped(self) -> bool:
        return self.status is ExitStatus.LOOPED


class Computer:
    """
    Executes bootcode programs.

    A single instance can run any number of programs; the pointer,
    accumulator and visited set are reset at the start of each run.
    """

    def __init__(self):
        self.program_counter = 0
        self.accumulator = 0

    def execute(self, program: Program) -> ExecutionResult:
        self.program_counter = 0
        self.accumulator = 0
        executed: Set[int] = set()
        trace: List[int] = []
        length = len(program)

        while self.program_counter < length:
            if self.program_counter in executed:
                logger.debug(
                    "Loop detected",
                    index=self.program_counter,
                    accumulator=self.accumulator,
                    steps=len(trace),
                )
                return ExecutionResult(
                    ExitStatus.LOOPED,
                    self.accumulator,
                    self.program_counter,
                    tuple(trace),
                )
            executed.add(self.program_counter)
            trace.append(self.program_counter)

            instruction = self._fetch(program)
            if instruction.opcode is Opcode.NOP:
                self.program_counter += 1
            elif instruction.opcode is Opcode.ACC:
                self.accumulator += instruction.argument
                self.program_counter += 1
            elif instruction.opcode is Opcode.JMP:
                self.program_counter += instruction.argument
            else:
                raise ValueError(f"Unknown opcode: {instruction.opcode!r}")

        if self.program_counter != length:
            # A jump carried the pointer past the end instead of onto it.
            raise InstructionPointerError(self.program_counter, length)

        logger.debug(
            "Program halted", accumulator=self.accumulator, steps=len(trace)
        )
        return ExecutionResult(
            ExitStatus.HALTED, self.accumulator, self.program_counter, tuple(trace)
        )

    def _fetch(self, program: Program):
        # Negative pointers must not fall through to Python's negative indexing
        if not 0 <= self.program_counter < len(program):
            raise InstructionPointerError(self.program_counter, len(program))
        return program[self.program_counter]
