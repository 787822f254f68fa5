# errors.py
"""
Exception hierarchy for conditions that abort a whole run.

Halting and looping are ordinary outcomes and are reported through
ExecutionResult, not through these exceptions.
"""


class BootcodeError(Exception):
    """Base class for every fatal bootcode error."""


class InstructionPointerError(BootcodeError):
    """The instruction pointer left the program other than by halting."""

    def __init__(self, pointer: int, length: int):
        self.pointer = pointer
        self.length = length
        super().__init__(
            f"Instruction pointer {pointer} is outside program of length {length}"
        )


class RepairExhaustedError(BootcodeError):
    """No single nop/jmp flip makes the program halt."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Cannot find a valid program after {attempts} candidate(s)")


class ProgramTerminatesError(BootcodeError):
    """The program was expected to loop but halted cleanly."""

    def __init__(self, accumulator: int):
        self.accumulator = accumulator
        super().__init__(
            f"Program halted with accumulator {accumulator} instead of looping"
        )


class InstructionParseError(BootcodeError, ValueError):
    """A line of program text does not match the instruction grammar."""

    def __init__(self, text: str, line_number=None):
        self.text = text
        self.line_number = line_number
        where = f" on line {line_number}" if line_number is not None else ""
        super().__init__(f"Invalid instruction{where}: {text!r}")
