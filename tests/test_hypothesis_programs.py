import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from bootcode.core.computer import Computer
from bootcode.core.instruction import Instruction, Opcode, flip_first_from, is_flippable
from bootcode.errors import RepairExhaustedError
from bootcode.repair.search import repair_program

arguments = st.integers(min_value=-1000, max_value=1000)


@composite
def jump_free_programs(draw):
    opcodes = draw(st.lists(st.sampled_from([Opcode.NOP, Opcode.ACC]), max_size=50))
    return tuple(Instruction(opcode, draw(arguments)) for opcode in opcodes)


@composite
def in_range_programs(draw):
    """Programs whose jumps land inside the program or exactly on its end."""
    length = draw(st.integers(min_value=1, max_value=40))
    program = []
    for index in range(length):
        opcode = draw(st.sampled_from(list(Opcode)))
        if opcode is Opcode.ACC:
            argument = draw(arguments)
        else:
            # nop arguments become jump offsets after a flip, so keep them in range too
            target = draw(st.integers(min_value=0, max_value=length))
            argument = target - index
        program.append(Instruction(opcode, argument))
    return tuple(program)


def accumulated(program, trace):
    return sum(
        program[index].argument
        for index in trace
        if program[index].opcode is Opcode.ACC
    )


@settings(max_examples=200, deadline=None)
@given(program=jump_free_programs())
def test_jump_free_programs_always_halt(program):
    result = Computer().execute(program)
    assert result.halted
    assert result.accumulator == sum(
        i.argument for i in program if i.opcode is Opcode.ACC
    )
    assert result.trace == tuple(range(len(program)))


@settings(max_examples=300, deadline=None)
@given(program=in_range_programs())
def test_accumulator_matches_executed_instructions(program):
    """Halt or loop, the accumulator is the sum over instructions run once each."""
    result = Computer().execute(program)
    assert len(set(result.trace)) == len(result.trace)
    assert result.accumulator == accumulated(program, result.trace)
    if result.looped:
        # Loop detection fires on the first repeated index
        assert result.pointer in result.trace
    else:
        assert result.pointer == len(program)


@settings(max_examples=200, deadline=None)
@given(program=in_range_programs(), data=st.data())
def test_flip_first_from_twice_restores_original(program, data):
    start = data.draw(st.integers(min_value=0, max_value=len(program)))
    next_index, flipped = flip_first_from(program, start)
    if flipped == program:
        assert next_index == len(program)
        assert not any(is_flippable(i) for i in program[start:])
        return
    index = next_index - 1
    assert flipped[index].opcode is not program[index].opcode
    assert flipped[index].argument == program[index].argument
    _, restored = flip_first_from(flipped, index)
    assert restored == program


@settings(max_examples=200, deadline=None)
@given(program=in_range_programs())
def test_repair_never_mutates_and_flips_one_instruction(program):
    snapshot = tuple(program)
    try:
        result = repair_program(program)
    except RepairExhaustedError:
        assert program == snapshot
        return
    assert program == snapshot
    diffs = [i for i, (a, b) in enumerate(zip(program, result.program)) if a != b]
    assert diffs == [result.flipped_index]
    assert Computer().execute(result.program).accumulator == result.accumulator
    # No lower-index flip halts
    for index in range(result.flipped_index):
        if is_flippable(program[index]):
            _, candidate = flip_first_from(program, index)
            assert Computer().execute(candidate).looped
