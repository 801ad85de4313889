"""CHIP-8 control flow instructions."""

import jax
import jax.lax
import jax.numpy as jnp

from chip8vm.constants import ADDRESS_MASK
from chip8vm.decode import Instruction
from chip8vm.instructions.common import advance
from chip8vm.stack import push_address
from chip8vm.state import ChipState


def execute_jump(state: ChipState, instruction: Instruction) -> ChipState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.asarray(instruction.nnn, dtype=jnp.uint16))


def execute_call(state: ChipState, instruction: Instruction) -> ChipState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push_address(state.stack, state.pc))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: ChipState, instruction: Instruction) -> ChipState:
        condition = condition_fn(state, instruction)
        return jax.lax.cond(
            condition,
            lambda s: advance(s, 4),
            lambda s: advance(s, 2),
            state
        )
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == state.V[inst.y]
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != state.V[inst.y]
)

execute_skip_if_key_pressed = make_skip_instruction(
    lambda state, inst: state.keys[state.V[inst.x] & 0xF]
)

execute_skip_if_key_not_pressed = make_skip_instruction(
    lambda state, inst: ~state.keys[state.V[inst.x] & 0xF]
)


def execute_jump_with_offset(state: ChipState, instruction: Instruction) -> ChipState:
    """BNNN - Jump to address NNN + V0."""
    jump_address = (instruction.nnn + jnp.astype(state.V[0], jnp.uint16)) & ADDRESS_MASK
    return state.replace(pc=jnp.astype(jump_address, jnp.uint16))
