"""CHIP-8 ALU operations (8xxx)."""

from typing import Optional

import jax.numpy as jnp

from chip8vm.decode import Instruction, Operation
from chip8vm.instructions.common import advance, set_flag
from chip8vm.state import ChipState


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = jnp.astype(vx, jnp.int32) + jnp.astype(vy, jnp.int32)
    carry = result > 0xFF
    return result & 0xFF, carry


def alu_sub_xy(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY5 - Subtract: VX -= VY, VF = NOT borrow."""
    no_borrow = vx >= vy
    result = (jnp.astype(vx, jnp.int32) - jnp.astype(vy, jnp.int32)) & 0xFF
    return result, no_borrow


def alu_shift_right(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY6 - Shift right: VX >>= 1, VF = shifted out bit."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY7 - Subtract: VX = VY - VX, VF = NOT borrow."""
    no_borrow = vy >= vx
    result = (jnp.astype(vy, jnp.int32) - jnp.astype(vx, jnp.int32)) & 0xFF
    return result, no_borrow


def alu_shift_left(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XYE - Shift left: VX <<= 1, VF = shifted out bit."""
    return (jnp.astype(vx, jnp.int32) << 1) & 0xFF, (vx & 0x80) >> 7


ALU_OPERATIONS = {
    Operation.SET: alu_set,
    Operation.OR: alu_or,
    Operation.AND: alu_and,
    Operation.XOR: alu_xor,
    Operation.ADD: alu_add,
    Operation.SUB: alu_sub_xy,
    Operation.SHR: alu_shift_right,
    Operation.SUBN: alu_sub_yx,
    Operation.SHL: alu_shift_left,
}


def execute_alu_operation(state: ChipState, instruction: Instruction) -> ChipState:
    """8XYN - ALU operations.

    The result is written before VF, so 8FYN leaves the flag in VF.
    Logical operations do not touch VF.
    """
    vx = state.V[instruction.x]
    vy = state.V[instruction.y]

    result, vf = ALU_OPERATIONS[instruction.operation](vx, vy)

    new_V = state.V.at[instruction.x].set(jnp.astype(result, jnp.uint8))
    if vf is not None:
        new_V = set_flag(new_V, vf)
    return advance(state.replace(V=new_V))
