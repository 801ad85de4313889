"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp

from chip8vm.decode import Instruction
from chip8vm.instructions.common import advance
from chip8vm.stack import pop
from chip8vm.state import ChipState


def execute_clear_screen(state: ChipState, instruction: Instruction) -> ChipState:
    """00E0 - Clear display."""
    return advance(state.replace(screen=jnp.zeros_like(state.screen)))


def execute_return(state: ChipState, instruction: Instruction) -> ChipState:
    """00EE - Return from subroutine.

    The popped address is the CALL instruction itself, so execution resumes
    at the instruction after it.
    """
    stack, address = pop(state.stack)
    return advance(state.replace(stack=stack, pc=jnp.astype(address, jnp.uint16)))
