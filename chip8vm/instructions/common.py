"""Helpers shared by the instruction implementations."""

import jax.numpy as jnp

from chip8vm.constants import ADDRESS_MASK
from chip8vm.errors import MemoryAccessError
from chip8vm.state import ChipState


def advance(state: ChipState, amount: int = 2) -> ChipState:
    """Move the program counter forward, wrapping in the 12-bit address space."""
    return state.replace(pc=jnp.astype((state.pc + amount) & ADDRESS_MASK, jnp.uint16))


def check_memory_range(state: ChipState, start: int, length: int) -> None:
    """Raise MemoryAccessError unless memory[start:start + length] exists."""
    if length <= 0:
        return
    if start < 0 or start + length > state.memory.shape[0]:
        raise MemoryAccessError(start, length)


def check_program_counter(state: ChipState) -> ChipState:
    """Raise MemoryAccessError unless a whole instruction word sits at pc."""
    check_memory_range(state, int(state.pc), 2)
    return state


def set_flag(V: jnp.ndarray, value) -> jnp.ndarray:
    """Write VF."""
    return V.at[0xF].set(jnp.astype(value, jnp.uint8))
