"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp

from chip8vm.decode import Instruction
from chip8vm.instructions.common import advance
from chip8vm.state import ChipState


def execute_set(state: ChipState, instruction: Instruction) -> ChipState:
    """6XNN - Set VX = NN."""
    return advance(state.replace(V=state.V.at[instruction.x].set(instruction.nn)))


def execute_add(state: ChipState, instruction: Instruction) -> ChipState:
    """7XNN - Add NN to VX, wrapping, VF unchanged."""
    total = (jnp.astype(state.V[instruction.x], jnp.int32) + instruction.nn) & 0xFF
    return advance(state.replace(V=state.V.at[instruction.x].set(jnp.astype(total, jnp.uint8))))


def execute_set_index(state: ChipState, instruction: Instruction) -> ChipState:
    """ANNN - Set I = NNN."""
    return advance(state.replace(I=jnp.asarray(instruction.nnn, dtype=jnp.uint16)))


def execute_random(state: ChipState, instruction: Instruction) -> ChipState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    value = jnp.astype(random_value & instruction.nn, jnp.uint8)
    return advance(state.replace(V=state.V.at[instruction.x].set(value), rng=key))
