"""CHIP-8 timer, keypad and memory-block instructions (Exxx, Fxxx)."""

import jax
import jax.lax
import jax.numpy as jnp

from chip8vm.constants import ADDRESS_MASK, FONT_GLYPH_SIZE, FONT_START
from chip8vm.decode import Instruction
from chip8vm.instructions.common import advance, check_memory_range, set_flag
from chip8vm.state import ChipState


def execute_get_delay_timer(state: ChipState, instruction: Instruction) -> ChipState:
    """FX07 - Set VX to delay timer value."""
    return advance(state.replace(V=state.V.at[instruction.x].set(state.delay_timer)))


def execute_set_delay_timer(state: ChipState, instruction: Instruction) -> ChipState:
    """FX15 - Set delay timer to VX."""
    return advance(state.replace(delay_timer=state.V[instruction.x]))


def execute_set_sound_timer(state: ChipState, instruction: Instruction) -> ChipState:
    """FX18 - Set sound timer to VX."""
    return advance(state.replace(sound_timer=state.V[instruction.x]))


def execute_add_to_index(state: ChipState, instruction: Instruction) -> ChipState:
    """FX1E - Add VX to I register, VF flags 12-bit overflow."""
    new_i = jnp.astype(state.I, jnp.int32) + jnp.astype(state.V[instruction.x], jnp.int32)
    overflow_flag = new_i > ADDRESS_MASK
    return advance(state.replace(
        I=jnp.astype(new_i & ADDRESS_MASK, jnp.uint16),
        V=set_flag(state.V, overflow_flag),
    ))


def execute_wait_for_key(state: ChipState, instruction: Instruction) -> ChipState:
    """FX0A - Wait for key press.

    The program counter only moves once a key is down, so the host keeps
    calling tick() until then.
    """
    def key_pressed_action(state):
        pressed_key = jnp.astype(jnp.argmax(state.keys), jnp.uint8)
        return advance(state.replace(V=state.V.at[instruction.x].set(pressed_key)))

    def wait_action(state):
        return state

    return jax.lax.cond(jnp.any(state.keys), key_pressed_action, wait_action, state)


def execute_font_character(state: ChipState, instruction: Instruction) -> ChipState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = jnp.astype(state.V[instruction.x] & 0xF, jnp.uint16)
    return advance(state.replace(I=jnp.astype(FONT_START + digit * FONT_GLYPH_SIZE, jnp.uint16)))


def execute_bcd_conversion(state: ChipState, instruction: Instruction) -> ChipState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    address = int(state.I)
    check_memory_range(state, address, 3)
    value = state.V[instruction.x]

    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)

    new_memory = state.memory.at[address:address + 3].set(digits)
    return advance(state.replace(memory=new_memory))


def execute_store_registers(state: ChipState, instruction: Instruction) -> ChipState:
    """FX55 - Store V0 through VX in memory starting at I."""
    address = int(state.I)
    count = instruction.x + 1
    check_memory_range(state, address, count)
    new_memory = state.memory.at[address:address + count].set(state.V[:count])
    return advance(state.replace(memory=new_memory))


def execute_load_registers(state: ChipState, instruction: Instruction) -> ChipState:
    """FX65 - Load V0 through VX from memory starting at I."""
    address = int(state.I)
    count = instruction.x + 1
    check_memory_range(state, address, count)
    new_V = state.V.at[:count].set(state.memory[address:address + count])
    return advance(state.replace(V=new_V))
