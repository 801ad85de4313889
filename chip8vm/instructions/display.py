"""CHIP-8 display operations."""

import jax.numpy as jnp

from chip8vm.decode import Instruction
from chip8vm.instructions.common import advance, check_memory_range, set_flag
from chip8vm.state import ChipState


def unpack_pixels(state: ChipState) -> jnp.ndarray:
    """Packed screen bytes to a (height, width) boolean grid."""
    bits = jnp.unpackbits(state.screen, bitorder="big")
    return jnp.astype(bits.reshape(state.height, state.width), jnp.bool_)


def pack_pixels(pixels: jnp.ndarray) -> jnp.ndarray:
    """(height, width) boolean grid to packed screen bytes."""
    return jnp.packbits(pixels.reshape(-1), bitorder="big")


def execute_display(state: ChipState, instruction: Instruction) -> ChipState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    The origin wraps around the screen; rows and columns running past the
    right or bottom edge are clipped. VF is set when any lit pixel is erased.
    """
    height = instruction.n
    address = int(state.I)
    check_memory_range(state, address, height)

    sprite_x = jnp.astype(state.V[instruction.x], jnp.int32) % state.width
    sprite_y = jnp.astype(state.V[instruction.y], jnp.int32) % state.height

    yy, xx = jnp.meshgrid(jnp.arange(state.height), jnp.arange(state.width), indexing='ij')
    in_sprite = (xx >= sprite_x) & (xx < sprite_x + 8) & (yy >= sprite_y) & (yy < sprite_y + height)

    row_offset = jnp.clip(yy - sprite_y, 0, max(height - 1, 0))
    col_offset = jnp.clip(xx - sprite_x, 0, 7)
    sprite_bytes = state.memory[address + row_offset]
    sprite = jnp.astype((sprite_bytes >> (7 - col_offset)) & 1, jnp.bool_) & in_sprite

    pixels = unpack_pixels(state)
    collision = jnp.any(pixels & sprite)

    return advance(state.replace(
        screen=pack_pixels(pixels ^ sprite),
        V=set_flag(state.V, collision),
    ))
