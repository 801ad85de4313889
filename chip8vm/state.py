"""CHIP-8 machine state structures."""

import jax
import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from chip8vm.constants import (
    FONT_DATA, FONT_START, MEMORY_SIZE, NUM_KEYS, NUM_REGISTERS, PROGRAM_START,
    SCREEN_HEIGHT, SCREEN_WIDTH, STACK_SIZE,
)
from chip8vm.stack import StackState, create_stack


class ChipState(PyTreeNode):
    """Complete CHIP-8 machine state.

    The screen is stored packed: one bit per pixel, eight pixels per byte,
    row-major with the most significant bit leftmost.
    """
    rng: jax.Array
    memory: jnp.ndarray
    V: jnp.ndarray
    I: jnp.ndarray
    pc: jnp.ndarray
    stack: StackState
    keys: jnp.ndarray
    screen: jnp.ndarray
    delay_timer: jnp.ndarray
    sound_timer: jnp.ndarray
    width: int = field(pytree_node=False, default=SCREEN_WIDTH)
    height: int = field(pytree_node=False, default=SCREEN_HEIGHT)

    @property
    def row_bytes(self) -> int:
        """Bytes per screen row."""
        return self.width // 8


def create_state(
    width: int = SCREEN_WIDTH,
    height: int = SCREEN_HEIGHT,
    rng: jax.Array = None,
    stack_size: int = STACK_SIZE,
) -> ChipState:
    """Create initial machine state with font data loaded."""
    if width <= 0 or width % 8:
        raise ValueError(f"screen width must be a positive multiple of 8, got {width}")
    if height <= 0:
        raise ValueError(f"screen height must be positive, got {height}")
    if rng is None:
        rng = jax.random.PRNGKey(0)

    memory = jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8)
    memory = memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA)

    return ChipState(
        rng=rng,
        memory=memory,
        V=jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8),
        I=jnp.zeros((), dtype=jnp.uint16),
        pc=jnp.asarray(PROGRAM_START, dtype=jnp.uint16),
        stack=create_stack(stack_size, jnp.uint16),
        keys=jnp.zeros(NUM_KEYS, dtype=jnp.bool_),
        screen=jnp.zeros(width * height // 8, dtype=jnp.uint8),
        delay_timer=jnp.zeros((), dtype=jnp.uint8),
        sound_timer=jnp.zeros((), dtype=jnp.uint8),
        width=width,
        height=height,
    )
