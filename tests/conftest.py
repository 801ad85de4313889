"""Test configuration and fixtures for CHIP-8 virtual machine tests."""

import pytest
import jax.numpy as jnp

from chip8vm import Chip, create_state
from chip8vm.logging import ConsoleLogger


@pytest.fixture
def fresh_state():
    """Provide a fresh machine state for each test."""
    return create_state()


@pytest.fixture
def quiet_logger():
    """Logger that only prints critical messages."""
    return ConsoleLogger(log_level="CRITICAL", use_colors=False)


@pytest.fixture
def chip(quiet_logger):
    """Provide a default 64x32 machine."""
    return Chip(logger=quiet_logger)


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. set_registers(state, V1=0x10)."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )

