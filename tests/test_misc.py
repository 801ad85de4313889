"""Tests for miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
import pytest

from chip8vm import execute, FONT_START, MemoryAccessError, UnknownOpcodeError
from conftest import set_registers, setup_sprite_in_memory


class TestTimers:
    """Test timer-related instructions."""

    def test_misc_timer_instructions(self, fresh_state):
        """Test timer set and get operations."""
        state = fresh_state

        # Test FX15: Set delay timer
        state = execute(state, 0x6030)  # V0 = 48
        state = execute(state, 0xF015)  # Set delay timer to V0
        assert state.delay_timer == 48

        # Test FX18: Set sound timer
        state = execute(state, 0x6120)  # V1 = 32
        state = execute(state, 0xF118)  # Set sound timer to V1
        assert state.sound_timer == 32

        # Test FX07: Get delay timer
        state = execute(state, 0xF207)  # V2 = delay timer
        assert state.V[2] == 48
        assert state.pc == 0x20A


class TestWaitForKey:
    """Test FX0A."""

    def test_wait_blocks_without_key(self, fresh_state):
        """FX0A - PC stays put while no key is down."""
        state = execute(fresh_state, 0xF30A)
        assert state.pc == 0x200
        state = execute(state, 0xF30A)
        assert state.pc == 0x200

    def test_wait_stores_pressed_key(self, fresh_state):
        """FX0A - Stores the key index and moves on."""
        state = fresh_state.replace(keys=fresh_state.keys.at[0xC].set(True))
        state = execute(state, 0xF30A)
        assert state.V[3] == 0xC
        assert state.pc == 0x202

    def test_wait_picks_lowest_key(self, fresh_state):
        """FX0A - Several keys down stores the lowest index."""
        state = fresh_state.replace(keys=fresh_state.keys.at[0x9].set(True).at[0x4].set(True))
        state = execute(state, 0xF30A)
        assert state.V[3] == 0x4


class TestIndexArithmetic:
    """Test FX1E."""

    def test_add_to_index(self, fresh_state):
        """FX1E - I += VX."""
        state = set_registers(fresh_state, V4=0x10, VF=1)
        state = execute(state, 0xA100)
        state = execute(state, 0xF41E)
        assert state.I == 0x110
        assert state.V[15] == 0

    def test_add_to_index_overflow(self, fresh_state):
        """FX1E - Past 0xFFF sets VF and wraps."""
        state = set_registers(fresh_state, V4=0x02)
        state = execute(state, 0xAFFF)
        state = execute(state, 0xF41E)
        assert state.I == 0x001
        assert state.V[15] == 1


class TestBCD:
    """Test BCD conversion."""

    def test_misc_bcd_conversion(self, fresh_state):
        """Test BCD conversion with 156."""
        state = execute(fresh_state, 0x609C)  # V0 = 156
        state = execute(state, 0xA300)  # I = 0x300
        state = execute(state, 0xF033)  # BCD conversion

        assert state.memory[0x300] == 1  # Hundreds
        assert state.memory[0x301] == 5  # Tens
        assert state.memory[0x302] == 6  # Ones

    @pytest.mark.parametrize("value", [0, 9, 10, 99, 100, 255])
    def test_bcd_edge_cases(self, fresh_state, value):
        """Test BCD with edge cases."""
        state = execute(fresh_state, 0x6000 | value)
        state = execute(state, 0xA400)
        state = execute(state, 0xF033)

        assert state.memory[0x400] == value // 100
        assert state.memory[0x401] == (value // 10) % 10
        assert state.memory[0x402] == value % 10

    def test_bcd_out_of_memory(self, fresh_state):
        """FX33 - Writing past the end of memory is a fault."""
        state = execute(fresh_state, 0xAFFE)
        with pytest.raises(MemoryAccessError):
            execute(state, 0xF033)


class TestFont:
    """Test font character addressing."""

    def test_misc_font_character(self, fresh_state):
        """Test font character addressing."""
        state = execute(fresh_state, 0x600A)  # V0 = 0xA
        state = execute(state, 0xF029)  # I = font address for A

        expected_address = FONT_START + (0xA * 5)
        assert state.I == expected_address
        assert state.memory[state.I] == 0xF0

    def test_font_uses_low_nibble(self, fresh_state):
        """FX29 - Only the low nibble selects a glyph."""
        state = execute(fresh_state, 0x6013)  # V0 = 0x13
        state = execute(state, 0xF029)
        assert state.I == 3 * 5


class TestRegisterDump:
    """Test FX55 / FX65."""

    def test_store_registers(self, fresh_state):
        """FX55 - V0..VX to memory, I unchanged."""
        state = fresh_state.replace(V=jnp.arange(16, dtype=jnp.uint8) + 1)
        state = execute(state, 0xA500)
        state = execute(state, 0xF355)

        assert [int(b) for b in state.memory[0x500:0x505]] == [1, 2, 3, 4, 0]
        assert state.I == 0x500

    def test_load_registers(self, fresh_state):
        """FX65 - memory to V0..VX, higher registers untouched."""
        state = setup_sprite_in_memory(fresh_state, 0x600, [9, 8, 7, 6])
        state = set_registers(state, V3=0x55)
        state = execute(state, 0xA600)
        state = execute(state, 0xF265)

        assert [int(v) for v in state.V[:4]] == [9, 8, 7, 0x55]
        assert state.I == 0x600

    def test_store_then_load_all(self, fresh_state):
        """FX55 then FX65 with X=F restores every register."""
        values = jnp.array([0x10 * i + i for i in range(16)], dtype=jnp.uint8)
        state = execute(fresh_state.replace(V=values), 0xA700)
        state = execute(state, 0xFF55)
        state = state.replace(V=jnp.zeros(16, dtype=jnp.uint8))
        state = execute(state, 0xFF65)
        assert (state.V == values).all()

    def test_store_out_of_memory(self, fresh_state):
        """FX55 - Block past end of memory is a fault."""
        state = execute(fresh_state, 0xAFF8)
        with pytest.raises(MemoryAccessError):
            execute(state, 0xFF55)


@pytest.mark.parametrize("opcode", [0xF000, 0xF0FF, 0xF019, 0xE09F, 0xE0A2, 0x5121, 0x912F])
def test_unknown_opcodes(fresh_state, opcode):
    """Unassigned E/F/5/9 encodings are rejected."""
    with pytest.raises(UnknownOpcodeError):
        execute(fresh_state, opcode)
