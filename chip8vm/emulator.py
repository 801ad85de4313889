"""Main CHIP-8 execution engine."""

import jax.numpy as jnp

from chip8vm.constants import MAX_ROM_SIZE, PROGRAM_START
from chip8vm.decode import Instruction, Opcode, Operation, decode
from chip8vm.errors import OversizedRomError, RomLoadError
from chip8vm.instructions.alu import execute_alu_operation
from chip8vm.instructions.common import check_program_counter
from chip8vm.instructions.control_flow import (
    execute_call, execute_jump, execute_jump_with_offset, execute_skip_if_equal_immediate,
    execute_skip_if_equal_register, execute_skip_if_key_not_pressed, execute_skip_if_key_pressed,
    execute_skip_if_not_equal_immediate, execute_skip_if_not_equal_register,
)
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.memory import execute_add, execute_random, execute_set, execute_set_index
from chip8vm.instructions.misc import (
    execute_add_to_index, execute_bcd_conversion, execute_font_character,
    execute_get_delay_timer, execute_load_registers, execute_set_delay_timer,
    execute_set_sound_timer, execute_store_registers, execute_wait_for_key,
)
from chip8vm.instructions.system import execute_clear_screen, execute_return
from chip8vm.state import ChipState

EXECUTORS = {
    Operation.CLEAR_SCREEN: execute_clear_screen,
    Operation.RETURN: execute_return,
    Operation.JUMP: execute_jump,
    Operation.CALL: execute_call,
    Operation.SKIP_EQ_CONST: execute_skip_if_equal_immediate,
    Operation.SKIP_NE_CONST: execute_skip_if_not_equal_immediate,
    Operation.SKIP_EQ_REG: execute_skip_if_equal_register,
    Operation.LOAD_CONST: execute_set,
    Operation.ADD_CONST: execute_add,
    Operation.SET: execute_alu_operation,
    Operation.OR: execute_alu_operation,
    Operation.AND: execute_alu_operation,
    Operation.XOR: execute_alu_operation,
    Operation.ADD: execute_alu_operation,
    Operation.SUB: execute_alu_operation,
    Operation.SHR: execute_alu_operation,
    Operation.SUBN: execute_alu_operation,
    Operation.SHL: execute_alu_operation,
    Operation.SKIP_NE_REG: execute_skip_if_not_equal_register,
    Operation.SET_INDEX: execute_set_index,
    Operation.JUMP_OFFSET: execute_jump_with_offset,
    Operation.RANDOM: execute_random,
    Operation.DRAW: execute_display,
    Operation.SKIP_KEY_PRESSED: execute_skip_if_key_pressed,
    Operation.SKIP_KEY_NOT_PRESSED: execute_skip_if_key_not_pressed,
    Operation.GET_DELAY: execute_get_delay_timer,
    Operation.WAIT_KEY: execute_wait_for_key,
    Operation.SET_DELAY: execute_set_delay_timer,
    Operation.SET_SOUND: execute_set_sound_timer,
    Operation.ADD_INDEX: execute_add_to_index,
    Operation.FONT: execute_font_character,
    Operation.BCD: execute_bcd_conversion,
    Operation.STORE: execute_store_registers,
    Operation.LOAD: execute_load_registers,
}


def execute_instruction(state: ChipState, instruction: Instruction) -> ChipState:
    """Apply an already decoded instruction.

    Raises:
        MemoryAccessError: if the instruction leaves pc where no whole
            instruction word fits, e.g. a jump to 0xFFE
    """
    return check_program_counter(EXECUTORS[instruction.operation](state, instruction))


def execute(state: ChipState, opcode) -> ChipState:
    """Execute single CHIP-8 instruction given as ``Opcode`` or raw int."""
    return execute_instruction(state, decode(opcode))


def fetch(state: ChipState) -> Opcode:
    """Fetch the big-endian instruction word at the program counter.

    The program counter is not advanced; instructions move it themselves.
    """
    check_program_counter(state)
    pc = int(state.pc)
    return Opcode.from_bytes(state.memory[pc], state.memory[pc + 1])


def decrement_timers(state: ChipState) -> ChipState:
    """Count both timers down by one, stopping at zero."""
    def _decrement(timer):
        return jnp.astype(jnp.where(timer > 0, jnp.astype(timer, jnp.int32) - 1, 0), jnp.uint8)

    return state.replace(
        delay_timer=_decrement(state.delay_timer),
        sound_timer=_decrement(state.sound_timer),
    )


def step(state: ChipState) -> tuple[ChipState, Instruction]:
    """Run one fetch-decode-execute cycle after updating the timers."""
    state = decrement_timers(state)
    instruction = decode(fetch(state))
    return execute_instruction(state, instruction), instruction


def load_rom_bytes(state: ChipState, rom_data: bytes) -> ChipState:
    """Copy ROM data into memory starting at 0x200.

    The size is checked before anything is written.
    """
    if len(rom_data) > MAX_ROM_SIZE:
        raise OversizedRomError(len(rom_data), MAX_ROM_SIZE)
    if not rom_data:
        return state
    rom_array = jnp.array(list(rom_data), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom_data)].set(rom_array)
    return state.replace(memory=new_memory)


def load_rom(state: ChipState, filename) -> ChipState:
    """Load ROM file into CHIP-8 memory starting at 0x200."""
    try:
        with open(filename, 'rb') as f:
            rom_data = f.read()
    except OSError as exc:
        raise RomLoadError(f"cannot read ROM {filename}: {exc}") from exc
    return load_rom_bytes(state, rom_data)
