"""CHIP-8 virtual machine package."""

from chip8vm.state import ChipState, create_state
from chip8vm.stack import StackState, create_stack
from chip8vm.decode import Instruction, Opcode, Operation, decode, disassemble
from chip8vm.emulator import execute, execute_instruction, fetch, load_rom, load_rom_bytes, step
from chip8vm.chip import Chip
from chip8vm.errors import (
    Chip8Error, ExecutionError, InvalidRegisterError, MemoryAccessError, OversizedRomError,
    RomLoadError, StackError, StackOverflowError, StackUnderflowError, UnknownOpcodeError,
)
from chip8vm.constants import *

__all__ = [
    "Chip",
    "ChipState",
    "create_state",
    "StackState",
    "create_stack",
    "Opcode",
    "Operation",
    "Instruction",
    "decode",
    "disassemble",
    "execute",
    "execute_instruction",
    "fetch",
    "step",
    "load_rom",
    "load_rom_bytes",
    "Chip8Error",
    "ExecutionError",
    "InvalidRegisterError",
    "MemoryAccessError",
    "OversizedRomError",
    "RomLoadError",
    "StackError",
    "StackOverflowError",
    "StackUnderflowError",
    "UnknownOpcodeError",
    "PROGRAM_START",
    "FONT_START",
    "MEMORY_SIZE",
    "MAX_ROM_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
