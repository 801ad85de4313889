"""CHIP-8 instruction decoding."""

import enum

from chex import dataclass

from chip8vm.constants import NUM_REGISTERS
from chip8vm.errors import InvalidRegisterError, MemoryAccessError, UnknownOpcodeError


@dataclass(frozen=True)
class Opcode:
    """Raw 16-bit instruction word with nibble accessors."""
    value: int

    def __post_init__(self):
        if not 0 <= self.value <= 0xFFFF:
            raise ValueError(f"opcode out of 16-bit range: {self.value}")

    @classmethod
    def from_bytes(cls, high: int, low: int) -> "Opcode":
        """Assemble a big-endian opcode from two memory bytes."""
        return cls(value=((int(high) & 0xFF) << 8) | (int(low) & 0xFF))

    @property
    def n1(self) -> int:
        return (self.value & 0xF000) >> 12

    @property
    def n2(self) -> int:
        return (self.value & 0x0F00) >> 8

    @property
    def n3(self) -> int:
        return (self.value & 0x00F0) >> 4

    @property
    def n4(self) -> int:
        return self.value & 0x000F

    @property
    def constant(self) -> int:
        """Low byte (NN)."""
        return self.value & 0x00FF

    @property
    def address(self) -> int:
        """Low 12 bits (NNN)."""
        return self.value & 0x0FFF


class Operation(enum.Enum):
    """Concrete CHIP-8 instructions."""
    CLEAR_SCREEN = enum.auto()          # 00E0
    RETURN = enum.auto()                # 00EE
    JUMP = enum.auto()                  # 1NNN
    CALL = enum.auto()                  # 2NNN
    SKIP_EQ_CONST = enum.auto()         # 3XNN
    SKIP_NE_CONST = enum.auto()         # 4XNN
    SKIP_EQ_REG = enum.auto()           # 5XY0
    LOAD_CONST = enum.auto()            # 6XNN
    ADD_CONST = enum.auto()             # 7XNN
    SET = enum.auto()                   # 8XY0
    OR = enum.auto()                    # 8XY1
    AND = enum.auto()                   # 8XY2
    XOR = enum.auto()                   # 8XY3
    ADD = enum.auto()                   # 8XY4
    SUB = enum.auto()                   # 8XY5
    SHR = enum.auto()                   # 8XY6
    SUBN = enum.auto()                  # 8XY7
    SHL = enum.auto()                   # 8XYE
    SKIP_NE_REG = enum.auto()           # 9XY0
    SET_INDEX = enum.auto()             # ANNN
    JUMP_OFFSET = enum.auto()           # BNNN
    RANDOM = enum.auto()                # CXNN
    DRAW = enum.auto()                  # DXYN
    SKIP_KEY_PRESSED = enum.auto()      # EX9E
    SKIP_KEY_NOT_PRESSED = enum.auto()  # EXA1
    GET_DELAY = enum.auto()             # FX07
    WAIT_KEY = enum.auto()              # FX0A
    SET_DELAY = enum.auto()             # FX15
    SET_SOUND = enum.auto()             # FX18
    ADD_INDEX = enum.auto()             # FX1E
    FONT = enum.auto()                  # FX29
    BCD = enum.auto()                   # FX33
    STORE = enum.auto()                 # FX55
    LOAD = enum.auto()                  # FX65


_MNEMONICS = {
    Operation.CLEAR_SCREEN: "CLS",
    Operation.RETURN: "RET",
    Operation.JUMP: "JP 0x{nnn:03X}",
    Operation.CALL: "CALL 0x{nnn:03X}",
    Operation.SKIP_EQ_CONST: "SE V{x:X}, 0x{nn:02X}",
    Operation.SKIP_NE_CONST: "SNE V{x:X}, 0x{nn:02X}",
    Operation.SKIP_EQ_REG: "SE V{x:X}, V{y:X}",
    Operation.LOAD_CONST: "LD V{x:X}, 0x{nn:02X}",
    Operation.ADD_CONST: "ADD V{x:X}, 0x{nn:02X}",
    Operation.SET: "LD V{x:X}, V{y:X}",
    Operation.OR: "OR V{x:X}, V{y:X}",
    Operation.AND: "AND V{x:X}, V{y:X}",
    Operation.XOR: "XOR V{x:X}, V{y:X}",
    Operation.ADD: "ADD V{x:X}, V{y:X}",
    Operation.SUB: "SUB V{x:X}, V{y:X}",
    Operation.SHR: "SHR V{x:X}",
    Operation.SUBN: "SUBN V{x:X}, V{y:X}",
    Operation.SHL: "SHL V{x:X}",
    Operation.SKIP_NE_REG: "SNE V{x:X}, V{y:X}",
    Operation.SET_INDEX: "LD I, 0x{nnn:03X}",
    Operation.JUMP_OFFSET: "JP V0, 0x{nnn:03X}",
    Operation.RANDOM: "RND V{x:X}, 0x{nn:02X}",
    Operation.DRAW: "DRW V{x:X}, V{y:X}, {n}",
    Operation.SKIP_KEY_PRESSED: "SKP V{x:X}",
    Operation.SKIP_KEY_NOT_PRESSED: "SKNP V{x:X}",
    Operation.GET_DELAY: "LD V{x:X}, DT",
    Operation.WAIT_KEY: "LD V{x:X}, K",
    Operation.SET_DELAY: "LD DT, V{x:X}",
    Operation.SET_SOUND: "LD ST, V{x:X}",
    Operation.ADD_INDEX: "ADD I, V{x:X}",
    Operation.FONT: "LD F, V{x:X}",
    Operation.BCD: "LD B, V{x:X}",
    Operation.STORE: "LD [I], V{x:X}",
    Operation.LOAD: "LD V{x:X}, [I]",
}


@dataclass(frozen=True)
class Instruction:
    """Decoded CHIP-8 instruction with typed operands."""
    operation: Operation
    raw: int = 0
    x: int = 0    # VX register
    y: int = 0    # VY register
    n: int = 0    # 4-bit immediate
    nn: int = 0   # 8-bit immediate
    nnn: int = 0  # 12-bit address

    def __post_init__(self):
        for index in (self.x, self.y):
            if not 0 <= index < NUM_REGISTERS:
                raise InvalidRegisterError(index, opcode=self.raw)

    def __str__(self) -> str:
        return _MNEMONICS[self.operation].format(
            x=self.x, y=self.y, n=self.n, nn=self.nn, nnn=self.nnn
        )


# Families selected by the first nibble alone.
_SIMPLE_FAMILIES = {
    0x1: Operation.JUMP,
    0x2: Operation.CALL,
    0x3: Operation.SKIP_EQ_CONST,
    0x4: Operation.SKIP_NE_CONST,
    0x6: Operation.LOAD_CONST,
    0x7: Operation.ADD_CONST,
    0xA: Operation.SET_INDEX,
    0xB: Operation.JUMP_OFFSET,
    0xC: Operation.RANDOM,
    0xD: Operation.DRAW,
}

_SYSTEM_OPERATIONS = {
    0x00E0: Operation.CLEAR_SCREEN,
    0x00EE: Operation.RETURN,
}

_ALU_OPERATIONS = {
    0x0: Operation.SET,
    0x1: Operation.OR,
    0x2: Operation.AND,
    0x3: Operation.XOR,
    0x4: Operation.ADD,
    0x5: Operation.SUB,
    0x6: Operation.SHR,
    0x7: Operation.SUBN,
    0xE: Operation.SHL,
}

_KEY_OPERATIONS = {
    0x9E: Operation.SKIP_KEY_PRESSED,
    0xA1: Operation.SKIP_KEY_NOT_PRESSED,
}

_MISC_OPERATIONS = {
    0x07: Operation.GET_DELAY,
    0x0A: Operation.WAIT_KEY,
    0x15: Operation.SET_DELAY,
    0x18: Operation.SET_SOUND,
    0x1E: Operation.ADD_INDEX,
    0x29: Operation.FONT,
    0x33: Operation.BCD,
    0x55: Operation.STORE,
    0x65: Operation.LOAD,
}


def _select_operation(opcode: Opcode):
    family = opcode.n1
    if family in _SIMPLE_FAMILIES:
        return _SIMPLE_FAMILIES[family]
    if family == 0x0:
        return _SYSTEM_OPERATIONS.get(opcode.value)
    if family in (0x5, 0x9):
        if opcode.n4 != 0:
            return None
        return Operation.SKIP_EQ_REG if family == 0x5 else Operation.SKIP_NE_REG
    if family == 0x8:
        return _ALU_OPERATIONS.get(opcode.n4)
    if family == 0xE:
        return _KEY_OPERATIONS.get(opcode.constant)
    return _MISC_OPERATIONS.get(opcode.constant)


def decode(opcode) -> Instruction:
    """Decode a 16-bit opcode into an instruction.

    Args:
        opcode: ``Opcode`` or raw integer instruction word

    Returns:
        Instruction carrying the operation and its operands

    Raises:
        UnknownOpcodeError: if the word encodes no CHIP-8 instruction
    """
    if not isinstance(opcode, Opcode):
        opcode = Opcode(value=int(opcode))

    operation = _select_operation(opcode)
    if operation is None:
        raise UnknownOpcodeError(opcode.value)

    return Instruction(
        operation=operation,
        raw=opcode.value,
        x=opcode.n2,
        y=opcode.n3,
        n=opcode.n4,
        nn=opcode.constant,
        nnn=opcode.address,
    )


def disassemble(memory, start: int, count: int) -> list[tuple[int, int, str]]:
    """List ``count`` instructions from memory beginning at ``start``.

    Words that do not decode are shown as data (``DW``).
    """
    memory_size = len(memory)
    listing = []
    for address in range(start, start + 2 * count, 2):
        if address + 1 >= memory_size:
            raise MemoryAccessError(address, 2)
        opcode = Opcode.from_bytes(memory[address], memory[address + 1])
        try:
            text = str(decode(opcode))
        except UnknownOpcodeError:
            text = f"DW 0x{opcode.value:04X}"
        listing.append((address, opcode.value, text))
    return listing
