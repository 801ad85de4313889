"""CHIP-8 error types."""

from typing import Optional


class Chip8Error(Exception):
    """Base class for all errors raised by the virtual machine."""


class RomLoadError(Chip8Error):
    """ROM file could not be opened or read."""


class OversizedRomError(RomLoadError):
    """ROM does not fit in the program area."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"ROM is {size} bytes, maximum is {limit} bytes")
        self.size = size
        self.limit = limit


class ExecutionError(Chip8Error):
    """Fault raised while executing an instruction.

    ``pc`` and ``opcode`` are filled in by ``Chip.tick`` so that a host can
    report exactly which instruction failed.
    """

    def __init__(self, message: str, pc: Optional[int] = None, opcode: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.pc = pc
        self.opcode = opcode

    def __str__(self) -> str:
        location = []
        if self.pc is not None:
            location.append(f"pc=0x{self.pc:03X}")
        if self.opcode is not None:
            location.append(f"opcode=0x{self.opcode:04X}")
        if location:
            return f"{self.message} ({', '.join(location)})"
        return self.message


class StackError(ExecutionError):
    """Call stack misuse."""


class StackOverflowError(StackError):
    """Push onto a full stack."""


class StackUnderflowError(StackError):
    """Pop from an empty stack."""


class InvalidRegisterError(ExecutionError):
    """Register operand outside V0..VF."""

    def __init__(self, index: int, **kwargs):
        super().__init__(f"invalid register index {index}", **kwargs)
        self.index = index


class UnknownOpcodeError(ExecutionError):
    """Encoding with no CHIP-8 instruction."""

    def __init__(self, value: int, **kwargs):
        kwargs.setdefault("opcode", value)
        super().__init__(f"unknown opcode 0x{value:04X}", **kwargs)


class MemoryAccessError(ExecutionError):
    """Read or write outside addressable memory."""

    def __init__(self, address: int, length: int = 1, **kwargs):
        super().__init__(
            f"memory access out of bounds at 0x{address:03X} (length {length})", **kwargs
        )
        self.address = address
        self.length = length
