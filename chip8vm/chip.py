"""Stateful CHIP-8 machine driven one tick at a time."""

from typing import Optional, Sequence

import jax
import jax.numpy as jnp
import numpy as np

from chip8vm.constants import NUM_KEYS, SCREEN_HEIGHT, SCREEN_WIDTH, STACK_SIZE
from chip8vm.decode import Instruction, Operation, decode
from chip8vm.emulator import (
    decrement_timers, execute_instruction, fetch, load_rom, load_rom_bytes,
)
from chip8vm.errors import ExecutionError
from chip8vm.logging import ConsoleLogger, build_progress_bar, get_logger
from chip8vm.state import ChipState, create_state


class Chip:
    """CHIP-8 machine owning its state.

    Every instruction is a pure function on ``ChipState``; the Chip keeps the
    latest state and swaps it in after each successful tick. An instruction
    that faults leaves the previous state in place.

    Args:
        width: Screen width in pixels, a multiple of 8
        height: Screen height in pixels
        seed: Seed for the ``CXNN`` random source
        stack_size: Maximum call depth
        logger: Console logger, the package logger by default
    """

    def __init__(
        self,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
        seed: int = 0,
        stack_size: int = STACK_SIZE,
        logger: Optional[ConsoleLogger] = None,
    ):
        self.seed = seed
        self.stack_size = stack_size
        self.logger = logger or get_logger()
        self.state = create_state(width, height, jax.random.PRNGKey(seed), stack_size)

    @classmethod
    def default(cls) -> "Chip":
        """64x32 machine with default settings."""
        return cls()

    # State accessors

    @property
    def width(self) -> int:
        return self.state.width

    @property
    def height(self) -> int:
        return self.state.height

    @property
    def memory(self) -> np.ndarray:
        return np.asarray(self.state.memory)

    @property
    def registers(self) -> np.ndarray:
        return np.asarray(self.state.V)

    @property
    def address(self) -> int:
        return int(self.state.I)

    @property
    def program_counter(self) -> int:
        return int(self.state.pc)

    @property
    def stack(self) -> list[int]:
        """Return addresses, oldest first."""
        return self.state.stack.items()

    @property
    def keys(self) -> np.ndarray:
        return np.asarray(self.state.keys)

    @property
    def screen_buffer(self) -> bytes:
        return bytes(np.asarray(self.state.screen))

    @property
    def delay_timer(self) -> int:
        return int(self.state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self.state.sound_timer)

    @property
    def waiting_for_key(self) -> bool:
        """True when the next instruction is FX0A and no key is down."""
        try:
            instruction = decode(fetch(self.state))
        except ExecutionError:
            return False
        return instruction.operation is Operation.WAIT_KEY and not bool(jnp.any(self.state.keys))

    def snapshot(self) -> ChipState:
        """Current immutable machine state."""
        return self.state

    # Lifecycle

    def load_rom(self, path) -> None:
        """Load a ROM file at 0x200.

        Raises:
            RomLoadError: if the file cannot be read
            OversizedRomError: if it exceeds 0x400 bytes; memory is untouched
        """
        self.state = load_rom(self.state, path)
        self.logger.info(f"Loaded ROM {path}")

    def load_rom_bytes(self, data: bytes) -> None:
        """Load ROM contents already held in memory."""
        self.state = load_rom_bytes(self.state, bytes(data))
        self.logger.info(f"Loaded {len(data)} byte ROM")

    def reset(self) -> None:
        """Reinitialise to the freshly constructed state."""
        self.state = create_state(
            self.width, self.height, jax.random.PRNGKey(self.seed), self.stack_size
        )
        self.logger.info("Machine reset")

    def update_keys(self, key_states: Sequence) -> None:
        """Overwrite the 16 key states, index 0x0 to 0xF."""
        if len(key_states) != NUM_KEYS:
            raise ValueError(f"expected {NUM_KEYS} key states, got {len(key_states)}")
        self.state = self.state.replace(keys=jnp.array([bool(k) for k in key_states], dtype=jnp.bool_))

    # Execution

    def tick(self) -> Instruction:
        """Advance the timers and execute one instruction.

        Returns:
            The instruction that was executed

        Raises:
            ExecutionError: annotated with the faulting pc and opcode
        """
        state = decrement_timers(self.state)
        pc = int(state.pc)
        opcode = None
        try:
            opcode = fetch(state)
            instruction = decode(opcode)
            new_state = execute_instruction(state, instruction)
        except ExecutionError as exc:
            if exc.pc is None:
                exc.pc = pc
            if exc.opcode is None and opcode is not None:
                exc.opcode = opcode.value
            # timers still count down on a faulted tick
            self.state = state
            self.logger.error(f"Execution fault: {exc}")
            raise

        if self.logger.is_enabled_for("DEBUG"):
            self.logger.debug(f"0x{pc:03X}  {instruction.raw:04X}  {instruction}")
        self.state = new_state
        return instruction

    def run(self, ticks: int, progress: bool = False) -> int:
        """Call tick() ``ticks`` times.

        Returns:
            Number of ticks executed
        """
        bar = build_progress_bar(ticks) if progress else None
        executed = 0
        try:
            for _ in range(ticks):
                self.tick()
                executed += 1
                if bar is not None:
                    bar.update(1)
        finally:
            if bar is not None:
                bar.close()
        return executed
