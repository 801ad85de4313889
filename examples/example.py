"""Minimal host loop: a hand-assembled ROM drawing a counter on screen."""

import time

from chip8vm import Chip, ExecutionError
from chip8vm.rendering import screen_to_ascii

# V0 counts up; each pass clears the screen and draws the low hex digit of V0.
PROGRAM = [
    0x00E0,  # 0x200: CLS
    0x6100,  # 0x202: LD V1, 0x00
    0x620F,  # 0x204: LD V2, 0x0F
    0x8202,  # 0x206: AND V2, V0
    0xF229,  # 0x208: LD F, V2
    0xD115,  # 0x20A: DRW V1, V1, 5
    0x7001,  # 0x20C: ADD V0, 0x01
    0x6305,  # 0x20E: LD V3, 0x05
    0xF315,  # 0x210: LD DT, V3
    0xF407,  # 0x212: LD V4, DT
    0x3400,  # 0x214: SE V4, 0x00
    0x1212,  # 0x216: JP 0x212
    0x1200,  # 0x218: JP 0x200
]


if __name__ == "__main__":
    chip = Chip()
    chip.load_rom_bytes(b"".join(opcode.to_bytes(2, "big") for opcode in PROGRAM))

    frame_time = 1.0 / 60
    instructions_per_frame = 10

    for frame in range(120):
        start = time.time()
        chip.update_keys([False] * 16)
        try:
            chip.run(instructions_per_frame)
        except ExecutionError as e:
            print(f"Fault: {e}")
            break
        time.sleep(max(0.0, frame_time - (time.time() - start)))

    print(screen_to_ascii(chip.screen_buffer, chip.width, chip.height))
