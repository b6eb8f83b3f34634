import logging

from .errors import OutOfBounds
from .memory import MEMORY_SIZE, PROGRAM_START_ADDRESS

logger = logging.getLogger(__name__)

MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START_ADDRESS
FONT_SIZE = 80

# 16 glyphs, 5 rows each
FONTSET = bytes(
    (
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    )
)


def read_rom(rom_file):
    with open(rom_file, "rb") as f:
        rom = f.read()

    if len(rom) > MAX_ROM_SIZE:
        # the ROM would run past 0xFFF once placed at 0x200
        raise OutOfBounds(PROGRAM_START_ADDRESS, len(rom))

    logger.info("Read ROM %s (%d bytes)", rom_file, len(rom))
    return rom


def read_font(font_file):
    with open(font_file, "rb") as f:
        font = f.read()

    if len(font) != FONT_SIZE:
        raise ValueError(
            "{}: font must be exactly {} bytes, got {}".format(font_file, FONT_SIZE, len(font))
        )

    logger.info("Read font %s", font_file)
    return font
