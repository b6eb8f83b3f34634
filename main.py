import argparse
import dataclasses
import logging
import sys
import time
from array import array

import pygame
from cpuinfo import get_cpu_info

from pyslow8 import (
    FONTSET,
    HEIGHT,
    WIDTH,
    Chip8,
    Chip8Error,
    EmulatorConfig,
    Quirks,
    UnknownInstruction,
    disassemble,
    read_font,
    read_rom,
)

logger = logging.getLogger("pyslow8.main")

# key mapping for Chip-8 keys
KEY_MAPPING = {
    pygame.K_1: 0x1,
    pygame.K_2: 0x2,
    pygame.K_3: 0x3,
    pygame.K_4: 0xC,
    pygame.K_q: 0x4,
    pygame.K_w: 0x5,
    pygame.K_e: 0x6,
    pygame.K_r: 0xD,
    pygame.K_a: 0x7,
    pygame.K_s: 0x8,
    pygame.K_d: 0x9,
    pygame.K_f: 0xE,
    pygame.K_z: 0xA,
    pygame.K_x: 0x0,
    pygame.K_c: 0xB,
    pygame.K_v: 0xF,
}

SAMPLE_RATE = 44100


class Frontend:
    """pygame window, keyboard and beeper around a Chip8 instance."""

    def __init__(self, config):
        self.running = True
        self.scale = config.scale
        self.foreground = config.foreground
        self.background = config.background

        pygame.init()
        self.screen = pygame.display.set_mode((WIDTH * self.scale, HEIGHT * self.scale))
        self.beep = self._make_beep(config.beep_frequency)
        self.beeping = False

    def close(self):
        pygame.quit()

    def _make_beep(self, frequency):
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
        except pygame.error as e:
            logger.warning("Audio disabled: %s", e)
            return None

        # one period of a square wave, looped while the sound timer runs
        period = max(2, SAMPLE_RATE // frequency)
        half = period // 2
        samples = array("h", [4000] * half + [-4000] * (period - half))
        return pygame.mixer.Sound(buffer=samples.tobytes())

    def handle_input(self, keypad):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False

        pressed = pygame.key.get_pressed()
        for key, chip_key in KEY_MAPPING.items():
            keypad.set_key(chip_key, pressed[key])

    def draw_to_screen(self, gfx):
        scale = self.scale
        screen = self.screen
        square_color = self.foreground

        # clear screen
        screen.fill(self.background)

        for y in range(HEIGHT):
            row_base = y * WIDTH
            py = y * scale
            for x in range(WIDTH):
                if gfx[row_base + x]:
                    screen.fill(square_color, (x * scale, py, scale, scale))

        pygame.display.flip()

    def update_audio(self, active):
        if self.beep is None or active == self.beeping:
            return
        if active:
            self.beep.play(loops=-1)
        else:
            self.beep.stop()
        self.beeping = active


def run(chip8, frontend, config, system_info):
    frame_time_target = 1 / config.fps
    instr_per_frame = config.instructions_per_frame

    system_info = system_info + " | IPF: {}".format(instr_per_frame)
    last_title_update = time.time()

    while frontend.running:
        start_time = time.time()

        frontend.handle_input(chip8.keypad)

        if chip8.run_frame(instr_per_frame):
            frontend.draw_to_screen(chip8.display.snapshot())

        frontend.update_audio(chip8.beep_flag)

        frame_time = time.time() - start_time
        sleep_time = max(0, frame_time_target - frame_time)
        if sleep_time > 0:
            time.sleep(sleep_time)

        current_time = time.time()
        if current_time - last_title_update >= 2.0:
            real_fps = 1 / (frame_time + sleep_time)
            pygame.display.set_caption(
                "{} | FPS: {:.2f} | MIPS: {:.2f}".format(
                    system_info,
                    real_fps,
                    (instr_per_frame * real_fps) / 1000000,
                )
            )
            last_title_update = current_time


def report_failure(chip8, error):
    if isinstance(error, UnknownInstruction):
        pc, opcode = error.pc, error.opcode
    else:
        pc = chip8.registers.pc
        try:
            opcode = chip8.memory.read_word(pc)
        except Chip8Error:
            logger.error("Halted at 0x%03X: %s", pc, error)
            return
    logger.error("Halted at 0x%03X (opcode %04X): %s", pc, opcode, error)


def build_config(args):
    config = EmulatorConfig.load(args.config) if args.config else EmulatorConfig()

    overrides = {}
    if args.rom:
        overrides["rom_path"] = args.rom
    if args.font:
        overrides["font_path"] = args.font
    if args.scale is not None:
        overrides["scale"] = args.scale
    if args.ipf is not None:
        overrides["instructions_per_frame"] = args.ipf
    if args.modern:
        overrides["quirks"] = Quirks.modern()
    # replace() re-runs the EmulatorConfig checks on the overridden values
    config = dataclasses.replace(config, **overrides)

    if not config.rom_path:
        raise ValueError("no ROM given on the command line or in the config file")
    return config


def positive_int(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError("not an integer: {!r}".format(text))
    if value < 1:
        raise argparse.ArgumentTypeError("must be at least 1, got {}".format(value))
    return value


def parse_args(argv):
    parser = argparse.ArgumentParser(description="PySlow8 CHIP-8 interpreter")
    parser.add_argument("rom", nargs="?", help="CHIP-8 program to run")
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("--font", help="80 byte font file (default: built-in)")
    parser.add_argument("--scale", type=positive_int, help="pixel scale factor")
    parser.add_argument("--ipf", type=positive_int, help="instructions per 60Hz frame")
    parser.add_argument(
        "--modern", action="store_true", help="use modern (VX-based) shift and store quirks"
    )
    parser.add_argument(
        "--disassemble", action="store_true", help="print a listing of the ROM and exit"
    )
    parser.add_argument("--debug", action="store_true", help="enable verbose debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = build_config(args)
        rom = read_rom(config.rom_path)
        font = read_font(config.font_path) if config.font_path else FONTSET
    except (OSError, ValueError, Chip8Error) as e:
        logger.error("%s", e)
        return 2

    if args.disassemble:
        for address, word, text in disassemble(rom):
            print("{:03X}: {:04X}  {}".format(address, word, text))
        return 0

    chip8 = Chip8(quirks=config.quirks)
    chip8.load(rom, font)

    system_info = "Python: {} | CPU: {}".format(
        sys.version.split()[0],
        get_cpu_info().get("brand_raw", "Unknown CPU"),
    )

    frontend = Frontend(config)
    try:
        run(chip8, frontend, config, system_info)
    except Chip8Error as e:
        report_failure(chip8, e)
        return 1
    finally:
        frontend.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
