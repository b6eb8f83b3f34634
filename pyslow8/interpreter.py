import logging
import random
from dataclasses import dataclass
from typing import Tuple

from .config import Quirks
from .display import Display
from .instructions import Op, decode
from .keypad import Keypad
from .loader import FONTSET
from .memory import FONT_START_ADDRESS, PROGRAM_START_ADDRESS, Memory
from .registers import FLAG_REGISTER, RegisterFile
from .timers import Timers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MachineSnapshot:
    v: Tuple[int, ...]
    i: int
    pc: int
    sp: int
    stack: Tuple[int, ...]
    delay_timer: int
    sound_timer: int
    awaiting_key: bool
    gfx: Tuple[int, ...]


class Chip8:
    """One CHIP-8 machine: memory, registers, timers, display and keypad.

    The driver loads a program, then calls ``step`` at the CPU rate and
    ``update_timers`` at 60Hz, pushing key state into ``keypad`` in between.
    Errors from a cycle propagate unchanged; the PC of a failing cycle is not
    advanced.
    """

    def __init__(self, quirks=None, rng=None):
        self.quirks = quirks if quirks is not None else Quirks()
        self._rng = rng if rng is not None else random.Random()

        self.memory = Memory()
        self.registers = RegisterFile()
        self.timers = Timers()
        self.display = Display(wrap=self.quirks.wrap_sprites)
        self.keypad = Keypad()

        self._draw_flag = False
        self._awaiting_key = False
        self.cycle_count = 0

        self._handlers = {
            Op.SYS: self._sys,
            Op.CLS: self._cls,
            Op.RET: self._ret,
            Op.JP: self._jp,
            Op.CALL: self._call,
            Op.SE_BYTE: self._se_byte,
            Op.SNE_BYTE: self._sne_byte,
            Op.SE_REG: self._se_reg,
            Op.LD_BYTE: self._ld_byte,
            Op.ADD_BYTE: self._add_byte,
            Op.LD_REG: self._ld_reg,
            Op.OR: self._or,
            Op.AND: self._and,
            Op.XOR: self._xor,
            Op.ADD_REG: self._add_reg,
            Op.SUB: self._sub,
            Op.SHR: self._shr,
            Op.SUBN: self._subn,
            Op.SHL: self._shl,
            Op.SNE_REG: self._sne_reg,
            Op.LD_I: self._ld_i,
            Op.JP_V0: self._jp_v0,
            Op.RND: self._rnd,
            Op.DRW: self._drw,
            Op.SKP: self._skp,
            Op.SKNP: self._sknp,
            Op.LD_VX_DT: self._ld_vx_dt,
            Op.LD_VX_K: self._ld_vx_k,
            Op.LD_DT_VX: self._ld_dt_vx,
            Op.LD_ST_VX: self._ld_st_vx,
            Op.ADD_I: self._add_i,
            Op.LD_F: self._ld_f,
            Op.LD_B: self._ld_b,
            Op.LD_MEM_VX: self._ld_mem_vx,
            Op.LD_VX_MEM: self._ld_vx_mem,
        }

    def load(self, rom, font=FONTSET):
        """Reset the machine, copy ``font`` to 0x050 and ``rom`` to 0x200."""
        font = bytes(font)
        if FONT_START_ADDRESS + len(font) > PROGRAM_START_ADDRESS:
            raise ValueError("font of {} bytes overlaps the program area".format(len(font)))

        self.reset()
        self.memory.load(font, FONT_START_ADDRESS)
        self.memory.load(rom, PROGRAM_START_ADDRESS)
        logger.info("Loaded %d byte program at 0x%03X", len(rom), PROGRAM_START_ADDRESS)

    def reset(self):
        self.memory.reset()
        self.registers.reset()
        self.timers.reset()
        self.display.clear()
        self.keypad.release_all()
        self._draw_flag = False
        self._awaiting_key = False
        self.cycle_count = 0

    @property
    def draw_flag(self):
        return self._draw_flag

    @property
    def beep_flag(self):
        return self.timers.is_sound_active()

    @property
    def awaiting_key(self):
        return self._awaiting_key

    def step(self):
        self._draw_flag = False

        pc = self.registers.pc
        opcode = self.memory.read_word(pc)
        instruction = decode(opcode, pc)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%03X: %04X  %s", pc, opcode, instruction)

        next_pc = self._handlers[instruction.op](instruction)
        self.registers.pc = pc + 2 if next_pc is None else next_pc
        self.cycle_count += 1
        return instruction

    def emulate_cycles(self, how_many):
        drawn = False
        for _ in range(how_many):
            self.step()
            drawn = drawn or self._draw_flag
        return drawn

    def update_timers(self):
        self.timers.tick()

    def run_frame(self, cycles):
        """Run ``cycles`` instructions followed by one 60Hz timer tick.

        Returns True when any of the cycles changed the display.
        """
        drawn = self.emulate_cycles(cycles)
        self.update_timers()
        return drawn

    def snapshot(self):
        regs = self.registers
        return MachineSnapshot(
            v=regs.v,
            i=regs.i,
            pc=regs.pc,
            sp=regs.sp,
            stack=regs.stack,
            delay_timer=self.timers.delay,
            sound_timer=self.timers.sound,
            awaiting_key=self._awaiting_key,
            gfx=self.display.snapshot(),
        )

    # helpers

    def _skip_if(self, condition):
        pc = self.registers.pc
        return pc + 4 if condition else pc + 2

    def _set_flag(self, value):
        self.registers.set_v(FLAG_REGISTER, value)

    # 0x0 family

    def _sys(self, ins):
        # 0NNN machine code routines are not emulated
        logger.debug("ignoring SYS 0x%03X", ins.nnn)

    def _cls(self, ins):
        self.display.clear()
        self._draw_flag = True

    def _ret(self, ins):
        return self.registers.pop()

    # flow control

    def _jp(self, ins):
        return ins.nnn

    def _call(self, ins):
        self.registers.push(self.registers.pc + 2)
        return ins.nnn

    def _jp_v0(self, ins):
        return ins.nnn + self.registers.get_v(0)

    # conditional skips

    def _se_byte(self, ins):
        return self._skip_if(self.registers.get_v(ins.x) == ins.nn)

    def _sne_byte(self, ins):
        return self._skip_if(self.registers.get_v(ins.x) != ins.nn)

    def _se_reg(self, ins):
        regs = self.registers
        return self._skip_if(regs.get_v(ins.x) == regs.get_v(ins.y))

    def _sne_reg(self, ins):
        regs = self.registers
        return self._skip_if(regs.get_v(ins.x) != regs.get_v(ins.y))

    # register arithmetic; VF is always written last so it wins when x == F

    def _ld_byte(self, ins):
        self.registers.set_v(ins.x, ins.nn)

    def _add_byte(self, ins):
        # no carry flag
        self.registers.set_v(ins.x, self.registers.get_v(ins.x) + ins.nn)

    def _ld_reg(self, ins):
        self.registers.set_v(ins.x, self.registers.get_v(ins.y))

    def _logic(self, ins, result):
        self.registers.set_v(ins.x, result)
        if self.quirks.logic_resets_vf:
            self._set_flag(0)

    def _or(self, ins):
        regs = self.registers
        self._logic(ins, regs.get_v(ins.x) | regs.get_v(ins.y))

    def _and(self, ins):
        regs = self.registers
        self._logic(ins, regs.get_v(ins.x) & regs.get_v(ins.y))

    def _xor(self, ins):
        regs = self.registers
        self._logic(ins, regs.get_v(ins.x) ^ regs.get_v(ins.y))

    def _add_reg(self, ins):
        # VF = 1 on carry
        regs = self.registers
        total = regs.get_v(ins.x) + regs.get_v(ins.y)
        regs.set_v(ins.x, total)
        self._set_flag(1 if total > 0xFF else 0)

    def _sub(self, ins):
        # VF = 1 when there is NO borrow
        regs = self.registers
        vx, vy = regs.get_v(ins.x), regs.get_v(ins.y)
        regs.set_v(ins.x, vx - vy)
        self._set_flag(1 if vx >= vy else 0)

    def _subn(self, ins):
        # VX = VY - VX, VF = 1 when there is NO borrow
        regs = self.registers
        vx, vy = regs.get_v(ins.x), regs.get_v(ins.y)
        regs.set_v(ins.x, vy - vx)
        self._set_flag(1 if vy >= vx else 0)

    def _shift_source(self, ins):
        regs = self.registers
        return regs.get_v(ins.y) if self.quirks.shift_uses_vy else regs.get_v(ins.x)

    def _shr(self, ins):
        # VF = bit shifted out (LSB)
        value = self._shift_source(ins)
        self.registers.set_v(ins.x, value >> 1)
        self._set_flag(value & 0x01)

    def _shl(self, ins):
        # VF = bit shifted out (MSB)
        value = self._shift_source(ins)
        self.registers.set_v(ins.x, value << 1)
        self._set_flag((value & 0x80) >> 7)

    def _rnd(self, ins):
        self.registers.set_v(ins.x, self._rng.randint(0, 255) & ins.nn)

    # index register and memory

    def _ld_i(self, ins):
        self.registers.i = ins.nnn

    def _add_i(self, ins):
        regs = self.registers
        index = regs.i + regs.get_v(ins.x)
        regs.i = index
        if self.quirks.index_overflow_sets_vf and index > 0xFFF:
            self._set_flag(1)

    def _ld_f(self, ins):
        # glyphs are 5 bytes each, only the low nibble selects one
        digit = self.registers.get_v(ins.x) & 0xF
        self.registers.i = FONT_START_ADDRESS + digit * 5

    def _ld_b(self, ins):
        vx = self.registers.get_v(ins.x)
        self.memory.write_block(self.registers.i, (vx // 100, (vx // 10) % 10, vx % 10))

    def _ld_mem_vx(self, ins):
        regs = self.registers
        regs_to_store = [regs.get_v(r) for r in range(ins.x + 1)]
        self.memory.write_block(regs.i, regs_to_store)
        if self.quirks.store_increments_i:
            regs.i = regs.i + ins.x + 1

    def _ld_vx_mem(self, ins):
        regs = self.registers
        for r, value in enumerate(self.memory.read_block(regs.i, ins.x + 1)):
            regs.set_v(r, value)
        if self.quirks.store_increments_i:
            regs.i = regs.i + ins.x + 1

    # display

    def _drw(self, ins):
        regs = self.registers
        sprite = self.memory.read_block(regs.i, ins.n)
        collision = self.display.draw_sprite(regs.get_v(ins.x), regs.get_v(ins.y), sprite)
        self._set_flag(1 if collision else 0)
        self._draw_flag = True

    # keypad

    def _skp(self, ins):
        return self._skip_if(self.keypad.is_pressed(self.registers.get_v(ins.x)))

    def _sknp(self, ins):
        return self._skip_if(not self.keypad.is_pressed(self.registers.get_v(ins.x)))

    def _ld_vx_k(self, ins):
        key = self.keypad.any_pressed()
        if key is None:
            # stay on this instruction until a key is down
            self._awaiting_key = True
            return self.registers.pc
        self._awaiting_key = False
        self.registers.set_v(ins.x, key)

    # timers

    def _ld_vx_dt(self, ins):
        self.registers.set_v(ins.x, self.timers.delay)

    def _ld_dt_vx(self, ins):
        self.timers.delay = self.registers.get_v(ins.x)

    def _ld_st_vx(self, ins):
        self.timers.sound = self.registers.get_v(ins.x)
