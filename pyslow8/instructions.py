"""CHIP-8 instruction decoding.

``decode`` turns a 16-bit word into an :class:`Instruction` without touching
any machine state. Execution lives in :mod:`pyslow8.interpreter`.
"""

from dataclasses import dataclass
from enum import Enum

from .errors import UnknownInstruction
from .memory import PROGRAM_START_ADDRESS


class Op(Enum):
    SYS = "SYS"  # 0NNN
    CLS = "CLS"  # 00E0
    RET = "RET"  # 00EE
    JP = "JP"  # 1NNN
    CALL = "CALL"  # 2NNN
    SE_BYTE = "SE_BYTE"  # 3XNN
    SNE_BYTE = "SNE_BYTE"  # 4XNN
    SE_REG = "SE_REG"  # 5XY0
    LD_BYTE = "LD_BYTE"  # 6XNN
    ADD_BYTE = "ADD_BYTE"  # 7XNN
    LD_REG = "LD_REG"  # 8XY0
    OR = "OR"  # 8XY1
    AND = "AND"  # 8XY2
    XOR = "XOR"  # 8XY3
    ADD_REG = "ADD_REG"  # 8XY4
    SUB = "SUB"  # 8XY5
    SHR = "SHR"  # 8XY6
    SUBN = "SUBN"  # 8XY7
    SHL = "SHL"  # 8XYE
    SNE_REG = "SNE_REG"  # 9XY0
    LD_I = "LD_I"  # ANNN
    JP_V0 = "JP_V0"  # BNNN
    RND = "RND"  # CXNN
    DRW = "DRW"  # DXYN
    SKP = "SKP"  # EX9E
    SKNP = "SKNP"  # EXA1
    LD_VX_DT = "LD_VX_DT"  # FX07
    LD_VX_K = "LD_VX_K"  # FX0A
    LD_DT_VX = "LD_DT_VX"  # FX15
    LD_ST_VX = "LD_ST_VX"  # FX18
    ADD_I = "ADD_I"  # FX1E
    LD_F = "LD_F"  # FX29
    LD_B = "LD_B"  # FX33
    LD_MEM_VX = "LD_MEM_VX"  # FX55
    LD_VX_MEM = "LD_VX_MEM"  # FX65


# low nibble of the 0x8XY_ family
_ALU_OPS = {
    0x0: Op.LD_REG,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_REG,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

# trailing byte of the 0xEX__ family
_KEY_OPS = {
    0x9E: Op.SKP,
    0xA1: Op.SKNP,
}

# trailing byte of the 0xFX__ family
_MISC_OPS = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I,
    0x29: Op.LD_F,
    0x33: Op.LD_B,
    0x55: Op.LD_MEM_VX,
    0x65: Op.LD_VX_MEM,
}

# first nibble -> op for the families without a sub-decode
_SIMPLE_OPS = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_BYTE,
    0x4: Op.SNE_BYTE,
    0x6: Op.LD_BYTE,
    0x7: Op.ADD_BYTE,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}

_MNEMONICS = {
    Op.SYS: "SYS 0x{nnn:03X}",
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP 0x{nnn:03X}",
    Op.CALL: "CALL 0x{nnn:03X}",
    Op.SE_BYTE: "SE V{x:X}, 0x{nn:02X}",
    Op.SNE_BYTE: "SNE V{x:X}, 0x{nn:02X}",
    Op.SE_REG: "SE V{x:X}, V{y:X}",
    Op.LD_BYTE: "LD V{x:X}, 0x{nn:02X}",
    Op.ADD_BYTE: "ADD V{x:X}, 0x{nn:02X}",
    Op.LD_REG: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD_REG: "ADD V{x:X}, V{y:X}",
    Op.SUB: "SUB V{x:X}, V{y:X}",
    Op.SHR: "SHR V{x:X}, V{y:X}",
    Op.SUBN: "SUBN V{x:X}, V{y:X}",
    Op.SHL: "SHL V{x:X}, V{y:X}",
    Op.SNE_REG: "SNE V{x:X}, V{y:X}",
    Op.LD_I: "LD I, 0x{nnn:03X}",
    Op.JP_V0: "JP V0, 0x{nnn:03X}",
    Op.RND: "RND V{x:X}, 0x{nn:02X}",
    Op.DRW: "DRW V{x:X}, V{y:X}, {n}",
    Op.SKP: "SKP V{x:X}",
    Op.SKNP: "SKNP V{x:X}",
    Op.LD_VX_DT: "LD V{x:X}, DT",
    Op.LD_VX_K: "LD V{x:X}, K",
    Op.LD_DT_VX: "LD DT, V{x:X}",
    Op.LD_ST_VX: "LD ST, V{x:X}",
    Op.ADD_I: "ADD I, V{x:X}",
    Op.LD_F: "LD F, V{x:X}",
    Op.LD_B: "LD B, V{x:X}",
    Op.LD_MEM_VX: "LD [I], V{x:X}",
    Op.LD_VX_MEM: "LD V{x:X}, [I]",
}


@dataclass(frozen=True)
class Instruction:
    op: Op
    raw: int
    x: int  # second nibble (VX register)
    y: int  # third nibble (VY register)
    n: int  # fourth nibble (4-bit immediate)
    nn: int  # last byte (8-bit immediate)
    nnn: int  # last 12 bits (address)

    def mnemonic(self):
        return _MNEMONICS[self.op].format(x=self.x, y=self.y, n=self.n, nn=self.nn, nnn=self.nnn)

    def __str__(self):
        return self.mnemonic()


def _resolve(opcode):
    first_nibble = (opcode & 0xF000) >> 12
    last_nibble = opcode & 0x000F
    last_byte = opcode & 0x00FF

    if first_nibble in _SIMPLE_OPS:
        return _SIMPLE_OPS[first_nibble]

    if first_nibble == 0x0:
        if opcode == 0x00E0:
            return Op.CLS
        if opcode == 0x00EE:
            return Op.RET
        return Op.SYS

    if first_nibble == 0x5:
        return Op.SE_REG if last_nibble == 0x0 else None

    if first_nibble == 0x9:
        return Op.SNE_REG if last_nibble == 0x0 else None

    if first_nibble == 0x8:
        return _ALU_OPS.get(last_nibble)

    if first_nibble == 0xE:
        return _KEY_OPS.get(last_byte)

    # 0xF
    return _MISC_OPS.get(last_byte)


def decode(opcode, pc=0):
    """Decode a 16-bit word.

    Raises UnknownInstruction (carrying ``opcode`` and ``pc``) when the word
    matches no CHIP-8 instruction.
    """
    op = _resolve(opcode)
    if op is None:
        raise UnknownInstruction(opcode, pc)

    return Instruction(
        op=op,
        raw=opcode,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        nn=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
    )


def disassemble(data, start=PROGRAM_START_ADDRESS):
    """Yield ``(address, word, text)`` for every 2-byte word in ``data``.

    Words that do not decode are rendered as ``DW`` data instead of raising;
    a trailing odd byte is rendered as ``DB``.
    """
    data = bytes(data)
    for offset in range(0, len(data) - 1, 2):
        address = start + offset
        word = (data[offset] << 8) | data[offset + 1]
        try:
            text = decode(word, address).mnemonic()
        except UnknownInstruction:
            text = "DW 0x{:04X}".format(word)
        yield address, word, text

    if len(data) % 2:
        yield start + len(data) - 1, data[-1], "DB 0x{:02X}".format(data[-1])
