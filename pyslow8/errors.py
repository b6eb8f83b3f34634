class Chip8Error(Exception):
    pass


class OutOfBounds(Chip8Error):
    def __init__(self, address, length=1):
        self.address = address
        self.length = length
        if length > 1:
            msg = "memory access 0x{:04X}..0x{:04X} outside 0x000-0xFFF".format(
                address, address + length - 1
            )
        else:
            msg = "memory access 0x{:04X} outside 0x000-0xFFF".format(address)
        super().__init__(msg)


class InvalidRegister(Chip8Error):
    def __init__(self, index):
        self.index = index
        super().__init__("no such register: V{}".format(index))


class StackOverflow(Chip8Error):
    def __init__(self, depth):
        self.depth = depth
        super().__init__("stack overflow (max depth {})".format(depth))


class StackUnderflow(Chip8Error):
    def __init__(self):
        super().__init__("stack underflow (return without call)")


class InvalidKey(Chip8Error):
    def __init__(self, index):
        self.index = index
        super().__init__("no such key: {}".format(index))


class UnknownInstruction(Chip8Error):
    def __init__(self, opcode, pc):
        self.opcode = opcode
        self.pc = pc
        super().__init__("unknown instruction 0x{:04X} at 0x{:03X}".format(opcode, pc))
