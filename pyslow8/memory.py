from .errors import OutOfBounds

MEMORY_SIZE = 0x1000  # 4KB memory
FONT_START_ADDRESS = 0x050
PROGRAM_START_ADDRESS = 0x200


class Memory:

    def __init__(self, size=MEMORY_SIZE):
        self.size = size
        self._data = bytearray(size)

    def __len__(self):
        return self.size

    def _check(self, address, length=1):
        if address < 0 or length < 0 or address + length > self.size:
            raise OutOfBounds(address, length)

    def read_byte(self, address):
        self._check(address)
        return self._data[address]

    def write_byte(self, address, value):
        self._check(address)
        if not 0 <= value <= 0xFF:
            raise ValueError("byte value out of range: {}".format(value))
        self._data[address] = value

    def read_word(self, address):
        # opcodes are stored big-endian, high byte first
        self._check(address, 2)
        return (self._data[address] << 8) | self._data[address + 1]

    def read_block(self, address, length):
        self._check(address, length)
        return bytes(self._data[address : address + length])

    def write_block(self, address, data):
        # validate the whole range first so a failing write leaves memory untouched
        data = bytes(data)
        self._check(address, len(data))
        self._data[address : address + len(data)] = data

    def load(self, data, start_address=PROGRAM_START_ADDRESS):
        self.write_block(start_address, data)

    def reset(self):
        self._data = bytearray(self.size)

    def snapshot(self):
        return bytes(self._data)
