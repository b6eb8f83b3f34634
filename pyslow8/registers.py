from .errors import InvalidRegister, StackOverflow, StackUnderflow
from .memory import PROGRAM_START_ADDRESS

NUM_REGISTERS = 16
FLAG_REGISTER = 0xF  # VF doubles as carry/borrow/collision flag
STACK_DEPTH = 16


class RegisterFile:

    def __init__(self, stack_depth=STACK_DEPTH):
        self.stack_depth = stack_depth
        self.reset()

    def reset(self):
        self._v = [0] * NUM_REGISTERS  # registers
        self._i = 0  # index register
        self._pc = PROGRAM_START_ADDRESS
        self._stack = []  # return addresses for subroutine calls

    def _check(self, index):
        if not 0 <= index < NUM_REGISTERS:
            raise InvalidRegister(index)

    def get_v(self, index):
        self._check(index)
        return self._v[index]

    def set_v(self, index, value):
        self._check(index)
        self._v[index] = value & 0xFF

    @property
    def v(self):
        return tuple(self._v)

    @property
    def i(self):
        return self._i

    @i.setter
    def i(self, value):
        self._i = value & 0xFFFF

    @property
    def pc(self):
        return self._pc

    @pc.setter
    def pc(self, value):
        self._pc = value & 0xFFFF

    @property
    def sp(self):
        return len(self._stack)

    @property
    def stack(self):
        return tuple(self._stack)

    def push(self, address):
        if len(self._stack) >= self.stack_depth:
            raise StackOverflow(self.stack_depth)
        self._stack.append(address & 0xFFFF)

    def pop(self):
        if not self._stack:
            raise StackUnderflow()
        return self._stack.pop()
