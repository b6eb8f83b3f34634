"""Tests for Memory and RegisterFile."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from pyslow8.errors import InvalidRegister, OutOfBounds, StackOverflow, StackUnderflow
from pyslow8.memory import Memory, PROGRAM_START_ADDRESS
from pyslow8.registers import RegisterFile


class TestMemory:
    """Byte access and bounds checks."""

    @pytest.mark.parametrize("address", [0x000, 0x050, 0x200, 0x7FF, 0xFFE, 0xFFF])
    def test_write_then_read(self, address):
        """A written byte reads back unchanged."""
        memory = Memory()
        memory.write_byte(address, 0xA5)
        assert memory.read_byte(address) == 0xA5

    def test_every_address_round_trips(self):
        memory = Memory()
        for address in range(0x1000):
            memory.write_byte(address, address & 0xFF)
        for address in range(0x1000):
            assert memory.read_byte(address) == address & 0xFF

    @pytest.mark.parametrize("address", [0x1000, 0x1FFF, -1])
    def test_out_of_range_access_fails(self, address):
        memory = Memory()
        with pytest.raises(OutOfBounds):
            memory.read_byte(address)
        with pytest.raises(OutOfBounds):
            memory.write_byte(address, 0)

    def test_write_rejects_non_byte(self):
        with pytest.raises(ValueError):
            Memory().write_byte(0x200, 0x100)

    def test_load_that_fits_exactly(self):
        """0x200 + L == 0x1000 is the largest program that loads."""
        memory = Memory()
        memory.load(b"\x11" * (0x1000 - PROGRAM_START_ADDRESS), PROGRAM_START_ADDRESS)
        assert memory.read_byte(0xFFF) == 0x11

    def test_load_one_byte_too_many(self):
        memory = Memory()
        with pytest.raises(OutOfBounds):
            memory.load(b"\x11" * (0x1000 - PROGRAM_START_ADDRESS + 1), PROGRAM_START_ADDRESS)
        # nothing was written
        assert memory.read_byte(PROGRAM_START_ADDRESS) == 0

    def test_read_word_is_big_endian(self):
        memory = Memory()
        memory.load(b"\x12\x34", 0x200)
        assert memory.read_word(0x200) == 0x1234

    def test_read_word_past_end(self):
        with pytest.raises(OutOfBounds):
            Memory().read_word(0xFFF)

    def test_write_block_is_all_or_nothing(self):
        memory = Memory()
        with pytest.raises(OutOfBounds):
            memory.write_block(0xFFE, b"\x01\x02\x03")
        assert memory.read_byte(0xFFE) == 0
        assert memory.read_byte(0xFFF) == 0

    def test_reset_zeroes(self):
        memory = Memory()
        memory.write_byte(0x300, 7)
        memory.reset()
        assert memory.snapshot() == bytes(0x1000)


class TestRegisterFile:
    """General registers, I, PC and the call stack."""

    def test_initial_state(self):
        regs = RegisterFile()
        assert regs.v == (0,) * 16
        assert regs.i == 0
        assert regs.pc == 0x200
        assert regs.sp == 0
        assert regs.stack == ()

    def test_set_masks_to_byte(self):
        regs = RegisterFile()
        regs.set_v(3, 0x1FF)
        assert regs.get_v(3) == 0xFF

    @pytest.mark.parametrize("index", [-1, 16, 99])
    def test_invalid_register(self, index):
        regs = RegisterFile()
        with pytest.raises(InvalidRegister):
            regs.get_v(index)
        with pytest.raises(InvalidRegister):
            regs.set_v(index, 0)

    def test_push_pop_round_trip(self):
        regs = RegisterFile()
        regs.push(0x250)
        assert regs.sp == 1
        assert regs.pop() == 0x250
        assert regs.sp == 0

    def test_sixteen_pushes_then_overflow(self):
        regs = RegisterFile()
        for n in range(16):
            regs.push(0x200 + 2 * n)
        assert regs.sp == 16
        with pytest.raises(StackOverflow):
            regs.push(0x300)
        assert regs.sp == 16

    def test_pop_empty(self):
        with pytest.raises(StackUnderflow):
            RegisterFile().pop()

    def test_stack_is_lifo(self):
        regs = RegisterFile()
        regs.push(0x202)
        regs.push(0x404)
        assert regs.stack == (0x202, 0x404)
        assert regs.pop() == 0x404
        assert regs.pop() == 0x202
