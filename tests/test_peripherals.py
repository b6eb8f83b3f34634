"""Tests for Timers, Keypad and Display."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from pyslow8.display import HEIGHT, WIDTH, Display
from pyslow8.errors import InvalidKey
from pyslow8.keypad import Keypad
from pyslow8.timers import Timers


class TestTimers:

    def test_start_at_zero(self):
        timers = Timers()
        assert timers.delay == 0
        assert timers.sound == 0
        assert timers.is_sound_active() is False

    def test_delay_counts_down_and_stops_at_zero(self):
        """Five ticks from 5 reach 0; the sixth leaves it at 0."""
        timers = Timers()
        timers.delay = 5
        for _ in range(5):
            timers.tick()
        assert timers.delay == 0
        timers.tick()
        assert timers.delay == 0

    def test_sound_activity(self):
        timers = Timers()
        timers.sound = 2
        assert timers.is_sound_active()
        timers.tick()
        assert timers.is_sound_active()
        timers.tick()
        assert not timers.is_sound_active()

    def test_timers_are_independent(self):
        timers = Timers()
        timers.delay = 3
        timers.sound = 1
        timers.tick()
        assert (timers.delay, timers.sound) == (2, 0)

    @pytest.mark.parametrize("value", [-1, 256])
    def test_rejects_out_of_range(self, value):
        timers = Timers()
        with pytest.raises(ValueError):
            timers.delay = value
        with pytest.raises(ValueError):
            timers.sound = value


class TestKeypad:

    def test_set_and_query(self):
        keypad = Keypad()
        keypad.set_key(0xA, True)
        assert keypad.is_pressed(0xA)
        keypad.set_key(0xA, False)
        assert not keypad.is_pressed(0xA)

    def test_any_pressed_returns_lowest(self):
        keypad = Keypad()
        assert keypad.any_pressed() is None
        keypad.set_key(0xC, True)
        keypad.set_key(0x3, True)
        assert keypad.any_pressed() == 0x3

    @pytest.mark.parametrize("index", [-1, 16])
    def test_invalid_key(self, index):
        keypad = Keypad()
        with pytest.raises(InvalidKey):
            keypad.set_key(index, True)
        with pytest.raises(InvalidKey):
            keypad.is_pressed(index)

    def test_release_all(self):
        keypad = Keypad()
        keypad.set_key(1, True)
        keypad.release_all()
        assert keypad.any_pressed() is None


class TestDisplay:

    def test_double_draw_collides_and_erases(self):
        """Drawing a full 8x1 row twice: no collision, then collision and blank."""
        display = Display()
        assert display.draw_sprite(0, 0, b"\xff") is False
        assert all(display.get_pixel(x, 0) == 1 for x in range(8))
        assert display.draw_sprite(0, 0, b"\xff") is True
        assert display.snapshot() == (0,) * (WIDTH * HEIGHT)

    def test_partial_overlap_collision(self):
        display = Display()
        display.draw_sprite(0, 0, b"\x80")
        assert display.draw_sprite(0, 0, b"\x40") is False
        assert display.draw_sprite(0, 0, b"\x80") is True
        assert display.get_pixel(0, 0) == 0
        assert display.get_pixel(1, 0) == 1

    def test_start_coordinate_wraps(self):
        display = Display()
        display.draw_sprite(WIDTH + 2, HEIGHT + 3, b"\x80")
        assert display.get_pixel(2, 3) == 1

    def test_clips_at_right_edge(self):
        display = Display()
        display.draw_sprite(60, 0, b"\xff")
        assert [display.get_pixel(x, 0) for x in range(60, 64)] == [1, 1, 1, 1]
        assert [display.get_pixel(x, 0) for x in range(0, 4)] == [0, 0, 0, 0]

    def test_clips_at_bottom_edge(self):
        display = Display()
        display.draw_sprite(0, 30, b"\x80\x80\x80\x80")
        assert display.get_pixel(0, 30) == 1
        assert display.get_pixel(0, 31) == 1
        assert display.get_pixel(0, 0) == 0
        assert display.get_pixel(0, 1) == 0

    def test_wrap_mode(self):
        display = Display(wrap=True)
        display.draw_sprite(62, 31, b"\xf0\xf0")
        assert display.get_pixel(62, 31) == 1
        assert display.get_pixel(1, 31) == 1
        assert display.get_pixel(62, 0) == 1
        assert display.get_pixel(1, 0) == 1

    def test_clear(self):
        display = Display()
        display.draw_sprite(5, 5, b"\xff\xff")
        display.clear()
        assert display.snapshot() == (0,) * (WIDTH * HEIGHT)
