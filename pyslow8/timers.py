class Timers:
    """Delay and sound timers, both counting down at 60Hz."""

    def __init__(self):
        self._delay = 0
        self._sound = 0

    @staticmethod
    def _check(value):
        if not 0 <= value <= 0xFF:
            raise ValueError("timer value out of range: {}".format(value))
        return value

    @property
    def delay(self):
        return self._delay

    @delay.setter
    def delay(self, value):
        self._delay = self._check(value)

    @property
    def sound(self):
        return self._sound

    @sound.setter
    def sound(self, value):
        self._sound = self._check(value)

    def tick(self):
        if self._delay > 0:
            self._delay -= 1
        if self._sound > 0:
            self._sound -= 1

    def is_sound_active(self):
        return self._sound > 0

    def reset(self):
        self._delay = 0
        self._sound = 0
