from .errors import InvalidKey

NUM_KEYS = 16


class Keypad:
    # keypad with 16 keys, 0x0-0xF
    #   1 2 3 C
    #   4 5 6 D
    #   7 8 9 E
    #   A 0 B F

    def __init__(self):
        self.keys = [False] * NUM_KEYS

    def _check(self, index):
        if not 0 <= index < NUM_KEYS:
            raise InvalidKey(index)

    def set_key(self, index, pressed):
        self._check(index)
        self.keys[index] = bool(pressed)

    def is_pressed(self, index):
        self._check(index)
        return self.keys[index]

    def any_pressed(self):
        # lowest pressed key wins
        for i, pressed in enumerate(self.keys):
            if pressed:
                return i
        return None

    def release_all(self):
        self.keys = [False] * NUM_KEYS
