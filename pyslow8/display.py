WIDTH = 64
HEIGHT = 32

# set bit positions of every byte value, MSB is column 0
_SPRITE_BITS = tuple(
    tuple(col for col in range(8) if (byte >> (7 - col)) & 1) for byte in range(256)
)


class Display:
    """Monochrome 64x32 framebuffer with XOR sprite drawing.

    Sprites start at (x mod 64, y mod 32). Pixels running past the right or
    bottom edge are clipped, unless ``wrap`` is set, in which case they wrap
    around to the opposite edge.
    """

    def __init__(self, wrap=False):
        self.wrap = wrap
        self.gfx = [0] * (WIDTH * HEIGHT)

    def clear(self):
        self.gfx = [0] * (WIDTH * HEIGHT)

    def get_pixel(self, x, y):
        return self.gfx[(y % HEIGHT) * WIDTH + (x % WIDTH)]

    def draw_sprite(self, x, y, sprite):
        gfx = self.gfx
        wrap = self.wrap

        collision = 0
        x %= WIDTH
        y %= HEIGHT

        for row, sprite_byte in enumerate(sprite):
            py = y + row
            if py >= HEIGHT:
                if not wrap:
                    break
                py %= HEIGHT
            row_base = py * WIDTH

            for col in _SPRITE_BITS[sprite_byte]:
                px = x + col
                if px >= WIDTH:
                    if not wrap:
                        break
                    px %= WIDTH
                collision |= gfx[row_base + px]
                gfx[row_base + px] ^= 1

        return bool(collision)

    def snapshot(self):
        return tuple(self.gfx)
