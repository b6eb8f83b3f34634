"""Quirk flags and emulator configuration."""

import json
from dataclasses import asdict, dataclass, field, fields
from typing import Optional, Tuple


@dataclass
class Quirks:
    """Behaviours that differ between historical CHIP-8 interpreters."""

    # 8XY6/8XYE copy VY into VX before shifting
    shift_uses_vy: bool = True
    # FX1E sets VF when I leaves the 0x000-0xFFF range
    index_overflow_sets_vf: bool = True
    # FX55/FX65 leave I pointing past the last register
    store_increments_i: bool = False
    # 8XY1/8XY2/8XY3 reset VF to 0
    logic_resets_vf: bool = False
    # sprites wrap around the screen edges instead of being clipped
    wrap_sprites: bool = False

    def __post_init__(self):
        for f in fields(self):
            if not isinstance(getattr(self, f.name), bool):
                raise ValueError("quirk {} must be true or false".format(f.name))

    @classmethod
    def cosmac_vip(cls):
        return cls(
            shift_uses_vy=True,
            index_overflow_sets_vf=False,
            store_increments_i=True,
            logic_resets_vf=True,
            wrap_sprites=False,
        )

    @classmethod
    def modern(cls):
        return cls(
            shift_uses_vy=False,
            index_overflow_sets_vf=False,
            store_increments_i=False,
            logic_resets_vf=False,
            wrap_sprites=False,
        )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Quirks":
        _reject_unknown(cls, data)
        return cls(**data)


@dataclass
class EmulatorConfig:
    """Start-up settings for the emulator front end."""

    rom_path: Optional[str] = None
    font_path: Optional[str] = None  # None = built-in font
    scale: int = 12
    instructions_per_frame: int = 11
    fps: int = 60
    foreground: Tuple[int, int, int] = (255, 165, 0)  # orange
    background: Tuple[int, int, int] = (0, 0, 0)
    beep_frequency: int = 440
    quirks: Quirks = field(default_factory=Quirks)

    def __post_init__(self):
        for name in ("rom_path", "font_path"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValueError("{} must be a string".format(name))
        for name in ("scale", "instructions_per_frame", "fps", "beep_frequency"):
            value = getattr(self, name)
            if not _is_int(value) or value < 1:
                raise ValueError("{} must be an integer of at least 1".format(name))
        self.foreground = _colour("foreground", self.foreground)
        self.background = _colour("background", self.background)
        if not isinstance(self.quirks, Quirks):
            raise ValueError("quirks must be a Quirks instance")

    def to_dict(self) -> dict:
        data = asdict(self)
        data["foreground"] = list(self.foreground)
        data["background"] = list(self.background)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "EmulatorConfig":
        _reject_unknown(cls, data)
        data = dict(data)
        if "quirks" in data:
            data["quirks"] = Quirks.from_dict(data["quirks"])
        return cls(**data)

    def save(self, path: str) -> None:
        """Save configuration to JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> "EmulatorConfig":
        """Load configuration from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("{}: expected a JSON object".format(path))
        return cls.from_dict(data)


def _is_int(value):
    # JSON true/false load as bool, which is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def _colour(name, value):
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError("{} must be an RGB triple".format(name))
    if not all(_is_int(c) and 0 <= c <= 255 for c in value):
        raise ValueError("{} components must be integers 0-255".format(name))
    return tuple(value)


def _reject_unknown(cls, data):
    if not isinstance(data, dict):
        raise ValueError("{} must be a JSON object".format(cls.__name__))
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError("unknown {} keys: {}".format(cls.__name__, ", ".join(unknown)))
