"""RGB to RGBW colour calibration based on per-channel lookup tables."""

from __future__ import annotations

from dataclasses import dataclass

_CHANNEL_MAX = 0xFF


def _check_byte(name: str, value: int) -> int:
    if not isinstance(value, int) or not 0 <= value <= _CHANNEL_MAX:
        raise ValueError(f"{name} must be an integer in 0..255, got {value!r}")
    return value


def _round_divide(numer: int, denom: int) -> int:
    return (numer + denom // 2) // denom


def _build_lut(factor: int) -> bytes:
    return bytes(min(_round_divide(factor * i, _CHANNEL_MAX), _CHANNEL_MAX) for i in range(256))


@dataclass(frozen=True)
class Color:
    """A pixel colour; ``w`` is the white channel of RGBW strips."""

    r: int
    g: int
    b: int
    w: int = 0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "w"):
            _check_byte(name, getattr(self, name))


class CalibrationConfig:
    """Calibration parameters and the lookup tables derived from them."""

    def __init__(self, gain: int = 0xFF, red: int = 0xA0, green: int = 0xA0, blue: int = 0xA0) -> None:
        self._params = (
            _check_byte("gain", gain),
            _check_byte("red", red),
            _check_byte("green", green),
            _check_byte("blue", blue),
        )
        self._prepare()

    def _prepare(self) -> None:
        gain, red, green, blue = self._params
        self.white_lut = _build_lut(gain)
        self.red_lut = _build_lut(red)
        self.green_lut = _build_lut(green)
        self.blue_lut = _build_lut(blue)

    @property
    def gain(self) -> int:
        return self._params[0]

    @property
    def red(self) -> int:
        return self._params[1]

    @property
    def green(self) -> int:
        return self._params[2]

    @property
    def blue(self) -> int:
        return self._params[3]

    def matches(self, gain: int, red: int, green: int, blue: int) -> bool:
        """Return True if the current parameters equal the given ones."""
        return self._params == (gain, red, green, blue)

    def configure(self, gain: int, red: int, green: int, blue: int) -> bool:
        """Set new parameters; rebuild the tables only if they changed.

        Returns True when the tables were rebuilt.
        """
        params = (
            _check_byte("gain", gain),
            _check_byte("red", red),
            _check_byte("green", green),
            _check_byte("blue", blue),
        )
        if params == self._params:
            return False
        self._params = params
        self._prepare()
        return True

    def rgb_to_rgbw(self, color: Color) -> Color:
        """Extract and correct the white channel of an RGB colour."""
        raw_white = min(self.red_lut[color.r], self.green_lut[color.g], self.blue_lut[color.b])
        return Color(
            r=(color.r - self.red_lut[raw_white]) & 0xFF,
            g=(color.g - self.green_lut[raw_white]) & 0xFF,
            b=(color.b - self.blue_lut[raw_white]) & 0xFF,
            w=self.white_lut[raw_white],
        )

    def describe(self) -> str:
        """Human readable summary of the calibration parameters."""
        gain, red, green, blue = self._params
        return f"RGBW => Gain: {gain}/255, red: {red}, green: {green}, blue: {blue}"

    def __repr__(self) -> str:
        gain, red, green, blue = self._params
        return f"CalibrationConfig(gain={gain}, red={red}, green={green}, blue={blue})"