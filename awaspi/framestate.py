"""State of the frame being received and the AWA frame encoder."""

from __future__ import annotations

from enum import Enum, auto
from typing import Iterable, Optional, Sequence

from awaspi.calibration import Color

_CRC_SALT = 0x55
_FLETCHER_MOD = 255
_EXT_SUBSTITUTE_FROM = 0x41
_EXT_SUBSTITUTE_TO = 0xAA
_MAX_LEDS = 0x10000


class AwaProtocol(Enum):
    """Parser states of the AWA frame protocol."""

    HEADER_A = auto()
    HEADER_w = auto()
    HEADER_a = auto()
    HEADER_HI = auto()
    HEADER_LO = auto()
    HEADER_CRC = auto()
    VERSION2_GAIN = auto()
    VERSION2_RED = auto()
    VERSION2_GREEN = auto()
    VERSION2_BLUE = auto()
    RED = auto()
    GREEN = auto()
    BLUE = auto()
    FLETCHER1 = auto()
    FLETCHER2 = auto()
    FLETCHER_EXT = auto()


def _check_byte(value: int) -> int:
    if not isinstance(value, int) or not 0 <= value <= 0xFF:
        raise ValueError(f"expected a byte value, got {value!r}")
    return value


class FrameState:
    """Header checksum, Fletcher sums and LED index of the incoming frame."""

    def __init__(self) -> None:
        self.state = AwaProtocol.HEADER_A
        self.protocol_version2 = False
        self.color = Color(0, 0, 0)
        self.calibration = [0, 0, 0, 0]
        self._crc = 0
        self._count = 0
        self._current_led = 0
        self._fletcher1 = 0
        self._fletcher2 = 0
        self._fletcher_ext = 0
        self._position = 0

    def start(self, count_high: int) -> None:
        """Reset the sums for a new frame whose count starts with ``count_high``."""
        _check_byte(count_high)
        self._current_led = 0
        self._count = count_high * 0x100
        self._crc = count_high
        self._fletcher1 = 0
        self._fletcher2 = 0
        self._fletcher_ext = 0
        self._position = 0

    @property
    def crc(self) -> int:
        return self._crc

    @property
    def count(self) -> int:
        """LED count reported by the header, minus one."""
        return self._count

    @property
    def fletcher1(self) -> int:
        return self._fletcher1

    @property
    def fletcher2(self) -> int:
        return self._fletcher2

    @property
    def fletcher_ext(self) -> int:
        """Extended checksum as it is sent on the wire."""
        if self._fletcher_ext == _EXT_SUBSTITUTE_FROM:
            return _EXT_SUBSTITUTE_TO
        return self._fletcher_ext

    def compute_crc(self, value: int) -> None:
        """Add the low count byte to the count and the header checksum."""
        _check_byte(value)
        self._count = (self._count + value) & 0xFFFF
        self._crc = self._crc ^ value ^ _CRC_SALT

    def add_fletcher(self, value: int) -> None:
        """Update the Fletcher sums with one payload byte."""
        _check_byte(value)
        self._fletcher1 = (self._fletcher1 + value) % _FLETCHER_MOD
        self._fletcher2 = (self._fletcher2 + self._fletcher1) % _FLETCHER_MOD
        self._fletcher_ext = (self._fletcher_ext + (value ^ self._position)) % _FLETCHER_MOD
        self._position = (self._position + 1) & 0xFF

    def next_led_index(self) -> int:
        """Return the current LED index and advance it."""
        index = self._current_led
        self._current_led = (self._current_led + 1) & 0xFFFF
        return index


def encode_frame(colors: Iterable[Color], calibration: Optional[Sequence[int]] = None) -> bytes:
    """Build an AWA frame for ``colors``; ``calibration`` adds (gain, red, green, blue)."""
    colors = list(colors)
    if not 1 <= len(colors) <= _MAX_LEDS:
        raise ValueError(f"a frame holds 1..{_MAX_LEDS} colours, got {len(colors)}")
    payload = bytearray()
    for color in colors:
        payload += bytes((color.r, color.g, color.b))
    if calibration is not None:
        if len(calibration) != 4:
            raise ValueError("calibration must be (gain, red, green, blue)")
        payload += bytes(_check_byte(v) for v in calibration)

    sums = FrameState()
    for value in payload:
        sums.add_fletcher(value)

    count = len(colors) - 1
    high, low = (count >> 8) & 0xFF, count & 0xFF
    header = bytes((ord("A"), ord("w"), ord("A" if calibration is not None else "a"), high, low, high ^ low ^ _CRC_SALT))
    return header + bytes(payload) + bytes((sums.fletcher1, sums.fletcher2, sums.fletcher_ext))