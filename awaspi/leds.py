"""LED strip output split into one or two segments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from awaspi.calibration import Color

_BLACK = Color(0, 0, 0)


class LedDriver:
    """In-memory LED strip: pixels are staged and latched into ``frame`` on show."""

    def __init__(self, count: int, segment: int = 0) -> None:
        if count < 0:
            raise ValueError(f"LED count must not be negative, got {count}")
        self.count = count
        self.segment = segment
        self._pixels: list[Color] = [_BLACK] * count
        self._written = 0
        self.frame: tuple[Color, ...] = ()
        self.last_count = 0
        self.shows = 0

    def can_show(self) -> bool:
        """Return True when the strip is ready to latch a new frame."""
        return True

    def show(self) -> None:
        """Latch the staged pixels as the displayed frame."""
        self.frame = tuple(self._pixels)
        self.last_count = self._written
        self._written = 0
        self.shows += 1

    def set_pixel_color(self, index: int, color: Color) -> None:
        """Stage the colour of one pixel."""
        if not 0 <= index < self.count:
            raise IndexError(f"pixel {index} out of range for a strip of {self.count}")
        self._pixels[index] = color
        self._written += 1

    def __repr__(self) -> str:
        return f"LedDriver(count={self.count}, segment={self.segment})"


@dataclass(frozen=True)
class SegmentLayout:
    """Where the second strip segment starts and whether it runs backwards."""

    second_start: Optional[int] = None
    reversed: bool = False

    def __post_init__(self) -> None:
        if self.second_start is not None and self.second_start <= 0:
            raise ValueError(f"second segment start must be positive, got {self.second_start}")


DriverFactory = Callable[[int, int], LedDriver]


class LedOutput:
    """Maps frame pixel indexes onto one or two strips and renders complete frames."""

    def __init__(self, driver_factory: DriverFactory = LedDriver, layout: SegmentLayout = SegmentLayout()) -> None:
        self._factory = driver_factory
        self.layout = layout
        self.leds_number = 0
        self.strip1: Optional[LedDriver] = None
        self.strip2: Optional[LedDriver] = None
        self._ready_to_render = False

    def init_strips(self, count: int) -> None:
        """Create the strips for ``count`` LEDs, replacing any existing ones."""
        if count < 0:
            raise ValueError(f"LED count must not be negative, got {count}")
        self.strip1 = None
        self.strip2 = None
        self.leds_number = count
        start = self.layout.second_start
        if start is not None and count > start:
            self.strip1 = self._factory(start, 0)
            self.strip2 = self._factory(count - start, 1)
        else:
            self.strip1 = self._factory(count, 0)

    def has_late_frame(self) -> bool:
        """Return True if a complete frame is waiting to be shown."""
        return self._ready_to_render

    def drop_late_frame(self) -> None:
        """Forget the frame waiting to be shown."""
        self._ready_to_render = False

    def render(self, new_frame: bool) -> bool:
        """Show the pending frame if every strip is ready; return True if shown."""
        if new_frame:
            self._ready_to_render = True
        if not self._ready_to_render or self.strip1 is None or not self.strip1.can_show():
            return False
        if self.strip2 is not None and not self.strip2.can_show():
            return False
        self._ready_to_render = False
        self.strip1.show()
        if self.strip2 is not None:
            self.strip2.show()
        return True

    def set_pixel(self, index: int, color: Color) -> bool:
        """Set one pixel of the frame; return True while more pixels are expected."""
        if index < 0:
            raise ValueError(f"pixel index must not be negative, got {index}")
        if index < self.leds_number:
            start = self.layout.second_start
            if self.strip2 is None or start is None or index < start:
                self.strip1.set_pixel_color(index, color)
            elif self.layout.reversed:
                self.strip2.set_pixel_color(self.leds_number - index - 1, color)
            else:
                self.strip2.set_pixel_color(index - start, color)
        return index + 1 < self.leds_number