"""AWA frame parser that turns the incoming byte stream into LED frames."""

from __future__ import annotations

import time
from typing import Callable, Optional

from awaspi.calibration import CalibrationConfig, Color
from awaspi.framestate import AwaProtocol, FrameState
from awaspi.leds import LedOutput
from awaspi.ringbuffer import RingBuffer
from awaspi.statistics import Statistics

MAX_BUFFER = 4096
MAX_LEDS = 4096
HELLO_MESSAGE = "\r\nWelcome!\r\nAwa driver 10."

STATISTICS_PERIOD_MS = 1000
STATISTICS_TOLERANCE_MS = 1025
FRAME_TIMEOUT_MS = 5000
MIN_GOOD_FRAMES_FOR_UPDATE = 3

_COMMAND_COUNT = 0x2AA2
_COMMAND_HELLO = 0x15
_COMMAND_STATISTICS = 0x35

Clock = Callable[[], int]
Console = Callable[[str], None]


def _uptime_clock() -> Clock:
    started = time.monotonic()

    def clock() -> int:
        return int((time.monotonic() - started) * 1000)

    return clock


def _discard(_line: str) -> None:
    return None


class Receiver:
    """Parses queued AWA frames, renders them and keeps the frame statistics.

    ``calibration`` switches the output to RGBW: every colour goes through
    its white channel extraction and version 2 frames update it. Without it
    the colours are passed on unchanged. ``clock`` returns milliseconds and
    ``console`` receives the lines the device would print.
    """

    def __init__(
        self,
        output: Optional[LedOutput] = None,
        calibration: Optional[CalibrationConfig] = None,
        statistics: Optional[Statistics] = None,
        clock: Optional[Clock] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.output = output if output is not None else LedOutput()
        self.calibration = calibration
        self.statistics = statistics if statistics is not None else Statistics()
        self.clock = clock if clock is not None else _uptime_clock()
        self.console = console if console is not None else _discard
        self.frame = FrameState()
        self.queue = RingBuffer(MAX_BUFFER)
        self._rgb = [0, 0, 0]
        self._now = 0

    def feed(self, data: bytes | bytearray | memoryview) -> int:
        """Queue received bytes for the parser; return how many were queued."""
        return self.queue.write(data)

    def update_statistics(self, current_time: int, delta_time: int, has_data: bool) -> None:
        """Close the statistics period when it is due, or restart it when it overran."""
        if (
            has_data
            and STATISTICS_PERIOD_MS <= delta_time <= STATISTICS_TOLERANCE_MS
            and self.statistics.good_frames > MIN_GOOD_FRAMES_FOR_UPDATE
        ):
            self.statistics.update(current_time)
        elif delta_time > STATISTICS_TOLERANCE_MS:
            self.statistics.light_reset(current_time, has_data)

    def _render(self, new_frame: bool) -> None:
        if self.output.render(new_frame):
            self.statistics.increase_show()

    def process(self) -> int:
        """Parse everything queued; return the number of good frames received."""
        self._now = self.clock()
        delta = self._now - self.statistics.start_time
        self.update_statistics(self._now, delta, bool(self.queue))

        if self.statistics.start_time + FRAME_TIMEOUT_MS < self.clock():
            self.frame.state = AwaProtocol.HEADER_A

        if self.output.has_late_frame():
            self._render(False)

        good = 0
        for value in self.queue.drain():
            if self._step(value):
                good += 1
        return good

    def _handle_command(self, value: int) -> None:
        self.console(self.statistics.report(self._now))
        if self.calibration is not None:
            self.console(self.calibration.describe())
        if value == _COMMAND_HELLO:
            self.console(HELLO_MESSAGE)
        self._now = self.clock()
        self.statistics.reset(self._now)

    def _step(self, value: int) -> bool:
        frame = self.frame
        match frame.state:
            case AwaProtocol.HEADER_A:
                frame.protocol_version2 = False
                if value == ord("A"):
                    frame.state = AwaProtocol.HEADER_w

            case AwaProtocol.HEADER_w:
                frame.state = AwaProtocol.HEADER_a if value == ord("w") else AwaProtocol.HEADER_A

            case AwaProtocol.HEADER_a:
                if value == ord("a"):
                    frame.state = AwaProtocol.HEADER_HI
                elif value == ord("A"):
                    frame.state = AwaProtocol.HEADER_HI
                    frame.protocol_version2 = True
                else:
                    frame.state = AwaProtocol.HEADER_A

            case AwaProtocol.HEADER_HI:
                self.statistics.increase_total()
                frame.start(value)
                self.output.drop_late_frame()
                frame.state = AwaProtocol.HEADER_LO

            case AwaProtocol.HEADER_LO:
                frame.compute_crc(value)
                frame.state = AwaProtocol.HEADER_CRC

            case AwaProtocol.HEADER_CRC:
                if frame.crc == value:
                    led_size = (frame.count + 1) & 0xFFFF
                    if led_size > MAX_LEDS:
                        frame.state = AwaProtocol.HEADER_A
                    else:
                        if led_size != self.output.leds_number:
                            self.output.init_strips(led_size)
                        frame.state = AwaProtocol.RED
                elif frame.count == _COMMAND_COUNT and value in (_COMMAND_HELLO, _COMMAND_STATISTICS):
                    self._handle_command(value)
                    frame.state = AwaProtocol.HEADER_A
                else:
                    frame.state = AwaProtocol.HEADER_A

            case AwaProtocol.RED:
                self._rgb[0] = value
                frame.add_fletcher(value)
                frame.state = AwaProtocol.GREEN

            case AwaProtocol.GREEN:
                self._rgb[1] = value
                frame.add_fletcher(value)
                frame.state = AwaProtocol.BLUE

            case AwaProtocol.BLUE:
                self._rgb[2] = value
                frame.add_fletcher(value)
                color = Color(*self._rgb)
                if self.calibration is not None:
                    color = self.calibration.rgb_to_rgbw(color)
                frame.color = color
                if self.output.set_pixel(frame.next_led_index(), color):
                    frame.state = AwaProtocol.RED
                elif frame.protocol_version2:
                    frame.state = AwaProtocol.VERSION2_GAIN
                else:
                    frame.state = AwaProtocol.FLETCHER1

            case AwaProtocol.VERSION2_GAIN:
                frame.calibration[0] = value
                frame.add_fletcher(value)
                frame.state = AwaProtocol.VERSION2_RED

            case AwaProtocol.VERSION2_RED:
                frame.calibration[1] = value
                frame.add_fletcher(value)
                frame.state = AwaProtocol.VERSION2_GREEN

            case AwaProtocol.VERSION2_GREEN:
                frame.calibration[2] = value
                frame.add_fletcher(value)
                frame.state = AwaProtocol.VERSION2_BLUE

            case AwaProtocol.VERSION2_BLUE:
                frame.calibration[3] = value
                frame.add_fletcher(value)
                frame.state = AwaProtocol.FLETCHER1

            case AwaProtocol.FLETCHER1:
                frame.state = AwaProtocol.FLETCHER2 if value == frame.fletcher1 else AwaProtocol.HEADER_A

            case AwaProtocol.FLETCHER2:
                frame.state = AwaProtocol.FLETCHER_EXT if value == frame.fletcher2 else AwaProtocol.HEADER_A

            case AwaProtocol.FLETCHER_EXT:
                frame.state = AwaProtocol.HEADER_A
                if value == frame.fletcher_ext:
                    self.statistics.increase_good()
                    self._render(True)
                    if self.calibration is not None and frame.protocol_version2:
                        self.calibration.configure(*frame.calibration)
                    self._now = self.clock()
                    self.update_statistics(self._now, self._now - self.statistics.start_time, True)
                    return True
        return False

    def __repr__(self) -> str:
        return f"Receiver(state={self.frame.state.name}, queued={len(self.queue)})"