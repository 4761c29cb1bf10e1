# awaspi

A receiver for the AWA LED frame protocol. It takes a raw byte stream,
finds frames in it, checks the header CRC and the three Fletcher-style
checksums, and hands the verified pixel colours to one or two LED strips.
It also counts received, good and shown frames.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Quick start

```python
from awaspi.calibration import Color
from awaspi.framestate import encode_frame
from awaspi.receiver import Receiver

receiver = Receiver()
receiver.feed(encode_frame([Color(255, 0, 0), Color(0, 255, 0)]))
good = receiver.process()          # 1: one frame passed all checks

strip = receiver.output.strip1
print(strip.frame)                 # the colours now shown on the strip
```

## Modules

### `awaspi.framestate`

- `AwaProtocol` — the parser states, from `HEADER_A` to `FLETCHER_EXT`.
- `FrameState` — per-frame sums: `start(count_high)` begins a frame,
  `compute_crc(value)` takes the low count byte, `add_fletcher(value)`
  adds a payload byte, `next_led_index()` hands out LED indexes. The
  `crc`, `count`, `fletcher1`, `fletcher2` and `fletcher_ext` properties
  expose the results (`fletcher_ext` reports `0x41` as `0xAA`, as on the
  wire).
- `encode_frame(colors, calibration=None)` — builds a complete frame for
  1 to 65536 colours. Passing `(gain, red, green, blue)` makes it a
  version 2 frame (`AwA` header) carrying calibration data after the
  colours.

### `awaspi.receiver`

`Receiver(output=None, calibration=None, statistics=None, clock=None, console=None)`
parses the frames:

- `feed(data)` queues received bytes; `process()` parses everything queued,
  renders complete frames and returns how many good frames it found.
- Frames reporting more than 4096 LEDs are dropped. When the LED count
  changes, the output strips are created again.
- If a `CalibrationConfig` is given, every colour is converted to RGBW, and
  version 2 frames update the calibration once the frame is verified.
  Without it, colours pass through unchanged.
- `clock` returns milliseconds (by default, milliseconds since the receiver
  was made); `console` receives the lines the receiver prints (discarded by
  default). A header with count `0x2AA2` and check byte `0x15` or `0x35`
  is a command: the receiver prints the statistics line (and the calibration
  summary when calibrating), with `0x15` also the welcome message, then
  resets the statistics.
- If no statistics period started within the last 5 seconds, parsing
  restarts from the frame header.
- `update_statistics(current_time, delta_time, has_data)` closes a
  statistics period of 1000–1025 ms once more than 3 good frames came, and
  clears the counters when a period overran.

### `awaspi.leds`

- `LedDriver(count, segment=0)` — an in-memory strip. `set_pixel_color`
  stages a pixel, `show()` latches staged pixels into `frame` and records
  how many were written in `last_count`; `shows` counts calls to `show`.
- `SegmentLayout(second_start=None, reversed=False)` — where a second
  segment begins and whether it is laid out backwards.
- `LedOutput(driver_factory=LedDriver, layout=SegmentLayout())` — maps
  frame indexes onto `strip1` and `strip2`. The factory is called as
  `factory(count, segment)` with segment `0` or `1`; a second strip is made
  only when the LED count exceeds `second_start`. `render(new_frame)` shows
  the pending frame when every strip `can_show()`; `has_late_frame()` and
  `drop_late_frame()` inspect and drop a frame still waiting to be shown.

To drive real hardware, pass a factory returning a `LedDriver` subclass
that overrides `can_show`, `show` and `set_pixel_color`.

### `awaspi.calibration`

- `Color(r, g, b, w=0)` — an immutable pixel colour, each channel 0–255.
- `CalibrationConfig(gain=255, red=0xA0, green=0xA0, blue=0xA0)` — builds
  the white/red/green/blue lookup tables. `configure(...)` changes the
  parameters and rebuilds the tables only if they differ (returning whether
  it did), `matches(...)` compares them, `rgb_to_rgbw(color)` extracts the
  white channel, `describe()` returns a one-line summary.

### `awaspi.ringbuffer`

`RingBuffer(capacity=4096)` — a thread-safe cyclic byte queue. `write`
never blocks: data that outruns the reader overwrites unread bytes.
`drain()` yields queued bytes and consumes them, `clear()` empties the
queue, and `len()` gives the number of queued bytes.

### `awaspi.statistics`

`Statistics` counts frames per period: `increase_total`, `increase_good`,
`increase_show`; `update(current_time)` saves the period's totals,
`report(current_time, mem1=0, mem2=0, heap=0)` restarts the period and
returns the summary line, `reset` and `light_reset` clear the counters.

## What this package does not do

It does not read from a serial port or an SPI bus and does not drive
physical LEDs: bytes must be handed to `Receiver.feed` by the caller, and
output goes to `LedDriver` objects that only keep the pixels in memory
unless you supply your own. There is no command-line program.