import random

import pytest

from awaspi.calibration import Color
from awaspi.leds import LedDriver, LedOutput, SegmentLayout

TEST_LEDS_NUMBER = 1025
SECOND_SEGMENT_START_INDEX = 513


class BusyDriver(LedDriver):
    busy = True

    def can_show(self):
        return not self.busy


def random_colors(count, seed=7):
    rng = random.Random(seed)
    return [Color(rng.randrange(255), rng.randrange(255), rng.randrange(255)) for _ in range(count)]


def send_frame(output, colors):
    results = [output.set_pixel(i, c) for i, c in enumerate(colors)]
    return results


def test_single_segment_strip():
    output = LedOutput()
    output.init_strips(801)
    assert output.strip2 is None
    assert output.strip1.count == 801
    colors = random_colors(801)
    send_frame(output, colors)
    assert output.render(True) is True
    assert output.strip1.last_count == 801
    assert list(output.strip1.frame) == colors


def test_multi_segment_split_and_mapping():
    output = LedOutput(LedDriver, SegmentLayout(second_start=SECOND_SEGMENT_START_INDEX))
    output.init_strips(TEST_LEDS_NUMBER)
    colors = random_colors(TEST_LEDS_NUMBER)
    results = send_frame(output, colors)
    assert all(results[:-1]) and results[-1] is False
    assert output.render(True) is True
    assert output.strip1.last_count == SECOND_SEGMENT_START_INDEX
    assert output.strip2.last_count == TEST_LEDS_NUMBER - SECOND_SEGMENT_START_INDEX
    assert list(output.strip1.frame) == colors[:SECOND_SEGMENT_START_INDEX]
    assert list(output.strip2.frame) == colors[SECOND_SEGMENT_START_INDEX:]


def test_multi_segment_reversed_mapping():
    output = LedOutput(LedDriver, SegmentLayout(second_start=SECOND_SEGMENT_START_INDEX, reversed=True))
    output.init_strips(TEST_LEDS_NUMBER)
    colors = random_colors(TEST_LEDS_NUMBER, seed=11)
    send_frame(output, colors)
    assert output.render(True) is True
    assert output.strip1.last_count == SECOND_SEGMENT_START_INDEX
    assert output.strip2.last_count == TEST_LEDS_NUMBER - SECOND_SEGMENT_START_INDEX
    assert list(output.strip1.frame) == colors[:SECOND_SEGMENT_START_INDEX]
    assert list(output.strip2.frame) == list(reversed(colors[SECOND_SEGMENT_START_INDEX:]))
    assert output.strip2.frame[0] == colors[TEST_LEDS_NUMBER - 1]


def test_count_not_above_second_start_uses_one_strip():
    output = LedOutput(LedDriver, SegmentLayout(second_start=SECOND_SEGMENT_START_INDEX))
    output.init_strips(SECOND_SEGMENT_START_INDEX)
    assert output.strip2 is None
    assert output.strip1.count == SECOND_SEGMENT_START_INDEX


def test_factory_receives_segment_numbers():
    calls = []
    created = []

    def factory(count, segment):
        calls.append((count, segment))
        driver = LedDriver(count, segment)
        created.append(driver)
        return driver

    output = LedOutput(factory, SegmentLayout(second_start=10))
    output.init_strips(25)
    assert calls == [(10, 0), (15, 1)]
    assert output.strip1 is created[0]
    assert output.strip2 is created[1]
    assert output.strip1.count == 10
    assert output.strip2.count == 15
    assert output.leds_number == 25


def test_reinit_replaces_strips():
    output = LedOutput(LedDriver, SegmentLayout(second_start=10))
    output.init_strips(25)
    first = output.strip1
    output.init_strips(5)
    assert output.strip1 is not first
    assert output.strip2 is None
    assert output.leds_number == 5


def test_set_pixel_return_values():
    output = LedOutput()
    output.init_strips(2)
    assert output.set_pixel(0, Color(1, 2, 3)) is True
    assert output.set_pixel(1, Color(1, 2, 3)) is False


def test_set_pixel_beyond_count_is_ignored():
    output = LedOutput()
    output.init_strips(2)
    assert output.set_pixel(5, Color(1, 2, 3)) is False
    output.render(True)
    assert output.strip1.last_count == 0


def test_set_pixel_negative_index_rejected():
    output = LedOutput()
    output.init_strips(2)
    with pytest.raises(ValueError):
        output.set_pixel(-1, Color(0, 0, 0))


def test_render_without_strips_keeps_late_frame():
    output = LedOutput()
    assert output.render(True) is False
    assert output.has_late_frame() is True
    output.drop_late_frame()
    assert output.has_late_frame() is False


def test_busy_strip_delays_render():
    output = LedOutput(BusyDriver, SegmentLayout(second_start=2))
    output.init_strips(4)
    assert output.render(True) is False
    assert output.has_late_frame() is True
    output.strip1.busy = False
    assert output.render(False) is False
    output.strip2.busy = False
    assert output.render(False) is True
    assert output.has_late_frame() is False
    assert output.strip1.shows == 1 and output.strip2.shows == 1


def test_render_without_pending_frame_does_nothing():
    output = LedOutput()
    output.init_strips(3)
    assert output.render(False) is False
    assert output.strip1.shows == 0


def test_driver_rejects_out_of_range_pixel():
    driver = LedDriver(3)
    with pytest.raises(IndexError):
        driver.set_pixel_color(3, Color(0, 0, 0))


def test_layout_rejects_non_positive_start():
    with pytest.raises(ValueError):
        SegmentLayout(second_start=0)