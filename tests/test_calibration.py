import math

import pytest

from awaspi.calibration import CalibrationConfig, Color


def _legacy_tables(white_limit, r_corr, g_corr, b_corr):
    def rnd(x):
        return int(math.floor(x + 0.5))

    white = [rnd(min(white_limit * i, 255.0)) for i in range(256)]
    red = [rnd(min(r_corr * i / 0xFF, 255.0)) for i in range(256)]
    green = [rnd(min(g_corr * i / 0xFF, 255.0)) for i in range(256)]
    blue = [rnd(min(b_corr * i / 0xFF, 255.0)) for i in range(256)]
    return white, red, green, blue


@pytest.mark.parametrize(
    "white_limit, gain, red, green, blue",
    [
        (1.0, 255, 0xA0, 0xA0, 0xA0),
        (1.0, 255, 0xB0, 0xB0, 0x70),
        (0.5019607843137255, 128, 0xA0, 0xA0, 0xA0),
        (0.5019607843137255, 128, 0xB0, 0xB0, 0x70),
    ],
)
def test_matches_legacy_calibration_algorithm(white_limit, gain, red, green, blue):
    config = CalibrationConfig()
    config.configure(gain, red, green, blue)
    white_t, red_t, green_t, blue_t = _legacy_tables(white_limit, red, green, blue)
    assert list(config.white_lut) == white_t
    assert list(config.red_lut) == red_t
    assert list(config.green_lut) == green_t
    assert list(config.blue_lut) == blue_t


def test_defaults():
    config = CalibrationConfig()
    assert config.matches(0xFF, 0xA0, 0xA0, 0xA0)
    assert (config.gain, config.red, config.green, config.blue) == (255, 160, 160, 160)


@pytest.mark.parametrize("params", [(10, 20, 30, 40), (255, 128, 128, 128)])
def test_table_endpoints(params):
    config = CalibrationConfig(*params)
    luts = (config.white_lut, config.red_lut, config.green_lut, config.blue_lut)
    for lut, value in zip(luts, params):
        assert lut[0] == 0
        assert lut[255] == value
        assert len(lut) == 256


def test_tables_are_monotonic():
    config = CalibrationConfig(0xFF, 0xB0, 0xB0, 0x70)
    for lut in (config.white_lut, config.red_lut, config.green_lut, config.blue_lut):
        assert all(a <= b for a, b in zip(lut, lut[1:]))


def test_configure_reports_change():
    config = CalibrationConfig()
    assert config.configure(10, 20, 30, 40) is True
    assert config.matches(10, 20, 30, 40)
    assert not config.matches(0xFF, 0xA0, 0xA0, 0xA0)
    assert config.configure(10, 20, 30, 40) is False


def test_configure_rejects_out_of_range():
    config = CalibrationConfig()
    with pytest.raises(ValueError):
        config.configure(256, 0, 0, 0)
    with pytest.raises(ValueError):
        CalibrationConfig(0, -1, 0, 0)
    assert config.matches(0xFF, 0xA0, 0xA0, 0xA0)


def test_rgb_to_rgbw_identity_tables():
    config = CalibrationConfig(255, 255, 255, 255)
    assert config.rgb_to_rgbw(Color(255, 255, 255)) == Color(0, 0, 0, 255)
    assert config.rgb_to_rgbw(Color(10, 20, 30)) == Color(0, 10, 20, 10)


def test_rgb_to_rgbw_pure_channel_has_no_white():
    config = CalibrationConfig()
    assert config.rgb_to_rgbw(Color(255, 0, 0)) == Color(255, 0, 0, 0)
    assert config.rgb_to_rgbw(Color(0, 0, 0)) == Color(0, 0, 0, 0)


def test_rgb_to_rgbw_never_increases_rgb():
    config = CalibrationConfig(0xFF, 0xB0, 0xB0, 0x70)
    for value in range(0, 256, 5):
        source = Color(value, value, value)
        result = config.rgb_to_rgbw(source)
        assert result.r <= source.r
        assert result.g <= source.g
        assert result.b <= source.b


def test_color_validation():
    with pytest.raises(ValueError):
        Color(300, 0, 0)


def test_describe():
    config = CalibrationConfig()
    assert config.describe() == "RGBW => Gain: 255/255, red: 160, green: 160, blue: 160"