import logging
import pytest
from boidsketch.color import (Color, ColorParseError, Invalid, Parsed, byte_to_hex,
                              hex_to_rgb, rgb_to_hex)


def test_hex_string():
    c = Color.from_string("#ff0000")
    assert (c.r, c.g, c.b, c.a) == (255, 0, 0, 1.0)
    assert c.get_hex() == "#ff0000"


def test_hex_string_case_and_whitespace():
    c = Color.from_string("  #00FFaa ")
    assert (c.r, c.g, c.b) == (0, 255, 170)
    assert c.get_hex() == "#00ffaa"


def test_rgb_string_defaults_alpha():
    c = Color.from_string("rgb(10, 20, 30)")
    assert (c.r, c.g, c.b, c.a) == (10, 20, 30, 1.0)


def test_rgba_string():
    c = Color.from_string("rgba(10,20,30,0.5)")
    assert (c.r, c.g, c.b) == (10, 20, 30)
    assert c.a == 0.5
    assert Color.from_string("rgba(1, 2, 3, .25)").a == 0.25


@pytest.mark.parametrize("text", ["red", "#ff00", "#gg0000", "rgb(1, 2)", "rgb(300, 0, 0)",
                                  "rgba(1, 2, 3, 1.5)", ""])
def test_invalid_strings_raise(text):
    with pytest.raises(ColorParseError):
        Color.from_string(text)


def test_invalid_string_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger='boidsketch.color'):
        with pytest.raises(ColorParseError):
            Color.from_string("hsl(1, 2, 3)")
    assert any('Invalid color' in r.message for r in caplog.records)


def test_try_parse_tagged_result():
    ok = Color.try_parse("#0a0b0c")
    assert isinstance(ok, Parsed)
    assert ok.color == Color(10, 11, 12)
    bad = Color.try_parse("nope")
    assert isinstance(bad, Invalid)
    assert bad.reason


def test_numeric_construction():
    c = Color(1, 2, 3)
    assert c.a == 1.0
    assert Color(1, 2, 3, 0.0).a == 0.0
    with pytest.raises(ValueError):
        Color(256, 0, 0)
    with pytest.raises(ValueError):
        Color(0, 0, 0, -0.1)


def test_string_renderings():
    c = Color(10, 20, 30, 0.5)
    assert c.get_rgb() == "rgb(10, 20, 30)"
    assert c.get_rgba() == "rgba(10, 20, 30, 0.5)"
    assert Color(1, 2, 3).get_rgba() == "rgba(1, 2, 3, 1)"
    assert Color().get_hex() == "#000000"


def test_setters():
    c = Color(0, 0, 0, 0.3)
    c.set_rgb(4, 5, 6)
    assert (c.r, c.g, c.b, c.a) == (4, 5, 6, 1.0)
    c.set_hex("#102030")
    assert (c.r, c.g, c.b) == (16, 32, 48)
    c.set_hex("abcdef")
    assert c.get_hex() == "#abcdef"


def test_set_hex_invalid_leaves_color_unchanged():
    c = Color(1, 2, 3)
    with pytest.raises(ColorParseError):
        c.set_hex("#12")
    assert c == Color(1, 2, 3)


def test_hex_helpers():
    assert byte_to_hex(0) == "00"
    assert byte_to_hex(15) == "0f"
    assert byte_to_hex(255) == "ff"
    assert rgb_to_hex(1, 2, 255) == "#0102ff"
    assert hex_to_rgb("#0102ff") == (1, 2, 255)
    assert hex_to_rgb("0102ff") == (1, 2, 255)
    assert hex_to_rgb("#01") is None


def test_pygame_tuples():
    c = Color(10, 20, 30, 0.5)
    assert c.as_rgb_tuple() == (10, 20, 30)
    assert c.as_rgba_tuple() == (10, 20, 30, 128)


def test_alpha_with_trailing_point():
    assert Color.from_string("rgba(1,2,3,1.)").a == 1.0
    assert Color.from_string("rgba(1, 2, 3, 0.)").a == 0.0


@pytest.mark.parametrize("text", ["rgba(1,2,3,.)", "rgba(1,2,3,)", "rgba(1,2,3, )"])
def test_alpha_without_digits_raises(text):
    with pytest.raises(ColorParseError):
        Color.from_string(text)


def test_fractional_channels_rejected():
    with pytest.raises(ValueError):
        Color(10.7, 0, 0)
    with pytest.raises(ValueError):
        Color(0, 0, 0.5)
    c = Color(1, 2, 3)
    with pytest.raises(ValueError):
        c.set_rgb(1, 2.2, 3)
    assert c == Color(1, 2, 3)


def test_whole_float_channels_accepted():
    c = Color(10.0, 20.0, 30.0)
    assert (c.r, c.g, c.b) == (10, 20, 30)
    assert isinstance(c.r, int)
