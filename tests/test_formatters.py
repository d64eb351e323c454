"""
Tests for color and number literal formatting.
"""

import pytest
from vexport.config import ColorFormat, TokenConfig, Unit
from vexport.formatters import (
    clean_number,
    format_color,
    format_number,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_oklch,
    rgb_to_rgb_string,
)
from vexport.model import Color


class TestHex:
    """Test #rrggbb output."""

    def test_primaries(self):
        assert rgb_to_hex(Color(1, 0, 0)) == "#ff0000"
        assert rgb_to_hex(Color(0, 1, 0)) == "#00ff00"
        assert rgb_to_hex(Color(0, 0, 1)) == "#0000ff"

    def test_half_rounds_up(self):
        assert rgb_to_hex(Color(0.5, 0.5, 0.5)) == "#808080"

    def test_alpha_is_dropped(self):
        assert rgb_to_hex(Color(1, 1, 1, 0.2)) == "#ffffff"

    def test_out_of_range_is_clamped(self):
        assert rgb_to_hex(Color(1.5, -0.2, 0)) == "#ff0000"


class TestRgb:
    """Test rgb()/rgba() output."""

    def test_opaque(self):
        assert rgb_to_rgb_string(Color(1, 0, 0)) == "rgb(255, 0, 0)"

    def test_translucent(self):
        assert rgb_to_rgb_string(Color(0, 0, 0, 0.5)) == "rgba(0, 0, 0, 0.500)"


class TestHsl:
    """Test hsl()/hsla() output."""

    def test_red(self):
        assert rgb_to_hsl(Color(1, 0, 0)) == "hsl(0, 100%, 50%)"

    def test_blue(self):
        assert rgb_to_hsl(Color(0, 0, 1)) == "hsl(240, 100%, 50%)"

    def test_grey_has_no_saturation(self):
        assert rgb_to_hsl(Color(1, 1, 1)) == "hsl(0, 0%, 100%)"

    def test_translucent(self):
        assert rgb_to_hsl(Color(0, 1, 0, 0.25)) == "hsla(120, 100%, 50%, 0.250)"


class TestOklch:
    """Test oklch() output."""

    def test_white(self):
        assert rgb_to_oklch(Color(1, 1, 1)).startswith("oklch(100.00% 0.0000")

    def test_black(self):
        assert rgb_to_oklch(Color(0, 0, 0)) == "oklch(0.00% 0.0000 0.00)"

    def test_translucent_has_alpha_suffix(self):
        assert rgb_to_oklch(Color(1, 0, 0, 0.5)).endswith(" / 0.500)")


class TestFormatColor:
    """Test dispatch by ColorFormat."""

    @pytest.mark.parametrize("fmt,expected", [
        (ColorFormat.HEX, "#ff0000"),
        (ColorFormat.RGB, "rgb(255, 0, 0)"),
        (ColorFormat.RGBA, "rgb(255, 0, 0)"),
        (ColorFormat.HSL, "hsl(0, 100%, 50%)"),
    ])
    def test_dispatch(self, fmt, expected):
        assert format_color(Color(1, 0, 0), fmt) == expected


class TestCleanNumber:
    """Test rounding and trailing-zero trimming."""

    def test_integers(self):
        assert clean_number(16.0) == "16"
        assert clean_number(0) == "0"

    def test_rounding(self):
        assert clean_number(0.3333333) == "0.3333"
        assert clean_number(2 / 3) == "0.6667"

    def test_half_up(self):
        assert clean_number(0.125, 2) == "0.13"

    def test_trailing_zeros(self):
        assert clean_number(1.50, 2) == "1.5"

    def test_precision_zero(self):
        assert clean_number(2.5, 0) == "3"

    def test_negative_zero(self):
        assert clean_number(-0.00001) == "0"

    def test_huge_integer_is_exact(self):
        assert clean_number(10 ** 30) == "1" + "0" * 30
        assert clean_number(-(10 ** 400)) == "-1" + "0" * 400

    def test_non_finite(self):
        assert clean_number(float("inf")) == "inf"
        assert clean_number(float("nan")) == "nan"


class TestFormatNumber:
    """Test unit handling."""

    def test_rem(self):
        assert format_number(16, TokenConfig(unit=Unit.REM, rem_base=16)) == "1rem"

    def test_rem_custom_base(self):
        assert format_number(24, TokenConfig(unit=Unit.REM, rem_base=12)) == "2rem"

    def test_rem_fractional(self):
        assert format_number(8, TokenConfig(unit=Unit.REM)) == "0.5rem"

    def test_rem_bad_base_falls_back(self):
        assert format_number(32, TokenConfig(unit=Unit.REM, rem_base=0)) == "2rem"

    def test_px(self):
        assert format_number(16, TokenConfig(unit=Unit.PX)) == "16px"

    @pytest.mark.parametrize("unit,expected", [
        (Unit.NONE, "1.5"),
        (Unit.EM, "1.5em"),
        (Unit.PERCENT, "1.5%"),
        (Unit.MS, "1.5ms"),
        (Unit.S, "1.5s"),
    ])
    def test_suffixes(self, unit, expected):
        assert format_number(1.5, TokenConfig(unit=unit)) == expected

    def test_precision(self):
        assert format_number(1.23456, TokenConfig(unit=Unit.NONE, precision=2)) == "1.23"
