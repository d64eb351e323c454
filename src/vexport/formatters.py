"""
Literal formatters for COLOR and FLOAT values.

Colors arrive as four floats in [0, 1]; numbers as raw floats. Both are
rendered into CSS-compatible text that is also valid inside SCSS values.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from vexport.config import DEFAULT_PRECISION, DEFAULT_REM_BASE, ColorFormat, TokenConfig, Unit
from vexport.model import Color


def _clamp(component: float) -> float:
    return max(0.0, min(1.0, float(component)))


def _to_byte(component: float) -> int:
    return int(math.floor(_clamp(component) * 255 + 0.5))


def _has_alpha(color: Color) -> bool:
    return color.a is not None and color.a < 1


def _alpha(color: Color) -> str:
    return f"{_clamp(color.a):.3f}"


def rgb_to_hex(color: Color) -> str:
    """#rrggbb; alpha is dropped."""
    return "#" + "".join(f"{_to_byte(c):02x}" for c in (color.r, color.g, color.b))


def rgb_to_rgb_string(color: Color) -> str:
    r, g, b = _to_byte(color.r), _to_byte(color.g), _to_byte(color.b)
    if _has_alpha(color):
        return f"rgba({r}, {g}, {b}, {_alpha(color)})"
    return f"rgb({r}, {g}, {b})"


def rgb_to_hsl(color: Color) -> str:
    r, g, b = _clamp(color.r), _clamp(color.g), _clamp(color.b)

    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2

    hue = 0.0
    saturation = 0.0

    if high != low:
        d = high - low
        saturation = d / (2 - high - low) if lightness > 0.5 else d / (high + low)
        if high == r:
            hue = ((g - b) / d + (6 if g < b else 0)) / 6
        elif high == g:
            hue = ((b - r) / d + 2) / 6
        else:
            hue = ((r - g) / d + 4) / 6

    h = int(math.floor(hue * 360 + 0.5))
    s = int(math.floor(saturation * 100 + 0.5))
    l = int(math.floor(lightness * 100 + 0.5))

    if _has_alpha(color):
        return f"hsla({h}, {s}%, {l}%, {_alpha(color)})"
    return f"hsl({h}, {s}%, {l}%)"


def rgb_to_oklch(color: Color) -> str:
    def to_linear(c: float) -> float:
        c = _clamp(c)
        return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4

    lr, lg, lb = to_linear(color.r), to_linear(color.g), to_linear(color.b)

    # Linear sRGB -> OKLab
    l_ = 0.4122214708 * lr + 0.5363325363 * lg + 0.0514459929 * lb
    m_ = 0.2119034982 * lr + 0.6806995451 * lg + 0.1073969566 * lb
    s_ = 0.0883024619 * lr + 0.2817188376 * lg + 0.6299787005 * lb

    l_c, m_c, s_c = (math.copysign(abs(v) ** (1 / 3), v) for v in (l_, m_, s_))

    lightness = 0.2104542553 * l_c + 0.793617785 * m_c - 0.0040720468 * s_c
    a = 1.9779984951 * l_c - 2.428592205 * m_c + 0.4505937099 * s_c
    b = 0.0259040371 * l_c + 0.7827717662 * m_c - 0.808675766 * s_c

    chroma = math.sqrt(a * a + b * b)
    hue = math.degrees(math.atan2(b, a))
    if hue < 0:
        hue += 360

    body = f"{lightness * 100:.2f}% {chroma:.4f} {hue:.2f}"
    if _has_alpha(color):
        return f"oklch({body} / {_alpha(color)})"
    return f"oklch({body})"


_COLOR_FORMATTERS = {
    ColorFormat.HEX: rgb_to_hex,
    ColorFormat.RGB: rgb_to_rgb_string,
    ColorFormat.RGBA: rgb_to_rgb_string,
    ColorFormat.HSL: rgb_to_hsl,
    ColorFormat.OKLCH: rgb_to_oklch,
}


def format_color(color: Color, color_format: ColorFormat = ColorFormat.HEX) -> str:
    return _COLOR_FORMATTERS.get(color_format, rgb_to_hex)(color)


def clean_number(value: Union[float, int, Decimal], decimals: int = DEFAULT_PRECISION) -> str:
    """
    Round half-up to `decimals` places and trim trailing zeros.

    clean_number(16.0)        -> "16"
    clean_number(0.3333333)   -> "0.3333"
    clean_number(1.50, 2)     -> "1.5"
    clean_number(10 ** 30)    -> "1000000000000000000000000000000"

    Integers are exact at any size; they never pass through float.
    """
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)

    try:
        number = value if isinstance(value, Decimal) else Decimal(repr(float(value)))
        if number == number.to_integral_value():
            return str(int(number))
        quantum = Decimal(1).scaleb(-decimals)
        rounded = number.quantize(quantum, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError):
        return str(value)

    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


_UNIT_SUFFIXES = {
    Unit.NONE: "",
    Unit.PX: "px",
    Unit.EM: "em",
    Unit.PERCENT: "%",
    Unit.MS: "ms",
    Unit.S: "s",
}


def format_number(value: float, config: TokenConfig) -> str:
    """
    Render a number with the configured unit.

    format_number(16, TokenConfig(unit=Unit.REM)) -> "1rem"
    format_number(16, TokenConfig(unit=Unit.PX))  -> "16px"
    """
    precision = config.precision
    if config.unit is Unit.REM:
        base = config.rem_base if config.rem_base and config.rem_base > 0 else DEFAULT_REM_BASE
        try:
            scaled = value / base
        except OverflowError:
            scaled = Decimal(value) / Decimal(repr(float(base)))
        return f"{clean_number(scaled, precision)}rem"
    return f"{clean_number(value, precision)}{_UNIT_SUFFIXES.get(config.unit, '')}"
