"""
Description Parser

A variable's free-text description doubles as a tiny configuration DSL:

    unit: rem:16
    format: oklch

Directives are case-insensitive and may sit anywhere in the text, so
"Spacing token. unit: rem" works. Only the leading value token is read:
"unit: rem (mobile)" means rem. Unknown keys, unknown values and prose
are ignored; when a key repeats, the last occurrence wins. Parsing never
raises.
"""

import re
from typing import Any, Dict, Optional

from vexport.config import DEFAULT_CONFIG, ColorFormat, TokenConfig, Unit

_DIRECTIVE_RE = re.compile(
    r"\b(unit|format)\s*:\s*(%|[a-z]+(?:\s*:\s*\d+(?:\.\d+)?|\s*\(\s*\d+(?:\.\d+)?\s*\))?)",
    re.IGNORECASE,
)
_REM_BASE_RE = re.compile(r"^rem\s*(?::\s*|\(\s*)(\d+(?:\.\d+)?)\s*\)?$", re.IGNORECASE)

_UNITS = {unit.value: unit for unit in Unit}
_UNITS["percent"] = Unit.PERCENT
_COLOR_FORMATS = {fmt.value: fmt for fmt in ColorFormat}


def _parse_unit(raw: str) -> Dict[str, Any]:
    value = raw.strip().lower()

    rem_match = _REM_BASE_RE.match(value)
    if rem_match:
        base = float(rem_match.group(1))
        if base > 0:
            return {"unit": Unit.REM, "rem_base": base}
        return {"unit": Unit.REM}

    unit = _UNITS.get(value)
    if unit is None:
        return {}
    return {"unit": unit}


def parse_description(text: Optional[str]) -> Dict[str, Any]:
    """
    Extract TokenConfig overrides from a description.

    Returns only the fields actually found; defaults are never fabricated.

    Examples:
        parse_description("unit: rem")        -> {"unit": Unit.REM}
        parse_description("unit: rem:20")     -> {"unit": Unit.REM, "rem_base": 20.0}
        parse_description("FORMAT: HSL")      -> {"color_format": ColorFormat.HSL}
        parse_description("Brand color")      -> {}
    """
    if not text or not isinstance(text, str):
        return {}

    config: Dict[str, Any] = {}

    for match in _DIRECTIVE_RE.finditer(text):
        key = match.group(1).lower()
        value = match.group(2)

        if key == "unit":
            config.update(_parse_unit(value))
        else:
            color_format = _COLOR_FORMATS.get(value.strip().lower())
            if color_format is not None:
                config["color_format"] = color_format

    return config


def effective_config(
    description: Optional[str], base: TokenConfig = DEFAULT_CONFIG
) -> TokenConfig:
    """Overlay the description's directives on a base config."""
    return base.merged(parse_description(description))
