"""
Configuration records for a single export call.

TokenConfig is the resolved, per-variable formatting configuration.
ExportOptions is the per-call parameter record. Neither has persisted
identity; both are built fresh for every export.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from vexport.naming import Casing, NameFormatRule, rules_with_default

MAX_ALIAS_DEPTH = 10
DEFAULT_REM_BASE = 16.0
DEFAULT_PRECISION = 4
MAX_PRECISION = 10
DEFAULT_CSS_SELECTOR = ":root"
DEFAULT_FILE_NAME = "Untitled"

CIRCULAR_REFERENCE = "/* circular reference */"
UNRESOLVED_ALIAS = "/* unresolved alias */"


class Unit(Enum):
    NONE = "none"
    PX = "px"
    REM = "rem"
    EM = "em"
    PERCENT = "%"
    MS = "ms"
    S = "s"


class ColorFormat(Enum):
    HEX = "hex"
    RGB = "rgb"
    RGBA = "rgba"
    HSL = "hsl"
    OKLCH = "oklch"


class ExportFormat(Enum):
    CSS = "css"
    SCSS = "scss"
    JSON = "json"
    TYPESCRIPT = "typescript"


class StyleOutputMode(Enum):
    """How CSS and SCSS emit styles: custom properties/variables, or classes/mixins."""

    VARIABLES = "variables"
    CLASSES = "classes"


STYLE_TYPES = ("paint", "text", "effect", "grid")


@dataclass(frozen=True)
class TokenConfig:
    """
    Effective formatting configuration for one variable.

    Properties:
        unit: Unit applied to FLOAT values
        rem_base: Divisor used by the rem unit
        color_format: Output notation for COLOR values
        precision: Decimal places kept for numbers (0-10)
    """

    unit: Unit = Unit.PX
    rem_base: float = DEFAULT_REM_BASE
    color_format: ColorFormat = ColorFormat.HEX
    precision: int = DEFAULT_PRECISION

    def merged(self, overrides: Mapping[str, Any]) -> "TokenConfig":
        """Shallow overlay; keys absent from overrides keep this config's values."""
        return replace(self, **dict(overrides))


DEFAULT_CONFIG = TokenConfig()


def clamp_precision(value: Any) -> int:
    try:
        precision = int(value)
    except (TypeError, ValueError):
        return DEFAULT_PRECISION
    return max(0, min(MAX_PRECISION, precision))


@dataclass
class ExportOptions:
    """
    Parameters for one export call.

    Properties:
        selected_collections: Collection ids to export (empty => all)
        selector: CSS selector wrapping the custom properties
        use_modes_as_selectors: CSS emits one block per mode
        include_collection_comments / include_mode_comments: comment toggles
        include_styles: Emit styles as well
        style_output_mode: Styles as variables or as classes (CSS) / mixins (SCSS)
        style_types: Which style kinds to emit, a subset of STYLE_TYPES
        number_precision: Decimal places for numbers (clamped to 0-10)
        name_format_rules: User rules; the default rule is never stored here
        prefix / casing: Inputs to the computed default rule
        color_format / rem_base: Base config under description overrides
        header_banner: Replaces the generated header comment
        file_name: Source document name mentioned in headers
    """

    selected_collections: List[str] = field(default_factory=list)
    selector: str = DEFAULT_CSS_SELECTOR
    use_modes_as_selectors: bool = False
    include_collection_comments: bool = True
    include_mode_comments: bool = True
    include_styles: bool = False
    style_output_mode: StyleOutputMode = StyleOutputMode.VARIABLES
    style_types: List[str] = field(default_factory=lambda: list(STYLE_TYPES))
    number_precision: int = DEFAULT_PRECISION
    name_format_rules: List[NameFormatRule] = field(default_factory=list)
    prefix: str = ""
    casing: Casing = Casing.KEBAB
    color_format: ColorFormat = ColorFormat.HEX
    rem_base: float = DEFAULT_REM_BASE
    header_banner: Optional[str] = None
    file_name: str = DEFAULT_FILE_NAME

    def effective_rules(self) -> List[NameFormatRule]:
        """User rules plus the default rule computed from prefix/casing."""
        return rules_with_default(self.name_format_rules, self.prefix, self.casing)

    def base_config(self) -> TokenConfig:
        """TokenConfig that description overrides are layered on."""
        rem_base = self.rem_base if self.rem_base and self.rem_base > 0 else DEFAULT_REM_BASE
        return replace(
            DEFAULT_CONFIG,
            color_format=self.color_format,
            rem_base=float(rem_base),
            precision=clamp_precision(self.number_precision),
        )

    @property
    def css_selector(self) -> str:
        selector = self.selector.strip() if self.selector else ""
        return selector or DEFAULT_CSS_SELECTOR


_FORMAT_OVERRIDES: Dict[ExportFormat, Dict[str, Any]] = {
    ExportFormat.CSS: {},
    ExportFormat.SCSS: {},
    ExportFormat.JSON: {},
    ExportFormat.TYPESCRIPT: {
        "include_collection_comments": False,
        "include_mode_comments": False,
    },
}


def default_options_for(fmt: ExportFormat) -> ExportOptions:
    """Default options with the per-format overrides applied."""
    return replace(ExportOptions(), **_FORMAT_OVERRIDES[ExportFormat(fmt)])


def merge_with_defaults(
    fmt: ExportFormat, provided: Optional[Mapping[str, Any]] = None
) -> ExportOptions:
    """Overlay provided option fields onto the format defaults."""
    defaults = default_options_for(fmt)
    if not provided:
        return defaults
    return replace(defaults, **dict(provided))
