"""
Paint, text, effect and grid style resolution.

Styles are not variables, but they can ride along with an export when
ExportOptions.include_styles is set. Each style resolves either to one
value (paint, effect, grid) or to a property -> value map (text). Names
are kebab-cased with the export prefix, never run through the name
format rules.

Two layouts consume this module:
    - style_declarations: flat custom properties / SCSS variables
    - style_rules: one property block per style, for CSS classes and
      SCSS mixins
"""

from typing import Dict, List, Optional, Sequence, Tuple

from vexport.config import ExportOptions, TokenConfig
from vexport.description import effective_config
from vexport.formatters import clean_number, format_color, format_number
from vexport.model import (
    Effect,
    EffectStyle,
    EffectType,
    GridPattern,
    GridStyle,
    LayoutGrid,
    PaintStyle,
    StyleCollection,
    TextStyle,
    Variable,
)
from vexport.naming import NameFormatRule, to_css_name, to_prefixed_name, variable_css_name
from vexport.resolver import find_variable

_TEXT_CASE_TRANSFORMS = {
    "UPPER": "uppercase",
    "LOWER": "lowercase",
    "TITLE": "capitalize",
}

StyleRule = Tuple[str, str, Dict[str, str]]


def style_css_name(name: str, prefix: str = "") -> str:
    """Kebab-case style name, e.g. Colors/Primary -> colors-primary."""
    return to_prefixed_name(to_css_name(name), prefix)


def style_config(description: str, options: ExportOptions) -> TokenConfig:
    return effective_config(description, options.base_config())


def _bound_reference(
    variable_id: Optional[str],
    variables: Sequence[Variable],
    rules: Optional[Sequence[NameFormatRule]],
    prefix: str,
) -> Optional[str]:
    if not variable_id:
        return None
    target = find_variable(variables, variable_id)
    if target is None:
        return None
    return f"var(--{variable_css_name(target, rules, prefix)})"


def _px(value: float, config: TokenConfig) -> str:
    return f"{clean_number(value, config.precision)}px"


def resolve_paint_value(
    style: PaintStyle,
    config: TokenConfig,
    variables: Sequence[Variable] = (),
    rules: Optional[Sequence[NameFormatRule]] = None,
    prefix: str = "",
) -> str:
    """
    CSS value of a paint style.

    A fill bound to a known variable renders as var(--name); otherwise the
    literal color is formatted. An empty paint renders as "transparent".
    """
    reference = _bound_reference(style.bound_variable_id, variables, rules, prefix)
    if reference:
        return reference

    if style.color is None:
        return "transparent"
    return format_color(style.color, config.color_format)


def resolve_text_properties(style: TextStyle, config: TokenConfig) -> Dict[str, str]:
    """
    CSS properties of a text style, in emission order.

    Letter spacing given in percent is converted to em, since CSS
    letter-spacing percentages are relative to the font size.
    """
    props: Dict[str, str] = {
        "font-family": f'"{style.font_family}", sans-serif',
        "font-size": format_number(style.font_size, config),
        "font-weight": str(style.font_weight),
    }

    if "italic" in (style.font_style or "").lower():
        props["font-style"] = "italic"

    unit = (style.line_height_unit or "AUTO").upper()
    if unit == "PIXELS":
        props["line-height"] = format_number(style.line_height, config)
    elif unit == "PERCENT":
        props["line-height"] = f"{clean_number(style.line_height, config.precision)}%"

    spacing_unit = (style.letter_spacing_unit or "PIXELS").upper()
    if spacing_unit == "PIXELS":
        props["letter-spacing"] = format_number(style.letter_spacing, config)
    elif spacing_unit == "PERCENT":
        props["letter-spacing"] = f"{clean_number(style.letter_spacing / 100, config.precision)}em"

    decoration = (style.text_decoration or "NONE").upper()
    if decoration != "NONE":
        props["text-decoration"] = decoration.lower().replace("_", "-")

    transform = _TEXT_CASE_TRANSFORMS.get((style.text_case or "").upper())
    if transform:
        props["text-transform"] = transform

    return props


def resolve_shadow(
    effect: Effect,
    config: TokenConfig,
    variables: Sequence[Variable] = (),
    rules: Optional[Sequence[NameFormatRule]] = None,
    prefix: str = "",
) -> str:
    """
    One box-shadow layer: "[inset ]x y blur spread color".

    Each part bound to a known variable becomes var(--name).
    """
    def part(field_name: str, literal: float) -> str:
        reference = _bound_reference(effect.bound_variables.get(field_name), variables, rules, prefix)
        return reference or _px(literal, config)

    color = _bound_reference(effect.bound_variables.get("color"), variables, rules, prefix)
    if color is None:
        color = format_color(effect.color, config.color_format) if effect.color is not None else "transparent"

    inset = "inset " if effect.type is EffectType.INNER_SHADOW else ""
    return (
        f"{inset}{part('offset_x', effect.offset_x)} {part('offset_y', effect.offset_y)} "
        f"{part('radius', effect.radius)} {part('spread', effect.spread)} {color}"
    )


def _blur(effect: Effect, config: TokenConfig, variables, rules, prefix) -> str:
    radius = _bound_reference(effect.bound_variables.get("radius"), variables, rules, prefix)
    return f"blur({radius or _px(effect.radius, config)})"


def resolve_effect_properties(
    style: EffectStyle,
    config: TokenConfig,
    variables: Sequence[Variable] = (),
    rules: Optional[Sequence[NameFormatRule]] = None,
    prefix: str = "",
) -> Dict[str, str]:
    """
    CSS properties of an effect style: box-shadow, filter, backdrop-filter.

    Only properties with at least one visible layer are returned.
    """
    shadows: List[str] = []
    filters: List[str] = []
    backdrop: List[str] = []

    for effect in style.effects:
        if not effect.visible:
            continue
        if effect.type.is_shadow:
            shadows.append(resolve_shadow(effect, config, variables, rules, prefix))
        elif effect.type is EffectType.LAYER_BLUR:
            filters.append(_blur(effect, config, variables, rules, prefix))
        elif effect.type is EffectType.BACKGROUND_BLUR:
            backdrop.append(_blur(effect, config, variables, rules, prefix))

    props: Dict[str, str] = {}
    if shadows:
        props["box-shadow"] = ", ".join(shadows)
    if filters:
        props["filter"] = " ".join(filters)
    if backdrop:
        props["backdrop-filter"] = " ".join(backdrop)
    return props


def resolve_effect_value(
    style: EffectStyle,
    config: TokenConfig,
    variables: Sequence[Variable] = (),
    rules: Optional[Sequence[NameFormatRule]] = None,
    prefix: str = "",
) -> str:
    """
    Single-value form of an effect style.

    Shadows win when present; otherwise every visible blur (layer or
    background) is listed; "none" when nothing is visible.
    """
    props = resolve_effect_properties(style, config, variables, rules, prefix)
    if "box-shadow" in props:
        return props["box-shadow"]
    blurs = [props[key] for key in ("filter", "backdrop-filter") if key in props]
    return " ".join(blurs) or "none"


def _grid_track(grid: LayoutGrid, config: TokenConfig) -> str:
    count = grid.count
    repeat = "auto-fill" if count is None or count < 0 else str(count)
    return f"repeat({repeat}, {_px(grid.section_size, config)})"


def resolve_grid_properties(style: GridStyle, config: TokenConfig) -> Dict[str, str]:
    """grid-template-columns / grid-template-rows from the first visible grid of each pattern."""
    visible = [g for g in style.layout_grids if g.visible]
    props: Dict[str, str] = {}

    columns = next((g for g in visible if g.pattern is GridPattern.COLUMNS), None)
    if columns is not None:
        props["grid-template-columns"] = _grid_track(columns, config)

    rows = next((g for g in visible if g.pattern is GridPattern.ROWS), None)
    if rows is not None:
        props["grid-template-rows"] = _grid_track(rows, config)

    return props


def resolve_grid_value(style: GridStyle, config: TokenConfig) -> str:
    """
    Single-value form of a grid style: "columns / rows", either side
    optional, "none" without column or row grids.

    GRID (square) patterns have no track equivalent and are skipped.
    """
    return " / ".join(resolve_grid_properties(style, config).values()) or "none"


def _sorted(styles):
    return sorted(styles, key=lambda s: (s.name.lower(), s.id))


def style_declarations(
    styles: StyleCollection,
    options: ExportOptions,
    variables: Sequence[Variable] = (),
) -> List[Tuple[str, str, str]]:
    """
    Flatten styles into (section, name, value) triples.

    section is one of "paint", "text", "effect", "grid" and only the
    kinds listed in options.style_types appear. Names are CSS names
    without "--". Styles are sorted by name within each section.
    """
    rules = options.effective_rules()
    prefix = options.prefix
    kinds = set(options.style_types)
    declarations: List[Tuple[str, str, str]] = []

    if "paint" in kinds:
        for style in _sorted(styles.paint):
            config = style_config(style.description, options)
            value = resolve_paint_value(style, config, variables, rules, prefix)
            declarations.append(("paint", style_css_name(style.name, prefix), value))

    if "text" in kinds:
        for style in _sorted(styles.text):
            base_name = style_css_name(style.name, prefix)
            props = resolve_text_properties(style, style_config(style.description, options))
            for prop, value in props.items():
                declarations.append(("text", f"{base_name}-{prop}", value))

    if "effect" in kinds:
        for style in _sorted(styles.effect):
            config = style_config(style.description, options)
            value = resolve_effect_value(style, config, variables, rules, prefix)
            declarations.append(("effect", style_css_name(style.name, prefix), value))

    if "grid" in kinds:
        for style in _sorted(styles.grid):
            value = resolve_grid_value(style, style_config(style.description, options))
            declarations.append(("grid", style_css_name(style.name, prefix), value))

    return declarations


def style_rules(
    styles: StyleCollection,
    options: ExportOptions,
    variables: Sequence[Variable] = (),
) -> List[StyleRule]:
    """
    One (section, name, properties) block per style.

    Paint styles yield {"color": value}; emitters decide how to spread a
    paint over other properties. Grid blocks start with display: grid.
    """
    rules = options.effective_rules()
    prefix = options.prefix
    kinds = set(options.style_types)
    blocks: List[StyleRule] = []

    if "paint" in kinds:
        for style in _sorted(styles.paint):
            config = style_config(style.description, options)
            value = resolve_paint_value(style, config, variables, rules, prefix)
            blocks.append(("paint", style_css_name(style.name, prefix), {"color": value}))

    if "text" in kinds:
        for style in _sorted(styles.text):
            props = resolve_text_properties(style, style_config(style.description, options))
            blocks.append(("text", style_css_name(style.name, prefix), props))

    if "effect" in kinds:
        for style in _sorted(styles.effect):
            config = style_config(style.description, options)
            props = resolve_effect_properties(style, config, variables, rules, prefix)
            blocks.append(("effect", style_css_name(style.name, prefix), props))

    if "grid" in kinds:
        for style in _sorted(styles.grid):
            props = {"display": "grid"}
            props.update(resolve_grid_properties(style, style_config(style.description, options)))
            blocks.append(("grid", style_css_name(style.name, prefix), props))

    return blocks
