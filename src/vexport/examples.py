"""
Example design-system snapshot.

Three collections that together exercise every value type, alias
references across collections, a two-mode theme and description
directives:

    Primitives  one mode          raw colors
    Theme       Light / Dark      aliases into Primitives, one rgba overlay
    Tokens      one mode          rem/px/ms numbers, a string, a boolean

Styles cover every kind: a bound and a literal paint, a heading, a card
shadow whose spread is bound to spacing/sm, a frosted-glass blur and a
12-column grid.
"""
from vexport.model import (
    Color,
    Effect,
    EffectStyle,
    EffectType,
    GridPattern,
    GridStyle,
    LayoutGrid,
    Mode,
    PaintStyle,
    ResolvedType,
    StyleCollection,
    TextStyle,
    Variable,
    VariableAlias,
    VariableCollection,
    VariableGraph,
)


def build_example_design_system(include_styles: bool = True) -> VariableGraph:
    primitives = VariableCollection(
        id="c-primitives",
        name="Primitives",
        modes=[Mode("m-value", "Value")],
        default_mode_id="m-value",
    )
    theme = VariableCollection(
        id="c-theme",
        name="Theme",
        modes=[Mode("m-light", "Light"), Mode("m-dark", "Dark")],
        default_mode_id="m-light",
    )
    tokens = VariableCollection(
        id="c-tokens",
        name="Tokens",
        modes=[Mode("m-default", "Default")],
        default_mode_id="m-default",
    )

    def primitive(var_id: str, name: str, color: Color) -> Variable:
        return Variable(
            id=var_id,
            name=name,
            resolved_type=ResolvedType.COLOR,
            collection_id=primitives.id,
            values_by_mode={"m-value": color},
        )

    def themed(var_id: str, name: str, light, dark, description: str = "") -> Variable:
        return Variable(
            id=var_id,
            name=name,
            resolved_type=ResolvedType.COLOR,
            collection_id=theme.id,
            values_by_mode={"m-light": light, "m-dark": dark},
            description=description,
        )

    def token(var_id: str, name: str, resolved_type: ResolvedType, value, description: str = "") -> Variable:
        return Variable(
            id=var_id,
            name=name,
            resolved_type=resolved_type,
            collection_id=tokens.id,
            values_by_mode={"m-default": value},
            description=description,
        )

    variables = [
        # Primitives
        primitive("v-white", "color/neutral/0", Color(1, 1, 1)),
        primitive("v-black", "color/neutral/900", Color(0, 0, 0)),
        primitive("v-blue", "color/blue/500", Color(0, 0, 1)),
        primitive("v-red", "color/red/500", Color(1, 0, 0)),

        # Theme
        themed("v-bg", "color/background", VariableAlias("v-white"), VariableAlias("v-black")),
        themed("v-text", "color/text", VariableAlias("v-black"), VariableAlias("v-white")),
        themed("v-accent", "color/accent", VariableAlias("v-blue"), VariableAlias("v-blue")),
        themed(
            "v-overlay",
            "color/overlay",
            Color(0, 0, 0, 0.5),
            Color(1, 1, 1, 0.5),
            description="Modal scrim\nformat: rgba",
        ),

        # Tokens
        token("v-space-sm", "spacing/sm", ResolvedType.FLOAT, 8, "unit: rem"),
        token("v-space-md", "spacing/md", ResolvedType.FLOAT, 16, "unit: rem"),
        token("v-space-lg", "spacing/lg", ResolvedType.FLOAT, 24, "unit: px"),
        token("v-duration", "duration/fast", ResolvedType.FLOAT, 150, "unit: ms"),
        token("v-opacity", "opacity/disabled", ResolvedType.FLOAT, 0.4, "unit: none"),
        token("v-font", "font/family/body", ResolvedType.STRING, "Inter"),
        token("v-dark-flag", "feature/dark-mode", ResolvedType.BOOLEAN, True),
    ]

    styles = StyleCollection()
    if include_styles:
        styles = StyleCollection(
            paint=[
                PaintStyle(id="s-brand", name="Brand/Primary", bound_variable_id="v-blue"),
                PaintStyle(id="s-danger", name="Brand/Danger", color=Color(1, 0, 0)),
            ],
            text=[
                TextStyle(
                    id="s-h1",
                    name="Heading/H1",
                    font_family="Inter",
                    font_size=32,
                    font_weight=700,
                    line_height_unit="PERCENT",
                    line_height=120,
                ),
            ],
            effect=[
                EffectStyle(
                    id="s-card",
                    name="Elevation/Card",
                    description="Card shadow\nformat: rgba",
                    effects=[
                        Effect(
                            type=EffectType.DROP_SHADOW,
                            radius=12,
                            color=Color(0, 0, 0, 0.25),
                            offset_y=4,
                            bound_variables={"spread": "v-space-sm"},
                        ),
                    ],
                ),
                EffectStyle(
                    id="s-glass",
                    name="Elevation/Glass",
                    effects=[Effect(type=EffectType.BACKGROUND_BLUR, radius=20)],
                ),
            ],
            grid=[
                GridStyle(
                    id="s-grid",
                    name="Layout/Desktop",
                    layout_grids=[LayoutGrid(GridPattern.COLUMNS, section_size=64, count=12)],
                ),
            ],
        )

    return VariableGraph(
        collections=[primitives, theme, tokens],
        variables=variables,
        styles=styles,
    )
