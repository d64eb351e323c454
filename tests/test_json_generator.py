"""
Tests for DTCG JSON token tree generation.
"""

import json

from vexport.backends.json_generator import NO_VARIABLES_JSON, alias_reference, build_token_tree, generate_json
from vexport.config import ExportOptions
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


class TestTokenTree:
    """Test the nested document structure."""

    def test_structure(self, theme_graph):
        document = json.loads(generate_json(theme_graph))
        assert list(document) == ["Colors", "Size"]
        assert document["Colors"]["color"]["red"] == {
            "$type": "color",
            "$value": {"Light": "#ff0000", "Dark": "#800000"},
        }

    def test_alias_references(self, theme_graph):
        document = json.loads(generate_json(theme_graph))
        assert document["Colors"]["color"]["brand"]["$value"] == {
            "Light": "{Colors.color.red}",
            "Dark": "{Colors.color.red}",
        }

    def test_single_mode_scalar_value(self, theme_graph):
        token = json.loads(generate_json(theme_graph))["Size"]["space"]["md"]
        assert token["$type"] == "number"
        assert token["$value"] == 16
        assert token["$description"] == "unit: rem"
        assert token["$extensions"] == {"com.vexport": {"unit": "rem"}}

    def test_px_has_no_extensions(self, theme_graph):
        theme_graph.variables[2].description = "unit: px"
        token = json.loads(generate_json(theme_graph))["Size"]["space"]["md"]
        assert "$extensions" not in token

    def test_string_and_boolean(self):
        collection = VariableCollection(id="c1", name="Misc", modes=[Mode("m1", "Default")], default_mode_id="m1")
        graph = VariableGraph(
            collections=[collection],
            variables=[
                Variable(id="s", name="font", resolved_type=ResolvedType.STRING, collection_id="c1",
                         values_by_mode={"m1": "Inter"}),
                Variable(id="b", name="flag", resolved_type=ResolvedType.BOOLEAN, collection_id="c1",
                         values_by_mode={"m1": False}),
            ],
        )
        document = json.loads(generate_json(graph))
        assert document["Misc"]["font"] == {"$type": "string", "$value": "Inter"}
        assert document["Misc"]["flag"] == {"$type": "boolean", "$value": False}

    def test_cross_collection_reference(self, theme_graph):
        theme_graph.variables.append(
            Variable(id="v-gap", name="gap", resolved_type=ResolvedType.FLOAT, collection_id="c-size",
                     values_by_mode={"m-base": VariableAlias("v-space")})
        )
        document = json.loads(generate_json(theme_graph))
        assert document["Size"]["gap"]["$value"] == "{Size.space.md}"

    def test_unresolved_and_self_alias(self, theme_graph):
        theme_graph.variables[1].values_by_mode["m-light"] = VariableAlias("gone")
        theme_graph.variables[1].values_by_mode["m-dark"] = VariableAlias("v-brand")
        value = json.loads(generate_json(theme_graph))["Colors"]["color"]["brand"]["$value"]
        assert value == {"Light": "/* unresolved alias */", "Dark": "/* circular reference */"}

    def test_collection_filter(self, theme_graph):
        document = json.loads(generate_json(theme_graph, ExportOptions(selected_collections=["c-size"])))
        assert list(document) == ["Size"]

    def test_token_and_group_collision(self):
        collection = VariableCollection(id="c1", name="C", modes=[Mode("m1", "Default")], default_mode_id="m1")
        graph = VariableGraph(
            collections=[collection],
            variables=[
                Variable(id="a", name="size", resolved_type=ResolvedType.FLOAT, collection_id="c1",
                         values_by_mode={"m1": 1}),
                Variable(id="b", name="size/sm", resolved_type=ResolvedType.FLOAT, collection_id="c1",
                         values_by_mode={"m1": 2}),
            ],
        )
        tree = build_token_tree(graph, ExportOptions())
        assert tree["C"]["size"] == {"sm": {"$type": "number", "$value": 2}}

    def test_idempotent(self, theme_graph):
        assert generate_json(theme_graph) == generate_json(theme_graph)

    def test_non_finite_numbers_stay_valid_json(self):
        collection = VariableCollection(id="c1", name="Misc", modes=[Mode("m1", "Default")], default_mode_id="m1")
        graph = VariableGraph(
            collections=[collection],
            variables=[
                Variable(id="n", name="nan", resolved_type=ResolvedType.FLOAT, collection_id="c1",
                         values_by_mode={"m1": float("nan")}),
                Variable(id="i", name="inf", resolved_type=ResolvedType.FLOAT, collection_id="c1",
                         values_by_mode={"m1": float("inf")}),
                Variable(id="b", name="big", resolved_type=ResolvedType.FLOAT, collection_id="c1",
                         values_by_mode={"m1": 10 ** 40}),
            ],
        )

        def reject(constant):
            raise ValueError(constant)

        document = json.loads(generate_json(graph), parse_constant=reject)
        assert document["Misc"]["nan"]["$value"] == "nan"
        assert document["Misc"]["inf"]["$value"] == "inf"
        assert document["Misc"]["big"]["$value"] == 10 ** 40


class TestAliasReference:
    """Test brace reference paths."""

    def test_reference(self, theme_graph):
        assert alias_reference(VariableAlias("v-space"), theme_graph) == "{Size.space.md}"

    def test_missing(self, theme_graph):
        assert alias_reference(VariableAlias("nope"), theme_graph) == "/* unresolved alias */"


class TestStyles:
    """Test the $styles group."""

    def test_style_tree(self, theme_graph):
        theme_graph.styles = StyleCollection(
            paint=[PaintStyle(id="p1", name="Brand/Red", color=Color(1, 0, 0))],
            text=[TextStyle(id="t1", name="Body", font_family="Inter", font_size=16)],
        )
        document = json.loads(generate_json(theme_graph, ExportOptions(include_styles=True)))
        assert document["$styles"]["paint"]["Brand"]["Red"] == {"$type": "color", "$value": "#ff0000"}
        body = document["$styles"]["text"]["Body"]
        assert body["$type"] == "typography"
        assert body["$value"]["fontFamily"] == '"Inter", sans-serif'
        assert body["$value"]["fontSize"] == "16px"

    def test_effect_and_grid(self, theme_graph):
        theme_graph.styles = StyleCollection(
            effect=[EffectStyle(id="e1", name="Elevation/Card", description="Card shadow", effects=[
                Effect(EffectType.DROP_SHADOW, radius=12, color=Color(0, 0, 0), offset_y=4),
            ])],
            grid=[GridStyle(id="g1", name="Desktop", layout_grids=[LayoutGrid(GridPattern.COLUMNS, 64, count=12)])],
        )
        document = json.loads(generate_json(theme_graph, ExportOptions(include_styles=True)))
        assert document["$styles"]["effect"]["Elevation"]["Card"] == {
            "$type": "shadow",
            "$value": "0px 4px 12px 0px #000000",
            "$description": "Card shadow",
        }
        assert document["$styles"]["grid"]["Desktop"] == {"$type": "grid", "$value": "repeat(12, 64px)"}

    def test_style_types_filter(self, theme_graph):
        theme_graph.styles = StyleCollection(
            paint=[PaintStyle(id="p1", name="Red", color=Color(1, 0, 0))],
            grid=[GridStyle(id="g1", name="Desktop")],
        )
        options = ExportOptions(include_styles=True, style_types=["grid"])
        assert list(build_token_tree(theme_graph, options)["$styles"]) == ["grid"]

        options.style_types = ["text"]
        assert "$styles" not in build_token_tree(theme_graph, options)

    def test_no_styles_by_default(self, theme_graph):
        theme_graph.styles = StyleCollection(paint=[PaintStyle(id="p1", name="Red", color=Color(1, 0, 0))])
        assert "$styles" not in json.loads(generate_json(theme_graph))


class TestEmpty:
    """Test the empty marker."""

    def test_empty_marker_is_valid_json(self, empty_graph):
        output = generate_json(empty_graph)
        assert output == NO_VARIABLES_JSON
        assert json.loads(output) == {"$description": "No variables found in this file"}
