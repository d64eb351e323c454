"""
Tests for snapshot and options serialization (JSON + YAML).
"""

import json

import pytest
from vexport.config import ColorFormat, ExportFormat, ExportOptions, StyleOutputMode
from vexport.examples import build_example_design_system
from vexport.model import Color, EffectType, GridPattern, ResolvedType, VariableAlias
from vexport.naming import Casing, NameFormatRule
from vexport.serialization import (
    SnapshotError,
    graph_from_dict,
    graph_from_json,
    graph_from_yaml,
    graph_to_dict,
    graph_to_json,
    graph_to_yaml,
    load_graph_file,
    load_options_file,
    options_from_dict,
    options_to_dict,
    value_from_dict,
    value_to_dict,
)


class TestValues:
    """Test raw value encoding."""

    def test_alias(self):
        assert value_to_dict(VariableAlias("v1")) == {"type": "VARIABLE_ALIAS", "id": "v1"}
        assert value_from_dict({"type": "VARIABLE_ALIAS", "id": "v1"}) == VariableAlias("v1")

    def test_color(self):
        assert value_from_dict({"r": 1, "g": 0, "b": 0}) == Color(1.0, 0.0, 0.0, 1.0)

    def test_scalars(self):
        assert value_from_dict(8) == 8
        assert value_from_dict("Inter") == "Inter"
        assert value_from_dict(True) is True

    def test_invalid_color(self):
        with pytest.raises(SnapshotError):
            value_from_dict({"r": 1, "g": 0})

    def test_unsupported(self):
        with pytest.raises(SnapshotError):
            value_from_dict([1, 2, 3])


class TestGraphRoundTrip:
    """Test graph serialization through JSON and YAML."""

    def test_json_round_trip(self):
        graph = build_example_design_system()
        restored = graph_from_json(graph_to_json(graph))
        assert graph_to_dict(restored) == graph_to_dict(graph)

    def test_yaml_round_trip(self):
        graph = build_example_design_system()
        restored = graph_from_yaml(graph_to_yaml(graph))
        assert restored.get_variable("v-bg").values_by_mode["m-dark"] == VariableAlias("v-black")
        assert restored.styles.text[0].font_weight == 700

    def test_effect_and_grid_styles(self):
        restored = graph_from_yaml(graph_to_yaml(build_example_design_system()))
        card = next(s for s in restored.styles.effect if s.name == "Elevation/Card")
        shadow = card.effects[0]
        assert shadow.type is EffectType.DROP_SHADOW
        assert shadow.color == Color(0, 0, 0, 0.25)
        assert shadow.bound_variables == {"spread": "v-space-sm"}
        grid = restored.styles.grid[0].layout_grids[0]
        assert (grid.pattern, grid.section_size, grid.count) == (GridPattern.COLUMNS, 64, 12)

    def test_auto_fill_grid_count(self):
        graph = graph_from_dict({"styles": {"grid": [{
            "id": "g1",
            "name": "Rows",
            "layout_grids": [{"pattern": "rows", "section_size": 8, "count": float("inf")}],
        }]}})
        grid = graph.styles.grid[0].layout_grids[0]
        assert grid.pattern is GridPattern.ROWS
        assert grid.count is None

    def test_json_is_sorted(self):
        text = graph_to_json(build_example_design_system(include_styles=False))
        assert list(json.loads(text)) == ["collections", "variables"]

    def test_minimal_document(self):
        graph = graph_from_dict({
            "collections": [{"id": "c1", "name": "C", "modes": [{"mode_id": "m1", "name": "Default"}]}],
            "variables": [{
                "id": "v1",
                "name": "size",
                "resolved_type": "float",
                "collection_id": "c1",
                "values_by_mode": {"m1": 4},
            }],
        })
        assert graph.collections[0].default_mode_id == "m1"
        assert graph.variables[0].resolved_type is ResolvedType.FLOAT
        assert graph.styles.is_empty()


class TestSnapshotErrors:
    """Test malformed documents."""

    def test_not_a_mapping(self):
        with pytest.raises(SnapshotError):
            graph_from_dict(["nope"])

    def test_missing_key(self):
        with pytest.raises(SnapshotError, match="resolved_type"):
            graph_from_dict({"variables": [{"id": "v1", "name": "x", "collection_id": "c1"}]})

    def test_unknown_type(self):
        with pytest.raises(SnapshotError, match="GRADIENT"):
            graph_from_dict({"variables": [{"id": "v1", "name": "x", "resolved_type": "GRADIENT", "collection_id": "c"}]})

    def test_unknown_effect_type(self):
        with pytest.raises(SnapshotError, match="GLOW"):
            graph_from_dict({"styles": {"effect": [{"id": "e1", "name": "x", "effects": [{"type": "GLOW"}]}]}})

    def test_bad_grid_count(self):
        grids = [{"pattern": "COLUMNS", "section_size": 8, "count": "many"}]
        with pytest.raises(SnapshotError, match="count"):
            graph_from_dict({"styles": {"grid": [{"id": "g1", "name": "x", "layout_grids": grids}]}})

    def test_bad_json(self):
        with pytest.raises(SnapshotError):
            graph_from_json("{not json")

    def test_snapshot_error_is_value_error(self):
        assert issubclass(SnapshotError, ValueError)


class TestOptions:
    """Test ExportOptions documents."""

    def test_round_trip(self):
        options = ExportOptions(
            prefix="ds",
            casing=Casing.SNAKE,
            color_format=ColorFormat.HSL,
            name_format_rules=[NameFormatRule("color/*", "c-$1", id="r1")],
            selected_collections=["c1"],
        )
        assert options_from_dict(options_to_dict(options)) == options

    def test_style_options(self):
        options = options_from_dict({"style_output_mode": "CLASSES", "style_types": ["Paint", "grid"]})
        assert options.style_output_mode is StyleOutputMode.CLASSES
        assert options.style_types == ["paint", "grid"]
        assert options_from_dict(options_to_dict(options)) == options

    def test_unknown_style_type(self):
        with pytest.raises(SnapshotError, match="gradient"):
            options_from_dict({"style_types": ["paint", "gradient"]})

    def test_format_defaults_apply(self):
        options = options_from_dict({"prefix": "x"}, ExportFormat.TYPESCRIPT)
        assert options.prefix == "x"
        assert options.include_collection_comments is False

    def test_empty(self):
        assert options_from_dict(None) == ExportOptions()

    def test_unknown_key(self):
        with pytest.raises(SnapshotError, match="colour"):
            options_from_dict({"colour": "red"})

    def test_bad_enum(self):
        with pytest.raises(SnapshotError):
            options_from_dict({"casing": "sarcastic"})


class TestFiles:
    """Test loading from disk."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        path.write_text(graph_to_yaml(build_example_design_system()), encoding="utf-8")
        graph = load_graph_file(str(path))
        assert len(graph.collections) == 3

    def test_load_json(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(graph_to_json(build_example_design_system()), encoding="utf-8")
        assert load_graph_file(str(path)).get_variable("v-red").values_by_mode["m-value"] == Color(1, 0, 0)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_graph_file(str(tmp_path / "missing.json"))

    def test_load_options(self, tmp_path):
        path = tmp_path / "options.yaml"
        path.write_text("prefix: ds\nname_format_rules:\n  - pattern: 'color/*'\n    replacement: 'c-$1'\n", encoding="utf-8")
        options = load_options_file(str(path))
        assert options.prefix == "ds"
        assert options.name_format_rules == [NameFormatRule("color/*", "c-$1")]
