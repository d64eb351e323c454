"""
Serialization helpers for vexport objects (VariableGraph, ExportOptions).

Provides lossless JSON/YAML round-trip via an intermediate dict
representation. The document layout is kept stable and explicit:

    collections:
      - id: c1
        name: Colors
        default_mode_id: m1
        modes: [{mode_id: m1, name: Light}]
    variables:
      - id: v1
        name: color/primary
        resolved_type: COLOR
        collection_id: c1
        values_by_mode:
          m1: {r: 1.0, g: 0.0, b: 0.0, a: 1.0}
          m2: {type: VARIABLE_ALIAS, id: v0}

Malformed documents raise SnapshotError.
"""
from __future__ import annotations

import json
import math
import os
from dataclasses import fields
from typing import Any, Dict, Mapping

import yaml

from vexport.config import (
    STYLE_TYPES,
    ColorFormat,
    ExportFormat,
    ExportOptions,
    StyleOutputMode,
    default_options_for,
)
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
from vexport.naming import Casing, NameFormatRule

ALIAS_TYPE = "VARIABLE_ALIAS"


class SnapshotError(ValueError):
    """Raised when a snapshot or options document is malformed."""
    pass


def _require(d: Mapping[str, Any], key: str, what: str) -> Any:
    if not isinstance(d, Mapping):
        raise SnapshotError(f"Expected a mapping for {what}, got {type(d).__name__}")
    if key not in d:
        raise SnapshotError(f"Missing required key '{key}' in {what}")
    return d[key]


def color_to_dict(c: Color) -> Dict[str, Any]:
    return {"r": c.r, "g": c.g, "b": c.b, "a": c.a}


def color_from_dict(d: Mapping[str, Any]) -> Color:
    try:
        return Color(
            r=float(_require(d, "r", "color")),
            g=float(_require(d, "g", "color")),
            b=float(_require(d, "b", "color")),
            a=float(d.get("a", 1.0)),
        )
    except (TypeError, ValueError) as e:
        if isinstance(e, SnapshotError):
            raise
        raise SnapshotError(f"Invalid color {dict(d)!r}: {e}")


def value_to_dict(value: Any) -> Any:
    if isinstance(value, VariableAlias):
        return {"type": ALIAS_TYPE, "id": value.target_id}
    if isinstance(value, Color):
        return color_to_dict(value)
    return value


def value_from_dict(d: Any) -> Any:
    if isinstance(d, Mapping):
        if d.get("type") == ALIAS_TYPE:
            return VariableAlias(str(_require(d, "id", "alias")))
        return color_from_dict(d)
    if isinstance(d, (bool, int, float, str)):
        return d
    raise SnapshotError(f"Unsupported value: {d!r}")


def mode_to_dict(m: Mode) -> Dict[str, Any]:
    return {"mode_id": m.mode_id, "name": m.name}


def mode_from_dict(d: Mapping[str, Any]) -> Mode:
    return Mode(mode_id=str(_require(d, "mode_id", "mode")), name=str(d.get("name", "")))


def collection_to_dict(c: VariableCollection) -> Dict[str, Any]:
    return {
        "id": c.id,
        "name": c.name,
        "modes": [mode_to_dict(m) for m in c.modes],
        "default_mode_id": c.default_mode_id,
    }


def collection_from_dict(d: Mapping[str, Any]) -> VariableCollection:
    modes = [mode_from_dict(m) for m in d.get("modes", []) or []]
    default_mode_id = d.get("default_mode_id")
    if default_mode_id is None:
        default_mode_id = modes[0].mode_id if modes else ""
    return VariableCollection(
        id=str(_require(d, "id", "collection")),
        name=str(d.get("name", "")),
        modes=modes,
        default_mode_id=str(default_mode_id),
    )


def variable_to_dict(v: Variable) -> Dict[str, Any]:
    return {
        "id": v.id,
        "name": v.name,
        "resolved_type": v.resolved_type.value,
        "collection_id": v.collection_id,
        "values_by_mode": {mode_id: value_to_dict(val) for mode_id, val in v.values_by_mode.items()},
        "description": v.description,
        "code_syntax": dict(v.code_syntax),
    }


def variable_from_dict(d: Mapping[str, Any]) -> Variable:
    variable_id = str(_require(d, "id", "variable"))
    raw_type = _require(d, "resolved_type", f"variable '{variable_id}'")
    try:
        resolved_type = ResolvedType(str(raw_type).upper())
    except ValueError:
        raise SnapshotError(f"Unknown resolved_type '{raw_type}' for variable '{variable_id}'")

    values = d.get("values_by_mode", {}) or {}
    if not isinstance(values, Mapping):
        raise SnapshotError(f"values_by_mode of variable '{variable_id}' must be a mapping")

    return Variable(
        id=variable_id,
        name=str(_require(d, "name", f"variable '{variable_id}'")),
        resolved_type=resolved_type,
        collection_id=str(_require(d, "collection_id", f"variable '{variable_id}'")),
        values_by_mode={str(k): value_from_dict(v) for k, v in values.items()},
        description=d.get("description") or "",
        code_syntax=dict(d.get("code_syntax") or {}),
    )


def paint_style_to_dict(s: PaintStyle) -> Dict[str, Any]:
    return {
        "id": s.id,
        "name": s.name,
        "description": s.description,
        "color": color_to_dict(s.color) if s.color is not None else None,
        "bound_variable_id": s.bound_variable_id,
    }


def paint_style_from_dict(d: Mapping[str, Any]) -> PaintStyle:
    color = d.get("color")
    return PaintStyle(
        id=str(_require(d, "id", "paint style")),
        name=str(_require(d, "name", "paint style")),
        description=d.get("description") or "",
        color=color_from_dict(color) if color is not None else None,
        bound_variable_id=d.get("bound_variable_id"),
    )


_TEXT_STYLE_OPTIONAL = (
    "font_style",
    "font_weight",
    "line_height_unit",
    "line_height",
    "letter_spacing_unit",
    "letter_spacing",
    "text_decoration",
    "text_case",
)


def text_style_to_dict(s: TextStyle) -> Dict[str, Any]:
    d = {
        "id": s.id,
        "name": s.name,
        "description": s.description,
        "font_family": s.font_family,
        "font_size": s.font_size,
    }
    for key in _TEXT_STYLE_OPTIONAL:
        d[key] = getattr(s, key)
    return d


def text_style_from_dict(d: Mapping[str, Any]) -> TextStyle:
    font_size = _require(d, "font_size", "text style")
    try:
        font_size = float(font_size)
    except (TypeError, ValueError):
        raise SnapshotError(f"Invalid font_size {font_size!r} in text style")

    style = TextStyle(
        id=str(_require(d, "id", "text style")),
        name=str(_require(d, "name", "text style")),
        font_family=str(_require(d, "font_family", "text style")),
        font_size=font_size,
        description=d.get("description") or "",
    )
    overrides = {key: d[key] for key in _TEXT_STYLE_OPTIONAL if d.get(key) is not None}
    for key, value in overrides.items():
        setattr(style, key, value)
    return style


def _enum_value(enum_cls, value: Any, what: str):
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        raise SnapshotError(f"Unknown {what} {value!r}")


def _number(value: Any, key: str, what: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise SnapshotError(f"Invalid {key} {value!r} in {what}")


_EFFECT_NUMBERS = ("radius", "offset_x", "offset_y", "spread")


def effect_to_dict(e: Effect) -> Dict[str, Any]:
    d: Dict[str, Any] = {"type": e.type.value, "visible": e.visible}
    for key in _EFFECT_NUMBERS:
        d[key] = getattr(e, key)
    d["color"] = color_to_dict(e.color) if e.color is not None else None
    if e.bound_variables:
        d["bound_variables"] = dict(e.bound_variables)
    return d


def effect_from_dict(d: Mapping[str, Any]) -> Effect:
    effect = Effect(
        type=_enum_value(EffectType, _require(d, "type", "effect"), "effect type"),
        visible=bool(d.get("visible", True)),
        bound_variables={str(k): str(v) for k, v in (d.get("bound_variables") or {}).items()},
    )
    for key in _EFFECT_NUMBERS:
        if d.get(key) is not None:
            setattr(effect, key, _number(d[key], key, "effect"))
    color = d.get("color")
    if color is not None:
        effect.color = color_from_dict(color)
    return effect


def effect_style_to_dict(s: EffectStyle) -> Dict[str, Any]:
    return {
        "id": s.id,
        "name": s.name,
        "description": s.description,
        "effects": [effect_to_dict(e) for e in s.effects],
    }


def effect_style_from_dict(d: Mapping[str, Any]) -> EffectStyle:
    return EffectStyle(
        id=str(_require(d, "id", "effect style")),
        name=str(_require(d, "name", "effect style")),
        description=d.get("description") or "",
        effects=[effect_from_dict(e) for e in d.get("effects", []) or []],
    )


def layout_grid_to_dict(g: LayoutGrid) -> Dict[str, Any]:
    return {
        "pattern": g.pattern.value,
        "section_size": g.section_size,
        "count": g.count,
        "visible": g.visible,
    }


def layout_grid_from_dict(d: Mapping[str, Any]) -> LayoutGrid:
    pattern = _enum_value(GridPattern, _require(d, "pattern", "layout grid"), "grid pattern")
    count = d.get("count")
    if isinstance(count, float) and math.isinf(count):
        count = None
    if count is not None:
        try:
            count = int(count)
        except (TypeError, ValueError):
            raise SnapshotError(f"Invalid count {count!r} in layout grid")
    return LayoutGrid(
        pattern=pattern,
        section_size=_number(_require(d, "section_size", "layout grid"), "section_size", "layout grid"),
        count=count,
        visible=bool(d.get("visible", True)),
    )


def grid_style_to_dict(s: GridStyle) -> Dict[str, Any]:
    return {
        "id": s.id,
        "name": s.name,
        "description": s.description,
        "layout_grids": [layout_grid_to_dict(g) for g in s.layout_grids],
    }


def grid_style_from_dict(d: Mapping[str, Any]) -> GridStyle:
    return GridStyle(
        id=str(_require(d, "id", "grid style")),
        name=str(_require(d, "name", "grid style")),
        description=d.get("description") or "",
        layout_grids=[layout_grid_from_dict(g) for g in d.get("layout_grids", []) or []],
    )


def styles_to_dict(s: StyleCollection) -> Dict[str, Any]:
    return {
        "paint": [paint_style_to_dict(p) for p in s.paint],
        "text": [text_style_to_dict(t) for t in s.text],
        "effect": [effect_style_to_dict(e) for e in s.effect],
        "grid": [grid_style_to_dict(g) for g in s.grid],
    }


def styles_from_dict(d: Mapping[str, Any] | None) -> StyleCollection:
    if not d:
        return StyleCollection()
    return StyleCollection(
        paint=[paint_style_from_dict(p) for p in d.get("paint", []) or []],
        text=[text_style_from_dict(t) for t in d.get("text", []) or []],
        effect=[effect_style_from_dict(e) for e in d.get("effect", []) or []],
        grid=[grid_style_from_dict(g) for g in d.get("grid", []) or []],
    )


def graph_to_dict(g: VariableGraph) -> Dict[str, Any]:
    d = {
        "collections": [collection_to_dict(c) for c in g.collections],
        "variables": [variable_to_dict(v) for v in g.variables],
    }
    if not g.styles.is_empty():
        d["styles"] = styles_to_dict(g.styles)
    return d


def graph_from_dict(d: Any) -> VariableGraph:
    if not isinstance(d, Mapping):
        raise SnapshotError("Snapshot document must be a mapping with 'collections' and 'variables'")
    return VariableGraph(
        collections=[collection_from_dict(c) for c in d.get("collections", []) or []],
        variables=[variable_from_dict(v) for v in d.get("variables", []) or []],
        styles=styles_from_dict(d.get("styles")),
    )


def graph_to_json(g: VariableGraph) -> str:
    return json.dumps(graph_to_dict(g), sort_keys=True)


def graph_from_json(s: str) -> VariableGraph:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON snapshot: {e}")
    return graph_from_dict(d)


def graph_to_yaml(g: VariableGraph) -> str:
    return yaml.safe_dump(graph_to_dict(g))


def graph_from_yaml(s: str) -> VariableGraph:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise SnapshotError(f"Invalid YAML snapshot: {e}")
    return graph_from_dict(d)


# =========================================================================
# EXPORT OPTIONS
# =========================================================================

def rule_to_dict(r: NameFormatRule) -> Dict[str, Any]:
    return {"pattern": r.pattern, "replacement": r.replacement, "enabled": r.enabled, "id": r.id}


def rule_from_dict(d: Mapping[str, Any]) -> NameFormatRule:
    return NameFormatRule(
        pattern=str(_require(d, "pattern", "name format rule")),
        replacement=str(_require(d, "replacement", "name format rule")),
        enabled=bool(d.get("enabled", True)),
        id=str(d.get("id", "")),
    )


def options_to_dict(o: ExportOptions) -> Dict[str, Any]:
    return {
        "selected_collections": list(o.selected_collections),
        "selector": o.selector,
        "use_modes_as_selectors": o.use_modes_as_selectors,
        "include_collection_comments": o.include_collection_comments,
        "include_mode_comments": o.include_mode_comments,
        "include_styles": o.include_styles,
        "style_output_mode": o.style_output_mode.value,
        "style_types": list(o.style_types),
        "number_precision": o.number_precision,
        "name_format_rules": [rule_to_dict(r) for r in o.name_format_rules],
        "prefix": o.prefix,
        "casing": o.casing.value,
        "color_format": o.color_format.value,
        "rem_base": o.rem_base,
        "header_banner": o.header_banner,
        "file_name": o.file_name,
    }


_OPTION_FIELDS = {f.name for f in fields(ExportOptions)}


def options_from_dict(d: Mapping[str, Any] | None, fmt: ExportFormat = ExportFormat.CSS) -> ExportOptions:
    """
    Build ExportOptions from a mapping, over the format's defaults.

    Raises:
        SnapshotError: on unknown keys or invalid enum values
    """
    options = default_options_for(fmt)
    if not d:
        return options
    if not isinstance(d, Mapping):
        raise SnapshotError("Options document must be a mapping")

    unknown = set(d) - _OPTION_FIELDS
    if unknown:
        raise SnapshotError(f"Unknown option keys: {sorted(unknown)}")

    for key, value in d.items():
        try:
            if key == "name_format_rules":
                value = [rule_from_dict(r) for r in value or []]
            elif key == "casing":
                value = Casing(str(value).lower())
            elif key == "color_format":
                value = ColorFormat(str(value).lower())
            elif key == "selected_collections":
                value = [str(v) for v in value or []]
            elif key == "style_output_mode":
                value = StyleOutputMode(str(value).lower())
            elif key == "style_types":
                value = [str(v).lower() for v in value or []]
                unknown_types = [v for v in value if v not in STYLE_TYPES]
                if unknown_types:
                    raise SnapshotError(f"Unknown style types: {unknown_types}")
        except ValueError as e:
            if isinstance(e, SnapshotError):
                raise
            raise SnapshotError(f"Invalid value for option '{key}': {value!r}")
        setattr(options, key, value)

    return options


# =========================================================================
# FILES
# =========================================================================

def _load_document(filepath: str) -> Any:
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"File not found: {filepath}")

    with open(filepath, "r", encoding="utf-8") as f:
        text = f.read()

    try:
        if filepath.lower().endswith(".json"):
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SnapshotError(f"Could not parse {filepath}: {e}")


def load_graph_file(filepath: str) -> VariableGraph:
    """Load a snapshot from a .json or .yaml/.yml file."""
    return graph_from_dict(_load_document(filepath))


def load_options_file(filepath: str, fmt: ExportFormat = ExportFormat.CSS) -> ExportOptions:
    return options_from_dict(_load_document(filepath), fmt)
