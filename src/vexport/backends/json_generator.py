"""
DTCG-style JSON token tree generator.

Builds a nested object keyed by collection name, then by each "/" path
segment. Leaves are design tokens:

    {
      "$type": "color",
      "$value": "#ff0000",                      # or {"Light": ..., "Dark": ...}
      "$description": "...",                    # when the variable has one
      "$extensions": {"com.vexport": {"unit": "rem"}}   # non-px units only
    }

Aliases become brace references to the target's tree position:
"{Primitives.color.red}".
"""

import json
import logging
from typing import Any, Dict, List, Optional

from vexport.config import CIRCULAR_REFERENCE, UNRESOLVED_ALIAS, ExportFormat, ExportOptions, Unit, default_options_for
from vexport.description import parse_description
from vexport.formatters import rgb_to_hex
from vexport.model import Color, ResolvedType, Variable, VariableAlias, VariableCollection, VariableGraph
from vexport.naming import apply_casing
from vexport.resolver import coerce_to_string, is_finite_number
from vexport.styles import (
    resolve_effect_value,
    resolve_grid_value,
    resolve_paint_value,
    resolve_text_properties,
    style_config,
)
from vexport.traversal import collection_variables, filter_collections, filtered_variables

logger = logging.getLogger(__name__)

EXTENSION_NAMESPACE = "com.vexport"
NO_VARIABLES_JSON = json.dumps({"$description": "No variables found in this file"}, indent=2)

DTCG_TYPES = {
    ResolvedType.COLOR: "color",
    ResolvedType.FLOAT: "number",
    ResolvedType.STRING: "string",
    ResolvedType.BOOLEAN: "boolean",
}


def alias_reference(alias: VariableAlias, graph: VariableGraph, owner_id: Optional[str] = None) -> str:
    """Brace path of an alias target, or an inline marker."""
    if owner_id is not None and alias.target_id == owner_id:
        return CIRCULAR_REFERENCE

    target = graph.get_variable(alias.target_id)
    if target is None:
        return UNRESOLVED_ALIAS

    collection = graph.get_collection(target.collection_id)
    collection_name = collection.name if collection else "Unknown"
    return "{" + ".".join([collection_name] + target.path) + "}"


def format_raw_value(value: Any, variable: Variable, graph: VariableGraph) -> Any:
    """JSON-native value for one stored value (colors as hex, aliases as references)."""
    if isinstance(value, VariableAlias):
        return alias_reference(value, graph, variable.id)

    resolved_type = variable.resolved_type
    if resolved_type is ResolvedType.COLOR and isinstance(value, Color):
        return rgb_to_hex(value)
    if resolved_type is ResolvedType.FLOAT and is_finite_number(value):
        return value
    if resolved_type is ResolvedType.STRING and isinstance(value, str):
        return value
    if resolved_type is ResolvedType.BOOLEAN and isinstance(value, bool):
        return value
    return coerce_to_string(value)


def _insert(tree: Dict[str, Any], path: List[str], token: Dict[str, Any]) -> None:
    current = tree
    for part in path[:-1]:
        node = current.get(part)
        if not isinstance(node, dict) or "$type" in node:
            if node is not None:
                logger.warning("Token %r is shadowed by a group of the same name", part)
            node = {}
            current[part] = node
        current = node

    leaf = path[-1]
    if isinstance(current.get(leaf), dict) and "$type" not in current[leaf]:
        logger.warning("Group %r is replaced by a token of the same name", leaf)
    current[leaf] = token


def build_token(variable: Variable, collection: VariableCollection, graph: VariableGraph) -> Optional[Dict[str, Any]]:
    """DTCG token for one variable, or None when it has no value to export."""
    if len(collection.modes) > 1:
        value: Any = {
            mode.name: format_raw_value(variable.values_by_mode[mode.mode_id], variable, graph)
            for mode in collection.modes
            if mode.mode_id in variable.values_by_mode
        }
        if not value:
            return None
    else:
        if collection.default_mode_id not in variable.values_by_mode:
            return None
        value = format_raw_value(variable.values_by_mode[collection.default_mode_id], variable, graph)

    token: Dict[str, Any] = {
        "$type": DTCG_TYPES.get(variable.resolved_type, "string"),
        "$value": value,
    }
    if variable.description:
        token["$description"] = variable.description

    unit = parse_description(variable.description).get("unit")
    if unit is not None and unit is not Unit.PX:
        token["$extensions"] = {EXTENSION_NAMESPACE: {"unit": unit.value}}

    return token


def build_token_tree(graph: VariableGraph, options: ExportOptions) -> Dict[str, Any]:
    """Nested token document for the selected collections."""
    rules = options.effective_rules()
    result: Dict[str, Any] = {}

    for collection in filter_collections(graph.collections, options.selected_collections):
        collection_data: Dict[str, Any] = {}
        for variable in collection_variables(graph.variables, collection.id, rules, options.prefix):
            token = build_token(variable, collection, graph)
            if token is None:
                logger.debug("Skipping %s: no value for the exported mode(s)", variable.name)
                continue
            _insert(collection_data, variable.path, token)
        result[collection.name] = collection_data

    if options.include_styles and not graph.styles.is_empty():
        style_tree = build_style_tree(graph, options)
        if style_tree:
            result["$styles"] = style_tree

    return result


def _style_token(style, dtcg_type: str, value: Any) -> Dict[str, Any]:
    token: Dict[str, Any] = {"$type": dtcg_type, "$value": value}
    if style.description:
        token["$description"] = style.description
    return token


def build_style_tree(graph: VariableGraph, options: ExportOptions) -> Dict[str, Any]:
    """$styles group: paint, text, effect and grid sub-trees keyed by style path."""
    styles: Dict[str, Any] = {}
    rules = options.effective_rules()
    prefix = options.prefix
    kinds = set(options.style_types)

    def ordered(items):
        return sorted(items, key=lambda s: (s.name.lower(), s.id))

    if "paint" in kinds and graph.styles.paint:
        paint: Dict[str, Any] = {}
        for style in ordered(graph.styles.paint):
            config = style_config(style.description, options)
            value = resolve_paint_value(style, config, graph.variables, rules, prefix)
            _insert(paint, style.name.split("/"), _style_token(style, "color", value))
        styles["paint"] = paint

    if "text" in kinds and graph.styles.text:
        text: Dict[str, Any] = {}
        for style in ordered(graph.styles.text):
            props = resolve_text_properties(style, style_config(style.description, options))
            value = {apply_casing(prop, "camel"): v for prop, v in props.items()}
            _insert(text, style.name.split("/"), _style_token(style, "typography", value))
        styles["text"] = text

    if "effect" in kinds and graph.styles.effect:
        effect: Dict[str, Any] = {}
        for style in ordered(graph.styles.effect):
            config = style_config(style.description, options)
            value = resolve_effect_value(style, config, graph.variables, rules, prefix)
            _insert(effect, style.name.split("/"), _style_token(style, "shadow", value))
        styles["effect"] = effect

    if "grid" in kinds and graph.styles.grid:
        grid: Dict[str, Any] = {}
        for style in ordered(graph.styles.grid):
            value = resolve_grid_value(style, style_config(style.description, options))
            _insert(grid, style.name.split("/"), _style_token(style, "grid", value))
        styles["grid"] = grid

    return styles


def generate_json(graph: VariableGraph, options: Optional[ExportOptions] = None) -> str:
    """
    Generate the DTCG JSON document for a graph.

    Returns:
        Pretty-printed JSON, or a JSON document whose $description says
        no variables were found
    """
    options = options or default_options_for(ExportFormat.JSON)

    if not filtered_variables(graph, options):
        return NO_VARIABLES_JSON

    document = build_token_tree(graph, options)
    return json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False) + "\n"


def save_json_file(graph: VariableGraph, filename: str, options: Optional[ExportOptions] = None) -> None:
    with open(filename, "w", encoding="utf-8") as f:
        f.write(generate_json(graph, options))


__all__ = [
    "NO_VARIABLES_JSON",
    "alias_reference",
    "build_token",
    "build_token_tree",
    "generate_json",
    "save_json_file",
]
