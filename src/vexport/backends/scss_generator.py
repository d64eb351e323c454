"""
SCSS variable generator.

Emits flat `$name: value;` declarations (default mode only, no selector
wrapping). Values come from the shared resolver, which speaks CSS; any
var(--name[, fallback]) reference is rewritten into a `$name` reference.

Styles become `$name` variables, or `@mixin name` blocks with
StyleOutputMode.CLASSES. A paint mixin takes the property to set:

    @mixin brand-primary($property: color) {
      #{$property}: $color-blue;
    }
"""

import logging
from typing import List, Optional

from vexport.backends.common import NO_VARIABLES_LINE_COMMENT, comment_block, resolve_variable
from vexport.config import ExportFormat, ExportOptions, StyleOutputMode, default_options_for
from vexport.model import VariableGraph
from vexport.naming import variable_css_name
from vexport.styles import style_declarations, style_rules
from vexport.traversal import collection_variables, filter_collections, filtered_variables, iter_modes

logger = logging.getLogger(__name__)

_VAR_OPENER = "var(--"
_IDENTIFIER_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_")


def convert_var_to_scss(value: str) -> str:
    """
    Rewrite CSS var() references into SCSS variables.

    Scans left to right; on "var(--" it captures the identifier, then
    skips to the matching close paren while tracking depth, so fallbacks
    with nested calls are discarded whole:

        var(--foo)                 -> $foo
        var(--foo, rgb(0,0,0))     -> $foo
        var(--foo, var(--bar))     -> $foo
        calc(var(--a) * 2)         -> calc($a * 2)
    """
    result: List[str] = []
    i = 0
    n = len(value)

    while i < n:
        if value.startswith(_VAR_OPENER, i):
            j = i + len(_VAR_OPENER)
            while j < n and value[j] in _IDENTIFIER_CHARS:
                j += 1
            name = value[i + len(_VAR_OPENER):j]

            depth = 1
            while j < n and depth > 0:
                if value[j] == "(":
                    depth += 1
                elif value[j] == ")":
                    depth -= 1
                j += 1

            result.append(f"${name}")
            i = j
        else:
            result.append(value[i])
            i += 1

    return "".join(result)


def _style_mixin_lines(graph: VariableGraph, options: ExportOptions) -> List[str]:
    lines: List[str] = []
    section = None
    for kind, name, props in style_rules(graph.styles, options, graph.variables):
        if kind != section:
            lines.append(f"// {kind.title()} Style Mixins")
            section = kind
        if kind == "paint":
            lines.append(f"@mixin {name}($property: color) {{")
            lines.append(f"  #{{$property}}: {convert_var_to_scss(props['color'])};")
        else:
            lines.append(f"@mixin {name} {{")
            lines.extend(f"  {prop}: {convert_var_to_scss(value)};" for prop, value in props.items())
        lines.append("}")
        lines.append("")
    return lines


def generate_scss_header(file_name: str, banner: Optional[str] = None) -> str:
    if banner:
        return banner + "\n"
    return comment_block(
        ["Auto-generated SCSS Variables", f"Exported from: {file_name}"],
        "//",
        "// ",
        "//",
    )


def generate_scss(graph: VariableGraph, options: Optional[ExportOptions] = None) -> str:
    """
    Generate SCSS variables for a graph.

    Returns:
        SCSS text, or the "No variables found" marker comment
    """
    options = options or default_options_for(ExportFormat.SCSS)

    if not filtered_variables(graph, options):
        return NO_VARIABLES_LINE_COMMENT

    rules = options.effective_rules()
    collections = filter_collections(graph.collections, options.selected_collections)

    lines: List[str] = [generate_scss_header(options.file_name, options.header_banner)]

    for index, collection in enumerate(collections):
        if options.include_collection_comments:
            lines.append(f"// Collection: {collection.name}")

        variables = collection_variables(graph.variables, collection.id, rules, options.prefix)
        for mode in iter_modes(collection):
            for variable in variables:
                value = resolve_variable(variable, mode.mode_id, graph, options, rules)
                if value is None:
                    continue
                name = variable_css_name(variable, rules, options.prefix)
                lines.append(f"${name}: {convert_var_to_scss(value)};")

        if index < len(collections) - 1:
            lines.append("")

    if options.include_styles and not graph.styles.is_empty():
        lines.append("")
        if options.style_output_mode is StyleOutputMode.CLASSES:
            lines.extend(_style_mixin_lines(graph, options))
        else:
            lines.append("// Style Variables")
            for _, name, value in style_declarations(graph.styles, options, graph.variables):
                lines.append(f"${name}: {convert_var_to_scss(value)};")

    logger.debug("Generated SCSS for %d collection(s)", len(collections))
    return "\n".join(lines).rstrip("\n") + "\n"


def save_scss_file(graph: VariableGraph, filename: str, options: Optional[ExportOptions] = None) -> None:
    scss = generate_scss(graph, options)
    with open(filename, "w", encoding="utf-8") as f:
        f.write(scss)


__all__ = ["convert_var_to_scss", "generate_scss", "generate_scss_header", "save_scss_file"]
