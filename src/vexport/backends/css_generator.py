"""
CSS custom property generator.

Converts a VariableGraph into a stylesheet of custom properties.

Supports two layouts:
    - Single block: every selected collection's default-mode values inside
      one selector (":root" by default)
    - Modes as selectors: one block per mode; non-default modes are scoped
      with [data-theme="<mode>"] and .theme-<mode>

Styles are emitted as custom properties inside the first default-mode
block, or, with StyleOutputMode.CLASSES, as classes after all blocks.
"""

import logging
from typing import List, Optional

from vexport.backends.common import NO_VARIABLES_CSS, comment_block, resolve_variable
from vexport.config import ExportFormat, ExportOptions, StyleOutputMode, default_options_for
from vexport.model import Mode, VariableCollection, VariableGraph
from vexport.naming import to_css_name, variable_css_name
from vexport.styles import style_declarations, style_rules
from vexport.traversal import collection_variables, filter_collections, filtered_variables, iter_modes

logger = logging.getLogger(__name__)

_STYLE_SECTION_TITLES = {
    "paint": "Paint Styles",
    "text": "Text Styles",
    "effect": "Effect Styles",
    "grid": "Grid Styles",
}

# Paint classes: one per property a color can drive
_PAINT_CLASS_PROPERTIES = (("", "color"), ("bg-", "background-color"), ("border-", "border-color"))


def generate_css_header(file_name: str, banner: Optional[str] = None) -> str:
    """File header comment; a custom banner replaces it verbatim."""
    if banner:
        return banner + "\n"
    return comment_block(
        ["Auto-generated CSS Custom Properties", f"Exported from: {file_name}"],
        "/**",
        " * ",
        " */",
    )


def mode_selector(selector: str, collection: VariableCollection, mode: Mode) -> str:
    """Selector for one mode block; the default mode uses the bare selector."""
    if collection.is_default_mode(mode):
        return selector
    slug = to_css_name(mode.name) or mode.mode_id
    return f'{selector}[data-theme="{slug}"], .theme-{slug}'


def _style_lines(graph: VariableGraph, options: ExportOptions, indent: str) -> List[str]:
    lines: List[str] = []
    section = None
    for kind, name, value in style_declarations(graph.styles, options, graph.variables):
        if kind != section:
            lines.append(f"{indent}/* {_STYLE_SECTION_TITLES[kind]} */")
            section = kind
        lines.append(f"{indent}--{name}: {value};")
    return lines


def _style_class_lines(graph: VariableGraph, options: ExportOptions) -> List[str]:
    lines: List[str] = []
    section = None
    for kind, name, props in style_rules(graph.styles, options, graph.variables):
        if kind != section:
            lines.append(f"/* {kind.title()} Style Classes */")
            section = kind
        if kind == "paint":
            for class_prefix, prop in _PAINT_CLASS_PROPERTIES:
                lines.append(f".{class_prefix}{name} {{")
                lines.append(f"  {prop}: {props['color']};")
                lines.append("}")
        else:
            lines.append(f".{name} {{")
            lines.extend(f"  {prop}: {value};" for prop, value in props.items())
            lines.append("}")
        lines.append("")
    return lines


def _collection_lines(
    graph: VariableGraph,
    collection: VariableCollection,
    mode_id: str,
    options: ExportOptions,
    rules,
    indent: str = "  ",
) -> List[str]:
    lines: List[str] = []
    for variable in collection_variables(graph.variables, collection.id, rules, options.prefix):
        value = resolve_variable(variable, mode_id, graph, options, rules)
        if value is None:
            continue
        name = variable_css_name(variable, rules, options.prefix)
        lines.append(f"{indent}--{name}: {value};")
    return lines


def generate_css(graph: VariableGraph, options: Optional[ExportOptions] = None) -> str:
    """
    Generate CSS custom properties for a graph.

    Args:
        graph: Variable snapshot to export
        options: Export options (CSS defaults when omitted)

    Returns:
        Stylesheet text, or the "No variables found" marker comment
    """
    options = options or default_options_for(ExportFormat.CSS)

    if not filtered_variables(graph, options):
        return NO_VARIABLES_CSS

    rules = options.effective_rules()
    selector = options.css_selector
    collections = filter_collections(graph.collections, options.selected_collections)
    has_styles = options.include_styles and not graph.styles.is_empty()
    style_classes = has_styles and options.style_output_mode is StyleOutputMode.CLASSES
    include_styles = has_styles and not style_classes

    lines: List[str] = [generate_css_header(options.file_name, options.header_banner)]

    if options.use_modes_as_selectors:
        styles_added = False

        for collection in collections:
            if options.include_collection_comments:
                lines.append(f"/* Collection: {collection.name} */")

            for mode in iter_modes(collection, all_modes=True):
                if options.include_mode_comments:
                    lines.append(f"/* Mode: {mode.name} */")

                lines.append(f"{mode_selector(selector, collection, mode)} {{")
                lines.extend(_collection_lines(graph, collection, mode.mode_id, options, rules))

                # Styles have no modes; they go into the first default-mode block
                if include_styles and not styles_added and collection.is_default_mode(mode):
                    lines.extend(_style_lines(graph, options, "  "))
                    styles_added = True

                lines.append("}")
                lines.append("")

        if include_styles and not styles_added:
            lines.append(f"{selector} {{")
            lines.extend(_style_lines(graph, options, "  "))
            lines.append("}")
    else:
        lines.append(f"{selector} {{")

        for index, collection in enumerate(collections):
            if options.include_collection_comments:
                lines.append(f"  /* {collection.name} */")

            for mode in iter_modes(collection):
                lines.extend(_collection_lines(graph, collection, mode.mode_id, options, rules))

            if index < len(collections) - 1:
                lines.append("")

        if include_styles:
            lines.append("")
            lines.extend(_style_lines(graph, options, "  "))

        lines.append("}")

    if style_classes:
        if lines[-1]:
            lines.append("")
        lines.extend(_style_class_lines(graph, options))

    logger.debug("Generated CSS for %d collection(s)", len(collections))
    return "\n".join(lines).rstrip("\n") + "\n"


def save_css_file(graph: VariableGraph, filename: str, options: Optional[ExportOptions] = None) -> None:
    """
    Generate CSS and save to file.

    Args:
        graph: Variable snapshot to export
        filename: Output file path (.css extension recommended)
        options: Export options
    """
    css = generate_css(graph, options)
    with open(filename, "w", encoding="utf-8") as f:
        f.write(css)


__all__ = ["generate_css", "generate_css_header", "mode_selector", "save_css_file"]
