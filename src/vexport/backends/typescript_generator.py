"""
TypeScript declaration generator.

Emits a string-literal union of every exported custom property name and
augments csstype's Properties so the names can be used as style keys:

    export type CSSVariableName =
      | "--color-primary"
      | "--spacing-sm"
    ;

    declare module 'csstype' {
      interface Properties {
        [key: CSSVariableName]: string | number;
      }
    }

Names only; no value is resolved. Names go through the same rules as the
CSS output so the two files always agree.
"""

import logging
from typing import List, Optional

from vexport.backends.common import NO_VARIABLES_LINE_COMMENT, comment_block
from vexport.config import ExportFormat, ExportOptions, StyleOutputMode, default_options_for
from vexport.model import VariableGraph
from vexport.naming import variable_css_name
from vexport.styles import style_declarations
from vexport.traversal import collection_variables, filter_collections, filtered_variables

logger = logging.getLogger(__name__)

UNION_TYPE_NAME = "CSSVariableName"

CSSTYPE_AUGMENTATION = [
    "declare module 'csstype' {",
    "  interface Properties {",
    f"    [key: {UNION_TYPE_NAME}]: string | number;",
    "  }",
    "}",
]


def generate_typescript_header(file_name: str, banner: Optional[str] = None) -> str:
    if banner:
        return banner + "\n"
    return comment_block(
        ["Auto-generated TypeScript types for CSS Custom Properties", f"Exported from: {file_name}"],
        "/**",
        " * ",
        " */",
    )


def generate_typescript(graph: VariableGraph, options: Optional[ExportOptions] = None) -> str:
    """
    Generate the TypeScript declaration file for a graph.

    Returns:
        Declaration text, or the "No variables found" marker comment
    """
    options = options or default_options_for(ExportFormat.TYPESCRIPT)

    if not filtered_variables(graph, options):
        return NO_VARIABLES_LINE_COMMENT

    rules = options.effective_rules()
    collections = filter_collections(graph.collections, options.selected_collections)

    members: List[str] = []
    for collection in collections:
        variables = collection_variables(graph.variables, collection.id, rules, options.prefix)
        if options.include_collection_comments and variables:
            members.append(f"  // {collection.name}")
        for variable in variables:
            members.append(f'  | "--{variable_css_name(variable, rules, options.prefix)}"')

    # Style classes are not custom properties
    if (
        options.include_styles
        and options.style_output_mode is StyleOutputMode.VARIABLES
        and not graph.styles.is_empty()
    ):
        for _, name, _ in style_declarations(graph.styles, options, graph.variables):
            members.append(f'  | "--{name}"')

    lines = [generate_typescript_header(options.file_name, options.header_banner)]
    lines.append(f"export type {UNION_TYPE_NAME} =")
    lines.extend(members)
    lines.append(";")
    lines.append("")
    lines.extend(CSSTYPE_AUGMENTATION)

    logger.debug("Generated TypeScript union with %d member(s)", len(members))
    return "\n".join(lines) + "\n"


def save_typescript_file(graph: VariableGraph, filename: str, options: Optional[ExportOptions] = None) -> None:
    with open(filename, "w", encoding="utf-8") as f:
        f.write(generate_typescript(graph, options))


__all__ = ["generate_typescript", "generate_typescript_header", "save_typescript_file"]
