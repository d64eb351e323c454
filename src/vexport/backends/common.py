"""Helpers shared by the CSS-family generators (CSS, SCSS, TypeScript)."""

from typing import List, Optional, Sequence

from vexport.config import ExportOptions
from vexport.description import effective_config
from vexport.model import Variable, VariableGraph
from vexport.naming import NameFormatRule
from vexport.resolver import resolve_value

NO_VARIABLES_CSS = "/* No variables found in this file */"
NO_VARIABLES_LINE_COMMENT = "// No variables found in this file"


def resolve_variable(
    variable: Variable,
    mode_id: str,
    graph: VariableGraph,
    options: ExportOptions,
    rules: Sequence[NameFormatRule],
) -> Optional[str]:
    """
    Resolved text for one variable/mode pair.

    Returns None when the variable has no value for the mode, so callers
    can skip the declaration instead of emitting an empty one.
    """
    if mode_id not in variable.values_by_mode:
        return None

    config = effective_config(variable.description, options.base_config())
    return resolve_value(
        variable.values_by_mode[mode_id],
        mode_id,
        graph.variables,
        variable.resolved_type,
        config,
        prefix=options.prefix,
        rules=rules,
    )


def comment_block(lines: List[str], opener: str, prefix: str, closer: Optional[str]) -> str:
    """Wrap header lines in a comment block, e.g. /** ... */ or // ... //."""
    block = [opener] + [f"{prefix}{line}" if line else prefix.rstrip() for line in lines]
    if closer is not None:
        block.append(closer)
    block.append("")
    return "\n".join(block)
