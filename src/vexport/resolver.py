"""
Value Resolver

Turns one raw stored value (a literal or an alias) into the text that a
CSS-family emitter writes after "--name:".

ARCHITECTURAL RULE:
    resolve_value never raises. Every unexpected shape degrades to either
    a best-effort string or an inline marker comment
    ("/* circular reference */", "/* unresolved alias */") that is valid
    in all target syntaxes and easy to grep for.

Alias resolution is one hop: an alias becomes a reference to the target's
formatted name, the target's own value is never inlined. The depth and
visited parameters are the guard state for callers that walk alias chains
themselves (see follow_alias).
"""

from __future__ import annotations

import logging
import math
from typing import AbstractSet, Any, Optional, Sequence, Tuple

from vexport.config import CIRCULAR_REFERENCE, MAX_ALIAS_DEPTH, UNRESOLVED_ALIAS, TokenConfig
from vexport.formatters import format_color, format_number
from vexport.model import Color, ResolvedType, Variable, VariableAlias
from vexport.naming import NameFormatRule, rules_with_default, variable_css_name

logger = logging.getLogger(__name__)


def find_variable(variables: Sequence[Variable], variable_id: str) -> Optional[Variable]:
    for variable in variables:
        if variable.id == variable_id:
            return variable
    return None


def escape_string(value: str) -> str:
    """Double-quoted literal with backslashes and quotes escaped."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def coerce_to_string(value: Any) -> str:
    """Best-effort text for values whose shape does not match their type."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def is_finite_number(value: Any) -> bool:
    """True for ints of any size and finite floats; bools are not numbers."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def resolve_value(
    value: Any,
    mode_id: str,
    variables: Sequence[Variable],
    resolved_type: ResolvedType,
    config: TokenConfig,
    prefix: str = "",
    depth: int = 0,
    visited: Optional[AbstractSet[str]] = None,
    rules: Optional[Sequence[NameFormatRule]] = None,
) -> str:
    """
    Resolve one variable/mode value to its output text.

    Args:
        value: Raw stored value (literal or VariableAlias)
        mode_id: Mode the value belongs to
        variables: All variables alias targets may be looked up in
        resolved_type: Declared type of the owning variable
        config: Effective TokenConfig of the owning variable
        prefix: Prefix for the computed default naming rule
        depth: Current alias depth
        visited: Variable ids already on the current alias path
        rules: Effective naming rules; defaults to the prefix-derived
            default rule alone

    Returns:
        Literal text, a var(--name) reference, or an inline marker
    """
    if depth > MAX_ALIAS_DEPTH:
        return CIRCULAR_REFERENCE

    if isinstance(value, VariableAlias):
        if visited and value.target_id in visited:
            return CIRCULAR_REFERENCE

        target = find_variable(variables, value.target_id)
        if target is None:
            logger.debug("Alias in mode %s points at unknown variable %s", mode_id, value.target_id)
            return UNRESOLVED_ALIAS

        effective_rules = rules if rules is not None else rules_with_default([], prefix)
        return f"var(--{variable_css_name(target, effective_rules, prefix)})"

    try:
        resolved_type = ResolvedType(resolved_type)
    except ValueError:
        logger.warning("Unknown resolved type %r, coercing value to string", resolved_type)
        return coerce_to_string(value)

    if resolved_type is ResolvedType.COLOR:
        if isinstance(value, Color):
            return format_color(value, config.color_format)
    elif resolved_type is ResolvedType.FLOAT:
        if is_finite_number(value):
            return format_number(value, config)
    elif resolved_type is ResolvedType.STRING:
        if isinstance(value, str):
            return escape_string(value)
    elif resolved_type is ResolvedType.BOOLEAN:
        if isinstance(value, bool):
            return "1" if value else "0"

    logger.debug("Value %r does not match declared type %s", value, resolved_type.value)
    return coerce_to_string(value)


def follow_alias(
    value: Any,
    mode_id: str,
    variables: Sequence[Variable],
    depth: int = 0,
    visited: Optional[AbstractSet[str]] = None,
) -> Tuple[Optional[Variable], Any]:
    """
    Walk an alias chain to its terminal literal.

    Used by diagnostics, never by the emitters. The target's value is read
    for the same mode id first and falls back to the target's only value
    when the chain crosses into a single-mode collection.

    Returns:
        (last variable reached, terminal value). The terminal value is
        CIRCULAR_REFERENCE or UNRESOLVED_ALIAS when the walk stops early.
    """
    visited = frozenset(visited or ())
    current: Optional[Variable] = None

    while isinstance(value, VariableAlias):
        if depth > MAX_ALIAS_DEPTH or value.target_id in visited:
            return current, CIRCULAR_REFERENCE

        target = find_variable(variables, value.target_id)
        if target is None:
            return current, UNRESOLVED_ALIAS

        visited = visited | {target.id}
        current = target
        depth += 1

        if mode_id in target.values_by_mode:
            value = target.values_by_mode[mode_id]
        elif len(target.values_by_mode) == 1:
            value = next(iter(target.values_by_mode.values()))
        else:
            return current, UNRESOLVED_ALIAS

    return current, value
