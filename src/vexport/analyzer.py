"""
Graph Analyzer: early diagnostics of a VariableGraph snapshot.

The export engine never raises on bad data; it degrades to inline markers
instead. This module finds the same problems up front:
    - Variables pointing at unknown collections
    - Values stored under modes their collection does not define
    - Variables with no value for their collection's default mode
    - Aliases to unknown variables, and alias cycles
    - Styles bound to unknown variables
    - Values whose shape does not match the declared type
    - Output names produced by more than one variable
    - Invalid name format rules

IMPORTANT: This is read-only. It does NOT modify the graph.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from vexport.config import CIRCULAR_REFERENCE, UNRESOLVED_ALIAS, ExportOptions
from vexport.model import Color, ResolvedType, Variable, VariableAlias, VariableGraph
from vexport.naming import RuleIssue, validate_rules, variable_css_name
from vexport.resolver import follow_alias, is_finite_number
from vexport.traversal import filtered_variables


def _find_cycles_dfs(graph: Dict[str, List[str]], start: str, visited: Set[str],
                     rec_stack: Set[str], path: List[str]) -> Optional[List[str]]:
    """DFS to find an alias cycle reachable from a variable id."""
    visited.add(start)
    rec_stack.add(start)
    path.append(start)

    for neighbor in graph.get(start, []):
        if neighbor not in visited:
            cycle = _find_cycles_dfs(graph, neighbor, visited, rec_stack, path[:])
            if cycle:
                return cycle
        elif neighbor in rec_stack:
            cycle_start_idx = path.index(neighbor)
            return path[cycle_start_idx:] + [neighbor]

    rec_stack.remove(start)
    return None


def _matches_type(value: Any, resolved_type: ResolvedType) -> bool:
    if resolved_type is ResolvedType.COLOR:
        return isinstance(value, Color)
    if resolved_type is ResolvedType.FLOAT:
        return is_finite_number(value)
    if resolved_type is ResolvedType.STRING:
        return isinstance(value, str)
    if resolved_type is ResolvedType.BOOLEAN:
        return isinstance(value, bool)
    return False


@dataclass
class GraphReport:
    """Diagnostics for one snapshot; lists hold variable (or style) names."""

    total_collections: int = 0
    total_variables: int = 0
    total_aliases: int = 0

    unknown_collections: List[str] = field(default_factory=list)
    unknown_modes: List[Tuple[str, str]] = field(default_factory=list)
    missing_default_values: List[str] = field(default_factory=list)
    unresolved_aliases: List[Tuple[str, str]] = field(default_factory=list)
    dangling_style_bindings: List[Tuple[str, str]] = field(default_factory=list)
    alias_cycles: List[List[str]] = field(default_factory=list)
    type_mismatches: List[Tuple[str, str]] = field(default_factory=list)
    duplicate_names: Dict[str, List[str]] = field(default_factory=dict)
    rule_issues: List[RuleIssue] = field(default_factory=list)

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)

    @property
    def is_clean(self) -> bool:
        return not self.warnings


def _style_bindings(graph: VariableGraph) -> List[Tuple[str, str]]:
    """(style name, variable id) for every variable binding a style carries."""
    bindings = [(s.name, s.bound_variable_id) for s in graph.styles.paint if s.bound_variable_id]
    for style in graph.styles.effect:
        for effect in style.effects:
            bindings.extend((style.name, variable_id) for variable_id in effect.bound_variables.values())
    return bindings


def _alias_edges(variables: List[Variable]) -> Dict[str, List[str]]:
    edges: Dict[str, List[str]] = defaultdict(list)
    for variable in variables:
        for value in variable.values_by_mode.values():
            if isinstance(value, VariableAlias) and value.target_id not in edges[variable.id]:
                edges[variable.id].append(value.target_id)
    return edges


def analyze_graph(graph: VariableGraph, options: Optional[ExportOptions] = None) -> GraphReport:
    """
    Perform a full diagnostic pass over a snapshot.

    Name collisions and rule issues are computed with the given options
    (default options when omitted). Returns a GraphReport with findings
    and human-readable warnings.
    """
    options = options or ExportOptions()
    report = GraphReport(
        total_collections=len(graph.collections),
        total_variables=len(graph.variables),
    )

    by_id = {v.id: v for v in graph.variables}
    collections = {c.id: c for c in graph.collections}

    # =========================================================================
    # 1. STRUCTURE
    # =========================================================================

    for variable in graph.variables:
        collection = collections.get(variable.collection_id)
        if collection is None:
            report.unknown_collections.append(variable.name)
            continue

        mode_ids = {m.mode_id for m in collection.modes}
        for mode_id in variable.values_by_mode:
            if mode_id not in mode_ids:
                report.unknown_modes.append((variable.name, mode_id))

        if collection.default_mode_id not in variable.values_by_mode:
            report.missing_default_values.append(variable.name)

    # =========================================================================
    # 2. VALUES AND ALIASES
    # =========================================================================

    for variable in graph.variables:
        for mode_id, value in variable.values_by_mode.items():
            if isinstance(value, VariableAlias):
                report.total_aliases += 1
                target = by_id.get(value.target_id)
                if target is None:
                    report.unresolved_aliases.append((variable.name, value.target_id))
                elif target.resolved_type is not variable.resolved_type:
                    report.type_mismatches.append((
                        variable.name,
                        f"aliases {target.name} of type {target.resolved_type.value}",
                    ))
                else:
                    # Direct targets check their own literals; only longer chains are followed
                    last, terminal = follow_alias(value, mode_id, graph.variables, visited={variable.id})
                    if (
                        last is not None
                        and last is not target
                        and terminal not in (CIRCULAR_REFERENCE, UNRESOLVED_ALIAS)
                        and not _matches_type(terminal, variable.resolved_type)
                    ):
                        report.type_mismatches.append((
                            variable.name,
                            f"alias chain ends at {last.name} holding {type(terminal).__name__}, "
                            f"expected {variable.resolved_type.value}",
                        ))
            elif not _matches_type(value, variable.resolved_type):
                report.type_mismatches.append((
                    variable.name,
                    f"mode {mode_id} holds {type(value).__name__}, expected {variable.resolved_type.value}",
                ))

    for style_name, variable_id in _style_bindings(graph):
        if variable_id not in by_id and (style_name, variable_id) not in report.dangling_style_bindings:
            report.dangling_style_bindings.append((style_name, variable_id))

    edges = _alias_edges(graph.variables)
    visited: Set[str] = set()
    for variable_id in sorted(edges):
        if variable_id not in visited:
            cycle = _find_cycles_dfs(edges, variable_id, visited, set(), [])
            if cycle:
                report.alias_cycles.append([by_id[i].name if i in by_id else i for i in cycle])

    # =========================================================================
    # 3. NAMING
    # =========================================================================

    rules = options.effective_rules()
    names: Dict[str, List[str]] = defaultdict(list)
    for variable in filtered_variables(graph, options):
        names[variable_css_name(variable, rules, options.prefix)].append(variable.name)
    report.duplicate_names = {name: paths for name, paths in sorted(names.items()) if len(paths) > 1}

    report.rule_issues = validate_rules(options.name_format_rules)

    # =========================================================================
    # 4. WARNING FLAGS
    # =========================================================================

    if report.unknown_collections:
        report.add_warning(
            f"Variables in unknown collections: {', '.join(sorted(report.unknown_collections))}"
        )

    for name, mode_id in report.unknown_modes:
        report.add_warning(f"{name}: value for unknown mode {mode_id}")

    if report.missing_default_values:
        report.add_warning(
            f"Missing default-mode values: {', '.join(sorted(report.missing_default_values))}"
        )

    for name, target_id in report.unresolved_aliases:
        report.add_warning(f"{name}: alias to unknown variable {target_id}")

    for style_name, variable_id in report.dangling_style_bindings:
        report.add_warning(f"Style {style_name}: bound to unknown variable {variable_id}")

    for cycle in report.alias_cycles:
        report.add_warning(f"Alias cycle detected: {' -> '.join(cycle)}")

    for name, detail in report.type_mismatches:
        report.add_warning(f"{name}: type mismatch ({detail})")

    for css_name, paths in report.duplicate_names.items():
        report.add_warning(f"Output name --{css_name} produced by: {', '.join(paths)}")

    for issue in report.rule_issues:
        report.add_warning(f"Rule {issue.index} ({issue.pattern!r}): {issue.message}")

    return report


def format_report(report: GraphReport) -> str:
    """Plain-text rendering used by the command line."""
    lines = [
        f"Collections: {report.total_collections}",
        f"Variables:   {report.total_variables}",
        f"Aliases:     {report.total_aliases}",
    ]
    if report.is_clean:
        lines.append("No problems found.")
    else:
        lines.append(f"Warnings ({len(report.warnings)}):")
        lines.extend(f"  - {w}" for w in report.warnings)
    return "\n".join(lines)
