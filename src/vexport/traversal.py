"""
Graph traversal helpers shared by every emitter.

Narrow the snapshot to the selected collections and put variables in a
deterministic order, so repeated exports of unchanged input are
byte-identical.
"""

from typing import Iterator, List, Optional, Sequence

from vexport.config import ExportOptions
from vexport.model import Mode, Variable, VariableCollection, VariableGraph
from vexport.naming import NameFormatRule, variable_css_name


def filter_collections(
    collections: Sequence[VariableCollection],
    selected_ids: Optional[Sequence[str]] = None,
) -> List[VariableCollection]:
    """
    Collections to export, in their original order.

    An empty or missing selection means every collection.
    """
    if selected_ids:
        wanted = set(selected_ids)
        return [c for c in collections if c.id in wanted]
    return list(collections)


def collection_variables(
    variables: Sequence[Variable],
    collection_id: str,
    rules: Optional[Sequence[NameFormatRule]] = None,
    prefix: str = "",
) -> List[Variable]:
    """
    Variables of one collection, sorted by their formatted name.

    Ties (two paths formatting to the same name) fall back to the raw
    path and then the id.
    """
    owned = [v for v in variables if v.collection_id == collection_id]

    def sort_key(variable: Variable):
        formatted = variable_css_name(variable, rules, prefix)
        return (formatted.lower(), formatted, variable.name, variable.id)

    return sorted(owned, key=sort_key)


def iter_modes(collection: VariableCollection, all_modes: bool = False) -> Iterator[Mode]:
    """
    Modes to emit for a collection.

    all_modes=False yields only the default mode (falling back to the
    first mode when the default id is not in the mode list).
    """
    if all_modes:
        yield from collection.modes
        return

    default = collection.default_mode
    if default is not None:
        yield default
    elif collection.modes:
        yield collection.modes[0]


def filtered_variables(graph: VariableGraph, options: ExportOptions) -> List[Variable]:
    """Every variable that belongs to a selected collection."""
    selected = {c.id for c in filter_collections(graph.collections, options.selected_collections)}
    return [v for v in graph.variables if v.collection_id in selected]
