"""Shared fixtures for the generator tests."""

import pytest
from vexport.model import (
    Color,
    Mode,
    ResolvedType,
    Variable,
    VariableAlias,
    VariableCollection,
    VariableGraph,
)


@pytest.fixture
def theme_graph() -> VariableGraph:
    """
    Two collections:

        Colors  Light (default) / Dark   color/red literal, color/brand -> color/red
        Size    Base                     space/md = 16 with "unit: rem"
    """
    colors = VariableCollection(
        id="c-colors",
        name="Colors",
        modes=[Mode("m-light", "Light"), Mode("m-dark", "Dark")],
        default_mode_id="m-light",
    )
    size = VariableCollection(
        id="c-size",
        name="Size",
        modes=[Mode("m-base", "Base")],
        default_mode_id="m-base",
    )
    variables = [
        Variable(
            id="v-red",
            name="color/red",
            resolved_type=ResolvedType.COLOR,
            collection_id="c-colors",
            values_by_mode={"m-light": Color(1, 0, 0), "m-dark": Color(0.5, 0, 0)},
        ),
        Variable(
            id="v-brand",
            name="color/brand",
            resolved_type=ResolvedType.COLOR,
            collection_id="c-colors",
            values_by_mode={"m-light": VariableAlias("v-red"), "m-dark": VariableAlias("v-red")},
        ),
        Variable(
            id="v-space",
            name="space/md",
            resolved_type=ResolvedType.FLOAT,
            collection_id="c-size",
            values_by_mode={"m-base": 16},
            description="unit: rem",
        ),
    ]
    return VariableGraph(collections=[colors, size], variables=variables)


@pytest.fixture
def empty_graph() -> VariableGraph:
    collection = VariableCollection(id="c1", name="Empty", modes=[Mode("m1", "Default")], default_mode_id="m1")
    return VariableGraph(collections=[collection], variables=[])
