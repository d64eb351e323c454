"""
vexport: Variable Resolution & Multi-Format Export Engine

Turns a design tool's variable graph (collections, modes, typed variables
and alias references) into CSS custom properties, SCSS variables, a
DTCG-style JSON token tree and TypeScript declarations.

ARCHITECTURAL GUARANTEE:
------------------------
The engine is a pure transformation:

    (VariableGraph, ExportOptions) -> text

It never:
    - Talks to the host's live variable API
    - Performs network or file I/O (outside cli/serialization helpers)
    - Mutates the graph it is given
    - Raises on malformed domain data

Every defect in the input surfaces as an inline marker comment in the
generated output so the result is always well-formed.
"""

__version__ = "0.1.0"
