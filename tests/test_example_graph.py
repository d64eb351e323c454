"""
Test the example design-system snapshot end to end.

Exports it in every format and checks the values that exercise
description directives, aliases and modes.
"""

import json

from vexport.backends import export
from vexport.config import ExportOptions
from vexport.examples import build_example_design_system


def test_example_structure():
    graph = build_example_design_system()

    assert [c.name for c in graph.collections] == ["Primitives", "Theme", "Tokens"]
    assert graph.get_collection("c-theme").default_mode.name == "Light"
    assert len(graph.styles.paint) == 2
    assert build_example_design_system(include_styles=False).styles.is_empty()


def test_example_css_values():
    css = export(build_example_design_system(), "css")

    assert "--color-background: var(--color-neutral-0);" in css
    assert "--color-overlay: rgba(0, 0, 0, 0.500);" in css
    assert "--spacing-sm: 0.5rem;" in css
    assert "--spacing-lg: 24px;" in css
    assert "--duration-fast: 150ms;" in css
    assert "--opacity-disabled: 0.4;" in css
    assert '--font-family-body: "Inter";' in css
    assert "--feature-dark-mode: 1;" in css


def test_example_css_dark_mode():
    css = export(build_example_design_system(), "css", ExportOptions(use_modes_as_selectors=True))

    dark = css[css.index('[data-theme="dark"]'):]
    assert "--color-background: var(--color-neutral-900);" in dark
    assert "--color-overlay: rgba(255, 255, 255, 0.500);" in dark


def test_example_scss():
    scss = export(build_example_design_system(), "scss")
    assert "$color-accent: $color-blue-500;" in scss


def test_example_json():
    document = json.loads(export(build_example_design_system(), "json"))
    assert document["Theme"]["color"]["accent"]["$value"] == {
        "Light": "{Primitives.color.blue.500}",
        "Dark": "{Primitives.color.blue.500}",
    }
    assert document["Tokens"]["duration"]["fast"]["$extensions"] == {"com.vexport": {"unit": "ms"}}


def test_example_typescript_with_styles():
    options = ExportOptions(include_styles=True, include_collection_comments=False)
    ts = export(build_example_design_system(), "typescript", options)
    assert '  | "--brand-primary"\n' in ts
    assert '  | "--heading-h1-font-size"\n' in ts


def test_example_effect_and_grid_styles():
    css = export(build_example_design_system(), "css", ExportOptions(include_styles=True))
    assert "--elevation-card: 0px 4px 12px var(--spacing-sm) rgba(0, 0, 0, 0.250);" in css
    assert "--elevation-glass: blur(20px);" in css
    assert "--layout-desktop: repeat(12, 64px);" in css
