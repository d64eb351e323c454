"""
Tests for TypeScript declaration generation.
"""

from vexport.backends.typescript_generator import generate_typescript, generate_typescript_header
from vexport.config import ExportFormat, ExportOptions, StyleOutputMode, default_options_for
from vexport.model import EffectStyle, GridStyle, PaintStyle, StyleCollection
from vexport.naming import NameFormatRule


EXPECTED_TS = (
    "/**\n"
    " * Auto-generated TypeScript types for CSS Custom Properties\n"
    " * Exported from: Untitled\n"
    " */\n"
    "\n"
    "export type CSSVariableName =\n"
    '  | "--color-brand"\n'
    '  | "--color-red"\n'
    '  | "--space-md"\n'
    ";\n"
    "\n"
    "declare module 'csstype' {\n"
    "  interface Properties {\n"
    "    [key: CSSVariableName]: string | number;\n"
    "  }\n"
    "}\n"
)


class TestTypeScript:
    """Test the union type and csstype augmentation."""

    def test_exact_output(self, theme_graph):
        assert generate_typescript(theme_graph) == EXPECTED_TS

    def test_header(self):
        assert " * Exported from: Tokens\n" in generate_typescript_header("Tokens")

    def test_names_follow_rules(self, theme_graph):
        options = default_options_for(ExportFormat.TYPESCRIPT)
        options.name_format_rules = [NameFormatRule("color/*", "brand-$1")]
        ts = generate_typescript(theme_graph, options)
        assert '  | "--brand-red"\n' in ts
        assert "--color-red" not in ts

    def test_prefix(self, theme_graph):
        options = default_options_for(ExportFormat.TYPESCRIPT)
        options.prefix = "ds"
        assert '  | "--ds-space-md"\n' in generate_typescript(theme_graph, options)

    def test_collection_comments_when_enabled(self, theme_graph):
        ts = generate_typescript(theme_graph, ExportOptions(include_collection_comments=True))
        assert "  // Colors\n" in ts

    def test_styles(self, theme_graph):
        theme_graph.styles = StyleCollection(paint=[PaintStyle(id="p1", name="Brand/Red", bound_variable_id="v-red")])
        options = default_options_for(ExportFormat.TYPESCRIPT)
        options.include_styles = True
        assert '  | "--brand-red"\n;' in generate_typescript(theme_graph, options)

    def test_every_style_kind_is_listed(self, theme_graph):
        theme_graph.styles = StyleCollection(
            effect=[EffectStyle(id="e1", name="Elevation/Card")],
            grid=[GridStyle(id="g1", name="Layout/Desktop")],
        )
        options = default_options_for(ExportFormat.TYPESCRIPT)
        options.include_styles = True
        ts = generate_typescript(theme_graph, options)
        assert '  | "--elevation-card"\n  | "--layout-desktop"\n;' in ts

    def test_style_classes_are_not_listed(self, theme_graph):
        theme_graph.styles = StyleCollection(paint=[PaintStyle(id="p1", name="Brand/Red", bound_variable_id="v-red")])
        options = default_options_for(ExportFormat.TYPESCRIPT)
        options.include_styles = True
        options.style_output_mode = StyleOutputMode.CLASSES
        assert "brand-red" not in generate_typescript(theme_graph, options)

    def test_no_values_resolved(self, theme_graph):
        assert "#ff0000" not in generate_typescript(theme_graph)

    def test_empty(self, empty_graph):
        assert generate_typescript(empty_graph) == "// No variables found in this file"
