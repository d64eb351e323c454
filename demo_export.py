#!/usr/bin/env python3
"""
Demo: Export the example design system in every format.

Prints the diagnostics report, then each output, and saves the files.
"""

from vexport.analyzer import analyze_graph, format_report
from vexport.backends import FILE_EXTENSIONS, export, save_export_file
from vexport.config import ExportFormat, default_options_for
from vexport.examples import build_example_design_system
from vexport.naming import NameFormatRule


def main():
    graph = build_example_design_system()

    print("=" * 80)
    print("EXPORT DEMO")
    print("=" * 80)
    print(format_report(analyze_graph(graph)))

    for fmt in ExportFormat:
        options = default_options_for(fmt)
        options.file_name = "Example Design System"
        options.include_styles = True
        options.use_modes_as_selectors = fmt is ExportFormat.CSS
        options.name_format_rules = [NameFormatRule("color/neutral/*", "gray-$1")]

        print(f"\n{fmt.value.upper()}:")
        print("-" * 80)
        print(export(graph, fmt, options))

        filename = f"tokens{FILE_EXTENSIONS[fmt]}"
        save_export_file(graph, fmt, filename, options)
        print(f"Saved to: {filename}")

    print("=" * 80)


if __name__ == "__main__":
    main()
