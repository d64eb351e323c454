"""Output generators (CSS, SCSS, DTCG JSON, TypeScript)."""

from typing import Callable, Dict, Optional

from vexport.config import ExportFormat, ExportOptions, default_options_for
from vexport.model import VariableGraph

from .css_generator import generate_css, save_css_file
from .json_generator import generate_json, save_json_file
from .scss_generator import convert_var_to_scss, generate_scss, save_scss_file
from .typescript_generator import generate_typescript, save_typescript_file

GENERATORS: Dict[ExportFormat, Callable[[VariableGraph, Optional[ExportOptions]], str]] = {
    ExportFormat.CSS: generate_css,
    ExportFormat.SCSS: generate_scss,
    ExportFormat.JSON: generate_json,
    ExportFormat.TYPESCRIPT: generate_typescript,
}

FILE_EXTENSIONS = {
    ExportFormat.CSS: ".css",
    ExportFormat.SCSS: ".scss",
    ExportFormat.JSON: ".json",
    ExportFormat.TYPESCRIPT: ".d.ts",
}


def export(graph: VariableGraph, fmt, options: Optional[ExportOptions] = None) -> str:
    """
    Generate one output format.

    Args:
        graph: Variable snapshot
        fmt: ExportFormat or its string value ("css", "scss", "json", "typescript")
        options: Export options; the format's defaults when omitted

    Raises:
        ValueError: if fmt is not a known format
    """
    fmt = ExportFormat(fmt)
    return GENERATORS[fmt](graph, options or default_options_for(fmt))


def save_export_file(graph: VariableGraph, fmt, filename: str, options: Optional[ExportOptions] = None) -> None:
    with open(filename, "w", encoding="utf-8") as f:
        f.write(export(graph, fmt, options))


__all__ = [
    "FILE_EXTENSIONS",
    "GENERATORS",
    "convert_var_to_scss",
    "export",
    "generate_css",
    "generate_json",
    "generate_scss",
    "generate_typescript",
    "save_css_file",
    "save_export_file",
    "save_json_file",
    "save_scss_file",
    "save_typescript_file",
]
