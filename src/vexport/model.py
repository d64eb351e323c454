"""
Core Variable Graph Objects

Defines the read-only snapshot the export engine consumes.

These are pure data classes representing:
    - Colors (four float components)
    - Aliases (references to another variable by id)
    - Modes and Collections (value variants and their grouping)
    - Variables (typed, per-mode values)
    - Styles (paint, text, effect and grid styles that may ride along with an export)
    - VariableGraph (root container)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about CSS/SCSS/JSON/TypeScript
        - Are never mutated by the engine
        - Are fully serializable (see vexport.serialization)
        - Represent structure, not behavior
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class ResolvedType(Enum):
    """Declared data type of a variable."""

    COLOR = "COLOR"
    FLOAT = "FLOAT"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"


@dataclass(frozen=True)
class Color:
    """
    RGBA color with components logically in [0, 1].

    Values outside the range are tolerated here and clamped by the
    formatters, since the host may hand over slightly out-of-gamut data.
    """

    r: float
    g: float
    b: float
    a: float = 1.0


@dataclass(frozen=True)
class VariableAlias:
    """
    A value that points at another variable instead of storing a literal.

    Properties:
        target_id: Id of the referenced variable

    IMPORTANT:
        This object does NOT validate that the target exists.
        A dangling alias is rendered as an inline marker by the resolver
        and reported by the analyzer.
    """

    target_id: str

    @property
    def kind(self) -> str:
        return "ALIAS"


VariableValue = Union[Color, VariableAlias, float, int, str, bool]


@dataclass
class Mode:
    """A named value variant within a collection (e.g. Light, Dark)."""

    mode_id: str
    name: str


@dataclass
class VariableCollection:
    """
    Groups variables and defines the modes they carry values for.

    Properties:
        id: Stable collection identifier
        name: Display name (used as the JSON root key)
        modes: Ordered list of modes
        default_mode_id: Mode used when only one value is exported

    INVARIANTS:
        - default_mode_id should be one of the mode ids
        - Every variable value map should only use ids from `modes`
    """

    id: str
    name: str
    modes: List[Mode] = field(default_factory=list)
    default_mode_id: str = ""

    def get_mode(self, mode_id: str) -> Optional[Mode]:
        for mode in self.modes:
            if mode.mode_id == mode_id:
                return mode
        return None

    @property
    def default_mode(self) -> Optional[Mode]:
        return self.get_mode(self.default_mode_id)

    def is_default_mode(self, mode: Mode) -> bool:
        return mode.mode_id == self.default_mode_id


@dataclass
class Variable:
    """
    A single design variable.

    Properties:
        id:
            Host identifier, used by aliases
        name:
            Hierarchical path delimited by "/", e.g. "color/brand/primary"
        resolved_type:
            Declared type; decides how literal values are formatted
        collection_id:
            Owning collection
        values_by_mode:
            Mode id -> literal value or VariableAlias
        description:
            Free text; doubles as a small config DSL (see vexport.description)
        code_syntax:
            Explicit per-platform names, e.g. {"WEB": "--brand"}.
            A WEB entry overrides rule-based naming.
    """

    id: str
    name: str
    resolved_type: ResolvedType
    collection_id: str
    values_by_mode: Dict[str, Any] = field(default_factory=dict)
    description: str = ""
    code_syntax: Dict[str, str] = field(default_factory=dict)

    @property
    def path(self) -> List[str]:
        return self.name.split("/")


@dataclass
class PaintStyle:
    """
    A solid paint style.

    Properties:
        color: Solid fill color, or None for an empty paint list
        bound_variable_id: Variable the fill color is bound to, if any
    """

    id: str
    name: str
    description: str = ""
    color: Optional[Color] = None
    bound_variable_id: Optional[str] = None


@dataclass
class TextStyle:
    """
    A text style with already-resolved font properties.

    line_height_unit is one of AUTO, PIXELS, PERCENT.
    letter_spacing_unit is one of PIXELS, PERCENT.
    text_decoration and text_case use the host's upper-case names
    (NONE, UNDERLINE, STRIKETHROUGH / ORIGINAL, UPPER, LOWER, TITLE).
    """

    id: str
    name: str
    font_family: str
    font_size: float
    description: str = ""
    font_style: str = "Regular"
    font_weight: int = 400
    line_height_unit: str = "AUTO"
    line_height: float = 0.0
    letter_spacing_unit: str = "PIXELS"
    letter_spacing: float = 0.0
    text_decoration: str = "NONE"
    text_case: str = "ORIGINAL"


class EffectType(Enum):
    DROP_SHADOW = "DROP_SHADOW"
    INNER_SHADOW = "INNER_SHADOW"
    LAYER_BLUR = "LAYER_BLUR"
    BACKGROUND_BLUR = "BACKGROUND_BLUR"

    @property
    def is_shadow(self) -> bool:
        return self in (EffectType.DROP_SHADOW, EffectType.INNER_SHADOW)


@dataclass
class Effect:
    """
    One shadow or blur layer of an effect style.

    Blurs only use radius. bound_variables maps a field name
    ("offset_x", "offset_y", "radius", "spread", "color") to the id of the
    variable that field is bound to.
    """

    type: EffectType
    visible: bool = True
    radius: float = 0.0
    color: Optional[Color] = None
    offset_x: float = 0.0
    offset_y: float = 0.0
    spread: float = 0.0
    bound_variables: Dict[str, str] = field(default_factory=dict)


@dataclass
class EffectStyle:
    """Ordered shadow/blur layers; invisible layers are kept but not exported."""

    id: str
    name: str
    description: str = ""
    effects: List[Effect] = field(default_factory=list)


class GridPattern(Enum):
    COLUMNS = "COLUMNS"
    ROWS = "ROWS"
    GRID = "GRID"


@dataclass
class LayoutGrid:
    """
    One layout grid of a grid style.

    count is None (or negative) for an auto-fill grid.
    """

    pattern: GridPattern
    section_size: float
    count: Optional[int] = None
    visible: bool = True


@dataclass
class GridStyle:
    id: str
    name: str
    description: str = ""
    layout_grids: List[LayoutGrid] = field(default_factory=list)


@dataclass
class StyleCollection:
    """Styles exported alongside variables when include_styles is set."""

    paint: List[PaintStyle] = field(default_factory=list)
    text: List[TextStyle] = field(default_factory=list)
    effect: List[EffectStyle] = field(default_factory=list)
    grid: List[GridStyle] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.paint or self.text or self.effect or self.grid)


@dataclass
class VariableGraph:
    """
    Root container: the materialized snapshot handed to the engine.

    Everything the exporters produce MUST be derivable from this object
    and an ExportOptions record.

    INVARIANTS:
        - Every variable.collection_id exists in collections
        - Every alias target id should exist in variables
          (violations degrade to inline markers, never exceptions)
    """

    collections: List[VariableCollection] = field(default_factory=list)
    variables: List[Variable] = field(default_factory=list)
    styles: StyleCollection = field(default_factory=StyleCollection)

    def get_variable(self, variable_id: str) -> Optional[Variable]:
        """
        Retrieve a variable by id.

        Returns:
            Variable object or None if not found
        """
        for variable in self.variables:
            if variable.id == variable_id:
                return variable
        return None

    def get_collection(self, collection_id: str) -> Optional[VariableCollection]:
        """
        Retrieve a collection by id.

        Returns:
            VariableCollection object or None if not found
        """
        for collection in self.collections:
            if collection.id == collection_id:
                return collection
        return None
