"""Level and definition templates for the canonical list catalog.

Templates are pydantic models describing what a ``w:abstractNum`` should
contain; :mod:`html_numbering.numbering.oxml` turns them into elements.
The catalog mirrors the CSS ``list-style-type`` values a browser renders
natively, plus one reserved definition used only for heading numbering.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from html_numbering.config import NumberingConfig

# ---------------------------------------------------------------------------
# Symbolic list types
# ---------------------------------------------------------------------------

DECIMAL = "decimal"
DISC = "disc"
SQUARE = "square"
CIRCLE = "circle"
UPPER_ALPHA = "upper-alpha"
LOWER_ALPHA = "lower-alpha"
UPPER_ROMAN = "upper-roman"
LOWER_ROMAN = "lower-roman"

# WARNING: only use this for headings
HEADING_NUMBERING_NAME = "decimal-heading-multi"

ORDERED_TYPES = frozenset(
    {DECIMAL, UPPER_ALPHA, LOWER_ALPHA, UPPER_ROMAN, LOWER_ROMAN, HEADING_NUMBERING_NAME}
)

# WordprocessingML allows w:ilvl 0..8
MAX_LEVELS = 9

BULLET = "bullet"

_TYPE_ALIASES = {
    "upper-latin": UPPER_ALPHA,
    "lower-latin": LOWER_ALPHA,
}

# <ol type="..."> is case-sensitive
_OL_TYPE_ATTRIBUTES = {
    "1": DECIMAL,
    "a": LOWER_ALPHA,
    "A": UPPER_ALPHA,
    "i": LOWER_ROMAN,
    "I": UPPER_ROMAN,
}


def normalize_list_type(list_type: Optional[str]) -> Optional[str]:
    """Lower-case a list-style-type value and resolve CSS aliases."""
    if not list_type:
        return None
    name = list_type.strip().lower()
    if not name:
        return None
    return _TYPE_ALIASES.get(name, name)


def list_type_from_attribute(type_attr: Optional[str]) -> Optional[str]:
    """Map the legacy ``type`` attribute of ``<ol>`` to a canonical name."""
    if not type_attr:
        return None
    return _OL_TYPE_ATTRIBUTES.get(type_attr.strip())


def is_ordered(tag: Optional[str], list_type: Optional[str]) -> bool:
    """Return True when a list renders counters rather than bullets."""
    if tag is not None and tag.lower() == "ol":
        return True
    return normalize_list_type(list_type) in ORDERED_TYPES


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


class LevelTemplate(BaseModel):
    """One ``w:lvl`` of a numbering definition."""

    level_index: int = Field(ge=0, lt=MAX_LEVELS)
    num_format: str
    level_text: str
    indent_left: Optional[int] = None  # twips; None omits w:pPr entirely
    hanging: Optional[int] = None
    alignment: str = "left"

    @property
    def start(self) -> Optional[int]:
        """Counters start at 1; bullets carry no start value."""
        return None if self.num_format == BULLET else 1


class DefinitionTemplate(BaseModel):
    """A ``w:abstractNum`` before it has been given an id."""

    name: str
    multi_level: bool = False
    levels: list[LevelTemplate] = Field(default_factory=list)


def level_template(
    num_format: str,
    level_text: str,
    level_index: int,
    config: NumberingConfig,
) -> LevelTemplate:
    """Build an indented level, one indent step per nesting level."""
    return LevelTemplate(
        level_index=level_index,
        num_format=num_format,
        level_text=level_text,
        indent_left=config.indent_twips * level_index,
        hanging=config.hanging_twips,
    )


def cascading_level_text(level_number: int) -> str:
    """Return ``%1.%2.…%N.`` for a 1-based level number."""
    return "".join(f"%{n}." for n in range(1, level_number + 1))


def promoted_level_template(
    num_format: str,
    first_level_text: str,
    level_index: int,
    cascading: bool,
    config: NumberingConfig,
) -> LevelTemplate:
    """Derive an additional level from a definition's first level.

    Args:
        num_format: The first level's ``w:numFmt``.
        first_level_text: The first level's ``w:lvlText``; reused as-is for bullets.
        level_index: 0-based index of the level being added.
        cascading: True for heading numbering (``1.2.3.`` with no indentation).
        config: Indentation settings.
    """
    level_number = level_index + 1
    if num_format == BULLET:
        return level_template(num_format, first_level_text, level_index, config)
    if cascading:
        return LevelTemplate(
            level_index=level_index,
            num_format=num_format,
            level_text=cascading_level_text(level_number),
            indent_left=0,
            hanging=0,
        )
    return level_template(num_format, f"%{level_number}.", level_index, config)


def canonical_templates(config: Optional[NumberingConfig] = None) -> list[DefinitionTemplate]:
    """Return the nine single-level definitions installed in every document."""
    config = config or NumberingConfig()

    def single(name: str, num_format: str, level_text: str) -> DefinitionTemplate:
        return DefinitionTemplate(
            name=name,
            levels=[level_template(num_format, level_text, 0, config)],
        )

    return [
        single(DECIMAL, "decimal", "%1."),
        single(DISC, BULLET, "•"),
        single(SQUARE, BULLET, "▪"),
        single(CIRCLE, BULLET, "o"),
        single(UPPER_ALPHA, "upperLetter", "%1."),
        single(LOWER_ALPHA, "lowerLetter", "%1."),
        single(UPPER_ROMAN, "upperRoman", "%1."),
        single(LOWER_ROMAN, "lowerRoman", "%1."),
        DefinitionTemplate(
            name=HEADING_NUMBERING_NAME,
            levels=[LevelTemplate(level_index=0, num_format="decimal", level_text="%1.")],
        ),
    ]


CANONICAL_NAMES = tuple(t.name for t in canonical_templates())
