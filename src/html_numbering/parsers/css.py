"""Inline CSS reading for list elements.

Only what list rendering needs: the ``style`` attribute as a dict, CSS
lengths, the ``margin`` shorthand and the list-style-type of a list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from docx.shared import Cm, Inches, Mm, Pt

from html_numbering.numbering.templates import (
    list_type_from_attribute,
    normalize_list_type,
)

# Font size assumed when converting em/rem
_BASE_FONT_PT = 12.0

_LENGTH_RE = re.compile(
    r"^([+-]?(?:\d+(?:\.\d*)?|\.\d+))\s*(px|pt|em|rem|%|in|cm|mm)?$",
    re.IGNORECASE,
)


class Unit(str, Enum):
    PX = "px"
    PT = "pt"
    EM = "em"
    REM = "rem"
    PERCENT = "%"
    IN = "in"
    CM = "cm"
    MM = "mm"


@dataclass(frozen=True)
class Length:
    """A CSS length such as ``20px`` or ``1.5em``."""

    value: float
    unit: Unit = Unit.PX

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional[Length]:
        """Parse a CSS length; unitless numbers are pixels, keywords give None."""
        if not text:
            return None
        match = _LENGTH_RE.match(text.strip())
        if match is None:
            return None
        value, unit = match.groups()
        return cls(float(value), Unit(unit.lower()) if unit else Unit.PX)

    @property
    def is_positive_pixels(self) -> bool:
        return self.unit is Unit.PX and self.value > 0

    def to_docx(self):
        """Convert to a python-docx Length, or None for relative units."""
        if self.unit is Unit.PX:
            return Pt(self.value * 0.75)  # 96 px per inch
        if self.unit is Unit.PT:
            return Pt(self.value)
        if self.unit in (Unit.EM, Unit.REM):
            return Pt(self.value * _BASE_FONT_PT)
        if self.unit is Unit.IN:
            return Inches(self.value)
        if self.unit is Unit.CM:
            return Cm(self.value)
        if self.unit is Unit.MM:
            return Mm(self.value)
        return None


@dataclass(frozen=True)
class Margin:
    top: Optional[Length] = None
    right: Optional[Length] = None
    bottom: Optional[Length] = None
    left: Optional[Length] = None

    @classmethod
    def parse(cls, text: Optional[str]) -> Margin:
        """Parse the 1 to 4 value ``margin`` shorthand."""
        if not text:
            return cls()
        values = [Length.parse(token) for token in text.split()]
        if len(values) == 1:
            return cls(values[0], values[0], values[0], values[0])
        if len(values) == 2:
            return cls(values[0], values[1], values[0], values[1])
        if len(values) == 3:
            return cls(values[0], values[1], values[2], values[1])
        if len(values) == 4:
            return cls(*values)
        return cls()


def parse_style(style_attr: Optional[str]) -> dict[str, str]:
    """Split an inline ``style`` attribute into lower-cased property names."""
    styles: dict[str, str] = {}
    if not style_attr:
        return styles
    for declaration in style_attr.split(";"):
        name, sep, value = declaration.partition(":")
        if not sep:
            continue
        name = name.strip().lower()
        value = value.replace("!important", "").strip()
        if name and value:
            styles[name] = value
    return styles


def margin_left(styles: dict[str, str]) -> Optional[Length]:
    """Left margin from ``margin``, overridden by ``margin-left``."""
    left = Margin.parse(styles.get("margin")).left
    if "margin-left" in styles:
        explicit = Length.parse(styles["margin-left"])
        if explicit is not None:
            left = explicit
    return left


def list_style_type(styles: dict[str, str], type_attr: Optional[str] = None) -> Optional[str]:
    """Resolve a list's style type from CSS, falling back to ``<ol type>``.

    Returns a normalized name; the registry decides whether it is known.
    """
    value = styles.get("list-style-type")
    if not value and "list-style" in styles:
        # "list-style: square inside" - take the first keyword token
        for token in styles["list-style"].split():
            if not token.startswith("url(") and token.lower() not in ("inside", "outside"):
                value = token
                break
    if value:
        return normalize_list_type(value)
    return list_type_from_attribute(type_attr)
