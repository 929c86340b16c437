"""Live views over numbering elements in ``numbering.xml``.

Each view wraps an lxml element and reads its values on access, so changes
made through the store are visible immediately through every view.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from docx.oxml import OxmlElement
from docx.oxml.ns import qn

# Definition id carried by the base nesting context, which has no list.
SENTINEL_DEFINITION_ID = -1


def _int_or_none(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _child_val(element, tag: str) -> Optional[str]:
    child = element.find(qn(tag))
    if child is None:
        return None
    return child.get(qn("w:val"))


class NumberingLevel:
    """A ``<w:lvl>`` element."""

    def __init__(self, element):
        self._element = element

    @property
    def element(self):
        return self._element

    @property
    def level_index(self) -> Optional[int]:
        return _int_or_none(self._element.get(qn("w:ilvl")))

    @level_index.setter
    def level_index(self, value: int) -> None:
        self._element.set(qn("w:ilvl"), str(value))

    @property
    def num_format(self) -> Optional[str]:
        return _child_val(self._element, "w:numFmt")

    @property
    def level_text(self) -> Optional[str]:
        return _child_val(self._element, "w:lvlText")

    @property
    def start(self) -> Optional[int]:
        return _int_or_none(_child_val(self._element, "w:start"))

    @property
    def indent_left(self) -> Optional[int]:
        ind = self._element.find(f"{qn('w:pPr')}/{qn('w:ind')}")
        if ind is None:
            return None
        return _int_or_none(ind.get(qn("w:left")))

    def __repr__(self) -> str:
        return f"NumberingLevel(ilvl={self.level_index}, fmt={self.num_format!r}, text={self.level_text!r})"


class AbstractNumberingDefinition:
    """A ``<w:abstractNum>`` element: a reusable list template."""

    def __init__(self, element):
        self._element = element

    @property
    def element(self):
        return self._element

    @property
    def definition_id(self) -> Optional[int]:
        return _int_or_none(self._element.get(qn("w:abstractNumId")))

    @property
    def name(self) -> Optional[str]:
        return _child_val(self._element, "w:name")

    @property
    def multi_level_type(self) -> Optional[str]:
        return _child_val(self._element, "w:multiLevelType")

    @property
    def is_multi_level(self) -> bool:
        return self.multi_level_type in ("multilevel", "hybridMultilevel")

    @property
    def levels(self) -> list[NumberingLevel]:
        return [NumberingLevel(lvl) for lvl in self._element.findall(qn("w:lvl"))]

    @property
    def first_level(self) -> Optional[NumberingLevel]:
        lvl = self._element.find(qn("w:lvl"))
        return NumberingLevel(lvl) if lvl is not None else None

    def level(self, level_index: int) -> Optional[NumberingLevel]:
        for level in self.levels:
            if level.level_index == level_index:
                return level
        return None

    def mark_multi_level(self) -> None:
        """Set ``w:multiLevelType`` to ``multilevel``, adding it when absent."""
        mlt = self._element.find(qn("w:multiLevelType"))
        if mlt is None:
            mlt = OxmlElement("w:multiLevelType")
            # only w:nsid may precede w:multiLevelType
            nsid = self._element.find(qn("w:nsid"))
            self._element.insert(0 if nsid is None else 1, mlt)
        mlt.set(qn("w:val"), "multilevel")

    def append_level(self, lvl_element) -> None:
        """Add a ``<w:lvl>`` after the existing levels."""
        existing = self._element.findall(qn("w:lvl"))
        if existing:
            existing[-1].addnext(lvl_element)
        else:
            self._element.append(lvl_element)

    def __repr__(self) -> str:
        return f"AbstractNumberingDefinition(id={self.definition_id}, name={self.name!r})"


class NumberingInstance:
    """A ``<w:num>`` element: the id paragraphs reference."""

    def __init__(self, element):
        self._element = element

    @property
    def element(self):
        return self._element

    @property
    def instance_id(self) -> Optional[int]:
        return _int_or_none(self._element.get(qn("w:numId")))

    @property
    def definition_id(self) -> Optional[int]:
        return _int_or_none(_child_val(self._element, "w:abstractNumId"))

    @property
    def restart_level(self) -> Optional[int]:
        """Level whose counter restarts at 1, if this instance overrides one."""
        for override in self._element.findall(qn("w:lvlOverride")):
            if _child_val(override, "w:startOverride") == "1":
                return _int_or_none(override.get(qn("w:ilvl")))
        return None

    def __repr__(self) -> str:
        return f"NumberingInstance(id={self.instance_id}, definition={self.definition_id})"


class NestingContext(NamedTuple):
    """The (instance, definition) pair active at one list nesting level."""

    instance_id: int
    definition_id: int
