"""WordprocessingML element builders for numbering definitions and instances."""

from __future__ import annotations

from typing import Iterable, Optional

from docx.oxml import OxmlElement
from docx.oxml.ns import qn

from html_numbering.numbering.templates import DefinitionTemplate, LevelTemplate


def _val_element(tag: str, value):
    element = OxmlElement(tag)
    element.set(qn("w:val"), str(value))
    return element


def build_level(template: LevelTemplate):
    """Create a ``<w:lvl>`` element from a level template.

    Child order follows CT_Lvl: start, numFmt, lvlText, lvlJc, pPr.
    """
    lvl = OxmlElement("w:lvl")
    lvl.set(qn("w:ilvl"), str(template.level_index))

    if template.start is not None:
        lvl.append(_val_element("w:start", template.start))
    lvl.append(_val_element("w:numFmt", template.num_format))
    lvl.append(_val_element("w:lvlText", template.level_text))
    lvl.append(_val_element("w:lvlJc", template.alignment))

    if template.indent_left is not None or template.hanging is not None:
        ppr = OxmlElement("w:pPr")
        ind = OxmlElement("w:ind")
        if template.indent_left is not None:
            ind.set(qn("w:left"), str(template.indent_left))
        if template.hanging is not None:
            ind.set(qn("w:hanging"), str(template.hanging))
        ppr.append(ind)
        lvl.append(ppr)

    return lvl


def build_abstract_num(
    definition_id: int,
    name: str,
    levels: Iterable,
    multi_level: bool = False,
):
    """Create a ``<w:abstractNum>`` holding already-built ``<w:lvl>`` elements."""
    abstract_num = OxmlElement("w:abstractNum")
    abstract_num.set(qn("w:abstractNumId"), str(definition_id))
    abstract_num.append(
        _val_element("w:multiLevelType", "multilevel" if multi_level else "singleLevel")
    )
    abstract_num.append(_val_element("w:name", name))
    for lvl in levels:
        abstract_num.append(lvl)
    return abstract_num


def build_definition(template: DefinitionTemplate, definition_id: int):
    """Create a ``<w:abstractNum>`` from a definition template."""
    return build_abstract_num(
        definition_id,
        template.name,
        (build_level(level) for level in template.levels),
        multi_level=template.multi_level,
    )


def build_num(instance_id: int, definition_id: int, restart_level: Optional[int] = None):
    """Create a ``<w:num>`` bound to a definition.

    When ``restart_level`` is given, counting restarts at 1 on that level.
    """
    num = OxmlElement("w:num")
    num.set(qn("w:numId"), str(instance_id))
    num.append(_val_element("w:abstractNumId", definition_id))

    if restart_level is not None:
        override = OxmlElement("w:lvlOverride")
        override.set(qn("w:ilvl"), str(restart_level))
        override.append(_val_element("w:startOverride", 1))
        num.append(override)

    return num


def set_paragraph_numbering(p_element, instance_id: int, level_index: int) -> None:
    """Attach ``<w:numPr>`` to a ``<w:p>``, replacing any existing numbering."""
    pPr = p_element.get_or_add_pPr()
    pPr._remove_numPr()
    numPr = pPr.get_or_add_numPr()
    numPr.get_or_add_ilvl().val = level_index
    numPr.get_or_add_numId().val = instance_id
