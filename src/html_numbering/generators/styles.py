"""Paragraph style and numbering helpers for Word generation."""

from __future__ import annotations

from typing import Optional

from docx.document import Document
from docx.enum.style import WD_STYLE_TYPE
from docx.shared import Twips

from html_numbering.config import StyleConfig
from html_numbering.numbering.oxml import set_paragraph_numbering
from html_numbering.parsers.css import Length


def heading_style_name(config: StyleConfig, level: int) -> str:
    """Return the Word style name for a heading level (e.g. 'Heading 1')."""
    return f"{config.heading_prefix} {level}"


def doc_style_or_fallback(
    doc: Document, style_name: str, fallback: str = "Normal"
) -> str:
    """Return style_name if it exists in doc, otherwise fallback."""
    try:
        doc.styles[style_name]
        return style_name
    except KeyError:
        return fallback


def find_paragraph_style(doc: Document, key: str) -> Optional[str]:
    """Return the name of the paragraph style whose name or id equals key.

    HTML classes cannot contain spaces, so ``class="ListBullet"`` has to
    match the style id of "List Bullet".
    """
    for style in doc.styles:
        if style.type != WD_STYLE_TYPE.PARAGRAPH:
            continue
        if key in (style.name, style.style_id):
            return style.name
    return None


def apply_list_numbering(paragraph, instance_id: int, level_index: int) -> None:
    """Apply <w:numPr> to a paragraph so bullets/numbers actually render.

    Args:
        paragraph: The python-docx paragraph to modify.
        instance_id: The w:numId returned by the numbering engine.
        level_index: 0-based w:ilvl.
    """
    set_paragraph_numbering(paragraph._p, instance_id, level_index)


def apply_left_indent(paragraph, length: Length) -> None:
    """Indent a paragraph by a CSS left margin; relative units are ignored."""
    indent = length.to_docx()
    if indent is not None:
        paragraph.paragraph_format.left_indent = indent


def apply_twips_indent(paragraph, twips: int) -> None:
    paragraph.paragraph_format.left_indent = Twips(twips)
