"""HTML → .docx renderer.

Walks the parsed HTML depth-first and emits Word paragraphs. Lists and
numbered headings are routed through a NumberingEngine, which owns every
numbering decision; this module only decides which paragraph gets which
``numId`` / ``ilvl`` pair.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from docx import Document
from docx.document import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError

from html_numbering.config import Config
from html_numbering.exceptions import GenerationError
from html_numbering.generators.styles import (
    apply_left_indent,
    apply_list_numbering,
    apply_twips_indent,
    doc_style_or_fallback,
    find_paragraph_style,
    heading_style_name,
)
from html_numbering.numbering.engine import NumberingEngine
from html_numbering.numbering.templates import is_ordered
from html_numbering.parsers.css import list_style_type, margin_left, parse_style

logger = logging.getLogger(__name__)

_HEADING_LEVELS = {f"h{n}": n for n in range(1, 7)}
_LIST_TAGS = frozenset({"ol", "ul"})
_TEXT_BLOCK_TAGS = frozenset({"p", "pre", "address", "dt", "dd", "caption", "figcaption"})
_INLINE_TAGS = frozenset({
    "a", "abbr", "b", "bdi", "bdo", "br", "cite", "code", "data", "dfn", "em", "i",
    "kbd", "mark", "q", "s", "samp", "small", "span", "strong", "sub", "sup", "time",
    "u", "var", "wbr",
})
_SKIP_TAGS = frozenset({"head", "script", "style", "template", "title", "noscript"})

# "1. Intro", "2.3 Scope", "4.1.2. Details"
_INDUCED_NUMBER = re.compile(r"^\s*\d+(?:\.\d+)*\.?\s+")


@dataclass
class _RenderContext:
    doc: DocxDocument
    engine: NumberingEngine


class HtmlWordGenerator:
    """Generates Word content from an HTML fragment or page."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config.default()

    def generate(
        self,
        html: str,
        output_path: Path,
        template: Optional[Path] = None,
    ) -> Path:
        """Generate a .docx file from HTML.

        Args:
            html: The HTML markup to convert.
            output_path: Where to write the .docx file.
            template: Existing .docx to append to. Its numbering is kept
                      and continued.

        Returns:
            The output path (for convenience).
        """
        doc = self.generate_document(html, open_document(template))
        return save_document(doc, output_path)

    def generate_document(self, html: str, document: Optional[DocxDocument] = None) -> DocxDocument:
        """Render HTML into a python-docx Document and return it.

        Args:
            html: The HTML markup to convert.
            document: Document to append to; a blank one is created if None.
                      May be passed again for a further pass on the same
                      document.
        """
        doc = document if document is not None else Document()
        ctx = _RenderContext(doc=doc, engine=NumberingEngine(doc, self.config.numbering))

        soup = BeautifulSoup(html, "html.parser")
        self._render_children(ctx, (soup.body or soup).children)
        return doc

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _render_children(self, ctx: _RenderContext, nodes: Iterable) -> None:
        """Render nodes, gathering runs of inline content into paragraphs."""
        inline: list = []
        for node in nodes:
            if _is_inline(node):
                inline.append(node)
                continue
            self._flush_inline(ctx, inline)
            inline = []
            # comments, doctypes and CDATA carry no content
            if isinstance(node, Tag):
                self._render_block(ctx, node)
        self._flush_inline(ctx, inline)

    def _render_block(self, ctx: _RenderContext, node: Tag) -> None:
        name = node.name.lower()
        if name in _SKIP_TAGS:
            return
        if name in _HEADING_LEVELS:
            self._render_heading(ctx, node, _HEADING_LEVELS[name])
        elif name in _LIST_TAGS:
            self._render_list(ctx, node)
        elif name == "li":
            # <li> outside any list
            self._add_body_paragraph(ctx, _inline_text(node.children))
        elif name in _TEXT_BLOCK_TAGS:
            self._add_body_paragraph(ctx, _inline_text(node.children))
        else:
            self._render_children(ctx, node.children)

    def _flush_inline(self, ctx: _RenderContext, nodes: list) -> None:
        if nodes:
            self._add_body_paragraph(ctx, _inline_text(nodes))

    def _add_body_paragraph(self, ctx: _RenderContext, text: str) -> None:
        if text:
            ctx.doc.add_paragraph(text, style=self.config.style.body_style)

    # ------------------------------------------------------------------
    # Headings
    # ------------------------------------------------------------------

    def _render_heading(self, ctx: _RenderContext, node: Tag, level: int) -> None:
        """Render a heading; a leading "1.2" turns into Word heading numbering.

        Headings inside lists are never numbered, since heading numbering
        resets the list nesting state.
        """
        text = _inline_text(node.children)
        style = doc_style_or_fallback(
            ctx.doc, heading_style_name(self.config.style, level), self.config.style.body_style
        )

        numbered = False
        if self.config.numbering.number_headings and ctx.engine.depth == 0:
            match = _INDUCED_NUMBER.match(text)
            if match:
                text = text[match.end():]
                numbered = True

        paragraph = ctx.doc.add_paragraph(text, style=style)
        if numbered:
            ctx.engine.apply_to_heading(paragraph, level)

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def _render_list(self, ctx: _RenderContext, node: Tag) -> None:
        styles = parse_style(node.get("style"))
        list_type = list_style_type(styles, node.get("type"))
        ordered = is_ordered(node.name, list_type)

        ctx.engine.begin_list(list_type, ordered, classes=node.get("class") or ())
        for child in node.children:
            if not isinstance(child, Tag):
                if _is_inline(child):
                    self._add_body_paragraph(ctx, _normalize(str(child)))
            elif child.name == "li":
                self._render_item(ctx, child)
            elif child.name in _LIST_TAGS:
                # <ul> directly inside <ul>: invalid, but browsers nest it
                self._render_list(ctx, child)
            else:
                self._render_block(ctx, child)
        ctx.engine.end_list()

    def _render_item(self, ctx: _RenderContext, node: Tag) -> None:
        """Render an <li>: one numbered paragraph, then any nested lists."""
        left = margin_left(parse_style(node.get("style")))
        instance_id = ctx.engine.process_item(left)

        nested = [c for c in node.children if isinstance(c, Tag) and c.name in _LIST_TAGS]
        content = [c for c in node.children if not (isinstance(c, Tag) and c.name in _LIST_TAGS)]

        paragraph = ctx.doc.add_paragraph(_inline_text(content), style=self._item_style(ctx))
        apply_list_numbering(paragraph, instance_id, ctx.engine.item_level())
        fallback = ctx.engine.fallback_indent()
        if left is not None and left.value > 0:
            apply_left_indent(paragraph, left)
        elif fallback is not None:
            apply_twips_indent(paragraph, fallback)

        for child in nested:
            self._render_list(ctx, child)

    def _item_style(self, ctx: _RenderContext) -> str:
        for css_class in ctx.engine.current_list_classes:
            style = find_paragraph_style(ctx.doc, css_class)
            if style is not None:
                return style
        return doc_style_or_fallback(
            ctx.doc, self.config.style.list_paragraph_style, self.config.style.body_style
        )


def open_document(path: Optional[Path] = None) -> DocxDocument:
    """Open an existing .docx, or create a blank document when path is None."""
    if path is None:
        return Document()
    try:
        return Document(str(path))
    except PackageNotFoundError as exc:
        raise GenerationError(f"Cannot open Word document {path}: {exc}") from exc


def save_document(doc: DocxDocument, output_path: Path) -> Path:
    """Save a document, wrapping I/O failures in GenerationError."""
    output_path = Path(output_path)
    try:
        doc.save(str(output_path))
    except OSError as exc:
        raise GenerationError(f"Failed to save document: {exc}") from exc

    logger.info("Generated %s", output_path)
    return output_path


def _is_inline(node) -> bool:
    if isinstance(node, NavigableString):
        return not isinstance(node, PreformattedString)
    return isinstance(node, Tag) and node.name.lower() in _INLINE_TAGS


def _inline_text(nodes: Iterable) -> str:
    """Collapse the text of a sequence of nodes the way a browser would."""
    parts = []
    for node in nodes:
        if isinstance(node, PreformattedString):
            continue
        if isinstance(node, NavigableString):
            parts.append(str(node))
        elif isinstance(node, Tag):
            if node.name == "br":
                parts.append(" ")
            elif node.name in _INLINE_TAGS:
                parts.append(node.get_text())
            else:
                parts.append(f" {node.get_text(' ')} ")
    return _normalize("".join(parts))


def _normalize(text: str) -> str:
    return " ".join(text.split())
