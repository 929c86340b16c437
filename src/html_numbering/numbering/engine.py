"""Numbering engine: one per output document.

Wires the store, registry, allocator, nesting controller and heading
adapter together, and is the only object an HTML walker talks to.
Constructing a second engine on the same document is safe: the catalog is
not installed twice and heading numbering resumes on the existing instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from html_numbering.config import NumberingConfig
from html_numbering.numbering.allocator import NumberingInstanceAllocator
from html_numbering.numbering.controller import ListNestingController
from html_numbering.numbering.headings import HeadingNumberingAdapter
from html_numbering.numbering.model import AbstractNumberingDefinition, NestingContext
from html_numbering.numbering.registry import AbstractNumberingRegistry
from html_numbering.numbering.store import NumberingStore

if TYPE_CHECKING:
    from html_numbering.parsers.css import Length


class NumberingEngine:
    """Maps list and heading events onto a document's numbering part."""

    def __init__(self, document, config: Optional[NumberingConfig] = None):
        self.config = config or NumberingConfig()
        self.store = NumberingStore.from_document(document)
        self.registry = AbstractNumberingRegistry(self.store, self.config)
        self.registry.initialize()
        self.allocator = NumberingInstanceAllocator(self.store)
        self.controller = ListNestingController(self.registry, self.allocator)
        self.headings = HeadingNumberingAdapter(self.controller, self.registry)
        self._list_classes: list[tuple[str, ...]] = []

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def begin_list(
        self,
        list_type: Optional[str] = None,
        ordered: bool = False,
        classes: Iterable[str] = (),
    ) -> int:
        """Open a list; ``classes`` are the HTML classes of the list element."""
        instance_id = self.controller.begin_list(list_type, ordered)
        self._list_classes.append(tuple(classes))
        return instance_id

    def create_list(self, list_type: Optional[str], ordered: bool) -> int:
        return self.begin_list(list_type, ordered)

    def end_list(self, pop_context: bool = True) -> None:
        self.controller.end_list(pop_context)
        if pop_context and len(self._list_classes) > self.controller.depth:
            self._list_classes.pop()

    def set_depth(self, depth: int) -> None:
        self.controller.set_depth(depth)
        del self._list_classes[depth:]

    def process_item(self, margin_left: Optional[Length] = None) -> int:
        return self.controller.process_item(margin_left)

    def item_level(self) -> int:
        return self.controller.item_level()

    def fallback_indent(self) -> Optional[int]:
        """Left indent in twips for an item whose level the definition lacks.

        Single-level definitions number nested items on their only level,
        so the nesting has to show as paragraph indentation instead.
        Returns None when the definition defines the nesting level itself.
        """
        level_index = self.controller.level_index
        if self.item_level() == level_index:
            return None
        return self.config.indent_twips * level_index

    def lookup_definition(self, list_type: Optional[str], ordered: bool = False) -> AbstractNumberingDefinition:
        return self.registry.lookup(list_type, ordered)

    @property
    def depth(self) -> int:
        return self.controller.depth

    @property
    def current(self) -> NestingContext:
        return self.controller.current

    @property
    def current_list_classes(self) -> tuple[str, ...]:
        """HTML classes of the innermost open list, or an empty tuple."""
        return self._list_classes[-1] if self._list_classes else ()

    # ------------------------------------------------------------------
    # Headings
    # ------------------------------------------------------------------

    def get_heading_instance(self) -> int:
        return self.headings.get_or_create_heading_instance()

    def apply_to_heading(self, paragraph, indent_level: int) -> None:
        self.headings.apply_to_heading(paragraph, indent_level)
        self._list_classes.clear()
