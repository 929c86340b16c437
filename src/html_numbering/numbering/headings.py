"""Cascading ``1.``, ``1.1.``, ``1.1.1.`` numbering for heading paragraphs."""

from __future__ import annotations

import logging
from typing import Optional

from html_numbering.exceptions import NumberingError
from html_numbering.numbering.controller import ListNestingController
from html_numbering.numbering.oxml import set_paragraph_numbering
from html_numbering.numbering.registry import AbstractNumberingRegistry
from html_numbering.numbering.templates import HEADING_NUMBERING_NAME, MAX_LEVELS

logger = logging.getLogger(__name__)


class HeadingNumberingAdapter:
    """Binds headings to one multi-level instance, outside list nesting."""

    def __init__(self, controller: ListNestingController, registry: AbstractNumberingRegistry):
        self._controller = controller
        self._registry = registry
        self._instance_id: Optional[int] = None

    def get_or_create_heading_instance(self) -> int:
        """Return the heading instance id, resolving it on first use.

        An instance already bound to the heading definition (left by an
        earlier conversion pass on the same document) is reused so heading
        numbers continue across passes.
        """
        if self._instance_id is not None:
            return self._instance_id

        definition = self._registry.lookup(HEADING_NUMBERING_NAME, ordered=True)
        existing = self._registry.store.instances_for(definition.definition_id)

        if existing:
            instance_id = existing[0].instance_id
            logger.debug("Resuming heading numbering on instance %d", instance_id)
        else:
            # the heading "list" is not part of the list nesting
            first_item = self._controller.first_item
            instance_id = self._controller.create_list(HEADING_NUMBERING_NAME, ordered=True)
            self._controller.end_list()
            self._controller.first_item = first_item
            logger.debug("Created heading numbering instance %d", instance_id)

        self._registry.promote_to_multi_level(definition.definition_id, cascading=True)
        self._instance_id = instance_id
        return instance_id

    def apply_to_heading(self, paragraph, indent_level: int) -> None:
        """Number a heading paragraph at ``indent_level`` (1 for ``h1``).

        Also resets list state so the next list starts at the top level.
        """
        if not 1 <= indent_level <= MAX_LEVELS:
            raise NumberingError(f"Heading level must be between 1 and {MAX_LEVELS}, got {indent_level}")

        set_paragraph_numbering(paragraph._p, self.get_or_create_heading_instance(), indent_level - 1)

        self._controller.end_list(pop_context=False)
        self._controller.set_depth(0)
