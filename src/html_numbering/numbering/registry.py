"""Catalog of reusable numbering definitions (``w:abstractNum``).

The registry installs the canonical list definitions into a document once,
resolves CSS list-style-type names to definitions, and turns single-level
definitions into multi-level ones when lists nest.
"""

from __future__ import annotations

import logging
from typing import Optional

from html_numbering.config import NumberingConfig
from html_numbering.exceptions import NumberingError
from html_numbering.numbering.model import AbstractNumberingDefinition
from html_numbering.numbering.oxml import build_definition, build_level
from html_numbering.numbering.store import NumberingStore
from html_numbering.numbering.templates import (
    DECIMAL,
    DISC,
    HEADING_NUMBERING_NAME,
    MAX_LEVELS,
    canonical_templates,
    normalize_list_type,
    promoted_level_template,
)

logger = logging.getLogger(__name__)


class AbstractNumberingRegistry:
    """Owns the canonical definitions of a single document."""

    def __init__(self, store: NumberingStore, config: Optional[NumberingConfig] = None):
        self.store = store
        self.config = config or NumberingConfig()

    def initialize(self) -> bool:
        """Install the canonical catalog unless the store already holds it.

        Word applies the "NoList" style to existing instances when
        definitions are not stored consecutively, so the catalog goes in one
        block right after the last existing definition.

        Returns:
            True if the catalog was inserted, False if it was already present.
        """
        templates = canonical_templates(self.config)
        existing = {d.name.lower() for d in self.store.definitions() if d.name}

        if all(t.name in existing for t in templates):
            logger.debug("Numbering catalog already installed")
            return False

        first_id = self.store.next_definition_id()
        position = self.store.definition_block_end()
        for offset, template in enumerate(templates):
            self.store.insert_definition(build_definition(template, first_id + offset), position + offset)

        logger.info(
            "Installed %d numbering definitions (ids %d-%d)",
            len(templates), first_id, first_id + len(templates) - 1,
        )
        return True

    def find(self, definition_id: int) -> Optional[AbstractNumberingDefinition]:
        return self.store.find_definition(definition_id)

    def find_by_name(self, name: str) -> Optional[AbstractNumberingDefinition]:
        """Return the first definition whose ``w:name`` matches, ignoring case."""
        name = name.lower()
        for definition in self.store.definitions():
            if definition.name is not None and definition.name.lower() == name:
                return definition
        return None

    def lookup(self, list_type: Optional[str], ordered: bool = False) -> AbstractNumberingDefinition:
        """Resolve a list-style-type to a definition.

        Unknown or missing types fall back to ``decimal`` for ordered lists
        and ``disc`` otherwise.
        """
        name = normalize_list_type(list_type)
        definition = self.find_by_name(name) if name else None

        if definition is None:
            fallback = DECIMAL if ordered else DISC
            definition = self.find_by_name(fallback)
            if definition is None:
                raise NumberingError(
                    f"No '{fallback}' numbering definition; was the registry initialized?"
                )
        return definition

    def promote_to_multi_level(self, definition_id: int, cascading: bool = False) -> bool:
        """Extend a single-level definition to the full set of levels.

        Args:
            definition_id: The ``w:abstractNumId`` to promote.
            cascading: Produce ``%1.%2.`` style texts with no indentation.
                Always on for the heading definition.

        Returns:
            True if the definition was promoted, False if it already was.
        """
        definition = self.find(definition_id)
        if definition is None:
            raise NumberingError(f"Unknown numbering definition: {definition_id}")
        if definition.is_multi_level:
            return False

        first = definition.first_level
        if first is None:
            raise NumberingError(f"Numbering definition {definition_id} has no levels")

        cascading = cascading or (definition.name or "").lower() == HEADING_NUMBERING_NAME
        definition.mark_multi_level()
        for level_index in range(1, MAX_LEVELS):
            if definition.level(level_index) is not None:
                continue
            template = promoted_level_template(
                first.num_format or DECIMAL,
                first.level_text or "",
                level_index,
                cascading,
                self.config,
            )
            definition.append_level(build_level(template))

        logger.debug(
            "Promoted definition %d (%s) to multi-level%s",
            definition_id, definition.name, " (cascading)" if cascading else "",
        )
        return True
