"""Id issuance for numbering instances and cloned definitions."""

from __future__ import annotations

import logging
import uuid
from copy import deepcopy
from typing import Optional

from html_numbering.exceptions import NumberingError
from html_numbering.numbering.model import NumberingLevel
from html_numbering.numbering.oxml import build_abstract_num, build_num
from html_numbering.numbering.store import NumberingStore

logger = logging.getLogger(__name__)


class NumberingInstanceAllocator:
    """Mints ``w:num`` and ``w:abstractNum`` ids and writes them to the store.

    Instance ids start after the highest id present when the allocator is
    created, and never below 2: ``numId`` 0 means "numbering removed".
    """

    def __init__(self, store: NumberingStore):
        self._store = store
        self._last_instance_id = max(store.max_instance_id(), 1)

    @property
    def last_instance_id(self) -> int:
        """The most recently issued (or seeded) instance id."""
        return self._last_instance_id

    def next_instance_id(self) -> int:
        self._last_instance_id += 1
        return self._last_instance_id

    def next_definition_id(self) -> int:
        return self._store.next_definition_id()

    def create_instance(self, definition_id: int, restart_level: Optional[int] = None) -> int:
        """Append a new ``w:num`` bound to ``definition_id`` and return its id."""
        instance_id = self.next_instance_id()
        self._store.append_instance(build_num(instance_id, definition_id, restart_level))
        logger.debug(
            "Created numbering instance %d -> definition %d (restart level %s)",
            instance_id, definition_id, restart_level,
        )
        return instance_id

    def clone_definition(self, definition_id: int, level_index: Optional[int] = None) -> int:
        """Copy the first level of a definition into a new single-level definition.

        The clone lets one list restart or re-indent independently of every
        other list sharing the source definition.

        Args:
            definition_id: The definition to copy.
            level_index: Re-index the copied level to this ``w:ilvl``.

        Returns:
            The new definition id.
        """
        source = self._store.find_definition(definition_id)
        if source is None:
            raise NumberingError(f"Cannot clone unknown numbering definition {definition_id}")
        first = source.first_level
        if first is None:
            raise NumberingError(f"Cannot clone numbering definition {definition_id}: it has no levels")

        level = NumberingLevel(deepcopy(first.element))
        if level_index is not None:
            level.level_index = level_index

        new_id = self.next_definition_id()
        name = f"{source.name or 'list'}-{uuid.uuid4().hex}"
        self._store.append_definition(build_abstract_num(new_id, name, [level.element]))

        logger.debug("Cloned definition %d as %d (%s)", definition_id, new_id, name)
        return new_id
