"""List nesting state machine.

The controller receives begin-list / end-list / item events in document
order and decides, from local state only, which numbering instance each
list uses:

* a nested ordered list of the same type as its parent continues the
  parent's instance on the next level;
* every other ordered list gets its own instance, restarting at 1;
* unordered lists share one instance per (depth, definition), since Word
  does not cope with hundreds of identical bullet instances;
* a first item carrying an explicit pixel left margin splits its list onto
  a cloned definition, so the margin does not leak into sibling lists.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from html_numbering.exceptions import UnbalancedListError
from html_numbering.numbering.allocator import NumberingInstanceAllocator
from html_numbering.numbering.model import SENTINEL_DEFINITION_ID, NestingContext
from html_numbering.numbering.registry import AbstractNumberingRegistry

if TYPE_CHECKING:
    from html_numbering.parsers.css import Length

logger = logging.getLogger(__name__)


class ListNestingController:
    """Tracks list depth and the active numbering context per level."""

    def __init__(self, registry: AbstractNumberingRegistry, allocator: NumberingInstanceAllocator):
        self._registry = registry
        self._allocator = allocator

        self.depth = 0
        self.first_item = False
        # open level count -> lists dropped by set_depth at that level whose
        # end_list has not arrived yet
        self._cut_off: dict[int, int] = {}

        # The base entry keeps the stack non-empty: len(contexts) == depth + 1
        self._contexts: list[NestingContext] = [
            NestingContext(allocator.last_instance_id, SENTINEL_DEFINITION_ID)
        ]
        self._unordered_instances: dict[tuple[int, int], int] = {}

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def current(self) -> NestingContext:
        """The innermost open (instance, definition) pair."""
        return self._contexts[-1]

    @property
    def contexts(self) -> tuple[NestingContext, ...]:
        return tuple(self._contexts)

    @property
    def level_index(self) -> int:
        """0-based level of the innermost open list."""
        return max(self.depth - 1, 0)

    def item_level(self) -> int:
        """The ``w:ilvl`` to stamp on an item of the innermost list.

        Single-level definitions (bullets, clones) only define one level;
        items of those lists reference that level instead of a missing one.
        """
        definition = self._registry.find(self.current.definition_id)
        if definition is None or definition.level(self.level_index) is not None:
            return self.level_index
        first = definition.first_level
        if first is None or first.level_index is None:
            return self.level_index
        return first.level_index

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def begin_list(self, list_type: Optional[str], ordered: bool) -> int:
        """Open a list and return the numbering instance its items use."""
        definition = self._registry.lookup(list_type, ordered)
        definition_id = definition.definition_id
        parent = self.current

        self.first_item = True
        self.depth += 1

        if self.depth > 1 and ordered and definition_id == parent.definition_id:
            # <ol> inside <ol>: same counter set, next level
            self._registry.promote_to_multi_level(definition_id)
            instance_id = parent.instance_id
        elif ordered:
            self._registry.promote_to_multi_level(definition_id)
            instance_id = self._allocator.create_instance(definition_id, restart_level=self.depth - 1)
        else:
            key = (self.depth, definition_id)
            instance_id = self._unordered_instances.get(key)
            if instance_id is None:
                instance_id = self._allocator.create_instance(definition_id, restart_level=0)
                self._unordered_instances[key] = instance_id

        self._contexts.append(NestingContext(instance_id, definition_id))
        logger.debug(
            "Begin list depth %d: instance %d, definition %d (%s)",
            self.depth, instance_id, definition_id, definition.name,
        )
        return instance_id

    def create_list(self, list_type: Optional[str], ordered: bool) -> int:
        """Resolve and allocate in one step; used by the heading path."""
        return self.begin_list(list_type, ordered)

    def end_list(self, pop_context: bool = True) -> None:
        """Close the innermost list.

        Args:
            pop_context: False when the caller manages list-like state that is
                not a real nested list (heading numbering); the context stack
                is then left alone and depth does not go below 0.

        Raises:
            UnbalancedListError: If no list is open and no list was cut off
                by ``set_depth``.
        """
        if pop_context:
            open_levels = len(self._contexts) - 1
            if self._cut_off.get(open_levels):
                # closes a list that set_depth already dropped
                self._cut_off[open_levels] -= 1
                self.first_item = True
                logger.debug("End list already closed by set_depth at depth %d", open_levels)
                return
            if open_levels <= 0:
                raise UnbalancedListError("end_list called without a matching begin_list")
            self._contexts.pop()

        self.depth = max(self.depth - 1, 0)
        self.first_item = True
        logger.debug("End list depth %d (pop_context=%s)", self.depth, pop_context)

    def set_depth(self, depth: int) -> None:
        """Reset the depth counter, dropping contexts deeper than ``depth``.

        The ``end_list`` calls still owed to the dropped lists are accepted
        later without effect.
        """
        open_levels = len(self._contexts) - 1
        if depth < 0 or depth > open_levels:
            raise UnbalancedListError(
                f"Cannot set list depth to {depth}: {open_levels} list level(s) open"
            )
        if depth < open_levels:
            self._cut_off[depth] = self._cut_off.get(depth, 0) + open_levels - depth
        del self._contexts[depth + 1:]
        self.depth = depth

    def process_item(self, margin_left: Optional[Length] = None) -> int:
        """Return the instance for the next item of the innermost list.

        Only the first item of a list is inspected: when it has a positive
        pixel left margin the list moves onto a cloned definition and a new
        instance, which its later items keep using.

        Raises:
            UnbalancedListError: If no list is open.
        """
        if self.depth <= 0 or len(self._contexts) <= 1:
            raise UnbalancedListError("List item outside of any list")

        if not self.first_item:
            return self.current.instance_id

        self.first_item = False
        if margin_left is not None and margin_left.is_positive_pixels:
            self._split_current_list()

        return self.current.instance_id

    def _split_current_list(self) -> None:
        context = self.current
        clone_id = self._allocator.clone_definition(context.definition_id, level_index=self.level_index)
        instance_id = self._allocator.create_instance(clone_id)
        self._contexts[-1] = NestingContext(instance_id, clone_id)
        logger.debug(
            "Item margin split instance %d -> %d (definition %d -> %d)",
            context.instance_id, instance_id, context.definition_id, clone_id,
        )
