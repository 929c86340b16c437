"""Word numbering engine for nested HTML lists and numbered headings."""

from html_numbering.numbering.allocator import NumberingInstanceAllocator
from html_numbering.numbering.controller import ListNestingController
from html_numbering.numbering.engine import NumberingEngine
from html_numbering.numbering.headings import HeadingNumberingAdapter
from html_numbering.numbering.model import (
    AbstractNumberingDefinition,
    NestingContext,
    NumberingInstance,
    NumberingLevel,
)
from html_numbering.numbering.registry import AbstractNumberingRegistry
from html_numbering.numbering.store import NumberingStore
from html_numbering.numbering.templates import HEADING_NUMBERING_NAME, ORDERED_TYPES

__all__ = [
    "AbstractNumberingDefinition",
    "AbstractNumberingRegistry",
    "HEADING_NUMBERING_NAME",
    "HeadingNumberingAdapter",
    "ListNestingController",
    "NestingContext",
    "NumberingEngine",
    "NumberingInstance",
    "NumberingInstanceAllocator",
    "NumberingLevel",
    "NumberingStore",
    "ORDERED_TYPES",
]
