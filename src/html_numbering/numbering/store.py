"""Access to the numbering part (``word/numbering.xml``) of a document.

The store is a thin adapter over python-docx's live ``<w:numbering>`` tree:
every insert is visible to the next scan, and everything is persisted when
the owning document is saved.
"""

from __future__ import annotations

import logging
from typing import Optional

from docx.opc.constants import CONTENT_TYPE as CT
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.opc.packuri import PackURI
from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls, qn
from docx.parts.numbering import NumberingPart

from html_numbering.numbering.model import (
    AbstractNumberingDefinition,
    NumberingInstance,
)

logger = logging.getLogger(__name__)

_NUMBERING_PARTNAME = "/word/numbering.xml"


def _new_numbering_part(package) -> NumberingPart:
    """Create a numbering part holding an empty ``<w:numbering>`` root."""
    element = parse_xml(f"<w:numbering {nsdecls('w')}/>")
    return NumberingPart(PackURI(_NUMBERING_PARTNAME), CT.WML_NUMBERING, element, package)


class NumberingStore:
    """Enumerate and insert numbering definitions and instances."""

    def __init__(self, element):
        self._element = element

    @classmethod
    def from_document(cls, document) -> NumberingStore:
        """Return the store of a python-docx Document, creating the part if needed.

        python-docx does not implement ``NumberingPart.new()``, so a document
        without numbering would fail on ``document.part.numbering_part``.
        """
        document_part = document.part
        try:
            part = document_part.part_related_by(RT.NUMBERING)
        except KeyError:
            part = _new_numbering_part(document_part.package)
            document_part.relate_to(part, RT.NUMBERING)
            logger.info("Document had no numbering part; created an empty one")
        return cls(part.element)

    @property
    def element(self):
        """The ``<w:numbering>`` root element."""
        return self._element

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def definitions(self) -> list[AbstractNumberingDefinition]:
        return [AbstractNumberingDefinition(e) for e in self._element.findall(qn("w:abstractNum"))]

    def instances(self) -> list[NumberingInstance]:
        return [NumberingInstance(e) for e in self._element.findall(qn("w:num"))]

    def find_definition(self, definition_id: int) -> Optional[AbstractNumberingDefinition]:
        for definition in self.definitions():
            if definition.definition_id == definition_id:
                return definition
        return None

    def find_instance(self, instance_id: int) -> Optional[NumberingInstance]:
        for instance in self.instances():
            if instance.instance_id == instance_id:
                return instance
        return None

    def instances_for(self, definition_id: int) -> list[NumberingInstance]:
        """Return the instances bound to a definition, in document order."""
        return [i for i in self.instances() if i.definition_id == definition_id]

    def next_definition_id(self) -> int:
        """Return 0 for an empty store, else one past the highest definition id."""
        ids = [d.definition_id for d in self.definitions() if d.definition_id is not None]
        if not ids:
            return 0
        return max(ids) + 1

    def max_instance_id(self) -> int:
        """Return the highest instance id in the store, or 0 when there is none."""
        ids = [i.instance_id for i in self.instances() if i.instance_id is not None]
        return max(ids, default=0)

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def definition_block_end(self) -> int:
        """Child index just after the last ``<w:abstractNum>``.

        With no definition yet, this is just after the last ``<w:numPicBullet>``
        (or 0), which is where the schema expects the first definition.
        """
        children = list(self._element)
        for tag in ("w:abstractNum", "w:numPicBullet"):
            for index in range(len(children) - 1, -1, -1):
                if children[index].tag == qn(tag):
                    return index + 1
        return 0

    def insert_definition(self, element, position: int) -> None:
        self._element.insert(position, element)

    def append_definition(self, element) -> None:
        """Add a definition at the end of the contiguous definition block."""
        self.insert_definition(element, self.definition_block_end())

    def append_instance(self, element) -> None:
        """Add a ``<w:num>`` after the existing ones."""
        cleanup = self._element.find(qn("w:numIdMacAtCleanup"))
        if cleanup is not None:
            cleanup.addprevious(element)
        else:
            self._element.append(element)
