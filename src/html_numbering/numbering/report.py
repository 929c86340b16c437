"""Numbering report: a JSON summary of a document's numbering part."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Optional

from html_numbering.numbering.store import NumberingStore


@dataclass
class DefinitionSummary:
    """One abstract numbering definition and the instances bound to it."""

    definition_id: Optional[int]
    name: Optional[str]
    multi_level: bool
    level_count: int
    instance_ids: list[int] = field(default_factory=list)


@dataclass
class NumberingReport:
    """Summary of the numbering definitions and instances in a document."""

    source_file: str = ""
    generate_time_seconds: float = 0.0

    definition_count: int = 0
    instance_count: int = 0
    definitions: list[DefinitionSummary] = field(default_factory=list)

    # Instances pointing at a definition id that does not exist
    orphan_instance_ids: list[int] = field(default_factory=list)

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self._to_dict(), indent=indent, ensure_ascii=False)

    def _to_dict(self) -> dict:
        return {
            "source_file": self.source_file,
            "timing": {
                "generate_seconds": round(self.generate_time_seconds, 3),
            },
            "counts": {
                "definitions": self.definition_count,
                "instances": self.instance_count,
            },
            "definitions": [
                {
                    "id": d.definition_id,
                    "name": d.name,
                    "multi_level": d.multi_level,
                    "levels": d.level_count,
                    "instances": d.instance_ids,
                }
                for d in self.definitions
            ],
            "orphan_instances": self.orphan_instance_ids,
        }

    @classmethod
    def from_store(cls, store: NumberingStore, source_file: str = "") -> NumberingReport:
        """Build a report by scanning a numbering store."""
        instances = store.instances()
        report = cls(
            source_file=source_file,
            definition_count=len(store.definitions()),
            instance_count=len(instances),
        )

        known_ids = set()
        for definition in store.definitions():
            known_ids.add(definition.definition_id)
            report.definitions.append(
                DefinitionSummary(
                    definition_id=definition.definition_id,
                    name=definition.name,
                    multi_level=definition.is_multi_level,
                    level_count=len(definition.levels),
                    instance_ids=[
                        i.instance_id for i in instances
                        if i.definition_id == definition.definition_id
                    ],
                )
            )

        report.orphan_instance_ids = [
            i.instance_id for i in instances if i.definition_id not in known_ids
        ]
        return report
