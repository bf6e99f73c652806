"""
Repository snapshot data model.

A snapshot is the in-memory form of a repository export file: the schemas
the repository uses and its instances, grouped the way the traversal hands
them to an export handler.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from shared.models import CodeSpec, Instance, SchemaRef


@dataclass
class RepositorySnapshot:
    """
    Schemas and instances of one repository.

    Attributes:
        repository_id: Identifier of the repository, used in instance IRIs.
        schemas: Schemas in file order.
        code_specs: Code specs.
        models: Model instances.
        elements: Element instances.
        unique_aspects: Unique aspects by owning element id.
        multi_aspects: Multi-aspects by owning element id.
        relationships: Link-table relationship instances.
    """
    repository_id: str
    schemas: List[SchemaRef] = field(default_factory=list)
    code_specs: List[CodeSpec] = field(default_factory=list)
    models: List[Instance] = field(default_factory=list)
    elements: List[Instance] = field(default_factory=list)
    unique_aspects: Dict[str, List[Instance]] = field(default_factory=dict)
    multi_aspects: Dict[str, List[Instance]] = field(default_factory=dict)
    relationships: List[Instance] = field(default_factory=list)

    @property
    def aspect_count(self) -> int:
        return (sum(len(a) for a in self.unique_aspects.values())
                + sum(len(a) for a in self.multi_aspects.values()))

    @property
    def instance_count(self) -> int:
        return (len(self.code_specs) + len(self.models) + len(self.elements)
                + self.aspect_count + len(self.relationships))

    def get_counts(self) -> Dict[str, int]:
        return {
            "schemas": len(self.schemas),
            "code_specs": len(self.code_specs),
            "models": len(self.models),
            "elements": len(self.elements),
            "aspects": self.aspect_count,
            "relationships": len(self.relationships),
        }
