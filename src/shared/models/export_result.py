"""
Export result types.

An ExportResult summarizes one run: what was mapped, how many lines were
written and which individual items were skipped under the best-effort
policy for recoverable errors.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class SkippedItem:
    """
    An item that was not written to the output.

    Attributes:
        item_type: "property value", "class", "instance", ...
        name: Name of the skipped item (property or class full name).
        reason: Why it was skipped.
        subject: RDF name of the subject the item belonged to, if any.
    """
    item_type: str
    name: str
    reason: str
    subject: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.item_type,
            "name": self.name,
            "reason": self.reason,
            "subject": self.subject,
        }


@dataclass
class ExportResult:
    """
    Result of a Turtle export run.

    Attributes:
        output_path: Path of the written Turtle file, if any.
        schemas_mapped: Number of schemas mapped.
        classes_mapped: Number of classes and enumerations mapped.
        classes_excluded: Number of navigation relationship classes excluded.
        instances_mapped: Number of instances mapped, by kind.
        triples_written: Number of statement lines written (prefix lines excluded).
        prefixes_written: Number of @prefix lines written.
        skipped_items: Items skipped under the best-effort policy.
        warnings: Warning messages.
    """
    output_path: Optional[str] = None
    schemas_mapped: int = 0
    classes_mapped: int = 0
    classes_excluded: int = 0
    instances_mapped: Dict[str, int] = field(default_factory=dict)
    triples_written: int = 0
    prefixes_written: int = 0
    skipped_items: List[SkippedItem] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def total_instances(self) -> int:
        return sum(self.instances_mapped.values())

    @property
    def has_skipped_items(self) -> bool:
        return len(self.skipped_items) > 0

    def count_instance(self, kind: str) -> None:
        self.instances_mapped[kind] = self.instances_mapped.get(kind, 0) + 1

    def add_skipped(self, item_type: str, name: str, reason: str, subject: Optional[str] = None) -> None:
        self.skipped_items.append(SkippedItem(item_type=item_type, name=name, reason=reason, subject=subject))

    def get_summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Export Summary:",
            f"  Schemas mapped: {self.schemas_mapped}",
            f"  Classes mapped: {self.classes_mapped}",
            f"  Navigation relationships excluded: {self.classes_excluded}",
            f"  Instances mapped: {self.total_instances}",
        ]
        for kind, count in sorted(self.instances_mapped.items()):
            lines.append(f"    - {kind}: {count}")
        lines.append(f"  Prefixes written: {self.prefixes_written}")
        lines.append(f"  Triples written: {self.triples_written}")
        if self.has_skipped_items:
            lines.append(f"  Skipped items: {len(self.skipped_items)}")
            for item in self.skipped_items[:5]:
                lines.append(f"    - {item.item_type} '{item.name}': {item.reason}")
            if len(self.skipped_items) > 5:
                lines.append(f"    ... and {len(self.skipped_items) - 5} more")
        if self.warnings:
            lines.append(f"  Warnings: {len(self.warnings)}")
        if self.output_path:
            lines.append(f"  Output: {self.output_path}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "output_path": self.output_path,
            "schemas_mapped": self.schemas_mapped,
            "classes_mapped": self.classes_mapped,
            "classes_excluded": self.classes_excluded,
            "instances_mapped": dict(self.instances_mapped),
            "triples_written": self.triples_written,
            "prefixes_written": self.prefixes_written,
            "skipped_items": [item.to_dict() for item in self.skipped_items],
            "warnings": list(self.warnings),
        }
