"""Base types for rules."""

from dataclasses import dataclass, field
from enum import Enum

from ..alignment import MEMORY_HOTPLUG_BLOCK_ALIGNMENT_BYTES
from ..fieldpath import TEMPLATE_SPEC_PATH, FieldPath


class CauseType(str, Enum):
    # Only invalid-field-value causes are produced by these rules
    FIELD_VALUE_INVALID = "FieldValueInvalid"


@dataclass(frozen=True)
class Violation:
    """One reason a spec cannot use memory hotplug."""

    rule_id: str
    message: str
    field: str  # e.g. "spec.template.spec.domain.memory.guest"
    category: CauseType = CauseType.FIELD_VALUE_INVALID

    def to_dict(self) -> dict:
        return {
            "type": self.category.value,
            "message": self.message,
            "field": self.field,
            "rule_id": self.rule_id,
        }


@dataclass(frozen=True)
class CheckContext:
    """Inputs every rule shares besides the spec itself."""

    root: FieldPath = field(default=TEMPLATE_SPEC_PATH)
    block_alignment: int = MEMORY_HOTPLUG_BLOCK_ALIGNMENT_BYTES

    def __post_init__(self) -> None:
        if isinstance(self.block_alignment, bool) or not isinstance(self.block_alignment, int) \
                or self.block_alignment <= 0:
            raise ValueError(f"block_alignment must be a positive number of bytes, got {self.block_alignment!r}")

    def invalid(self, rule_id: str, message: str, *path: str) -> Violation:
        return Violation(rule_id=rule_id, message=message, field=str(self.root.child(*path)))
