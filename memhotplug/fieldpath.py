"""Field paths — locate the part of a spec a violation refers to."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldPath:
    """Immutable dotted path; child() returns a new, longer path."""

    segments: tuple[str, ...] = ()

    @classmethod
    def new(cls, *names: str) -> "FieldPath":
        return cls(tuple(names))

    def child(self, *names: str) -> "FieldPath":
        return FieldPath(self.segments + tuple(names))

    def __str__(self) -> str:
        return ".".join(self.segments)


# Violations are reported relative to the VM template, as admission does.
TEMPLATE_SPEC_PATH = FieldPath.new("spec", "template", "spec")
