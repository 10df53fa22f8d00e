"""Rule engine — runs every memory hotplug rule in fixed order and collects violations."""

import logging

from .alignment import MEMORY_HOTPLUG_BLOCK_ALIGNMENT_BYTES
from .models import MachineSpec
from .rules import cpu, memory, platform
from .rules.base import CheckContext, Violation

logger = logging.getLogger(__name__)

# Order is part of the output contract; callers show violations as returned.
CHECKS = (
    memory.check_memory_limits,
    cpu.check_realtime,
    cpu.check_guest_mapping_passthrough,
    platform.check_launch_security,
    cpu.check_dedicated_cpu,
    memory.check_hugepages,
    memory.check_guest,
    memory.check_max_guest_alignment,
    platform.check_architecture,
)


def run_rules(spec: MachineSpec, ctx: CheckContext | None = None) -> list[Violation]:
    """Run all rules, return every violation that fires."""
    ctx = ctx or CheckContext()
    violations: list[Violation] = []
    for check_fn in CHECKS:
        v = check_fn(spec, ctx)
        if v is not None:
            logger.debug("%s: %s (%s)", v.rule_id, v.message, v.field)
            violations.append(v)
    logger.debug("memory hotplug check for %r: %d violation(s)", spec.name or "<unnamed>", len(violations))
    return violations


def validate_memory_hotplug(
    spec: MachineSpec,
    block_alignment: int = MEMORY_HOTPLUG_BLOCK_ALIGNMENT_BYTES,
) -> list[Violation]:
    """Empty list means the spec may have its guest memory resized live."""
    return run_rules(spec, CheckContext(block_alignment=block_alignment))
