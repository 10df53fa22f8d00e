"""Memory section rules: limits, hugepages, guest/maxGuest sizing and alignment."""

from ..alignment import alignment_quantity, is_aligned
from ..models import MachineSpec
from .base import CheckContext, Violation


def check_memory_limits(spec: MachineSpec, ctx: CheckContext) -> Violation | None:
    """Limits would cap the guest below maxGuest; hotplug owns the ceiling."""
    if spec.domain.resources.limits.memory() is None:
        return None
    return ctx.invalid(
        "memory_limits",
        "Configuration of Memory limits is not allowed when Memory live update is enabled",
        "domain", "resources",
    )


def check_hugepages(spec: MachineSpec, ctx: CheckContext) -> Violation | None:
    memory = spec.domain.memory
    if memory is None or memory.hugepages is None:
        return None
    return ctx.invalid(
        "hugepages",
        "Memory hotplug is not compatible with hugepages",
        "domain", "memory", "hugepages",
    )


def check_guest(spec: MachineSpec, ctx: CheckContext) -> Violation | None:
    """Guest must be set, not above maxGuest, and block aligned. First failure only."""
    memory = spec.domain.memory
    if memory is None or memory.guest is None:
        message = "Guest memory must be configured when memory hotplug is enabled"
    elif memory.max_guest is not None and memory.guest.cmp(memory.max_guest) > 0:
        message = "Guest memory is greater than the configured maxGuest memory"
    elif not is_aligned(memory.guest, ctx.block_alignment):
        message = f"Guest memory must be {alignment_quantity(ctx.block_alignment)} aligned"
    else:
        return None
    return ctx.invalid("guest_memory", message, "domain", "memory", "guest")


def check_max_guest_alignment(spec: MachineSpec, ctx: CheckContext) -> Violation | None:
    # Runs even when check_guest reported a missing memory section.
    memory = spec.domain.memory
    if memory is None or memory.max_guest is None:
        return None
    if is_aligned(memory.max_guest, ctx.block_alignment):
        return None
    return ctx.invalid(
        "max_guest_alignment",
        f"MaxGuest must be {alignment_quantity(ctx.block_alignment)} aligned",
        "domain", "memory", "maxGuest",
    )
