"""CPU features that pin guest memory layout: realtime, NUMA passthrough, dedicated CPUs."""

from ..models import MachineSpec
from .base import CheckContext, Violation


def check_realtime(spec: MachineSpec, ctx: CheckContext) -> Violation | None:
    cpu = spec.domain.cpu
    if cpu is None or cpu.realtime is None:
        return None
    return ctx.invalid(
        "realtime_cpu",
        "Memory hotplug is not compatible with realtime VMs",
        "domain", "cpu", "realtime",
    )


def check_guest_mapping_passthrough(spec: MachineSpec, ctx: CheckContext) -> Violation | None:
    cpu = spec.domain.cpu
    if cpu is None or cpu.numa is None or cpu.numa.guest_mapping_passthrough is None:
        return None
    return ctx.invalid(
        "guest_mapping_passthrough",
        "Memory hotplug is not compatible with guest mapping passthrough",
        "domain", "cpu", "numa", "guestMappingPassthrough",
    )


def check_dedicated_cpu(spec: MachineSpec, ctx: CheckContext) -> Violation | None:
    cpu = spec.domain.cpu
    if cpu is None or not cpu.dedicated_cpu_placement:
        return None
    return ctx.invalid(
        "dedicated_cpu",
        "Memory hotplug is not compatible with dedicated CPUs",
        "domain", "cpu", "dedicatedCpuPlacement",
    )
