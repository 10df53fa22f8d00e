"""Platform rules: launch security and target architecture."""

from ..models import MachineSpec
from .base import CheckContext, Violation

# Memory hotplug is only wired up for x86_64 guests.
SUPPORTED_ARCHITECTURE = "amd64"


def check_launch_security(spec: MachineSpec, ctx: CheckContext) -> Violation | None:
    if spec.domain.launch_security is None:
        return None
    return ctx.invalid(
        "launch_security",
        "Memory hotplug is not compatible with encrypted VMs",
        "domain", "launchSecurity",
    )


def check_architecture(spec: MachineSpec, ctx: CheckContext) -> Violation | None:
    if spec.architecture == SUPPORTED_ARCHITECTURE:
        return None
    return ctx.invalid(
        "architecture",
        "Memory hotplug is only available for x86_64 VMs",
        "architecture",
    )
