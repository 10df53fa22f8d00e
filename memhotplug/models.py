"""Structured machine spec — the parts of a VM definition memory hotplug cares about."""

from dataclasses import dataclass, field
from typing import Any, Optional

from .quantity import Quantity

RESOURCE_MEMORY = "memory"


@dataclass
class ResourceList:
    """Resource name -> quantity, e.g. {"memory": Quantity("4Gi"), "cpu": ...}."""

    items: dict[str, Quantity] = field(default_factory=dict)

    def memory(self) -> Optional[Quantity]:
        """Memory entry, or None when not set at all."""
        return self.items.get(RESOURCE_MEMORY)

    def __bool__(self) -> bool:
        return bool(self.items)


@dataclass
class Resources:
    requests: ResourceList = field(default_factory=ResourceList)
    limits: ResourceList = field(default_factory=ResourceList)


@dataclass
class Realtime:
    """Realtime vCPU scheduling; mask selects which vCPUs (None = all)."""

    mask: Optional[str] = None


@dataclass
class NUMAGuestMappingPassthrough:
    """Marker: host NUMA topology is mapped straight into the guest."""


@dataclass
class NUMA:
    guest_mapping_passthrough: Optional[NUMAGuestMappingPassthrough] = None


@dataclass
class CPU:
    cores: Optional[int] = None
    sockets: Optional[int] = None
    threads: Optional[int] = None
    model: Optional[str] = None
    dedicated_cpu_placement: bool = False
    realtime: Optional[Realtime] = None
    numa: Optional[NUMA] = None


@dataclass
class Hugepages:
    page_size: Optional[str] = None  # "2Mi", "1Gi"


@dataclass
class Memory:
    guest: Optional[Quantity] = None
    max_guest: Optional[Quantity] = None
    hugepages: Optional[Hugepages] = None


@dataclass
class LaunchSecurity:
    """Confidential computing boot mode; sev holds its raw settings."""

    sev: Optional[dict[str, Any]] = None


@dataclass
class Domain:
    resources: Resources = field(default_factory=Resources)
    cpu: Optional[CPU] = None
    memory: Optional[Memory] = None
    launch_security: Optional[LaunchSecurity] = None


@dataclass
class MachineSpec:
    """VM spec as seen at admission. Checkers read it and never modify it."""

    domain: Domain = field(default_factory=Domain)
    architecture: str = ""
    name: str = ""  # metadata.name of the enclosing object, if any
