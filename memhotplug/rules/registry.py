"""Rule descriptions for `memhotplug explain`."""

RULE_INFO: dict[str, dict[str, str]] = {
    "memory_limits": {
        "field": "domain.resources",
        "description": "A memory limit is set on the VM.",
        "when": "resources.limits.memory is present",
        "fix": "Drop the memory limit; the guest ceiling is domain.memory.maxGuest.",
    },
    "realtime_cpu": {
        "field": "domain.cpu.realtime",
        "description": "Realtime VMs lock guest memory and cannot grow it.",
        "when": "domain.cpu.realtime is set",
        "fix": "Remove domain.cpu.realtime or disable memory live update.",
    },
    "guest_mapping_passthrough": {
        "field": "domain.cpu.numa.guestMappingPassthrough",
        "description": "Host NUMA topology is mapped into the guest at boot.",
        "when": "domain.cpu.numa.guestMappingPassthrough is set",
        "fix": "Remove guestMappingPassthrough from the NUMA settings.",
    },
    "launch_security": {
        "field": "domain.launchSecurity",
        "description": "Encrypted (SEV) guests cannot accept hotplugged memory.",
        "when": "domain.launchSecurity is set",
        "fix": "Remove launchSecurity or disable memory live update.",
    },
    "dedicated_cpu": {
        "field": "domain.cpu.dedicatedCpuPlacement",
        "description": "Dedicated CPU placement pins vCPUs and their memory.",
        "when": "domain.cpu.dedicatedCpuPlacement is true",
        "fix": "Set dedicatedCpuPlacement to false.",
    },
    "hugepages": {
        "field": "domain.memory.hugepages",
        "description": "Hugepage-backed guests cannot be resized live.",
        "when": "domain.memory.hugepages is set",
        "fix": "Remove domain.memory.hugepages.",
    },
    "guest_memory": {
        "field": "domain.memory.guest",
        "description": "Guest memory is missing, above maxGuest, or not block aligned.",
        "when": "guest unset; or guest > maxGuest; or guest % block alignment != 0",
        "fix": "Set domain.memory.guest to a block-aligned size no larger than maxGuest.",
    },
    "max_guest_alignment": {
        "field": "domain.memory.maxGuest",
        "description": "maxGuest is not a multiple of the hotplug block size.",
        "when": "maxGuest % block alignment != 0",
        "fix": "Round domain.memory.maxGuest to a multiple of the block size.",
    },
    "architecture": {
        "field": "architecture",
        "description": "Memory hotplug is only available on x86_64 (amd64).",
        "when": "spec.architecture != amd64",
        "fix": "Run the VM with architecture amd64 or disable memory live update.",
    },
}
