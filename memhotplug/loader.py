"""Spec loader — turns VirtualMachine / VirtualMachineInstance documents into MachineSpec."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import QuantityError, SpecLoadError
from .models import (
    CPU,
    NUMA,
    Domain,
    Hugepages,
    LaunchSecurity,
    MachineSpec,
    Memory,
    NUMAGuestMappingPassthrough,
    Realtime,
    ResourceList,
    Resources,
)
from .quantity import parse_quantity

logger = logging.getLogger(__name__)

SPEC_SUFFIXES = {".yaml", ".yml", ".json"}


def _mapping(data: Any, where: str) -> dict:
    """Treat null as empty; anything but a mapping is an error."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SpecLoadError(f"{where}: expected a mapping, got {type(data).__name__}")
    return data


def _quantity(raw: Any, where: str):
    try:
        return parse_quantity(raw)
    except QuantityError as e:
        raise SpecLoadError(f"{where}: {e}") from e


def _resource_list(data: Any, where: str) -> ResourceList:
    items = {}
    for name, raw in _mapping(data, where).items():
        q = _quantity(raw, f"{where}.{name}")
        if q is not None:
            items[str(name)] = q
    return ResourceList(items=items)


def _cpu_from_dict(data: Any) -> CPU | None:
    if data is None:
        return None
    d = _mapping(data, "domain.cpu")
    realtime = None
    if "realtime" in d:
        rt = _mapping(d["realtime"], "domain.cpu.realtime")
        realtime = Realtime(mask=rt.get("mask"))
    numa = None
    if "numa" in d:
        n = _mapping(d["numa"], "domain.cpu.numa")
        passthrough = NUMAGuestMappingPassthrough() if "guestMappingPassthrough" in n else None
        numa = NUMA(guest_mapping_passthrough=passthrough)
    dedicated = d.get("dedicatedCpuPlacement", False)
    if not isinstance(dedicated, bool):
        raise SpecLoadError(f"domain.cpu.dedicatedCpuPlacement: expected a boolean, got {dedicated!r}")
    return CPU(
        cores=d.get("cores"),
        sockets=d.get("sockets"),
        threads=d.get("threads"),
        model=d.get("model"),
        dedicated_cpu_placement=dedicated,
        realtime=realtime,
        numa=numa,
    )


def _memory_from_dict(data: Any) -> Memory | None:
    if data is None:
        return None
    d = _mapping(data, "domain.memory")
    hugepages = None
    if "hugepages" in d:
        hp = _mapping(d["hugepages"], "domain.memory.hugepages")
        hugepages = Hugepages(page_size=hp.get("pageSize"))
    return Memory(
        guest=_quantity(d.get("guest"), "domain.memory.guest"),
        max_guest=_quantity(d.get("maxGuest"), "domain.memory.maxGuest"),
        hugepages=hugepages,
    )


def spec_from_dict(data: dict, name: str = "") -> MachineSpec:
    """Build MachineSpec from a VM spec mapping (the object with `domain`)."""
    d = _mapping(data, "spec")
    domain_d = _mapping(d.get("domain"), "domain")
    res = _mapping(domain_d.get("resources"), "domain.resources")
    launch_security = None
    if "launchSecurity" in domain_d:
        ls = _mapping(domain_d["launchSecurity"], "domain.launchSecurity")
        launch_security = LaunchSecurity(sev=ls.get("sev"))
    arch = d.get("architecture") or ""
    if not isinstance(arch, str):
        raise SpecLoadError(f"architecture: expected a string, got {arch!r}")
    return MachineSpec(
        domain=Domain(
            resources=Resources(
                requests=_resource_list(res.get("requests"), "domain.resources.requests"),
                limits=_resource_list(res.get("limits"), "domain.resources.limits"),
            ),
            cpu=_cpu_from_dict(domain_d.get("cpu")),
            memory=_memory_from_dict(domain_d.get("memory")),
            launch_security=launch_security,
        ),
        architecture=arch,
        name=name,
    )


def spec_from_document(doc: Any) -> MachineSpec:
    """Accept a VirtualMachine, a VirtualMachineInstance or a bare VM spec."""
    doc = _mapping(doc, "document")
    name = str(_mapping(doc.get("metadata"), "metadata").get("name", ""))
    kind = doc.get("kind", "")
    if kind == "VirtualMachine":
        template = _mapping(_mapping(doc.get("spec"), "spec").get("template"), "spec.template")
        return spec_from_dict(template.get("spec"), name=name)
    if kind == "VirtualMachineInstance" or ("spec" in doc and "domain" not in doc):
        return spec_from_dict(doc.get("spec"), name=name)
    return spec_from_dict(doc, name=name)


def load_specs(path: Path | str) -> list[MachineSpec]:
    """Load every spec in a YAML (multi-document) or JSON file."""
    p = Path(path)
    try:
        text = p.read_text()
    except OSError as e:
        raise SpecLoadError(f"Cannot read {p}: {e}") from e
    try:
        if p.suffix == ".json":
            docs = [json.loads(text)]
        else:
            docs = [d for d in yaml.safe_load_all(text) if d is not None]
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise SpecLoadError(f"{p}: invalid document: {e}") from e
    specs = []
    for i, doc in enumerate(docs):
        spec = spec_from_document(doc)
        if not spec.name:
            spec.name = p.stem if len(docs) == 1 else f"{p.stem}[{i}]"
        specs.append(spec)
    logger.debug("loaded %d spec(s) from %s", len(specs), p)
    return specs


def find_spec_files(base_path: Path | str) -> list[Path]:
    """All YAML/JSON files under base_path, skipping hidden directories."""
    base = Path(base_path)
    found = []
    for p in sorted(base.rglob("*")):
        rel = p.relative_to(base)
        if any(part.startswith(".") for part in rel.parts):
            continue
        if p.is_file() and p.suffix in SPEC_SUFFIXES:
            found.append(p)
    return found
