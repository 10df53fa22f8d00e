"""Tests for the rule engine — ordering, accumulation, scenarios."""

import pytest

from memhotplug import validate_memory_hotplug
from memhotplug.alignment import MEMORY_HOTPLUG_BLOCK_ALIGNMENT_BYTES
from memhotplug.engine import CHECKS, run_rules
from memhotplug.models import (
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
from memhotplug.quantity import Quantity
from memhotplug.rules.registry import RULE_INFO

B = MEMORY_HOTPLUG_BLOCK_ALIGNMENT_BYTES
GUEST_CHAIN = ("must be configured", "greater than the configured maxGuest", "Guest memory must be 2Mi aligned")


def _clean_spec(**memory) -> MachineSpec:
    mem = {"guest": Quantity.from_bytes(B), **memory}
    return MachineSpec(domain=Domain(memory=Memory(**mem)), architecture="amd64")


def _everything_wrong() -> MachineSpec:
    return MachineSpec(
        domain=Domain(
            resources=Resources(limits=ResourceList({"memory": Quantity.parse("8Gi")})),
            cpu=CPU(
                dedicated_cpu_placement=True,
                realtime=Realtime(mask="0-1"),
                numa=NUMA(guest_mapping_passthrough=NUMAGuestMappingPassthrough()),
            ),
            memory=Memory(
                guest=Quantity.parse("1025Mi"),
                max_guest=Quantity.parse("4097Mi"),
                hugepages=Hugepages(page_size="1Gi"),
            ),
            launch_security=LaunchSecurity(),
        ),
        architecture="s390x",
    )


def test_clean_configuration_has_no_violations():
    assert validate_memory_hotplug(_clean_spec()) == []


def test_max_guest_exceeded_scenario():
    spec = _clean_spec(guest=Quantity.from_bytes(2 * B), max_guest=Quantity.from_bytes(B))
    violations = validate_memory_hotplug(spec)
    assert len(violations) == 1
    assert violations[0].message == "Guest memory is greater than the configured maxGuest memory"


def test_architecture_scenario():
    spec = _clean_spec()
    spec.architecture = "arm64"
    violations = validate_memory_hotplug(spec)
    assert [v.field for v in violations] == ["spec.template.spec.architecture"]


def test_missing_guest_scenario():
    spec = MachineSpec(domain=Domain(memory=Memory()), architecture="amd64")
    violations = validate_memory_hotplug(spec)
    assert len(violations) == 1
    assert "must be configured" in violations[0].message


def test_missing_memory_section_does_not_fault():
    spec = MachineSpec(domain=Domain(), architecture="amd64")
    violations = validate_memory_hotplug(spec)
    assert [v.rule_id for v in violations] == ["guest_memory"]


def test_all_rules_accumulate_in_fixed_order():
    violations = run_rules(_everything_wrong())
    assert [v.rule_id for v in violations] == [
        "memory_limits",
        "realtime_cpu",
        "guest_mapping_passthrough",
        "launch_security",
        "dedicated_cpu",
        "hugepages",
        "guest_memory",
        "max_guest_alignment",
        "architecture",
    ]
    assert all(v.field.startswith("spec.template.spec.") for v in violations)


def test_run_is_deterministic():
    spec = _everything_wrong()
    assert run_rules(spec) == run_rules(spec)


def test_check_does_not_modify_spec():
    spec = _everything_wrong()
    before = repr(spec)
    run_rules(spec)
    assert repr(spec) == before


@pytest.mark.parametrize("memory", [
    None,
    Memory(),
    Memory(guest=Quantity.parse("4Gi"), max_guest=Quantity.parse("1Gi")),
    Memory(guest=Quantity.parse("4097Mi"), max_guest=Quantity.parse("1Gi")),
    Memory(guest=Quantity.parse("1025Mi")),
    Memory(guest=Quantity.parse("1025Mi"), max_guest=Quantity.parse("4Gi")),
])
def test_guest_chain_reports_at_most_one(memory):
    spec = MachineSpec(domain=Domain(memory=memory), architecture="amd64")
    messages = [v.message for v in run_rules(spec)]
    hits = [m for m in messages if any(s in m for s in GUEST_CHAIN)]
    assert len(hits) == 1


@pytest.mark.parametrize("guest,aligned", [
    (B, True),
    (3 * B, True),
    (B + 1, False),
    (3 * B - 4096, False),
    (1024**3, True),
    (10**9, False),
])
def test_alignment_violation_iff_remainder(guest, aligned):
    violations = validate_memory_hotplug(_clean_spec(guest=Quantity.from_bytes(guest)))
    fired = any("aligned" in v.message for v in violations)
    assert fired is (not aligned)


def test_custom_block_alignment():
    spec = _clean_spec(guest=Quantity.parse("130Mi"))
    assert validate_memory_hotplug(spec) == []
    violations = validate_memory_hotplug(spec, block_alignment=128 * 1024**2)
    assert [v.message for v in violations] == ["Guest memory must be 128Mi aligned"]


def test_every_check_has_registry_entry():
    ids = {v.rule_id for v in run_rules(_everything_wrong())}
    assert len(CHECKS) == len(RULE_INFO)
    assert ids == set(RULE_INFO)
    for info in RULE_INFO.values():
        assert {"field", "description", "when", "fix"} <= set(info)


def test_guest_above_max_guest_beyond_float_precision():
    spec = _clean_spec(
        guest=Quantity.parse("10000000000000000000000000002Ki"),
        max_guest=Quantity.parse("10000000000000000000000000000Ki"),
    )
    violations = validate_memory_hotplug(spec)
    assert [v.message for v in violations] == ["Guest memory is greater than the configured maxGuest memory"]


@pytest.mark.parametrize("alignment", [0, -2097152, True, 2.5])
def test_invalid_block_alignment_rejected(alignment):
    with pytest.raises(ValueError):
        validate_memory_hotplug(_clean_spec(), block_alignment=alignment)
