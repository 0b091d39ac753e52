"""Tests for the Elastic IP allocation checker."""

from __future__ import annotations

from conftest import ALLOCATION_IDS, CLUSTER_NAME, FakeProbe

from aws_vpc_preflight.checks import AddressAllocationChecker
from aws_vpc_preflight.config_loader import ZoneConfig
from aws_vpc_preflight.field_errors import ELASTIC_IP_ALLOCATION_ID_PATH, ErrorKind
from aws_vpc_preflight.probe import ProbeError

NOT_EXIST = "cannot be used as it does not exist"
ALREADY_ASSOCIATED = "cannot be attached to the cluster's NAT Gateway(s) as it is already associated"


def _zones(*ids):
    return [ZoneConfig(elastic_ip_allocation_id=i) for i in ids]


def test_no_allocations_makes_no_calls(probe: FakeProbe) -> None:
    zones = [ZoneConfig(), ZoneConfig(elastic_ip_allocation_id="")]
    assert AddressAllocationChecker(probe).check(CLUSTER_NAME, zones) == []
    assert probe.calls == []


def test_unassociated_allocations_skip_ownership_lookup(probe: FakeProbe) -> None:
    probe.associations = {a: None for a in ALLOCATION_IDS}

    errors = AddressAllocationChecker(probe).check(CLUSTER_NAME, _zones(*ALLOCATION_IDS))

    assert errors == []
    assert probe.count("get_address_associations") == 1
    assert probe.count("get_owned_address_allocations") == 0


def test_associations_are_looked_up_in_one_batch(probe: FakeProbe) -> None:
    AddressAllocationChecker(probe).check(CLUSTER_NAME, _zones(*ALLOCATION_IDS))
    assert probe.calls == [("get_address_associations", ALLOCATION_IDS)]


def test_missing_allocations_reported_in_zone_order(probe: FakeProbe) -> None:
    errors = AddressAllocationChecker(probe).check(CLUSTER_NAME, _zones(*ALLOCATION_IDS))

    assert [e.bad_value for e in errors] == ALLOCATION_IDS
    for e in errors:
        assert e.kind == ErrorKind.INVALID
        assert e.field_path == ELASTIC_IP_ALLOCATION_ID_PATH
        assert NOT_EXIST in e.detail
    assert probe.count("get_owned_address_allocations") == 0


def test_owned_associations_are_accepted(probe: FakeProbe) -> None:
    probe.associations = {a: f"eipassoc-{i}" for i, a in enumerate(ALLOCATION_IDS)}
    probe.owned = set(ALLOCATION_IDS)

    errors = AddressAllocationChecker(probe).check(CLUSTER_NAME, _zones(*ALLOCATION_IDS))

    assert errors == []
    assert probe.calls[-1] == ("get_owned_address_allocations", CLUSTER_NAME)
    assert probe.count("get_owned_address_allocations") == 1


def test_foreign_association_is_rejected(probe: FakeProbe) -> None:
    probe.associations = {a: f"eipassoc-{i}" for i, a in enumerate(ALLOCATION_IDS)}
    probe.owned = set(ALLOCATION_IDS[:2])

    errors = AddressAllocationChecker(probe).check(CLUSTER_NAME, _zones(*ALLOCATION_IDS))

    assert len(errors) == 1
    assert errors[0].kind == ErrorKind.INVALID
    assert errors[0].bad_value == ALLOCATION_IDS[2]
    assert ALREADY_ASSOCIATED in errors[0].detail


def test_some_exist_some_do_not(probe: FakeProbe) -> None:
    probe.associations = {ALLOCATION_IDS[0]: "eipassoc-a", ALLOCATION_IDS[1]: "eipassoc-b"}
    probe.owned = set(ALLOCATION_IDS[:2])

    errors = AddressAllocationChecker(probe).check(CLUSTER_NAME, _zones(*ALLOCATION_IDS))

    assert len(errors) == 1
    assert errors[0].bad_value == ALLOCATION_IDS[2]
    assert NOT_EXIST in errors[0].detail


def test_mixed_errors_follow_zone_order(probe: FakeProbe) -> None:
    # zone 0: associated elsewhere, zone 1: missing, zone 2: free
    probe.associations = {ALLOCATION_IDS[0]: "eipassoc-a", ALLOCATION_IDS[2]: None}

    errors = AddressAllocationChecker(probe).check(CLUSTER_NAME, _zones(*ALLOCATION_IDS))

    assert [e.bad_value for e in errors] == ALLOCATION_IDS[:2]
    assert ALREADY_ASSOCIATED in errors[0].detail
    assert NOT_EXIST in errors[1].detail


def test_duplicate_ids_are_fetched_once_and_reported_per_zone(probe: FakeProbe) -> None:
    dup = ALLOCATION_IDS[0]

    errors = AddressAllocationChecker(probe).check(CLUSTER_NAME, _zones(dup, dup))

    assert probe.calls == [("get_address_associations", [dup])]
    assert [e.bad_value for e in errors] == [dup, dup]


def test_association_lookup_failure_is_single_internal_error(probe: FakeProbe) -> None:
    probe.associations_error = ProbeError("describe_addresses", message="connection reset")

    errors = AddressAllocationChecker(probe).check(CLUSTER_NAME, _zones(*ALLOCATION_IDS))

    assert len(errors) == 1
    assert errors[0].kind == ErrorKind.INTERNAL
    assert errors[0].field_path == ELASTIC_IP_ALLOCATION_ID_PATH
    assert "connection reset" in errors[0].detail
    assert probe.count("get_owned_address_allocations") == 0


def test_ownership_lookup_failure_is_single_internal_error(probe: FakeProbe) -> None:
    # zone 1 is missing, but the ownership failure aborts before per-zone reporting
    probe.associations = {ALLOCATION_IDS[0]: "eipassoc-a"}
    probe.owned_error = ProbeError("describe_nat_gateways", message="read timeout")

    errors = AddressAllocationChecker(probe).check(CLUSTER_NAME, _zones(*ALLOCATION_IDS[:2]))

    assert len(errors) == 1
    assert errors[0].kind == ErrorKind.INTERNAL
    assert "read timeout" in errors[0].detail
