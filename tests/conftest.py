"""Shared pytest fixtures: an in-memory probe that records every call."""

from __future__ import annotations

import typing as t

import pytest

from aws_vpc_preflight.config_loader import NetworkConfig, ZoneConfig
from aws_vpc_preflight.probe import CloudStateProbe, ProbeError, ResourceNotFoundError

VPC_ID = "vpc-123456"
CLUSTER_NAME = "cluster-1"
ALLOCATION_IDS = [
    "eipalloc-0e2669d4b46150ee4",
    "eipalloc-0e2669d4b46150ee5",
    "eipalloc-0e2669d4b46150ee6",
]


class FakeProbe(CloudStateProbe):
    """Probe backed by plain attributes; set ``*_error`` to make a call fail."""

    def __init__(self) -> None:
        self.vpc_exists = True
        self.attributes: t.Dict[str, bool] = {"enableDnsSupport": True, "enableDnsHostnames": True}
        self.internet_gateway = "igw-0123"
        self.associations: t.Dict[str, t.Optional[str]] = {}
        self.owned: t.Set[str] = set()

        self.attribute_error: t.Optional[ProbeError] = None
        self.gateway_error: t.Optional[ProbeError] = None
        self.associations_error: t.Optional[ProbeError] = None
        self.owned_error: t.Optional[ProbeError] = None

        self.calls: t.List[t.Tuple[str, t.Any]] = []

    def count(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)

    def get_attribute(self, vpc_id: str, attribute: str) -> bool:
        self.calls.append(("get_attribute", (vpc_id, attribute)))
        if not self.vpc_exists:
            raise ResourceNotFoundError("describe_vpc_attribute", message="InvalidVpcID.NotFound")
        if self.attribute_error is not None:
            raise self.attribute_error
        return self.attributes[attribute]

    def get_internet_gateway(self, vpc_id: str) -> str:
        self.calls.append(("get_internet_gateway", vpc_id))
        if self.gateway_error is not None:
            raise self.gateway_error
        return self.internet_gateway

    def get_address_associations(self, allocation_ids: t.Sequence[str]) -> t.Dict[str, t.Optional[str]]:
        self.calls.append(("get_address_associations", list(allocation_ids)))
        if self.associations_error is not None:
            raise self.associations_error
        return {k: v for k, v in self.associations.items() if k in allocation_ids}

    def get_owned_address_allocations(self, cluster_name: str) -> t.Set[str]:
        self.calls.append(("get_owned_address_allocations", cluster_name))
        if self.owned_error is not None:
            raise self.owned_error
        return set(self.owned)


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def vpc_config() -> NetworkConfig:
    return NetworkConfig(vpc_id=VPC_ID, cluster_name=CLUSTER_NAME)


@pytest.fixture
def eip_config() -> NetworkConfig:
    """Config without a VPC id and one allocation per zone."""
    return NetworkConfig(
        cluster_name=CLUSTER_NAME,
        zones=[ZoneConfig(elastic_ip_allocation_id=a) for a in ALLOCATION_IDS],
    )
