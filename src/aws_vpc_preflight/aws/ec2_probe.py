from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..probe import CloudStateProbe, ProbeError, ResourceNotFoundError

logger = logging.getLogger(__name__)

VPC_NOT_FOUND_CODE = "InvalidVpcID.NotFound"
CLUSTER_TAG_PREFIX = "kubernetes.io/cluster/"
# Deleting/deleted/failed gateways no longer hold their addresses
NAT_GATEWAY_LIVE_STATES = ["pending", "available"]

_ATTRIBUTE_RESPONSE_KEYS = {
    "enableDnsSupport": "EnableDnsSupport",
    "enableDnsHostnames": "EnableDnsHostnames",
    "enableNetworkAddressUsageMetrics": "EnableNetworkAddressUsageMetrics",
}


@dataclass
class ProbeSettings:
    connect_timeout: float = 10.0
    read_timeout: float = 30.0
    max_attempts: int = 5

    def botocore_config(self) -> Config:
        return Config(
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            retries={"max_attempts": self.max_attempts, "mode": "standard"},
        )


def _error_code(e: ClientError) -> str:
    return e.response.get("Error", {}).get("Code", "")


class Ec2StateProbe(CloudStateProbe):
    """``CloudStateProbe`` backed by the EC2 API."""

    def __init__(self, ec2_client: t.Any) -> None:
        self._ec2_client = ec2_client

    @classmethod
    def from_session(
        cls,
        session: boto3.Session,
        region: t.Optional[str] = None,
        settings: t.Optional[ProbeSettings] = None,
    ) -> "Ec2StateProbe":
        settings = settings or ProbeSettings()
        client = session.client("ec2", region_name=region, config=settings.botocore_config())
        return cls(client)

    def _call(self, operation: str, **kwargs: t.Any) -> t.Dict[str, t.Any]:
        try:
            return getattr(self._ec2_client, operation)(**kwargs)
        except ClientError as e:
            raise ProbeError(operation, e) from e
        except BotoCoreError as e:
            raise ProbeError(operation, e) from e

    def get_attribute(self, vpc_id: str, attribute: str) -> bool:
        try:
            response = self._ec2_client.describe_vpc_attribute(VpcId=vpc_id, Attribute=attribute)
        except ClientError as e:
            if _error_code(e) == VPC_NOT_FOUND_CODE:
                raise ResourceNotFoundError("describe_vpc_attribute", e) from e
            raise ProbeError("describe_vpc_attribute", e) from e
        except BotoCoreError as e:
            raise ProbeError("describe_vpc_attribute", e) from e

        key = _ATTRIBUTE_RESPONSE_KEYS.get(attribute, attribute[:1].upper() + attribute[1:])
        value = bool((response.get(key) or {}).get("Value", False))
        logger.debug("VPC %s attribute %s=%s", vpc_id, attribute, value)
        return value

    def get_internet_gateway(self, vpc_id: str) -> str:
        response = self._call(
            "describe_internet_gateways",
            Filters=[{"Name": "attachment.vpc-id", "Values": [vpc_id]}],
        )
        for gateway in response.get("InternetGateways", []):
            gateway_id = gateway.get("InternetGatewayId")
            if gateway_id:
                return gateway_id
        return ""

    def get_address_associations(self, allocation_ids: t.Sequence[str]) -> t.Dict[str, t.Optional[str]]:
        # A filter (instead of AllocationIds=) makes unknown ids drop out of the
        # result rather than failing the whole request.
        response = self._call(
            "describe_addresses",
            Filters=[{"Name": "allocation-id", "Values": list(allocation_ids)}],
        )
        associations: t.Dict[str, t.Optional[str]] = {}
        for address in response.get("Addresses", []):
            alloc_id = address.get("AllocationId")
            if alloc_id:
                associations[alloc_id] = address.get("AssociationId")
        return associations

    def get_owned_address_allocations(self, cluster_name: str) -> t.Set[str]:
        owned: t.Set[str] = set()
        filters = [
            {"Name": f"tag:{CLUSTER_TAG_PREFIX}{cluster_name}", "Values": ["1"]},
            {"Name": "state", "Values": NAT_GATEWAY_LIVE_STATES},
        ]
        try:
            paginator = self._ec2_client.get_paginator("describe_nat_gateways")
            for page in paginator.paginate(Filter=filters):
                for gateway in page.get("NatGateways", []):
                    for address in gateway.get("NatGatewayAddresses", []):
                        alloc_id = address.get("AllocationId")
                        if alloc_id:
                            owned.add(alloc_id)
        except ClientError as e:
            raise ProbeError("describe_nat_gateways", e) from e
        except BotoCoreError as e:
            raise ProbeError("describe_nat_gateways", e) from e
        logger.debug("Cluster %s NAT gateways own %d allocation(s)", cluster_name, len(owned))
        return owned
