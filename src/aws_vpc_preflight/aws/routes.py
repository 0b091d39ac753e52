from __future__ import annotations

import logging
import typing as t

logger = logging.getLogger(__name__)


class RouteTableLookupError(ValueError):
    """The VPC does not have exactly one route table."""


def add_default_route(ec2_client: t.Any, vpc_id: str, gateway_id: str, destination_cidr: str) -> None:
    """Add a route to the VPC's only route table, pointing ``destination_cidr`` at ``gateway_id``.

    Botocore errors propagate unchanged.
    """
    response = ec2_client.describe_route_tables(
        Filters=[{"Name": "vpc-id", "Values": [vpc_id]}],
    )
    route_tables = response.get("RouteTables", [])
    if len(route_tables) != 1:
        raise RouteTableLookupError(f"expected 1 route table for VPC {vpc_id} but got {len(route_tables)}")

    route_table_id = route_tables[0]["RouteTableId"]
    ec2_client.create_route(
        DestinationCidrBlock=destination_cidr,
        GatewayId=gateway_id,
        RouteTableId=route_table_id,
    )
    logger.info("Added route %s -> %s on %s", destination_cidr, gateway_id, route_table_id)
