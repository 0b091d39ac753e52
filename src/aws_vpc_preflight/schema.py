"""Strict, versioned schema for aws-vpc-preflight configuration files.

This module defines Pydantic models that enforce:
- Type safety for all configuration fields
- Rejection of unknown fields (extra="forbid")
- AWS identifier shapes for VPC and Elastic IP allocation ids
- API versioning for future compatibility

Usage:
    from aws_vpc_preflight.schema import PreflightConfig

    config = PreflightConfig.model_validate(yaml_dict)
"""

from __future__ import annotations

import re
import typing as t

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ============================================================================
# Reusable validators
# ============================================================================

_VPC_ID_PATTERN = re.compile(r"^vpc-[0-9a-f]+$")
_ALLOCATION_ID_PATTERN = re.compile(r"^eipalloc-[0-9a-f]+$")


def validate_vpc_id(v: str) -> str:
    """Validate an AWS VPC identifier (vpc-xxxxxxxx)."""
    if not _VPC_ID_PATTERN.match(v):
        raise ValueError(f"Invalid VPC id '{v}': expected 'vpc-' followed by hex digits")
    return v


def validate_allocation_id(v: str) -> str:
    """Validate an Elastic IP allocation identifier (eipalloc-xxxxxxxx)."""
    if not _ALLOCATION_ID_PATTERN.match(v):
        raise ValueError(f"Invalid Elastic IP allocation id '{v}': expected 'eipalloc-' followed by hex digits")
    return v


# ============================================================================
# Configuration Models (bottom-up)
# ============================================================================

class VPCConfig(BaseModel):
    """Reference to an existing VPC. Omit ``id`` to have a new VPC created."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    id: t.Optional[str] = Field(
        default=None,
        description="Existing VPC id (e.g., 'vpc-0a1b2c3d')",
        examples=["vpc-0a1b2c3d"],
    )

    @field_validator("id")
    @classmethod
    def check_id(cls, v: t.Optional[str]) -> t.Optional[str]:
        if v is None or v == "":
            return None
        return validate_vpc_id(v)


class ZoneSpec(BaseModel):
    """Per-zone network resources."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True, populate_by_name=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Availability zone name (e.g., 'eu-west-1a')",
    )
    elastic_ip_allocation_id: t.Optional[str] = Field(
        default=None,
        alias="elasticIPAllocationID",
        description="Pre-existing Elastic IP allocation to attach to this zone's NAT gateway",
        examples=["eipalloc-0e2669d4b46150ee4"],
    )

    @field_validator("elastic_ip_allocation_id")
    @classmethod
    def check_allocation_id(cls, v: t.Optional[str]) -> t.Optional[str]:
        if v is None or v == "":
            return None
        return validate_allocation_id(v)


class NetworksConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    vpc: VPCConfig = Field(default_factory=VPCConfig)
    zones: t.List[ZoneSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_zone_names(self) -> "NetworksConfig":
        seen: t.Set[str] = set()
        for zone in self.zones:
            if zone.name in seen:
                raise ValueError(f"Zone '{zone.name}' is declared more than once")
            seen.add(zone.name)
        return self


class PreflightConfig(BaseModel):
    """Root model of a configuration file."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    version: int = Field(
        default=1,
        description="Configuration schema version",
    )
    cluster_name: str = Field(
        ...,
        min_length=1,
        description="Cluster name; NAT gateways tagged kubernetes.io/cluster/<name> belong to it",
    )
    region: t.Optional[str] = Field(
        default=None,
        description="AWS region (can be overridden on the command line)",
        examples=["eu-west-1"],
    )
    networks: NetworksConfig = Field(default_factory=NetworksConfig)

    @field_validator("version")
    @classmethod
    def check_version(cls, v: int) -> int:
        if v != 1:
            raise ValueError(f"Unsupported config version {v}; only version 1 is supported")
        return v


# ============================================================================
# Public API
# ============================================================================

def validate_config(config_dict: dict) -> PreflightConfig:
    """Validate a configuration dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return PreflightConfig.model_validate(config_dict)
