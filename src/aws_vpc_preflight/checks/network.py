"""Consistency checks for a referenced, pre-existing VPC.

A missing VPC or a failed probe call makes every later probe meaningless, so
those abort with a single error. Misconfigured attributes are reported together.
"""

from __future__ import annotations

import logging
import typing as t

from ..field_errors import VPC_ID_PATH, FieldErrorAggregator, ValidationError
from ..probe import CloudStateProbe, ProbeError, ResourceNotFoundError

logger = logging.getLogger(__name__)

REQUIRED_VPC_ATTRIBUTES = ("enableDnsSupport", "enableDnsHostnames")


class NetworkConsistencyChecker:
    def __init__(self, probe: CloudStateProbe) -> None:
        self.probe = probe

    def check(self, vpc_id: str) -> t.List[ValidationError]:
        errors = FieldErrorAggregator()

        for attribute in REQUIRED_VPC_ATTRIBUTES:
            try:
                value = self.probe.get_attribute(vpc_id, attribute)
            except ResourceNotFoundError:
                logger.debug("VPC %s not found while reading %s", vpc_id, attribute)
                errors.not_found(VPC_ID_PATH, vpc_id, "VPC does not exist")
                return errors.to_list()
            except ProbeError as e:
                logger.warning("Failed to read VPC attribute %s for %s: %s", attribute, vpc_id, e)
                errors.internal(VPC_ID_PATH, f"could not get VPC attribute {attribute} for VPC {vpc_id}: {e}")
                return errors.to_list()
            if not value:
                errors.invalid(VPC_ID_PATH, vpc_id, f"VPC attribute {attribute} must be set to true")

        try:
            gateway_id = self.probe.get_internet_gateway(vpc_id)
        except ProbeError as e:
            logger.warning("Failed to look up internet gateway for %s: %s", vpc_id, e)
            errors.internal(VPC_ID_PATH, f"could not get internet gateway for VPC {vpc_id}: {e}")
            return errors.to_list()
        if not gateway_id:
            errors.invalid(VPC_ID_PATH, vpc_id, "no attached internet gateway found")
        else:
            logger.debug("VPC %s has internet gateway %s", vpc_id, gateway_id)

        return errors.to_list()
