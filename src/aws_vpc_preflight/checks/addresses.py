"""Checks for pre-existing Elastic IP allocations declared per zone.

An allocation is usable if it exists and is either unassociated or already
attached to one of the cluster's own NAT gateways. Associations are looked up in
one batched call; ownership is only looked up when some allocation is associated.
"""

from __future__ import annotations

import logging
import typing as t

from ..field_errors import ELASTIC_IP_ALLOCATION_ID_PATH, FieldErrorAggregator, ValidationError
from ..probe import CloudStateProbe, ProbeError

if t.TYPE_CHECKING:
    from ..config_loader import ZoneConfig

logger = logging.getLogger(__name__)


class AddressAllocationChecker:
    def __init__(self, probe: CloudStateProbe) -> None:
        self.probe = probe

    def check(self, cluster_name: str, zones: t.Sequence["ZoneConfig"]) -> t.List[ValidationError]:
        errors = FieldErrorAggregator()

        declared = [z.elastic_ip_allocation_id for z in zones if z.elastic_ip_allocation_id]
        if not declared:
            return errors.to_list()

        # dict.fromkeys keeps first-seen order while dropping duplicates
        lookup_ids = list(dict.fromkeys(declared))
        try:
            associations = self.probe.get_address_associations(lookup_ids)
        except ProbeError as e:
            logger.warning("Failed to look up Elastic IP addresses %s: %s", lookup_ids, e)
            errors.internal(ELASTIC_IP_ALLOCATION_ID_PATH, f"could not get Elastic IP addresses: {e}")
            return errors.to_list()

        associated = [alloc_id for alloc_id in declared if associations.get(alloc_id) is not None]
        owned: t.Set[str] = set()
        if associated:
            try:
                owned = self.probe.get_owned_address_allocations(cluster_name)
            except ProbeError as e:
                logger.warning("Failed to look up NAT gateway addresses of cluster %s: %s", cluster_name, e)
                errors.internal(
                    ELASTIC_IP_ALLOCATION_ID_PATH,
                    f"could not get Elastic IP addresses of the NAT gateways of cluster {cluster_name}: {e}",
                )
                return errors.to_list()

        for alloc_id in declared:
            if alloc_id not in associations:
                errors.invalid(
                    ELASTIC_IP_ALLOCATION_ID_PATH,
                    alloc_id,
                    f"Elastic IP allocation {alloc_id} cannot be used as it does not exist",
                )
            elif associations[alloc_id] is not None and alloc_id not in owned:
                errors.invalid(
                    ELASTIC_IP_ALLOCATION_ID_PATH,
                    alloc_id,
                    f"Elastic IP allocation {alloc_id} cannot be attached to the cluster's NAT Gateway(s) "
                    f"as it is already associated (association id {associations[alloc_id]})",
                )

        return errors.to_list()
