from __future__ import annotations

import logging
import typing as t

from .checks import AddressAllocationChecker, NetworkConsistencyChecker
from .field_errors import ErrorKind, FieldErrorAggregator, ValidationError
from .probe import CloudStateProbe

if t.TYPE_CHECKING:
    from .config_loader import NetworkConfig

logger = logging.getLogger(__name__)


class ConfigValidator:
    """Validate a declared network configuration against live cloud state.

    The VPC checks run first. If they abort (VPC missing or probe failure) the
    address allocation checks are skipped; attribute misconfigurations do not
    block them. Nothing is cached between calls.
    """

    def __init__(self, probe: CloudStateProbe) -> None:
        self.probe = probe

    def validate(self, config: "NetworkConfig") -> t.List[ValidationError]:
        errors = FieldErrorAggregator()

        if config.vpc_id:
            errors.extend(NetworkConsistencyChecker(self.probe).check(config.vpc_id))
            if errors.has_kind(ErrorKind.NOT_FOUND, ErrorKind.INTERNAL):
                return errors.to_list()

        errors.extend(AddressAllocationChecker(self.probe).check(config.cluster_name, config.zones))

        logger.debug("Validation of cluster %s finished with %d error(s)", config.cluster_name, len(errors))
        return errors.to_list()


def validate_config(probe: CloudStateProbe, config: "NetworkConfig") -> t.List[ValidationError]:
    return ConfigValidator(probe).validate(config)
