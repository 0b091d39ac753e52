from .addresses import AddressAllocationChecker
from .network import REQUIRED_VPC_ATTRIBUTES, NetworkConsistencyChecker

__all__ = [
    "AddressAllocationChecker",
    "NetworkConsistencyChecker",
    "REQUIRED_VPC_ATTRIBUTES",
]
