"""Pre-flight validation of declared AWS network configuration against live state."""

from .config_loader import NetworkConfig, ZoneConfig
from .field_errors import ErrorKind, FieldErrorAggregator, ValidationError
from .probe import CloudStateProbe, ProbeError, ResourceNotFoundError
from .validator import ConfigValidator, validate_config

__all__ = [
    "CloudStateProbe",
    "ConfigValidator",
    "ErrorKind",
    "FieldErrorAggregator",
    "NetworkConfig",
    "ProbeError",
    "ResourceNotFoundError",
    "ValidationError",
    "ZoneConfig",
    "validate_config",
]
