from .ec2_probe import Ec2StateProbe, ProbeSettings
from .routes import RouteTableLookupError, add_default_route

__all__ = [
    "Ec2StateProbe",
    "ProbeSettings",
    "RouteTableLookupError",
    "add_default_route",
]
