"""Read-only view over live cloud network state.

The validation core only talks to the cloud through ``CloudStateProbe``. The
not-found condition is a distinct exception class so callers branch on type,
never on message text.
"""

from __future__ import annotations

import abc
import typing as t


class ProbeError(Exception):
    """A probe call failed (transport, auth, throttling, timeout, ...)."""

    def __init__(self, operation: str, cause: t.Optional[BaseException] = None, message: t.Optional[str] = None) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(message or (str(cause) if cause is not None else f"{operation} failed"))


class ResourceNotFoundError(ProbeError):
    """The resource the probe was asked about does not exist."""


class CloudStateProbe(abc.ABC):

    @abc.abstractmethod
    def get_attribute(self, vpc_id: str, attribute: str) -> bool:
        """Return the boolean value of a VPC attribute.

        Raises ResourceNotFoundError if the VPC does not exist.
        """

    @abc.abstractmethod
    def get_internet_gateway(self, vpc_id: str) -> str:
        """Return the id of the attached internet gateway, or "" if none."""

    @abc.abstractmethod
    def get_address_associations(self, allocation_ids: t.Sequence[str]) -> t.Dict[str, t.Optional[str]]:
        """Map each known allocation id to its association id (None if unassociated).

        Unknown ids are absent from the result.
        """

    @abc.abstractmethod
    def get_owned_address_allocations(self, cluster_name: str) -> t.Set[str]:
        """Return allocation ids attached to NAT gateways owned by ``cluster_name``."""
