"""Ports for reading live cluster state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from clusterdiag.domain.model import SecurityContextConstraints


class ClusterAccessError(RuntimeError):
    """Base class for failures talking to the cluster."""


class PolicyObjectNotFoundError(ClusterAccessError, LookupError):
    """Raised when a requested policy object does not exist in the cluster."""

    def __init__(self, name: str) -> None:
        super().__init__(f'"{name}" not found')
        self.name = name


@runtime_checkable
class PolicyObjectReader(Protocol):
    """Read-only access to live SecurityContextConstraints by name."""

    def get(self, name: str) -> SecurityContextConstraints:
        """Return the live object or raise :class:`PolicyObjectNotFoundError`."""
        ...


@runtime_checkable
class AccessReviewer(Protocol):
    """Answers whether the current credentials may perform an action."""

    def user_can(self, verb: str, *, group: str, resource: str) -> bool: ...


__all__ = [
    "AccessReviewer",
    "ClusterAccessError",
    "PolicyObjectNotFoundError",
    "PolicyObjectReader",
]
